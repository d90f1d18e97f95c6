"""
Testing utilities module.

Provides helpers for testing applications whose object graphs are built with graphsmith.
"""

from .utilities import TestInjectionist, create_stub_injectionist

__all__ = [
    "TestInjectionist",
    "create_stub_injectionist",
]
