"""
FastAPI integration module.

Provides helpers for building a graphsmith object graph when a FastAPI
application starts and handing its roots to endpoints.
"""

from .integration import create_lifespan, create_root_dependency

__all__ = [
    "create_lifespan",
    "create_root_dependency",
]
