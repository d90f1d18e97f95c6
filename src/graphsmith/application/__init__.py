"""
Application layer - Registration and resolution.

This layer contains the registration table, the per-request resolution
context and the injectionist that orchestrates them.
It depends only on the Domain layer.
"""

from .decorator_depth import DecoratorDepthTracker
from .injectionist import Injectionist
from .registration_table import RegistrationTable
from .resolution_context import ResolutionContext

__all__ = [
    "Injectionist",
    "RegistrationTable",
    "ResolutionContext",
    "DecoratorDepthTracker",
]
