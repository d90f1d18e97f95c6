"""
Domain layer - Core models and rules.

This layer contains the registration model, the resolution result and the
error hierarchy. It has no dependencies on other layers.
"""

from .enums import RegistrationKind
from .exceptions import (
    CircularDependencyError,
    DecoratorChainError,
    DuplicatePrimaryRegistrationError,
    GraphsmithError,
    InvalidResultError,
    RegistryFrozenError,
    ResolutionFailureError,
    UnresolvedTypeError,
    describe_service_type,
)
from .interfaces import IInjectionist, IResolutionContext
from .models import InjectionistOptions, Registration, ResolutionResult, TypeHandler

__all__ = [
    # Enums
    "RegistrationKind",
    # Exceptions
    "GraphsmithError",
    "DuplicatePrimaryRegistrationError",
    "UnresolvedTypeError",
    "ResolutionFailureError",
    "InvalidResultError",
    "CircularDependencyError",
    "DecoratorChainError",
    "RegistryFrozenError",
    "describe_service_type",
    # Interfaces
    "IInjectionist",
    "IResolutionContext",
    # Models
    "Registration",
    "TypeHandler",
    "ResolutionResult",
    "InjectionistOptions",
]
