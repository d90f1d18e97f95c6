"""
graphsmith: Configuration-time object graph resolver with decorator chains.

Public API exports for the graphsmith package.
"""

# Application exports
from graphsmith.application.injectionist import Injectionist

# Domain exports
from graphsmith.domain.enums import RegistrationKind
from graphsmith.domain.exceptions import (
    CircularDependencyError,
    DecoratorChainError,
    DuplicatePrimaryRegistrationError,
    GraphsmithError,
    InvalidResultError,
    RegistryFrozenError,
    ResolutionFailureError,
    UnresolvedTypeError,
)
from graphsmith.domain.interfaces import IResolutionContext
from graphsmith.domain.models import InjectionistOptions, Registration, ResolutionResult

__version__ = "0.1.0"

__all__ = [
    # Injectionist
    "Injectionist",
    "InjectionistOptions",
    "IResolutionContext",
    # Models
    "Registration",
    "RegistrationKind",
    "ResolutionResult",
    # Exceptions
    "GraphsmithError",
    "DuplicatePrimaryRegistrationError",
    "UnresolvedTypeError",
    "ResolutionFailureError",
    "InvalidResultError",
    "CircularDependencyError",
    "DecoratorChainError",
    "RegistryFrozenError",
]
