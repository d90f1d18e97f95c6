from typing import TYPE_CHECKING, Any, Hashable, List, Optional

if TYPE_CHECKING:
    from graphsmith.domain.models import Registration


def describe_service_type(service_type: Any) -> str:
    """Render a service type key for error messages and logs."""
    name = getattr(service_type, "__qualname__", None) or getattr(service_type, "__name__", None)
    if isinstance(name, str):
        return name
    return repr(service_type)


class GraphsmithError(Exception):
    """Base exception for graphsmith errors."""


class DuplicatePrimaryRegistrationError(GraphsmithError):
    """Raised when a second primary factory is registered for a service type.

    Attributes:
        registration: The registration that was rejected.
        existing: The primary registration already held for the type.
    """

    def __init__(self, registration: "Registration", existing: "Registration") -> None:
        self.registration = registration
        self.existing = existing
        super().__init__(
            f"Attempted to register {registration}, but a primary registration already exists: {existing}"
        )


class UnresolvedTypeError(GraphsmithError):
    """Raised when no factory can provide the requested service type.

    This occurs when:
    - Nothing was ever registered for the type.
    - Only decorators are registered and the chain ran out without a primary.

    Attributes:
        service_type: The service type that could not be resolved.
        reason: Optional reason for the failure.
    """

    def __init__(self, service_type: Hashable, reason: Optional[str] = None) -> None:
        self.service_type = service_type
        self.reason = reason
        message = f"Could not find resolver for {describe_service_type(service_type)}"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class ResolutionFailureError(GraphsmithError):
    """Raised when a factory fails while building an instance.

    The original exception is chained as ``__cause__``.

    Attributes:
        service_type: The service type whose factory failed.
        depth: The decorator depth the factory was selected at.
        registrations: Human readable listing of every registration for the type.
    """

    def __init__(self, service_type: Hashable, depth: int, registrations: str) -> None:
        self.service_type = service_type
        self.depth = depth
        self.registrations = registrations
        super().__init__(
            f"Could not resolve {describe_service_type(service_type)} with decorator depth {depth}"
            f" - registrations: {registrations}"
        )

    @property
    def root_cause(self) -> Optional[BaseException]:
        """The first error in the ``__cause__`` chain that is not itself a resolution failure."""
        cause = self.__cause__
        while isinstance(cause, ResolutionFailureError):
            cause = cause.__cause__
        return cause


class InvalidResultError(GraphsmithError):
    """Raised when a resolution result is built without an instance or tracked instances."""


class CircularDependencyError(GraphsmithError):
    """Raised when a primary factory is re-entered while it is still building.

    Attributes:
        dependency_chain: List of service types involved in the cycle.
    """

    def __init__(self, dependency_chain: List[Hashable]) -> None:
        self.dependency_chain = dependency_chain
        message = f"Circular dependency detected: {' -> '.join(describe_service_type(t) for t in dependency_chain)}"
        super().__init__(message)


class DecoratorChainError(GraphsmithError):
    """Raised when a decorator requests its own service type more than once.

    Attributes:
        service_type: The decorated service type.
        depth: Depth of the decorator that re-entered.
    """

    def __init__(self, service_type: Hashable, depth: int) -> None:
        self.service_type = service_type
        self.depth = depth
        super().__init__(
            f"Decorator at depth {depth} for {describe_service_type(service_type)} requested its own "
            "type more than once; each decorator may wrap a single inner instance"
        )


class RegistryFrozenError(GraphsmithError):
    """Raised when registering after the configuration phase has ended.

    Attributes:
        service_type: The service type whose registration was refused.
    """

    def __init__(self, service_type: Hashable) -> None:
        self.service_type = service_type
        super().__init__(
            f"Cannot register {describe_service_type(service_type)}: the injectionist is frozen"
        )
