from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Hashable, List, Optional, Type, TypeVar, overload

if TYPE_CHECKING:
    from graphsmith.domain.models import Registration, ResolutionResult

T = TypeVar("T")


class IResolutionContext(ABC):
    """Resolution capability handed to every factory.

    Represents the context of resolving one root service. Factories use it
    throughout the tree to fetch what they need injected.
    """

    @abstractmethod
    def get(self, service_type: Type[T]) -> T:
        """Get the instance of the requested service type for this context.

        Args:
            service_type: The service type to resolve.

        Raises:
            UnresolvedTypeError: If nothing can provide the type.
            ResolutionFailureError: If a factory fails while building it.
        """

    def resolve(self, service_type: Type[T]) -> T:
        """Alias of :meth:`get`."""
        return self.get(service_type)

    @property
    @abstractmethod
    def tracked_instances(self) -> List[Any]:
        """Snapshot of every instance built within this context so far."""


class IInjectionist(ABC):
    """Abstract interface for registering factories and building object graphs."""

    @abstractmethod
    def register(
        self,
        service_type: Hashable,
        factory: Callable[[IResolutionContext], Any],
        description: Optional[str] = None,
    ) -> None:
        """Register the primary factory for a service type.

        Args:
            service_type: The service type the factory provides.
            factory: Callable receiving the resolution context and returning an instance.
            description: Optional text echoed in error messages.
        """

    @abstractmethod
    def decorate(
        self,
        service_type: Hashable,
        factory: Callable[[IResolutionContext], Any],
        description: Optional[str] = None,
    ) -> None:
        """Register a decorator factory for a service type.

        Args:
            service_type: The service type the decorator wraps.
            factory: Callable receiving the resolution context and returning an instance.
            description: Optional text echoed in error messages.
        """

    @abstractmethod
    def has(self, service_type: Hashable, primary_only: bool = True) -> bool:
        """Return whether a registration exists for the service type."""

    @overload
    def get(self, service_type: Type[T]) -> "ResolutionResult[T]": ...

    @overload
    def get(self, service_type: Hashable) -> "ResolutionResult[Any]": ...

    @abstractmethod
    def get(self, service_type: Hashable) -> "ResolutionResult[Any]":
        """Build the requested root service in a fresh resolution context.

        Class keys give a result typed by the class; any other hashable key
        gives an untyped result.
        """

    @abstractmethod
    def registrations(self, service_type: Hashable) -> List["Registration"]:
        """Return the registrations for a service type, outermost decorator first."""

    @abstractmethod
    def freeze(self) -> None:
        """End the configuration phase. Later registrations are refused."""
