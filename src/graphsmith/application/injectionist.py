import logging
from typing import Any, Callable, Dict, Hashable, List, Optional, Type, TypeVar, overload

from graphsmith.application.registration_table import RegistrationTable
from graphsmith.application.resolution_context import ResolutionContext
from graphsmith.domain import (
    IInjectionist,
    InjectionistOptions,
    IResolutionContext,
    Registration,
    RegistrationKind,
    ResolutionResult,
    describe_service_type,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Injectionist(IInjectionist):
    """Registry of factories that builds fully wired object graphs.

    Meant for configuration time: register primary factories and decorators,
    then call :meth:`get` for each root object. Every call runs in a fresh
    resolution context, so overlapping calls from different threads are safe
    as long as no registration happens at the same time. Call :meth:`freeze`
    to end the configuration phase explicitly.

    Attributes:
        _table: Registration table shared read-only by every resolution context.
        _options: Behaviour switches for resolution and lifecycle.
    """

    def __init__(self, options: Optional[InjectionistOptions] = None) -> None:
        """Initialize the injectionist with an empty registration table.

        Args:
            options: Optional configuration. Defaults are used when omitted.
        """
        self._options = options or InjectionistOptions()
        self._table = RegistrationTable()

    def _register(
        self,
        service_type: Hashable,
        factory: Callable[[IResolutionContext], Any],
        kind: RegistrationKind,
        description: Optional[str],
    ) -> None:
        registration = Registration(
            service_type=service_type,
            factory=factory,
            kind=kind,
            description=description,
        )
        self._table.add(registration)

    def register(
        self,
        service_type: Hashable,
        factory: Callable[[IResolutionContext], Any],
        description: Optional[str] = None,
    ) -> None:
        """Register the primary factory for a service type.

        Args:
            service_type: The service type the factory provides.
            factory: Receives the resolution context and returns an instance.
            description: Optional text used in error messages about conflicting
                or failing registrations.

        Raises:
            DuplicatePrimaryRegistrationError: If the type already has a primary factory.
            RegistryFrozenError: If the injectionist has been frozen.

        Example:
            >>> injectionist.register(Config, lambda c: Config.from_env())
            >>> injectionist.register(Database, lambda c: Database(c.get(Config)), "postgres")
        """
        self._register(service_type, factory, RegistrationKind.PRIMARY, description)

    def decorate(
        self,
        service_type: Hashable,
        factory: Callable[[IResolutionContext], Any],
        description: Optional[str] = None,
    ) -> None:
        """Register a decorator factory for a service type.

        The factory is expected to request the same service type from the
        context and wrap it. The decorator registered last is the outermost.

        Args:
            service_type: The service type the decorator wraps.
            factory: Receives the resolution context and returns an instance.
            description: Optional text used in error messages.

        Raises:
            RegistryFrozenError: If the injectionist has been frozen.

        Example:
            >>> injectionist.register(Transport, lambda c: HttpTransport())
            >>> injectionist.decorate(Transport, lambda c: RetryingTransport(c.get(Transport)))
        """
        self._register(service_type, factory, RegistrationKind.DECORATOR, description)

    def register_many(self, factories: Dict[Hashable, Callable[[IResolutionContext], Any]]) -> None:
        """Register multiple primary factories at once.

        Example:
            >>> injectionist.register_many({
            ...     Config: lambda c: Config.from_env(),
            ...     Database: lambda c: Database(c.get(Config)),
            ... })
        """
        for service_type, factory in factories.items():
            self.register(service_type, factory)

    def decorate_many(self, factories: Dict[Hashable, Callable[[IResolutionContext], Any]]) -> None:
        """Register one decorator for each of multiple service types."""
        for service_type, factory in factories.items():
            self.decorate(service_type, factory)

    def has(self, service_type: Hashable, primary_only: bool = True) -> bool:
        """Return whether a registration exists for the service type.

        Args:
            service_type: The service type to look up.
            primary_only: When False, a type with decorators but no primary also counts.
        """
        return self._table.has(service_type, primary_only=primary_only)

    def registrations(self, service_type: Hashable) -> List[Registration]:
        """Return the registrations for a service type.

        Args:
            service_type: The service type to look up.

        Returns:
            Decorators outermost first, followed by the primary. Empty when
            nothing is registered.
        """
        return self._table.registrations(service_type)

    @overload
    def get(self, service_type: Type[T]) -> "ResolutionResult[T]": ...

    @overload
    def get(self, service_type: Hashable) -> "ResolutionResult[Any]": ...

    def get(self, service_type: Hashable) -> "ResolutionResult[Any]":
        """Build the requested root service in a fresh resolution context.

        A class key gives a result whose instance is typed by that class.

        Args:
            service_type: The root service type.

        Returns:
            The root instance together with every instance built for it.

        Raises:
            UnresolvedTypeError: If nothing can provide the root type.
            ResolutionFailureError: If any factory in the graph fails.
            InvalidResultError: If the root factory produced None.

        Example:
            >>> result = injectionist.get(Application)
            >>> app = result.instance
        """
        if self._options.freeze_on_get:
            self.freeze()

        logger.debug("Resolving root %s", describe_service_type(service_type))
        context = ResolutionContext(self._table, strict_decorators=self._options.strict_decorators)
        instance = context.get(service_type)
        tracked = context.tracked_instances
        logger.debug(
            "Resolved root %s with %d tracked instances",
            describe_service_type(service_type),
            len(tracked),
        )
        return ResolutionResult(instance, tracked)

    def freeze(self) -> None:
        """End the configuration phase. Later registrations raise RegistryFrozenError."""
        self._table.freeze()

    @property
    def is_frozen(self) -> bool:
        """Whether the configuration phase has ended."""
        return self._table.is_frozen

    @property
    def options(self) -> InjectionistOptions:
        """The options this injectionist was created with."""
        return self._options

    def get_registration_table_copy(self) -> RegistrationTable:
        """Get an unfrozen copy of the registration table.

        Returns:
            Copy of the current registration table.
        """
        return self._table.copy()
