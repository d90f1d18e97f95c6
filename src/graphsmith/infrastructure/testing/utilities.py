from typing import Any, Callable, Hashable, Optional, Tuple, Type, TypeVar

from graphsmith.application import Injectionist, RegistrationTable
from graphsmith.domain import (
    IResolutionContext,
    InjectionistOptions,
    Registration,
    RegistrationKind,
    RegistryFrozenError,
)

T = TypeVar("T")


class TestInjectionist(Injectionist):
    """Injectionist for tests with registration override capabilities.

    Copies all registrations from a parent injectionist and allows replacing
    primary factories with stubs. The parent is never modified, and a frozen
    parent can still be copied and overridden.

    Stubbing replaces the primary only; decorators registered for the type
    keep wrapping the stub unless removed with :meth:`clear_decorators`.

    Attributes:
        _parent: The injectionist registrations are copied from.

    Example:
        >>> def test_user_service():
        ...     with TestInjectionist(injectionist) as test_injectionist:
        ...         fake_mailer = FakeMailer()
        ...         test_injectionist.stub(Mailer, fake_mailer)
        ...
        ...         service = test_injectionist.get(UserService).instance
        ...         service.send_welcome_email(user)
        ...
        ...         assert fake_mailer.sent
    """

    __test__ = False  # Tell pytest not to collect this class as a test

    def __init__(self, parent: Optional[Injectionist] = None, options: Optional[InjectionistOptions] = None) -> None:
        """Initialize the test injectionist.

        Args:
            parent: Optional injectionist to copy registrations from.
            options: Optional configuration. Defaults to the parent's options.
        """
        if options is None and parent is not None:
            options = parent.options
        super().__init__(options)
        self._parent = parent

        if parent is not None:
            self._table = parent.get_registration_table_copy()

    def stub_factory(
        self,
        service_type: Hashable,
        factory: Callable[[IResolutionContext], Any],
        description: Optional[str] = "stub",
    ) -> None:
        """Replace the primary factory of a service type.

        Args:
            service_type: The service type to override.
            factory: Factory used instead of the registered primary.
            description: Text shown for the replacement in error messages.
        """
        if self.is_frozen:
            raise RegistryFrozenError(service_type)
        handler = self._table.get_or_create_handler(service_type)
        handler.primary = Registration(
            service_type=service_type,
            factory=factory,
            kind=RegistrationKind.PRIMARY,
            description=description,
        )

    def stub(self, service_type: Type[T], instance: T) -> None:
        """Replace the primary factory of a service type with a fixed instance.

        Example:
            >>> test_injectionist = TestInjectionist(injectionist)
            >>> fake_db = FakeDatabase()
            >>> test_injectionist.stub(Database, fake_db)
            >>>
            >>> service = test_injectionist.get(UserService).instance
            >>> assert service.db is fake_db
        """
        self.stub_factory(service_type, lambda c: instance)

    def clear_decorators(self, service_type: Hashable) -> None:
        """Remove every decorator registered for a service type."""
        handler = self._table.get_handler(service_type)
        if handler is not None:
            handler.decorators.clear()

    def reset(self) -> None:
        """Discard all overrides and restore the parent's registrations."""
        if self._parent is not None:
            self._table = self._parent.get_registration_table_copy()
        else:
            self._table = RegistrationTable()

    def __enter__(self) -> "TestInjectionist":
        """Context manager entry - returns self."""
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        """Context manager exit - discard overrides."""
        self.reset()
        return False


def create_stub_injectionist(*stubs: Tuple[Hashable, Any]) -> TestInjectionist:
    """Create a test injectionist pre-loaded with stub instances.

    Args:
        *stubs: Tuples of (service_type, instance).

    Returns:
        TestInjectionist whose registrations return the given instances.

    Example:
        >>> test_injectionist = create_stub_injectionist(
        ...     (Database, fake_db),
        ...     (Cache, fake_cache),
        ... )
        >>> test_injectionist.register(UserService, lambda c: UserService(c.get(Database)))
    """
    injectionist = TestInjectionist()

    for service_type, instance in stubs:
        injectionist.stub(service_type, instance)

    return injectionist
