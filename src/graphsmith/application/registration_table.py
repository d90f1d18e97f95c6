"""Application layer - Registration table."""

import logging
from typing import Dict, Hashable, Iterator, List, Optional

from graphsmith.domain import Registration, RegistryFrozenError, TypeHandler, describe_service_type

logger = logging.getLogger(__name__)


class RegistrationTable:
    """Maps service types to their type handlers.

    The table grows during configuration and is only read while resolving.
    Once frozen, further registrations are refused.

    Attributes:
        _handlers: Dictionary mapping service types to type handlers.
        _frozen: Whether the configuration phase has ended.
    """

    def __init__(self) -> None:
        self._handlers: Dict[Hashable, TypeHandler] = {}
        self._frozen = False

    def add(self, registration: Registration) -> None:
        """Insert a registration into the handler for its service type.

        Args:
            registration: The registration to add.

        Raises:
            RegistryFrozenError: If the table has been frozen.
            DuplicatePrimaryRegistrationError: If a second primary is added for a type.
        """
        if self._frozen:
            raise RegistryFrozenError(registration.service_type)

        handler = self.get_or_create_handler(registration.service_type)
        handler.add(registration)
        logger.debug("Registered %s", registration)

    def get_or_create_handler(self, service_type: Hashable) -> TypeHandler:
        handler = self._handlers.get(service_type)
        if handler is None:
            handler = TypeHandler(service_type=service_type)
            self._handlers[service_type] = handler
        return handler

    def get_handler(self, service_type: Hashable) -> Optional[TypeHandler]:
        return self._handlers.get(service_type)

    def has(self, service_type: Hashable, primary_only: bool = True) -> bool:
        handler = self._handlers.get(service_type)
        if handler is None:
            return False
        return handler.has_registration(primary_only=primary_only)

    def registrations(self, service_type: Hashable) -> List[Registration]:
        handler = self._handlers.get(service_type)
        if handler is None:
            return []
        return handler.all_registrations()

    def freeze(self) -> None:
        if not self._frozen:
            logger.debug("Registration table frozen with %d service types", len(self._handlers))
        self._frozen = True

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def copy(self) -> "RegistrationTable":
        """Return an unfrozen copy whose handlers can be changed independently."""
        table = RegistrationTable()
        for service_type, handler in self._handlers.items():
            table._handlers[service_type] = TypeHandler(
                service_type=service_type,
                primary=handler.primary,
                decorators=list(handler.decorators),
            )
        return table

    def service_types(self) -> List[Hashable]:
        return list(self._handlers)

    def __contains__(self, service_type: Hashable) -> bool:
        return service_type in self._handlers

    def __iter__(self) -> Iterator[TypeHandler]:
        return iter(list(self._handlers.values()))

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        types = ", ".join(describe_service_type(t) for t in self._handlers)
        return f"RegistrationTable([{types}], frozen={self._frozen})"
