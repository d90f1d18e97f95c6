"""Application layer - Per-request resolution context."""

import logging
from typing import Any, Dict, Hashable, List, Set, Tuple, Type, TypeVar

from graphsmith.application.decorator_depth import DecoratorDepthTracker
from graphsmith.application.registration_table import RegistrationTable
from graphsmith.domain import (
    IResolutionContext,
    Registration,
    ResolutionFailureError,
    TypeHandler,
    UnresolvedTypeError,
    describe_service_type,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResolutionContext(IResolutionContext):
    """Builds one root service and everything it needs.

    A context lives for a single root request. Within it each service type
    yields one shared instance, decorator chains are walked outermost-first
    and every instance produced is tracked. Contexts are not thread-safe;
    each thread resolving a root gets its own.

    Attributes:
        _table: Registration table, only read.
        _depth_tracker: Decorator depth and in-flight registrations.
        _instances: Completed instance per service type and decorator depth.
        _tracked: Distinct instances produced, in creation order.
        _tracked_ids: Identities of the tracked instances.
    """

    def __init__(self, table: RegistrationTable, strict_decorators: bool = True) -> None:
        self._table = table
        self._depth_tracker = DecoratorDepthTracker(strict=strict_decorators)
        self._instances: Dict[Tuple[Hashable, int], Any] = {}
        self._tracked: List[Any] = []
        self._tracked_ids: Set[int] = set()

    def get(self, service_type: Type[T]) -> T:
        """Resolve an instance of the requested service type.

        A request made while the same type is still being built (a decorator
        asking for what it wraps) is served by the next registration inward.
        Instances are cached per depth, so the fully decorated instance is
        never handed inward, while an inner instance is shared by every
        request that reaches its depth.

        Args:
            service_type: The service type to resolve.

        Returns:
            The instance for this context.

        Raises:
            UnresolvedTypeError: If nothing is registered for the type, or the
                decorator chain runs out without a primary.
            ResolutionFailureError: If a factory raises.
            CircularDependencyError: If a primary factory is re-entered.
            DecoratorChainError: If a decorator requests its own type twice.
        """
        self._depth_tracker.record_request(service_type)

        key = (service_type, self._depth_tracker.depth_of(service_type))
        if key in self._instances:
            return self._instances[key]

        handler = self._table.get_handler(service_type)
        if handler is None:
            raise UnresolvedTypeError(service_type)

        depth = self._depth_tracker.enter(service_type)
        try:
            registration = handler.registration_at(depth)
            if registration is None:
                raise UnresolvedTypeError(
                    service_type,
                    f"decorator chain exhausted at depth {depth} and no primary registration exists",
                )
            instance = self._invoke(handler, registration, depth)
        finally:
            self._depth_tracker.exit(service_type)

        self._instances[(service_type, depth)] = instance
        self._track(instance)
        return instance

    def _invoke(self, handler: TypeHandler, registration: Registration, depth: int) -> Any:
        self._depth_tracker.push(registration)
        try:
            logger.debug(
                "Invoking %s at decorator depth %d",
                registration,
                depth,
            )
            try:
                return registration.invoke(self)
            except Exception as e:
                raise ResolutionFailureError(handler.service_type, depth, handler.describe()) from e
        finally:
            self._depth_tracker.pop()

    def _track(self, instance: Any) -> None:
        if id(instance) in self._tracked_ids:
            return
        self._tracked_ids.add(id(instance))
        self._tracked.append(instance)

    @property
    def tracked_instances(self) -> List[Any]:
        return list(self._tracked)

    def __repr__(self) -> str:
        in_flight = " -> ".join(describe_service_type(t) for t in self._depth_tracker.in_flight)
        return f"ResolutionContext(tracked={len(self._tracked)}, in_flight=[{in_flight}])"
