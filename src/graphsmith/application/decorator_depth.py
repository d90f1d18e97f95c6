"""Application layer - Decorator depth tracking and cycle detection."""

from typing import Dict, Hashable, List

from graphsmith.domain import CircularDependencyError, DecoratorChainError, Registration


class DecoratorDepthTracker:
    """Tracks how deep each service type currently is in its decorator chain.

    Every request for a service type while another request for the same type
    is still running lands one level deeper, so a decorator asking for its own
    type receives the next decorator (or the primary) instead of itself.

    The tracker also keeps the stack of registrations being invoked. It is
    used to detect a primary factory being re-entered, and to count how often
    a decorator itself requests the type it wraps.

    Attributes:
        _depths: Current depth per service type.
        _stack: Registrations currently being invoked, outermost first.
        _inward_requests: Own-type requests made by each frame on the stack.
        _strict: Whether a decorator may request its own type more than once.
    """

    def __init__(self, strict: bool = True) -> None:
        self._depths: Dict[Hashable, int] = {}
        self._stack: List[Registration] = []
        self._inward_requests: List[int] = []
        self._strict = strict

    def depth_of(self, service_type: Hashable) -> int:
        return self._depths.get(service_type, 0)

    def enter(self, service_type: Hashable) -> int:
        """Claim the next depth for a service type.

        Args:
            service_type: The service type being requested.

        Returns:
            The depth the request runs at.
        """
        depth = self.depth_of(service_type)
        self._depths[service_type] = depth + 1
        return depth

    def exit(self, service_type: Hashable) -> None:
        """Release the depth claimed by the matching :meth:`enter`."""
        depth = self._depths.get(service_type, 0) - 1
        if depth <= 0:
            self._depths.pop(service_type, None)
        else:
            self._depths[service_type] = depth

    def record_request(self, service_type: Hashable) -> None:
        """Count a request against the frame that made it.

        Only a decorator asking for the type it decorates is counted. Requests
        made by any other frame, including dependencies the decorator builds,
        are not.

        Raises:
            DecoratorChainError: In strict mode, if the calling decorator has
                already requested its own type.
        """
        if not self._stack:
            return
        caller = self._stack[-1]
        if not caller.is_decorator or caller.service_type != service_type:
            return
        self._inward_requests[-1] += 1
        if self._strict and self._inward_requests[-1] > 1:
            raise DecoratorChainError(service_type, self.depth_of(service_type) - 1)

    def push(self, registration: Registration) -> None:
        """Record that a registration is about to be invoked.

        Raises:
            CircularDependencyError: If the registration is a primary that is
                already being invoked further up the stack.
        """
        if not registration.is_decorator:
            for index, active in enumerate(self._stack):
                if active is registration:
                    cycle: List[Hashable] = []
                    # Decorator and primary frames of one type show up once
                    for active_registration in self._stack[index:]:
                        if not cycle or cycle[-1] != active_registration.service_type:
                            cycle.append(active_registration.service_type)
                    cycle.append(registration.service_type)
                    raise CircularDependencyError(cycle)
        self._stack.append(registration)
        self._inward_requests.append(0)

    def pop(self) -> None:
        if self._stack:
            self._stack.pop()
            self._inward_requests.pop()

    @property
    def in_flight(self) -> List[Hashable]:
        """Service types currently being built, outermost first."""
        return [registration.service_type for registration in self._stack]
