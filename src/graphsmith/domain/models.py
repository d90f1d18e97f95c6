from typing import Any, Callable, Generic, Hashable, Iterable, List, Optional, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from graphsmith.domain.enums import RegistrationKind
from graphsmith.domain.exceptions import (
    DuplicatePrimaryRegistrationError,
    InvalidResultError,
    describe_service_type,
)
from graphsmith.domain.interfaces import IResolutionContext

T = TypeVar("T")


class Registration(BaseModel):
    """Value object representing one registered factory.

    Attributes:
        service_type: The service type the factory provides.
        factory: Callable receiving the resolution context and returning an instance.
        kind: Whether this is the primary factory or a decorator.
        description: Free-form text echoed in error messages.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    service_type: Hashable = Field(..., description="The service type the factory provides.")
    factory: Callable[[IResolutionContext], Any] = Field(
        ..., description="Factory receiving the resolution context and returning an instance."
    )
    kind: RegistrationKind = Field(..., description="Primary factory or decorator.")
    description: Optional[str] = Field(default=None, description="Diagnostic description of the registration.")

    @property
    def is_decorator(self) -> bool:
        return self.kind == RegistrationKind.DECORATOR

    def invoke(self, context: IResolutionContext) -> Any:
        return self.factory(context)

    def __str__(self) -> str:
        text = f"{self.kind.value} -> {describe_service_type(self.service_type)}"
        if self.description and self.description.strip():
            text += f" ({self.description})"
        return text


class TypeHandler(BaseModel):
    """Holds the primary factory and decorator chain for one service type.

    Decorators are stored outermost-first: the most recently registered
    decorator runs first and delegates inward.

    Attributes:
        service_type: The service type handled.
        primary: The primary registration, if any.
        decorators: Decorator registrations, outermost first.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    service_type: Hashable = Field(..., description="The service type handled.")
    primary: Optional[Registration] = Field(default=None, description="The primary registration.")
    decorators: List[Registration] = Field(
        default_factory=list,
        description="Decorator registrations, outermost first.",
    )

    def add_primary(self, registration: Registration) -> None:
        """Set the primary registration.

        Raises:
            DuplicatePrimaryRegistrationError: If a primary is already set.
        """
        if self.primary is not None:
            raise DuplicatePrimaryRegistrationError(registration, self.primary)
        self.primary = registration

    def add_decorator(self, registration: Registration) -> None:
        """Prepend a decorator so it becomes the outermost wrapper."""
        self.decorators.insert(0, registration)

    def add(self, registration: Registration) -> None:
        if registration.is_decorator:
            self.add_decorator(registration)
        else:
            self.add_primary(registration)

    def has_registration(self, primary_only: bool = True) -> bool:
        if self.primary is not None:
            return True
        return not primary_only and bool(self.decorators)

    def registration_at(self, depth: int) -> Optional[Registration]:
        """Select the factory to invoke at the given decorator depth.

        Skips ``depth`` decorators and takes the next one. Falls back to the
        primary once the decorators are exhausted.

        Args:
            depth: Number of decorators already on the way in.

        Returns:
            The selected registration, or None when nothing is left.
        """
        if depth < len(self.decorators):
            return self.decorators[depth]
        return self.primary

    def all_registrations(self) -> List[Registration]:
        registrations = list(self.decorators)
        if self.primary is not None:
            registrations.append(self.primary)
        return registrations

    def describe(self) -> str:
        """Listing of every registration for the type, joined by ``"; "``."""
        return "; ".join(str(registration) for registration in self.all_registrations())


class ResolutionResult(BaseModel, Generic[T]):
    """A built root instance along with every instance used to build it.

    Parametrize with the root type, e.g. ``ResolutionResult[Database]``, to
    have the instance checked against it.

    Attributes:
        instance: The resolved root instance.
        tracked_instances: Every distinct instance built in the resolution,
            including the root itself, in creation order.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    instance: T = Field(..., description="The resolved root instance.")
    tracked_instances: Tuple[Any, ...] = Field(..., description="Every instance built in the resolution.")

    def __init__(self, instance: Optional[T] = None, tracked_instances: Optional[Iterable[Any]] = None) -> None:
        if instance is None:
            raise InvalidResultError("A resolution result requires an instance")
        if tracked_instances is None:
            raise InvalidResultError("A resolution result requires the tracked instances")
        super().__init__(instance=instance, tracked_instances=tuple(tracked_instances))


class InjectionistOptions(BaseModel):
    """Configuration for an injectionist.

    Attributes:
        strict_decorators: Reject decorators that request their own type more than once.
        freeze_on_get: End the configuration phase on the first ``get``.
    """

    model_config = ConfigDict(frozen=True)

    strict_decorators: bool = Field(
        default=True,
        description="Raise DecoratorChainError when a decorator requests its own type more than once.",
    )
    freeze_on_get: bool = Field(
        default=False,
        description="Freeze the registration table when the first root resolution starts.",
    )
