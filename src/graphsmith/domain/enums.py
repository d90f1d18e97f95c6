from enum import Enum


class RegistrationKind(str, Enum):
    """Defines the role a factory plays for its service type.

    Attributes:
        PRIMARY: The canonical factory for the type. At most one per type.
        DECORATOR: A factory wrapping an inner instance of the same type.
    """

    PRIMARY = "primary"
    DECORATOR = "decorator"

    def __str__(self) -> str:
        return self.value
