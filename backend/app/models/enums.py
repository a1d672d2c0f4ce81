"""
Enum definitions for the Relationship Service.

Values are stored and serialized in upper case.
"""
from enum import Enum
from typing import Optional, Type, TypeVar

from app.errors import InvalidArgumentError

E = TypeVar("E", bound=Enum)


class RelationshipCategory(str, Enum):
    """Broad grouping of a relationship type."""
    FAMILY = "FAMILY"
    SOCIAL = "SOCIAL"
    PROFESSIONAL = "PROFESSIONAL"
    CUSTOM = "CUSTOM"


class RelationshipStatus(str, Enum):
    """Lifecycle status of a user relationship. Any transition is allowed."""
    ACTIVE = "ACTIVE"
    ENDED = "ENDED"
    SUSPENDED = "SUSPENDED"
    PENDING = "PENDING"


def parse_enum(enum_cls: Type[E], value: Optional[str | E]) -> Optional[E]:
    """
    Parse a case-insensitive enum value.

    Examples:
        "active" -> RelationshipStatus.ACTIVE
        " Family " -> RelationshipCategory.FAMILY
        None -> None

    Raises InvalidArgumentError for unknown values.
    """
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().upper())
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise InvalidArgumentError(
            f"Invalid {enum_cls.__name__} '{value}'; expected one of: {allowed}"
        ) from None
