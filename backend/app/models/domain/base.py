"""Shared base for wire-facing models."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# SQLite INTEGER is a signed 64-bit value.
SQLITE_INT_MIN = -(2**63)
SQLITE_INT_MAX = 2**63 - 1

PositiveId = Annotated[int, Field(gt=0, le=SQLITE_INT_MAX)]


class ApiModel(BaseModel):
    """Serializes as camelCase and accepts either camelCase or snake_case input."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )
