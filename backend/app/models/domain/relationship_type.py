"""Relationship type domain model."""

from pydantic import Field
from typing import Any, Optional
from datetime import datetime, timezone

from app.models.domain.base import ApiModel, PositiveId
from app.models.enums import RelationshipCategory


class RelationshipTypeCreate(ApiModel):
    """Payload for creating a relationship type."""
    name: str = Field(min_length=1, max_length=100)
    category: str
    bidirectional: bool = False
    reverse_type_id: Optional[PositiveId] = None
    metadata: Optional[Any] = None


class RelationshipTypeUpdate(ApiModel):
    """Payload for updating a relationship type. Only provided fields are patched."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    category: Optional[str] = None
    bidirectional: Optional[bool] = None
    reverse_type_id: Optional[PositiveId] = None
    metadata: Optional[Any] = None


class RelationshipType(ApiModel):
    """
    A named kind of connection between two users, e.g. "Father" or "Friend".

    Directional types point at their counterpart through reverse_type_id
    ("Father" -> "Son"); bidirectional types apply the same way to both users.
    """
    id: int
    name: str
    category: RelationshipCategory
    bidirectional: bool = False
    reverse_type_id: Optional[int] = None
    metadata: Optional[Any] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
