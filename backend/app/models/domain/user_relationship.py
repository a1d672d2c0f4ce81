"""User relationship domain model."""

from pydantic import Field
from typing import Any, Optional
from datetime import date, datetime, timezone

from app.models.domain.base import ApiModel, PositiveId
from app.models.domain.relationship_type import RelationshipType
from app.models.enums import RelationshipStatus


class UserRelationshipCreate(ApiModel):
    """Payload for creating a relationship between two users."""
    user1_id: PositiveId
    user2_id: PositiveId
    relationship_type_id: PositiveId
    context_id: Optional[PositiveId] = None
    start_date: Optional[date] = None
    metadata: Optional[Any] = None


class UserRelationshipUpdate(ApiModel):
    """Payload for updating a relationship. Only status, end date and metadata can change."""
    status: Optional[str] = None
    end_date: Optional[date] = None
    metadata: Optional[Any] = None


class UserRelationship(ApiModel):
    """A typed relationship between two users, optionally scoped to a context."""
    id: int
    user1_id: int
    user2_id: int
    relationship_type_id: int
    relationship_type: Optional[RelationshipType] = None
    context_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: RelationshipStatus = RelationshipStatus.ACTIVE
    metadata: Optional[Any] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class PaginationInfo(ApiModel):
    page: int
    size: int
    total_elements: int
    total_pages: int


class RelationshipPage(ApiModel):
    """One page of a user's relationships."""
    relationships: list[UserRelationship] = Field(default_factory=list)
    pagination: PaginationInfo


class RelationshipStats(ApiModel):
    """Relationship counts for a user. ended is total minus active."""
    total: int
    active: int
    ended: int


class RelationshipExists(ApiModel):
    exists: bool
