"""Domain models — relationship types and the relationships between users."""

from app.models.domain.base import ApiModel, PositiveId, SQLITE_INT_MAX, SQLITE_INT_MIN
from app.models.domain.relationship_type import (
    RelationshipType,
    RelationshipTypeCreate,
    RelationshipTypeUpdate,
)
from app.models.domain.user_relationship import (
    UserRelationship,
    UserRelationshipCreate,
    UserRelationshipUpdate,
    PaginationInfo,
    RelationshipPage,
    RelationshipStats,
    RelationshipExists,
)

__all__ = [
    "ApiModel", "PositiveId", "SQLITE_INT_MAX", "SQLITE_INT_MIN",
    "RelationshipType", "RelationshipTypeCreate", "RelationshipTypeUpdate",
    "UserRelationship", "UserRelationshipCreate", "UserRelationshipUpdate",
    "PaginationInfo", "RelationshipPage", "RelationshipStats", "RelationshipExists",
]
