"""
Relationship Service models.

Usage:
    from app.models import RelationshipType, RelationshipTypeCreate, UserRelationship
    from app.models import RelationshipCategory, RelationshipStatus, parse_enum
    from app.models import ApiResponse
"""

# --- Enums & utilities ---
from app.models.enums import (
    RelationshipCategory,
    RelationshipStatus,
    parse_enum,
)

# --- Domain models ---
from app.models.domain import (
    ApiModel, PositiveId, SQLITE_INT_MAX, SQLITE_INT_MIN,
    RelationshipType, RelationshipTypeCreate, RelationshipTypeUpdate,
    UserRelationship, UserRelationshipCreate, UserRelationshipUpdate,
    PaginationInfo, RelationshipPage, RelationshipStats, RelationshipExists,
)

# --- Result models ---
from app.models.results import ApiResponse

__all__ = [
    # Enums
    "RelationshipCategory", "RelationshipStatus", "parse_enum",
    # Domain
    "ApiModel", "PositiveId", "SQLITE_INT_MAX", "SQLITE_INT_MIN",
    "RelationshipType", "RelationshipTypeCreate", "RelationshipTypeUpdate",
    "UserRelationship", "UserRelationshipCreate", "UserRelationshipUpdate",
    "PaginationInfo", "RelationshipPage", "RelationshipStats", "RelationshipExists",
    # Results
    "ApiResponse",
]
