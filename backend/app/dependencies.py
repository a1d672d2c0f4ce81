"""
Dependency injection for FastAPI routes.

Provides typed service dependencies that enable IDE navigation (Ctrl+Click).
"""

from typing import Annotated
from fastapi import Request, Depends, Path

from app.config import Settings
from app.models import SQLITE_INT_MAX, SQLITE_INT_MIN
from app.services.relationship_types import RelationshipTypeService
from app.services.user_relationships import UserRelationshipService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_relationship_type_service(request: Request) -> RelationshipTypeService:
    return request.app.state.relationship_type_service


def get_user_relationship_service(request: Request) -> UserRelationshipService:
    return request.app.state.user_relationship_service


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
RelationshipTypeServiceDep = Annotated[RelationshipTypeService, Depends(get_relationship_type_service)]
UserRelationshipServiceDep = Annotated[UserRelationshipService, Depends(get_user_relationship_service)]

# Integer path and query values are bounded to what SQLite can bind.
IdPath = Annotated[int, Path(ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX)]
