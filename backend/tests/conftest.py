from __future__ import annotations

from collections.abc import Iterator
from typing import Callable

import pytest
from fastapi.testclient import TestClient

from app.app import create_app
from app.config import Settings
from app.database.db import init_db
from app.models import RelationshipTypeCreate, UserRelationshipCreate
from app.services.relationship_types import RelationshipTypeService
from app.services.user_relationships import UserRelationshipService


@pytest.fixture
def db_path(tmp_path) -> str:
    """Return a fresh SQLite file path per test."""
    return str(tmp_path / "relationships.db")


@pytest.fixture
async def type_service(db_path: str) -> RelationshipTypeService:
    await init_db(db_path)
    return RelationshipTypeService(db_path=db_path)


@pytest.fixture
async def relationship_service(type_service: RelationshipTypeService) -> UserRelationshipService:
    return UserRelationshipService(db_path=type_service.db_path, type_service=type_service)


@pytest.fixture
def type_payload() -> Callable[..., RelationshipTypeCreate]:
    def _factory(name: str = "Friend", category: str = "SOCIAL", bidirectional: bool = True, **kwargs):
        return RelationshipTypeCreate(name=name, category=category, bidirectional=bidirectional, **kwargs)

    return _factory


@pytest.fixture
def relationship_payload() -> Callable[..., UserRelationshipCreate]:
    def _factory(user1_id: int, user2_id: int, relationship_type_id: int, **kwargs):
        return UserRelationshipCreate(
            user1_id=user1_id,
            user2_id=user2_id,
            relationship_type_id=relationship_type_id,
            **kwargs,
        )

    return _factory


@pytest.fixture
def settings(db_path: str) -> Settings:
    return Settings(DATABASE_PATH=db_path, LOG_LEVEL="WARNING")


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    """Yield a client for an app bound to the per-test database; lifespan runs on enter."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client
