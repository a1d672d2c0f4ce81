"""User relationship routes."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Query

from app.dependencies import IdPath, SettingsDep, UserRelationshipServiceDep
from app.errors import InvalidArgumentError
from app.models import (
    ApiResponse,
    RelationshipExists,
    RelationshipPage,
    RelationshipStats,
    SQLITE_INT_MAX,
    SQLITE_INT_MIN,
    UserRelationship,
    UserRelationshipCreate,
    UserRelationshipUpdate,
)

router = APIRouter()


@router.get("/user/{user_id}", response_model=ApiResponse[RelationshipPage])
async def list_user_relationships(
    user_id: IdPath,
    service: UserRelationshipServiceDep,
    settings: SettingsDep,
    status: Optional[str] = Query(None),
    context_id: Optional[int] = Query(None, alias="contextId", ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX),
    category: Optional[str] = Query(None),
    page: int = Query(0, ge=0, le=SQLITE_INT_MAX),
    size: Optional[int] = Query(None, ge=1, le=SQLITE_INT_MAX),
):
    size = size or settings.DEFAULT_PAGE_SIZE
    if size > settings.MAX_PAGE_SIZE:
        raise InvalidArgumentError(f"Page size must not exceed {settings.MAX_PAGE_SIZE}")
    result = await service.list_for_user(
        user_id,
        status=status,
        context_id=context_id,
        category=category,
        page=page,
        size=size,
    )
    return ApiResponse.ok(result, "User relationships retrieved successfully")


@router.get("/user/{user_id}/stats", response_model=ApiResponse[RelationshipStats])
async def get_user_relationship_stats(user_id: IdPath, service: UserRelationshipServiceDep):
    stats = await service.count_for_user(user_id)
    return ApiResponse.ok(stats, "User relationship statistics retrieved successfully")


@router.get("/between/{user1_id}/{user2_id}", response_model=ApiResponse[list[UserRelationship]])
async def list_relationships_between(
    user1_id: IdPath,
    user2_id: IdPath,
    service: UserRelationshipServiceDep,
    active_only: bool = Query(False, alias="activeOnly"),
):
    relationships = await service.list_between(user1_id, user2_id, active_only=active_only)
    return ApiResponse.ok(relationships, "Relationships between users retrieved successfully")


@router.get("/exists/{user1_id}/{user2_id}", response_model=ApiResponse[RelationshipExists])
async def check_relationship_exists(
    user1_id: IdPath,
    user2_id: IdPath,
    service: UserRelationshipServiceDep,
    active_only: bool = Query(False, alias="activeOnly"),
):
    exists = await service.exists_between(user1_id, user2_id, active_only=active_only)
    return ApiResponse.ok(RelationshipExists(exists=exists), "Relationship existence check completed")


@router.get("/context/{context_id}", response_model=ApiResponse[list[UserRelationship]])
async def list_context_relationships(context_id: IdPath, service: UserRelationshipServiceDep):
    relationships = await service.list_by_context(context_id)
    return ApiResponse.ok(relationships, "Context relationships retrieved successfully")


@router.get("/date-range", response_model=ApiResponse[list[UserRelationship]])
async def list_relationships_in_date_range(
    service: UserRelationshipServiceDep,
    start_date: date = Query(..., alias="startDate"),
    end_date: date = Query(..., alias="endDate"),
):
    relationships = await service.list_in_date_range(start_date, end_date)
    return ApiResponse.ok(relationships, "Relationships in date range retrieved successfully")


@router.get("/current", response_model=ApiResponse[list[UserRelationship]])
async def list_current_relationships(
    service: UserRelationshipServiceDep,
    user_id: Optional[int] = Query(None, alias="userId", ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX),
):
    relationships = await service.list_currently_active(user_id=user_id)
    return ApiResponse.ok(relationships, "Currently active relationships retrieved successfully")


@router.get("/status/{status}", response_model=ApiResponse[list[UserRelationship]])
async def list_relationships_by_status(status: str, service: UserRelationshipServiceDep):
    relationships = await service.list_by_status(status)
    return ApiResponse.ok(relationships, "Relationships by status retrieved successfully")


@router.get("/{relationship_id}", response_model=ApiResponse[UserRelationship])
async def get_relationship(relationship_id: IdPath, service: UserRelationshipServiceDep):
    relationship = await service.get_relationship(relationship_id)
    return ApiResponse.ok(relationship, "Relationship retrieved successfully")


@router.post("", response_model=ApiResponse[UserRelationship], status_code=201)
async def create_relationship(body: UserRelationshipCreate, service: UserRelationshipServiceDep):
    relationship = await service.create_relationship(body)
    return ApiResponse.ok(relationship, "Relationship created successfully")


@router.put("/{relationship_id}", response_model=ApiResponse[UserRelationship])
async def update_relationship(
    relationship_id: IdPath,
    body: UserRelationshipUpdate,
    service: UserRelationshipServiceDep,
):
    relationship = await service.update_relationship(relationship_id, body)
    return ApiResponse.ok(relationship, "Relationship updated successfully")


@router.delete("/{relationship_id}", response_model=ApiResponse[None])
async def delete_relationship(relationship_id: IdPath, service: UserRelationshipServiceDep):
    await service.delete_relationship(relationship_id)
    return ApiResponse.ok(None, "Relationship deleted successfully")
