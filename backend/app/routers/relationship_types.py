"""Relationship type routes."""

from typing import Optional

from fastapi import APIRouter, Query

from app.dependencies import IdPath, RelationshipTypeServiceDep
from app.models import ApiResponse, RelationshipType, RelationshipTypeCreate, RelationshipTypeUpdate

router = APIRouter()


@router.get("", response_model=ApiResponse[list[RelationshipType]])
async def list_relationship_types(
    service: RelationshipTypeServiceDep,
    category: Optional[str] = Query(None),
    bidirectional: Optional[bool] = Query(None),
):
    types = await service.list_types(category=category, bidirectional=bidirectional)
    return ApiResponse.ok(types, "Relationship types retrieved successfully")


@router.get("/search", response_model=ApiResponse[list[RelationshipType]])
async def search_relationship_types(
    service: RelationshipTypeServiceDep,
    name: str = Query(..., min_length=1),
):
    types = await service.search_types(name)
    return ApiResponse.ok(types, "Relationship types search completed")


@router.get("/name/{name}", response_model=ApiResponse[RelationshipType])
async def get_relationship_type_by_name(name: str, service: RelationshipTypeServiceDep):
    relationship_type = await service.get_type_by_name(name)
    return ApiResponse.ok(relationship_type, "Relationship type retrieved successfully")


@router.get("/{type_id}", response_model=ApiResponse[RelationshipType])
async def get_relationship_type(type_id: IdPath, service: RelationshipTypeServiceDep):
    relationship_type = await service.get_type(type_id)
    return ApiResponse.ok(relationship_type, "Relationship type retrieved successfully")


@router.get("/{type_id}/reverse-types", response_model=ApiResponse[list[RelationshipType]])
async def list_reverse_types(type_id: IdPath, service: RelationshipTypeServiceDep):
    types = await service.list_reverse_types(type_id)
    return ApiResponse.ok(types, "Reverse relationship types retrieved successfully")


@router.post("", response_model=ApiResponse[RelationshipType], status_code=201)
async def create_relationship_type(body: RelationshipTypeCreate, service: RelationshipTypeServiceDep):
    relationship_type = await service.create_type(body)
    return ApiResponse.ok(relationship_type, "Relationship type created successfully")


@router.put("/{type_id}", response_model=ApiResponse[RelationshipType])
async def update_relationship_type(
    type_id: IdPath,
    body: RelationshipTypeUpdate,
    service: RelationshipTypeServiceDep,
):
    relationship_type = await service.update_type(type_id, body)
    return ApiResponse.ok(relationship_type, "Relationship type updated successfully")


@router.delete("/{type_id}", response_model=ApiResponse[None])
async def delete_relationship_type(type_id: IdPath, service: RelationshipTypeServiceDep):
    await service.delete_type(type_id)
    return ApiResponse.ok(None, "Relationship type deleted successfully")
