"""Relationship type catalog operations."""

import json
from datetime import datetime, timezone

import aiosqlite

from app.database.db import connect, translate_integrity_error
from app.errors import ConflictError, NotFoundError
from app.logging import get_logger
from app.models import (
    RelationshipCategory,
    RelationshipType,
    RelationshipTypeCreate,
    RelationshipTypeUpdate,
    parse_enum,
)

logger = get_logger('services.relationship_types')


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _row_to_type(row: dict) -> RelationshipType:
    return RelationshipType(
        id=row["id"],
        name=row["name"],
        category=row["category"],
        bidirectional=bool(row["bidirectional"]),
        reverse_type_id=row.get("reverse_type_id"),
        metadata=json.loads(row["metadata"]) if row.get("metadata") is not None else None,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class RelationshipTypeService:
    """Service for the relationship type catalog."""

    def __init__(self, db_path: str):
        self.db_path = db_path

    async def _get_db(self) -> aiosqlite.Connection:
        return await connect(self.db_path)

    async def _find_one(self, where: str, params: tuple) -> RelationshipType | None:
        db = await self._get_db()
        try:
            cursor = await db.execute(f"SELECT * FROM relationship_types WHERE {where}", params)
            row = await cursor.fetchone()
            return _row_to_type(dict(row)) if row else None
        finally:
            await db.close()

    async def _require_reverse_type(self, reverse_type_id: int) -> None:
        if not await self._find_one("id = ?", (reverse_type_id,)):
            raise NotFoundError(f"Reverse type not found with ID: {reverse_type_id}")

    async def list_types(
        self,
        category: str | RelationshipCategory | None = None,
        bidirectional: bool | None = None,
    ) -> list[RelationshipType]:
        conditions: list[str] = []
        params: list = []
        parsed = parse_enum(RelationshipCategory, category)
        if parsed is not None:
            conditions.append("category = ?")
            params.append(parsed.value)
        if bidirectional is not None:
            conditions.append("bidirectional = ?")
            params.append(int(bidirectional))
        where = f" WHERE {' AND '.join(conditions)}" if conditions else ""
        logger.debug(f"Listing relationship types (category={parsed}, bidirectional={bidirectional})")

        db = await self._get_db()
        try:
            cursor = await db.execute(f"SELECT * FROM relationship_types{where} ORDER BY id", params)
            rows = await cursor.fetchall()
            return [_row_to_type(dict(r)) for r in rows]
        finally:
            await db.close()

    async def get_type(self, type_id: int) -> RelationshipType:
        relationship_type = await self._find_one("id = ?", (type_id,))
        if not relationship_type:
            raise NotFoundError(f"Relationship type not found with ID: {type_id}")
        return relationship_type

    async def get_type_by_name(self, name: str) -> RelationshipType:
        relationship_type = await self._find_one("name = ?", (name,))
        if not relationship_type:
            raise NotFoundError(f"Relationship type not found with name: {name}")
        return relationship_type

    async def exists_by_name(self, name: str) -> bool:
        return await self._find_one("name = ?", (name,)) is not None

    async def search_types(self, text: str) -> list[RelationshipType]:
        """Case-insensitive substring match on the type name."""
        escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        db = await self._get_db()
        try:
            cursor = await db.execute(
                "SELECT * FROM relationship_types WHERE lower(name) LIKE lower(?) ESCAPE '\\' ORDER BY id",
                (f"%{escaped}%",),
            )
            rows = await cursor.fetchall()
            return [_row_to_type(dict(r)) for r in rows]
        finally:
            await db.close()

    async def list_reverse_types(self, type_id: int) -> list[RelationshipType]:
        """Types that name ``type_id`` as their reverse."""
        await self.get_type(type_id)
        db = await self._get_db()
        try:
            cursor = await db.execute(
                "SELECT * FROM relationship_types WHERE reverse_type_id = ? ORDER BY id",
                (type_id,),
            )
            rows = await cursor.fetchall()
            return [_row_to_type(dict(r)) for r in rows]
        finally:
            await db.close()

    async def create_type(self, data: RelationshipTypeCreate) -> RelationshipType:
        category = parse_enum(RelationshipCategory, data.category)
        if await self.exists_by_name(data.name):
            raise ConflictError(f"Relationship type with name '{data.name}' already exists")
        if data.reverse_type_id is not None:
            await self._require_reverse_type(data.reverse_type_id)

        now = _now()
        db = await self._get_db()
        try:
            cursor = await db.execute(
                """INSERT INTO relationship_types
                   (name, category, bidirectional, reverse_type_id, metadata, created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (
                    data.name,
                    category.value,
                    int(data.bidirectional),
                    data.reverse_type_id,
                    json.dumps(data.metadata) if data.metadata is not None else None,
                    now,
                    now,
                ),
            )
            await db.commit()
            type_id = cursor.lastrowid
        except aiosqlite.IntegrityError as exc:
            raise translate_integrity_error(
                exc, f"Relationship type with name '{data.name}' already exists"
            ) from exc
        finally:
            await db.close()

        logger.info(f"Created relationship type: {data.name} with ID: {type_id}")
        return await self.get_type(type_id)

    async def update_type(self, type_id: int, data: RelationshipTypeUpdate) -> RelationshipType:
        existing = await self.get_type(type_id)

        fields: dict = {}
        if data.name is not None and data.name != existing.name:
            if await self._find_one("name = ? AND id != ?", (data.name, type_id)):
                raise ConflictError(f"Relationship type with name '{data.name}' already exists")
            fields["name"] = data.name
        if data.category is not None:
            fields["category"] = parse_enum(RelationshipCategory, data.category).value
        if data.bidirectional is not None:
            fields["bidirectional"] = int(data.bidirectional)
        if data.reverse_type_id is not None:
            await self._require_reverse_type(data.reverse_type_id)
            fields["reverse_type_id"] = data.reverse_type_id
        if data.metadata is not None:
            fields["metadata"] = json.dumps(data.metadata)

        if not fields:
            return existing

        fields["updated_at"] = _now()
        set_clause = ", ".join(f"{k} = ?" for k in fields)
        params = list(fields.values()) + [type_id]

        db = await self._get_db()
        try:
            await db.execute(f"UPDATE relationship_types SET {set_clause} WHERE id = ?", params)
            await db.commit()
        except aiosqlite.IntegrityError as exc:
            raise translate_integrity_error(
                exc, f"Relationship type with name '{data.name}' already exists"
            ) from exc
        finally:
            await db.close()

        logger.info(f"Updated relationship type with ID: {type_id}")
        return await self.get_type(type_id)

    async def delete_type(self, type_id: int) -> None:
        existing = await self.get_type(type_id)

        db = await self._get_db()
        try:
            await db.execute("DELETE FROM relationship_types WHERE id = ?", (type_id,))
            await db.commit()
        except aiosqlite.IntegrityError as exc:
            raise ConflictError(
                f"Relationship type '{existing.name}' is still used by user relationships"
            ) from exc
        finally:
            await db.close()

        logger.info(f"Deleted relationship type: {existing.name} with ID: {type_id}")
