"""User relationship operations."""

import json
import math
from datetime import date, datetime, timezone

import aiosqlite

from app.database.db import connect, translate_integrity_error
from app.errors import InvalidArgumentError, NotFoundError, ConflictError
from app.logging import get_logger
from app.models import (
    PaginationInfo,
    RelationshipCategory,
    RelationshipPage,
    RelationshipStats,
    RelationshipStatus,
    RelationshipType,
    SQLITE_INT_MAX,
    UserRelationship,
    UserRelationshipCreate,
    UserRelationshipUpdate,
    parse_enum,
)
from app.services.relationship_types import RelationshipTypeService

logger = get_logger('services.user_relationships')

_SELECT = """SELECT ur.*,
       rt.name AS type_name,
       rt.category AS type_category,
       rt.bidirectional AS type_bidirectional,
       rt.reverse_type_id AS type_reverse_type_id,
       rt.metadata AS type_metadata,
       rt.created_at AS type_created_at,
       rt.updated_at AS type_updated_at
FROM user_relationships ur
JOIN relationship_types rt ON rt.id = ur.relationship_type_id"""

# Either column order matches; parameters are (a, b, b, a).
_BETWEEN = "((ur.user1_id = ? AND ur.user2_id = ?) OR (ur.user1_id = ? AND ur.user2_id = ?))"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _today() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def _load_json(raw: str | None):
    return json.loads(raw) if raw is not None else None


def _row_to_relationship(row: dict) -> UserRelationship:
    return UserRelationship(
        id=row["id"],
        user1_id=row["user1_id"],
        user2_id=row["user2_id"],
        relationship_type_id=row["relationship_type_id"],
        relationship_type=RelationshipType(
            id=row["relationship_type_id"],
            name=row["type_name"],
            category=row["type_category"],
            bidirectional=bool(row["type_bidirectional"]),
            reverse_type_id=row.get("type_reverse_type_id"),
            metadata=_load_json(row.get("type_metadata")),
            created_at=row["type_created_at"],
            updated_at=row["type_updated_at"],
        ),
        context_id=row.get("context_id"),
        start_date=row.get("start_date"),
        end_date=row.get("end_date"),
        status=row["status"],
        metadata=_load_json(row.get("metadata")),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class UserRelationshipService:
    """
    Service for relationships between users.

    A relationship is identified for duplicate purposes by the unordered user
    pair, its type and its context. The same rule is enforced by a unique
    index in the schema, which stays authoritative when two creates race.
    """

    def __init__(self, db_path: str, type_service: RelationshipTypeService):
        self.db_path = db_path
        self.type_service = type_service

    async def _get_db(self) -> aiosqlite.Connection:
        return await connect(self.db_path)

    async def _fetch_all(self, where: str, params: list | tuple, suffix: str = "") -> list[UserRelationship]:
        db = await self._get_db()
        try:
            cursor = await db.execute(f"{_SELECT} WHERE {where} ORDER BY ur.id{suffix}", params)
            rows = await cursor.fetchall()
            return [_row_to_relationship(dict(r)) for r in rows]
        finally:
            await db.close()

    async def _fetch_value(self, query: str, params: list | tuple):
        db = await self._get_db()
        try:
            cursor = await db.execute(query, params)
            row = await cursor.fetchone()
            return row[0] if row else None
        finally:
            await db.close()

    async def list_for_user(
        self,
        user_id: int,
        status: str | RelationshipStatus | None = None,
        context_id: int | None = None,
        category: str | RelationshipCategory | None = None,
        page: int = 0,
        size: int = 20,
    ) -> RelationshipPage:
        if page < 0:
            raise InvalidArgumentError("Page index must not be negative")
        if size < 1:
            raise InvalidArgumentError("Page size must be at least 1")
        if page * size > SQLITE_INT_MAX:
            raise InvalidArgumentError("Page index is out of range")

        conditions = ["(ur.user1_id = ? OR ur.user2_id = ?)"]
        params: list = [user_id, user_id]
        parsed_status = parse_enum(RelationshipStatus, status)
        if parsed_status is not None:
            conditions.append("ur.status = ?")
            params.append(parsed_status.value)
        if context_id is not None:
            conditions.append("ur.context_id = ?")
            params.append(context_id)
        parsed_category = parse_enum(RelationshipCategory, category)
        if parsed_category is not None:
            conditions.append("rt.category = ?")
            params.append(parsed_category.value)
        where = " AND ".join(conditions)

        logger.debug(f"Listing relationships for user {user_id} (page={page}, size={size})")
        total = await self._fetch_value(
            f"SELECT COUNT(*) FROM user_relationships ur "
            f"JOIN relationship_types rt ON rt.id = ur.relationship_type_id WHERE {where}",
            params,
        )
        relationships = await self._fetch_all(
            where, params + [size, page * size], suffix=" LIMIT ? OFFSET ?"
        )
        return RelationshipPage(
            relationships=relationships,
            pagination=PaginationInfo(
                page=page,
                size=size,
                total_elements=total,
                total_pages=math.ceil(total / size),
            ),
        )

    async def list_between(
        self, user1_id: int, user2_id: int, active_only: bool = False
    ) -> list[UserRelationship]:
        where = _BETWEEN
        params: list = [user1_id, user2_id, user2_id, user1_id]
        if active_only:
            where += " AND ur.status = ?"
            params.append(RelationshipStatus.ACTIVE.value)
        return await self._fetch_all(where, params)

    async def list_by_context(self, context_id: int) -> list[UserRelationship]:
        return await self._fetch_all("ur.context_id = ?", (context_id,))

    async def list_by_status(self, status: str | RelationshipStatus) -> list[UserRelationship]:
        parsed = parse_enum(RelationshipStatus, status)
        if parsed is None:
            raise InvalidArgumentError("Status is required")
        return await self._fetch_all("ur.status = ?", (parsed.value,))

    async def list_in_date_range(self, start: date, end: date) -> list[UserRelationship]:
        """Relationships whose validity window overlaps [start, end]. Open dates are unbounded."""
        if end < start:
            raise InvalidArgumentError("End date must not be before start date")
        return await self._fetch_all(
            "(ur.start_date IS NULL OR ur.start_date <= ?) AND (ur.end_date IS NULL OR ur.end_date >= ?)",
            (end.isoformat(), start.isoformat()),
        )

    async def list_currently_active(self, user_id: int | None = None) -> list[UserRelationship]:
        """ACTIVE relationships with no end date or one that has not passed yet."""
        where = "ur.status = ? AND (ur.end_date IS NULL OR ur.end_date >= ?)"
        params: list = [RelationshipStatus.ACTIVE.value, _today()]
        if user_id is not None:
            where += " AND (ur.user1_id = ? OR ur.user2_id = ?)"
            params.extend([user_id, user_id])
        return await self._fetch_all(where, params)

    async def get_relationship(self, relationship_id: int) -> UserRelationship:
        relationships = await self._fetch_all("ur.id = ?", (relationship_id,))
        if not relationships:
            raise NotFoundError(f"Relationship not found with ID: {relationship_id}")
        return relationships[0]

    async def exists_between(self, user1_id: int, user2_id: int, active_only: bool = False) -> bool:
        query = f"SELECT EXISTS(SELECT 1 FROM user_relationships ur WHERE {_BETWEEN}"
        params: list = [user1_id, user2_id, user2_id, user1_id]
        if active_only:
            query += " AND ur.status = ?"
            params.append(RelationshipStatus.ACTIVE.value)
        return bool(await self._fetch_value(query + ")", params))

    async def _duplicate_exists(self, data: UserRelationshipCreate) -> bool:
        return bool(await self._fetch_value(
            f"""SELECT EXISTS(SELECT 1 FROM user_relationships ur
                WHERE {_BETWEEN} AND ur.relationship_type_id = ? AND ur.context_id IS ?)""",
            (
                data.user1_id, data.user2_id, data.user2_id, data.user1_id,
                data.relationship_type_id, data.context_id,
            ),
        ))

    async def create_relationship(self, data: UserRelationshipCreate) -> UserRelationship:
        if data.user1_id == data.user2_id:
            raise InvalidArgumentError("Cannot create relationship between same user")
        await self.type_service.get_type(data.relationship_type_id)

        conflict = (
            f"Relationship already exists between users {data.user1_id} and {data.user2_id}"
        )
        if await self._duplicate_exists(data):
            raise ConflictError(conflict)

        now = _now()
        db = await self._get_db()
        try:
            cursor = await db.execute(
                """INSERT INTO user_relationships
                   (user1_id, user2_id, relationship_type_id, context_id, start_date, end_date, status, metadata, created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    data.user1_id,
                    data.user2_id,
                    data.relationship_type_id,
                    data.context_id,
                    data.start_date.isoformat() if data.start_date else None,
                    None,
                    RelationshipStatus.ACTIVE.value,
                    json.dumps(data.metadata) if data.metadata is not None else None,
                    now,
                    now,
                ),
            )
            await db.commit()
            relationship_id = cursor.lastrowid
        except aiosqlite.IntegrityError as exc:
            raise translate_integrity_error(exc, conflict) from exc
        finally:
            await db.close()

        logger.info(
            f"Created relationship with ID: {relationship_id} between users: "
            f"{data.user1_id} and {data.user2_id}"
        )
        return await self.get_relationship(relationship_id)

    async def update_relationship(
        self, relationship_id: int, data: UserRelationshipUpdate
    ) -> UserRelationship:
        existing = await self.get_relationship(relationship_id)

        fields: dict = {}
        if data.status is not None:
            fields["status"] = parse_enum(RelationshipStatus, data.status).value
        if data.end_date is not None:
            if existing.start_date and data.end_date < existing.start_date:
                raise InvalidArgumentError("End date must not be before start date")
            fields["end_date"] = data.end_date.isoformat()
        if data.metadata is not None:
            fields["metadata"] = json.dumps(data.metadata)

        if not fields:
            return existing

        fields["updated_at"] = _now()
        set_clause = ", ".join(f"{k} = ?" for k in fields)
        params = list(fields.values()) + [relationship_id]

        db = await self._get_db()
        try:
            await db.execute(f"UPDATE user_relationships SET {set_clause} WHERE id = ?", params)
            await db.commit()
        except aiosqlite.IntegrityError as exc:
            raise translate_integrity_error(exc, "Relationship update violates a constraint") from exc
        finally:
            await db.close()

        logger.info(f"Updated relationship with ID: {relationship_id}")
        return await self.get_relationship(relationship_id)

    async def delete_relationship(self, relationship_id: int) -> None:
        db = await self._get_db()
        try:
            cursor = await db.execute(
                "DELETE FROM user_relationships WHERE id = ?", (relationship_id,)
            )
            await db.commit()
            deleted = cursor.rowcount > 0
        finally:
            await db.close()

        if not deleted:
            raise NotFoundError(f"Relationship not found with ID: {relationship_id}")
        logger.info(f"Deleted relationship with ID: {relationship_id}")

    async def count_for_user(self, user_id: int) -> RelationshipStats:
        db = await self._get_db()
        try:
            cursor = await db.execute(
                """SELECT COUNT(*) AS total,
                          COALESCE(SUM(CASE WHEN status = ? THEN 1 ELSE 0 END), 0) AS active
                   FROM user_relationships
                   WHERE user1_id = ? OR user2_id = ?""",
                (RelationshipStatus.ACTIVE.value, user_id, user_id),
            )
            row = dict(await cursor.fetchone())
        finally:
            await db.close()

        # SUSPENDED and PENDING are counted as ended.
        return RelationshipStats(
            total=row["total"],
            active=row["active"],
            ended=row["total"] - row["active"],
        )
