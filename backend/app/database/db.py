"""
Database connection and initialization.
"""

import aiosqlite
from pathlib import Path

from app.errors import ConflictError, InvalidArgumentError, RelationshipServiceError
from app.logging import get_logger

logger = get_logger('database')

SCHEMA_PATH = Path(__file__).parent / "init_db.sql"


async def connect(db_path: str) -> aiosqlite.Connection:
    """
    Open a connection with row access by column name and foreign keys enforced.

    :param db_path: Path to the SQLite database file
    :type db_path: str
    :return: Open database connection; the caller closes it
    :rtype: aiosqlite.Connection
    """
    db = await aiosqlite.connect(db_path)
    db.row_factory = aiosqlite.Row
    await db.execute("PRAGMA foreign_keys = ON")
    return db


async def init_db(db_path: str) -> None:
    """
    Initialize database with schema.

    :param db_path: Path to the SQLite database file
    :type db_path: str
    :return: None
    :rtype: None
    """
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    async with aiosqlite.connect(db_path) as db:
        with open(SCHEMA_PATH) as f:
            await db.executescript(f.read())
        await db.commit()
    logger.info(f"Database initialized at {db_path}")


async def ping(db_path: str) -> bool:
    """
    Check that the database answers a trivial query.

    :param db_path: Path to the SQLite database file
    :type db_path: str
    :return: True when the database is reachable
    :rtype: bool
    """
    try:
        async with aiosqlite.connect(db_path) as db:
            cursor = await db.execute("SELECT 1")
            row = await cursor.fetchone()
            return row is not None and row[0] == 1
    except aiosqlite.Error:
        logger.exception("Database health check failed")
        return False


async def table_counts(db_path: str) -> dict[str, int]:
    """
    Count the rows of each service table.

    :param db_path: Path to the SQLite database file
    :type db_path: str
    :return: Row count keyed by table name
    :rtype: dict[str, int]
    """
    counts: dict[str, int] = {}
    async with aiosqlite.connect(db_path) as db:
        for table in ("relationship_types", "user_relationships"):
            cursor = await db.execute(f"SELECT COUNT(*) FROM {table}")
            row = await cursor.fetchone()
            counts[table] = row[0]
    return counts


def translate_integrity_error(exc: aiosqlite.IntegrityError, message: str) -> RelationshipServiceError:
    """
    Map a storage constraint violation onto the matching domain error.

    :param exc: The IntegrityError raised by SQLite
    :type exc: aiosqlite.IntegrityError
    :param message: Message for the domain error
    :type message: str
    :return: Domain error to raise in place of the storage error
    :rtype: RelationshipServiceError
    """
    detail = str(exc)
    if detail.startswith(("CHECK constraint failed", "NOT NULL constraint failed")):
        return InvalidArgumentError(message)
    # UNIQUE and FOREIGN KEY violations
    return ConflictError(message)

