"""Health check routes."""

import aiosqlite
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.database.db import ping, table_counts
from app.dependencies import SettingsDep
from app.logging import get_logger
from app.models import ApiResponse

logger = get_logger('routers.health')

router = APIRouter()


def _health_response(database_up: bool, data: dict) -> JSONResponse:
    body = ApiResponse.ok(data, "Service is healthy" if database_up else "Service is unhealthy")
    return JSONResponse(
        status_code=200 if database_up else 503,
        content=body.model_dump(mode="json"),
    )


@router.get("/health")
async def health_check(settings: SettingsDep):
    database_up = await ping(settings.DATABASE_PATH)
    return _health_response(database_up, {
        "status": "UP" if database_up else "DOWN",
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "database": "Connected" if database_up else "Disconnected",
    })


@router.get("/health/detailed")
async def detailed_health_check(settings: SettingsDep):
    database = {"status": "DOWN", "path": settings.DATABASE_PATH, "tables": None}
    database_up = await ping(settings.DATABASE_PATH)
    if database_up:
        try:
            database["tables"] = await table_counts(settings.DATABASE_PATH)
            database["status"] = "UP"
        except aiosqlite.Error:
            logger.exception("Could not count service tables")
            database_up = False

    return _health_response(database_up, {
        "status": "UP" if database_up else "DOWN",
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "database": database,
    })
