"""
Relationship Service - FastAPI Backend
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import Settings, get_settings
from app.database.db import init_db
from app.errors import RelationshipServiceError
from app.logging import setup_logging, get_logger
from app.models import ApiResponse
from app.routers import health, relationship_types, user_relationships
from app.services.relationship_types import RelationshipTypeService
from app.services.user_relationships import UserRelationshipService

logger = get_logger('main')


def _error_response(status_code: int, message: str, data=None) -> JSONResponse:
    body = ApiResponse.error(message, data=data)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{location}: {first.get('msg')}" if location else str(first.get("msg"))


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RelationshipServiceError)
    async def service_error_handler(request: Request, exc: RelationshipServiceError):
        logger.debug(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return _error_response(400, _validation_message(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return _error_response(500, "Internal server error")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.LOG_LEVEL)
        logger.info(f"Starting {settings.SERVICE_NAME}")

        await init_db(settings.DATABASE_PATH)
        logger.info("Database initialized")

        type_service = RelationshipTypeService(db_path=settings.DATABASE_PATH)
        app.state.relationship_type_service = type_service
        app.state.user_relationship_service = UserRelationshipService(
            db_path=settings.DATABASE_PATH,
            type_service=type_service,
        )
        logger.info("Services initialized")

        yield

        logger.info("Shutting down application")

    app = FastAPI(
        title="Relationship Service API",
        description="Typed relationships between users",
        version=settings.SERVICE_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    prefix = settings.API_PREFIX
    app.include_router(
        relationship_types.router,
        prefix=f"{prefix}/relationship-types",
        tags=["Relationship Types"],
    )
    app.include_router(
        user_relationships.router,
        prefix=f"{prefix}/relationships",
        tags=["User Relationships"],
    )
    app.include_router(health.router, tags=["Health"])

    @app.get("/")
    async def root():
        return {
            "name": "Relationship Service API",
            "version": settings.SERVICE_VERSION,
            "docs": "/docs",
            "health": "/health"
        }

    return app
