"""
Application factory.

Run with:
    uvicorn app.main:create_app --factory

The lifespan owns the database engine: it is created (and the schema ensured)
at startup, shared by every request through the session factory, and disposed
at shutdown.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.v1 import health_router, register_exception_handlers, users_router
from app.config.settings import Settings, get_settings
from app.core.logging import RequestIDMiddleware, setup_logging
from app.database import create_engine, create_session_factory
from app.database.init_db import create_schema
from app.repositories import UserRepository
from app.services import UserService
from app.utils.metadata import get_project_name, get_project_version

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings

    engine = create_engine(settings)
    try:
        if settings.DB_CREATE_SCHEMA:
            await create_schema(engine)

        repository = UserRepository(
            create_session_factory(engine),
            password_hash_rounds=settings.PASSWORD_HASH_ROUNDS,
        )
        app.state.user_service = UserService(
            repository,
            constraint_violation_status=settings.CONSTRAINT_VIOLATION_STATUS,
        )
        logger.info("app.startup", extra={"env": settings.ENV, "db_backend": engine.url.get_backend_name()})

        yield
    finally:
        await engine.dispose()
        logger.info("app.shutdown")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(title=get_project_name(), version=get_project_version(), lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)

    app.include_router(users_router)
    app.include_router(health_router)
    return app
