"""FastAPI entrypoint for the to-do server."""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI
from sqlalchemy.engine import Engine

from .api.routers import health, todos
from .config import Settings, load_settings
from .domain.todo.renderer import TodoPageRenderer
from .domain.todo.repository import SqlTodoRepository, TodoRepository
from .infra.db import build_engine, ensure_schema
from .infra.logging import configure_logging, get_logger

logger = get_logger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    engine: Engine | None = None,
    repository: TodoRepository | None = None,
    renderer: TodoPageRenderer | None = None,
) -> FastAPI:
    """Open the store, ensure the schema and register routers.

    Passing ``repository`` skips engine construction entirely, which is how
    tests run the handlers against an in-memory store.
    """

    settings = settings or load_settings()
    configure_logging(settings.log_level)

    if repository is None:
        engine = engine or build_engine(settings.database_url, settings.pool)
        ensure_schema(engine)
        repository = SqlTodoRepository(engine)

    application = FastAPI(title="Todo", version="0.1.0")
    application.state.settings = settings
    application.state.engine = engine
    application.state.todo_repository = repository
    application.state.page_renderer = renderer or TodoPageRenderer()
    for router in (todos.router, health.router):
        application.include_router(router)
    logger.info(
        "app_created",
        extra={
            "environment": settings.environment,
            "repository": type(repository).__name__,
        },
    )
    return application


def run(settings: Settings | None = None) -> None:
    """Build the application and serve it until interrupted."""

    settings = settings or load_settings()
    application = create_app(settings)
    logger.info(
        "server_starting",
        extra={"host": settings.server.host, "port": settings.server.port},
    )
    uvicorn.run(
        application,
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.log_level.lower(),
    )
