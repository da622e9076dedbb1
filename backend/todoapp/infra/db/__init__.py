"""Database engine construction and scoped connection helpers."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from ...config import PoolConfig
from ...domain.todo.types import StorageError, TodoErrorKind
from ..logging import get_logger
from .schema import ensure_schema, metadata, todo_table

__all__ = [
    "build_engine",
    "connection_scope",
    "ensure_schema",
    "metadata",
    "todo_table",
]

logger = get_logger(__name__)


def build_engine(database_url: str, pool: PoolConfig | None = None) -> Engine:
    """Create the pooled engine shared by every request."""

    pool = pool or PoolConfig()
    url = make_url(database_url)
    options: dict[str, Any] = {"echo": pool.echo, "future": True}
    if url.get_backend_name() == "sqlite":
        # Requests run on the framework threadpool.
        options["connect_args"] = {"check_same_thread": False}
    if _is_memory_sqlite(url.get_backend_name(), url.database):
        # Every thread must reach the same in-memory database.
        options["poolclass"] = StaticPool
    else:
        options["pool_size"] = pool.size
        options["max_overflow"] = pool.max_overflow
        if pool.timeout_seconds is not None:
            options["pool_timeout"] = pool.timeout_seconds
    engine = create_engine(url, **options)
    logger.info(
        "engine_created",
        extra={
            "backend": url.get_backend_name(),
            "pool_size": pool.size,
            "max_overflow": pool.max_overflow,
        },
    )
    return engine


@contextmanager
def connection_scope(engine: Engine) -> Iterator[Connection]:
    """Borrow one pooled connection inside a transaction.

    The connection is returned to the pool on every exit path. Failures to
    obtain it are reported as ``POOL_UNAVAILABLE``; failures while it is in
    use as ``STORAGE_FAILURE``.
    """

    try:
        conn = engine.connect()
    except SQLAlchemyError as exc:
        logger.error("pool_checkout_failed", extra={"error": str(exc)})
        raise StorageError(
            "Failed to get connection", kind=TodoErrorKind.POOL_UNAVAILABLE
        ) from exc
    try:
        with conn.begin():
            yield conn
    except SQLAlchemyError as exc:
        logger.error("statement_failed", extra={"error": str(exc)})
        raise StorageError("Failed to execute SQL statement") from exc
    finally:
        conn.close()


def _is_memory_sqlite(backend: str, database: str | None) -> bool:
    return backend == "sqlite" and database in (None, "", ":memory:")
