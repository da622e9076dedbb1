"""Persistence adapters for to-do entries."""

from __future__ import annotations

from threading import RLock
from typing import Mapping, Protocol

from sqlalchemy import delete, insert, select
from sqlalchemy.engine import Engine

from ...infra.db import connection_scope, todo_table
from ...infra.logging import get_logger
from ...infra.metrics import (
    ENTRY_CREATED_METRIC,
    ENTRY_DELETED_METRIC,
    MetricsClient,
    get_metrics_client,
)
from .types import TodoEntry

logger = get_logger(__name__)


class TodoRepository(Protocol):  # pragma: no cover - interface only
    """Persistence abstraction consumed by the request handlers."""

    def list(self) -> list[TodoEntry]: ...

    def insert(self, text: str) -> None: ...

    def delete(self, entry_id: int) -> None: ...


class InMemoryTodoRepository(TodoRepository):
    """In-memory adapter primarily used for tests."""

    def __init__(self, *, metrics: MetricsClient | None = None) -> None:
        self._lock = RLock()
        self._store: dict[int, TodoEntry] = {}
        self._last_id = 0
        self._metrics = metrics or get_metrics_client()

    def list(self) -> list[TodoEntry]:
        with self._lock:
            return [self._store[key] for key in sorted(self._store)]

    def insert(self, text: str) -> None:
        with self._lock:
            self._last_id += 1
            entry = TodoEntry(id=self._last_id, text=text)
            self._store[entry.id] = entry
        self._metrics.increment(ENTRY_CREATED_METRIC)
        logger.info("todo_inserted", extra={"entry_id": entry.id})

    def delete(self, entry_id: int) -> None:
        with self._lock:
            removed = self._store.pop(entry_id, None)
        if removed is not None:
            self._metrics.increment(ENTRY_DELETED_METRIC)
        logger.info(
            "todo_deleted",
            extra={"entry_id": entry_id, "removed": removed is not None},
        )


class SqlTodoRepository(TodoRepository):
    """SQLAlchemy-backed adapter over the ``todo`` table."""

    def __init__(
        self, engine: Engine, *, metrics: MetricsClient | None = None
    ) -> None:
        self._engine = engine
        self._table = todo_table
        self._metrics = metrics or get_metrics_client()

    def list(self) -> list[TodoEntry]:
        stmt = select(self._table.c.id, self._table.c.text).order_by(
            self._table.c.id.asc()
        )
        with connection_scope(self._engine) as conn:
            rows = conn.execute(stmt).mappings().all()
        return [self._entry_from_mapping(row) for row in rows]

    def insert(self, text: str) -> None:
        stmt = insert(self._table).values(text=text)
        with connection_scope(self._engine) as conn:
            result = conn.execute(stmt)
            primary_key = result.inserted_primary_key
        self._metrics.increment(ENTRY_CREATED_METRIC)
        logger.info(
            "todo_inserted",
            extra={"entry_id": primary_key[0] if primary_key else None},
        )

    def delete(self, entry_id: int) -> None:
        stmt = delete(self._table).where(self._table.c.id == entry_id)
        with connection_scope(self._engine) as conn:
            removed = conn.execute(stmt).rowcount
        # Absent ids are not an error; double submits stay harmless.
        if removed:
            self._metrics.increment(ENTRY_DELETED_METRIC, removed)
        logger.info(
            "todo_deleted", extra={"entry_id": entry_id, "removed": bool(removed)}
        )

    @staticmethod
    def _entry_from_mapping(row: Mapping[str, object]) -> TodoEntry:
        return TodoEntry(id=int(row["id"]), text=str(row["text"]))
