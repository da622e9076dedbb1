"""Tests for the in-memory and SQL to-do repositories."""

from __future__ import annotations

import pytest

from backend.todoapp.config import PoolConfig
from backend.todoapp.domain.todo.repository import (
    ENTRY_CREATED_METRIC,
    ENTRY_DELETED_METRIC,
    InMemoryTodoRepository,
    SqlTodoRepository,
)
from backend.todoapp.domain.todo.types import StorageError, TodoEntry, TodoErrorKind
from backend.todoapp.infra.db import build_engine, connection_scope, ensure_schema
from backend.todoapp.infra.metrics import InMemoryMetricsClient

pytestmark = [pytest.mark.repository]


@pytest.fixture()
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'todo.db'}")
    ensure_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def repository_and_metrics(request, engine):
    metrics = InMemoryMetricsClient()
    if request.param == "memory":
        return InMemoryTodoRepository(metrics=metrics), metrics
    return SqlTodoRepository(engine, metrics=metrics), metrics


def test_insert_assigns_sequential_ids(repository_and_metrics):
    repository, metrics = repository_and_metrics

    repository.insert("Buy milk")
    repository.insert("Walk dog")

    assert repository.list() == [
        TodoEntry(id=1, text="Buy milk"),
        TodoEntry(id=2, text="Walk dog"),
    ]
    assert metrics.counters[ENTRY_CREATED_METRIC] == 2


def test_deleted_ids_are_not_reused(repository_and_metrics):
    repository, _metrics = repository_and_metrics
    repository.insert("first")
    repository.insert("second")

    repository.delete(2)
    repository.insert("third")

    assert [entry.id for entry in repository.list()] == [1, 3]


def test_delete_missing_id_is_a_noop(repository_and_metrics):
    repository, metrics = repository_and_metrics
    repository.insert("keep me")

    repository.delete(42)
    repository.delete(42)

    assert repository.list() == [TodoEntry(id=1, text="keep me")]
    assert metrics.counters[ENTRY_DELETED_METRIC] == 0


def test_text_is_stored_verbatim(repository_and_metrics):
    repository, _metrics = repository_and_metrics

    repository.insert("   ")
    repository.insert("<b>bold</b> & more")

    assert [entry.text for entry in repository.list()] == [
        "   ",
        "<b>bold</b> & more",
    ]


def test_sql_list_fails_when_table_missing(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'empty.db'}")
    repository = SqlTodoRepository(engine, metrics=InMemoryMetricsClient())

    with pytest.raises(StorageError) as excinfo:
        repository.list()

    assert excinfo.value.kind is TodoErrorKind.STORAGE_FAILURE
    engine.dispose()


def test_unreachable_store_reports_pool_unavailable(tmp_path):
    missing_dir = tmp_path / "does-not-exist" / "todo.db"
    engine = build_engine(f"sqlite:///{missing_dir}")
    repository = SqlTodoRepository(engine, metrics=InMemoryMetricsClient())

    with pytest.raises(StorageError) as excinfo:
        repository.insert("never stored")

    assert excinfo.value.kind is TodoErrorKind.POOL_UNAVAILABLE
    engine.dispose()


def test_exhausted_pool_reports_pool_unavailable(tmp_path):
    engine = build_engine(
        f"sqlite:///{tmp_path / 'todo.db'}",
        PoolConfig(size=1, max_overflow=0, timeout_seconds=0.1),
    )
    ensure_schema(engine)
    repository = SqlTodoRepository(engine, metrics=InMemoryMetricsClient())

    with engine.connect():
        with pytest.raises(StorageError) as excinfo:
            repository.list()

    assert excinfo.value.kind is TodoErrorKind.POOL_UNAVAILABLE
    # The held connection went back to the pool, so the next request succeeds.
    assert repository.list() == []
    engine.dispose()


def test_connection_released_after_statement_failure(tmp_path):
    engine = build_engine(
        f"sqlite:///{tmp_path / 'todo.db'}",
        PoolConfig(size=1, max_overflow=0, timeout_seconds=0.1),
    )
    repository = SqlTodoRepository(engine, metrics=InMemoryMetricsClient())

    with pytest.raises(StorageError):
        repository.list()

    ensure_schema(engine)
    assert repository.list() == []
    assert engine.pool.checkedout() == 0
    engine.dispose()


def test_connection_scope_commits_on_success(engine):
    repository = SqlTodoRepository(engine, metrics=InMemoryMetricsClient())

    with connection_scope(engine) as conn:
        conn.exec_driver_sql("INSERT INTO todo (text) VALUES ('raw insert')")

    assert repository.list() == [TodoEntry(id=1, text="raw insert")]
