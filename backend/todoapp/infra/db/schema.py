"""Table definitions for the to-do store."""

from __future__ import annotations

from sqlalchemy import Column, Integer, MetaData, Table, Text
from sqlalchemy.engine import Engine

from ..logging import get_logger

logger = get_logger(__name__)

metadata = MetaData()

todo_table = Table(
    "todo",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("text", Text, nullable=False),
    # AUTOINCREMENT keeps SQLite from reusing ids of deleted rows.
    sqlite_autoincrement=True,
)


def ensure_schema(engine: Engine) -> None:
    """Create the ``todo`` table when it does not exist yet."""

    metadata.create_all(engine, checkfirst=True)
    logger.info("schema_ready", extra={"tables": sorted(metadata.tables)})
