"""Seed script for the ``todo`` table.

Inserts a handful of sample entries so a fresh local server has something
to render.
"""

from __future__ import annotations

import argparse
from typing import List, Sequence

from backend.todoapp.config import load_settings
from backend.todoapp.domain.todo.repository import SqlTodoRepository
from backend.todoapp.infra.db import build_engine, ensure_schema
from backend.todoapp.infra.logging import configure_logging

SEED_TEXTS: Sequence[str] = (
    "Buy milk",
    "Walk dog",
    "Water the plants",
)


def build_seed_entries(extra: Sequence[str] | None = None) -> List[str]:
    """Return static seed texts plus any supplied on the command line."""

    return [*SEED_TEXTS, *(extra or ())]


def seed_entries(texts: Sequence[str]) -> int:
    settings = load_settings()
    configure_logging(settings.log_level)
    engine = build_engine(settings.database_url, settings.pool)
    ensure_schema(engine)
    repository = SqlTodoRepository(engine)
    for text in texts:
        repository.insert(text)
    engine.dispose()
    return len(texts)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("texts", nargs="*", help="Additional entries to insert")
    args = parser.parse_args(argv)
    inserted = seed_entries(build_seed_entries(args.texts))
    print(f"Inserted {inserted} entries")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
