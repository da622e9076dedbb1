"""To-do domain package."""

from .types import (
    ClientInputError,
    RenderError,
    StorageError,
    TodoAppError,
    TodoEntry,
    TodoErrorKind,
    status_for,
)

__all__ = [
    "ClientInputError",
    "RenderError",
    "StorageError",
    "TodoAppError",
    "TodoEntry",
    "TodoErrorKind",
    "status_for",
]
