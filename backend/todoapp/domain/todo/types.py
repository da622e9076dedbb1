"""Shared to-do domain types and the error taxonomy."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from http import HTTPStatus


@dataclass(frozen=True)
class TodoEntry:
    """A single to-do row as stored in the ``todo`` table."""

    id: int
    text: str


class TodoErrorKind(str, Enum):
    """Enumerates every failure a request can end in."""

    CLIENT_INPUT = "client_input"
    POOL_UNAVAILABLE = "pool_unavailable"
    STORAGE_FAILURE = "storage_failure"
    RENDER_FAILURE = "render_failure"


_STATUS_BY_KIND: dict[TodoErrorKind, HTTPStatus] = {
    TodoErrorKind.CLIENT_INPUT: HTTPStatus.BAD_REQUEST,
    TodoErrorKind.POOL_UNAVAILABLE: HTTPStatus.INTERNAL_SERVER_ERROR,
    TodoErrorKind.STORAGE_FAILURE: HTTPStatus.INTERNAL_SERVER_ERROR,
    TodoErrorKind.RENDER_FAILURE: HTTPStatus.INTERNAL_SERVER_ERROR,
}


def status_for(kind: TodoErrorKind) -> HTTPStatus:
    """Map an error kind onto the HTTP status returned to the client."""

    return _STATUS_BY_KIND[kind]


class TodoAppError(Exception):
    """Domain exception propagated to the API layer."""

    def __init__(self, kind: TodoErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> HTTPStatus:
        return status_for(self.kind)


class ClientInputError(TodoAppError):
    """Missing or malformed form field."""

    def __init__(self, message: str, *, field_name: str | None = None) -> None:
        super().__init__(TodoErrorKind.CLIENT_INPUT, message)
        self.field_name = field_name


class StorageError(TodoAppError):
    """Connection could not be acquired or a statement failed."""

    def __init__(
        self,
        message: str,
        *,
        kind: TodoErrorKind = TodoErrorKind.STORAGE_FAILURE,
    ) -> None:
        if kind not in (TodoErrorKind.POOL_UNAVAILABLE, TodoErrorKind.STORAGE_FAILURE):
            raise ValueError(f"StorageError cannot carry kind {kind.value}")
        super().__init__(kind, message)


class RenderError(TodoAppError):
    """Template engine failed while producing the page."""

    def __init__(self, message: str) -> None:
        super().__init__(TodoErrorKind.RENDER_FAILURE, message)
