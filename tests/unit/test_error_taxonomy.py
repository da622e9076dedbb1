from http import HTTPStatus

import pytest

from backend.todoapp.domain.todo import (
    ClientInputError,
    RenderError,
    StorageError,
    TodoErrorKind,
    status_for,
)


@pytest.mark.parametrize(
    ("kind", "expected"),
    [
        (TodoErrorKind.CLIENT_INPUT, HTTPStatus.BAD_REQUEST),
        (TodoErrorKind.POOL_UNAVAILABLE, HTTPStatus.INTERNAL_SERVER_ERROR),
        (TodoErrorKind.STORAGE_FAILURE, HTTPStatus.INTERNAL_SERVER_ERROR),
        (TodoErrorKind.RENDER_FAILURE, HTTPStatus.INTERNAL_SERVER_ERROR),
    ],
)
def test_status_for_every_kind(kind, expected) -> None:
    assert status_for(kind) is expected


def test_exception_kinds_are_explicit() -> None:
    assert ClientInputError("bad").kind is TodoErrorKind.CLIENT_INPUT
    assert StorageError("boom").kind is TodoErrorKind.STORAGE_FAILURE
    assert (
        StorageError("no pool", kind=TodoErrorKind.POOL_UNAVAILABLE).kind
        is TodoErrorKind.POOL_UNAVAILABLE
    )
    assert RenderError("oops").status_code is HTTPStatus.INTERNAL_SERVER_ERROR


def test_storage_error_rejects_foreign_kind() -> None:
    with pytest.raises(ValueError):
        StorageError("wrong", kind=TodoErrorKind.RENDER_FAILURE)
