"""To-do page endpoints: list, add and delete."""

from __future__ import annotations

import re

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.datastructures import FormData

from ...api.dependencies import get_form_data, get_page_renderer, get_todo_repository
from ...domain.todo.renderer import TodoPageRenderer
from ...domain.todo.repository import TodoRepository
from ...domain.todo.types import ClientInputError, TodoAppError, TodoErrorKind
from ...infra.logging import get_logger
from ...infra.metrics import get_metrics_client, request_failure_metric

router = APIRouter(tags=["todos"])
logger = get_logger(__name__)
metrics = get_metrics_client()

ENTRY_ID_PATTERN = re.compile(r"[0-9]+")
MAX_ENTRY_ID = 2**63 - 1
INDEX_PATH = "/"


def _handle_app_error(exc: TodoAppError, *, route: str) -> HTTPException:
    status_code = exc.status_code
    if exc.kind is TodoErrorKind.CLIENT_INPUT:
        logger.warning(
            "request_rejected",
            extra={"route": route, "error_kind": exc.kind.value, "reason": exc.message},
        )
    else:
        logger.error(
            "request_failed",
            exc_info=exc,
            extra={"route": route, "error_kind": exc.kind.value},
        )
    metrics.increment(request_failure_metric(exc.kind.value))
    # Clients only ever see the status phrase.
    return HTTPException(status_code=int(status_code), detail=status_code.phrase)


def _redirect_to_index() -> RedirectResponse:
    return RedirectResponse(url=INDEX_PATH, status_code=status.HTTP_303_SEE_OTHER)


def _parse_text_field(form: FormData) -> str:
    value = form.get("text")
    if value is None:
        raise ClientInputError("field 'text' is required", field_name="text")
    if not isinstance(value, str):
        raise ClientInputError("field 'text' must be a string", field_name="text")
    return value


def _parse_id_field(form: FormData) -> int:
    value = form.get("id")
    if value is None:
        raise ClientInputError("field 'id' is required", field_name="id")
    if not isinstance(value, str) or not ENTRY_ID_PATTERN.fullmatch(value):
        raise ClientInputError("field 'id' must be an integer", field_name="id")
    entry_id = int(value)
    if entry_id > MAX_ENTRY_ID:
        raise ClientInputError("field 'id' is out of range", field_name="id")
    return entry_id


@router.get("/", response_class=HTMLResponse, summary="Render the to-do list")
def index(
    repository: TodoRepository = Depends(get_todo_repository),
    renderer: TodoPageRenderer = Depends(get_page_renderer),
) -> HTMLResponse:
    try:
        entries = repository.list()
        body = renderer.render(entries)
    except TodoAppError as exc:
        raise _handle_app_error(exc, route="index") from exc
    return HTMLResponse(content=body, status_code=status.HTTP_200_OK)


@router.post("/add", summary="Append a to-do entry")
def add_todo(
    form: FormData = Depends(get_form_data),
    repository: TodoRepository = Depends(get_todo_repository),
) -> RedirectResponse:
    try:
        text = _parse_text_field(form)
        repository.insert(text)
    except TodoAppError as exc:
        raise _handle_app_error(exc, route="add") from exc
    return _redirect_to_index()


@router.post("/delete", summary="Remove a to-do entry")
def delete_todo(
    form: FormData = Depends(get_form_data),
    repository: TodoRepository = Depends(get_todo_repository),
) -> RedirectResponse:
    try:
        entry_id = _parse_id_field(form)
        repository.delete(entry_id)
    except TodoAppError as exc:
        raise _handle_app_error(exc, route="delete") from exc
    return _redirect_to_index()
