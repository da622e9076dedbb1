"""Shared API dependencies."""

from __future__ import annotations

from fastapi import Request
from starlette.datastructures import FormData

from ..domain.todo.renderer import TodoPageRenderer
from ..domain.todo.repository import TodoRepository

__all__ = [
    "get_todo_repository",
    "get_page_renderer",
    "get_form_data",
]


def get_todo_repository(request: Request) -> TodoRepository:
    """Return the repository handle the application was built with."""

    return request.app.state.todo_repository


def get_page_renderer(request: Request) -> TodoPageRenderer:
    """Return the page renderer the application was built with."""

    return request.app.state.page_renderer


async def get_form_data(request: Request) -> FormData:
    """Parse the request body as form data (empty for other content types)."""

    return await request.form()
