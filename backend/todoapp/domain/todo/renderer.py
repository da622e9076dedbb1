"""HTML rendering for the to-do page."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from ...infra.logging import get_logger
from .types import RenderError, TodoEntry

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "templates"
INDEX_TEMPLATE = "index.html"


class TodoPageRenderer:
    """Turns a list of entries into a complete HTML document."""

    def __init__(
        self,
        templates_dir: str | Path = TEMPLATES_DIR,
        template_name: str = INDEX_TEMPLATE,
    ) -> None:
        self._environment = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html", "htm", "xml"]),
        )
        self._template_name = template_name

    def render(self, entries: Sequence[TodoEntry]) -> str:
        try:
            template = self._environment.get_template(self._template_name)
            return template.render(entries=list(entries))
        except TemplateError as exc:
            logger.debug(
                "render_failed",
                extra={"template": self._template_name, "error": str(exc)},
            )
            raise RenderError("Failed to render HTML") from exc


_default_renderer: TodoPageRenderer | None = None


def render(entries: Sequence[TodoEntry]) -> str:
    """Render ``entries`` with the default template."""

    global _default_renderer
    if _default_renderer is None:
        _default_renderer = TodoPageRenderer()
    return _default_renderer.render(entries)
