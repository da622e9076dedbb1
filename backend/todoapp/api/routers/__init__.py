"""Router exports for FastAPI composition."""

from . import health, todos

__all__ = ["health", "todos"]
