"""Counters for entry mutations and failed requests."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import DefaultDict, Protocol

from .logging import get_logger

logger = get_logger(__name__)

ENTRY_CREATED_METRIC = "todo.entries.created"
ENTRY_DELETED_METRIC = "todo.entries.deleted"
REQUEST_FAILURE_PREFIX = "todo.requests"


def request_failure_metric(kind: str) -> str:
    """Counter name for a request that ended in an error of ``kind``."""

    return f"{REQUEST_FAILURE_PREFIX}.{kind}"


class MetricsClient(Protocol):  # pragma: no cover - interface only
    def increment(self, metric: str, value: int = 1) -> None: ...


@dataclass
class InMemoryMetricsClient:
    """Counter sink used in dev/test builds."""

    counters: DefaultDict[str, int] = field(default_factory=lambda: defaultdict(int))

    def increment(self, metric: str, value: int = 1) -> None:
        self.counters[metric] += value
        logger.debug("metrics_increment", extra={"metric": metric, "value": value})


_metrics_singleton: InMemoryMetricsClient | None = None


def get_metrics_client() -> MetricsClient:
    """Return the shared metrics client."""

    global _metrics_singleton
    if _metrics_singleton is None:
        _metrics_singleton = InMemoryMetricsClient()
    return _metrics_singleton
