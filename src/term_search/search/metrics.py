"""Prometheus metrics for a single engine instance.

Each engine owns its own ``CollectorRegistry`` so several engines can live in
one process without sharing or colliding on metric names.
"""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
import time

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Counter, Histogram, generate_latest


class EngineMetrics:
    """Ingestion counters and lookup latency for one engine."""

    def __init__(self, registry: CollectorRegistry | None = None, *, enabled: bool = True) -> None:
        self.enabled = enabled
        self.registry = registry or CollectorRegistry()
        self.documents_ingested = Counter(
            "term_search_documents_ingested_total",
            "Documents committed to the index",
            registry=self.registry,
        )
        self.duplicate_documents = Counter(
            "term_search_duplicate_documents_total",
            "Re-submitted document ids that were ignored",
            registry=self.registry,
        )
        self.ingestion_failures = Counter(
            "term_search_ingestion_failures_total",
            "Ingestions aborted because the text source failed",
            registry=self.registry,
        )
        self.lookup_latency = Histogram(
            "term_search_lookup_seconds",
            "Latency of query operations",
            ["operation"],
            registry=self.registry,
            buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
        )

    def record_ingested(self) -> None:
        if self.enabled:
            self.documents_ingested.inc()

    def record_duplicate(self) -> None:
        if self.enabled:
            self.duplicate_documents.inc()

    def record_failure(self) -> None:
        if self.enabled:
            self.ingestion_failures.inc()

    @contextmanager
    def track_latency(self, operation: str) -> Generator[None, None, None]:
        """Context manager to observe how long a query operation takes."""
        start = time.perf_counter()
        try:
            yield
        finally:
            if self.enabled:
                self.lookup_latency.labels(operation=operation).observe(time.perf_counter() - start)

    def render(self) -> bytes:
        """Return the Prometheus text exposition for this engine."""
        return generate_latest(self.registry)

    @staticmethod
    def content_type() -> str:
        return CONTENT_TYPE_LATEST
