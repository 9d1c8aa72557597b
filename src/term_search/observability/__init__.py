"""Observability helpers: structured logging."""

from term_search.observability.logging import JsonFormatter, configure_logging, configure_logging_from_settings


__all__ = [
    "JsonFormatter",
    "configure_logging",
    "configure_logging_from_settings",
]
