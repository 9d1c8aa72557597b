"""Shared test fixtures and configuration."""

import io

import pytest


# Pin every setting so a developer's environment or .env never leaks into tests
TEST_ENV = {
    "TERM_SEARCH_LOG_LEVEL": "info",
    "TERM_SEARCH_LOG_JSON": "true",
    "TERM_SEARCH_ANALYZER": "standard",
    "TERM_SEARCH_READ_CHUNK_SIZE": "8192",
    "TERM_SEARCH_METRICS_ENABLED": "true",
}


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Set test defaults for every TERM_SEARCH_* variable."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)


class FailingReader(io.StringIO):
    """Text source that serves ``prefix`` and then fails on the next read."""

    def __init__(self, prefix: str = "", error: OSError | None = None) -> None:
        super().__init__()
        self._chunks = [prefix] if prefix else []
        self._error = error or OSError("disk went away")
        self.reads = 0

    def read(self, size=-1, /):
        self.reads += 1
        if self._chunks:
            return self._chunks.pop(0)
        raise self._error


@pytest.fixture
def failing_reader():
    return FailingReader
