"""term-search: a minimal in-memory tf-idf document index."""

from term_search.search.concurrent import SynchronizedSearchEngine
from term_search.search.engine import SearchEngine
from term_search.search.errors import DocumentNotFoundError, DocumentReadError, SearchEngineError
from term_search.search.ranking import ScoredDocument


__all__ = [
    "DocumentNotFoundError",
    "DocumentReadError",
    "ScoredDocument",
    "SearchEngine",
    "SearchEngineError",
    "SynchronizedSearchEngine",
]
