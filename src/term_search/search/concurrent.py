"""Thread-safe wrapper around :class:`SearchEngine`."""

from __future__ import annotations

from collections.abc import Iterator
import threading

from term_search.search.analyzers import TextSource
from term_search.search.engine import DocumentId, SearchEngine
from term_search.search.ranking import ScoredDocument


class SynchronizedSearchEngine:
    """Serializes every call on a shared engine behind one re-entrant lock.

    Ingestion holds the lock while the text source is read, so a slow source
    blocks readers until it finishes or fails.
    """

    def __init__(self, engine: SearchEngine | None = None) -> None:
        self.engine = engine if engine is not None else SearchEngine()
        self._lock = threading.RLock()

    def __contains__(self, doc_id: object) -> bool:
        with self._lock:
            return doc_id in self.engine

    def __len__(self) -> int:
        with self._lock:
            return len(self.engine)

    @property
    def document_count(self) -> int:
        with self._lock:
            return self.engine.document_count

    def add_document(self, doc_id: DocumentId, text: TextSource | str) -> None:
        with self._lock:
            self.engine.add_document(doc_id, text)

    def index_lookup(self, term: str) -> set[DocumentId]:
        with self._lock:
            return self.engine.index_lookup(term)

    def term_frequency(self, doc_id: DocumentId, term: str) -> int:
        with self._lock:
            return self.engine.term_frequency(doc_id, term)

    def inverse_document_frequency(self, term: str) -> float:
        with self._lock:
            return self.engine.inverse_document_frequency(term)

    def tf_idf(self, doc_id: DocumentId, term: str) -> float:
        with self._lock:
            return self.engine.tf_idf(doc_id, term)

    def relevance_scores(self, term: str) -> list[ScoredDocument]:
        with self._lock:
            return self.engine.relevance_scores(term)

    def relevance_lookup(self, term: str) -> list[DocumentId]:
        with self._lock:
            return self.engine.relevance_lookup(term)

    def document_frequency(self, term: str) -> int:
        with self._lock:
            return self.engine.document_frequency(term)

    def document_terms(self, doc_id: DocumentId) -> dict[str, int]:
        with self._lock:
            return self.engine.document_terms(doc_id)

    def document_ids(self) -> list[DocumentId]:
        with self._lock:
            return self.engine.document_ids()

    def vocabulary(self) -> Iterator[str]:
        # Materialized under the lock so iteration never races ingestion.
        with self._lock:
            return iter(list(self.engine.vocabulary()))
