"""In-memory tf-idf search engine.

Documents are added one by one under a caller-supplied identifier and broken
into lowercase terms. Two stores are kept in lockstep:

- term frequencies: ``doc_id -> {term: count}``
- inverted index: ``term -> {doc_id, ...}``

A term is a key in a document's frequency map exactly when the document is in
that term's posting set. Nothing is ever removed.

Every query operation lowercases its ``term`` argument, so ``"Apple"`` and
``"apple"`` are the same query everywhere.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Hashable, Iterator, Mapping
import io
import logging

from term_search.config import Settings
from term_search.search.analyzers import StreamTokenizer, TextSource, get_analyzer, normalize_term
from term_search.search.errors import DocumentNotFoundError, DocumentReadError
from term_search.search.metrics import EngineMetrics
from term_search.search.ranking import ScoredDocument, rank_documents
from term_search.search.stats import inverse_document_frequency, tf_idf


logger = logging.getLogger(__name__)

DocumentId = Hashable


class SearchEngine:
    """Append-only inverted index with tf-idf ranking.

    Not thread-safe on its own; wrap it in
    :class:`~term_search.search.concurrent.SynchronizedSearchEngine` when
    several threads share one instance.
    """

    def __init__(self, settings: Settings | None = None, *, metrics: EngineMetrics | None = None) -> None:
        self.settings = settings if settings is not None else Settings()
        self._tokenizer = StreamTokenizer(
            get_analyzer(self.settings.analyzer),
            chunk_size=self.settings.read_chunk_size,
        )
        self.metrics = metrics if metrics is not None else EngineMetrics(enabled=self.settings.metrics_enabled)
        self._term_freq: dict[DocumentId, dict[str, int]] = {}
        self._index: dict[str, set[DocumentId]] = {}

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._term_freq

    def __len__(self) -> int:
        return len(self._term_freq)

    @property
    def document_count(self) -> int:
        return len(self._term_freq)

    def add_document(self, doc_id: DocumentId, text: TextSource | str) -> None:
        """Index a document; re-adding a known ``doc_id`` is silently ignored.

        The whole source is read before either store is touched, so a read
        failure leaves no trace of the document.

        Raises:
            DocumentReadError: if ``text`` raises ``OSError`` while being read.
        """
        if doc_id in self._term_freq:
            logger.debug("Ignoring re-submitted document %r", doc_id)
            self.metrics.record_duplicate()
            return

        source = io.StringIO(text) if isinstance(text, str) else text
        try:
            counts = Counter(self._tokenizer.terms(source))
        except OSError as exc:
            logger.warning("Reading document %r failed, nothing indexed: %s", doc_id, exc)
            self.metrics.record_failure()
            raise DocumentReadError(doc_id, exc) from exc

        self._commit(doc_id, counts)
        self.metrics.record_ingested()
        logger.info(
            "Indexed document %r",
            doc_id,
            extra={"distinct_terms": len(counts), "total_terms": sum(counts.values())},
        )

    def _commit(self, doc_id: DocumentId, counts: Mapping[str, int]) -> None:
        self._term_freq[doc_id] = dict(counts)
        for term in counts:
            self._index.setdefault(term, set()).add(doc_id)

    def index_lookup(self, term: str) -> set[DocumentId]:
        """Return the ids of documents containing ``term``; empty if it was never seen."""
        with self.metrics.track_latency("index_lookup"):
            return set(self._index.get(normalize_term(term), ()))

    def document_frequency(self, term: str) -> int:
        """Number of documents containing ``term``."""
        return len(self._index.get(normalize_term(term), ()))

    def term_frequency(self, doc_id: DocumentId, term: str) -> int:
        """Occurrences of ``term`` in ``doc_id``; 0 if the document lacks the term.

        Raises:
            DocumentNotFoundError: if ``doc_id`` was never ingested.
        """
        frequencies = self._frequencies(doc_id)
        return frequencies.get(normalize_term(term), 0)

    def inverse_document_frequency(self, term: str) -> float:
        return inverse_document_frequency(self.document_frequency(term), len(self._term_freq))

    def tf_idf(self, doc_id: DocumentId, term: str) -> float:
        """tf-idf of ``term`` within ``doc_id``.

        Raises:
            DocumentNotFoundError: if ``doc_id`` was never ingested.
        """
        tf = self.term_frequency(doc_id, term)
        return tf_idf(tf, self.inverse_document_frequency(term))

    def relevance_scores(self, term: str) -> list[ScoredDocument]:
        """Documents containing ``term`` with their scores, most relevant first.

        Equal scores are ordered by ascending document id.
        """
        with self.metrics.track_latency("relevance_lookup"):
            normalized = normalize_term(term)
            candidates = self._index.get(normalized, ())
            if not candidates:
                return []
            idf = inverse_document_frequency(len(candidates), len(self._term_freq))
            return rank_documents(candidates, lambda doc_id: tf_idf(self._term_freq[doc_id][normalized], idf))

    def relevance_lookup(self, term: str) -> list[DocumentId]:
        """Ids of documents containing ``term``, sorted by descending tf-idf."""
        return [scored.doc_id for scored in self.relevance_scores(term)]

    def document_terms(self, doc_id: DocumentId) -> dict[str, int]:
        """Copy of the term counts recorded for ``doc_id``."""
        return dict(self._frequencies(doc_id))

    def vocabulary(self) -> Iterator[str]:
        return iter(sorted(self._index))

    def document_ids(self) -> list[DocumentId]:
        """Ids of all ingested documents, in ingestion order."""
        return list(self._term_freq)

    def _frequencies(self, doc_id: DocumentId) -> dict[str, int]:
        try:
            return self._term_freq[doc_id]
        except KeyError:
            raise DocumentNotFoundError(doc_id) from None
