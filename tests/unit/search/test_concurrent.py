"""Unit tests for the lock-guarded engine wrapper."""

from concurrent.futures import ThreadPoolExecutor
import io

import pytest

from term_search.search.concurrent import SynchronizedSearchEngine
from term_search.search.engine import SearchEngine
from term_search.search.errors import DocumentNotFoundError


class TestSynchronizedSearchEngine:
    def test_delegates_to_wrapped_engine(self):
        engine = SearchEngine()
        shared = SynchronizedSearchEngine(engine)

        shared.add_document("a", io.StringIO("cat dog dog"))
        shared.add_document("b", "cat cat cat dog")
        shared.add_document("c", "bird")

        assert "a" in engine
        assert len(shared) == 3
        assert shared.index_lookup("CAT") == {"a", "b"}
        assert shared.term_frequency("a", "dog") == 2
        assert shared.inverse_document_frequency("bird") == engine.inverse_document_frequency("bird")
        assert shared.tf_idf("b", "cat") == engine.tf_idf("b", "cat")
        assert shared.relevance_lookup("cat") == ["b", "a"]
        assert [s.doc_id for s in shared.relevance_scores("cat")] == ["b", "a"]

    def test_keeps_the_engine_it_is_given(self):
        engine = SearchEngine()

        shared = SynchronizedSearchEngine(engine)
        shared.add_document("a", "text")

        assert shared.engine is engine
        assert engine.document_ids() == ["a"]

    def test_exposes_read_helpers(self):
        engine = SearchEngine()
        shared = SynchronizedSearchEngine(engine)
        shared.add_document("b", "Cat dog")
        shared.add_document("a", "cat")

        assert shared.document_count == 2
        assert shared.document_ids() == ["b", "a"]
        assert shared.document_frequency("CAT") == 2
        assert shared.document_terms("b") == {"cat": 1, "dog": 1}
        assert list(shared.vocabulary()) == ["cat", "dog"]

    def test_errors_propagate(self):
        shared = SynchronizedSearchEngine()

        with pytest.raises(DocumentNotFoundError):
            shared.term_frequency("missing", "x")

    def test_concurrent_ingestion_keeps_stores_consistent(self):
        shared = SynchronizedSearchEngine()
        docs = {n: f"common term{n} term{n % 7} " * (n % 5 + 1) for n in range(200)}

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda item: shared.add_document(*item), docs.items()))
            lookups = list(pool.map(lambda n: shared.index_lookup(f"term{n}"), range(200)))

        assert len(shared) == 200
        assert shared.index_lookup("common") == set(docs)
        assert all(lookup for lookup in lookups)
        for n in range(200):
            assert shared.term_frequency(n, "common") == n % 5 + 1
