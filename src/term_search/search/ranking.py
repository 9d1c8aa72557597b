"""Relevance ordering for scored documents."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class ScoredDocument:
    """A candidate document paired with its tf-idf score for one term."""

    doc_id: Any
    score: float


def _ranking_key(scored: ScoredDocument) -> tuple[float, Any]:
    # Highest score first; equal scores fall back to ascending identifier order.
    return (-scored.score, scored.doc_id)


def rank_documents(candidates: Iterable[Hashable], score: Callable[[Any], float]) -> list[ScoredDocument]:
    """Score every candidate once and return them most relevant first.

    Identifiers must be mutually orderable; ``TypeError`` from comparing them
    propagates to the caller.
    """

    scored = [ScoredDocument(doc_id=doc_id, score=score(doc_id)) for doc_id in candidates]
    scored.sort(key=_ranking_key)
    return scored
