"""Statistical helpers for tf-idf scoring.

The functions here stay independent of the engine's stores so they can be
unit tested on plain numbers.
"""

from __future__ import annotations

import math


def inverse_document_frequency(doc_freq: int, total_docs: int) -> float:
    """Return ``ln((1 + N) / (1 + M))`` for ``M`` matching documents out of ``N``.

    Zero for an empty corpus and for a term present in every document, never
    negative and at most ``ln(N + 1)``.
    """

    if doc_freq < 0 or total_docs < 0:
        raise ValueError("document counts must be non-negative")
    if doc_freq > total_docs:
        raise ValueError(f"doc_freq ({doc_freq}) cannot exceed total_docs ({total_docs})")
    return math.log((1.0 + total_docs) / (1.0 + doc_freq))


def tf_idf(tf: int, idf: float) -> float:
    """Product of term frequency and inverse document frequency."""

    if tf <= 0:
        return 0.0
    return tf * idf
