"""
Term indexing and query engine package.

- analyzers: Tokenizers and filters (word runs, lowercase) and stream tokenization
- stats: idf and tf-idf arithmetic
- ranking: Ordering of scored documents
- engine: In-memory inverted index and term-frequency store
- concurrent: Lock-guarded wrapper for shared engines
- metrics: Per-engine Prometheus metrics
"""
