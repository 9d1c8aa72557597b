"""Exceptions raised by the search engine."""


class SearchEngineError(Exception):
    """Base class for engine failures."""


class DocumentNotFoundError(SearchEngineError, LookupError):
    """Raised when a query references a document that was never ingested."""

    def __init__(self, doc_id: object) -> None:
        super().__init__(f"Document {doc_id!r} has not been added to the engine")
        self.doc_id = doc_id


class DocumentReadError(SearchEngineError, OSError):
    """Raised when a document's text source fails while being read.

    The original I/O error is always available as ``__cause__``.
    """

    def __init__(self, doc_id: object, cause: OSError) -> None:
        super().__init__(f"Failed to read document {doc_id!r}: {cause}")
        self.doc_id = doc_id
