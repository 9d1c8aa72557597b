"""Analyzer utilities for the term index.

Tokenizers and filters compose the same way Whoosh's do: a tokenizer yields
``Token`` objects and each filter maps one token stream to another. Terms
produced here are what the inverted index stores, so every analyzer that
feeds the engine must lowercase.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
import re
from typing import Protocol


WORD_PATTERN = r"\w+"
# Word characters restricted to ASCII letters, digits and underscore.
ASCII_WORD_PATTERN = r"[A-Za-z0-9_]+"


@dataclass
class Token:
    """Represents a token emitted by analyzers."""

    text: str
    position: int
    start_char: int
    end_char: int

    def copy_with(self, **updates: object) -> Token:
        data = {
            "text": self.text,
            "position": self.position,
            "start_char": self.start_char,
            "end_char": self.end_char,
        }
        data.update(updates)
        return Token(**data)


class TextSource(Protocol):
    """Anything that can hand out text in chunks (``io.StringIO``, text files)."""

    def read(self, size: int = -1, /) -> str:  # pragma: no cover - interface definition
        ...


class Analyzer(Protocol):
    """Protocol implemented by analyzers."""

    def __call__(self, text: str) -> list[Token]:  # pragma: no cover - interface definition
        ...


class Tokenizer(Protocol):
    """Protocol implemented by tokenizers."""

    def __call__(self, text: str) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class TokenFilter(Protocol):
    """Protocol implemented by token filters."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class RegexTokenizer:
    """Regex-based tokenizer that yields word tokens.

    Anything outside the pattern is a delimiter, so runs of punctuation and
    whitespace never produce empty tokens.
    """

    def __init__(self, pattern: str = WORD_PATTERN, flags: int = re.UNICODE) -> None:
        self.pattern = re.compile(pattern, flags)

    def __call__(self, text: str) -> Iterator[Token]:
        for position, match in enumerate(self.pattern.finditer(text)):
            yield Token(
                text=match.group(0),
                position=position,
                start_char=match.start(),
                end_char=match.end(),
            )


class LowercaseFilter:
    """Filter that lowercases token text."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.text.islower():
                yield token
            else:
                yield token.copy_with(text=token.text.lower())


class AnalyzerPipeline:
    """Composable analyzer pipeline (tokenizer + filters)."""

    def __init__(self, tokenizer: Tokenizer, filters: Sequence[TokenFilter] | None = None) -> None:
        self.tokenizer = tokenizer
        self.filters = list(filters or [])

    def stream(self, text: str) -> Iterator[Token]:
        tokens: Iterable[Token] = self.tokenizer(text)
        for token_filter in self.filters:
            tokens = token_filter(tokens)
        yield from tokens

    def __call__(self, text: str) -> list[Token]:
        return list(self.stream(text))


class StandardAnalyzer:
    """Default analyzer: word runs, lowercased. No stopwords, no stemming."""

    def __init__(self, pattern: str = WORD_PATTERN) -> None:
        self.pipeline = AnalyzerPipeline(RegexTokenizer(pattern), [LowercaseFilter()])

    def __call__(self, text: str) -> list[Token]:
        return self.pipeline(text)


class StreamTokenizer:
    """Lazily turn a text source into lowercase tokens.

    The source is consumed in ``chunk_size`` reads, once. Text after the last
    delimiter of a chunk is held back until a later chunk delimits it, so a
    word split across reads still comes out as one token. Token positions and
    character offsets count from the start of the stream. Read errors from the
    source propagate untouched.
    """

    def __init__(self, analyzer: Analyzer | None = None, *, chunk_size: int = 8192) -> None:
        if chunk_size < 1:
            raise ValueError("chunk_size must be >= 1")
        self.analyzer = analyzer or StandardAnalyzer()
        self.chunk_size = chunk_size
        self._word_char = re.compile(r"\w", re.UNICODE)

    def tokens(self, source: TextSource) -> Iterator[Token]:
        held: list[str] = []
        offset = 0
        position = 0
        while True:
            chunk = source.read(self.chunk_size)
            if not chunk:
                break
            cut = self._delimiter_end(chunk)
            if not cut:
                held.append(chunk)
                continue
            held.append(chunk[:cut])
            text = "".join(held)
            shifted = self._analyze(text, offset, position)
            yield from shifted
            offset += len(text)
            position += len(shifted)
            held = [chunk[cut:]]
        text = "".join(held)
        if text:
            yield from self._analyze(text, offset, position)

    def terms(self, source: TextSource) -> Iterator[str]:
        for token in self.tokens(source):
            yield token.text

    def __call__(self, source: TextSource) -> Iterator[str]:
        return self.terms(source)

    def _delimiter_end(self, chunk: str) -> int:
        """Offset just past the last non-word character of ``chunk``, or 0 if it has none."""

        for index in range(len(chunk) - 1, -1, -1):
            if not self._word_char.match(chunk, index):
                return index + 1
        return 0

    def _analyze(self, text: str, offset: int, position: int) -> list[Token]:
        return [
            token.copy_with(
                position=position + token.position,
                start_char=offset + token.start_char,
                end_char=offset + token.end_char,
            )
            for token in self.analyzer(text)
        ]


def normalize_term(term: str) -> str:
    """Normalize a query term the same way ingested terms are normalized."""

    return term.lower()


_ANALYZER_FACTORIES: dict[str, Callable[[], Analyzer]] = {
    "default": lambda: StandardAnalyzer(),
    "standard": lambda: StandardAnalyzer(),
    "ascii": lambda: StandardAnalyzer(ASCII_WORD_PATTERN),
}


def available_analyzers() -> list[str]:
    return sorted(_ANALYZER_FACTORIES)


def get_analyzer(name: str | None) -> Analyzer:
    """Return analyzer by name, defaulting to the standard analyzer."""

    if name is None:
        return _ANALYZER_FACTORIES["default"]()
    normalized = name.lower()
    if normalized not in _ANALYZER_FACTORIES:
        msg = f"Unknown analyzer '{name}'. Available: {available_analyzers()}"
        raise ValueError(msg)
    return _ANALYZER_FACTORIES[normalized]()
