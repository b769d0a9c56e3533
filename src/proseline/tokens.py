"""Token stream over a rendered HTML byte stream.

The walker consumes a flat stream of start-tag, end-tag, text and comment
tokens terminated by exactly one END_OF_STREAM token. Tokenization is built on
the standard library's html.parser; character references in text and
attribute values are already decoded.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
tokenize() keeps all state local to the call.

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto
from html.parser import HTMLParser

from proseline.utils.logger import get_logger

logger = get_logger(__name__)


class TokenType(Enum):
    """Token types produced by tokenize()."""

    START_TAG = auto()
    END_TAG = auto()
    TEXT = auto()
    COMMENT = auto()
    END_OF_STREAM = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A token from the rendered stream.

    Attributes:
        type: Token type
        data: Lowercased tag name for tags, payload for text and comments
        attrs: Attribute (name, value) pairs of a start tag
        self_closing: Start tag written as ``<tag />``

    """

    type: TokenType
    data: str = ""
    attrs: tuple[tuple[str, str | None], ...] = ()
    self_closing: bool = False

    def attr(self, key: str) -> str:
        """Return the value of attribute ``key``, or "" when absent."""
        for name, value in self.attrs:
            if name == key:
                return value or ""
        return ""

    @property
    def classes(self) -> tuple[str, ...]:
        """Whitespace-separated entries of the class attribute."""
        return tuple(self.attr("class").split())


class _TokenCollector(HTMLParser):
    """HTMLParser that records callbacks as Token objects."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.tokens: list[Token] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self.tokens.append(Token(TokenType.START_TAG, tag, tuple(attrs)))

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self.tokens.append(Token(TokenType.START_TAG, tag, tuple(attrs), self_closing=True))

    def handle_endtag(self, tag: str) -> None:
        self.tokens.append(Token(TokenType.END_TAG, tag))

    def handle_data(self, data: str) -> None:
        self.tokens.append(Token(TokenType.TEXT, data))

    def handle_comment(self, data: str) -> None:
        self.tokens.append(Token(TokenType.COMMENT, data))


def decode_stream(stream: bytes) -> str:
    """Decode a rendered stream as UTF-8, stopping at the first invalid byte.

    Everything before the decode failure is returned; the rest of the stream
    is dropped.
    """
    try:
        return stream.decode("utf-8")
    except UnicodeDecodeError as e:
        logger.debug("rendered stream truncated at byte %d: %s", e.start, e.reason)
        return stream[: e.start].decode("utf-8")


def tokenize(stream: bytes) -> Iterator[Token]:
    """Tokenize a rendered HTML stream.

    Args:
        stream: Rendered HTML bytes (UTF-8)

    Yields:
        Tokens in document order, always ending with one END_OF_STREAM token

    """
    collector = _TokenCollector()
    try:
        collector.feed(decode_stream(stream))
        collector.close()
    except AssertionError as e:
        # html.parser rejects some malformed declarations (e.g. "<![x[")
        logger.debug("rendered stream malformed, stopping: %s", e)
    yield from collector.tokens
    yield Token(TokenType.END_OF_STREAM)
