"""Token walker: classify rendered text and dispatch blocks.

The walker reads tokens from a rendered HTML stream and keeps a stack of open
elements, each tagged with a Frame. A text token is classified from the
stack:

1. inside an IGNORE frame (the <head> of standalone renderer output):
   neither tracked nor dispatched, unless the stream is the source itself
2. inside a SKIP frame (code, pre, script, ...): tracked, never dispatched
3. innermost HEADING frame: heading; innermost LIST_ITEM frame: list item
4. anything else: prose

Inline elements (``strong``, ``a``, ``code``, ...) do not end a block, so
``Some <strong>bold</strong> text.`` dispatches once as "Some bold text.".
Every other tag boundary flushes the pending block.

Every tracked text token is consumed from the context buffer as it is seen,
in stream order, so positions stay aligned even for text that is never
dispatched.

Thread Safety:
    A walker belongs to a single lint pass and must not be shared.

"""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import Enum, auto

from proseline.attributes import AttributeFolder
from proseline.blocks import Block, BlockKind
from proseline.config import ExtractConfig, get_extract_config
from proseline.context import ContextTracker
from proseline.document import Document
from proseline.handlers import BlockHandler
from proseline.text import collapse_whitespace, prep_text
from proseline.tokens import Token, TokenType

VOID_TAGS = frozenset(
    {
        "area", "base", "br", "col", "embed", "hr", "img", "input", "link",
        "meta", "param", "source", "track", "wbr",
    }
)


class Frame(Enum):
    """Classification of an open element."""

    NORMAL = auto()
    SKIP = auto()
    IGNORE = auto()
    HEADING = auto()
    LIST_ITEM = auto()


class TokenWalker:
    """Walks one rendered stream and dispatches classified blocks.

    Usage:
        >>> tracker = ContextTracker(prep_text(source))
        >>> walker = TokenWalker(tracker, handler, document)
        >>> walker.walk(tokenize(stream))
        2

    """

    __slots__ = (
        "_config",
        "_dispatched",
        "_document",
        "_folder",
        "_frames",
        "_handler",
        "_heading",
        "_ignore",
        "_pending",
        "_pending_cursor",
        "_pending_kind",
        "_pending_line",
        "_tracker",
    )

    def __init__(
        self,
        tracker: ContextTracker,
        handler: BlockHandler,
        document: Document,
        *,
        config: ExtractConfig | None = None,
        link_target_first: bool = True,
        verbatim: bool = False,
    ) -> None:
        """Initialize the walker.

        Args:
            tracker: Context tracker seeded from the document's raw source
            handler: Receiver of dispatched blocks
            document: Document being walked (passed through to the handler)
            config: Extraction config (uses the ambient config if None)
            link_target_first: The source syntax writes link targets before
                link text (see AttributeFolder)
            verbatim: The stream is the source itself; IGNORE frames are
                tracked like SKIP frames
        """
        self._config = config or get_extract_config()
        self._tracker = tracker
        self._handler = handler
        self._document = document
        self._heading = re.compile(self._config.heading_pattern)
        self._ignore = not verbatim
        self._folder = AttributeFolder(
            self._config.folded_attributes, link_target_first=link_target_first
        )
        self._frames: list[tuple[str, Frame]] = []
        self._pending: list[str] = []
        self._pending_kind = BlockKind.PROSE
        self._pending_line: int | None = None
        self._pending_cursor = 0
        self._dispatched = 0

    @property
    def dispatched(self) -> int:
        """Number of blocks dispatched so far."""
        return self._dispatched

    def walk(self, tokens: Iterable[Token]) -> int:
        """Walk tokens until END_OF_STREAM (or until the iterable ends).

        Returns:
            Number of blocks dispatched
        """
        for token in tokens:
            if token.type is TokenType.END_OF_STREAM:
                break
            if token.type is TokenType.START_TAG:
                self._start(token)
            elif token.type is TokenType.END_TAG:
                self._end(token.data)
            elif token.type is TokenType.TEXT:
                self._text(token.data)
            elif token.type is TokenType.COMMENT and not self._ignoring():
                self._tracker.consume(prep_text(token.data))
        self._flush()
        for fragment in self._folder.drain():
            self._tracker.consume(prep_text(fragment))
        return self._dispatched

    # =========================================================================
    # Element boundaries
    # =========================================================================

    def _classify(self, token: Token) -> Frame:
        tag = token.data
        if tag in self._config.ignore_tags:
            return Frame.IGNORE
        if tag in self._config.skip_tags or not self._config.skip_classes.isdisjoint(
            token.classes
        ):
            return Frame.SKIP
        if self._heading.match(tag):
            return Frame.HEADING
        if tag in self._config.list_tags:
            return Frame.LIST_ITEM
        return Frame.NORMAL

    def _start(self, token: Token) -> None:
        tag = token.data
        if tag not in self._config.inline_tags:
            self._flush()
        void = token.self_closing or tag in VOID_TAGS
        if not self._ignoring():
            for fragment in self._folder.on_start(token, void=void):
                self._tracker.consume(prep_text(fragment))
        if not void:
            self._frames.append((tag, self._classify(token)))

    def _end(self, tag: str) -> None:
        if tag not in self._config.inline_tags:
            self._flush()
        for i in range(len(self._frames) - 1, -1, -1):
            if self._frames[i][0] == tag:
                del self._frames[i:]
                break
        else:
            return
        if not self._ignoring():
            for fragment in self._folder.on_end(tag):
                self._tracker.consume(prep_text(fragment))

    def _ignoring(self) -> bool:
        return self._ignore and any(frame is Frame.IGNORE for _, frame in self._frames)

    # =========================================================================
    # Text
    # =========================================================================

    def _text(self, data: str) -> None:
        frames = [frame for _, frame in self._frames]
        if Frame.IGNORE in frames and self._ignore:
            return
        text = prep_text(data)
        skipping = Frame.SKIP in frames or Frame.IGNORE in frames
        if not text.strip():
            if self._pending and not skipping:
                self._pending.append(" ")
            return

        cursor = self._tracker.cursor
        line, found = self._tracker.consume(text)
        self._folder.on_text(text)
        if skipping:
            return

        if not self._pending:
            self._pending_kind = self._kind(frames)
            self._pending_cursor = cursor
            self._pending_line = None
        if found and self._pending_line is None:
            self._pending_line = line
        self._pending.append(text)

    @staticmethod
    def _kind(frames: list[Frame]) -> BlockKind:
        for frame in reversed(frames):
            if frame is Frame.HEADING:
                return BlockKind.HEADING
            if frame is Frame.LIST_ITEM:
                return BlockKind.LIST
        return BlockKind.PROSE

    def _flush(self) -> None:
        if not self._pending:
            return
        text = collapse_whitespace("".join(self._pending))
        self._pending = []
        if not text:
            return
        line = self._pending_line if self._pending_line is not None else self._tracker.line
        kind = self._pending_kind
        block = Block(text=text, line=line, kind=kind, scope=kind.scope(self._document.ext))
        self._dispatched += 1
        if kind is BlockKind.PROSE:
            context = self._tracker.remaining_from(self._pending_cursor)
            self._handler.on_prose(self._document, context, block)
        else:
            self._handler.on_block(self._document, block)
