"""Context tracking: recover source line numbers for rendered text.

The tracker owns the normalized raw source and a forward-only cursor. The part
of the source after the cursor is the context buffer. Every fragment found in
the rendered stream is located in the buffer and consumed together with
everything before it, so the number of newlines consumed gives the line the
fragment started on.

This is a heuristic, not a source map. Renderers collapse whitespace, decode
entities and insert markup, so a fragment that cannot be found verbatim is
retried word by word and words that still cannot be found are skipped. A miss
only degrades the accuracy of later positions; it is never an error.

Example:
    >>> tracker = ContextTracker("# Title\\n\\nSome **bold** text.\\n")
    >>> tracker.consume("Title")
    (1, True)
    >>> tracker.consume("Some bold text.")
    (3, True)

Thread Safety:
    A tracker belongs to a single lint pass and must not be shared.

"""

from __future__ import annotations


class ContextTracker:
    """Shrinking context buffer over a normalized source.

    The buffer only ever shrinks, so the line numbers returned by consume()
    never decrease as long as fragments are consumed in document order.

    """

    __slots__ = ("_cursor", "_line_offset", "_newlines", "_source")

    def __init__(self, source: str, *, line_offset: int = 0) -> None:
        """Initialize the tracker.

        Args:
            source: Normalized raw source (see proseline.text.prep_text)
            line_offset: Added to every line number, for documents embedded
                in a larger file
        """
        self._source = source
        self._cursor = 0
        self._newlines = 0
        self._line_offset = line_offset

    @property
    def remaining(self) -> str:
        """The unconsumed part of the buffer."""
        return self._source[self._cursor :]

    @property
    def cursor(self) -> int:
        """Offset of the cursor in the normalized source."""
        return self._cursor

    def remaining_from(self, cursor: int) -> str:
        """The buffer as it was when the cursor stood at ``cursor``."""
        return self._source[cursor:]

    @property
    def line(self) -> int:
        """Line number at the cursor (1-indexed, offset applied)."""
        return self._newlines + 1 + self._line_offset

    @property
    def exhausted(self) -> bool:
        """True when nothing but whitespace is left to consume."""
        return not self._source[self._cursor :].strip()

    def substitute(self, fragment: str) -> int | None:
        """Consume ``fragment`` verbatim at or after the cursor.

        Returns:
            Line the fragment starts on, or None if it is not in the buffer
        """
        if not fragment:
            return None
        idx = self._source.find(fragment, self._cursor)
        if idx < 0:
            return None
        self._newlines += self._source.count("\n", self._cursor, idx)
        line = self.line
        end = idx + len(fragment)
        self._newlines += self._source.count("\n", idx, end)
        self._cursor = end
        return line

    def consume(self, fragment: str) -> tuple[int, bool]:
        """Locate and consume a fragment of rendered text.

        Each line of the fragment is looked up verbatim first; a line with no
        verbatim match is split on whitespace and each word is consumed on its
        own. Words that still cannot be found are skipped.

        Args:
            fragment: Normalized text from the rendered stream

        Returns:
            (line, found): the line of the first located piece, or the current
            line with found=False when nothing could be located

        """
        first: int | None = None
        for part in fragment.split("\n"):
            part = part.strip()
            if not part:
                continue
            line = self.substitute(part)
            if line is None:
                for word in part.split():
                    word_line = self.substitute(word)
                    if first is None and word_line is not None:
                        first = word_line
            elif first is None:
                first = line
        if first is None:
            return self.line, False
        return first, True
