"""Block: a classified, position-tagged text unit.

Blocks are produced on demand by the walker and handed to a BlockHandler.
The core never retains them.

Thread Safety:
Block is frozen (immutable) and safe to share across threads.
BlockKind is an enum (inherently immutable).

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class BlockKind(Enum):
    """Classification of dispatched text."""

    HEADING = "heading"
    LIST = "list"
    PROSE = "prose"

    def scope(self, ext: str) -> str:
        """Rule-selection scope for this kind in a document with ``ext``.

        Examples:
            >>> BlockKind.HEADING.scope(".md")
            'text.heading.md'
            >>> BlockKind.PROSE.scope(".rst")
            'text.rst'
        """
        if self is BlockKind.PROSE:
            return f"text{ext}"
        return f"text.{self.value}{ext}"


@dataclass(frozen=True, slots=True)
class Block:
    """A dispatch-ready unit of text.

    Attributes:
        text: Plain text with whitespace collapsed
        line: 1-indexed line in the original source (best effort)
        kind: Heading, list item or prose
        scope: Rule-selection scope, e.g. "text.heading.md"

    """

    text: str
    line: int
    kind: BlockKind
    scope: str = ""

    def __str__(self) -> str:
        return f"{self.line}: [{self.kind.value}] {self.text}"
