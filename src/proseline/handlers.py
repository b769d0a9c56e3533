"""Downstream dispatch contract.

The walker hands every classified block to a BlockHandler. Deciding what to
report is the handler's job; proseline produces no diagnostics itself.

Example:
    from proseline import Extractor, Document
    from proseline.handlers import BlockCollector

    collector = BlockCollector()
    Extractor().lint(Document.from_path("README.md"), collector)
    for block in collector.blocks:
        print(block)

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from proseline.blocks import Block
    from proseline.document import Document
    from proseline.errors import ProselineError


@runtime_checkable
class BlockHandler(Protocol):
    """Protocol for consumers of dispatched blocks.

    Thread Safety:
        A handler is called from the thread running the lint pass. Handlers
        shared between concurrent passes must synchronize themselves.

    """

    def on_block(self, document: Document, block: Block) -> None:
        """Receive a heading or list-item block."""
        ...

    def on_prose(self, document: Document, context: str, block: Block) -> None:
        """Receive a prose block.

        Args:
            document: Document being linted
            context: Residual context buffer at the point the block started
            block: The prose block
        """
        ...

    def on_error(self, document: Document, error: ProselineError) -> None:
        """Receive the failure that aborted a pass. Called at most once per pass."""
        ...


@dataclass(slots=True)
class BlockCollector:
    """BlockHandler that records everything it receives, in dispatch order."""

    blocks: list[Block] = field(default_factory=list)
    contexts: list[str] = field(default_factory=list)
    errors: list[ProselineError] = field(default_factory=list)

    def on_block(self, document: Document, block: Block) -> None:
        self.blocks.append(block)

    def on_prose(self, document: Document, context: str, block: Block) -> None:
        self.blocks.append(block)
        self.contexts.append(context)

    def on_error(self, document: Document, error: ProselineError) -> None:
        self.errors.append(error)
