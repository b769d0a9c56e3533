"""Markdown adapter backed by mistune.

Feature set is fixed per config: GFM tables (the "table" plugin by default),
fenced code blocks (core syntax), raw HTML passed through unescaped,
XHTML-style void tags (``<br />``, ``<hr />``, ``<img ... />``), and no
intra-word emphasis: ``foo*bar*baz`` and ``2*3*4`` render literally.
"""

from __future__ import annotations

import re

import mistune
from mistune.plugins import import_plugin

from proseline.config import ExtractConfig, get_extract_config
from proseline.formats import Format
from proseline.text import decode_source


class WordBoundInlineParser(mistune.InlineParser):
    """InlineParser that never opens or closes emphasis inside a word.

    A ``*`` or ``_`` delimiter run with an alphanumeric character directly on
    both sides is emitted as literal text and excluded from emphasis matching.
    """

    def parse_emphasis(self, m: re.Match[str], state: mistune.InlineState) -> int:
        src = state.src
        start, end = m.start(), m.end()
        before = src[start - 1] if start > 0 else ""
        after = src[end] if end < len(src) else ""
        if before.isalnum() and after.isalnum():
            state.append_token({"type": "text", "raw": m.group(0), "_emphasis": False})
            return end
        return super().parse_emphasis(m, state)


def create_markdown(config: ExtractConfig) -> mistune.Markdown:
    """Build the mistune pipeline used for one adapter."""
    return mistune.Markdown(
        renderer=mistune.HTMLRenderer(escape=False),
        inline=WordBoundInlineParser(hard_wrap=False),
        plugins=[import_plugin(name) for name in config.markdown_plugins],
    )


class MarkdownAdapter:
    """Renders Markdown in process.

    Thread Safety:
        A mistune Markdown instance keeps per-call state, so each adapter
        builds its own and adapters are created per lint pass.

    """

    __slots__ = ("_markdown",)

    format = Format.MARKDOWN
    link_target_first = False
    verbatim = False

    def __init__(self, *, config: ExtractConfig | None = None) -> None:
        self._markdown = create_markdown(config or get_extract_config())

    def render(self, raw: bytes) -> bytes:
        html = self._markdown(decode_source(raw))
        return str(html).encode("utf-8")
