"""HTML adapter: the rendered stream is the document itself."""

from __future__ import annotations

from proseline.formats import Format


class HtmlAdapter:
    """Pass-through adapter for HTML documents."""

    __slots__ = ()

    format = Format.HTML
    link_target_first = True
    verbatim = True

    def render(self, raw: bytes) -> bytes:
        return raw
