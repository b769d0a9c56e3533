"""Fold attribute text into context consumption.

Image alt text and link targets appear in the source but the tokenizer never
emits them as text. Unless they are consumed from the context buffer at the
position they occupy in the source, later text can match inside them and
positions drift. The folder turns those attribute values into fragments for
the tracker. Folded fragments are bookkeeping only and are never dispatched.

Where a link's target sits relative to its text depends on the source syntax:

- HTML ``<a href="url">text</a>`` and AsciiDoc ``url[text]``: target first
- Markdown ``[text](url)`` and reStructuredText ``text <url>`_``: text first

so ``href`` is folded at the start tag for the former and at the end tag for
the latter.
"""

from __future__ import annotations

from collections.abc import Mapping

from proseline.text import collapse_whitespace
from proseline.tokens import Token

# Attributes that follow the element's text in text-first source syntaxes
_TRAILING_ATTRIBUTES = frozenset({"href"})


class AttributeFolder:
    """Synthesizes text updates from element attributes."""

    __slots__ = ("_deferred", "_folded", "_link_target_first")

    def __init__(
        self,
        folded: Mapping[str, tuple[str, ...]],
        *,
        link_target_first: bool = True,
    ) -> None:
        self._folded = folded
        self._link_target_first = link_target_first
        self._deferred: list[tuple[str, list[str], list[str]]] = []

    def on_start(self, token: Token, *, void: bool = False) -> list[str]:
        """Fragments to consume when ``token`` opens an element.

        Args:
            token: START_TAG token
            void: The element has no content or end tag, so nothing is deferred

        """
        keys = self._folded.get(token.data)
        if not keys:
            return []
        now: list[str] = []
        later: list[str] = []
        for key in keys:
            value = token.attr(key).strip()
            if not value or value.startswith("#"):
                continue
            if key in _TRAILING_ATTRIBUTES and not self._link_target_first and not void:
                later.append(value)
            else:
                now.append(value)
        if later:
            self._deferred.append((token.data, later, []))
        return now

    def on_text(self, text: str) -> None:
        """Record text seen inside elements with deferred attributes."""
        for _, _, seen in self._deferred:
            seen.append(text)

    def on_end(self, tag: str) -> list[str]:
        """Fragments deferred until the element named ``tag`` closes.

        A deferred value equal to the element's own text (an autolink such as
        ``<https://example.com>``) was already consumed as text and is dropped.
        """
        for i in range(len(self._deferred) - 1, -1, -1):
            if self._deferred[i][0] == tag:
                # unclosed elements nested inside ``tag`` close with it
                fragments = [
                    value
                    for _, values, seen in self._deferred[i:]
                    for value in values
                    if value != collapse_whitespace("".join(seen))
                ]
                del self._deferred[i:]
                return fragments
        return []

    def drain(self) -> list[str]:
        """Return and clear fragments of elements that were never closed."""
        fragments = [value for _, values, _ in self._deferred for value in values]
        self._deferred.clear()
        return fragments
