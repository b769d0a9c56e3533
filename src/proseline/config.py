"""ContextVar-based extraction configuration for proseline.

Renderer flags and the skip-tag / skip-class lists are held in an immutable
ExtractConfig. Every adapter, walker and extractor accepts one explicitly at
construction; when none is passed, the ambient config for the current context
is used.

Thread Safety:
    ContextVars are thread-local. Each thread has independent storage,
    so no locks are needed and overrides never leak between lint passes.

Usage:
    # Explicit, per extractor
    extractor = Extractor(config=ExtractConfig(skip_classes=frozenset({"nolint"})))

    # Ambient, for the current context only
    with extract_config_context(ExtractConfig(rst_command=("python3", "rst2html.py"))):
        extractor = Extractor()

"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from proseline.formats import DEFAULT_EXTENSIONS, Format, normalize_extension

RST_ARGS: tuple[str, ...] = (
    "--quiet",
    "--halt=5",
    "--link-stylesheet",
    "--no-file-insertion",
    "--no-toc-backlinks",
    "--no-footnote-backlinks",
    "--no-section-numbering",
)

# "-" reads the document from stdin; secure safe mode disables include::
ASCIIDOC_ARGS: tuple[str, ...] = (
    "--no-header-footer",
    "--quiet",
    "--safe-mode",
    "secure",
    "-",
)

INLINE_TAGS: frozenset[str] = frozenset(
    {
        "a", "abbr", "acronym", "b", "bdi", "bdo", "big", "br", "cite", "code",
        "data", "del", "dfn", "em", "font", "i", "img", "ins", "kbd", "mark",
        "q", "s", "samp", "small", "span", "strike", "strong", "sub", "sup",
        "time", "tt", "u", "var", "wbr",
    }
)

_FROZENSET_FIELDS = ("skip_tags", "skip_classes", "ignore_tags", "list_tags", "inline_tags")
_TUPLE_FIELDS = (
    "markdown_plugins",
    "rst_command",
    "rst_args",
    "asciidoc_command",
    "asciidoc_args",
)


@dataclass(frozen=True, slots=True)
class ExtractConfig:
    """Immutable extraction configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).
    Mapping fields are wrapped in read-only proxies.

    Note: the line offset of an embedded document is per-call state, not
    configuration. It is passed to Extractor.extract() directly.

    Attributes:
        skip_tags: Elements whose text is tracked but never dispatched
        skip_classes: Class names that turn any element into a skip region
        ignore_tags: Rendered-only elements whose text is neither tracked
            nor dispatched (the document head of standalone renderers)
        heading_pattern: Regex matched against tag names to find headings
        list_tags: Elements whose text dispatches as list items
        inline_tags: Elements that do not end the current block
        folded_attributes: Per-element attributes whose values are folded
            into context consumption
        markdown_plugins: mistune plugins enabled for Markdown rendering
        rst_command: Command prefix that runs rst2html
        rst_args: Fixed flags passed to rst2html
        asciidoc_command: Command prefix that runs Asciidoctor
        asciidoc_args: Fixed flags passed to Asciidoctor
        extensions: File extension to Format table

    """

    skip_tags: frozenset[str] = frozenset({"script", "style", "pre", "code", "tt"})
    skip_classes: frozenset[str] = frozenset()
    ignore_tags: frozenset[str] = frozenset({"head"})
    heading_pattern: str = r"^h\d$"
    list_tags: frozenset[str] = frozenset({"li"})
    inline_tags: frozenset[str] = INLINE_TAGS
    folded_attributes: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: {"img": ("alt",), "a": ("href",)}, hash=False
    )
    markdown_plugins: tuple[str, ...] = ("table",)
    rst_command: tuple[str, ...] = ("rst2html",)
    rst_args: tuple[str, ...] = RST_ARGS
    asciidoc_command: tuple[str, ...] = ("asciidoctor",)
    asciidoc_args: tuple[str, ...] = ASCIIDOC_ARGS
    extensions: Mapping[str, Format] = field(default_factory=lambda: DEFAULT_EXTENSIONS, hash=False)

    def __post_init__(self) -> None:
        # Mapping fields are stored read-only; mappings are excluded from the hash
        object.__setattr__(
            self,
            "folded_attributes",
            MappingProxyType({tag: tuple(attrs) for tag, attrs in self.folded_attributes.items()}),
        )
        object.__setattr__(self, "extensions", MappingProxyType(dict(self.extensions)))

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> ExtractConfig:
        """Create ExtractConfig from a dictionary.

        Useful when configuration comes from YAML or INI files. Only keys that
        are ExtractConfig fields are used; unknown keys are silently ignored.
        Lists are coerced to the field's collection type, and ``extensions``
        may map extensions to Format values or their string names.

        Example:
            >>> config = ExtractConfig.from_dict({
            ...     "skip_classes": ["nolint"],
            ...     "extensions": {"mdx": "markdown"},
            ... })
            >>> config.skip_classes
            frozenset({'nolint'})

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered: dict[str, Any] = {}
        for key, value in config_dict.items():
            if key not in valid_fields:
                continue
            if key in _FROZENSET_FIELDS:
                value = frozenset(value)
            elif key in _TUPLE_FIELDS:
                value = (value,) if isinstance(value, str) else tuple(value)
            elif key == "folded_attributes":
                value = {tag: tuple(attrs) for tag, attrs in value.items()}
            elif key == "extensions":
                value = _merge_extensions(value)
            filtered[key] = value
        return cls(**filtered)


def _merge_extensions(overrides: Mapping[str, Format | str]) -> dict[str, Format]:
    """Layer extension overrides on top of the default table."""
    merged = dict(DEFAULT_EXTENSIONS)
    for ext, fmt in overrides.items():
        merged[normalize_extension(ext)] = fmt if isinstance(fmt, Format) else Format(fmt)
    return merged


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ExtractConfig = ExtractConfig()

_extract_config: ContextVar[ExtractConfig] = ContextVar(
    "extract_config",
    default=_DEFAULT_CONFIG,
)


def get_extract_config() -> ExtractConfig:
    """Get the current extraction configuration (thread-local)."""
    return _extract_config.get()


def set_extract_config(config: ExtractConfig) -> None:
    """Set extraction configuration for the current context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _extract_config.set(config)


def reset_extract_config() -> None:
    """Reset to the module-level default configuration."""
    _extract_config.set(_DEFAULT_CONFIG)


@contextmanager
def extract_config_context(config: ExtractConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Properly restores the previous config even if an exception is raised.

    Example:
        >>> with extract_config_context(ExtractConfig(skip_tags=frozenset())):
        ...     blocks = extract_blocks("Use `code` here")

    """
    previous = _extract_config.get()
    _extract_config.set(config)
    try:
        yield
    finally:
        _extract_config.set(previous)


__all__ = [
    "ASCIIDOC_ARGS",
    "ExtractConfig",
    "INLINE_TAGS",
    "RST_ARGS",
    "extract_config_context",
    "get_extract_config",
    "reset_extract_config",
    "set_extract_config",
]
