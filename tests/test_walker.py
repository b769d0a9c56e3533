"""Tests for token classification and block dispatch."""

from proseline.blocks import Block, BlockKind
from proseline.config import ExtractConfig
from proseline.context import ContextTracker
from proseline.document import Document
from proseline.handlers import BlockCollector
from proseline.text import prep_text
from proseline.tokens import Token, TokenType, tokenize
from proseline.walker import TokenWalker


def walk(
    html: str,
    source: str | None = None,
    *,
    config: ExtractConfig | None = None,
    link_target_first: bool = True,
    verbatim: bool = True,
) -> BlockCollector:
    """Walk ``html`` against ``source`` (the HTML itself by default)."""
    source = html if source is None else source
    document = Document.from_text(source, ".html")
    collector = BlockCollector()
    walker = TokenWalker(
        ContextTracker(prep_text(source)),
        collector,
        document,
        config=config or ExtractConfig(),
        link_target_first=link_target_first,
        verbatim=verbatim,
    )
    walker.walk(tokenize(html.encode()))
    return collector


def texts(collector: BlockCollector) -> list[str]:
    return [b.text for b in collector.blocks]


# =========================================================================
# Classification
# =========================================================================


class TestClassification:
    def test_headings(self) -> None:
        html = "".join(f"<h{n}>Level {n}</h{n}>\n" for n in range(1, 7))
        collector = walk(html)
        assert [b.kind for b in collector.blocks] == [BlockKind.HEADING] * 6
        assert [b.line for b in collector.blocks] == [1, 2, 3, 4, 5, 6]

    def test_list_items(self) -> None:
        collector = walk("<ul>\n<li>one</li>\n<li>two</li>\n</ul>\n")
        assert collector.blocks == [
            Block("one", 2, BlockKind.LIST, "text.list.html"),
            Block("two", 3, BlockKind.LIST, "text.list.html"),
        ]

    def test_prose(self) -> None:
        collector = walk("<p>Plain words.</p>")
        assert collector.blocks == [Block("Plain words.", 1, BlockKind.PROSE, "text.html")]

    def test_bare_text_is_prose(self) -> None:
        collector = walk("Just text")
        assert collector.blocks[0].kind is BlockKind.PROSE

    def test_paragraph_inside_list_item_is_list(self) -> None:
        collector = walk("<ul><li><p>item text</p></li></ul>")
        assert collector.blocks[0].kind is BlockKind.LIST

    def test_nested_list_items_split(self) -> None:
        collector = walk("<ul><li>outer<ul><li>inner</li></ul></li></ul>")
        assert texts(collector) == ["outer", "inner"]
        assert all(b.kind is BlockKind.LIST for b in collector.blocks)

    def test_heading_pattern_configurable(self) -> None:
        config = ExtractConfig(heading_pattern=r"^h[12]$")
        collector = walk("<h1>Big</h1><h3>Small</h3>", config=config)
        assert [b.kind for b in collector.blocks] == [BlockKind.HEADING, BlockKind.PROSE]

    def test_table_cells_are_separate_blocks(self) -> None:
        collector = walk("<table><tr><th>Name</th><td>Value</td></tr></table>")
        assert texts(collector) == ["Name", "Value"]


# =========================================================================
# Inline aggregation
# =========================================================================


class TestInlineAggregation:
    def test_inline_markup_joined(self) -> None:
        collector = walk("<p>Some <strong>bold</strong> text.</p>")
        assert texts(collector) == ["Some bold text."]

    def test_whitespace_between_inline_elements(self) -> None:
        collector = walk("<p><em>a</em> <em>b</em></p>")
        assert texts(collector) == ["a b"]

    def test_newlines_collapsed(self) -> None:
        collector = walk("<p>A long\n  wrapped line</p>")
        assert texts(collector) == ["A long wrapped line"]

    def test_line_is_first_fragment(self) -> None:
        collector = walk("\n\n<p>start\nmiddle\nend</p>")
        assert collector.blocks[0].line == 3

    def test_block_boundary_flushes(self) -> None:
        collector = walk("<div>first<div>second</div>third</div>")
        assert texts(collector) == ["first", "second", "third"]

    def test_whitespace_only_dispatches_nothing(self) -> None:
        assert walk("<p>  \n </p><div>\n</div>").blocks == []


# =========================================================================
# Skip regions
# =========================================================================


class TestSkip:
    def test_code_block_not_dispatched(self) -> None:
        collector = walk("<p>Before</p>\n<pre><code>x = 1\n</code></pre>\n<p>After</p>\n")
        assert texts(collector) == ["Before", "After"]
        assert [b.line for b in collector.blocks] == [1, 4]

    def test_inline_code_dropped_from_prose(self) -> None:
        collector = walk("<p>Use <code>frobnicate()</code> here.</p>")
        assert texts(collector) == ["Use here."]

    def test_skip_text_still_consumed(self) -> None:
        """Code text is consumed, so a later repeat resolves to its own line."""
        source = "<p>intro</p>\n<pre>needle</pre>\n<p>needle</p>\n"
        collector = walk(source)
        assert collector.blocks == [
            Block("intro", 1, BlockKind.PROSE, "text.html"),
            Block("needle", 3, BlockKind.PROSE, "text.html"),
        ]

    def test_script_and_style(self) -> None:
        collector = walk("<script>var x;</script><style>p {}</style><p>visible</p>")
        assert texts(collector) == ["visible"]

    def test_skip_class(self) -> None:
        config = ExtractConfig(skip_classes=frozenset({"nolint"}))
        collector = walk('<div class="note nolint">hidden</div><p>shown</p>', config=config)
        assert texts(collector) == ["shown"]

    def test_nested_skip_region(self) -> None:
        """Closing an inner skip element does not end the outer one."""
        collector = walk("<pre><code>x</code> tail</pre><p>after</p>")
        assert texts(collector) == ["after"]

    def test_skip_ends_at_close(self) -> None:
        collector = walk("<p>Use <code>x</code> then <tt>y</tt> done</p>")
        assert texts(collector) == ["Use then done"]


# =========================================================================
# Rendered-only content
# =========================================================================


class TestIgnore:
    def test_head_not_dispatched(self) -> None:
        html = "<html><head><title>Guide</title></head>\n<body>\n<h1>Guide</h1>\n</body></html>"
        collector = walk(html, "Guide\n=====\n", verbatim=False)
        assert collector.blocks == [Block("Guide", 1, BlockKind.HEADING, "text.heading.html")]

    def test_head_consumed_when_stream_is_source(self) -> None:
        html = "<html><head><title>Guide</title></head>\n<body>\n<h1>Guide</h1>\n</body></html>"
        collector = walk(html, verbatim=True)
        assert collector.blocks == [Block("Guide", 3, BlockKind.HEADING, "text.heading.html")]


# =========================================================================
# Attribute folding
# =========================================================================


class TestAttributeFolding:
    def test_alt_text_never_dispatched(self) -> None:
        collector = walk('<p><img src="x.png" alt="A diagram" /></p><p>Caption</p>')
        assert texts(collector) == ["Caption"]

    def test_alt_text_consumed(self) -> None:
        collector = walk('<p><img src="x.png" alt="Note" /></p>\n<p>Note</p>\n')
        assert collector.blocks == [Block("Note", 2, BlockKind.PROSE, "text.html")]

    def test_href_never_dispatched(self) -> None:
        collector = walk('<p>See <a href="https://example.com">the docs</a>.</p>')
        assert texts(collector) == ["See the docs."]

    def test_href_consumed(self) -> None:
        html = '<p><a href="intro">link</a></p>\n<p>intro</p>\n'
        assert walk(html).blocks[-1].line == 2

    def test_deferred_href_consumed_after_text(self) -> None:
        source = "[intro](guide)\n\nguide\n"
        html = '<p><a href="guide">intro</a></p>\n<p>guide</p>\n'
        collector = walk(html, source, link_target_first=False, verbatim=False)
        assert [b.line for b in collector.blocks] == [1, 3]

    def test_autolink_target_not_consumed_twice(self) -> None:
        source = "See <https://x.org>.\n\nMore text.\n\nLater https://x.org again.\n"
        html = (
            '<p>See <a href="https://x.org">https://x.org</a>.</p>\n'
            "<p>More text.</p>\n<p>Later https://x.org again.</p>\n"
        )
        collector = walk(html, source, link_target_first=False, verbatim=False)
        assert [b.line for b in collector.blocks] == [1, 3, 5]


# =========================================================================
# Dispatch and termination
# =========================================================================


class TestDispatch:
    def test_prose_receives_residual_context(self) -> None:
        collector = walk("<h1>Title</h1>\n<p>Body text</p>\n")
        assert collector.contexts == ["</h1>\n<p>Body text</p>\n"]

    def test_context_per_prose_block(self) -> None:
        collector = walk("<p>First</p>\n<p>Second</p>\n")
        assert collector.contexts == [
            "<p>First</p>\n<p>Second</p>\n",
            "</p>\n<p>Second</p>\n",
        ]

    def test_walk_returns_count(self) -> None:
        source = "<h1>a</h1><p>b</p><ul><li>c</li></ul>"
        document = Document.from_text(source, ".html")
        walker = TokenWalker(ContextTracker(source), BlockCollector(), document, config=ExtractConfig())
        assert walker.walk(tokenize(source.encode())) == 3
        assert walker.dispatched == 3

    def test_stops_at_end_of_stream(self) -> None:
        tokens = [
            Token(TokenType.START_TAG, "p"),
            Token(TokenType.TEXT, "kept"),
            Token(TokenType.END_OF_STREAM),
            Token(TokenType.TEXT, "dropped"),
        ]
        collector = BlockCollector()
        document = Document.from_text("kept dropped", ".html")
        TokenWalker(ContextTracker("kept dropped"), collector, document).walk(tokens)
        assert texts(collector) == ["kept"]

    def test_truncated_stream_keeps_earlier_blocks(self) -> None:
        source = "<p>first</p><p>second</p>"
        document = Document.from_text(source, ".html")
        collector = BlockCollector()
        stream = b"<p>first</p>\xff<p>second</p>"
        TokenWalker(ContextTracker(source), collector, document).walk(tokenize(stream))
        assert texts(collector) == ["first"]

    def test_unclosed_block_flushed_at_end(self) -> None:
        assert texts(walk("<p>never closed")) == ["never closed"]

    def test_unmatched_end_tag_ignored(self) -> None:
        collector = walk("<h2>Title</span></h2><p>body</p>")
        assert [b.kind for b in collector.blocks] == [BlockKind.HEADING, BlockKind.PROSE]

    def test_line_numbers_non_decreasing(self) -> None:
        html = "<h1>A</h1>\n<p>b c</p>\n<ul><li>d</li>\n<li>e</li></ul>\n<p>f</p>\n"
        lines = [b.line for b in walk(html).blocks]
        assert lines == sorted(lines)
