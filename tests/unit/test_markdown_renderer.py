#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_markdown_renderer.py
"""Unit tests for the Markdown renderer."""

import io

import pytest

from cmark_translate.ast.nodes import (
    BlockQuote,
    Code,
    CodeBlock,
    DefinitionDescription,
    DefinitionItem,
    DefinitionList,
    DefinitionTerm,
    Document,
    Emphasis,
    FootnoteDefinition,
    FootnoteReference,
    FrontMatter,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Paragraph,
    SoftBreak,
    Strikethrough,
    Strong,
    Superscript,
    Table,
    TableCell,
    TableRow,
    TaskItem,
    Text,
    ThematicBreak,
)
from cmark_translate.exceptions import InvalidOptionsError
from cmark_translate.options import MarkdownRendererOptions
from cmark_translate.parsers.markdown import markdown_to_ast
from cmark_translate.renderers.markdown import MarkdownRenderer, ast_to_markdown


def para(*children) -> Paragraph:
    return Paragraph(children=list(children))


def render(*blocks, options=None) -> str:
    return ast_to_markdown(Document(children=list(blocks)), options)


@pytest.mark.unit
class TestBlocks:
    """Tests for rendering block nodes."""

    def test_empty_document(self):
        assert render() == ""

    @pytest.mark.parametrize("level", range(1, 7))
    def test_headings_are_atx(self, level):
        assert render(Heading(level=level, children=[Text(content="Title")])) == "#" * level + " Title\n"

    def test_blocks_are_separated_by_blank_lines(self):
        assert render(para(Text(content="a")), ThematicBreak(), para(Text(content="b"))) == "a\n\n---\n\nb\n"

    def test_front_matter_is_verbatim(self):
        result = render(FrontMatter(content='+++\ntitle = "A"\n+++\n'), para(Text(content="body")))
        assert result == '+++\ntitle = "A"\n+++\n\nbody\n'

    def test_block_quote_prefixes_every_line(self):
        quote = BlockQuote(children=[para(Text(content="a")), para(Text(content="b"))])
        assert render(quote) == "> a\n>\n> b\n"

    def test_code_block_is_fenced(self):
        assert render(CodeBlock(literal="x = 1\n", info="python")) == "```python\nx = 1\n```\n"

    def test_code_block_without_trailing_newline(self):
        assert render(CodeBlock(literal="x = 1")) == "```\nx = 1\n```\n"

    def test_fence_is_longer_than_backtick_runs(self):
        assert render(CodeBlock(literal="````\n")) == "`````\n````\n`````\n"

    def test_backtick_in_info_switches_to_tildes(self):
        assert render(CodeBlock(literal="a\n", info="x`y")) == "~~~x`y\na\n~~~\n"

    def test_tilde_fence_option(self):
        options = MarkdownRendererOptions(code_fence_char="~")
        assert render(CodeBlock(literal="a\n"), options=options) == "~~~\na\n~~~\n"

    def test_html_block_is_verbatim(self):
        assert render(HTMLBlock(literal="<div>\n*raw*\n</div>\n", block_type=6)) == "<div>\n*raw*\n</div>\n"

    def test_footnote_definition(self):
        note = FootnoteDefinition(name="1", children=[para(Text(content="Note")), para(Text(content="More"))])
        assert render(note) == "[^1]: Note\n\n    More\n"

    def test_definition_list(self):
        dl = DefinitionList(
            children=[
                DefinitionItem(
                    children=[
                        DefinitionTerm(children=[Text(content="Term")]),
                        DefinitionDescription(children=[para(Text(content="Details"))]),
                    ]
                )
            ]
        )
        assert render(dl) == "Term\n: Details\n"


@pytest.mark.unit
class TestLists:
    """Tests for rendering lists."""

    def test_tight_bullet_list(self):
        lst = List(children=[ListItem(children=[para(Text(content="one"))]), ListItem(children=[para(Text(content="two"))])])
        assert render(lst) == "- one\n- two\n"

    def test_loose_bullet_list(self):
        lst = List(
            tight=False,
            children=[
                ListItem(tight=False, children=[para(Text(content="one"))]),
                ListItem(tight=False, children=[para(Text(content="two"))]),
            ],
        )
        assert render(lst) == "- one\n\n- two\n"

    def test_bullet_char_is_used(self):
        lst = List(bullet_char="*", children=[ListItem(children=[para(Text(content="x"))])])
        assert render(lst) == "* x\n"

    def test_ordered_list_numbers_from_start(self):
        lst = List(
            list_type="ordered",
            start=3,
            delimiter="paren",
            padding=3,
            children=[
                ListItem(list_type="ordered", padding=3, children=[para(Text(content="three"))]),
                ListItem(list_type="ordered", padding=3, children=[para(Text(content="four"))]),
            ],
        )
        assert render(lst) == "3) three\n4) four\n"

    def test_nested_list_is_indented(self):
        inner = List(children=[ListItem(children=[para(Text(content="b"))])])
        outer = List(children=[ListItem(children=[para(Text(content="a")), inner])])
        assert render(outer) == "- a\n  - b\n"

    def test_marker_offset_indents_marker_and_content(self):
        item = ListItem(marker_offset=2, children=[para(Text(content="a")), para(Text(content="b"))])
        lst = List(marker_offset=2, tight=False, children=[item])
        assert render(lst) == "  - a\n\n    b\n"

    def test_marker_offset_is_capped(self):
        lst = List(marker_offset=7, children=[ListItem(marker_offset=7, children=[para(Text(content="x"))])])
        assert render(lst) == "   - x\n"

    def test_task_items(self):
        lst = List(
            children=[
                TaskItem(checked=True, children=[para(Text(content="done"))]),
                TaskItem(checked=False, children=[para(Text(content="todo"))]),
            ]
        )
        assert render(lst) == "- [x] done\n- [ ] todo\n"

    def test_empty_item(self):
        assert render(List(children=[ListItem()])) == "-\n"


@pytest.mark.unit
class TestTables:
    """Tests for rendering pipe tables."""

    def test_table_with_alignments(self):
        table = Table(
            alignments=["left", "right"],
            children=[
                TableRow(header=True, children=[TableCell(children=[Text(content="a")]), TableCell(children=[Text(content="b")])]),
                TableRow(children=[TableCell(children=[Text(content="1")]), TableCell(children=[Text(content="2")])]),
            ],
        )
        assert render(table) == "| a | b |\n| :--- | ---: |\n| 1 | 2 |\n"

    def test_short_rows_are_padded(self):
        table = Table(
            alignments=["none", "center"],
            children=[
                TableRow(header=True, children=[TableCell(children=[Text(content="a")]), TableCell(children=[Text(content="b")])]),
                TableRow(children=[TableCell(children=[Text(content="1")])]),
            ],
        )
        assert render(table) == "| a | b |\n| --- | :---: |\n| 1 |  |\n"

    def test_pipe_in_cell_is_escaped(self):
        table = Table(
            alignments=["none"],
            children=[TableRow(header=True, children=[TableCell(children=[Text(content="a|b")])])],
        )
        assert render(table).splitlines()[0] == "| a\\|b |"

    def test_empty_table_renders_nothing(self):
        assert render(Table()) == ""


@pytest.mark.unit
class TestInlines:
    """Tests for rendering inline nodes."""

    def test_emphasis_and_strong(self):
        result = render(para(Emphasis(children=[Text(content="a")]), Text(content=" "), Strong(children=[Text(content="b")])))
        assert result == "*a* **b**\n"

    def test_underscore_emphasis_option(self):
        options = MarkdownRendererOptions(emphasis_symbol="_")
        assert render(para(Emphasis(children=[Text(content="a")])), options=options) == "_a_\n"

    def test_strikethrough_and_superscript(self):
        result = render(para(Strikethrough(children=[Text(content="x")]), Superscript(children=[Text(content="2")])))
        assert result == "~~x~~^2^\n"

    def test_code_span(self):
        assert render(para(Code(literal="x = 1"))) == "`x = 1`\n"

    def test_code_span_with_backticks(self):
        assert render(para(Code(literal="a`b"))) == "``a`b``\n"
        assert render(para(Code(literal="`a"))) == "`` `a ``\n"

    def test_breaks(self):
        result = render(para(Text(content="a"), SoftBreak(), Text(content="b"), LineBreak(), Text(content="c")))
        assert result == "a\nb\\\nc\n"

    def test_link_with_title(self):
        link = Link(url="https://example.com", title='Say "hi"', children=[Text(content="site")])
        assert render(para(link)) == '[site](https://example.com "Say \\"hi\\"")\n'

    def test_link_destination_with_space(self):
        assert render(para(Link(url="a b.html", children=[Text(content="x")]))) == "[x](<a b.html>)\n"

    def test_empty_link_destination(self):
        assert render(para(Link(url="", children=[Text(content="x")]))) == "[x](<>)\n"

    def test_image(self):
        assert render(para(Image(url="a.png", children=[Text(content="alt")]))) == "![alt](a.png)\n"

    def test_inline_html_and_footnote_reference(self):
        result = render(para(HTMLInline(literal="<kbd>"), Text(content="k"), FootnoteReference(name="n")))
        assert result == "<kbd>k[^n]\n"


@pytest.mark.unit
class TestEscaping:
    """Tests for escaping text runs."""

    @pytest.mark.parametrize(
        "content,expected",
        [
            ("a*b", "a\\*b"),
            ("[x]", "\\[x\\]"),
            ("a\\b", "a\\\\b"),
            ("a<b", "a\\<b"),
            ("~x", "\\~x"),
            ("snake_case", "snake_case"),
            ("_lead", "\\_lead"),
            ("# not heading", "\\# not heading"),
            ("> not quote", "\\> not quote"),
            ("- not item", "\\- not item"),
            ("1. not item", "1\\. not item"),
            ("2) not item", "2\\) not item"),
            ("a - b # c", "a - b # c"),
            ("Tom & Jerry", "Tom & Jerry"),
            ("{{ shortcode }}", "{{ shortcode }}"),
            ("a|b", "a|b"),
        ],
    )
    def test_text_escaping(self, content, expected):
        assert render(para(Text(content=content))) == expected + "\n"

    def test_line_start_after_soft_break(self):
        assert render(para(Text(content="a"), SoftBreak(), Text(content="# b"))) == "a\n\\# b\n"

    def test_escaping_can_be_disabled(self):
        options = MarkdownRendererOptions(escape_special=False)
        assert render(para(Text(content="*raw*")), options=options) == "*raw*\n"

    @pytest.mark.parametrize("content", ["a*b", "[x]", "# h", "1. n", "a_b_", "x<y", "p\\q"])
    def test_escaped_text_parses_back(self, content):
        doc = Document(children=[para(Text(content=content))])
        assert markdown_to_ast(ast_to_markdown(doc)) == doc


@pytest.mark.unit
class TestRendererApi:
    """Tests for the renderer entry points and options."""

    def test_render_to_stream(self):
        buffer = io.StringIO()
        MarkdownRenderer().render(Document(children=[para(Text(content="x"))]), buffer)
        assert buffer.getvalue() == "x\n"

    def test_render_to_path(self, tmp_path):
        path = tmp_path / "out.md"
        MarkdownRenderer().render(Document(children=[para(Text(content="x"))]), path)
        assert path.read_text(encoding="utf-8") == "x\n"

    def test_renderer_is_reusable(self):
        renderer = MarkdownRenderer()
        doc = Document(children=[para(Text(content="x"))])
        assert renderer.render_to_string(doc) == renderer.render_to_string(doc)

    def test_wrong_options_type(self):
        with pytest.raises(InvalidOptionsError):
            MarkdownRenderer(options="bad")  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        "kwargs",
        [{"code_fence_char": "x"}, {"code_fence_min": 2}, {"emphasis_symbol": "+"}],
    )
    def test_invalid_options(self, kwargs):
        with pytest.raises(ValueError):
            MarkdownRendererOptions(**kwargs)

    def test_create_updated(self):
        options = MarkdownRendererOptions().create_updated(emphasis_symbol="_")
        assert options.emphasis_symbol == "_"
        assert options.code_fence_char == "`"
