#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_reconstructor.py
"""Unit tests for rebuilding document trees from XML, and the projection round trip."""

import xml.etree.ElementTree as ET

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
from cmark_translate.projector import project
from cmark_translate.reconstructor import reconstruct


def _md(tag: str) -> str:
    return f"{{markdown}}{tag}"


def every_kind_document() -> Document:
    """Build a document that uses every node kind at least once."""
    return Document(
        children=[
            FrontMatter(content="+++\ntitle = \"Doc\"\n+++\n"),
            Heading(level=2, children=[Text(content="Heading "), Code(literal="code")]),
            Paragraph(
                children=[
                    Text(content="Plain "),
                    Emphasis(children=[Text(content="emph")]),
                    Text(content=", "),
                    Strong(children=[Text(content="strong")]),
                    SoftBreak(),
                    Strikethrough(children=[Text(content="gone")]),
                    Superscript(children=[Text(content="up")]),
                    LineBreak(),
                    Link(url="https://example.com", title="Example", children=[Text(content="link")]),
                    Text(content=" "),
                    Image(url="a.png", title="", children=[Text(content="alt")]),
                    HTMLInline(literal="<kbd>"),
                    FootnoteReference(name="1"),
                ]
            ),
            BlockQuote(children=[Paragraph(children=[Text(content="Quoted")])]),
            List(
                list_type="ordered",
                marker_offset=2,
                padding=3,
                start=5,
                delimiter="paren",
                tight=True,
                children=[
                    ListItem(
                        list_type="ordered",
                        marker_offset=2,
                        padding=3,
                        start=5,
                        delimiter="paren",
                        tight=True,
                        children=[Paragraph(children=[Text(content="five")])],
                    ),
                ],
            ),
            List(
                children=[
                    ListItem(children=[TaskItem(checked=True, children=[Paragraph(children=[Text(content="done")])])]),
                ]
            ),
            DefinitionList(
                children=[
                    DefinitionItem(
                        marker_offset=0,
                        padding=2,
                        children=[
                            DefinitionTerm(children=[Text(content="Term")]),
                            DefinitionDescription(children=[Paragraph(children=[Text(content="Details")])]),
                        ],
                    )
                ]
            ),
            CodeBlock(literal="print('hi')\n", info="python"),
            HTMLBlock(literal="<div>\n<p>raw</p>\n</div>\n", block_type=6),
            ThematicBreak(),
            Table(
                alignments=["left", "center", "right", "none"],
                children=[
                    TableRow(
                        header=True,
                        children=[TableCell(children=[Text(content=name)]) for name in ("a", "b", "c", "d")],
                    ),
                    TableRow(
                        children=[TableCell(children=[Text(content=value)]) for value in ("1", "2", "3", "4")],
                    ),
                ],
            ),
            FootnoteDefinition(name="1", children=[Paragraph(children=[Text(content="Note")])]),
        ]
    )


@pytest.mark.unit
class TestRoundTrip:
    """Tests for reconstruct(project(tree)) == tree."""

    def test_every_node_kind(self):
        doc = every_kind_document()
        assert reconstruct(project(doc)) == doc

    @pytest.mark.parametrize("level", range(1, 7))
    def test_heading_levels(self, level):
        doc = Document(children=[Heading(level=level, children=[Text(content="Title")])])
        assert reconstruct(project(doc)) == doc

    def test_list_attributes(self):
        item = ListItem(list_type="ordered", marker_offset=2, padding=3, start=5, delimiter="paren", tight=True)
        doc = Document(
            children=[
                List(
                    list_type="ordered",
                    marker_offset=2,
                    padding=3,
                    start=5,
                    delimiter="paren",
                    tight=True,
                    children=[item],
                )
            ]
        )
        rebuilt = reconstruct(project(doc))
        assert rebuilt == doc
        rebuilt_list = rebuilt.children[0]
        assert rebuilt_list.list_type == "ordered"
        assert rebuilt_list.delimiter == "paren"
        assert rebuilt_list.start == 5

    def test_non_modeled_attributes_reset_to_defaults(self):
        doc = Document(
            children=[
                CodeBlock(literal="x\n", info="", fenced=False, fence_char="~", fence_length=5),
                Heading(level=1, setext=True, children=[Text(content="T")]),
                List(bullet_char="*", children=[ListItem(bullet_char="*")]),
                Paragraph(children=[Code(literal="a", num_backticks=2)]),
            ]
        )
        rebuilt = reconstruct(project(doc))
        assert rebuilt == doc
        assert rebuilt.children[0].fence_char == "`"
        assert rebuilt.children[1].setext is False
        assert rebuilt.children[2].bullet_char == "-"
        assert rebuilt.children[3].children[0].num_backticks == 1


@pytest.mark.unit
class TestReconstruct:
    """Tests for reconstruct on hand-written XML."""

    def test_unknown_root_is_empty_text(self):
        assert reconstruct(ET.Element(_md("foobar"))) == Text(content="")

    def test_unknown_element_drops_its_subtree(self):
        body = ET.fromstring('<body xmlns="markdown"><p>a<foobar>hidden<em>x</em></foobar>b</p></body>')
        rebuilt = reconstruct(body)
        assert rebuilt == Document(
            children=[Paragraph(children=[Text(content="a"), Text(content=""), Text(content="b")])]
        )

    def test_tag_without_namespace_is_accepted(self):
        rebuilt = reconstruct(ET.fromstring("<body><p>plain</p></body>"))
        assert rebuilt == Document(children=[Paragraph(children=[Text(content="plain")])])

    def test_pre_takes_all_text_content(self):
        body = ET.fromstring('<body xmlns="markdown"><pre info="sh">echo <b>1</b> done\n</pre></body>')
        assert reconstruct(body) == Document(children=[CodeBlock(literal="echo 1 done\n", info="sh")])

    def test_header_takes_all_text_content(self):
        body = ET.fromstring('<body xmlns="markdown"><header>+++\n<x>a</x>\n+++\n</header></body>')
        assert reconstruct(body) == Document(children=[FrontMatter(content="+++\na\n+++\n")])

    def test_missing_attributes_use_defaults(self):
        body = ET.fromstring('<body xmlns="markdown"><ol><li><p>x</p></li></ol><table><tr/></table></body>')
        rebuilt = reconstruct(body)
        ordered = rebuilt.children[0]
        assert ordered.list_type == "ordered"
        assert ordered.start == 0
        assert ordered.padding == 0
        assert ordered.tight is False
        assert rebuilt.children[1].alignments == []

    def test_malformed_attributes_use_defaults(self):
        body = ET.fromstring(
            '<body xmlns="markdown"><ul type="u" offset="x" padding="-1" start="" tight="true"/></body>'
        )
        bullet = reconstruct(body).children[0]
        assert bullet.marker_offset == 0
        assert bullet.padding == 0
        assert bullet.start == 0
        assert bullet.tight is False

    def test_heading_attribute_wins_over_tag(self):
        body = ET.fromstring('<body xmlns="markdown"><h2 level="4">T</h2></body>')
        assert reconstruct(body).children[0].level == 4

    def test_heading_without_level_uses_tag(self):
        body = ET.fromstring('<body xmlns="markdown"><h3>T</h3></body>')
        assert reconstruct(body).children[0].level == 3

    def test_alignment_unknown_character(self):
        body = ET.fromstring('<body xmlns="markdown"><table align="lqr"/></body>')
        assert reconstruct(body).children[0].alignments == ["left", "none", "right"]

    def test_leaf_elements_ignore_children(self):
        body = ET.fromstring('<body xmlns="markdown"><p><code literal="x">added</code><br>more</br></p></body>')
        assert reconstruct(body) == Document(children=[Paragraph(children=[Code(literal="x"), LineBreak()])])

    def test_text_runs_are_not_coalesced(self):
        body = ET.fromstring('<body xmlns="markdown"><p>a<wbr/>b<foobar/>c</p></body>')
        para = reconstruct(body).children[0]
        assert para.children == [Text(content="a"), SoftBreak(), Text(content="b"), Text(content=""), Text(content="c")]

    def test_translated_text_is_carried(self):
        body = ET.fromstring('<body xmlns="markdown"><p>Hallo <strong>Welt</strong>!</p></body>')
        assert reconstruct(body) == Document(
            children=[
                Paragraph(children=[Text(content="Hallo "), Strong(children=[Text(content="Welt")]), Text(content="!")])
            ]
        )
