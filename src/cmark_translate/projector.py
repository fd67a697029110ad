#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/cmark_translate/projector.py
"""Project a document tree onto an XML element tree.

Each node becomes one element in the ``markdown`` namespace, named and
attributed according to :mod:`cmark_translate.mapping`. Text nodes become
element text (``.text`` or the previous sibling's ``.tail``). The walk
uses an explicit stack, so arbitrarily deep nesting cannot exhaust the
interpreter's recursion limit.

"""

from __future__ import annotations

import copy
import logging
import xml.etree.ElementTree as ET
from typing import Any, Callable

from cmark_translate import mapping
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
    Node,
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
    get_children,
)
from cmark_translate.constants import XML_NAMESPACE
from cmark_translate.exceptions import RenderingError

logger = logging.getLogger(__name__)

# (tag, attributes, literal text or None)
ElementSpec = tuple[str, dict[str, str], "str | None"]


def _list_attributes(node: List | ListItem) -> dict[str, str]:
    return {
        mapping.ATTR_TYPE: mapping.encode_list_type(node.list_type),
        mapping.ATTR_OFFSET: mapping.encode_int(node.marker_offset),
        mapping.ATTR_PADDING: mapping.encode_int(node.padding),
        mapping.ATTR_START: mapping.encode_int(node.start),
        mapping.ATTR_DELIMITER: mapping.encode_delimiter(node.delimiter),
        mapping.ATTR_TIGHT: mapping.encode_bool(node.tight),
    }


def _project_list(node: List) -> ElementSpec:
    return mapping.list_tag(node.list_type), _list_attributes(node), None


def _project_list_item(node: ListItem) -> ElementSpec:
    return mapping.TAG_LIST_ITEM, _list_attributes(node), None


def _project_definition_item(node: DefinitionItem) -> ElementSpec:
    attrs = {
        mapping.ATTR_OFFSET: mapping.encode_int(node.marker_offset),
        mapping.ATTR_PADDING: mapping.encode_int(node.padding),
    }
    return mapping.TAG_DESCRIPTION_ITEM, attrs, None


def _project_code_block(node: CodeBlock) -> ElementSpec:
    return mapping.TAG_CODE_BLOCK, {mapping.ATTR_INFO: node.info}, node.literal


def _project_html_block(node: HTMLBlock) -> ElementSpec:
    attrs = {
        mapping.ATTR_TYPE: mapping.encode_int(node.block_type),
        mapping.ATTR_LITERAL: node.literal,
    }
    return mapping.TAG_HTML_BLOCK, attrs, None


def _project_heading(node: Heading) -> ElementSpec:
    return mapping.heading_tag(node.level), {mapping.ATTR_LEVEL: mapping.encode_int(node.level)}, None


def _project_table(node: Table) -> ElementSpec:
    return mapping.TAG_TABLE, {mapping.ATTR_ALIGN: mapping.encode_alignments(node.alignments)}, None


def _project_table_row(node: TableRow) -> ElementSpec:
    tag = mapping.TAG_TABLE_HEADER_ROW if node.header else mapping.TAG_TABLE_ROW
    return tag, {}, None


def _project_link(node: Link) -> ElementSpec:
    return mapping.TAG_LINK, {mapping.ATTR_HREF: node.url, mapping.ATTR_TITLE: node.title}, None


def _project_image(node: Image) -> ElementSpec:
    return mapping.TAG_IMAGE, {mapping.ATTR_SRC: node.url, mapping.ATTR_TITLE: node.title}, None


def _simple(tag: str) -> Callable[[Any], ElementSpec]:
    def project_simple(node: Any) -> ElementSpec:
        return tag, {}, None

    return project_simple


_PROJECTION_DISPATCH: dict[type, Callable[[Any], ElementSpec]] = {
    Document: _simple(mapping.TAG_BODY),
    FrontMatter: lambda node: (mapping.TAG_HEADER, {}, node.content),
    BlockQuote: _simple(mapping.TAG_BLOCKQUOTE),
    List: _project_list,
    ListItem: _project_list_item,
    TaskItem: lambda node: (mapping.TAG_TASK_ITEM, {mapping.ATTR_CHECKED: mapping.encode_bool(node.checked)}, None),
    DefinitionList: _simple(mapping.TAG_DESCRIPTION_LIST),
    DefinitionItem: _project_definition_item,
    DefinitionTerm: _simple(mapping.TAG_DESCRIPTION_TERM),
    DefinitionDescription: _simple(mapping.TAG_DESCRIPTION_DETAILS),
    CodeBlock: _project_code_block,
    HTMLBlock: _project_html_block,
    Paragraph: _simple(mapping.TAG_PARAGRAPH),
    Heading: _project_heading,
    ThematicBreak: _simple(mapping.TAG_THEMATIC_BREAK),
    FootnoteDefinition: lambda node: (mapping.TAG_FOOTNOTE_DEFINITION, {mapping.ATTR_NAME: node.name}, None),
    Table: _project_table,
    TableRow: _project_table_row,
    TableCell: _simple(mapping.TAG_TABLE_CELL),
    SoftBreak: _simple(mapping.TAG_SOFT_BREAK),
    LineBreak: _simple(mapping.TAG_LINE_BREAK),
    Code: lambda node: (mapping.TAG_CODE, {mapping.ATTR_LITERAL: node.literal}, None),
    HTMLInline: lambda node: (mapping.TAG_HTML_INLINE, {mapping.ATTR_LITERAL: node.literal}, None),
    Emphasis: _simple(mapping.TAG_EMPHASIS),
    Strong: _simple(mapping.TAG_STRONG),
    Strikethrough: _simple(mapping.TAG_STRIKETHROUGH),
    Superscript: _simple(mapping.TAG_SUPERSCRIPT),
    Link: _project_link,
    Image: _project_image,
    FootnoteReference: lambda node: (mapping.TAG_FOOTNOTE_REFERENCE, {mapping.ATTR_NAME: node.name}, None),
}


def _append_text(parent: ET.Element, content: str) -> None:
    if len(parent):
        last = parent[-1]
        last.tail = (last.tail or "") + content
    else:
        parent.text = (parent.text or "") + content


def _make_element(node: Node, parent: ET.Element | None) -> tuple[ET.Element, bool]:
    handler = _PROJECTION_DISPATCH.get(type(node))
    if handler is None:
        raise RenderingError(f"Cannot project node of type {type(node).__name__}", rendering_stage="xml")

    tag, attrs, literal = handler(node)
    qualified_tag = mapping.qualified(tag)
    if parent is None:
        element = ET.Element(qualified_tag, attrs)
    else:
        element = ET.SubElement(parent, qualified_tag, attrs)

    if literal is not None:
        element.text = literal
        return element, False
    return element, True


def project(node: Node) -> ET.Element:
    """Project a document tree onto an XML element tree.

    Parameters
    ----------
    node : Node
        Root of the tree, normally a :class:`Document`

    Returns
    -------
    xml.etree.ElementTree.Element
        Element tree with the same shape and child order

    Raises
    ------
    RenderingError
        If the tree contains a node type with no XML mapping, or the root
        is a bare Text node

    """
    if isinstance(node, Text):
        raise RenderingError("A text node cannot be the root of an XML tree", rendering_stage="xml")

    root, descend = _make_element(node, None)
    stack: list[tuple[Node, ET.Element]] = []
    if descend:
        stack.extend((child, root) for child in reversed(get_children(node)))

    while stack:
        current, parent = stack.pop()
        if isinstance(current, Text):
            if current.content:
                _append_text(parent, current.content)
            continue

        element, descend = _make_element(current, parent)
        if descend:
            stack.extend((child, element) for child in reversed(get_children(current)))

    return root


def to_string(element: ET.Element) -> str:
    """Serialize a projected element tree with ``markdown`` as the default namespace.

    Attributes are unqualified, which ``default_namespace`` rejects, so the
    tags are written in local form on a copy and the root carries the
    ``xmlns`` declaration itself.

    Examples
    --------
        >>> from cmark_translate.ast.nodes import Document, Heading, Text
        >>> to_string(project(Document(children=[Heading(level=2, children=[Text(content="Hi")])])))
        '<body xmlns="markdown"><h2 level="2">Hi</h2></body>'

    """
    local_root = copy.deepcopy(element)
    for current in local_root.iter():
        current.tag = mapping.local_name(current.tag)
    local_root.attrib = {"xmlns": XML_NAMESPACE, **local_root.attrib}
    return ET.tostring(local_root, encoding="unicode")
