#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/cmark_translate/reconstructor.py
"""Rebuild a document tree from an XML element tree.

This is the inverse of :mod:`cmark_translate.projector`. The XML usually
comes back from a translation service, so reconstruction never fails on
unexpected content:

- an unknown element becomes an empty Text node and its subtree is dropped
- missing or malformed attributes decode to defaults
- ``header`` and ``pre`` take their whole text content as a literal
- leaf elements ignore whatever children the service may have added

Like the projector, the walk uses an explicit stack.

"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Callable

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
)

logger = logging.getLogger(__name__)

# Builds the node for an element; the flag tells whether its content is walked
NodeFactory = Callable[[str, ET.Element], tuple[Node, bool]]


def _text_content(element: ET.Element) -> str:
    return "".join(element.itertext())


def _container(cls: type[Node]) -> NodeFactory:
    def build_container(tag: str, element: ET.Element) -> tuple[Node, bool]:
        return cls(), True

    return build_container


def _leaf(cls: type[Node]) -> NodeFactory:
    def build_leaf(tag: str, element: ET.Element) -> tuple[Node, bool]:
        return cls(), False

    return build_leaf


def _build_list(tag: str, element: ET.Element) -> tuple[Node, bool]:
    attrs = element.attrib
    node = List(
        list_type=mapping.decode_list_type(attrs.get(mapping.ATTR_TYPE), tag),
        marker_offset=mapping.decode_int(attrs.get(mapping.ATTR_OFFSET)),
        padding=mapping.decode_int(attrs.get(mapping.ATTR_PADDING)),
        start=mapping.decode_int(attrs.get(mapping.ATTR_START)),
        delimiter=mapping.decode_delimiter(attrs.get(mapping.ATTR_DELIMITER)),
        tight=mapping.decode_bool(attrs.get(mapping.ATTR_TIGHT)),
    )
    return node, True


def _build_list_item(tag: str, element: ET.Element) -> tuple[Node, bool]:
    attrs = element.attrib
    node = ListItem(
        list_type=mapping.decode_list_type(attrs.get(mapping.ATTR_TYPE)),
        marker_offset=mapping.decode_int(attrs.get(mapping.ATTR_OFFSET)),
        padding=mapping.decode_int(attrs.get(mapping.ATTR_PADDING)),
        start=mapping.decode_int(attrs.get(mapping.ATTR_START)),
        delimiter=mapping.decode_delimiter(attrs.get(mapping.ATTR_DELIMITER)),
        tight=mapping.decode_bool(attrs.get(mapping.ATTR_TIGHT)),
    )
    return node, True


def _build_definition_item(tag: str, element: ET.Element) -> tuple[Node, bool]:
    node = DefinitionItem(
        marker_offset=mapping.decode_int(element.get(mapping.ATTR_OFFSET)),
        padding=mapping.decode_int(element.get(mapping.ATTR_PADDING)),
    )
    return node, True


def _build_front_matter(tag: str, element: ET.Element) -> tuple[Node, bool]:
    return FrontMatter(content=_text_content(element)), False


def _build_code_block(tag: str, element: ET.Element) -> tuple[Node, bool]:
    return CodeBlock(literal=_text_content(element), info=element.get(mapping.ATTR_INFO, "")), False


def _build_html_block(tag: str, element: ET.Element) -> tuple[Node, bool]:
    node = HTMLBlock(
        literal=element.get(mapping.ATTR_LITERAL, ""),
        block_type=mapping.decode_int(element.get(mapping.ATTR_TYPE)),
    )
    return node, False


def _build_heading(tag: str, element: ET.Element) -> tuple[Node, bool]:
    return Heading(level=mapping.decode_heading_level(tag, element.get(mapping.ATTR_LEVEL))), True


def _build_footnote_definition(tag: str, element: ET.Element) -> tuple[Node, bool]:
    return FootnoteDefinition(name=element.get(mapping.ATTR_NAME, "")), True


def _build_table(tag: str, element: ET.Element) -> tuple[Node, bool]:
    return Table(alignments=mapping.decode_alignments(element.get(mapping.ATTR_ALIGN))), True


def _build_task_item(tag: str, element: ET.Element) -> tuple[Node, bool]:
    return TaskItem(checked=mapping.decode_bool(element.get(mapping.ATTR_CHECKED))), True


def _build_link(tag: str, element: ET.Element) -> tuple[Node, bool]:
    return Link(url=element.get(mapping.ATTR_HREF, ""), title=element.get(mapping.ATTR_TITLE, "")), True


def _build_image(tag: str, element: ET.Element) -> tuple[Node, bool]:
    return Image(url=element.get(mapping.ATTR_SRC, ""), title=element.get(mapping.ATTR_TITLE, "")), True


_RECONSTRUCTION_DISPATCH: dict[str, NodeFactory] = {
    mapping.TAG_BODY: _container(Document),
    mapping.TAG_HEADER: _build_front_matter,
    mapping.TAG_BLOCKQUOTE: _container(BlockQuote),
    mapping.TAG_BULLET_LIST: _build_list,
    mapping.TAG_ORDERED_LIST: _build_list,
    mapping.TAG_LIST_ITEM: _build_list_item,
    mapping.TAG_TASK_ITEM: _build_task_item,
    mapping.TAG_DESCRIPTION_LIST: _container(DefinitionList),
    mapping.TAG_DESCRIPTION_ITEM: _build_definition_item,
    mapping.TAG_DESCRIPTION_TERM: _container(DefinitionTerm),
    mapping.TAG_DESCRIPTION_DETAILS: _container(DefinitionDescription),
    mapping.TAG_CODE_BLOCK: _build_code_block,
    mapping.TAG_HTML_BLOCK: _build_html_block,
    mapping.TAG_PARAGRAPH: _container(Paragraph),
    **{tag: _build_heading for tag in mapping.HEADING_TAGS},
    mapping.TAG_THEMATIC_BREAK: _leaf(ThematicBreak),
    mapping.TAG_FOOTNOTE_DEFINITION: _build_footnote_definition,
    mapping.TAG_TABLE: _build_table,
    mapping.TAG_TABLE_HEADER_ROW: lambda tag, element: (TableRow(header=True), True),
    mapping.TAG_TABLE_ROW: lambda tag, element: (TableRow(header=False), True),
    mapping.TAG_TABLE_CELL: _container(TableCell),
    mapping.TAG_SOFT_BREAK: _leaf(SoftBreak),
    mapping.TAG_LINE_BREAK: _leaf(LineBreak),
    mapping.TAG_CODE: lambda tag, element: (Code(literal=element.get(mapping.ATTR_LITERAL, "")), False),
    mapping.TAG_HTML_INLINE: lambda tag, element: (HTMLInline(literal=element.get(mapping.ATTR_LITERAL, "")), False),
    mapping.TAG_EMPHASIS: _container(Emphasis),
    mapping.TAG_STRONG: _container(Strong),
    mapping.TAG_STRIKETHROUGH: _container(Strikethrough),
    mapping.TAG_SUPERSCRIPT: _container(Superscript),
    mapping.TAG_LINK: _build_link,
    mapping.TAG_IMAGE: _build_image,
    mapping.TAG_FOOTNOTE_REFERENCE: lambda tag, element: (
        FootnoteReference(name=element.get(mapping.ATTR_NAME, "")),
        False,
    ),
}


def _make_node(element: ET.Element) -> tuple[Node, bool]:
    tag = mapping.local_name(element.tag)
    factory = _RECONSTRUCTION_DISPATCH.get(tag)
    if factory is None:
        logger.debug("Unknown element <%s> replaced by empty text", element.tag)
        return Text(content=""), False
    return factory(tag, element)


def reconstruct(element: ET.Element) -> Node:
    """Rebuild a document tree from an XML element tree.

    Parameters
    ----------
    element : xml.etree.ElementTree.Element
        Root element, normally ``{markdown}body``

    Returns
    -------
    Node
        The rebuilt tree; a :class:`Document` for a ``body`` root

    Examples
    --------
        >>> import xml.etree.ElementTree as ET
        >>> reconstruct(ET.Element("{markdown}foobar"))
        Text(content='')

    """
    root, descend = _make_node(element)
    stack: list[tuple[ET.Element, Node]] = [(element, root)] if descend else []

    while stack:
        current, node = stack.pop()
        children: list[Node] = node.children  # type: ignore[attr-defined]

        if current.text:
            children.append(Text(content=current.text))

        for child in current:
            child_node, child_descend = _make_node(child)
            children.append(child_node)
            if child_descend:
                stack.append((child, child_node))
            if child.tail:
                children.append(Text(content=child.tail))

    return root
