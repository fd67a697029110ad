#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/cmark_translate/ast/nodes.py
"""Document tree node classes.

This module defines the node hierarchy used to represent a CommonMark
document (with the GitHub table and strikethrough extensions) between the
Markdown parser, the XML projector and reconstructor, and the Markdown
renderer.

Node Hierarchy
--------------
All nodes inherit from the base Node class and support the visitor pattern.

Container nodes own an ordered ``children`` list:
    - Document, BlockQuote, List, ListItem, TaskItem
    - DefinitionList, DefinitionItem, DefinitionTerm, DefinitionDescription
    - Paragraph, Heading, FootnoteDefinition
    - Table, TableRow, TableCell
    - Emphasis, Strong, Strikethrough, Superscript, Link, Image

Leaf nodes carry their payload as plain fields and own no children:
    - FrontMatter, CodeBlock, HTMLBlock, ThematicBreak
    - Text, Code, HTMLInline, SoftBreak, LineBreak, FootnoteReference

Some fields only describe how the source was spelled (fence character,
bullet character, setext underline, backtick count). They are excluded
from equality because the XML vocabulary does not carry them.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from cmark_translate.constants import ListDelimiter, ListType, TableAlignment


class Node(ABC):
    """Base class for all document tree nodes."""

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root document node.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the document

    """

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this document."""
        return visitor.visit_document(self)


@dataclass
class FrontMatter(Node):
    """Raw front matter block, delimiters included.

    Parameters
    ----------
    content : str
        Front matter text exactly as it appeared in the source, including
        the opening and closing delimiter lines

    """

    content: str = ""

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this front matter."""
        return visitor.visit_front_matter(self)


@dataclass
class BlockQuote(Node):
    """Block quote containing other block elements."""

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this block quote."""
        return visitor.visit_block_quote(self)


@dataclass
class List(Node):
    """Ordered or bullet list.

    Parameters
    ----------
    children : list of Node, default = empty list
        ListItem (or TaskItem) nodes
    list_type : {'bullet', 'ordered'}, default = 'bullet'
        Kind of list marker
    marker_offset : int, default = 0
        Columns of indentation before the marker
    padding : int, default = 2
        Width of the marker plus the spaces that follow it
    start : int, default = 1
        First number of an ordered list
    delimiter : {'period', 'paren'}, default = 'period'
        Character following the number of an ordered marker
    tight : bool, default = True
        Whether items are separated without blank lines
    bullet_char : str, default = '-'
        Bullet character of a bullet list (not carried through XML)

    """

    children: list[Node] = field(default_factory=list)
    list_type: ListType = "bullet"
    marker_offset: int = 0
    padding: int = 2
    start: int = 1
    delimiter: ListDelimiter = "period"
    tight: bool = True
    bullet_char: str = field(default="-", compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_list method

        Returns
        -------
        Any
            Result from visitor.visit_list(self)

        """
        return visitor.visit_list(self)


@dataclass
class ListItem(Node):
    """List item carrying the same marker attributes as its list.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the item
    list_type, marker_offset, padding, start, delimiter, tight
        Marker attributes, see :class:`List`

    """

    children: list[Node] = field(default_factory=list)
    list_type: ListType = "bullet"
    marker_offset: int = 0
    padding: int = 2
    start: int = 1
    delimiter: ListDelimiter = "period"
    tight: bool = True
    bullet_char: str = field(default="-", compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list item."""
        return visitor.visit_list_item(self)


@dataclass
class TaskItem(Node):
    """List item with a checkbox (GFM task list).

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the item
    checked : bool, default = False
        Whether the checkbox is ticked

    """

    children: list[Node] = field(default_factory=list)
    checked: bool = False

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this task item."""
        return visitor.visit_task_item(self)


@dataclass
class DefinitionList(Node):
    """Description list made of DefinitionItem children."""

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this definition list."""
        return visitor.visit_definition_list(self)


@dataclass
class DefinitionItem(Node):
    """One term/details group of a description list.

    Parameters
    ----------
    children : list of Node, default = empty list
        DefinitionTerm and DefinitionDescription nodes
    marker_offset : int, default = 0
        Columns of indentation before the ``:`` marker
    padding : int, default = 2
        Width of the marker plus the spaces that follow it

    """

    children: list[Node] = field(default_factory=list)
    marker_offset: int = 0
    padding: int = 2

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this definition item."""
        return visitor.visit_definition_item(self)


@dataclass
class DefinitionTerm(Node):
    """Term being described in a description list."""

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this term."""
        return visitor.visit_definition_term(self)


@dataclass
class DefinitionDescription(Node):
    """Details of a description list term."""

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this description."""
        return visitor.visit_definition_description(self)


@dataclass
class CodeBlock(Node):
    """Fenced or indented code block.

    Parameters
    ----------
    literal : str, default = ''
        Code content, usually ending with a newline
    info : str, default = ''
        Info string following the opening fence
    fenced : bool, default = True
        Whether the source used a fence (not carried through XML)
    fence_char : str, default = '`'
        Fence character (not carried through XML)
    fence_length : int, default = 3
        Fence length (not carried through XML)

    """

    literal: str = ""
    info: str = ""
    fenced: bool = field(default=True, compare=False)
    fence_char: str = field(default="`", compare=False)
    fence_length: int = field(default=3, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this code block."""
        return visitor.visit_code_block(self)


@dataclass
class HTMLBlock(Node):
    """Raw HTML block.

    Parameters
    ----------
    literal : str, default = ''
        HTML text exactly as in the source
    block_type : int, default = 0
        CommonMark HTML block start condition (1-7), 0 when unknown

    """

    literal: str = ""
    block_type: int = 0

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this HTML block."""
        return visitor.visit_html_block(self)


@dataclass
class Paragraph(Node):
    """Paragraph of inline content."""

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this paragraph."""
        return visitor.visit_paragraph(self)


@dataclass
class Heading(Node):
    """Heading (h1-h6).

    Parameters
    ----------
    level : int, default = 1
        Heading level (1-6, where 1 is most important)
    children : list of Node, default = empty list
        Inline nodes representing heading text
    setext : bool, default = False
        Whether the source used an underline (not carried through XML)

    """

    level: int = 1
    children: list[Node] = field(default_factory=list)
    setext: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        """Validate heading level is between 1 and 6."""
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this heading."""
        return visitor.visit_heading(self)


@dataclass
class ThematicBreak(Node):
    """Horizontal rule."""

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this thematic break."""
        return visitor.visit_thematic_break(self)


@dataclass
class FootnoteDefinition(Node):
    """Footnote body.

    Parameters
    ----------
    name : str, default = ''
        Footnote label referenced by FootnoteReference nodes
    children : list of Node, default = empty list
        Block-level content of the footnote

    """

    name: str = ""
    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this footnote definition."""
        return visitor.visit_footnote_definition(self)


@dataclass
class Table(Node):
    """GFM table.

    Parameters
    ----------
    alignments : list of {'none', 'left', 'center', 'right'}, default = empty list
        Alignment of each column
    children : list of Node, default = empty list
        TableRow nodes, header row first

    """

    alignments: list[TableAlignment] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table."""
        return visitor.visit_table(self)


@dataclass
class TableRow(Node):
    """Table row.

    Parameters
    ----------
    header : bool, default = False
        Whether this is the header row
    children : list of Node, default = empty list
        TableCell nodes

    """

    header: bool = False
    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table row."""
        return visitor.visit_table_row(self)


@dataclass
class TableCell(Node):
    """Table cell of inline content."""

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table cell."""
        return visitor.visit_table_cell(self)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(Node):
    """Plain text run.

    Parameters
    ----------
    content : str
        Text content, never markup-escaped

    """

    content: str = ""

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this text."""
        return visitor.visit_text(self)


@dataclass
class SoftBreak(Node):
    """Newline inside a paragraph."""

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this soft break."""
        return visitor.visit_soft_break(self)


@dataclass
class LineBreak(Node):
    """Hard line break inside a paragraph."""

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this line break."""
        return visitor.visit_line_break(self)


@dataclass
class Code(Node):
    """Inline code span.

    Parameters
    ----------
    literal : str, default = ''
        Code text
    num_backticks : int, default = 1
        Backtick run length in the source (not carried through XML)

    """

    literal: str = ""
    num_backticks: int = field(default=1, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this code span."""
        return visitor.visit_code(self)


@dataclass
class HTMLInline(Node):
    """Raw inline HTML, including HTML comments."""

    literal: str = ""

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this inline HTML."""
        return visitor.visit_html_inline(self)


@dataclass
class Emphasis(Node):
    """Emphasized (italic) inline content."""

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this emphasis."""
        return visitor.visit_emphasis(self)


@dataclass
class Strong(Node):
    """Strongly emphasized (bold) inline content."""

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this strong emphasis."""
        return visitor.visit_strong(self)


@dataclass
class Strikethrough(Node):
    """Struck-out inline content."""

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this strikethrough."""
        return visitor.visit_strikethrough(self)


@dataclass
class Superscript(Node):
    """Superscript inline content."""

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this superscript."""
        return visitor.visit_superscript(self)


@dataclass
class Link(Node):
    """Hyperlink.

    Parameters
    ----------
    url : str, default = ''
        Link destination
    title : str, default = ''
        Link title, empty when absent
    children : list of Node, default = empty list
        Inline nodes forming the link text

    """

    url: str = ""
    title: str = ""
    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this link."""
        return visitor.visit_link(self)


@dataclass
class Image(Node):
    """Image.

    Parameters
    ----------
    url : str, default = ''
        Image source
    title : str, default = ''
        Image title, empty when absent
    children : list of Node, default = empty list
        Inline nodes forming the alt text

    """

    url: str = ""
    title: str = ""
    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this image."""
        return visitor.visit_image(self)


@dataclass
class FootnoteReference(Node):
    """Reference to a footnote by label."""

    name: str = ""

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this footnote reference."""
        return visitor.visit_footnote_reference(self)


def get_children(node: Node) -> list[Node]:
    """Return the children of a container node, or an empty list for a leaf."""
    children = getattr(node, "children", None)
    return children if isinstance(children, list) else []
