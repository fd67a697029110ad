#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/cmark_translate/ast/__init__.py
"""Document tree module.

The tree is produced by the Markdown parser, projected to XML for the
translation service, rebuilt from XML, and finally rendered back to
Markdown.

- nodes: node classes representing document structure
- visitors: visitor base class for tree traversal

Examples
--------
    >>> from cmark_translate.ast import Document, Heading, Paragraph, Text
    >>> doc = Document(children=[
    ...     Heading(level=1, children=[Text(content="Title")]),
    ...     Paragraph(children=[Text(content="Hello world")]),
    ... ])

"""

from __future__ import annotations

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
from cmark_translate.ast.visitors import NodeVisitor

__all__ = [
    "BlockQuote",
    "Code",
    "CodeBlock",
    "DefinitionDescription",
    "DefinitionItem",
    "DefinitionList",
    "DefinitionTerm",
    "Document",
    "Emphasis",
    "FootnoteDefinition",
    "FootnoteReference",
    "FrontMatter",
    "Heading",
    "HTMLBlock",
    "HTMLInline",
    "Image",
    "LineBreak",
    "Link",
    "List",
    "ListItem",
    "Node",
    "NodeVisitor",
    "Paragraph",
    "SoftBreak",
    "Strikethrough",
    "Strong",
    "Superscript",
    "Table",
    "TableCell",
    "TableRow",
    "TaskItem",
    "Text",
    "ThematicBreak",
    "get_children",
]
