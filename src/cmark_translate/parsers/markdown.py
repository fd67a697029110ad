#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/cmark_translate/parsers/markdown.py
"""Markdown to document tree converter.

This module parses CommonMark (plus the GitHub table and strikethrough
extensions) with mistune and builds the node tree used by the XML
projector and the Markdown renderer.

"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import IO, Any, Callable, Optional, Union

from cmark_translate.ast import (
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
from cmark_translate.constants import DEPS_MARKDOWN, ListDelimiter, TableAlignment
from cmark_translate.options.markdown import MarkdownParserOptions
from cmark_translate.parsers.base import BaseParser
from cmark_translate.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)

# CommonMark HTML block start conditions, checked in order 1..7
_HTML_BLOCK_TYPE_PATTERNS: tuple[tuple[int, re.Pattern[str]], ...] = (
    (1, re.compile(r"<(?:script|pre|style|textarea)(?:\s|>|$)", re.IGNORECASE)),
    (2, re.compile(r"<!--")),
    (3, re.compile(r"<\?")),
    (4, re.compile(r"<![A-Za-z]")),
    (5, re.compile(r"<!\[CDATA\[")),
    (
        6,
        re.compile(
            r"</?(?:address|article|aside|base|basefont|blockquote|body|caption|center|col|colgroup|dd|details"
            r"|dialog|dir|div|dl|dt|fieldset|figcaption|figure|footer|form|frame|frameset|h1|h2|h3|h4|h5|h6"
            r"|head|header|hr|html|iframe|legend|li|link|main|menu|menuitem|nav|noframes|ol|optgroup|option"
            r"|p|param|search|section|summary|table|tbody|td|tfoot|th|thead|title|tr|track|ul)(?:\s|/?>|$)",
            re.IGNORECASE,
        ),
    ),
    (7, re.compile(r"</?[A-Za-z][A-Za-z0-9-]*")),
)

_TABLE_ALIGNMENTS: dict[Optional[str], TableAlignment] = {
    "left": "left",
    "center": "center",
    "right": "right",
    None: "none",
}


def html_block_type(html: str) -> int:
    """Classify raw HTML by the CommonMark block start condition it meets.

    Parameters
    ----------
    html : str
        Raw HTML block text

    Returns
    -------
    int
        Start condition 1-7, or 0 if none applies

    Examples
    --------
        >>> html_block_type("<!-- note -->")
        2
        >>> html_block_type("<div>")
        6

    """
    start = html.lstrip(" ")
    for block_type, pattern in _HTML_BLOCK_TYPE_PATTERNS:
        if pattern.match(start):
            return block_type
    return 0


def split_front_matter_block(text: str, delimiter: str) -> tuple[Optional[str], str]:
    """Split a leading front matter block off Markdown text.

    The block must start on the first line and end with a line equal to
    the delimiter (trailing whitespace ignored). An unterminated block is
    left in the text.

    Returns
    -------
    tuple of (str or None, str)
        The front matter block including both delimiter lines, and the rest

    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != delimiter:
        return None, text

    for index in range(1, len(lines)):
        if lines[index].rstrip() == delimiter:
            return "".join(lines[: index + 1]), "".join(lines[index + 1 :])

    logger.debug("Front matter opened with %r is never closed; parsing it as Markdown", delimiter)
    return None, text


def list_marker_offsets(md: Any) -> None:
    """Mistune plugin recording each list's marker indentation.

    Mistune drops the spaces before a list marker. The plugin wraps the
    ``list`` block rule and stores the width of that indentation (0-3,
    relative to the enclosing container) as ``attrs["marker_offset"]`` on
    the list token it produced.
    """
    from mistune.list_parser import LIST_PATTERN, parse_list

    def parse_list_with_offset(block: Any, m: re.Match[str], state: Any) -> Optional[int]:
        known = {id(token) for token in state.tokens}
        end_pos = parse_list(block, m, state)
        for token in state.tokens:
            if token.get("type") == "list" and id(token) not in known:
                token["attrs"]["marker_offset"] = len(m.group("list_1"))
        return end_pos

    md.block.register("list", LIST_PATTERN, parse_list_with_offset)


class MarkdownToAstConverter(BaseParser):
    r"""Convert Markdown to a document tree.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
        >>> converter = MarkdownToAstConverter()
        >>> doc = converter.parse("# Hello\n\nThis is **bold**.")

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the Markdown parser with options."""
        BaseParser._validate_options_type(options, MarkdownParserOptions, "markdown")
        options = options or MarkdownParserOptions()
        super().__init__(options)
        self.options: MarkdownParserOptions = options

    def _plugins(self) -> list[Any]:
        plugins: list[Any] = [list_marker_offsets]
        if self.options.parse_strikethrough:
            plugins.append("strikethrough")
        if self.options.parse_tables:
            plugins.append("table")
        if self.options.parse_autolinks:
            plugins.append("url")
        if self.options.parse_task_lists:
            plugins.append("task_lists")
        if self.options.parse_superscript:
            plugins.append("superscript")
        if self.options.parse_footnotes:
            plugins.append("footnotes")
        if self.options.parse_definition_lists:
            plugins.append("def_list")
        return plugins

    @requires_dependencies("markdown", DEPS_MARKDOWN)
    def parse(self, input_data: Union[str, Path, IO[bytes], IO[str], bytes]) -> Document:
        """Parse Markdown input into a Document.

        Parameters
        ----------
        input_data : str, Path, IO[bytes], IO[str] or bytes
            Markdown text, a path to a Markdown file, a stream, or UTF-8 bytes

        Returns
        -------
        Document
            Document tree

        Raises
        ------
        EncodingError
            If byte input is not valid UTF-8

        """
        import mistune

        markdown_content = self._load_text_content(input_data)

        children: list[Node] = []
        if self.options.front_matter_delimiter:
            front_matter, markdown_content = split_front_matter_block(
                markdown_content, self.options.front_matter_delimiter
            )
            if front_matter is not None:
                children.append(FrontMatter(content=front_matter))

        markdown = mistune.create_markdown(renderer=None, plugins=self._plugins())
        tokens, _state = markdown.parse(markdown_content)

        if isinstance(tokens, list):
            children.extend(self._process_tokens(tokens))

        return Document(children=children)

    # ------------------------------------------------------------------
    # Block tokens
    # ------------------------------------------------------------------

    def _process_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process a list of mistune block tokens into nodes."""
        nodes: list[Node] = []
        for token in tokens:
            node = self._process_token(token)
            if node is None:
                continue
            if isinstance(node, list):
                nodes.extend(node)
            else:
                nodes.append(node)
        return nodes

    def _process_token(self, token: dict[str, Any]) -> Node | list[Node] | None:
        """Process a single mistune block token.

        Parameters
        ----------
        token : dict
            Mistune token dictionary with 'type' and other fields

        Returns
        -------
        Node, list of Node, or None
            Resulting node(s); None for tokens that carry no content

        """
        token_type = token.get("type", "")

        handler_map: dict[str, Callable[[dict[str, Any]], Node | list[Node] | None]] = {
            "heading": self._process_heading,
            "paragraph": self._process_paragraph,
            "block_text": self._process_paragraph,
            "block_code": self._process_code_block,
            "block_quote": self._process_block_quote,
            "list": self._process_list,
            "table": self._process_table,
            "thematic_break": lambda _token: ThematicBreak(),
            "block_html": self._process_html_block,
            "def_list": self._process_definition_list,
            "footnotes": self._process_footnotes,
            "blank_line": lambda _token: None,
        }

        handler = handler_map.get(token_type)
        if handler is None:
            logger.debug("Skipping unsupported markdown token %r", token_type)
            return None
        return handler(token)

    def _process_heading(self, token: dict[str, Any]) -> Heading:
        """Process heading token."""
        attrs = token.get("attrs") or {}
        level = attrs.get("level", 1)
        if not isinstance(level, int) or not 1 <= level <= 6:
            level = 1
        content = self._process_inline_tokens(token.get("children") or [])
        return Heading(level=level, children=content, setext=token.get("style") == "setext")

    def _process_paragraph(self, token: dict[str, Any]) -> Paragraph:
        """Process paragraph and tight-list block_text tokens."""
        return Paragraph(children=self._process_inline_tokens(token.get("children") or []))

    def _process_code_block(self, token: dict[str, Any]) -> CodeBlock:
        """Process code block token.

        Parameters
        ----------
        token : dict
            Code block token with 'raw', 'style', and for fenced code an
            optional 'marker' and 'attrs' holding the info string

        Returns
        -------
        CodeBlock
            Code block node

        """
        attrs = token.get("attrs") or {}
        marker = token.get("marker") or "```"
        fenced = token.get("style") == "fenced"
        return CodeBlock(
            literal=token.get("raw", ""),
            info=attrs.get("info", "") or "",
            fenced=fenced,
            fence_char=marker[0],
            fence_length=len(marker),
        )

    def _process_block_quote(self, token: dict[str, Any]) -> BlockQuote:
        """Process block quote token."""
        return BlockQuote(children=self._process_tokens(token.get("children") or []))

    def _process_list(self, token: dict[str, Any]) -> List:
        """Process list token.

        Mistune reports the marker's final character as ``bullet`` (``-``,
        ``*``, ``+``, ``.`` or ``)``) and the start number only when it
        is not 1. Marker padding is the width of each item's marker plus
        one space.

        Parameters
        ----------
        token : dict
            List token with 'children', 'tight', 'bullet' and 'attrs'

        Returns
        -------
        List
            List node with one ListItem or TaskItem per item

        """
        attrs = token.get("attrs") or {}
        ordered = bool(attrs.get("ordered", False))
        marker_offset = int(attrs.get("marker_offset", 0))
        start = attrs.get("start", 1) if ordered else 1
        bullet = token.get("bullet") or "-"
        tight = bool(token.get("tight", True))
        delimiter: ListDelimiter = "paren" if bullet == ")" else "period"

        def padding_for(number: int) -> int:
            if ordered:
                return len(str(number)) + 2
            return 2

        items: list[Node] = []
        for index, child in enumerate(token.get("children") or []):
            if not isinstance(child, dict):
                continue
            children = self._process_tokens(child.get("children") or [])
            if child.get("type") == "task_list_item":
                checked = bool((child.get("attrs") or {}).get("checked", False))
                items.append(TaskItem(children=children, checked=checked))
                continue
            items.append(
                ListItem(
                    children=children,
                    list_type="ordered" if ordered else "bullet",
                    marker_offset=marker_offset,
                    padding=padding_for(start + index),
                    start=start,
                    delimiter=delimiter,
                    tight=tight,
                    bullet_char=bullet if not ordered else "-",
                )
            )

        return List(
            children=items,
            list_type="ordered" if ordered else "bullet",
            marker_offset=marker_offset,
            padding=padding_for(start),
            start=start,
            delimiter=delimiter,
            tight=tight,
            bullet_char=bullet if not ordered else "-",
        )

    def _process_table(self, token: dict[str, Any]) -> Table:
        """Process table token.

        The header cells sit directly under ``table_head``; body cells
        are grouped into ``table_row`` tokens under ``table_body``.
        """
        alignments: list[TableAlignment] = []
        rows: list[Node] = []

        for part in token.get("children") or []:
            part_type = part.get("type", "")
            if part_type == "table_head":
                cells: list[Node] = []
                for cell_token in part.get("children") or []:
                    align = (cell_token.get("attrs") or {}).get("align")
                    alignments.append(_TABLE_ALIGNMENTS.get(align, "none"))
                    cells.append(TableCell(children=self._process_inline_tokens(cell_token.get("children") or [])))
                rows.insert(0, TableRow(header=True, children=cells))
            elif part_type == "table_body":
                for row_token in part.get("children") or []:
                    row_cells: list[Node] = [
                        TableCell(children=self._process_inline_tokens(cell_token.get("children") or []))
                        for cell_token in row_token.get("children") or []
                    ]
                    rows.append(TableRow(header=False, children=row_cells))

        return Table(alignments=alignments, children=rows)

    def _process_html_block(self, token: dict[str, Any]) -> HTMLBlock:
        """Process HTML block token."""
        raw = token.get("raw", "")
        return HTMLBlock(literal=raw, block_type=html_block_type(raw))

    def _process_definition_list(self, token: dict[str, Any]) -> DefinitionList:
        """Process definition list token.

        Mistune emits a flat run of ``def_list_head`` and ``def_list_item``
        tokens. Each run of terms followed by its details becomes one
        DefinitionItem.
        """
        items: list[Node] = []
        current: DefinitionItem | None = None
        seen_details = False

        for child in token.get("children") or []:
            child_type = child.get("type")
            if child_type == "def_list_head":
                if current is None or seen_details:
                    current = DefinitionItem()
                    items.append(current)
                    seen_details = False
                current.children.append(
                    DefinitionTerm(children=self._process_inline_tokens(child.get("children") or []))
                )
            elif child_type == "def_list_item":
                if current is None:
                    current = DefinitionItem()
                    items.append(current)
                current.children.append(
                    DefinitionDescription(children=self._process_tokens(child.get("children") or []))
                )
                seen_details = True

        return DefinitionList(children=items)

    def _process_footnotes(self, token: dict[str, Any]) -> list[Node]:
        """Process the footnotes section mistune appends after the document."""
        definitions: list[Node] = []
        for item in token.get("children") or []:
            name = (item.get("attrs") or {}).get("key", "")
            definitions.append(FootnoteDefinition(name=name, children=self._process_tokens(item.get("children") or [])))
        return definitions

    # ------------------------------------------------------------------
    # Inline tokens
    # ------------------------------------------------------------------

    def _process_inline_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process inline tokens, merging adjacent text runs.

        Mistune splits text around backslash escapes and entities. Merged
        runs keep the tree identical to what comes back from XML, where
        adjacent text is a single string.
        """
        nodes: list[Node] = []
        for token in tokens:
            node = self._process_inline_token(token)
            if node is None:
                continue
            if isinstance(node, Text):
                if not node.content:
                    continue
                if nodes and isinstance(nodes[-1], Text):
                    nodes[-1] = Text(content=nodes[-1].content + node.content)
                    continue
            nodes.append(node)
        return nodes

    def _handle_text_token(self, token: dict[str, Any]) -> Text:
        """Handle text token."""
        return Text(content=token.get("raw", ""))

    def _handle_codespan_token(self, token: dict[str, Any]) -> Code:
        """Handle codespan token."""
        return Code(literal=token.get("raw", ""))

    def _handle_link_token(self, token: dict[str, Any]) -> Link:
        """Handle link token."""
        attrs = token.get("attrs") or {}
        return Link(
            url=attrs.get("url", ""),
            title=attrs.get("title") or "",
            children=self._process_inline_tokens(token.get("children") or []),
        )

    def _handle_image_token(self, token: dict[str, Any]) -> Image:
        """Handle image token; the alt text stays as inline children."""
        attrs = token.get("attrs") or {}
        return Image(
            url=attrs.get("url", ""),
            title=attrs.get("title") or "",
            children=self._process_inline_tokens(token.get("children") or []),
        )

    def _handle_inline_html_token(self, token: dict[str, Any]) -> HTMLInline:
        """Handle inline_html token."""
        return HTMLInline(literal=token.get("raw", ""))

    def _handle_footnote_ref_token(self, token: dict[str, Any]) -> FootnoteReference:
        """Handle footnote_ref token."""
        return FootnoteReference(name=token.get("raw", ""))

    def _container_handler(self, cls: type[Node]) -> Callable[[dict[str, Any]], Node]:
        def handle(token: dict[str, Any]) -> Node:
            return cls(children=self._process_inline_tokens(token.get("children") or []))  # type: ignore[call-arg]

        return handle

    def _process_inline_token(self, token: dict[str, Any]) -> Node | None:
        """Process a single inline token."""
        token_type = token.get("type", "")

        handler_map: dict[str, Callable[[dict[str, Any]], Node]] = {
            "text": self._handle_text_token,
            "emphasis": self._container_handler(Emphasis),
            "strong": self._container_handler(Strong),
            "strikethrough": self._container_handler(Strikethrough),
            "superscript": self._container_handler(Superscript),
            "codespan": self._handle_codespan_token,
            "link": self._handle_link_token,
            "image": self._handle_image_token,
            "softbreak": lambda _token: SoftBreak(),
            "linebreak": lambda _token: LineBreak(),
            "inline_html": self._handle_inline_html_token,
            "footnote_ref": self._handle_footnote_ref_token,
        }

        handler = handler_map.get(token_type)
        if handler is None:
            logger.debug("Skipping unsupported inline token %r", token_type)
            return None
        return handler(token)


def markdown_to_ast(markdown_content: str, options: MarkdownParserOptions | None = None) -> Document:
    """Parse Markdown text into a Document.

    Parameters
    ----------
    markdown_content : str
        Markdown source
    options : MarkdownParserOptions or None, default = None
        Parser configuration

    Returns
    -------
    Document
        Document tree

    """
    return MarkdownToAstConverter(options).parse(markdown_content)
