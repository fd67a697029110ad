#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/cmark_translate/renderers/markdown.py
"""Markdown rendering from the document tree.

This module provides the MarkdownRenderer class, which turns a document
tree back into CommonMark text. Block containers (block quotes, list
items, footnotes) render their children to a string first and then prefix
every line, so arbitrarily nested content keeps its indentation.

"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import IO, Union

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
    NodeVisitor,
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
from cmark_translate.options.markdown import MarkdownRendererOptions
from cmark_translate.renderers.base import BaseRenderer, InlineContentMixin

logger = logging.getLogger(__name__)

_ALWAYS_ESCAPE = set("\\`*[]<~")
_LINE_START_MARKERS = set("#>-+=")
_ORDERED_MARKER_RE = re.compile(r"^(\d{1,9})([.)])")
_BULLET_CHARS = ("-", "*", "+")
_ALIGNMENT_ROWS = {"left": ":---", "center": ":---:", "right": "---:", "none": "---"}


def _longest_run(text: str, char: str) -> int:
    longest = current = 0
    for c in text:
        if c == char:
            current += 1
            longest = max(longest, current)
        else:
            current = 0
    return longest


def _prefix_lines(text: str, first: str, rest: str) -> str:
    """Prefix the first line with ``first`` and every later line with ``rest``.

    Blank lines only get the prefix stripped of trailing spaces.
    """
    lines = text.split("\n")
    out = []
    for index, line in enumerate(lines):
        prefix = first if index == 0 else rest
        out.append(prefix + line if line else prefix.rstrip())
    return "\n".join(out)


class MarkdownRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render a document tree to CommonMark text.

    Parameters
    ----------
    options : MarkdownRendererOptions or None, default = None
        Markdown formatting options

    Examples
    --------
        >>> from cmark_translate.ast import Document, Heading, Text
        >>> doc = Document(children=[Heading(level=1, children=[Text(content="Title")])])
        >>> MarkdownRenderer().render_to_string(doc)
        '# Title\\n'

    """

    def __init__(self, options: MarkdownRendererOptions | None = None):
        """Initialize the Markdown renderer with options."""
        BaseRenderer._validate_options_type(options, MarkdownRendererOptions, "markdown")
        options = options or MarkdownRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: MarkdownRendererOptions = options
        self._output: list[str] = []
        self._list_marker_stack: list[str] = []
        self._tight_stack: list[bool] = []
        self._at_line_start: bool = True
        self._in_table_cell: bool = False

    def render_to_string(self, document: Document) -> str:
        """Render a document to Markdown text.

        Parameters
        ----------
        document : Document
            The document node to render

        Returns
        -------
        str
            Markdown text ending with a single newline, or an empty string
            for an empty document

        """
        self._output = []
        self._list_marker_stack = []
        self._tight_stack = []
        self._at_line_start = True
        self._in_table_cell = False

        document.accept(self)
        result = "".join(self._output)
        self._output.clear()
        return self._cleanup_output(result)

    def render(self, doc: Document, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render a document and write the Markdown to a path or stream."""
        self.write_text_output(self.render_to_string(doc), output)

    def _cleanup_output(self, text: str) -> str:
        """Normalize line endings and end the text with exactly one newline."""
        text = text.replace("\r\n", "\n").replace("\r", "\n").rstrip()
        return text + "\n" if text else ""

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _render_node(self, node: Node) -> str:
        saved_output = self._output
        self._output = []
        node.accept(self)
        rendered = "".join(self._output)
        self._output = saved_output
        return rendered

    def _render_blocks(self, nodes: list[Node], separator: str = "\n\n") -> str:
        rendered = (self._render_node(node) for node in nodes)
        return separator.join(block for block in rendered if block)

    def _render_inline_block(self, nodes: list[Node]) -> str:
        self._at_line_start = True
        content = self._render_inline_content(nodes)
        self._at_line_start = False
        return content

    def _escape_markdown(self, text: str, line_start: bool = False) -> str:
        """Escape special markdown characters with context awareness.

        - Backslash, backtick, asterisk, brackets, ``<`` and ``~`` are
          always escaped.
        - ``_`` is only escaped at word boundaries (``snake_case`` stays).
        - Block markers (``#``, ``>``, ``-``, ``+``, ``=`` and ordered list
          numbers) are only escaped at the start of a line.
        - ``|`` is escaped inside table cells.
        - Braces are never escaped, so template directives keep their text.

        Parameters
        ----------
        text : str
            Text to escape
        line_start : bool, default False
            Whether the text begins a line of output

        Returns
        -------
        str
            Escaped text

        """
        if not self.options.escape_special:
            return text

        escaped_chars = []
        for i, char in enumerate(text):
            if char in _ALWAYS_ESCAPE:
                escaped_chars.append("\\" + char)
            elif char == "_":
                prev_alnum = i > 0 and text[i - 1].isalnum()
                next_alnum = i < len(text) - 1 and text[i + 1].isalnum()
                escaped_chars.append(char if prev_alnum and next_alnum else "\\_")
            elif char == "|" and self._in_table_cell:
                escaped_chars.append("\\|")
            elif i == 0 and line_start and char in _LINE_START_MARKERS:
                escaped_chars.append("\\" + char)
            else:
                escaped_chars.append(char)
        escaped = "".join(escaped_chars)

        if line_start:
            match = _ORDERED_MARKER_RE.match(escaped)
            if match:
                escaped = f"{match.group(1)}\\{match.group(2)}{escaped[match.end():]}"
        return escaped

    def _format_destination(self, url: str) -> str:
        if not url or re.search(r"[\s<>]", url) or url.count("(") != url.count(")"):
            return "<" + url.replace("\\", "\\\\").replace("<", "\\<").replace(">", "\\>") + ">"
        return url

    @staticmethod
    def _format_title(title: str) -> str:
        if not title:
            return ""
        escaped = title.replace("\\", "\\\\").replace('"', '\\"')
        return f' "{escaped}"'

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        """Render a Document node."""
        self._output.append(self._render_blocks(node.children))

    def visit_front_matter(self, node: FrontMatter) -> None:
        """Render a FrontMatter node verbatim."""
        self._output.append(node.content.rstrip("\n"))

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Render a BlockQuote node by prefixing every line of its content."""
        self._tight_stack.append(False)
        quoted = self._render_blocks(node.children)
        self._tight_stack.pop()
        self._output.append(_prefix_lines(quoted, "> ", "> ") if quoted else ">")

    def _list_marker(self, node: List, index: int, item: Node) -> str:
        if node.list_type == "ordered":
            number = node.start + index
            marker = f"{number}{')' if node.delimiter == 'paren' else '.'}"
        else:
            marker = node.bullet_char if node.bullet_char in _BULLET_CHARS else "-"

        source = item if isinstance(item, ListItem) else node
        spaces = min(max(source.padding - len(marker), 1), 4)
        # more than three spaces of indentation would start a code block
        indent = min(max(source.marker_offset, 0), 3)
        return " " * indent + marker + " " * spaces

    def visit_list(self, node: List) -> None:
        """Render a List node.

        Parameters
        ----------
        node : List
            List to render; ``tight`` decides whether items are separated
            by blank lines

        """
        rendered_items = []
        self._tight_stack.append(node.tight)
        for index, item in enumerate(node.children):
            self._list_marker_stack.append(self._list_marker(node, index, item))
            rendered_items.append(self._render_node(item))
            self._list_marker_stack.pop()
        self._tight_stack.pop()

        self._output.append(("\n" if node.tight else "\n\n").join(rendered_items))

    def _render_item(self, children: list[Node], checkbox: str = "") -> str:
        marker = self._list_marker_stack[-1] if self._list_marker_stack else "- "
        tight = self._tight_stack[-1] if self._tight_stack else False
        body = self._render_blocks(children, "\n" if tight else "\n\n")
        if not body:
            return (marker + checkbox).rstrip()
        return _prefix_lines(checkbox + body, marker, " " * len(marker))

    def visit_list_item(self, node: ListItem) -> None:
        """Render a ListItem node using the marker chosen by its list."""
        self._output.append(self._render_item(node.children))

    def visit_task_item(self, node: TaskItem) -> None:
        """Render a TaskItem node with its checkbox."""
        self._output.append(self._render_item(node.children, "[x] " if node.checked else "[ ] "))

    def visit_definition_list(self, node: DefinitionList) -> None:
        """Render a DefinitionList node."""
        self._output.append(self._render_blocks(node.children))

    def visit_definition_item(self, node: DefinitionItem) -> None:
        """Render a DefinitionItem node: terms first, then ``: `` details."""
        self._output.append(self._render_blocks(node.children, "\n"))

    def visit_definition_term(self, node: DefinitionTerm) -> None:
        """Render a DefinitionTerm node."""
        self._output.append(self._render_inline_block(node.children))

    def visit_definition_description(self, node: DefinitionDescription) -> None:
        """Render a DefinitionDescription node."""
        self._tight_stack.append(False)
        body = self._render_blocks(node.children)
        self._tight_stack.pop()
        self._output.append(_prefix_lines(body, ": ", "  ") if body else ":")

    def visit_code_block(self, node: CodeBlock) -> None:
        """Render a CodeBlock node as a fenced block.

        The fence is longer than any run of the fence character in the
        code, and a backtick fence is swapped for tildes when the info
        string contains a backtick.
        """
        fence_char = self.options.code_fence_char
        if fence_char == "`" and "`" in node.info:
            fence_char = "~"
        fence_length = max(self.options.code_fence_min, _longest_run(node.literal, fence_char) + 1)
        fence = fence_char * fence_length

        literal = node.literal
        if literal and not literal.endswith("\n"):
            literal += "\n"
        self._output.append(f"{fence}{node.info}\n{literal}{fence}")

    def visit_html_block(self, node: HTMLBlock) -> None:
        """Render an HTMLBlock node verbatim."""
        self._output.append(node.literal.rstrip("\n"))

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a Paragraph node."""
        self._output.append(self._render_inline_block(node.children))

    def visit_heading(self, node: Heading) -> None:
        """Render a Heading node in ATX style."""
        content = self._render_inline_block(node.children)
        prefix = "#" * node.level
        self._output.append(f"{prefix} {content}" if content else prefix)

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        """Render a ThematicBreak node."""
        self._output.append(self.options.thematic_break)

    def visit_footnote_definition(self, node: FootnoteDefinition) -> None:
        """Render a FootnoteDefinition node with four-space continuation lines."""
        self._tight_stack.append(False)
        body = self._render_blocks(node.children)
        self._tight_stack.pop()
        self._output.append(_prefix_lines(body, f"[^{node.name}]: ", "    ") if body else f"[^{node.name}]:")

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def visit_table(self, node: Table) -> None:
        """Render a Table node as a GFM pipe table.

        The first row is used as the header even if it is not flagged as
        one, since a pipe table cannot exist without a header.
        """
        rows = [child for child in node.children if isinstance(child, TableRow)]
        if not rows:
            return

        num_cols = max([len(node.alignments)] + [len(row.children) for row in rows])
        if num_cols == 0:
            return

        rendered_rows = []
        for row in rows:
            cells = [self._render_node(cell) for cell in row.children]
            cells.extend([""] * (num_cols - len(cells)))
            rendered_rows.append(cells)

        alignments = list(node.alignments) + ["none"] * (num_cols - len(node.alignments))
        lines = ["| " + " | ".join(rendered_rows[0]) + " |"]
        lines.append("| " + " | ".join(_ALIGNMENT_ROWS.get(align, "---") for align in alignments) + " |")
        for cells in rendered_rows[1:]:
            lines.append("| " + " | ".join(cells) + " |")
        self._output.append("\n".join(lines))

    def visit_table_row(self, node: TableRow) -> None:
        """Render a TableRow node as a single pipe row."""
        cells = [self._render_node(cell) for cell in node.children]
        self._output.append("| " + " | ".join(cells) + " |")

    def visit_table_cell(self, node: TableCell) -> None:
        """Render a TableCell node; line breaks become spaces."""
        self._in_table_cell = True
        content = self._render_inline_block(node.children)
        self._in_table_cell = False
        self._output.append(content.replace("\n", " ").strip())

    # ------------------------------------------------------------------
    # Inlines
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        """Render a Text node with context-aware escaping."""
        text = self._escape_markdown(node.content, line_start=self._at_line_start)
        if node.content:
            self._at_line_start = False
        self._output.append(text)

    def visit_soft_break(self, node: SoftBreak) -> None:
        """Render a SoftBreak node."""
        self._output.append("\n")
        self._at_line_start = True

    def visit_line_break(self, node: LineBreak) -> None:
        """Render a LineBreak node as a backslash break."""
        self._output.append("\\\n")
        self._at_line_start = True

    def visit_code(self, node: Code) -> None:
        """Render a Code node.

        The backtick fence is one longer than the longest backtick run in
        the code; a space pads code that starts or ends with a backtick or
        is wrapped in spaces.
        """
        self._at_line_start = False
        literal = node.literal
        backticks = "`" * (_longest_run(literal, "`") + 1)
        if literal.startswith("`") or literal.endswith("`") or (
            literal.startswith(" ") and literal.endswith(" ") and literal.strip()
        ):
            literal = f" {literal} "
        self._output.append(f"{backticks}{literal}{backticks}")

    def visit_html_inline(self, node: HTMLInline) -> None:
        """Render an HTMLInline node verbatim."""
        self._at_line_start = False
        self._output.append(node.literal)

    def _wrap_inline(self, delimiter: str, children: list[Node]) -> None:
        self._at_line_start = False
        content = self._render_inline_content(children)
        self._output.append(f"{delimiter}{content}{delimiter}")

    def visit_emphasis(self, node: Emphasis) -> None:
        """Render an Emphasis node."""
        self._wrap_inline(self.options.emphasis_symbol, node.children)

    def visit_strong(self, node: Strong) -> None:
        """Render a Strong node."""
        self._wrap_inline("**", node.children)

    def visit_strikethrough(self, node: Strikethrough) -> None:
        """Render a Strikethrough node."""
        self._wrap_inline("~~", node.children)

    def visit_superscript(self, node: Superscript) -> None:
        """Render a Superscript node."""
        self._wrap_inline("^", node.children)

    def visit_link(self, node: Link) -> None:
        """Render a Link node inline."""
        self._at_line_start = False
        content = self._render_inline_content(node.children)
        self._output.append(f"[{content}]({self._format_destination(node.url)}{self._format_title(node.title)})")

    def visit_image(self, node: Image) -> None:
        """Render an Image node inline."""
        self._at_line_start = False
        alt = self._render_inline_content(node.children)
        self._output.append(f"![{alt}]({self._format_destination(node.url)}{self._format_title(node.title)})")

    def visit_footnote_reference(self, node: FootnoteReference) -> None:
        """Render a FootnoteReference node."""
        self._at_line_start = False
        self._output.append(f"[^{node.name}]")


def ast_to_markdown(document: Document, options: MarkdownRendererOptions | None = None) -> str:
    """Render a Document to Markdown text.

    Parameters
    ----------
    document : Document
        Document tree
    options : MarkdownRendererOptions or None, default = None
        Rendering options

    Returns
    -------
    str
        Markdown text

    """
    return MarkdownRenderer(options).render_to_string(document)
