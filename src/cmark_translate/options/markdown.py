#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/cmark_translate/options/markdown.py
"""Configuration options for Markdown parsing and rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from cmark_translate.constants import DEFAULT_FRONTMATTER_DELIMITER
from cmark_translate.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class MarkdownParserOptions(CloneFrozenMixin):
    """Configuration options for Markdown-to-tree parsing.

    The defaults are the extension set the XML transcoder is built for:
    tables and strikethrough on, every other extension off, and ``+++``
    front matter recognised.

    Parameters
    ----------
    parse_strikethrough : bool, default True
        Whether to parse strikethrough syntax (~~text~~).
    parse_tables : bool, default True
        Whether to parse table syntax (GFM pipe tables).
    parse_autolinks : bool, default False
        Whether bare URLs become links.
    parse_task_lists : bool, default False
        Whether to parse task list checkboxes (- [ ] and - [x]).
    parse_superscript : bool, default False
        Whether to parse superscript syntax (^text^).
    parse_footnotes : bool, default False
        Whether to parse footnote references and definitions.
    parse_definition_lists : bool, default False
        Whether to parse definition lists (term / : details).
    front_matter_delimiter : str or None, default "+++"
        Line that opens and closes a front matter block at the very start
        of the document. None disables front matter detection.

    """

    parse_strikethrough: bool = field(
        default=True,
        metadata={"help": "Parse strikethrough syntax (~~text~~)", "importance": "core"},
    )
    parse_tables: bool = field(
        default=True,
        metadata={"help": "Parse table syntax (GFM pipe tables)", "importance": "core"},
    )
    parse_autolinks: bool = field(
        default=False,
        metadata={"help": "Turn bare URLs into links", "importance": "advanced"},
    )
    parse_task_lists: bool = field(
        default=False,
        metadata={"help": "Parse task list checkboxes (- [ ] and - [x])", "importance": "advanced"},
    )
    parse_superscript: bool = field(
        default=False,
        metadata={"help": "Parse superscript syntax (^text^)", "importance": "advanced"},
    )
    parse_footnotes: bool = field(
        default=False,
        metadata={"help": "Parse footnote references and definitions", "importance": "advanced"},
    )
    parse_definition_lists: bool = field(
        default=False,
        metadata={"help": "Parse definition lists (term / : details)", "importance": "advanced"},
    )
    front_matter_delimiter: Optional[str] = field(
        default=DEFAULT_FRONTMATTER_DELIMITER,
        metadata={"help": "Delimiter line of a leading front matter block", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate the front matter delimiter.

        Raises
        ------
        ValueError
            If the delimiter is empty or spans several lines.

        """
        delimiter = self.front_matter_delimiter
        if delimiter is not None and (not delimiter.strip() or "\n" in delimiter):
            raise ValueError(f"front_matter_delimiter must be a single non-blank line, got {delimiter!r}")


@dataclass(frozen=True)
class MarkdownRendererOptions(CloneFrozenMixin):
    """Configuration options for tree-to-Markdown rendering.

    Parameters
    ----------
    code_fence_char : {"`", "~"}, default "`"
        Character used for fenced code blocks.
    code_fence_min : int, default 3
        Minimum fence length.
    thematic_break : str, default "---"
        Text emitted for a thematic break.
    emphasis_symbol : {"*", "_"}, default "*"
        Delimiter used for emphasis.
    escape_special : bool, default True
        Whether to backslash-escape Markdown syntax characters in text.

    """

    code_fence_char: str = field(
        default="`",
        metadata={"help": "Code fence character", "choices": ["`", "~"], "importance": "advanced"},
    )
    code_fence_min: int = field(
        default=3,
        metadata={"help": "Minimum code fence length", "type": int, "importance": "advanced"},
    )
    thematic_break: str = field(
        default="---",
        metadata={"help": "Text emitted for a thematic break", "importance": "advanced"},
    )
    emphasis_symbol: str = field(
        default="*",
        metadata={"help": "Emphasis delimiter", "choices": ["*", "_"], "importance": "advanced"},
    )
    escape_special: bool = field(
        default=True,
        metadata={"help": "Escape Markdown syntax characters in text", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate rendering options.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.code_fence_char not in ("`", "~"):
            raise ValueError(f"code_fence_char must be '`' or '~', got {self.code_fence_char!r}")
        if self.code_fence_min < 3:
            raise ValueError(f"code_fence_min must be at least 3, got {self.code_fence_min}")
        if self.emphasis_symbol not in ("*", "_"):
            raise ValueError(f"emphasis_symbol must be '*' or '_', got {self.emphasis_symbol!r}")


# Extension set used by the XML transcoder
TRANSCODER_PARSER_OPTIONS = MarkdownParserOptions()
