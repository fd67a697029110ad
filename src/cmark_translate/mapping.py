#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/cmark_translate/mapping.py
"""Tag vocabulary and attribute codecs shared by the projector and reconstructor.

Every document node kind maps to exactly one XML element name in the
``markdown`` namespace (text runs map to element text). Attribute values
are always strings; this module owns how numbers, booleans, list markers
and table alignments are spelled, and how they are read back.

Decoding is deliberately permissive. Attribute values may have passed
through a translation service, so a missing or malformed value decodes to
a default instead of failing:

- numbers: missing, unparseable or negative -> ``0``
- booleans: true only for exactly ``"1"``
- alignment characters other than ``l``, ``c``, ``r`` -> ``"none"``

"""

from __future__ import annotations

import logging
import re
from typing import Iterable

from cmark_translate.constants import (
    XML_NAMESPACE,
    XML_ROOT_TAG,
    ListDelimiter,
    ListType,
    TableAlignment,
)

logger = logging.getLogger(__name__)

# =============================================================================
# Element names
# =============================================================================

TAG_BODY = XML_ROOT_TAG
TAG_HEADER = "header"
TAG_BLOCKQUOTE = "blockquote"
TAG_BULLET_LIST = "ul"
TAG_ORDERED_LIST = "ol"
TAG_LIST_ITEM = "li"
TAG_DESCRIPTION_LIST = "dl"
TAG_DESCRIPTION_ITEM = "di"
TAG_DESCRIPTION_TERM = "dt"
TAG_DESCRIPTION_DETAILS = "dd"
TAG_CODE_BLOCK = "pre"
TAG_HTML_BLOCK = "object"
TAG_PARAGRAPH = "p"
TAG_THEMATIC_BREAK = "hr"
TAG_FOOTNOTE_DEFINITION = "footer"
TAG_TABLE = "table"
TAG_TABLE_HEADER_ROW = "th"
TAG_TABLE_ROW = "tr"
TAG_TABLE_CELL = "td"
TAG_TASK_ITEM = "input"
TAG_SOFT_BREAK = "wbr"
TAG_LINE_BREAK = "br"
TAG_CODE = "code"
TAG_HTML_INLINE = "embed"
TAG_EMPHASIS = "em"
TAG_STRONG = "strong"
TAG_STRIKETHROUGH = "del"
TAG_SUPERSCRIPT = "sup"
TAG_LINK = "a"
TAG_IMAGE = "img"
TAG_FOOTNOTE_REFERENCE = "sub"

HEADING_TAGS = tuple(f"h{level}" for level in range(1, 7))

# Elements whose text content is a literal payload; their children are never parsed
LITERAL_TAGS = frozenset({TAG_HEADER, TAG_CODE_BLOCK})

# =============================================================================
# Attribute names
# =============================================================================

ATTR_TYPE = "type"
ATTR_OFFSET = "offset"
ATTR_PADDING = "padding"
ATTR_START = "start"
ATTR_DELIMITER = "delimiter"
ATTR_TIGHT = "tight"
ATTR_INFO = "info"
ATTR_LITERAL = "literal"
ATTR_LEVEL = "level"
ATTR_NAME = "name"
ATTR_ALIGN = "align"
ATTR_CHECKED = "checked"
ATTR_HREF = "href"
ATTR_SRC = "src"
ATTR_TITLE = "title"

# =============================================================================
# Translation-service tag contract
# =============================================================================

# Content the service must leave untouched
IGNORE_TAGS: tuple[str, ...] = (TAG_HEADER, TAG_HTML_INLINE, TAG_HTML_BLOCK)

# Elements that delimit sentences
SPLITTING_TAGS: tuple[str, ...] = (
    TAG_BLOCKQUOTE,
    TAG_LIST_ITEM,
    TAG_DESCRIPTION_TERM,
    TAG_DESCRIPTION_DETAILS,
    TAG_PARAGRAPH,
    *HEADING_TAGS,
    TAG_TABLE_HEADER_ROW,
    TAG_TABLE_CELL,
)

# Inline elements that must not break a sentence
NON_SPLITTING_TAGS: tuple[str, ...] = (
    TAG_HTML_INLINE,
    TAG_EMPHASIS,
    TAG_STRONG,
    TAG_STRIKETHROUGH,
    TAG_LINK,
    TAG_IMAGE,
)

# =============================================================================
# Codecs
# =============================================================================

_TRUE = "1"
_FALSE = "0"
_UNSIGNED_RE = re.compile(r"\+?[0-9]+")

_DELIMITER_CHARS: dict[ListDelimiter, str] = {"period": ".", "paren": ")"}
_LIST_TYPE_CODES: dict[ListType, str] = {"ordered": "o", "bullet": "u"}
_ALIGNMENT_CHARS: dict[TableAlignment, str] = {"none": "-", "left": "l", "center": "c", "right": "r"}
_ALIGNMENT_FROM_CHAR: dict[str, TableAlignment] = {char: align for align, char in _ALIGNMENT_CHARS.items()}


def qualified(tag: str) -> str:
    """Return the namespace-qualified (Clark notation) form of a tag name."""
    return f"{{{XML_NAMESPACE}}}{tag}"


def local_name(tag: object) -> str:
    """Strip any ``{namespace}`` prefix from an element tag.

    Non-string tags (comments and processing instructions in ElementTree)
    yield an empty string, which matches no vocabulary entry.
    """
    if not isinstance(tag, str):
        return ""
    if tag.startswith("{"):
        return tag.rpartition("}")[2]
    return tag


def encode_int(value: int) -> str:
    """Encode a number as base-10 text."""
    return str(value)


def decode_int(value: str | None) -> int:
    """Decode an unsigned number, defaulting to 0 when missing or malformed.

    Parameters
    ----------
    value : str or None
        Attribute value, surrounding whitespace is ignored

    Returns
    -------
    int
        Parsed value, or 0

    Examples
    --------
        >>> decode_int("12")
        12
        >>> decode_int("abc")
        0
        >>> decode_int(None)
        0

    """
    if value is None:
        return 0
    text = value.strip()
    if not _UNSIGNED_RE.fullmatch(text):
        return 0
    return int(text)


def encode_bool(value: bool) -> str:
    """Encode a flag as ``"1"`` or ``"0"``."""
    return _TRUE if value else _FALSE


def decode_bool(value: str | None) -> bool:
    """Decode a flag; only the exact string ``"1"`` is true."""
    return value == _TRUE


def encode_delimiter(delimiter: ListDelimiter) -> str:
    """Encode an ordered-list delimiter as ``.`` or ``)``."""
    return _DELIMITER_CHARS[delimiter]


def decode_delimiter(value: str | None) -> ListDelimiter:
    """Decode an ordered-list delimiter; anything but ``)`` is a period."""
    return "paren" if value == _DELIMITER_CHARS["paren"] else "period"


def encode_list_type(list_type: ListType) -> str:
    """Encode a list kind as ``o`` (ordered) or ``u`` (bullet)."""
    return _LIST_TYPE_CODES[list_type]


def decode_list_type(value: str | None, tag: str = TAG_BULLET_LIST) -> ListType:
    """Decode a list kind from its ``type`` attribute.

    When the attribute is absent the element name (``ol``/``ul``) decides.
    """
    if value is None:
        return "ordered" if tag == TAG_ORDERED_LIST else "bullet"
    return "ordered" if value == _LIST_TYPE_CODES["ordered"] else "bullet"


def list_tag(list_type: ListType) -> str:
    """Return the element name for a list kind."""
    return TAG_ORDERED_LIST if list_type == "ordered" else TAG_BULLET_LIST


def encode_alignments(alignments: Iterable[TableAlignment]) -> str:
    """Encode column alignments as one character per column.

    Examples
    --------
        >>> encode_alignments(["left", "none", "center", "right"])
        'l-cr'

    """
    return "".join(_ALIGNMENT_CHARS.get(align, "-") for align in alignments)


def decode_alignments(value: str | None) -> list[TableAlignment]:
    """Decode column alignments character by character.

    A missing attribute yields no columns; an unknown character yields
    ``"none"`` for that column.
    """
    if value is None:
        return []
    return [_ALIGNMENT_FROM_CHAR.get(char, "none") for char in value]


def heading_tag(level: int) -> str:
    """Return the element name for a heading level."""
    return f"h{level}"


def decode_heading_level(tag: str, level_attr: str | None) -> int:
    """Resolve a heading level from its ``level`` attribute and element name.

    The attribute wins when it holds a level from 1 to 6. Otherwise the
    digit in the element name is used. A disagreement between the two is
    logged, never rejected.

    Parameters
    ----------
    tag : str
        Local element name, one of ``h1`` ... ``h6``
    level_attr : str or None
        Raw ``level`` attribute

    Returns
    -------
    int
        Heading level between 1 and 6

    """
    tag_level = int(tag[1]) if tag in HEADING_TAGS else 1
    attr_level = decode_int(level_attr)

    if 1 <= attr_level <= 6:
        if attr_level != tag_level:
            logger.debug("Heading element <%s> carries level=%s; using the attribute", tag, level_attr)
        return attr_level

    if level_attr is not None:
        logger.debug("Ignoring invalid heading level %r on <%s>", level_attr, tag)
    return tag_level
