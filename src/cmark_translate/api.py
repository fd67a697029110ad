#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/cmark_translate/api.py
"""Markdown to XML transcoding entry points.

These functions chain the pieces of the transcoder: optional shortcode
escaping, Markdown parsing, projection to XML, and the way back through
reconstruction and rendering.

Examples
--------
    >>> xml = xml_from_cmark("# Hello\\n")
    >>> cmark_from_xml(xml)
    '# Hello\\n'

"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as StdET

import defusedxml.ElementTree as ET
from defusedxml import DefusedXmlException

from cmark_translate.ast import Document
from cmark_translate.exceptions import XmlParsingError
from cmark_translate.options.markdown import TRANSCODER_PARSER_OPTIONS, MarkdownParserOptions, MarkdownRendererOptions
from cmark_translate.parsers.markdown import markdown_to_ast
from cmark_translate.projector import project, to_string
from cmark_translate.reconstructor import reconstruct
from cmark_translate.renderers.markdown import ast_to_markdown
from cmark_translate.shortcodes import escape_shortcodes, unescape_shortcodes

logger = logging.getLogger(__name__)


def xmldom_from_cmark(
    cmark_text: str,
    escape_shortcode: bool = False,
    parser_options: MarkdownParserOptions | None = None,
) -> StdET.Element:
    """Parse Markdown and project it onto an XML element tree.

    Parameters
    ----------
    cmark_text : str
        Markdown source
    escape_shortcode : bool, default False
        Disguise ``{{ }}`` and ``{% %}`` directives before parsing
    parser_options : MarkdownParserOptions or None, default None
        Markdown extensions to parse; defaults to tables and strikethrough

    Returns
    -------
    xml.etree.ElementTree.Element
        The ``{markdown}body`` element

    """
    if escape_shortcode:
        cmark_text = escape_shortcodes(cmark_text)
        logger.debug("Shortcode escaped text:\n%s", cmark_text)

    document = markdown_to_ast(cmark_text, parser_options or TRANSCODER_PARSER_OPTIONS)
    return project(document)


def xml_from_cmark(
    cmark_text: str,
    escape_shortcode: bool = False,
    parser_options: MarkdownParserOptions | None = None,
) -> str:
    """Convert Markdown text to an XML string in the ``markdown`` namespace."""
    return to_string(xmldom_from_cmark(cmark_text, escape_shortcode, parser_options))


def cmark_from_xmldom(
    element: StdET.Element,
    escape_shortcode: bool = False,
    renderer_options: MarkdownRendererOptions | None = None,
) -> str:
    """Rebuild Markdown from an XML element tree.

    Parameters
    ----------
    element : xml.etree.ElementTree.Element
        Root element, normally ``{markdown}body``
    escape_shortcode : bool, default False
        Restore directives disguised by :func:`xmldom_from_cmark`
    renderer_options : MarkdownRendererOptions or None, default None
        Options for the Markdown renderer

    Returns
    -------
    str
        Markdown text

    """
    node = reconstruct(element)
    document = node if isinstance(node, Document) else Document(children=[node])

    cmark_text = ast_to_markdown(document, renderer_options)
    if escape_shortcode:
        cmark_text = unescape_shortcodes(cmark_text)
    return cmark_text


def cmark_from_xml(
    xml_text: str,
    escape_shortcode: bool = False,
    renderer_options: MarkdownRendererOptions | None = None,
) -> str:
    """Rebuild Markdown from an XML string.

    Raises
    ------
    XmlParsingError
        If the XML is not well formed or uses forbidden constructs such as
        entity declarations

    """
    try:
        root = ET.fromstring(xml_text)
    except (ET.ParseError, DefusedXmlException) as e:
        raise XmlParsingError(f"Cannot parse XML: {e}", original_error=e) from e
    return cmark_from_xmldom(root, escape_shortcode, renderer_options)
