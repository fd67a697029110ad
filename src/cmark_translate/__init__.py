"""cmark-translate - structure-preserving CommonMark translation.

A CommonMark document is parsed into a document tree and projected onto
an XML tree whose elements mirror the Markdown structure. The XML is what
a translation service such as DeepL sees: it translates the text runs and
leaves the markup alone. The translated XML is rebuilt into a document
tree and rendered back to CommonMark.

Template directives (``{{ ... }}`` and ``{% ... %}``) can be hidden from
both the parser and the translator by disguising them as HTML comments.

Examples
--------
Round trip a document through XML:

    >>> from cmark_translate import xml_from_cmark, cmark_from_xml
    >>> xml = xml_from_cmark("# Hello *world*\\n")
    >>> cmark_from_xml(xml)
    '# Hello *world*\\n'

Work with the element tree directly:

    >>> from cmark_translate import xmldom_from_cmark, cmark_from_xmldom
    >>> root = xmldom_from_cmark("See {{ figure }} here.\\n", escape_shortcode=True)
    >>> cmark_from_xmldom(root, escape_shortcode=True)
    'See {{ figure }} here.\\n'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

__version__ = "0.1.0"

from cmark_translate.api import cmark_from_xml, cmark_from_xmldom, xml_from_cmark, xmldom_from_cmark
from cmark_translate.exceptions import (
    CmarkTranslateError,
    ConfigError,
    DependencyError,
    EncodingError,
    FileError,
    FrontmatterError,
    ParsingError,
    RenderingError,
    TranslationError,
    UnexpectedEndOfInputError,
    ValidationError,
    XmlParsingError,
)
from cmark_translate.frontmatter import read_cmark_with_frontmatter
from cmark_translate.options import (
    MarkdownParserOptions,
    MarkdownRendererOptions,
    TranslateOptions,
)
from cmark_translate.projector import project
from cmark_translate.reconstructor import reconstruct
from cmark_translate.shortcodes import escape_shortcodes, unescape_shortcodes

__all__ = [
    "__version__",
    # Transcoding
    "xmldom_from_cmark",
    "xml_from_cmark",
    "cmark_from_xmldom",
    "cmark_from_xml",
    "project",
    "reconstruct",
    "escape_shortcodes",
    "unescape_shortcodes",
    "read_cmark_with_frontmatter",
    # Options
    "MarkdownParserOptions",
    "MarkdownRendererOptions",
    "TranslateOptions",
    # Exceptions
    "CmarkTranslateError",
    "ConfigError",
    "DependencyError",
    "EncodingError",
    "FileError",
    "FrontmatterError",
    "ParsingError",
    "RenderingError",
    "TranslationError",
    "UnexpectedEndOfInputError",
    "ValidationError",
    "XmlParsingError",
]
