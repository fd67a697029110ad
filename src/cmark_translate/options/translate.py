#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/cmark_translate/options/translate.py
"""Configuration options for the document translation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field

from cmark_translate.constants import (
    DEFAULT_ESCAPE_SHORTCODES,
    DEFAULT_PRESERVE_FORMATTING,
    DEFAULT_TRANSLATABLE_KEYS,
)
from cmark_translate.options.base import CloneFrozenMixin
from cmark_translate.options.markdown import MarkdownParserOptions, MarkdownRendererOptions


@dataclass(frozen=True)
class TranslateOptions(CloneFrozenMixin):
    """Options for translating a Markdown document.

    Parameters
    ----------
    escape_shortcodes : bool, default True
        Disguise ``{{ }}`` and ``{% %}`` directives before parsing.
    translatable_keys : tuple of str, default ("title", "description", "extra.time")
        Dotted paths of front matter values to translate.
    preserve_formatting : bool, default True
        Ask the service not to correct punctuation or capitalisation.
    parser_options : MarkdownParserOptions
        Options for parsing the body.
    renderer_options : MarkdownRendererOptions
        Options for rendering the translated body.

    """

    escape_shortcodes: bool = field(
        default=DEFAULT_ESCAPE_SHORTCODES,
        metadata={"help": "Hide {{ }} and {% %} directives from the translator", "importance": "core"},
    )
    translatable_keys: tuple[str, ...] = field(
        default=DEFAULT_TRANSLATABLE_KEYS,
        metadata={"help": "Front matter keys (dotted paths) to translate", "importance": "core"},
    )
    preserve_formatting: bool = field(
        default=DEFAULT_PRESERVE_FORMATTING,
        metadata={"help": "Ask the service to keep formatting untouched", "importance": "advanced"},
    )
    parser_options: MarkdownParserOptions = field(default_factory=MarkdownParserOptions)
    renderer_options: MarkdownRendererOptions = field(default_factory=MarkdownRendererOptions)
