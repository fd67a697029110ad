#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/cmark_translate/options/__init__.py
"""Immutable configuration objects for parsing, rendering and translation.

Every option class is a frozen dataclass. Build a modified copy with
``create_updated``; nothing in the library holds process-wide settings.
"""

from __future__ import annotations

from cmark_translate.options.base import CloneFrozenMixin
from cmark_translate.options.markdown import (
    TRANSCODER_PARSER_OPTIONS,
    MarkdownParserOptions,
    MarkdownRendererOptions,
)
from cmark_translate.options.translate import TranslateOptions

__all__ = [
    "CloneFrozenMixin",
    "MarkdownParserOptions",
    "MarkdownRendererOptions",
    "TRANSCODER_PARSER_OPTIONS",
    "TranslateOptions",
]
