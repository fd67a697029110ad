#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/cmark_translate/parsers/__init__.py
"""Parsers producing document trees."""

from cmark_translate.parsers.markdown import MarkdownToAstConverter, markdown_to_ast

__all__ = ["MarkdownToAstConverter", "markdown_to_ast"]
