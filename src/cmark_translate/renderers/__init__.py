#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/cmark_translate/renderers/__init__.py
"""Renderers turning document trees into text."""

from cmark_translate.renderers.markdown import MarkdownRenderer, ast_to_markdown

__all__ = ["MarkdownRenderer", "ast_to_markdown"]
