#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/cmark_translate/utils/__init__.py
"""Shared helpers for cmark-translate."""
