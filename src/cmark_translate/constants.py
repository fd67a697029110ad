#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/cmark_translate/constants.py
"""Constants and default values for cmark-translate.

Constants are organized by category:
1. Type Definitions - Literal types shared by nodes, options and the CLI
2. XML Surface - namespace and root tag of the projected tree
3. Front Matter - delimiters and translatable keys
4. Translation Service - DeepL endpoints and request defaults
5. Dependencies - optional packages checked at call time
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

ListType = Literal["bullet", "ordered"]
ListDelimiter = Literal["period", "paren"]
TableAlignment = Literal["none", "left", "center", "right"]
FrontmatterFormat = Literal["toml", "yaml"]
FormalityType = Literal["default", "more", "less", "prefer_more", "prefer_less"]

# =============================================================================
# XML Surface
# =============================================================================

XML_NAMESPACE = "markdown"
XML_ROOT_TAG = "body"

# =============================================================================
# Front Matter
# =============================================================================

TOML_FRONTMATTER_DELIMITER = "+++"
YAML_FRONTMATTER_DELIMITER = "---"
DEFAULT_FRONTMATTER_DELIMITER = TOML_FRONTMATTER_DELIMITER

FRONTMATTER_FORMATS: dict[str, FrontmatterFormat] = {
    TOML_FRONTMATTER_DELIMITER: "toml",
    YAML_FRONTMATTER_DELIMITER: "yaml",
}

# Dotted paths into the parsed front matter whose string values get translated
DEFAULT_TRANSLATABLE_KEYS: tuple[str, ...] = ("title", "description", "extra.time")

# =============================================================================
# Translation Service
# =============================================================================

DEEPL_FREE_ENDPOINT = "https://api-free.deepl.com/v2/"
DEEPL_PRO_ENDPOINT = "https://api.deepl.com/v2/"
DEEPL_FREE_KEY_SUFFIX = ":fx"
DEEPL_AUTH_SCHEME = "DeepL-Auth-Key"
DEEPL_DEFAULT_TIMEOUT = 30.0
DEEPL_USER_AGENT = "cmark-translate"

DEFAULT_CONFIG_FILENAME = "deepl.toml"
CONFIG_ENV_VAR = "CMARK_TRANSLATE_CONFIG"
API_KEY_ENV_VAR = "DEEPL_API_KEY"

DEFAULT_FORMALITY: FormalityType = "default"
DEFAULT_ESCAPE_SHORTCODES = True
DEFAULT_PRESERVE_FORMATTING = True

# =============================================================================
# Dependencies
# =============================================================================

DEPS_MARKDOWN = [("mistune", "mistune", ">=3.0.0")]
DEPS_DEEPL = [("httpx", "httpx", ">=0.24.0")]
DEPS_XLSX = [("openpyxl", "openpyxl", "")]
DEPS_YAML = [("PyYAML", "yaml", ">=5.1")]
DEPS_TOML_WRITE = [("tomli-w", "tomli_w", "")]
