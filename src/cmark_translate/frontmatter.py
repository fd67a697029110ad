#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/cmark_translate/frontmatter.py
"""Front matter handling at the boundary of the Markdown transcoder.

Static site sources start with a metadata block, delimited by ``+++``
(TOML) or ``---`` (YAML). The block is split off before the body is
transcoded, a few of its string values are translated separately, and
the two parts are joined again on output.

"""

from __future__ import annotations

import copy
import logging
import sys
from pathlib import Path
from typing import IO, Any, Optional, Union

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

from cmark_translate.constants import (
    DEFAULT_FRONTMATTER_DELIMITER,
    DEFAULT_TRANSLATABLE_KEYS,
    DEPS_TOML_WRITE,
    DEPS_YAML,
    FRONTMATTER_FORMATS,
    FrontmatterFormat,
)
from cmark_translate.exceptions import FrontmatterError, ParsingError, RenderingError, ValidationError
from cmark_translate.parsers.base import BaseParser
from cmark_translate.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)


def split_frontmatter(text: str, delimiter: str) -> tuple[str, str]:
    """Split text into body and front matter at the first two delimiters.

    Parameters
    ----------
    text : str
        Document text starting with ``delimiter``
    delimiter : str
        Front matter delimiter, ``+++`` or ``---``

    Returns
    -------
    tuple of (str, str)
        The body after the closing delimiter and the raw front matter
        between the two delimiters

    Raises
    ------
    FrontmatterError
        If the closing delimiter is missing

    Examples
    --------
        >>> split_frontmatter("+++\\ntitle = 'a'\\n+++\\nBody\\n", "+++")
        ('\\nBody\\n', "\\ntitle = 'a'\\n")

    """
    parts = text.split(delimiter, 2)
    if len(parts) < 3:
        raise FrontmatterError(delimiter)
    _leading, frontmatter, body = parts
    return body, frontmatter


def read_cmark_with_frontmatter(
    source: Union[str, Path, IO[bytes], IO[str], bytes],
) -> tuple[str, Optional[str]]:
    """Read a Markdown document and split off its front matter.

    Parameters
    ----------
    source : str, Path, IO[bytes], IO[str] or bytes
        Document text, a path to a document, a stream, or UTF-8 bytes

    Returns
    -------
    tuple of (str, str or None)
        The Markdown body and the raw front matter, or ``(text, None)`` if
        the document does not start with a known delimiter

    Raises
    ------
    EncodingError
        If the input is not valid UTF-8
    FileError
        If a path cannot be read
    FrontmatterError
        If the front matter is never closed

    """
    text = BaseParser._load_text_content(source)
    delimiter = detect_frontmatter_delimiter(text)
    if delimiter is None:
        return text, None
    logger.debug("Found %s front matter", FRONTMATTER_FORMATS[delimiter])
    return split_frontmatter(text, delimiter)


def detect_frontmatter_delimiter(text: str) -> Optional[str]:
    """Return the front matter delimiter the text starts with, if any."""
    for delimiter in FRONTMATTER_FORMATS:
        if text.startswith(delimiter):
            return delimiter
    return None


def detect_frontmatter_format(delimiter: str) -> FrontmatterFormat:
    """Return the serialization format used with a front matter delimiter.

    Raises
    ------
    ValidationError
        If the delimiter is not ``+++`` or ``---``

    """
    try:
        return FRONTMATTER_FORMATS[delimiter]
    except KeyError:
        raise ValidationError(
            f"Unknown front matter delimiter: {delimiter!r}",
            parameter_name="delimiter",
            parameter_value=delimiter,
        ) from None


def join_frontmatter(body: str, frontmatter: Optional[str], delimiter: str = DEFAULT_FRONTMATTER_DELIMITER) -> str:
    """Join a body and its front matter back into one document.

    Parameters
    ----------
    body : str
        Markdown body
    frontmatter : str or None
        Serialized front matter; None yields the body alone
    delimiter : str, default "+++"
        Delimiter line written before and after the front matter

    Returns
    -------
    str
        ``<delimiter>\\n<frontmatter><delimiter>\\n<body>``

    """
    if frontmatter is None:
        return body
    frontmatter = frontmatter.lstrip("\n")
    if frontmatter and not frontmatter.endswith("\n"):
        frontmatter += "\n"
    return f"{delimiter}\n{frontmatter}{delimiter}\n{body}"


def load_frontmatter(raw: str, fmt: FrontmatterFormat) -> dict[str, Any]:
    """Parse raw front matter into a dictionary.

    Parameters
    ----------
    raw : str
        Front matter text without delimiters
    fmt : {"toml", "yaml"}
        Serialization format

    Returns
    -------
    dict
        Parsed front matter; an empty block yields an empty dict

    Raises
    ------
    ParsingError
        If the text is not valid for its format or is not a mapping

    """
    if fmt == "toml":
        try:
            return tomllib.loads(raw)
        except tomllib.TOMLDecodeError as e:
            raise ParsingError(f"Invalid TOML front matter: {e}", parsing_stage="frontmatter", original_error=e) from e
    return _load_yaml(raw)


@requires_dependencies("yaml front matter", DEPS_YAML)
def _load_yaml(raw: str) -> dict[str, Any]:
    import yaml

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ParsingError(f"Invalid YAML front matter: {e}", parsing_stage="frontmatter", original_error=e) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ParsingError("YAML front matter must be a mapping", parsing_stage="frontmatter")
    return data


def dump_frontmatter(data: dict[str, Any], fmt: FrontmatterFormat) -> str:
    """Serialize front matter back to text.

    Raises
    ------
    RenderingError
        If the data cannot be serialized in the requested format

    """
    if fmt == "toml":
        return _dump_toml(data)
    return _dump_yaml(data)


@requires_dependencies("toml front matter", DEPS_TOML_WRITE)
def _dump_toml(data: dict[str, Any]) -> str:
    import tomli_w

    try:
        return tomli_w.dumps(data)
    except TypeError as e:
        raise RenderingError(f"Cannot write TOML front matter: {e}", rendering_stage="frontmatter", original_error=e) from e


@requires_dependencies("yaml front matter", DEPS_YAML)
def _dump_yaml(data: dict[str, Any]) -> str:
    import yaml

    return yaml.safe_dump(data, allow_unicode=True, sort_keys=False)


def collect_translatable_fields(
    data: dict[str, Any], keys: tuple[str, ...] = DEFAULT_TRANSLATABLE_KEYS
) -> list[tuple[str, str]]:
    """Collect the string values selected by dotted key paths.

    Parameters
    ----------
    data : dict
        Parsed front matter
    keys : tuple of str
        Dotted paths such as ``"extra.time"``

    Returns
    -------
    list of (str, str)
        ``(path, value)`` pairs in ``keys`` order; paths that are missing or
        do not hold a string are skipped

    Examples
    --------
        >>> collect_translatable_fields({"title": "Hi", "draft": True, "extra": {"time": "5 min"}})
        [('title', 'Hi'), ('extra.time', '5 min')]

    """
    fields = []
    for path in keys:
        value: Any = data
        for part in path.split("."):
            if not isinstance(value, dict) or part not in value:
                value = None
                break
            value = value[part]
        if isinstance(value, str):
            fields.append((path, value))
    return fields


def apply_translations(data: dict[str, Any], fields: list[tuple[str, str]], translated: list[str]) -> dict[str, Any]:
    """Return a copy of ``data`` with translated values written back.

    Raises
    ------
    ValidationError
        If the number of translations does not match the number of fields

    """
    if len(fields) != len(translated):
        raise ValidationError(
            f"Expected {len(fields)} translations, got {len(translated)}",
            parameter_name="translated",
            parameter_value=len(translated),
        )

    result = copy.deepcopy(data)
    for (path, _original), value in zip(fields, translated):
        *parents, leaf = path.split(".")
        target = result
        for part in parents:
            target = target[part]
        target[leaf] = value
    return result
