#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/cmark_translate/translate.py
"""Translate Markdown documents through the XML transcoder.

The body travels as XML so the translation service keeps the document
structure; front matter values are translated as plain strings.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol, Sequence

from cmark_translate.api import cmark_from_xml, xml_from_cmark
from cmark_translate.constants import DEFAULT_FRONTMATTER_DELIMITER, DEFAULT_TRANSLATABLE_KEYS, FrontmatterFormat
from cmark_translate.deepl import Formality, Language
from cmark_translate.exceptions import FileError
from cmark_translate.frontmatter import (
    apply_translations,
    collect_translatable_fields,
    detect_frontmatter_delimiter,
    detect_frontmatter_format,
    dump_frontmatter,
    join_frontmatter,
    load_frontmatter,
    split_frontmatter,
)
from cmark_translate.options.translate import TranslateOptions
from cmark_translate.parsers.base import BaseParser

logger = logging.getLogger(__name__)


class Translator(Protocol):
    """The translation calls the pipeline needs; :class:`~cmark_translate.deepl.Deepl` provides them."""

    def translate_strings(
        self, from_lang: Language, to_lang: Language, formality: Formality, texts: Sequence[str]
    ) -> list[str]: ...

    def translate_xml(self, from_lang: Language, to_lang: Language, formality: Formality, xml_body: str) -> str: ...


def translate_cmark(
    translator: Translator,
    from_lang: Language,
    to_lang: Language,
    formality: Formality,
    cmark_text: str,
    options: Optional[TranslateOptions] = None,
) -> str:
    """Translate a Markdown body.

    Parameters
    ----------
    translator : Translator
        Translation service client
    from_lang, to_lang : Language
        Source and target languages
    formality : Formality
        Requested formality
    cmark_text : str
        Markdown body without front matter
    options : TranslateOptions or None, default None
        Shortcode escaping and parser/renderer options

    Returns
    -------
    str
        Translated Markdown

    """
    options = options or TranslateOptions()
    xml_text = xml_from_cmark(cmark_text, options.escape_shortcodes, options.parser_options)
    logger.debug("XML sent for translation:\n%s", xml_text)

    translated_xml = translator.translate_xml(from_lang, to_lang, formality, xml_text)
    logger.debug("Translated XML:\n%s", translated_xml)

    return cmark_from_xml(translated_xml, options.escape_shortcodes, options.renderer_options)


def translate_frontmatter(
    translator: Translator,
    from_lang: Language,
    to_lang: Language,
    formality: Formality,
    raw_frontmatter: str,
    fmt: FrontmatterFormat,
    keys: tuple[str, ...] = DEFAULT_TRANSLATABLE_KEYS,
) -> str:
    """Translate selected string values of a front matter block.

    Returns
    -------
    str
        The re-serialized front matter, or the raw text unchanged if none
        of ``keys`` holds a string

    """
    data = load_frontmatter(raw_frontmatter, fmt)
    fields = collect_translatable_fields(data, keys)
    if not fields:
        logger.debug("No translatable front matter values")
        return raw_frontmatter

    translated = translator.translate_strings(from_lang, to_lang, formality, [value for _path, value in fields])
    return dump_frontmatter(apply_translations(data, fields, translated), fmt)


def translate_cmark_file(
    translator: Translator,
    from_lang: Language,
    to_lang: Language,
    formality: Formality,
    input_path: str | Path,
    output_path: str | Path,
    options: Optional[TranslateOptions] = None,
) -> str:
    """Translate a Markdown file, front matter included, and write the result.

    The front matter keeps its original delimiter.

    Returns
    -------
    str
        The text written to ``output_path``

    Raises
    ------
    FileError
        If the input cannot be read or the output cannot be written
    FrontmatterError
        If the front matter is never closed

    """
    options = options or TranslateOptions()
    text = BaseParser._load_text_content(Path(input_path))

    delimiter = detect_frontmatter_delimiter(text)
    if delimiter is None:
        body, frontmatter = text, None
    else:
        body, frontmatter = split_frontmatter(text, delimiter)
    logger.debug("Read %s (%d characters, front matter: %s)", input_path, len(text), frontmatter is not None)

    if frontmatter is not None and delimiter is not None:
        frontmatter = translate_frontmatter(
            translator,
            from_lang,
            to_lang,
            formality,
            frontmatter,
            detect_frontmatter_format(delimiter),
            options.translatable_keys,
        )

    translated_body = translate_cmark(translator, from_lang, to_lang, formality, body, options)
    result = join_frontmatter(translated_body, frontmatter, delimiter or DEFAULT_FRONTMATTER_DELIMITER)

    try:
        Path(output_path).write_text(result, encoding="utf-8", newline="")
    except OSError as e:
        raise FileError(f"Cannot write {output_path}: {e}", file_path=str(output_path), original_error=e) from e

    logger.info("Translated %s -> %s", input_path, output_path)
    return result
