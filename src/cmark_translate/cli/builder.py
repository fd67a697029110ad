#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/cmark_translate/cli/builder.py
"""Argument parser and exit codes for the cmark-translate command line."""

from __future__ import annotations

import argparse

from cmark_translate.constants import CONFIG_ENV_VAR, DEFAULT_CONFIG_FILENAME, DEFAULT_FORMALITY
from cmark_translate.exceptions import (
    ConfigError,
    DependencyError,
    FileError,
    ParsingError,
    RenderingError,
    TranslationError,
    ValidationError,
)
from cmark_translate.logging_utils import DEFAULT_LOG_LEVEL

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
EXIT_RENDERING_ERROR = 7
EXIT_TRANSLATION_ERROR = 11

FORMALITY_CHOICES = ("default", "more", "less", "prefer_more", "prefer_less")

_EPILOG = f"""\
examples:
  cmark-translate translate --from en --to de content/post.md content/post.de.md
  cmark-translate glossary register --name blog --from en --to de glossary.xlsx
  cmark-translate glossary list --rich
  cmark-translate usage
  cmark-translate to-xml post.md post.xml

configuration:
  The DeepL API key is read from --config, ${CONFIG_ENV_VAR},
  ./{DEFAULT_CONFIG_FILENAME} or ~/.{DEFAULT_CONFIG_FILENAME}, in that order.
"""


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (DependencyError, ImportError)):
        return EXIT_DEPENDENCY_ERROR

    if isinstance(exception, (ValidationError, ConfigError)):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR

    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR

    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR

    if isinstance(exception, TranslationError):
        return EXIT_TRANSLATION_ERROR

    return EXIT_ERROR


def _add_language_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--from", "-f", dest="from_lang", required=True, metavar="LANG", help="Source language code (e.g. en)"
    )
    parser.add_argument("--to", "-t", dest="to_lang", required=True, metavar="LANG", help="Target language code")


def create_parser(version: str) -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands.

    Parameters
    ----------
    version : str
        Version shown by ``--version``

    Returns
    -------
    argparse.ArgumentParser
        Parser whose subcommands set ``command`` (and ``glossary_command``)

    """
    parser = argparse.ArgumentParser(
        prog="cmark-translate",
        description="Translate CommonMark documents with DeepL while keeping their structure.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", "-V", action="version", version=f"cmark-translate {version}")
    parser.add_argument("--config", "-c", metavar="FILE", help="DeepL configuration file (TOML)")
    parser.add_argument(
        "--log-level",
        default=DEFAULT_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level (default: %(default)s)",
    )
    parser.add_argument("--log-file", metavar="FILE", help="Also write log messages to this file")
    parser.add_argument(
        "--trace", action="store_true", help="Debug logging with timestamps, including HTTP client messages"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    translate = subparsers.add_parser("translate", help="Translate a CommonMark file")
    _add_language_arguments(translate)
    translate.add_argument(
        "--formality",
        default=DEFAULT_FORMALITY,
        type=lambda value: value.lower().replace("-", "_"),
        choices=FORMALITY_CHOICES,
        help="Formality of the translation (default: %(default)s)",
    )
    translate.add_argument(
        "--no-escape-shortcodes",
        action="store_true",
        help="Do not hide {{ }} and {%% %%} template directives from the translator",
    )
    translate.add_argument(
        "--no-preserve-formatting",
        action="store_true",
        help="Let DeepL correct punctuation and capitalisation",
    )
    translate.add_argument(
        "--frontmatter-key",
        dest="frontmatter_keys",
        action="append",
        metavar="KEY",
        help="Front matter key (dotted path) to translate; repeat for several "
        "(default: title, description, extra.time)",
    )
    translate.add_argument("input", help="Input CommonMark file")
    translate.add_argument("output", help="Output file for the translated document")

    glossary = subparsers.add_parser("glossary", help="Manage DeepL glossaries")
    glossary_sub = glossary.add_subparsers(dest="glossary_command", metavar="ACTION")
    register = glossary_sub.add_parser("register", help="Register a glossary file (.xlsx, .tsv or .csv)")
    register.add_argument("--name", "-n", required=True, help="Glossary name")
    _add_language_arguments(register)
    register.add_argument("input", help="Glossary file; the first row holds language codes")
    listing = glossary_sub.add_parser("list", help="List registered glossaries")
    listing.add_argument("--rich", action="store_true", help="Use rich terminal output with formatting")
    delete = glossary_sub.add_parser("delete", help="Delete a registered glossary")
    delete.add_argument("id", help="Glossary ID")

    subparsers.add_parser("usage", help="Show DeepL character usage")

    to_xml = subparsers.add_parser("to-xml", help="Convert CommonMark to the XML sent to DeepL")
    to_xml.add_argument("input", help="Input CommonMark file, or - for stdin")
    to_xml.add_argument("output", nargs="?", help="Output file (default: stdout)")
    to_xml.add_argument("--no-escape-shortcodes", action="store_true", help="Do not hide template directives")

    from_xml = subparsers.add_parser("from-xml", help="Convert transcoder XML back to CommonMark")
    from_xml.add_argument("input", help="Input XML file, or - for stdin")
    from_xml.add_argument("output", nargs="?", help="Output file (default: stdout)")
    from_xml.add_argument("--no-escape-shortcodes", action="store_true", help="Do not restore template directives")

    return parser
