#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/cmark_translate/cli/commands.py
"""Command handlers for the cmark-translate command line.

Every handler takes the parsed arguments and returns an exit code.
Library errors propagate to :func:`cmark_translate.cli.main`, which maps
them to exit codes.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Optional

from cmark_translate.api import cmark_from_xml, xml_from_cmark
from cmark_translate.cli.builder import EXIT_SUCCESS, EXIT_VALIDATION_ERROR
from cmark_translate.config import load_config
from cmark_translate.deepl import Deepl, DeeplGlossary, Formality, Language
from cmark_translate.exceptions import FileError
from cmark_translate.glossary import read_glossary
from cmark_translate.options.translate import TranslateOptions
from cmark_translate.parsers.base import BaseParser
from cmark_translate.translate import translate_cmark_file

logger = logging.getLogger(__name__)


def create_deepl(parsed_args: argparse.Namespace, options: Optional[TranslateOptions] = None) -> Deepl:
    """Create a DeepL client from the configuration selected on the command line."""
    config = load_config(parsed_args.config)
    preserve_formatting = options.preserve_formatting if options else True
    return Deepl(config, preserve_formatting=preserve_formatting)


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return BaseParser._load_text_content(Path(path))


def _write_output(text: str, path: Optional[str]) -> None:
    if not path:
        sys.stdout.write(text)
        return
    try:
        Path(path).write_text(text, encoding="utf-8", newline="")
    except OSError as e:
        raise FileError(f"Cannot write {path}: {e}", file_path=path, original_error=e) from e


def _translate_options(parsed_args: argparse.Namespace) -> TranslateOptions:
    """Apply the translate command's flags on top of the default options."""
    updates: dict[str, Any] = {}
    if parsed_args.no_escape_shortcodes:
        updates["escape_shortcodes"] = False
    if parsed_args.no_preserve_formatting:
        updates["preserve_formatting"] = False
    if parsed_args.frontmatter_keys:
        updates["translatable_keys"] = tuple(parsed_args.frontmatter_keys)
    return TranslateOptions().create_updated(**updates)


def handle_translate(parsed_args: argparse.Namespace) -> int:
    """Translate a CommonMark file."""
    from_lang = Language.from_code(parsed_args.from_lang)
    to_lang = Language.from_code(parsed_args.to_lang)
    formality = Formality.from_value(parsed_args.formality)
    options = _translate_options(parsed_args)

    with create_deepl(parsed_args, options) as deepl:
        translate_cmark_file(deepl, from_lang, to_lang, formality, parsed_args.input, parsed_args.output, options)

    print(f"Translated {parsed_args.input} -> {parsed_args.output}")
    return EXIT_SUCCESS


def handle_glossary_register(parsed_args: argparse.Namespace) -> int:
    """Register a glossary file with DeepL."""
    from_lang = Language.from_code(parsed_args.from_lang)
    to_lang = Language.from_code(parsed_args.to_lang)
    entries = read_glossary(parsed_args.input, parsed_args.from_lang, parsed_args.to_lang)

    with create_deepl(parsed_args) as deepl:
        glossary = deepl.register_glossary(parsed_args.name, from_lang, to_lang, entries)

    print(f"Total {glossary.entry_count} entries are registered as ID = {glossary.glossary_id}")
    return EXIT_SUCCESS


def _render_plain_glossaries(glossaries: list[DeeplGlossary]) -> None:
    if not glossaries:
        print("No glossaries registered.")
        return
    for glossary in glossaries:
        print(f"{glossary.glossary_id}  {glossary.name}")
        print(f"  {glossary.source_lang} -> {glossary.target_lang}, {glossary.entry_count} entries")
        print(f"  created {glossary.creation_time}, ready: {'yes' if glossary.ready else 'no'}")


def _render_rich_glossaries(console: Any, glossaries: list[DeeplGlossary]) -> None:
    """Render the glossary list as a Rich table.

    Parameters
    ----------
    console : Console
        Rich console instance
    glossaries : list of DeeplGlossary
        Glossaries to show

    """
    from rich.table import Table

    table = Table(title="DeepL Glossaries")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="bold")
    table.add_column("Languages", style="yellow")
    table.add_column("Entries", justify="right")
    table.add_column("Ready")
    table.add_column("Created", style="dim")

    for glossary in glossaries:
        table.add_row(
            glossary.glossary_id,
            glossary.name,
            f"{glossary.source_lang} -> {glossary.target_lang}",
            str(glossary.entry_count),
            "[green][OK][/green]" if glossary.ready else "[yellow]pending[/yellow]",
            glossary.creation_time,
        )
    console.print(table)


def handle_glossary_list(parsed_args: argparse.Namespace) -> int:
    """List registered glossaries."""
    with create_deepl(parsed_args) as deepl:
        glossaries = deepl.list_glossaries()

    use_rich = parsed_args.rich
    if use_rich:
        try:
            from rich.console import Console

            _render_rich_glossaries(Console(), glossaries)
        except ImportError:
            # Fall back to plain text
            use_rich = False

    if not use_rich:
        _render_plain_glossaries(glossaries)
    return EXIT_SUCCESS


def handle_glossary_delete(parsed_args: argparse.Namespace) -> int:
    """Delete a registered glossary."""
    with create_deepl(parsed_args) as deepl:
        deepl.remove_glossary(parsed_args.id)
    print(f"Deleted glossary {parsed_args.id}")
    return EXIT_SUCCESS


def handle_glossary(parsed_args: argparse.Namespace) -> int:
    """Dispatch ``glossary`` subcommands."""
    handlers: dict[str, Callable[[argparse.Namespace], int]] = {
        "register": handle_glossary_register,
        "list": handle_glossary_list,
        "delete": handle_glossary_delete,
    }
    handler = handlers.get(parsed_args.glossary_command or "")
    if handler is None:
        print("Error: glossary requires one of: register, list, delete", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    return handler(parsed_args)


def handle_usage(parsed_args: argparse.Namespace) -> int:
    """Show the characters translated in the current billing period."""
    with create_deepl(parsed_args) as deepl:
        usage = deepl.get_usage()

    if usage.character_limit:
        print(f"{usage.character_count} characters used (limit {usage.character_limit}).")
    else:
        print(f"{usage.character_count} characters used.")
    return EXIT_SUCCESS


def handle_to_xml(parsed_args: argparse.Namespace) -> int:
    """Convert CommonMark to transcoder XML without translating."""
    text = _read_input(parsed_args.input)
    xml_text = xml_from_cmark(text, escape_shortcode=not parsed_args.no_escape_shortcodes)
    _write_output(xml_text + "\n", parsed_args.output)
    return EXIT_SUCCESS


def handle_from_xml(parsed_args: argparse.Namespace) -> int:
    """Convert transcoder XML back to CommonMark."""
    xml_text = _read_input(parsed_args.input)
    cmark_text = cmark_from_xml(xml_text, escape_shortcode=not parsed_args.no_escape_shortcodes)
    _write_output(cmark_text, parsed_args.output)
    return EXIT_SUCCESS


COMMAND_HANDLERS: dict[str, Callable[[argparse.Namespace], int]] = {
    "translate": handle_translate,
    "glossary": handle_glossary,
    "usage": handle_usage,
    "to-xml": handle_to_xml,
    "from-xml": handle_from_xml,
}
