#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/cmark_translate/cli/__init__.py
"""Command-line interface for cmark-translate.

Examples
--------
Translate a post from English to German::

    $ cmark-translate translate --from en --to de post.md post.de.md

Register a glossary kept in a spreadsheet::

    $ cmark-translate glossary register --name blog --from en --to de glossary.xlsx

Inspect the XML that is sent to DeepL::

    $ cmark-translate to-xml post.md

Use a specific configuration file and debug logging::

    $ cmark-translate --config ./deepl.toml --log-level DEBUG usage

"""

from __future__ import annotations

import logging
import sys

from cmark_translate import __version__
from cmark_translate.cli.builder import (
    EXIT_SUCCESS,
    create_parser,
    get_exit_code_for_exception,
)
from cmark_translate.cli.commands import COMMAND_HANDLERS
from cmark_translate.exceptions import CmarkTranslateError
from cmark_translate.logging_utils import configure_logging

logger = logging.getLogger(__name__)

__all__ = ["main", "create_parser"]


def main(args: list[str] | None = None) -> int:
    """Run the command line and return its exit code."""
    parser = create_parser(__version__)
    try:
        parsed_args = parser.parse_args(args)
    except SystemExit as e:
        # argparse exits on --help, --version and usage errors
        return e.code if isinstance(e.code, int) else EXIT_SUCCESS

    configure_logging(
        logging.DEBUG if parsed_args.trace else parsed_args.log_level,
        log_file=parsed_args.log_file,
        trace_mode=parsed_args.trace,
    )

    handler = COMMAND_HANDLERS.get(parsed_args.command or "")
    if handler is None:
        parser.print_help()
        return EXIT_SUCCESS

    try:
        return handler(parsed_args)
    except CmarkTranslateError as e:
        logger.debug("Command %s failed", parsed_args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)


if __name__ == "__main__":
    sys.exit(main())
