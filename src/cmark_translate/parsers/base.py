#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/cmark_translate/parsers/base.py
"""Base class for parsers that turn text into a document tree."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Any, Union

from cmark_translate.ast import Document
from cmark_translate.exceptions import EncodingError, FileError, InvalidOptionsError


def decode_utf8(data: bytes, source: str = "input") -> str:
    """Decode bytes as strict UTF-8.

    Raises
    ------
    EncodingError
        If the bytes are not valid UTF-8.

    """
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingError(f"{source} is not valid UTF-8 (byte offset {e.start})", original_error=e) from e


class BaseParser(ABC):
    """Abstract base class for parsers.

    Parameters
    ----------
    options : Any
        Parser configuration (a frozen options dataclass)

    """

    def __init__(self, options: Any):
        """Initialize the parser with its options."""
        self.options = options

    @staticmethod
    def _validate_options_type(options: Any, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def _load_text_content(input_data: Union[str, Path, IO[bytes], IO[str], bytes]) -> str:
        """Load text from a string, bytes, a path or a stream.

        Plain strings are always treated as content, never as file names.
        Bytes are decoded as strict UTF-8.

        Raises
        ------
        EncodingError
            If the input bytes are not valid UTF-8
        FileError
            If a path cannot be read

        """
        if isinstance(input_data, str):
            return input_data
        if isinstance(input_data, bytes):
            return decode_utf8(input_data)
        if isinstance(input_data, Path):
            try:
                data = input_data.read_bytes()
            except OSError as e:
                raise FileError(f"Cannot read {input_data}: {e}", file_path=str(input_data), original_error=e) from e
            return decode_utf8(data, str(input_data))

        content = input_data.read()
        if isinstance(content, bytes):
            return decode_utf8(content)
        return content

    @abstractmethod
    def parse(self, input_data: Union[str, Path, IO[bytes], IO[str], bytes]) -> Document:
        """Parse the input into a document tree."""
        pass
