#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/cmark_translate/exceptions.py
"""Custom exceptions for the cmark-translate library.

Exception Hierarchy
-------------------
- CmarkTranslateError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for parser or renderer)

  - ConfigError (missing or malformed configuration files)

  - FileError (file access and I/O)

  - ParsingError (input parsing failures)
    - EncodingError (input bytes are not valid UTF-8)
    - XmlParsingError (XML text is not well formed)
    - UnexpectedEndOfInputError (input ended inside a construct)
      - FrontmatterError (front matter opened but never closed)

  - RenderingError (output generation failures)

  - TranslationError (translation service failures)

  - DependencyError (missing/incompatible packages)

"""

from __future__ import annotations

from typing import Any


class CmarkTranslateError(Exception):
    """Base exception class for all cmark-translate errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(CmarkTranslateError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when a parser or renderer receives the wrong options class."""

    def __init__(
        self,
        component_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
    ):
        """Initialize the error with the expected and received option types."""
        if message is None:
            message = (
                f"Invalid options type for '{component_name}'. "
                f"Expected {expected_type.__name__}, but received {received_type.__name__}."
            )
        super().__init__(message, parameter_name="options", parameter_value=received_type)
        self.component_name = component_name
        self.expected_type = expected_type
        self.received_type = received_type


class ConfigError(CmarkTranslateError):
    """Exception raised when configuration cannot be located or loaded.

    Parameters
    ----------
    message : str
        Description of the configuration problem
    config_path : str, optional
        The configuration file involved, if any
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error with the offending path."""
        super().__init__(message, original_error=original_error)
        self.config_path = config_path


class FileError(CmarkTranslateError):
    """Exception raised when a file cannot be read or written."""

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with the offending path."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class ParsingError(CmarkTranslateError):
    """Exception raised when input text cannot be parsed.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        Which stage failed (e.g. "xml", "frontmatter", "decode")
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error with stage information."""
        super().__init__(message, original_error=original_error)
        self.parsing_stage = parsing_stage


class EncodingError(ParsingError):
    """Exception raised when input bytes are not valid UTF-8."""

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the encoding error."""
        super().__init__(message, parsing_stage="decode", original_error=original_error)


class XmlParsingError(ParsingError):
    """Exception raised when XML text is not well formed."""

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the XML parsing error."""
        super().__init__(message, parsing_stage="xml", original_error=original_error)


class UnexpectedEndOfInputError(ParsingError):
    """Exception raised when input ends in the middle of a construct."""


class FrontmatterError(UnexpectedEndOfInputError):
    """Exception raised when a front matter block is opened but never closed.

    Parameters
    ----------
    delimiter : str
        The opening delimiter that was found
    message : str, optional
        Custom message

    """

    def __init__(self, delimiter: str, message: str | None = None):
        """Initialize the error with the unmatched delimiter."""
        if message is None:
            message = f"Front matter opened with '{delimiter}' is never closed"
        super().__init__(message, parsing_stage="frontmatter")
        self.delimiter = delimiter


class RenderingError(CmarkTranslateError):
    """Exception raised when output cannot be generated or written."""

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error with stage information."""
        super().__init__(message, original_error=original_error)
        self.rendering_stage = rendering_stage


class TranslationError(CmarkTranslateError):
    """Exception raised when the translation service rejects or fails a request.

    Parameters
    ----------
    message : str
        Description of the failure
    status_code : int, optional
        HTTP status returned by the service, if a response was received
    response_text : str, optional
        Body of the failing response
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_text: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the translation error with response details."""
        super().__init__(message, original_error=original_error)
        self.status_code = status_code
        self.response_text = response_text


class DependencyError(CmarkTranslateError):
    """Exception raised when required dependencies are not available.

    Parameters
    ----------
    feature_name : str
        Name of the feature requiring dependencies
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    version_mismatches : list[tuple[str, str, str]], optional
        List of (package_name, required_version, installed_version) tuples
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_import_error : ImportError, optional
        The first ImportError encountered

    """

    def __init__(
        self,
        feature_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        version_mismatches = version_mismatches or []
        if message is None:
            message_parts = []
            if missing_packages:
                pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
                message_parts.append(f"{feature_name} requires the following packages: {pkg_list}")
            if version_mismatches:
                mismatch_str = ", ".join(
                    f"'{name}' (requires {required}, but {installed} is installed)"
                    for name, required, installed in version_mismatches
                )
                message_parts.append(f"{feature_name} has version mismatches: {mismatch_str}")
            message = "\n".join(message_parts)

            all_packages = missing_packages + [(name, req) for name, req, _ in version_mismatches]
            if all_packages:
                packages_str = " ".join(f'"{name}{spec}"' if spec else name for name, spec in all_packages)
                message += f"\nInstall with: pip install --upgrade {packages_str}"

        super().__init__(message, original_error=original_import_error)
        self.feature_name = feature_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
        self.original_import_error = original_import_error


__all__ = [
    "CmarkTranslateError",
    "ValidationError",
    "InvalidOptionsError",
    "ConfigError",
    "FileError",
    "ParsingError",
    "EncodingError",
    "XmlParsingError",
    "UnexpectedEndOfInputError",
    "FrontmatterError",
    "RenderingError",
    "TranslationError",
    "DependencyError",
]
