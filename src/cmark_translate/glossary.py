#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/cmark_translate/glossary.py
"""Read glossary spreadsheets for registration with DeepL.

A glossary file holds one term per row and one language per column. The
first row names the columns with language codes::

    en      de       ja
    cat     Katze    猫
    dog     Hund     犬

Excel workbooks (``.xlsx``) are read with openpyxl; ``.tsv`` and ``.csv``
files with the csv module.
"""

from __future__ import annotations

import csv
import logging
import zipfile
from pathlib import Path
from typing import Any, Iterable, Sequence

from cmark_translate.constants import DEPS_XLSX
from cmark_translate.exceptions import FileError, ValidationError
from cmark_translate.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)

_DELIMITED_FORMATS = {".tsv": "\t", ".csv": ","}


def _cell_text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _column_index(header: Sequence[str], code: str, path: Path) -> int:
    normalized = [cell.lower() for cell in header]
    try:
        return normalized.index(code.lower())
    except ValueError:
        raise ValidationError(
            f"Glossary {path} has no column for language {code!r} (columns: {', '.join(header)})",
            parameter_name="language",
            parameter_value=code,
        ) from None


def _select_pairs(rows: Iterable[Sequence[Any]], from_code: str, to_code: str, path: Path) -> list[tuple[str, str]]:
    iterator = iter(rows)
    header = [_cell_text(cell) for cell in next(iterator, [])]
    if not header:
        raise ValidationError(f"Glossary {path} is empty", parameter_name="path", parameter_value=str(path))

    from_index = _column_index(header, from_code, path)
    to_index = _column_index(header, to_code, path)

    pairs = []
    for row in iterator:
        cells = [_cell_text(cell) for cell in row]
        source = cells[from_index] if from_index < len(cells) else ""
        target = cells[to_index] if to_index < len(cells) else ""
        pairs.append((source, target))
    logger.debug("Read %d glossary rows from %s", len(pairs), path)
    return pairs


@requires_dependencies("xlsx glossary", DEPS_XLSX)
def _read_xlsx_rows(path: Path) -> list[tuple[Any, ...]]:
    import openpyxl
    from openpyxl.utils.exceptions import InvalidFileException

    try:
        workbook = openpyxl.load_workbook(path, read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, OSError, KeyError) as e:
        raise FileError(f"Cannot open workbook {path}: {e}", file_path=str(path), original_error=e) from e

    try:
        sheet = workbook.active
        return [tuple(row) for row in sheet.iter_rows(values_only=True)]
    finally:
        workbook.close()


def _read_delimited_rows(path: Path, delimiter: str) -> list[list[str]]:
    try:
        with open(path, encoding="utf-8-sig", newline="") as f:
            return list(csv.reader(f, delimiter=delimiter))
    except (OSError, UnicodeDecodeError) as e:
        raise FileError(f"Cannot read glossary {path}: {e}", file_path=str(path), original_error=e) from e


def read_glossary(path: str | Path, from_code: str, to_code: str) -> list[tuple[str, str]]:
    """Read the term pairs for a language pair from a glossary file.

    Parameters
    ----------
    path : str or Path
        ``.xlsx``, ``.tsv`` or ``.csv`` glossary file
    from_code : str
        Language code of the source column (case-insensitive)
    to_code : str
        Language code of the target column (case-insensitive)

    Returns
    -------
    list of (str, str)
        ``(source, target)`` pairs, one per data row. Blank cells are kept
        as empty strings; the DeepL client drops incomplete pairs.

    Raises
    ------
    FileError
        If the file cannot be read
    ValidationError
        If the format is unsupported or a language column is missing

    """
    path = Path(path)
    suffix = path.suffix.lower()

    rows: Iterable[Sequence[Any]]
    if suffix == ".xlsx":
        rows = _read_xlsx_rows(path)
    elif suffix in _DELIMITED_FORMATS:
        rows = _read_delimited_rows(path, _DELIMITED_FORMATS[suffix])
    else:
        raise ValidationError(
            f"Unsupported glossary format {suffix or '(none)'}; use .xlsx, .tsv or .csv",
            parameter_name="path",
            parameter_value=str(path),
        )

    return _select_pairs(rows, from_code, to_code, path)
