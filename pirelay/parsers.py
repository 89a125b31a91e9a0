"""Spreadsheet parsing utilities.

Reads the PI email report (Excel, or CSV exports of it) into plain row
dictionaries keyed by column header.
"""
from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any

import pandas as pd

logger = logging.getLogger(__name__)


class FileType(str, Enum):
    """Supported file types."""
    CSV = "csv"
    EXCEL = "excel"
    UNKNOWN = "unknown"


class ParseError(Exception):
    """Raised when spreadsheet parsing fails."""
    pass


def detect_file_type(path: str | Path) -> FileType:
    """Detect file type from the file extension."""
    suffix = Path(path).suffix.lower()

    if suffix == '.csv':
        return FileType.CSV
    elif suffix in ('.xls', '.xlsx', '.xlsm'):
        return FileType.EXCEL

    return FileType.UNKNOWN


def _records(df: pd.DataFrame) -> list[dict[str, Any]]:
    # Blank cells come back as NaN; callers expect None.
    df = df.astype(object).where(pd.notna(df), None)
    return df.to_dict('records')


def parse_csv(path: str | Path) -> list[dict[str, Any]]:
    """Parse CSV file into structured records.

    Args:
        path: Location of the CSV file

    Returns:
        List of dictionaries (one per row); empty if the file has only a header

    Raises:
        ParseError: If CSV parsing fails
    """
    try:
        df = pd.read_csv(path, encoding='utf-8', dtype=str)
    except Exception as e:
        logger.error(f"CSV parsing failed: {e}")
        raise ParseError(f"Failed to parse CSV: {e}") from e

    logger.info(f"Parsed CSV with {len(df)} rows and {len(df.columns)} columns")
    return _records(df)


def parse_excel(path: str | Path, sheet_name: str | int = 0) -> list[dict[str, Any]]:
    """Parse Excel file into structured records.

    Args:
        path: Location of the workbook
        sheet_name: Sheet name or index (default: first sheet)

    Returns:
        List of dictionaries (one per row); empty if the sheet has no data rows

    Raises:
        ParseError: If Excel parsing fails
    """
    try:
        df = pd.read_excel(path, sheet_name=sheet_name, engine='openpyxl', dtype=str)
    except Exception as e:
        logger.error(f"Excel parsing failed: {e}")
        raise ParseError(f"Failed to parse Excel: {e}") from e

    logger.info(f"Parsed Excel with {len(df)} rows and {len(df.columns)} columns")
    return _records(df)


def parse_spreadsheet(path: str | Path) -> list[dict[str, Any]]:
    """Parse a spreadsheet based on its extension.

    Raises:
        ParseError: If file type unsupported or parsing fails
    """
    file_type = detect_file_type(path)

    if file_type == FileType.CSV:
        return parse_csv(path)
    elif file_type == FileType.EXCEL:
        return parse_excel(path)
    else:
        raise ParseError(f"Unsupported file type: {path}")
