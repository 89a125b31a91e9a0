"""In-memory PI email table, loaded once at startup.

The table has three states: ``ABSENT`` when the spreadsheet could not be
read, ``EMPTY`` when it was read but holds no rows, and ``LOADED`` otherwise.
Lookups against an absent table quietly find nothing.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from .parsers import parse_spreadsheet

logger = logging.getLogger(__name__)

FIRST_NAME_COLUMN = "Contact PI First Name"
LAST_NAME_COLUMN = "Contact PI Last Name"
ALL_NAMES_COLUMN = "PI Name(s) All"
EMAIL_COLUMN = "Contact PI Email"

REQUIRED_COLUMNS = (FIRST_NAME_COLUMN, LAST_NAME_COLUMN, ALL_NAMES_COLUMN, EMAIL_COLUMN)


class TableStatus(str, Enum):
    """Load outcome of the email table."""
    ABSENT = "absent"
    EMPTY = "empty"
    LOADED = "loaded"


@dataclass(frozen=True)
class EmailTable:
    """Read-only rows of the PI email report."""
    status: TableStatus
    records: tuple[Mapping[str, Any], ...] = field(default_factory=tuple)
    source: Path | None = None

    @classmethod
    def absent(cls, source: Path | None = None) -> EmailTable:
        return cls(status=TableStatus.ABSENT, source=source)

    @classmethod
    def from_rows(cls, rows: Iterable[Mapping[str, Any]], source: Path | None = None) -> EmailTable:
        records = tuple(MappingProxyType(dict(row)) for row in rows)
        status = TableStatus.LOADED if records else TableStatus.EMPTY
        return cls(status=status, records=records, source=source)

    @property
    def is_absent(self) -> bool:
        return self.status == TableStatus.ABSENT

    @property
    def size(self) -> int:
        return len(self.records)


def _list_dir(directory: Path) -> list[str] | str:
    try:
        return sorted(os.listdir(directory))
    except OSError as e:
        return f"<unavailable: {e}>"


def load_email_table(path: str | Path, *, fallback_dir: str | Path | None = None) -> EmailTable:
    """Load the PI email spreadsheet.

    Any failure is logged together with the directory listings needed to
    diagnose a misplaced file, and yields an absent table instead of raising.

    Args:
        path: Spreadsheet location
        fallback_dir: Extra directory to list when the load fails

    Returns:
        EmailTable in ``LOADED``, ``EMPTY`` or ``ABSENT`` state
    """
    path = Path(path)
    logger.info(f"Loading email database from: {path}")

    try:
        rows = parse_spreadsheet(path)
    except Exception as e:
        logger.error(f"Error loading email database from {path}: {e}")
        logger.error(f"Files in {path.parent}: {_list_dir(path.parent)}")
        if fallback_dir is not None:
            logger.error(f"Files in {fallback_dir}: {_list_dir(Path(fallback_dir))}")
        return EmailTable.absent(source=path)

    table = EmailTable.from_rows(rows, source=path)

    if rows:
        missing = [column for column in REQUIRED_COLUMNS if column not in rows[0]]
        if missing:
            logger.warning(f"Email database is missing columns: {', '.join(missing)}")

    logger.info(f"Loaded email database with {table.size} entries")
    return table
