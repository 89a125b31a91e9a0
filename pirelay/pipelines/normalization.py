"""Normalization helpers for spreadsheet cells, names and email addresses."""
from __future__ import annotations

import math
from typing import Any, Iterable


def cell_text(value: Any) -> str:
    """Render a spreadsheet cell as text; blank cells become ``""``."""
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value)


def normalize_name(value: Any) -> str:
    """Trim and uppercase a name for case-insensitive comparison."""
    return cell_text(value).strip().upper()


def full_name(first_name: Any, last_name: Any) -> str:
    """Build ``"FIRST LAST"`` from normalized parts."""
    return f"{normalize_name(first_name)} {normalize_name(last_name)}"


def normalize_email(value: Any) -> str:
    return cell_text(value).strip().lower()


def unique_emails(values: Iterable[Any]) -> list[str]:
    """Normalize emails, dropping blanks and keeping first occurrences in order."""
    seen: dict[str, None] = {}
    for value in values:
        email = normalize_email(value)
        if email:
            seen.setdefault(email, None)
    return list(seen)
