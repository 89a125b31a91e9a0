"""PI email matching against the in-memory email table.

Two strategies are tried in order:

1. Exact match on the contact PI first and last name columns.
2. Substring match of ``"FIRST LAST"`` inside the combined
   ``PI Name(s) All`` column.

Every matching row contributes its email; duplicates are dropped and the
remaining addresses are joined with ``"; "``. Both strategies are linear
scans since the table is small and never changes after startup.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from pirelay.email_table import (
    ALL_NAMES_COLUMN,
    EMAIL_COLUMN,
    FIRST_NAME_COLUMN,
    LAST_NAME_COLUMN,
    EmailTable,
)
from pirelay.pipelines.normalization import full_name, normalize_name, unique_emails

logger = logging.getLogger(__name__)

EMAIL_SEPARATOR = "; "

RowPredicate = Callable[[Mapping[str, Any]], bool]


def _scan(table: EmailTable, predicate: RowPredicate) -> list[Mapping[str, Any]]:
    """Return rows satisfying ``predicate``; rows that fail to evaluate are skipped."""
    matches = []
    for index, row in enumerate(table.records):
        try:
            if predicate(row):
                matches.append(row)
        except Exception as e:
            logger.warning(f"Skipping malformed email database row {index}: {e}")
    return matches


def _join_emails(rows: list[Mapping[str, Any]]) -> str:
    return EMAIL_SEPARATOR.join(unique_emails(row.get(EMAIL_COLUMN) for row in rows))


def match_by_contact_name(
    table: EmailTable,
    first_name: str | None,
    last_name: str | None,
) -> list[Mapping[str, Any]]:
    """Rows whose contact PI first and last names equal the given names."""
    first = normalize_name(first_name)
    last = normalize_name(last_name)

    def predicate(row: Mapping[str, Any]) -> bool:
        return (
            normalize_name(row.get(FIRST_NAME_COLUMN)) == first
            and normalize_name(row.get(LAST_NAME_COLUMN)) == last
        )

    return _scan(table, predicate)


def match_by_full_name(
    table: EmailTable,
    first_name: str | None,
    last_name: str | None,
) -> list[Mapping[str, Any]]:
    """Rows whose ``PI Name(s) All`` column contains ``"FIRST LAST"``."""
    if not normalize_name(first_name) or not normalize_name(last_name):
        return []

    needle = full_name(first_name, last_name)

    def predicate(row: Mapping[str, Any]) -> bool:
        return needle in normalize_name(row.get(ALL_NAMES_COLUMN))

    return _scan(table, predicate)


def find_pi_email(
    table: EmailTable,
    first_name: str | None,
    last_name: str | None,
) -> str | None:
    """Look up the email address(es) of a principal investigator.

    Args:
        table: Loaded email table
        first_name: Investigator first name, any casing
        last_name: Investigator last name, any casing

    Returns:
        ``"; "``-joined unique lowercase emails, or None when the table is
        absent or no row matches. Never raises.
    """
    if table.is_absent:
        return None

    try:
        matches = match_by_contact_name(table, first_name, last_name)
        if not matches:
            matches = match_by_full_name(table, first_name, last_name)
        if not matches:
            return None
        return _join_emails(matches)
    except Exception as e:
        logger.error(f"Error finding PI email for {first_name} {last_name}: {e}")
        return None
