"""Tests for spreadsheet parsing."""
from __future__ import annotations

import pytest

from pirelay.parsers import FileType, ParseError, detect_file_type, parse_csv, parse_spreadsheet


@pytest.mark.parametrize(
    "name, expected",
    [
        ("2022-pi-email-report.xlsx", FileType.EXCEL),
        ("REPORT.XLS", FileType.EXCEL),
        ("report.xlsm", FileType.EXCEL),
        ("report.csv", FileType.CSV),
        ("report.json", FileType.UNKNOWN),
        ("report", FileType.UNKNOWN),
    ],
)
def test_detect_file_type(name, expected):
    assert detect_file_type(name) == expected


def test_csv_cells_stay_text(tmp_path):
    path = tmp_path / "report.csv"
    path.write_text("Contact PI First Name,Contact PI Email\n0042,\nJane,jane@example.edu\n")

    rows = parse_csv(path)

    assert rows == [
        {"Contact PI First Name": "0042", "Contact PI Email": None},
        {"Contact PI First Name": "Jane", "Contact PI Email": "jane@example.edu"},
    ]


def test_missing_file_raises_parse_error(tmp_path):
    with pytest.raises(ParseError):
        parse_spreadsheet(tmp_path / "missing.xlsx")


def test_unsupported_type_raises_parse_error(tmp_path):
    with pytest.raises(ParseError, match="Unsupported file type"):
        parse_spreadsheet(tmp_path / "report.txt")
