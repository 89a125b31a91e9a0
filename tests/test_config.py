"""Tests for environment-driven settings."""
from __future__ import annotations

from pathlib import Path

import pytest

from pirelay.config import BASE_DIR, EMAIL_REPORT_FILENAME, Environment, Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("ENVIRONMENT", "PORT", "EMAIL_TABLE_DEV_PATH", "EMAIL_TABLE_PROD_PATH", "CORS_PROD_ORIGINS"):
        monkeypatch.delenv(name, raising=False)


def test_defaults_to_development():
    config = Settings(_env_file=None)

    assert config.environment == Environment.DEVELOPMENT
    assert config.is_development
    assert config.port == 3001
    assert config.email_table_path == BASE_DIR / EMAIL_REPORT_FILENAME
    assert config.cors_origins == ["http://localhost:5173"]


def test_production_switches_path_and_origins(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "production")

    config = Settings(_env_file=None)

    assert not config.is_development
    assert config.email_table_path == Path("/app") / EMAIL_REPORT_FILENAME
    assert config.cors_origins == ["https://inkr.netlify.app"]


def test_nested_settings_read_their_prefix(monkeypatch, tmp_path):
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("EMAIL_TABLE_PROD_PATH", str(tmp_path / "report.xlsx"))
    monkeypatch.setenv("CORS_PROD_ORIGINS", '["https://a.example", "https://b.example"]')
    monkeypatch.setenv("PORT", "8080")

    config = Settings(_env_file=None)

    assert config.email_table_path == tmp_path / "report.xlsx"
    assert config.cors_origins == ["https://a.example", "https://b.example"]
    assert config.port == 8080


def test_upstream_defaults_to_reporter_without_timeout():
    config = Settings(_env_file=None)

    assert config.upstream.search_url == "https://api.reporter.nih.gov/v2/projects/search"
    assert config.upstream.timeout is None
