# Test bootstrap for pytest: ensure the repository root is on sys.path so tests
# can import `pirelay` without an editable install.
#
# Fixture Organization:
# - email_rows / email_table: a small in-memory PI email report
# - reporter_factory: ReporterClient backed by httpx.MockTransport
# - relay_state: table and upstream handler the API overrides read from
# - api_client: TestClient with the table and upstream client overridden
#
from __future__ import annotations

import sys
from pathlib import Path
from types import SimpleNamespace

import httpx
import pytest

_repo_root = str(Path(__file__).resolve().parents[1])
if _repo_root not in sys.path:
    sys.path.insert(0, _repo_root)

from fastapi.testclient import TestClient  # noqa: E402

from pirelay.api import app, get_email_table, get_reporter_client  # noqa: E402
from pirelay.email_table import EmailTable  # noqa: E402
from pirelay.reporter import ReporterClient  # noqa: E402

SEARCH_URL = "https://reporter.test/v2/projects/search"


def email_row(first, last, email, all_names=None) -> dict:
    return {
        "Contact PI First Name": first,
        "Contact PI Last Name": last,
        "PI Name(s) All": all_names if all_names is not None else f"{last}, {first}",
        "Contact PI Email": email,
    }


@pytest.fixture
def make_row():
    return email_row


@pytest.fixture
def email_rows() -> list[dict]:
    return [
        email_row("JANE", "DOE", "jane.doe@example.edu"),
        email_row("John", "Smith", " John.Smith@Example.EDU "),
        email_row("JOHN", "SMITH", "jsmith@lab.example.org"),
        email_row("john", "smith", "john.smith@example.edu"),
        email_row("Ada", "Lovelace", "", all_names="LOVELACE, ADA; BABBAGE, CHARLES"),
        email_row(
            "Grace",
            "Hopper",
            "grace@navy.example.mil",
            all_names="Grace Hopper; Alan Turing",
        ),
    ]


@pytest.fixture
def email_table(email_rows) -> EmailTable:
    return EmailTable.from_rows(email_rows)


@pytest.fixture
def reporter_factory():
    """Build a ReporterClient whose requests are answered by ``handler``."""

    def factory(handler) -> ReporterClient:
        return ReporterClient(search_url=SEARCH_URL, transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def relay_state(email_table) -> SimpleNamespace:
    """Mutable stand-ins for the app's email table and upstream responses.

    ``handler`` answers upstream requests; every request it sees is kept in
    ``requests``.
    """
    return SimpleNamespace(
        table=email_table,
        handler=lambda request: httpx.Response(200, json={"results": []}),
        requests=[],
    )


@pytest.fixture
def api_client(relay_state, reporter_factory):
    def handle(request: httpx.Request) -> httpx.Response:
        relay_state.requests.append(request)
        return relay_state.handler(request)

    app.dependency_overrides[get_email_table] = lambda: relay_state.table
    app.dependency_overrides[get_reporter_client] = lambda: reporter_factory(handle)
    yield TestClient(app)
    app.dependency_overrides.clear()
