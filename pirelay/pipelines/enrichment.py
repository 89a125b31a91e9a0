"""Search relay: forward a query to RePORTER and attach PI emails.

Only the first principal investigator of each project is enriched; the
rest of the upstream body is returned untouched.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from pirelay.email_table import EmailTable
from pirelay.pipelines.matching import find_pi_email
from pirelay.reporter import ReporterClient

logger = logging.getLogger(__name__)

EMAIL_NOT_FOUND = "Email not found in database"
FAILURE_MESSAGE = "Failed to fetch research opportunities. Please try again."


class SearchRelayError(Exception):
    """Raised when the upstream search or its post-processing fails."""

    def __init__(self, message: str, details: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details
        self.status = status


class UpstreamResponseError(Exception):
    """Raised when the upstream body does not have the expected shape."""
    pass


def enrich_project(project: Any, table: EmailTable) -> Any:
    """Return ``project`` with an ``email`` on its first investigator.

    Projects without investigators are returned unchanged.
    """
    if not isinstance(project, Mapping):
        return project

    investigators = project.get("principal_investigators")
    if not investigators:
        return project

    pi = investigators[0]
    if not isinstance(pi, Mapping):
        return project

    email = find_pi_email(table, pi.get("first_name"), pi.get("last_name"))
    logger.info(f"Found email for {pi.get('first_name')} {pi.get('last_name')}: {email or 'not found'}")

    return {
        **project,
        "principal_investigators": [
            {**pi, "email": email or EMAIL_NOT_FOUND},
            *investigators[1:],
        ],
    }


def enrich_results(results: list[Any], table: EmailTable) -> list[Any]:
    """Enrich each project independently."""
    enriched = []
    for project in results:
        try:
            enriched.append(enrich_project(project, table))
        except Exception as e:
            logger.error(f"Failed to add email to project, passing it through: {e}")
            enriched.append(project)
    return enriched


async def search_with_emails(
    client: ReporterClient,
    table: EmailTable,
    query: Any,
) -> dict[str, Any]:
    """Run ``query`` against RePORTER and attach PI emails to the results.

    Args:
        client: Upstream search client
        table: Email table used for lookups
        query: Search body, forwarded as-is

    Returns:
        Upstream body with ``results`` replaced by the enriched projects

    Raises:
        SearchRelayError: Upstream call failed or returned an unusable body
    """
    try:
        data = await client.search(query)
        results = data.get("results") if isinstance(data, Mapping) else None
        logger.info(f"Received {len(results) if isinstance(results, list) else 0} results from NIH API")

        if not isinstance(results, list):
            raise UpstreamResponseError("No results array in NIH API response")

        logger.info("Processing results and adding email information...")
        return {**data, "results": enrich_results(results, table)}

    except httpx.HTTPStatusError as e:
        logger.error(f"NIH API returned {e.response.status_code}: {e.response.text[:500]}")
        raise SearchRelayError(FAILURE_MESSAGE, str(e), e.response.status_code) from e
    except Exception as e:
        logger.error(f"Error in search relay: {e}")
        raise SearchRelayError(FAILURE_MESSAGE, str(e)) from e
