"""Client for the NIH RePORTER project search API."""
from __future__ import annotations

import logging
from typing import Any

import httpx

from .config import UpstreamSettings, settings

logger = logging.getLogger(__name__)


class ReporterClient:
    """Posts search queries to RePORTER and returns the decoded JSON body."""

    def __init__(
        self,
        search_url: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.search_url = search_url
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, config: UpstreamSettings | None = None) -> ReporterClient:
        config = config or settings.upstream
        return cls(search_url=config.search_url, timeout=config.timeout)

    async def search(self, query: Any) -> Any:
        """Forward ``query`` verbatim as the POST body.

        Raises:
            httpx.HTTPStatusError: Non-success response
            httpx.RequestError: Network failure
            ValueError: Body is not valid JSON
        """
        logger.info("Making request to NIH API...")
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            r = await client.post(self.search_url, json=query)
            r.raise_for_status()
        return r.json()
