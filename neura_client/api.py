"""HTTP client for the /ask endpoint."""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_URL = "http://127.0.0.1:3001/ask"


class AskClientError(Exception):
    """Raised when the ask call fails in transport or returns undecodable data."""


class AskClient:
    """Posts questions to the Neura server."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        url: str = DEFAULT_URL,
        timeout: float | None = None,
    ) -> None:
        self._client = client
        self._url = url
        self._timeout = timeout

    async def ask(self, question: str) -> dict[str, Any]:
        """Send ``question`` and return the decoded JSON body.

        Error statuses are not raised: their bodies carry ``error`` instead of
        ``answer`` and the caller decides what to show.
        """
        try:
            response = await self._client.post(
                self._url,
                json={"question": question},
                timeout=self._timeout,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise AskClientError(f"Request to {self._url} failed: {exc}") from exc

        if response.is_error:
            logger.warning("Ask endpoint returned %d: %s", response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as exc:
            raise AskClientError("Response body is not JSON") from exc

        if not isinstance(data, dict):
            raise AskClientError("Response body is not a JSON object")
        return data
