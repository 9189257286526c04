"""Adapter for the Gemini generateContent endpoint."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from neura.config import Settings
from neura.exceptions import GeminiServiceError

logger = logging.getLogger(__name__)

UNEXPECTED_RESPONSE = "Unexpected response from Gemini API"


class GeminiService:
    """Wrapper around Gemini's generateContent endpoint."""

    def __init__(self, client: httpx.AsyncClient, settings: Settings) -> None:
        self._client = client
        self._settings = settings

    @property
    def endpoint(self) -> str:
        base = self._settings.gemini_base_url.rstrip("/")
        return f"{base}/models/{self._settings.gemini_model}:generateContent"

    async def generate(self, question: str) -> str:
        """Return the first candidate's text for ``question``.

        Upstream unavailability is retried with a fixed delay, up to
        ``gemini_max_retries`` extra attempts. Every other failure surfaces
        immediately as :class:`GeminiServiceError`.
        """

        retries_left = self._settings.gemini_max_retries
        while True:
            try:
                return await self._generate_once(question)
            except GeminiServiceError as exc:
                if retries_left <= 0 or not _is_unavailable(exc):
                    raise
                logger.warning(
                    "Gemini unavailable; retrying",
                    extra={
                        "retries_left": retries_left,
                        "delay": self._settings.gemini_retry_delay,
                    },
                )
                retries_left -= 1
                await asyncio.sleep(self._settings.gemini_retry_delay)

    async def _generate_once(self, question: str) -> str:
        payload = {"contents": [{"parts": [{"text": question}]}]}

        try:
            response = await self._client.post(
                self.endpoint,
                params={"key": self._settings.gemini_api_key},
                headers={"Content-Type": "application/json"},
                json=payload,
                timeout=self._settings.gemini_timeout,
            )
        except httpx.TimeoutException as exc:
            logger.warning("Gemini request timed out", exc_info=exc)
            raise GeminiServiceError("Gemini API request timed out") from exc
        except httpx.HTTPError as exc:
            logger.exception("Gemini API error")
            raise GeminiServiceError(str(exc) or "Gemini API request failed") from exc

        try:
            data = response.json()
        except ValueError as exc:
            logger.error(
                "Gemini returned a non-JSON body",
                extra={
                    "status_code": response.status_code,
                    "response_text": response.text,
                },
            )
            raise GeminiServiceError(
                UNEXPECTED_RESPONSE,
                status_code=response.status_code,
                data=response.text,
            ) from exc

        if response.is_error:
            logger.error(
                "Unexpected Gemini API response",
                extra={"status_code": response.status_code, "raw_response": data},
            )
            raise GeminiServiceError(
                UNEXPECTED_RESPONSE,
                status_code=response.status_code,
                data=data,
            )

        try:
            return _extract_text(data)
        except (KeyError, IndexError, TypeError) as exc:
            logger.error("Unexpected Gemini API response", extra={"raw_response": data})
            raise GeminiServiceError(
                UNEXPECTED_RESPONSE,
                status_code=response.status_code,
                data=data,
            ) from exc


def _extract_text(data: Any) -> str:
    text = data["candidates"][0]["content"]["parts"][0]["text"]
    if not isinstance(text, str):
        raise TypeError("candidate text is not a string")
    return text


def _is_unavailable(exc: GeminiServiceError) -> bool:
    """Whether upstream reported a transient outage."""

    if exc.status_code == httpx.codes.SERVICE_UNAVAILABLE:
        return True
    if isinstance(exc.data, dict):
        error = exc.data.get("error")
        if isinstance(error, dict) and error.get("status") == "UNAVAILABLE":
            return True
    return False
