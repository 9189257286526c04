"""Dependency providers for the FastAPI application."""

import httpx
from fastapi import Depends
from starlette.requests import HTTPConnection

from neura.config import Settings, get_settings
from neura.services.gemini_service import GeminiService


async def get_http_client(connection: HTTPConnection) -> httpx.AsyncClient:
    """Retrieve the shared AsyncClient from application state."""

    return connection.app.state.http_client  # type: ignore[return-value]


async def get_gemini_service(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> GeminiService:
    """Dependency provider for GeminiService."""

    return GeminiService(client=client, settings=settings)
