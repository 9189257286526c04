"""FastAPI application entrypoint."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from neura import __version__
from neura.config import Settings, get_settings
from neura.logging import configure_logging
from neura.routes import router, validation_exception_handler


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create application resources during startup and clean up on shutdown."""

    async with httpx.AsyncClient() as client:
        app.state.http_client = client
        yield
        del app.state.http_client


def create_app() -> FastAPI:
    """Application factory.

    Settings are resolved here, so a missing API key fails at startup.
    """

    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Neura Ask Proxy",
        version=__version__,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/version")
    async def version(settings: Settings = Depends(get_settings)) -> dict[str, str]:
        return {"version": __version__, "environment": settings.environment}

    app.include_router(router)

    return app


app = create_app()
