"""HTTP handlers for the application."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from neura.config import Settings, get_settings
from neura.dependencies import get_gemini_service
from neura.exceptions import GeminiServiceError
from neura.models import AskRequest, AskResponse, ErrorResponse
from neura.services.gemini_service import GeminiService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/ask",
    response_model=AskResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
async def ask(
    payload: AskRequest,
    request: Request,
    gemini_service: Annotated[GeminiService, Depends(get_gemini_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AskResponse | JSONResponse:
    """Relay a question to Gemini and return its answer."""

    logger.info(
        "Received question",
        extra={"client": _client_repr(request), "question_length": len(payload.question)},
    )

    if not payload.question.strip():
        return _error(
            status.HTTP_400_BAD_REQUEST,
            ErrorResponse(error="validation_error", detail="Question must not be empty."),
        )

    if len(payload.question) > settings.max_question_length:
        return _error(
            status.HTTP_400_BAD_REQUEST,
            ErrorResponse(
                error="validation_error",
                detail=f"Question length exceeds limit of {settings.max_question_length} characters.",
            ),
        )

    try:
        answer = await gemini_service.generate(payload.question)
    except GeminiServiceError as exc:
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorResponse(error=exc.message, data=exc.data),
        )

    logger.info(
        "Answer delivered",
        extra={"client": _client_repr(request), "answer_length": len(answer)},
    )
    return AskResponse(answer=answer)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render malformed request bodies in the shared error shape."""

    logger.info(
        "Rejected malformed payload",
        extra={"client": _client_repr(request), "errors": exc.errors()},
    )
    return _error(
        422,
        ErrorResponse(error="invalid_payload", detail="Body must be JSON with a 'question' string."),
    )


def _error(status_code: int, error: ErrorResponse) -> JSONResponse:
    """Build a structured error response."""

    return JSONResponse(
        status_code=status_code,
        content=error.model_dump(mode="json", exclude_none=True),
    )


def _client_repr(request: Request) -> str:
    """Render the remote client for logging purposes."""

    client = request.client
    if client is None:
        return "unknown"
    return f"{client.host}:{client.port}"
