"""Pydantic models for the /ask wire format."""

from typing import Any

from pydantic import BaseModel, Field


class AskRequest(BaseModel):
    """Incoming question payload."""

    question: str = Field(description="User supplied question.")


class AskResponse(BaseModel):
    """Successful answer payload."""

    answer: str


class ErrorResponse(BaseModel):
    """Error body returned to HTTP clients."""

    error: str
    detail: str | None = None
    data: Any = None
