"""Custom exceptions shared across services."""

from dataclasses import dataclass
from typing import Any


@dataclass(eq=False)
class ServiceError(Exception):
    """Base exception for service layer failures."""

    message: str
    code: str = "service_error"
    status_code: int | None = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


@dataclass(eq=False)
class GeminiServiceError(ServiceError):
    """Raised when GeminiService fails to return an answer.

    ``data`` holds the raw upstream payload when one was received.
    """

    code: str = "gemini_error"
    data: Any = None
