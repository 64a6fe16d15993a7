from typing import Any

from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field


class Envelope[T](BaseModel):
    """Wrapper for every API response: exactly one of data/error is meaningful."""

    data: T | None = Field(default=None, description="Response payload, null on error")
    error: str | None = Field(default=None, description="Human-readable error message, null on success")


def ok[T](data: T) -> Envelope[T]:
    return Envelope(data=data)


def error_response(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    content: dict[str, Any] = {"data": None, "error": message}
    return JSONResponse(status_code=status_code, content=content, headers=headers)
