"""Error envelope shared by every route: ``{"error": ..., "message": ...}``."""
from __future__ import annotations

from fastapi.responses import JSONResponse

from app.core.exceptions import AppError, ValidationError

MISSING_IDS = ("", "undefined", "null")


def error_response(summary: str, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error or summary, "message": exc.message or str(exc) or "Unknown error"},
    )


def require_ids(error: str, message: str, *values: str | None) -> None:
    """Reject blank path ids and the literals 'undefined' and 'null' a browser sends for an unset variable."""
    for value in values:
        if value is None or value.strip() in MISSING_IDS:
            raise ValidationError(message, error=error)
