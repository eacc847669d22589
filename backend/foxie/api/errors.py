"""
Exception handlers - render domain and validation errors as JSON.

Body shape: ``{"error": <message>}`` plus ``"details"`` with the raw
upstream text when debug mode is on.
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..config import settings
from ..errors import FoxieError

logger = logging.getLogger(__name__)


def _error_body(message: str, details=None) -> dict:
    body = {"error": message}
    if settings.debug and details:
        body["details"] = details
    return body


async def foxie_error_handler(request: Request, exc: FoxieError) -> JSONResponse:
    """Map a domain error to its HTTP status."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message} ({exc.details})")
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message, exc.details))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Missing or malformed request fields are a 400, not FastAPI's 422."""
    problems = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
        problems.append(f"{field}: {error.get('msg')}" if field else str(error.get("msg")))
    message = "; ".join(problems) or "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FoxieError, foxie_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
