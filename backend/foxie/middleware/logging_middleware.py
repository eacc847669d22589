"""
Request logging middleware.

Pure ASGI (not BaseHTTPMiddleware) so request bodies can be observed while
being passed through untouched. Logs method, path, status, duration and
sanitized request/response bodies; 4xx responses log at WARNING and 5xx
at ERROR.
"""

import json
import logging
import time
from typing import List, Optional
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from ..core.logging_config import filter_sensitive_data, truncate_large_data

logger = logging.getLogger(__name__)

MAX_BODY_LOG_LENGTH = 2000


def _sanitize_body(chunks: List[bytes]) -> Optional[str]:
    """Decode a captured body, masking secrets if it is JSON."""
    raw = b"".join(chunks)
    if not raw:
        return None
    text = raw.decode("utf-8", errors="ignore")
    try:
        text = json.dumps(filter_sensitive_data(json.loads(text)), ensure_ascii=False)
    except json.JSONDecodeError:
        pass
    return truncate_large_data(text, max_length=MAX_BODY_LOG_LENGTH)


class RequestLoggingMiddleware:
    """Pure ASGI middleware to log API requests and responses."""

    def __init__(self, app: ASGIApp, exclude_paths: Optional[list] = None):
        """
        Args:
            app: The ASGI application
            exclude_paths: Paths that are passed through without logging
        """
        self.app = app
        self.exclude_paths = exclude_paths or ["/health", "/"]

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope.get("path", "") in self.exclude_paths:
            await self.app(scope, receive, send)
            return

        start_time = time.time()
        method = scope.get("method", "UNKNOWN")
        path = scope.get("path", "")
        request_chunks: List[bytes] = []
        response_chunks: List[bytes] = []
        status_code = 0

        async def logging_receive() -> Message:
            message = await receive()
            if message["type"] == "http.request":
                request_chunks.append(message.get("body", b""))
            return message

        async def logging_send(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message.get("status", 0)
            elif message["type"] == "http.response.body":
                response_chunks.append(message.get("body", b""))
            await send(message)

        try:
            await self.app(scope, logging_receive, logging_send)
        except Exception as e:
            logger.error(
                f"Request failed: {method} {path} - {str(e)}",
                exc_info=True,
                extra={"extra_fields": {
                    "method": method,
                    "path": path,
                    "duration_ms": round((time.time() - start_time) * 1000, 2),
                    "error": str(e),
                }}
            )
            raise

        duration_ms = (time.time() - start_time) * 1000
        request_body = _sanitize_body(request_chunks)
        response_body = _sanitize_body(response_chunks)

        if status_code < 400:
            level = logging.INFO
        elif status_code < 500:
            level = logging.WARNING
        else:
            level = logging.ERROR

        logger.log(
            level,
            f"{method} {path} - {status_code} ({duration_ms:.2f}ms)",
            extra={"extra_fields": {
                "method": method,
                "path": path,
                "query_string": scope.get("query_string", b"").decode("utf-8", errors="ignore"),
                "status_code": status_code,
                "duration_ms": round(duration_ms, 2),
                "request_body": request_body,
                "response_body": response_body,
            }}
        )
