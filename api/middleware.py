"""
Middleware for ZONECHECK API.

Provides:
- Request ID tracking for correlation with client logs
- Structured JSON request logging
- Error handling and sanitization
"""
import time
import uuid
import logging
import json
from typing import Callable, Optional
from contextvars import ContextVar
from datetime import datetime, timezone

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response, JSONResponse
from fastapi import FastAPI

# Context variable for request ID (thread-safe)
request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def get_request_id() -> Optional[str]:
    """Get the current request ID from context."""
    return request_id_ctx.get()


class StructuredLogger:
    """JSON log lines tagged with the service name and current request ID."""

    def __init__(self, name: str, service: str = "zonecheck-api"):
        self.logger = logging.getLogger(name)
        self.service = service

    def event(self, level: int, message: str, **fields):
        if not self.logger.isEnabledFor(level):
            return
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": logging.getLevelName(level),
            "service": self.service,
            "request_id": get_request_id(),
            "message": message,
        }
        entry.update(fields)
        self.logger.log(
            level,
            json.dumps({k: v for k, v in entry.items() if v is not None}, default=str),
        )

    def info(self, message: str, **fields):
        self.event(logging.INFO, message, **fields)

    def error(self, message: str, **fields):
        self.event(logging.ERROR, message, **fields)


# Shared by the request logging and error handling middleware
structured_logger = StructuredLogger("zonecheck")


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    Adds unique request ID to each request.

    Accepted from the X-Request-ID header when provided, otherwise a
    UUID4 is generated. Echoed back in the response headers.
    """

    HEADER_NAME = "X-Request-ID"

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(self.HEADER_NAME) or str(uuid.uuid4())

        token = request_id_ctx.set(request_id)

        try:
            response = await call_next(request)
            response.headers[self.HEADER_NAME] = request_id
            return response
        finally:
            request_id_ctx.reset(token)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs all requests with method, path, status and duration."""

    # Paths to exclude from logging (health checks)
    EXCLUDED_PATHS = {"/api/health", "/health"}

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            structured_logger.error(
                "Request failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round(duration_ms, 2),
                client_ip=client_ip,
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        structured_logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
            client_ip=client_ip,
        )
        return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Global error handling with sanitized responses.

    Internal errors return a generic message with the request ID unless
    debug is enabled, in which case the exception text is returned.
    """

    def __init__(self, app, debug: bool = False):
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            request_id = get_request_id()

            structured_logger.error(
                "Unhandled exception",
                error=str(e),
                error_type=type(e).__name__,
                path=request.url.path,
                method=request.method,
            )

            if self.debug:
                detail = str(e)
            else:
                detail = "An internal error occurred. Please contact support with the request ID."

            return JSONResponse(
                status_code=500,
                content={
                    "error": "Internal Server Error",
                    "detail": detail,
                    "request_id": request_id,
                },
                headers={"X-Request-ID": request_id} if request_id else {},
            )


def setup_middleware(app: FastAPI, debug: bool = False):
    """
    Configure middleware for the application.

    Middleware runs in reverse order of addition: the request ID is set
    before logging and error handling see the request.
    """
    app.add_middleware(ErrorHandlingMiddleware, debug=debug)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIdMiddleware)
