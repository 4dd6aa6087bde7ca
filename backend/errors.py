"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class SearchServiceError(Exception):
    """Base exception with HTTP status code."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code

    def to_payload(self) -> dict:
        return {"error": str(self)}


class ValidationError(SearchServiceError):
    """Request parameters are unusable; the provider is never called."""

    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class SearchFailedError(SearchServiceError):
    """The external search provider raised or returned something unusable."""

    def __init__(self, details: str):
        super().__init__(f"search_failed: {details}", status_code=500)
        self.details = details

    def to_payload(self) -> dict:
        return {"error": "search_failed", "details": self.details}


class RateLimitExceededError(SearchServiceError):
    def __init__(self, retry_after: int):
        super().__init__("Too many requests, please try again later.", status_code=429)
        self.retry_after = retry_after


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(SearchServiceError)
    async def handle_search_service_error(_request: Request, exc: SearchServiceError):
        if isinstance(exc, SearchFailedError):
            logger.error("Search failed: %s", exc.details)
        return JSONResponse(exc.to_payload(), status_code=exc.status_code)

    @app.exception_handler(ValueError)
    async def handle_value_error(_request: Request, exc: ValueError):
        return JSONResponse({"error": str(exc)}, status_code=400)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            {"error": "Internal server error"},
            status_code=500,
        )
