"""
Error taxonomy for the upload relay.

Request-level errors derive from RelayError and carry the HTTP status and the
short plaintext message shown to the client. Internal detail stays in logs.
"""
from typing import Optional

from fastapi import Request, status
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class RelayError(Exception):
    """Base class for errors that end a request with a definitive status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"
    outcome: str = "error"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.message
        super().__init__(self.detail)


class InvalidInput(RelayError):
    """The `file` form field is missing, not a file, or the body is malformed."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Error retrieving the file"
    outcome = "invalid_input"


class PayloadTooLarge(RelayError):
    """The request body exceeded the configured upload ceiling."""

    status_code = 413
    message = "File too large"
    outcome = "too_large"


class UploadFailed(RelayError):
    """The object store rejected the upload or the transfer failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Error uploading the file to S3"
    outcome = "failed"


class StorageError(Exception):
    """Wraps any transport, auth or service failure from the storage backend."""

    def __init__(self, key: str, cause: Exception):
        self.key = key
        self.cause = cause
        super().__init__(f"Failed to store {key}: {cause}")


class ConfigurationError(Exception):
    """Cloud configuration could not be resolved at startup. Fatal."""


# Client-facing text for framework-level HTTP errors
_HTTP_MESSAGES = {
    status.HTTP_405_METHOD_NOT_ALLOWED: "Invalid request method",
}


async def relay_error_handler(request: Request, exc: RelayError) -> PlainTextResponse:
    """Render a RelayError as a short plaintext response."""
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    """Render router errors (404, 405) as plaintext instead of JSON."""
    message = _HTTP_MESSAGES.get(exc.status_code, str(exc.detail))
    return PlainTextResponse(
        message,
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None)
    )
