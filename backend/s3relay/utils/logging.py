"""
Production logging utility for structured JSON logging.

Provides event-specific logging functions with mandatory fields:
- timestamp (ISO8601)
- level
- service
- event

Optional fields (included when applicable):
- object_key
- upload_filename
- size_bytes
- duration_ms

Usage:
    from s3relay.utils.logging import configure_logging, log_upload_completed

    configure_logging('s3relay', 'INFO')
    log_upload_completed(logger, object_key='1700000000-a.txt', bucket='b', duration_ms=45.2)
"""
import logging
import sys
from typing import Optional, Dict, Any
from pythonjsonlogger import jsonlogger


class StructuredLogger:
    """Structured JSON logger with mandatory fields."""

    _service_name = None
    _configured = False

    @classmethod
    def configure(cls, service_name: str, log_level: str = "INFO"):
        """
        Configure structured JSON logging for the application.

        Args:
            service_name: Service identifier
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        """
        if cls._configured:
            return  # Already configured

        cls._service_name = service_name

        # Remove default handlers
        root_logger = logging.getLogger()
        root_logger.handlers = []

        formatter = jsonlogger.JsonFormatter(
            '%(timestamp)s %(level)s %(name)s %(message)s',
            timestamp=True,
            json_ensure_ascii=False
        )

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)

        root_logger.addHandler(handler)
        root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

        # Add service name to all log records via filter
        class ServiceFilter(logging.Filter):
            def filter(self, record):
                record.service = cls._service_name
                return True

        handler.addFilter(ServiceFilter())
        cls._configured = True


def _build_log_extra(
    event: str,
    object_key: Optional[str] = None,
    filename: Optional[str] = None,
    duration_ms: Optional[float] = None,
    **kwargs
) -> Dict[str, Any]:
    """
    Build extra fields for structured logging.

    Args:
        event: Event name (mandatory)
        object_key: Optional object key in the bucket
        filename: Optional client-supplied filename
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields

    Returns:
        Dictionary of extra fields
    """
    extra = {
        "event": event,
        **kwargs
    }

    if object_key:
        extra["object_key"] = object_key
    if filename:
        extra["upload_filename"] = filename
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 2)

    return extra


def log_upload_completed(
    logger: logging.Logger,
    object_key: str,
    bucket: str,
    size_bytes: Optional[int] = None,
    duration_ms: Optional[float] = None,
    **kwargs
):
    """
    Log a successful upload to the object store.

    Args:
        logger: Logger instance
        object_key: Stored object key (required)
        bucket: Target bucket (required)
        size_bytes: Optional number of bytes transferred
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="upload_completed",
        object_key=object_key,
        duration_ms=duration_ms,
        bucket=bucket,
        **kwargs
    )
    if size_bytes is not None:
        extra["size_bytes"] = size_bytes

    logger.info(f"File uploaded successfully to S3: {object_key}", extra=extra)


def log_upload_failed(
    logger: logging.Logger,
    object_key: str,
    bucket: str,
    error: str,
    duration_ms: Optional[float] = None,
    include_traceback: bool = True,
    **kwargs
):
    """
    Log a failed upload, with full error detail.

    Args:
        logger: Logger instance
        object_key: Object key that was being written (required)
        bucket: Target bucket (required)
        error: Error message (required)
        duration_ms: Optional duration in milliseconds
        include_traceback: Whether to include stack trace (default: True)
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="upload_failed",
        object_key=object_key,
        duration_ms=duration_ms,
        bucket=bucket,
        error=str(error),
        **kwargs
    )

    message = f"Failed to upload file to S3: {object_key} - {error}"

    if include_traceback:
        exc_info = sys.exc_info()
        if exc_info[0] is not None:
            logger.error(message, extra=extra, exc_info=exc_info)
            return
    logger.error(message, extra=extra)


def log_upload_rejected(
    logger: logging.Logger,
    reason: str,
    filename: Optional[str] = None,
    **kwargs
):
    """
    Log an upload rejected before reaching storage (bad input, too large).

    Args:
        logger: Logger instance
        reason: Rejection reason (required)
        filename: Optional client-supplied filename
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="upload_rejected",
        filename=filename,
        reason=reason,
        **kwargs
    )

    logger.warning(f"Upload rejected: {reason}", extra=extra)


def configure_logging(service_name: str, log_level: str = "INFO"):
    """Configure logging (alias for StructuredLogger.configure)."""
    StructuredLogger.configure(service_name, log_level)
