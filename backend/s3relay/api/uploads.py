"""
Upload endpoint.

POST /upload takes a multipart form with a `file` field, streams the file to
the configured bucket under {timestamp}-{basename} and answers in plaintext:

    File uploaded successfully: https://{bucket}.s3.{region}.amazonaws.com/{key}

Errors are plaintext too and never carry storage internals:
- 400 "Error retrieving the file": missing/non-file field, malformed body
- 413 "File too large": body above MAX_UPLOAD_SIZE (see BodySizeLimitMiddleware)
- 500 "Error uploading the file to S3": the store rejected the write
- 405 "Invalid request method": any method other than POST
"""
import logging
import time

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException

from s3relay.config import Settings
from s3relay.dependencies import get_settings, get_storage
from s3relay.errors import InvalidInput, RelayError, StorageError, UploadFailed
from s3relay.storage.keys import build_object_key
from s3relay.storage.s3_client import S3Storage
from s3relay.utils.logging import log_upload_completed, log_upload_failed, log_upload_rejected
from s3relay.utils.metrics import storage_latency_seconds, upload_size_bytes, uploads_total

logger = logging.getLogger(__name__)

router = APIRouter()

FILE_FIELD = "file"


@router.post("/upload", response_class=PlainTextResponse)
async def upload_file(
    request: Request,
    storage: S3Storage = Depends(get_storage),
    settings: Settings = Depends(get_settings)
):
    """
    Relay one uploaded file to S3 and return its public URL.

    The form is parsed here rather than through a File() parameter so a
    missing field maps to our own 400 instead of FastAPI's 422.
    """
    try:
        url = await _relay_upload(request, storage, settings.object_key_nonce)
    except RelayError as e:
        uploads_total.labels(outcome=e.outcome).inc()
        if not isinstance(e, UploadFailed):
            log_upload_rejected(logger, reason=e.detail, status_code=e.status_code)
        raise

    uploads_total.labels(outcome="success").inc()
    return PlainTextResponse(f"File uploaded successfully: {url}")


async def _relay_upload(request: Request, storage: S3Storage, nonce: bool) -> str:
    """Parse the form, store the file and return the object URL."""
    try:
        form = await request.form()
    except MultiPartException as e:
        raise InvalidInput(f"malformed multipart body: {e.message}") from e
    except HTTPException as e:
        # Starlette reports multipart errors as a 400 when running inside an app
        raise InvalidInput(f"malformed multipart body: {e.detail}") from e

    # Spooled form files are closed on every path
    try:
        upload = form.get(FILE_FIELD)
        if not isinstance(upload, UploadFile):
            raise InvalidInput(f"form field '{FILE_FIELD}' missing or not a file")

        key = build_object_key(upload.filename, nonce=nonce)
        await _store(storage, key, upload)
    finally:
        await form.close()

    return storage.object_url(key)


async def _store(storage: S3Storage, key: str, upload: UploadFile) -> None:
    """Run the blocking store call off the event loop and record the outcome."""
    start_time = time.time()
    try:
        await run_in_threadpool(storage.store, key, upload.file, upload.content_type)
    except StorageError as e:
        duration = time.time() - start_time
        storage_latency_seconds.labels(status="error").observe(duration)
        log_upload_failed(
            logger,
            object_key=key,
            bucket=storage.bucket,
            error=str(e.cause),
            duration_ms=duration * 1000,
            filename=upload.filename
        )
        raise UploadFailed(str(e)) from e

    duration = time.time() - start_time
    storage_latency_seconds.labels(status="success").observe(duration)
    if upload.size is not None:
        upload_size_bytes.observe(upload.size)
    log_upload_completed(
        logger,
        object_key=key,
        bucket=storage.bucket,
        size_bytes=upload.size,
        duration_ms=duration * 1000
    )
