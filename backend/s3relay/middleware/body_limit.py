"""
ASGI middleware enforcing the upload size ceiling.

Requests announcing a Content-Length above the ceiling are answered with 413
before the body is read. Streamed bodies without a length are counted chunk by
chunk and PayloadTooLarge is raised from receive() once the ceiling is
crossed, which aborts form parsing before any storage write.
"""
import logging

from starlette.datastructures import Headers
from starlette.responses import PlainTextResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from s3relay.errors import PayloadTooLarge
from s3relay.utils.logging import log_upload_rejected
from s3relay.utils.metrics import uploads_total

logger = logging.getLogger(__name__)


class BodySizeLimitMiddleware:
    """Reject request bodies larger than max_body_size bytes."""

    def __init__(self, app: ASGIApp, max_body_size: int):
        self.app = app
        self.max_body_size = max_body_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length is not None and content_length.isdigit():
            if int(content_length) > self.max_body_size:
                log_upload_rejected(
                    logger,
                    reason="payload too large",
                    content_length=int(content_length),
                    max_upload_size=self.max_body_size
                )
                uploads_total.labels(outcome=PayloadTooLarge.outcome).inc()
                response = PlainTextResponse(
                    PayloadTooLarge.message,
                    status_code=PayloadTooLarge.status_code
                )
                await response(scope, receive, send)
                return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_size:
                    raise PayloadTooLarge(
                        f"body exceeded {self.max_body_size} bytes"
                    )
            return message

        await self.app(scope, limited_receive, send)
