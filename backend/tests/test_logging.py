"""
Tests for structured upload log events.
"""
import logging

from s3relay.utils.logging import log_upload_completed, log_upload_failed, log_upload_rejected

logger = logging.getLogger("s3relay.test")


class TestUploadEvents:
    """Tests for the upload event helpers."""

    def test_completed(self, caplog):
        """Test success events carry key, bucket and size."""
        with caplog.at_level(logging.INFO, logger="s3relay.test"):
            log_upload_completed(logger, object_key="1-a.txt", bucket="b", size_bytes=10, duration_ms=1.234)

        record = caplog.records[-1]
        assert record.levelno == logging.INFO
        assert record.event == "upload_completed"
        assert record.object_key == "1-a.txt"
        assert record.bucket == "b"
        assert record.size_bytes == 10
        assert record.duration_ms == 1.23

    def test_failed_keeps_detail(self, caplog):
        """Test failure events keep the full error server-side."""
        with caplog.at_level(logging.ERROR, logger="s3relay.test"):
            log_upload_failed(
                logger,
                object_key="1-a.txt",
                bucket="b",
                error="AccessDenied: role/secret",
                filename="../a.txt"
            )

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.event == "upload_failed"
        assert record.error == "AccessDenied: role/secret"
        assert record.upload_filename == "../a.txt"

    def test_rejected(self, caplog):
        """Test rejection events are warnings with a reason."""
        with caplog.at_level(logging.WARNING, logger="s3relay.test"):
            log_upload_rejected(logger, reason="payload too large", status_code=413)

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.event == "upload_rejected"
        assert record.reason == "payload too large"
        assert record.status_code == 413
