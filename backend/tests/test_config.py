"""
Tests for settings loading.
"""
from s3relay.config import Settings


class TestSettings:
    """Tests for Settings defaults and overrides."""

    def test_defaults(self, monkeypatch):
        """Test defaults match the baseline deployment."""
        for name in ("S3_BUCKET", "S3_REGION", "PORT", "MAX_UPLOAD_SIZE", "OBJECT_KEY_NONCE"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.s3_bucket == "file-upload-project-dt"
        assert settings.s3_region == "eu-central-1"
        assert settings.port == 8080
        assert settings.max_upload_size == 10 * 1024 * 1024
        assert settings.object_key_nonce is False
        assert settings.s3_endpoint_url is None

    def test_env_overrides(self, monkeypatch):
        """Test environment variables override defaults, case-insensitively."""
        monkeypatch.setenv("S3_BUCKET", "other-bucket")
        monkeypatch.setenv("s3_region", "us-west-2")
        monkeypatch.setenv("PORT", "9090")
        monkeypatch.setenv("MAX_UPLOAD_SIZE", "2048")
        monkeypatch.setenv("OBJECT_KEY_NONCE", "true")

        settings = Settings(_env_file=None)

        assert settings.s3_bucket == "other-bucket"
        assert settings.s3_region == "us-west-2"
        assert settings.port == 9090
        assert settings.max_upload_size == 2048
        assert settings.object_key_nonce is True
