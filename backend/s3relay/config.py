"""
Application configuration using Pydantic Settings.
All environment variables are loaded here with sensible defaults.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Environment
    environment: str = "dev"
    log_level: str = "INFO"

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 8080

    # Uploads
    max_upload_size: int = 10 * 1024 * 1024  # 10 MiB ceiling on the request body
    object_key_nonce: bool = False  # Add a random token to keys: {ts}-{nonce}-{name}

    # S3 target
    s3_bucket: str = "file-upload-project-dt"
    s3_region: str = "eu-central-1"
    s3_endpoint_url: Optional[str] = None  # e.g., http://localhost:9000 for MinIO

    # AWS credentials (optional - falls back to the boto3 credential chain)
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_session_token: Optional[str] = None
    aws_profile: Optional[str] = None

    # Storage call bounds (seconds)
    storage_connect_timeout: float = 10.0
    storage_read_timeout: float = 60.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
