"""
S3 storage client.

Uses boto3 to stream uploaded files into a single bucket. The client is
built once at startup and shared by every request; boto3 clients are
thread-safe, so no locking is needed around store().

Each store() is one attempt: botocore retries are disabled and failures are
surfaced as StorageError for the caller to report.
"""
import logging
from typing import BinaryIO, Optional

import boto3
from boto3.exceptions import Boto3Error
from boto3.s3.transfer import TransferConfig
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from s3relay.config import Settings, settings as default_settings
from s3relay.errors import ConfigurationError, StorageError
from s3relay.storage.keys import build_object_url

logger = logging.getLogger(__name__)


class S3Storage:
    """
    Single-bucket S3 adapter.

    Exposes store() for streaming writes and object_url() for the public URL
    of a stored key.
    """

    def __init__(
        self,
        client,
        bucket: str,
        region: str,
        endpoint_url: Optional[str] = None,
        transfer_config: Optional[TransferConfig] = None
    ):
        self._client = client
        self._bucket = bucket
        self._region = region
        self._endpoint_url = endpoint_url
        self._transfer_config = transfer_config or TransferConfig()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "S3Storage":
        """
        Resolve AWS configuration and build the adapter.

        Explicit keys in settings win; otherwise boto3's default chain
        (env vars, shared config, instance role) is used.

        Raises:
            ConfigurationError: if region or credentials cannot be resolved
        """
        settings = settings or default_settings

        if not settings.s3_bucket:
            raise ConfigurationError("S3_BUCKET is not set")

        try:
            session = boto3.session.Session(
                aws_access_key_id=settings.aws_access_key_id,
                aws_secret_access_key=settings.aws_secret_access_key,
                aws_session_token=settings.aws_session_token,
                region_name=settings.s3_region or None,
                profile_name=settings.aws_profile
            )
            credentials = session.get_credentials()
            if not session.region_name:
                raise ConfigurationError("no AWS region could be resolved")
            if credentials is None:
                raise ConfigurationError("no AWS credentials could be resolved")

            client = session.client(
                "s3",
                endpoint_url=settings.s3_endpoint_url,
                config=Config(
                    connect_timeout=settings.storage_connect_timeout,
                    read_timeout=settings.storage_read_timeout,
                    retries={"total_max_attempts": 1}
                )
            )
        except (BotoCoreError, ValueError) as e:
            # ValueError: malformed S3_ENDPOINT_URL
            raise ConfigurationError(f"unable to load AWS config: {e}") from e

        logger.info(
            f"S3 client initialized for bucket: {settings.s3_bucket}",
            extra={"event": "storage_initialized", "region": session.region_name}
        )
        return cls(
            client,
            bucket=settings.s3_bucket,
            region=session.region_name,
            endpoint_url=settings.s3_endpoint_url
        )

    @property
    def bucket(self) -> str:
        """Get configured bucket name."""
        return self._bucket

    @property
    def region(self) -> str:
        """Get configured region."""
        return self._region

    def store(self, key: str, stream: BinaryIO, content_type: Optional[str] = None) -> None:
        """
        Stream a file object into the bucket under key.

        upload_fileobj reads the stream in parts (multipart upload for large
        files), so memory use does not grow with the file size.

        Args:
            key: Object key
            stream: Readable binary file object, read once to EOF
            content_type: Optional MIME type stored with the object

        Raises:
            StorageError: on any transport, auth or service failure
        """
        extra_args = {"ContentType": content_type} if content_type else None
        try:
            self._client.upload_fileobj(
                stream,
                self._bucket,
                key,
                ExtraArgs=extra_args,
                Config=self._transfer_config
            )
        except (ClientError, BotoCoreError, Boto3Error) as e:
            raise StorageError(key, e) from e

        logger.debug(f"Stored {key} in {self._bucket}")

    def object_url(self, key: str) -> str:
        """Public URL of key in the configured bucket."""
        return build_object_url(self._bucket, self._region, key, self._endpoint_url)
