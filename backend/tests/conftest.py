"""
Test configuration and fixtures.
Replaces the S3 adapter with an in-memory double; no network access needed.
"""
import os

# Set test environment before any imports
os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("AWS_ACCESS_KEY_ID", "test")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "test")
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-central-1")

import pytest
from typing import AsyncGenerator, BinaryIO, Dict, List, Optional

from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from s3relay.config import Settings
from s3relay.dependencies import get_storage
from s3relay.errors import StorageError
from s3relay.storage.keys import build_object_url


TEST_BUCKET = "test-bucket"
TEST_REGION = "eu-central-1"


class InMemoryStorage:
    """Storage double recording stored objects by key."""

    def __init__(self, bucket: str = TEST_BUCKET, region: str = TEST_REGION):
        self.bucket = bucket
        self.region = region
        self.objects: Dict[str, bytes] = {}
        self.content_types: Dict[str, Optional[str]] = {}
        self.fail_with: Optional[Exception] = None
        self.streams: List[BinaryIO] = []

    def store(self, key: str, stream: BinaryIO, content_type: Optional[str] = None) -> None:
        self.streams.append(stream)
        if self.fail_with is not None:
            raise StorageError(key, self.fail_with)
        self.objects[key] = stream.read()
        self.content_types[key] = content_type

    def object_url(self, key: str) -> str:
        return build_object_url(self.bucket, self.region, key)


@pytest.fixture(scope="function")
def test_settings() -> Settings:
    """Settings with a small upload ceiling to keep tests cheap."""
    return Settings(
        s3_bucket=TEST_BUCKET,
        s3_region=TEST_REGION,
        max_upload_size=1024,
        _env_file=None
    )


@pytest.fixture(scope="function")
def storage() -> InMemoryStorage:
    """Fresh in-memory storage per test."""
    return InMemoryStorage()


def get_test_app(settings: Settings, storage: InMemoryStorage) -> FastAPI:
    """Create a test FastAPI app with the storage dependency overridden."""
    from s3relay.main import create_app

    app = create_app(settings)
    app.dependency_overrides[get_storage] = lambda: storage
    return app


@pytest.fixture(scope="function")
async def client(test_settings: Settings, storage: InMemoryStorage) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    app = get_test_app(test_settings, storage)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def fixed_time(monkeypatch):
    """Freeze the key timestamp at 1700000000."""
    from types import SimpleNamespace
    from s3relay.storage import keys

    monkeypatch.setattr(keys, "time", SimpleNamespace(time=lambda: 1700000000.25))
    return 1700000000
