"""
FastAPI dependencies.

The storage adapter and settings live on app.state, set up by create_app().
Tests swap them through app.dependency_overrides.
"""
from fastapi import Request

from s3relay.config import Settings
from s3relay.storage.s3_client import S3Storage


def get_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_storage(request: Request) -> S3Storage:
    """The process-wide storage adapter built at startup."""
    return request.app.state.storage
