"""
Storage module for S3 object storage.

The upload handler streams file bytes through this adapter into one bucket.
"""
from s3relay.storage.keys import build_object_key, build_object_url, sanitize_filename
from s3relay.storage.s3_client import S3Storage

__all__ = ["S3Storage", "build_object_key", "build_object_url", "sanitize_filename"]
