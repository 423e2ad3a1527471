"""
Health check endpoint.
Reports the storage target without contacting S3.
"""
from fastapi import APIRouter, Depends

from s3relay.dependencies import get_storage
from s3relay.storage.s3_client import S3Storage

router = APIRouter()


@router.get("/health")
async def health_check(storage: S3Storage = Depends(get_storage)):
    """
    Health check endpoint.
    Returns the configured bucket and region.
    """
    return {
        "status": "healthy",
        "bucket": storage.bucket,
        "region": storage.region
    }
