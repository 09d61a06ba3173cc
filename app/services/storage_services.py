# app/services/storage_services.py
import logging
import mimetypes
from typing import Optional, Tuple
from uuid import uuid4

import boto3
from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool

from app.core.config import settings

logger = logging.getLogger(__name__)

_s3_client = None


def get_s3_client():
    global _s3_client
    if _s3_client is None:
        _s3_client = boto3.client(
            "s3",
            region_name=settings.S3_REGION,
            endpoint_url=settings.S3_ENDPOINT_URL,
        )
    return _s3_client


def build_object_url(key: str) -> str:
    if settings.S3_PUBLIC_BASE_URL:
        return f"{settings.S3_PUBLIC_BASE_URL.rstrip('/')}/{key}"
    return f"https://{settings.S3_BUCKET}.s3.{settings.S3_REGION}.amazonaws.com/{key}"


async def read_image_upload(upload: Optional[UploadFile]) -> Tuple[bytes, str]:
    """Read an uploaded image, enforcing the image/* type and the size cap. Raises ValueError."""
    if upload is None:
        raise ValueError("image file is required")
    content_type = upload.content_type or ""
    if not content_type.startswith("image/"):
        raise ValueError("Only image uploads are allowed")
    data = await upload.read(settings.MAX_IMAGE_BYTES + 1)
    if len(data) > settings.MAX_IMAGE_BYTES:
        raise ValueError(f"Image must be at most {settings.MAX_IMAGE_BYTES // (1024 * 1024)} MB")
    if not data:
        raise ValueError("image file is empty")
    return data, content_type


async def upload_image(data: bytes, content_type: str, folder: str) -> Tuple[str, str]:
    """Store an image object and return (public_url, key)."""
    if not settings.S3_BUCKET:
        raise RuntimeError("S3_BUCKET is not configured")

    extension = mimetypes.guess_extension(content_type) or ""
    key = f"{folder.strip('/')}/{uuid4().hex}{extension}"
    await run_in_threadpool(
        get_s3_client().put_object,
        Bucket=settings.S3_BUCKET,
        Key=key,
        Body=data,
        ContentType=content_type,
    )
    logger.info(f"Uploaded image object {key} ({len(data)} bytes)")
    return build_object_url(key), key


async def delete_image(key: str) -> None:
    await run_in_threadpool(get_s3_client().delete_object, Bucket=settings.S3_BUCKET, Key=key)
    logger.info(f"Deleted image object {key}")
