import logging
from urllib.parse import urlparse

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.config import settings
from app.utils.errors import ServiceError

logger = logging.getLogger(__name__)

session = boto3.session.Session()

s3 = session.client(
    "s3",
    region_name=settings.S3_REGION,
    endpoint_url=settings.S3_ENDPOINT_URL,
    aws_access_key_id=settings.S3_ACCESS_KEY_ID,
    aws_secret_access_key=settings.S3_SECRET_ACCESS_KEY,
)

BUCKET = settings.S3_BUCKET_NAME


class StorageError(ServiceError):
    """Raised when the object store rejects an upload."""


def _join_path(*segments: str) -> str:
    cleaned = [segment.strip("/") for segment in segments if segment and segment.strip("/")]
    return "/".join(cleaned)


def public_url(key: str) -> str:
    return f"{settings.s3_public_base_url}/{key}"


def key_from_url(url: str | None) -> str | None:
    """Recover the object key from a URL produced by :func:`public_url`."""
    if not url:
        return None
    base = f"{settings.s3_public_base_url}/"
    if url.startswith(base):
        key = url[len(base):]
    else:
        key = urlparse(url).path.lstrip("/")
    return key or None


def upload_file(data: bytes, key: str, content_type: str | None = None) -> str:
    extra_args = {}
    if content_type:
        extra_args["ContentType"] = content_type

    try:
        s3.put_object(
            Bucket=BUCKET,
            Key=key,
            Body=data,
            **extra_args
        )
    except (ClientError, BotoCoreError) as exc:
        logger.exception("Failed to upload %s to bucket %s", key, BUCKET)
        raise StorageError("Failed to upload image to storage") from exc

    logger.info("Uploaded %s (%s bytes) to bucket %s", key, len(data), BUCKET)
    return public_url(key)


def delete_file(key: str) -> bool:
    try:
        s3.delete_object(Bucket=BUCKET, Key=key)
    except (ClientError, BotoCoreError) as exc:
        logger.warning("Failed to delete %s from bucket %s: %s", key, BUCKET, exc)
        return False
    logger.info("Deleted %s from bucket %s", key, BUCKET)
    return True
