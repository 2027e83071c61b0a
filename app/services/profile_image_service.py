import logging
import time
from pathlib import Path

from fastapi import status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import settings
from app.models.profile import Profile
from app.services import storage_service
from app.utils.errors import ServiceError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}


class ImageValidationError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST


def validate_image(content_type: str | None, size: int) -> None:
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise ImageValidationError("Invalid file type. Please upload a JPEG, PNG, WebP, or GIF image.")
    if size <= 0:
        raise ImageValidationError("Empty file upload")
    if size > settings.max_image_size_bytes:
        raise ImageValidationError(
            f"File size too large. Please upload an image smaller than {settings.MAX_IMAGE_SIZE_MB}MB."
        )


def _timestamp_ms() -> int:
    return int(time.time() * 1000)


def profile_image_prefix(user_id: str, profile_id: str) -> str:
    return f"profiles/{user_id}/{profile_id}/"


def build_profile_image_key(
    user_id: str,
    profile_id: str,
    filename: str | None,
    content_type: str,
    timestamp_ms: int | None = None,
) -> str:
    extension = Path(filename or "").suffix.lower().lstrip(".") or ALLOWED_IMAGE_TYPES[content_type]
    if timestamp_ms is None:
        timestamp_ms = _timestamp_ms()
    return f"{profile_image_prefix(user_id, profile_id)}profile-{timestamp_ms}.{extension}"


def replace_profile_image(
    db: Session,
    profile: Profile,
    data: bytes,
    content_type: str,
    filename: str | None,
) -> str:
    """Store a new image for the profile and drop the one it supersedes.

    The profile keeps its current URL if the upload fails.
    """
    validate_image(content_type, len(data))

    previous_url = profile.profile_img_url
    key = build_profile_image_key(profile.user_id, profile.id, filename, content_type)
    new_url = storage_service.upload_file(data, key, content_type)

    try:
        profile.profile_img_url = new_url
        db.commit()
        db.refresh(profile)
    except SQLAlchemyError:
        db.rollback()
        storage_service.delete_file(key)
        raise

    if previous_url != new_url:
        discard_image(profile, previous_url)

    logger.info("Profile %s image set to %s", profile.id, new_url)
    return new_url


def discard_image(profile: Profile, url: str | None) -> bool:
    """Delete a blob the profile no longer points at.

    Only keys under the profile's own prefix are removed. Anything else was
    never stored for this profile and is left alone.
    """
    if not url:
        return True
    key = storage_service.key_from_url(url)
    if not key or not key.startswith(profile_image_prefix(profile.user_id, profile.id)):
        logger.info("Image %s is not stored for profile %s, skipping delete", url, profile.id)
        return True
    if not storage_service.delete_file(key):
        logger.warning("Image %s for profile %s left in storage", url, profile.id)
        return False
    return True


def remove_profile_image(db: Session, profile: Profile) -> bool:
    """Clear the profile image. Storage cleanup never blocks clearing the field."""
    image_deleted = discard_image(profile, profile.profile_img_url)

    profile.profile_img_url = None
    db.commit()
    db.refresh(profile)
    return image_deleted
