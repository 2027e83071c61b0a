import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.favourite import Favourite
from app.models.profile import Profile
from app.models.reminder import Reminder
from app.services.profile_image_service import discard_image
from app.utils.errors import ServiceError

logger = logging.getLogger(__name__)


class CascadeDeletionError(ServiceError):
    """A dependent-row delete failed; nothing from the row cascade was committed."""

    def __init__(self, step: str, message: str):
        super().__init__(message)
        self.step = step


@dataclass
class ProfileDeletionResult:
    deleted_reminders_count: int
    deleted_favourites_count: int
    had_image: bool
    image_deleted: bool

    @property
    def message(self) -> str:
        text = (
            f"Profile deleted successfully. {self.deleted_reminders_count} associated reminder(s) "
            f"and {self.deleted_favourites_count} associated favourite(s) were also deleted."
        )
        if self.had_image:
            if self.image_deleted:
                text += " Profile image was also deleted from storage."
            else:
                text += " Note: Profile image deletion from storage failed."
        return text

    def as_dict(self) -> dict:
        return {
            "deleted_reminders_count": self.deleted_reminders_count,
            "deleted_favourites_count": self.deleted_favourites_count,
            "image_deleted": self.image_deleted,
        }


def delete_profile_cascade(db: Session, profile: Profile) -> ProfileDeletionResult:
    """Remove a profile together with its reminders, favourites and stored image.

    The image is removed first and only on a best-effort basis. The row deletes
    share one transaction: either all of them commit or none do.
    """
    profile_id = profile.id
    image_url = profile.profile_img_url

    image_deleted = True
    if image_url:
        try:
            image_deleted = discard_image(profile, image_url)
        except Exception:
            logger.exception("Unexpected error deleting image for profile %s", profile_id)
            image_deleted = False
        if not image_deleted:
            logger.warning("Profile %s image %s left in storage", profile_id, image_url)

    step = "reminders"
    try:
        deleted_reminders = (
            db.query(Reminder)
            .filter(Reminder.profile_id == profile_id)
            .delete(synchronize_session=False)
        )
        step = "favourites"
        deleted_favourites = (
            db.query(Favourite)
            .filter(Favourite.profile_id == profile_id)
            .delete(synchronize_session=False)
        )
        step = "profile"
        deleted_profiles = (
            db.query(Profile)
            .filter(Profile.id == profile_id)
            .delete(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Cascade delete of profile %s failed at step=%s", profile_id, step)
        raise CascadeDeletionError(step, f"Failed to delete associated {step}") from exc

    if not deleted_profiles:
        # A concurrent request got there first; nothing left to do.
        logger.info("Profile %s was already deleted", profile_id)

    logger.info(
        "Deleted profile %s reminders=%s favourites=%s image_deleted=%s",
        profile_id,
        deleted_reminders,
        deleted_favourites,
        image_deleted,
    )
    return ProfileDeletionResult(
        deleted_reminders_count=deleted_reminders,
        deleted_favourites_count=deleted_favourites,
        had_image=bool(image_url),
        image_deleted=image_deleted,
    )
