import json
import logging

from sqlalchemy.orm import Session
from svix.webhooks import Webhook

from app.config import settings
from app.models.user import User
from app.schemas.user import IdentityUserData
from app.utils.errors import ServiceError

logger = logging.getLogger(__name__)

SIGNATURE_HEADERS = ("svix-id", "svix-timestamp", "svix-signature")


class WebhookConfigurationError(ServiceError):
    pass


def verify_event(payload: bytes, headers: dict[str, str]) -> dict:
    """Return the decoded event, raising WebhookVerificationError on a bad signature."""
    if not settings.WEBHOOK_SECRET:
        raise WebhookConfigurationError("WEBHOOK_SECRET is not configured")
    Webhook(settings.WEBHOOK_SECRET).verify(payload, headers)
    # Older svix releases return the event, newer ones return nothing.
    return json.loads(payload)


def create_user(db: Session, data: IdentityUserData) -> User:
    existing = db.query(User).filter(User.id == data.id).first()
    if existing:
        logger.info("User %s already exists", data.id)
        return existing

    user = User(
        id=data.id,
        email=data.primary_email(),
        name=data.display_name(),
        phone_number=data.primary_phone(),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created user %s", user.id)
    return user


def update_user(db: Session, data: IdentityUserData) -> User | None:
    user = db.query(User).filter(User.id == data.id).first()
    if not user:
        logger.info("User %s not found for update", data.id)
        return None

    user.email = data.primary_email()
    user.name = data.display_name()
    user.phone_number = data.primary_phone()
    db.commit()
    db.refresh(user)
    logger.info("Updated user %s", user.id)
    return user
