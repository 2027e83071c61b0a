import logging

from fastapi import status
from twilio.rest import Client

from app.config import settings
from app.utils.errors import ServiceError

logger = logging.getLogger(__name__)


class SmsUnavailableError(ServiceError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


def _build_client() -> Client | None:
    sid = settings.TWILIO_ACCOUNT_SID
    token = settings.TWILIO_AUTH_TOKEN
    if not sid or not token:
        logger.warning("Twilio credentials not configured. SMS disabled.")
        return None
    if sid.startswith("SK"):
        # API key credentials still need the owning account SID.
        if not settings.TWILIO_ACTUAL_ACCOUNT_SID:
            logger.warning("Twilio API key set without TWILIO_ACTUAL_ACCOUNT_SID. SMS disabled.")
            return None
        return Client(sid, token, settings.TWILIO_ACTUAL_ACCOUNT_SID)
    return Client(sid, token)


client = _build_client()


def send_sms(to_number: str, body: str) -> str:
    if client is None:
        raise SmsUnavailableError("Twilio is not properly configured. Please check your environment variables.")

    logger.info("Sending SMS to %s", to_number)
    message = client.messages.create(
        body=body,
        from_=settings.TWILIO_PHONE_NUMBER,
        to=to_number,
    )
    logger.info("SMS queued sid=%s", message.sid)
    return message.sid
