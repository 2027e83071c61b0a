import logging
import smtplib

from fastapi import APIRouter, Depends, HTTPException, status
from twilio.base.exceptions import TwilioException

from app.models.user import User
from app.schemas.notifications import EmailRequest, SmsRequest
from app.services.auth_middleware import get_current_user
from app.services.email_services import send_email
from app.services.sms_service import send_sms
from app.utils.response import create_response, handle_exception

router = APIRouter(prefix="/notifications", tags=["Notifications"])
logger = logging.getLogger(__name__)


@router.post("/email")
def send_email_notification(
    body: EmailRequest,
    current_user: User = Depends(get_current_user),
):
    try:
        if not body.subject or not body.message:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Subject and message are required")
        if not body.email:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User does not have an email address")

        try:
            message_id = send_email(body.email, body.subject, body.message, body.html_content)
        except (smtplib.SMTPException, OSError) as exc:
            logger.exception("Email to %s failed for user %s", body.email, current_user.id)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to send email: {exc}",
            ) from exc

        return create_response(
            message="Email sent successfully",
            data={"message_id": message_id, "sent_to": body.email},
        )
    except Exception as exc:
        return handle_exception(exc, "Failed to send email")


@router.post("/sms")
def send_sms_notification(
    body: SmsRequest | None = None,
    current_user: User = Depends(get_current_user),
):
    try:
        if not current_user.phone_number:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User does not have a phone number")

        text = body.message if body else SmsRequest().message
        try:
            sid = send_sms(current_user.phone_number, text)
        except TwilioException as exc:
            logger.exception("SMS to user %s failed", current_user.id)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to send message: {exc}",
            ) from exc

        return create_response(message="Message sent", data={"sid": sid, "sent_to": current_user.phone_number})
    except Exception as exc:
        return handle_exception(exc, "Failed to send message")
