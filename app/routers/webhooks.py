import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import ValidationError
from sqlalchemy.orm import Session
from svix.webhooks import WebhookVerificationError

from app.database import get_db
from app.schemas.user import IdentityUserData, UserResponse
from app.services.webhook_service import (
    SIGNATURE_HEADERS,
    create_user,
    update_user,
    verify_event,
)
from app.utils.response import create_response, handle_exception

router = APIRouter(prefix="/webhooks", tags=["Webhooks"])
logger = logging.getLogger(__name__)


@router.post("/identity")
async def identity_webhook(request: Request, db: Session = Depends(get_db)):
    try:
        headers = {name: request.headers.get(name) for name in SIGNATURE_HEADERS}
        if not all(headers.values()):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing webhook signature headers")

        payload = await request.body()
        try:
            event = verify_event(payload, headers)
        except WebhookVerificationError as exc:
            logger.warning("Rejected webhook %s: %s", headers["svix-id"], exc)
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid webhook signature") from exc

        if not isinstance(event, dict):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid webhook payload")

        event_type = event.get("type")
        logger.info("Webhook %s received type=%s", headers["svix-id"], event_type)
        if event_type not in {"user.created", "user.updated"}:
            return create_response(message="Event ignored", data={"type": event_type})

        try:
            data = IdentityUserData.model_validate(event.get("data") or {})
        except ValidationError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid user payload") from exc

        if event_type == "user.created":
            user = create_user(db, data)
            return create_response(
                message="User created successfully",
                data=UserResponse.model_validate(user).model_dump(),
            )

        user = update_user(db, data)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return create_response(
            message="User updated successfully",
            data=UserResponse.model_validate(user).model_dump(),
        )
    except Exception as exc:
        return handle_exception(exc, "Failed to process webhook")
