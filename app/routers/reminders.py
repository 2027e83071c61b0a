import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, joinedload

from app.database import get_db
from app.models.profile import Profile
from app.models.reminder import Reminder
from app.models.user import User
from app.schemas.common import EntityIdRequest
from app.schemas.reminder import ReminderCreate, ReminderResponse, ReminderUpdate
from app.services.auth_middleware import ensure_owner, get_current_user
from app.services.reminder_rules import apply_frequency_rules, display_status
from app.utils.response import create_response, handle_exception

router = APIRouter(prefix="/reminders", tags=["Reminders"])
logger = logging.getLogger(__name__)


def _reminder_payload(reminder: Reminder) -> dict:
    payload = ReminderResponse.model_validate(reminder).model_dump()
    payload["status"] = display_status(reminder)
    return payload


def _reminder_with_profile_payload(reminder: Reminder) -> dict:
    payload = _reminder_payload(reminder)
    profile = reminder.profile
    payload["profile_name"] = profile.name if profile else None
    payload["profile_img_url"] = profile.profile_img_url if profile else None
    return payload


def _check_profile(db: Session, profile_id: str | None, current_user: User) -> None:
    if profile_id is None:
        return
    profile = db.query(Profile).filter(Profile.id == profile_id).first()
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    ensure_owner(current_user, profile.user_id)


def _get_owned_reminder(db: Session, reminder_id: str, current_user: User) -> Reminder:
    reminder = db.query(Reminder).filter(Reminder.id == reminder_id).first()
    if not reminder:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Reminder not found")
    ensure_owner(current_user, reminder.user_id)
    return reminder


@router.get("")
def list_reminders(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        reminders = (
            db.query(Reminder)
            .filter(Reminder.user_id == current_user.id)
            .order_by(Reminder.date_to_remember.asc())
            .all()
        )
        return create_response(message="Reminders fetched", data=[_reminder_payload(r) for r in reminders])
    except Exception as exc:
        return handle_exception(exc, "Failed to fetch reminders")


@router.post("")
def create_reminder(
    body: ReminderCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        ensure_owner(current_user, body.user_id)
        _check_profile(db, body.profile_id, current_user)

        fields = apply_frequency_rules(body.model_dump())
        fields["description"] = fields.get("description") or None
        reminder = Reminder(**fields)
        db.add(reminder)
        db.commit()
        db.refresh(reminder)
        logger.info(
            "User %s created reminder %s frequency=%s should_expire=%s",
            current_user.id,
            reminder.id,
            reminder.frequency.value,
            reminder.should_expire,
        )
        return create_response(
            message="Reminder created successfully",
            data=_reminder_payload(reminder),
            status_code=status.HTTP_201_CREATED,
        )
    except Exception as exc:
        return handle_exception(exc, "Failed to create reminder")


@router.put("")
def update_reminder(
    body: ReminderUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        reminder = _get_owned_reminder(db, body.id, current_user)
        updates = apply_frequency_rules(body.model_dump(exclude_unset=True, exclude={"id"}))
        if "profile_id" in updates:
            _check_profile(db, updates["profile_id"], current_user)

        for field, value in updates.items():
            setattr(reminder, field, value)
        db.commit()
        db.refresh(reminder)
        logger.info("User %s updated reminder %s fields=%s", current_user.id, reminder.id, sorted(updates))
        return create_response(message="Reminder updated successfully", data=_reminder_payload(reminder))
    except Exception as exc:
        return handle_exception(exc, "Failed to update reminder")


@router.delete("")
def delete_reminder(
    body: EntityIdRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        reminder = _get_owned_reminder(db, body.id, current_user)
        db.delete(reminder)
        db.commit()
        logger.info("User %s deleted reminder %s", current_user.id, body.id)
        return create_response(message="Reminder deleted successfully", data={"id": body.id})
    except Exception as exc:
        return handle_exception(exc, "Failed to delete reminder")


@router.get("/single/{reminder_id}")
def get_reminder(
    reminder_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        reminder = _get_owned_reminder(db, reminder_id, current_user)
        return create_response(message="Reminder fetched", data=_reminder_payload(reminder))
    except Exception as exc:
        return handle_exception(exc, "Failed to fetch reminder")


@router.get("/user/{user_id}")
def list_user_reminders(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        ensure_owner(current_user, user_id)
        reminders = (
            db.query(Reminder)
            .options(joinedload(Reminder.profile))
            .filter(Reminder.user_id == user_id)
            .order_by(Reminder.date_to_remember.asc())
            .all()
        )
        payload = [_reminder_with_profile_payload(reminder) for reminder in reminders]
        return create_response(message="User reminders fetched", data=payload)
    except Exception as exc:
        return handle_exception(exc, "Failed to fetch user reminders")


@router.get("/personal/{user_id}")
def list_personal_reminders(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        ensure_owner(current_user, user_id)
        reminders = (
            db.query(Reminder)
            .filter(Reminder.user_id == user_id, Reminder.profile_id.is_(None))
            .order_by(Reminder.date_to_remember.asc())
            .all()
        )
        return create_response(message="Personal reminders fetched", data=[_reminder_payload(r) for r in reminders])
    except Exception as exc:
        return handle_exception(exc, "Failed to fetch personal reminders")


@router.get("/profile/{profile_id}")
def list_profile_reminders(
    profile_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        _check_profile(db, profile_id, current_user)
        reminders = (
            db.query(Reminder)
            .filter(Reminder.profile_id == profile_id)
            .order_by(Reminder.date_to_remember.asc())
            .all()
        )
        return create_response(message="Profile reminders fetched", data=[_reminder_payload(r) for r in reminders])
    except Exception as exc:
        return handle_exception(exc, "Failed to fetch profile reminders")


@router.get("/user-profile/{user_id}/{profile_id}")
def list_user_profile_reminders(
    user_id: str,
    profile_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        ensure_owner(current_user, user_id)
        reminders = (
            db.query(Reminder)
            .filter(Reminder.user_id == user_id, Reminder.profile_id == profile_id)
            .order_by(Reminder.date_to_remember.asc())
            .all()
        )
        return create_response(
            message="Reminders fetched",
            data=[_reminder_payload(r) for r in reminders],
        )
    except Exception as exc:
        return handle_exception(exc, "Failed to fetch reminders by user and profile")
