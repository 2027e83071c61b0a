import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, joinedload

from app.database import get_db
from app.models.favourite import Favourite
from app.models.profile import Profile
from app.models.user import User
from app.schemas.common import EntityIdRequest
from app.schemas.favourite import FavouriteCreate, FavouriteResponse, FavouriteUpdate
from app.services.auth_middleware import ensure_owner, get_current_user
from app.utils.response import create_response, handle_exception

router = APIRouter(prefix="/favourites", tags=["Favourites"])
logger = logging.getLogger(__name__)


def _favourite_payload(favourite: Favourite, with_profile: bool = False) -> dict:
    payload = FavouriteResponse.model_validate(favourite).model_dump()
    if with_profile:
        profile = favourite.profile
        payload["profile_name"] = profile.name if profile else None
        payload["profile_img_url"] = profile.profile_img_url if profile else None
    return payload


def _check_profile(db: Session, profile_id: str, current_user: User) -> Profile:
    profile = db.query(Profile).filter(Profile.id == profile_id).first()
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    ensure_owner(current_user, profile.user_id)
    return profile


def _get_owned_favourite(db: Session, favourite_id: str, current_user: User) -> Favourite:
    favourite = db.query(Favourite).filter(Favourite.id == favourite_id).first()
    if not favourite:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Favourite not found")
    ensure_owner(current_user, favourite.user_id)
    return favourite


@router.get("")
def list_favourites(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        favourites = (
            db.query(Favourite)
            .options(joinedload(Favourite.profile))
            .filter(Favourite.user_id == current_user.id)
            .order_by(Favourite.created_at.desc())
            .all()
        )
        payload = [_favourite_payload(favourite, with_profile=True) for favourite in favourites]
        return create_response(message="Favourites fetched", data=payload)
    except Exception as exc:
        return handle_exception(exc, "Failed to fetch favourites")


@router.post("")
def create_favourite(
    body: FavouriteCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        ensure_owner(current_user, body.user_id)
        _check_profile(db, body.profile_id, current_user)

        favourite = Favourite(
            title=body.title,
            description=body.description or None,
            user_id=body.user_id,
            profile_id=body.profile_id,
        )
        db.add(favourite)
        db.commit()
        db.refresh(favourite)
        logger.info("User %s created favourite %s on profile %s", current_user.id, favourite.id, body.profile_id)
        return create_response(
            message="Favourite created successfully",
            data=_favourite_payload(favourite),
            status_code=status.HTTP_201_CREATED,
        )
    except Exception as exc:
        return handle_exception(exc, "Failed to create favourite")


@router.put("")
def update_favourite(
    body: FavouriteUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        favourite = _get_owned_favourite(db, body.id, current_user)
        updates = body.model_dump(exclude_unset=True, exclude={"id"})
        if "profile_id" in updates:
            _check_profile(db, updates["profile_id"], current_user)

        for field, value in updates.items():
            setattr(favourite, field, value)
        db.commit()
        db.refresh(favourite)
        return create_response(message="Favourite updated successfully", data=_favourite_payload(favourite))
    except Exception as exc:
        return handle_exception(exc, "Failed to update favourite")


@router.delete("")
def delete_favourite(
    body: EntityIdRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        favourite = _get_owned_favourite(db, body.id, current_user)
        db.delete(favourite)
        db.commit()
        logger.info("User %s deleted favourite %s", current_user.id, body.id)
        return create_response(message="Favourite deleted successfully", data={"id": body.id})
    except Exception as exc:
        return handle_exception(exc, "Failed to delete favourite")


@router.get("/single/{favourite_id}")
def get_favourite(
    favourite_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        favourite = _get_owned_favourite(db, favourite_id, current_user)
        return create_response(message="Favourite fetched", data=_favourite_payload(favourite, with_profile=True))
    except Exception as exc:
        return handle_exception(exc, "Failed to fetch favourite")


@router.get("/user/{user_id}")
def list_user_favourites(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        ensure_owner(current_user, user_id)
        favourites = (
            db.query(Favourite)
            .options(joinedload(Favourite.profile))
            .filter(Favourite.user_id == user_id)
            .order_by(Favourite.created_at.desc())
            .all()
        )
        payload = [_favourite_payload(favourite, with_profile=True) for favourite in favourites]
        return create_response(message="User favourites fetched", data=payload)
    except Exception as exc:
        return handle_exception(exc, "Failed to fetch favourites")


@router.get("/profile/{profile_id}")
def list_profile_favourites(
    profile_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        _check_profile(db, profile_id, current_user)
        favourites = (
            db.query(Favourite)
            .filter(Favourite.profile_id == profile_id)
            .order_by(Favourite.created_at.desc())
            .all()
        )
        return create_response(
            message="Profile favourites fetched",
            data=[_favourite_payload(favourite) for favourite in favourites],
        )
    except Exception as exc:
        return handle_exception(exc, "Failed to fetch favourites")
