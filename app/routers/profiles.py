import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.models.profile import Profile
from app.models.user import User
from app.schemas.common import EntityIdRequest
from app.schemas.profile import (
    ProfileCreate,
    ProfileDeletionResponse,
    ProfileImageDelete,
    ProfileResponse,
    ProfileUpdate,
)
from app.services.auth_middleware import ensure_owner, get_current_user
from app.services.profile_image_service import (
    discard_image,
    remove_profile_image,
    replace_profile_image,
    validate_image,
)
from app.services.profile_service import delete_profile_cascade
from app.utils.response import create_response, handle_exception, warning_response

router = APIRouter(prefix="/profiles", tags=["Profiles"])
logger = logging.getLogger(__name__)


def _get_owned_profile(db: Session, profile_id: str, current_user: User) -> Profile:
    profile = db.query(Profile).filter(Profile.id == profile_id).first()
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    ensure_owner(current_user, profile.user_id)
    return profile


@router.post("")
def create_profile(
    body: ProfileCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        ensure_owner(current_user, body.user_id)
        profile = Profile(name=body.name, description=body.description or None, user_id=body.user_id)
        db.add(profile)
        db.commit()
        db.refresh(profile)
        logger.info("User %s created profile %s", current_user.id, profile.id)
        return create_response(
            message="Profile created successfully",
            data=ProfileResponse.model_validate(profile).model_dump(),
            status_code=status.HTTP_201_CREATED,
        )
    except Exception as exc:
        return handle_exception(exc, "Failed to create profile")


@router.put("")
def update_profile(
    body: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        profile = _get_owned_profile(db, body.id, current_user)
        previous_url = profile.profile_img_url
        update_data = body.model_dump(exclude_unset=True, exclude={"id"})
        for field, value in update_data.items():
            setattr(profile, field, value)
        db.commit()
        db.refresh(profile)

        data = ProfileResponse.model_validate(profile).model_dump()
        if profile.profile_img_url != previous_url and not discard_image(profile, previous_url):
            return warning_response("Profile updated. Note: previous image removal from storage failed", data)
        return create_response(message="Profile updated successfully", data=data)
    except Exception as exc:
        return handle_exception(exc, "Failed to update profile")


@router.delete("")
def delete_profile(
    body: EntityIdRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        profile = _get_owned_profile(db, body.id, current_user)
        result = delete_profile_cascade(db, profile)

        data = ProfileDeletionResponse(**result.as_dict()).model_dump()
        if result.had_image and not result.image_deleted:
            return warning_response(result.message, data)
        return create_response(message=result.message, data=data)
    except Exception as exc:
        return handle_exception(exc, "Failed to delete profile")


@router.get("/user/{user_id}")
def list_user_profiles(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        ensure_owner(current_user, user_id)
        profiles = db.query(Profile).filter(Profile.user_id == user_id).order_by(Profile.name.asc()).all()
        payload = [ProfileResponse.model_validate(profile).model_dump() for profile in profiles]
        return create_response(message="Profiles fetched", data=payload)
    except Exception as exc:
        return handle_exception(exc, "Failed to fetch user profiles")


@router.get("/profile/{profile_id}")
def get_profile(
    profile_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        profile = _get_owned_profile(db, profile_id, current_user)
        return create_response(
            message="Profile fetched",
            data=ProfileResponse.model_validate(profile).model_dump(),
        )
    except Exception as exc:
        return handle_exception(exc, "Failed to fetch profile")


@router.post("/upload-image")
async def upload_profile_image(
    file: UploadFile = File(...),
    profile_id: str = Form(...),
    user_id: str = Form(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        ensure_owner(current_user, user_id)

        # Read one byte past the limit so oversized uploads are detectable without buffering them whole.
        contents = await file.read(settings.max_image_size_bytes + 1)
        validate_image(file.content_type, len(contents))

        profile = _get_owned_profile(db, profile_id, current_user)
        image_url = replace_profile_image(db, profile, contents, file.content_type, file.filename)

        return create_response(
            message="Image uploaded successfully",
            data={
                "profile_img_url": image_url,
                "profile": ProfileResponse.model_validate(profile).model_dump(),
            },
        )
    except Exception as exc:
        return handle_exception(exc, "Failed to upload image")


@router.delete("/upload-image")
def delete_profile_image(
    body: ProfileImageDelete,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        ensure_owner(current_user, body.user_id)
        profile = _get_owned_profile(db, body.profile_id, current_user)
        if not profile.profile_img_url:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No profile image found to delete")

        image_deleted = remove_profile_image(db, profile)
        data = {
            "image_deleted": image_deleted,
            "profile": ProfileResponse.model_validate(profile).model_dump(),
        }
        if not image_deleted:
            return warning_response("Profile image deleted successfully. Note: image removal from storage failed", data)
        return create_response(message="Profile image deleted successfully", data=data)
    except Exception as exc:
        return handle_exception(exc, "Failed to delete image")
