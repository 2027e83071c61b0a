from fastapi import APIRouter, Depends

from app.models.user import User
from app.schemas.user import UserResponse
from app.services.auth_middleware import get_current_user
from app.utils.response import create_response, handle_exception

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me")
def get_me(current_user: User = Depends(get_current_user)):
    try:
        return create_response(
            message="User fetched successfully",
            data=UserResponse.model_validate(current_user).model_dump(),
        )
    except Exception as exc:
        return handle_exception(exc)
