import json

from fastapi import HTTPException

from app.services.profile_image_service import ImageValidationError
from app.services.profile_service import CascadeDeletionError
from app.services.sms_service import SmsUnavailableError
from app.utils.response import create_response, handle_exception, warning_response


def _body(response):
    return json.loads(response.body)


def test_envelope_status_follows_status_code():
    assert _body(create_response("ok", {"a": 1}))["status"] == "success"
    assert _body(create_response("nope", None, 404))["status"] == "error"


def test_warning_response_is_a_success_with_warning_status():
    response = warning_response("Done. Note: cleanup failed", {"image_deleted": False})

    assert response.status_code == 200
    assert _body(response) == {
        "message": "Done. Note: cleanup failed",
        "data": {"image_deleted": False},
        "status": "warning",
        "status_code": 200,
    }


def test_http_exception_keeps_its_status_and_detail():
    response = handle_exception(HTTPException(status_code=403, detail="Forbidden"))

    assert response.status_code == 403
    assert _body(response)["message"] == "Forbidden"


def test_service_errors_map_to_their_own_status():
    assert handle_exception(ImageValidationError("Empty file upload")).status_code == 400
    assert handle_exception(SmsUnavailableError("Twilio is not configured")).status_code == 503

    response = handle_exception(CascadeDeletionError("favourites", "Failed to delete associated favourites"))
    assert response.status_code == 500
    assert _body(response)["message"] == "Failed to delete associated favourites"


def test_unexpected_errors_hide_their_details():
    response = handle_exception(KeyError("secret internals"), "Failed to fetch profile")

    assert response.status_code == 500
    assert _body(response) == {
        "message": "Failed to fetch profile",
        "data": None,
        "status": "error",
        "status_code": 500,
    }
