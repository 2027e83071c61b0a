import logging

from fastapi import HTTPException, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.utils.errors import ServiceError

logger = logging.getLogger(__name__)

SUCCESS = "success"
WARNING = "warning"
ERROR = "error"


def create_response(
    message: str,
    data=None,
    status_code: int = status.HTTP_200_OK,
    status_text: str | None = None
) -> JSONResponse:
    """Wrap ``data`` in the envelope every endpoint returns."""
    if status_text is None:
        status_text = SUCCESS if status_code < 400 else ERROR
    return JSONResponse(
        status_code=status_code,
        content={
            "message": message,
            "data": jsonable_encoder(data),
            "status": status_text,
            "status_code": status_code,
        },
    )


def warning_response(message: str, data=None) -> JSONResponse:
    """The request succeeded but a best-effort side effect (e.g. blob cleanup) did not."""
    return create_response(message, data, status.HTTP_200_OK, status_text=WARNING)


def error_response(message: str, status_code: int, data=None) -> JSONResponse:
    return create_response(message, data, status_code, status_text=ERROR)


def handle_exception(error: Exception, fallback_message: str = "Internal server error") -> JSONResponse:
    """Turn an error raised inside an endpoint into an error envelope.

    ``HTTPException`` and ``ServiceError`` keep their own status and message.
    Anything else is logged with its traceback and reported as a 500 carrying
    ``fallback_message``, so internals never reach the client.
    """
    if isinstance(error, HTTPException):
        detail = error.detail if isinstance(error.detail, str) else str(error.detail)
        return error_response(detail, error.status_code)

    if isinstance(error, ServiceError):
        if error.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("%s: %s", fallback_message, error)
        return error_response(str(error), error.status_code)

    logger.exception("%s: %s", fallback_message, error)
    return error_response(fallback_message, status.HTTP_500_INTERNAL_SERVER_ERROR)


def validation_error_response(error: RequestValidationError) -> JSONResponse:
    """Report request validation failures as client errors (400)."""
    errors = [
        {
            "field": ".".join(str(part) for part in item.get("loc", ())[1:]),
            "message": item.get("msg"),
            "type": item.get("type"),
        }
        for item in error.errors()
    ]
    summary = "; ".join(f"{item['field']}: {item['message']}" for item in errors) or "Invalid request"
    return error_response(f"Invalid request: {summary}", status.HTTP_400_BAD_REQUEST, {"errors": errors})
