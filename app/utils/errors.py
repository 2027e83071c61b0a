from fastapi import status


class ServiceError(Exception):
    """Domain failure that maps onto a specific HTTP status."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
