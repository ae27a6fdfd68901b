"""Maps domain exceptions onto HTTP errors for the v1 endpoints."""

from fastapi import HTTPException, status

from newsdesk.domain.exceptions import (
    EntityNotFoundError,
    PermissionDeniedError,
    QueryFailedError,
    ValidationFailedError,
)

DOMAIN_ERRORS = (
    EntityNotFoundError,
    PermissionDeniedError,
    ValidationFailedError,
    QueryFailedError,
)


def to_http_exception(exc: Exception) -> HTTPException:
    if isinstance(exc, EntityNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, PermissionDeniedError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=exc.message)
    if isinstance(exc, ValidationFailedError):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_CONTENT, detail=exc.message)
    # store details stay in the server log
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Database operation failed",
    )
