"""Translate service errors into HTTP errors."""

from fastapi import HTTPException

from nutritrack.errors import (
    BusinessRuleError,
    ExternalServiceError,
    InvalidInputError,
    NotFoundError,
    NutriTrackError,
)


def http_error(error: NutriTrackError) -> HTTPException:
    if isinstance(error, NotFoundError):
        status_code = 404
    elif isinstance(error, InvalidInputError):
        status_code = 400
    elif isinstance(error, BusinessRuleError):
        status_code = 409
    elif isinstance(error, ExternalServiceError):
        status_code = 502
    else:
        status_code = 500
    return HTTPException(status_code=status_code, detail=str(error))
