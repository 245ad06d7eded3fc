from __future__ import annotations

from roopsnap.commons.exceptions import (
    BaseServiceConflictException,
    BaseServiceException,
    BaseServiceUnauthorizedException,
    BaseServiceValidationException,
)


class AuthServiceException(BaseServiceException):
    pass


class AuthServiceValidationException(BaseServiceValidationException):
    pass


class AuthServiceConflictException(BaseServiceConflictException):
    pass


class AuthServiceUnauthorizedException(BaseServiceUnauthorizedException):
    pass


INVALID_CREDENTIALS = "Invalid email or password"
NOT_AUTHENTICATED = "Not authenticated"
UNAUTHORIZED = "Unauthorized"
