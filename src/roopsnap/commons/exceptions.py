"""
Common/base exceptions.

These are intended to be subclassed by feature-level exceptions in
`<feature>/exceptions.py`. The HTTP status each base maps to lives in
`roopsnap.api.exceptions`.
"""


class BaseServiceException(Exception):
    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class BaseServiceValidationException(BaseServiceException):
    pass


class BaseServiceConflictException(BaseServiceException):
    pass


class BaseServiceUnauthorizedException(BaseServiceException):
    pass


class BaseServiceNotFoundException(BaseServiceException):
    pass


class BaseServiceUnavailableException(BaseServiceException):
    pass


class BaseCoreException(Exception):
    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(self.message)
