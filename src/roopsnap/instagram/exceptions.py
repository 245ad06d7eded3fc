from __future__ import annotations

from roopsnap.commons.exceptions import BaseCoreException, BaseServiceUnavailableException


class InstagramNotConfiguredException(BaseServiceUnavailableException):
    pass


class InstagramException(BaseCoreException):
    pass
