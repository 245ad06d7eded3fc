from __future__ import annotations

from roopsnap.commons.exceptions import BaseCoreException


class MailDeliveryException(BaseCoreException):
    pass
