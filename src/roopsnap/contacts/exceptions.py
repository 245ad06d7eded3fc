from __future__ import annotations

from roopsnap.commons.exceptions import (
    BaseServiceNotFoundException,
    BaseServiceValidationException,
)


class ContactsServiceValidationException(BaseServiceValidationException):
    pass


class ContactsServiceNotFoundException(BaseServiceNotFoundException):
    pass


CONTACT_NOT_FOUND = "Contact not found"
