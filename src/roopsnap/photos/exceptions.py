from __future__ import annotations

from roopsnap.commons.exceptions import (
    BaseServiceNotFoundException,
    BaseServiceValidationException,
)


class PhotosServiceValidationException(BaseServiceValidationException):
    pass


class PhotosServiceNotFoundException(BaseServiceNotFoundException):
    pass


PHOTO_NOT_FOUND = "Photo not found"
NO_FILE_UPLOADED = "No file uploaded"
ONLY_IMAGES_ALLOWED = "Only image files are allowed!"
FILE_TOO_LARGE = "File too large. Maximum size is 10MB."
