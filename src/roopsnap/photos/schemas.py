from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class PhotoPublic(BaseModel):
    id: int
    filename: str
    original_name: str | None = None
    file_path: str
    description: str | None = None
    category: str | None = None
    uploaded_at: datetime


class UploadPhotoResponse(BaseModel):
    id: int
    filename: str
    file_path: str
    description: str | None = None
    category: str | None = None
    message: str


class MessageResponse(BaseModel):
    message: str
