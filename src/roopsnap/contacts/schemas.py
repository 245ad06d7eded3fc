from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class ContactPublic(BaseModel):
    id: int
    name: str
    email: str
    message: str
    phone: str | None = None
    submitted_at: datetime
    status: str


class SubmitContactRequest(BaseModel):
    name: str | None = Field(default=None, max_length=200)
    email: str | None = Field(default=None, max_length=320)
    message: str | None = Field(default=None, max_length=10_000)
    phone: str | None = Field(default=None, max_length=64)


class SubmitContactResponse(BaseModel):
    id: int
    message: str


class UpdateContactRequest(BaseModel):
    status: str | None = Field(default=None, max_length=32)


class MessageResponse(BaseModel):
    message: str
