from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserPublic(BaseModel):
    id: UUID
    email: str


# Request fields are optional so that missing values reach the service and
# come back as a 400 with a stable message instead of a schema error.
class RegisterRequest(BaseModel):
    email: str | None = Field(default=None, max_length=320)
    password: str | None = Field(default=None, max_length=256)


class LoginRequest(BaseModel):
    email: str | None = Field(default=None, max_length=320)
    password: str | None = Field(default=None, max_length=256)


class ForgotPasswordRequest(BaseModel):
    email: str | None = Field(default=None, max_length=320)


class ResetPasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str | None = Field(default=None, max_length=320)
    code: str | None = Field(default=None, max_length=32)
    new_password: str | None = Field(default=None, alias="newPassword", max_length=256)


class CheckResponse(BaseModel):
    authenticated: bool
    user: UserPublic


class MessageResponse(BaseModel):
    message: str
