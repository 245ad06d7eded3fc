from __future__ import annotations

from pydantic import BaseModel


class AdminVerifyResponse(BaseModel):
    status: str
    via: str
