from __future__ import annotations

import hmac
from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated, Protocol

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from roopsnap.auth.exceptions import (
    UNAUTHORIZED,
    AuthServiceUnauthorizedException,
)
from roopsnap.auth.service import AuthService
from roopsnap.auth.sessions import SessionContext
from roopsnap.commons.depends import database_session
from roopsnap.core.settings import settings

ADMIN_KEY_HEADER = "X-Admin-Key"


@lru_cache
def get_auth_service() -> AuthService:
    return AuthService.create()


@dataclass(frozen=True)
class AdminPrincipal:
    via: str
    session: SessionContext | None = None


class AdminCredential(Protocol):
    name: str

    async def verify(
        self, request: Request, session: AsyncSession, svc: AuthService
    ) -> AdminPrincipal | None: ...


@dataclass(frozen=True)
class SessionCredential:
    name: str = "session"

    async def verify(
        self, request: Request, session: AsyncSession, svc: AuthService
    ) -> AdminPrincipal | None:
        token = request.cookies.get(settings.AUTH_COOKIE_NAME)
        ctx = await svc.sessions.resolve(session, token=token)
        if ctx is None:
            return None
        return AdminPrincipal(via=self.name, session=ctx)


@dataclass(frozen=True)
class SharedKeyCredential:
    """Legacy static admin key presented in a request header."""

    name: str = "admin_key"
    header: str = ADMIN_KEY_HEADER

    async def verify(
        self, request: Request, session: AsyncSession, svc: AuthService
    ) -> AdminPrincipal | None:
        presented = request.headers.get(self.header)
        expected = settings.ADMIN_API_KEY
        if not presented or not expected:
            return None
        if not hmac.compare_digest(presented.encode("utf-8"), expected.encode("utf-8")):
            return None
        return AdminPrincipal(via=self.name)


# Tried in order; first match wins.
ADMIN_CREDENTIALS: tuple[AdminCredential, ...] = (
    SessionCredential(),
    SharedKeyCredential(),
)


async def authenticate_admin(
    request: Request,
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[AuthService, Depends(get_auth_service)],
) -> AdminPrincipal:
    for credential in ADMIN_CREDENTIALS:
        principal = await credential.verify(request, session, svc)
        if principal is not None:
            return principal
    raise AuthServiceUnauthorizedException(UNAUTHORIZED)
