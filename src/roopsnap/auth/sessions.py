from __future__ import annotations

import datetime as dt
from collections.abc import Callable
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from roopsnap.auth.crypto import hash_session_token, new_session_token
from roopsnap.auth.models import User
from roopsnap.auth.repository import AuthRepository
from roopsnap.commons.ids import uuid7_uuid
from roopsnap.core.settings import settings


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.UTC)


@dataclass(frozen=True)
class SessionContext:
    user_id: UUID
    email: str


@dataclass(frozen=True)
class SessionManager:
    """
    Server-side sessions referenced by an opaque cookie token.

    Expiry is fixed at issuance (no sliding renewal). Only a keyed hash of the
    token is stored.
    """

    repo: AuthRepository
    clock: Callable[[], dt.datetime] = _utcnow

    @property
    def ttl(self) -> dt.timedelta:
        return dt.timedelta(hours=int(settings.AUTH_SESSION_TTL_HOURS))

    async def create(self, session: AsyncSession, *, user: User) -> str:
        token = new_session_token()
        await self.repo.insert_session(
            session,
            session_id=uuid7_uuid(),
            user_id=user.id,
            user_email=user.email,
            token_hash=hash_session_token(token),
            expires_at=self.clock() + self.ttl,
        )
        return token

    async def resolve(
        self, session: AsyncSession, *, token: str | None
    ) -> SessionContext | None:
        if not token:
            return None
        s = await self.repo.get_active_session_by_token_hash(
            session, token_hash=hash_session_token(token), now=self.clock()
        )
        if s is None:
            return None
        return SessionContext(user_id=s.user_id, email=s.user_email)

    async def destroy(self, session: AsyncSession, *, token: str | None) -> None:
        if not token:
            return
        await self.repo.revoke_session(session, token_hash=hash_session_token(token))
