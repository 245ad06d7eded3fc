from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from uuid import UUID

import sqlalchemy as sa  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from roopsnap.auth.models import Session, User


@dataclass(frozen=True)
class AuthRepository:
    async def count_users(self, session: AsyncSession) -> int:
        stmt = sa.select(sa.func.count()).select_from(User)
        res = await session.execute(stmt)
        return int(res.scalar_one())

    async def get_user_by_email(
        self, session: AsyncSession, *, email: str
    ) -> User | None:
        stmt = sa.select(User).where(User.email == email)
        res = await session.execute(stmt)
        return res.scalar_one_or_none()

    async def get_user_by_id(self, session: AsyncSession, *, user_id: UUID) -> User | None:
        stmt = sa.select(User).where(User.id == user_id)
        res = await session.execute(stmt)
        return res.scalar_one_or_none()

    async def insert_user(
        self,
        session: AsyncSession,
        *,
        user_id: UUID,
        email: str,
        password_hash: str,
    ) -> User:
        user = User(id=user_id, email=email, password_hash=password_hash)
        session.add(user)
        await session.flush()
        return user

    async def update_password_hash(
        self, session: AsyncSession, *, email: str, password_hash: str
    ) -> int:
        stmt = (
            sa.update(User)
            .where(User.email == email)
            .values(password_hash=password_hash)
        )
        res = await session.execute(stmt)
        await session.flush()
        return int(res.rowcount or 0)

    async def touch_last_login(self, session: AsyncSession, *, user_id: UUID) -> None:
        stmt = (
            sa.update(User)
            .where(User.id == user_id)
            .values(last_login_at=sa.func.now())
        )
        await session.execute(stmt)
        await session.flush()

    async def insert_session(
        self,
        session: AsyncSession,
        *,
        session_id: UUID,
        user_id: UUID,
        user_email: str,
        token_hash: str,
        expires_at: dt.datetime,
    ) -> Session:
        s = Session(
            id=session_id,
            user_id=user_id,
            user_email=user_email,
            token_hash=token_hash,
            expires_at=expires_at,
        )
        session.add(s)
        await session.flush()
        return s

    async def get_active_session_by_token_hash(
        self, session: AsyncSession, *, token_hash: str, now: dt.datetime
    ) -> Session | None:
        stmt = (
            sa.select(Session)
            .where(Session.token_hash == token_hash)
            .where(Session.revoked_at.is_(None))
            .where(Session.expires_at > now)
        )
        res = await session.execute(stmt)
        return res.scalar_one_or_none()

    async def revoke_session(
        self, session: AsyncSession, *, token_hash: str
    ) -> int:
        stmt = (
            sa.update(Session)
            .where(Session.token_hash == token_hash)
            .where(Session.revoked_at.is_(None))
            .values(revoked_at=sa.func.now())
        )
        res = await session.execute(stmt)
        await session.flush()
        return int(res.rowcount or 0)
