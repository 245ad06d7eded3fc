"""
Auth fixtures: the real AuthService wired to an in-memory repository, a
controllable clock for sessions and reset codes, and a recording mail sender.
"""

from __future__ import annotations

import datetime as dt
from uuid import UUID

import pytest  # type: ignore[import-not-found]
from fastapi import FastAPI
from fastapi.testclient import TestClient

from roopsnap.auth.depends import get_auth_service
from roopsnap.auth.models import Session, User
from roopsnap.auth.reset_codes import InMemoryResetCodeStore, ResetCodeRegistry
from roopsnap.auth.service import AuthService
from roopsnap.auth.sessions import SessionManager
from roopsnap.mail.exceptions import MailDeliveryException


class FakeAuthRepository:
    def __init__(self) -> None:
        self.users: dict[UUID, User] = {}
        self.sessions: dict[str, Session] = {}

    async def count_users(self, session) -> int:  # type: ignore[no-untyped-def]
        return len(self.users)

    async def get_user_by_email(self, session, *, email: str):  # type: ignore[no-untyped-def]
        return next((u for u in self.users.values() if u.email == email), None)

    async def get_user_by_id(self, session, *, user_id: UUID):  # type: ignore[no-untyped-def]
        return self.users.get(user_id)

    async def insert_user(self, session, *, user_id, email, password_hash):  # type: ignore[no-untyped-def]
        user = User(
            id=user_id,
            email=email,
            password_hash=password_hash,
            created_at=dt.datetime.now(dt.UTC),
            last_login_at=None,
        )
        self.users[user_id] = user
        return user

    async def update_password_hash(self, session, *, email, password_hash) -> int:  # type: ignore[no-untyped-def]
        user = await self.get_user_by_email(session, email=email)
        if user is None:
            return 0
        user.password_hash = password_hash
        return 1

    async def touch_last_login(self, session, *, user_id) -> None:  # type: ignore[no-untyped-def]
        self.users[user_id].last_login_at = dt.datetime.now(dt.UTC)

    async def insert_session(  # type: ignore[no-untyped-def]
        self, session, *, session_id, user_id, user_email, token_hash, expires_at
    ):
        s = Session(
            id=session_id,
            user_id=user_id,
            user_email=user_email,
            token_hash=token_hash,
            expires_at=expires_at,
            revoked_at=None,
        )
        self.sessions[token_hash] = s
        return s

    async def get_active_session_by_token_hash(self, session, *, token_hash, now):  # type: ignore[no-untyped-def]
        s = self.sessions.get(token_hash)
        if s is None or s.revoked_at is not None or s.expires_at <= now:
            return None
        return s

    async def revoke_session(self, session, *, token_hash) -> int:  # type: ignore[no-untyped-def]
        s = self.sessions.get(token_hash)
        if s is None or s.revoked_at is not None:
            return 0
        s.revoked_at = dt.datetime.now(dt.UTC)
        return 1


class FrozenClock:
    def __init__(self) -> None:
        self.now = dt.datetime(2026, 1, 1, 12, 0, tzinfo=dt.UTC)

    def __call__(self) -> dt.datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += dt.timedelta(**kwargs)


class FakeMailSender:
    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []
        self.fail = False

    def is_configured(self) -> bool:
        return True

    async def send_reset_code(self, *, to_email: str, code: str) -> None:
        if self.fail:
            raise MailDeliveryException("Failed to send reset code email", "smtp down")
        self.sent.append((to_email, code))

    def last_code_for(self, email: str) -> str:
        return [code for to, code in self.sent if to == email][-1]


@pytest.fixture()
def auth_repo() -> FakeAuthRepository:
    return FakeAuthRepository()


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture()
def mailer() -> FakeMailSender:
    return FakeMailSender()


@pytest.fixture()
def auth_service(
    auth_repo: FakeAuthRepository, clock: FrozenClock, mailer: FakeMailSender
) -> AuthService:
    return AuthService(
        repo=auth_repo,  # type: ignore[arg-type]
        sessions=SessionManager(repo=auth_repo, clock=clock),  # type: ignore[arg-type]
        reset_codes=ResetCodeRegistry(
            store=InMemoryResetCodeStore(),
            ttl=dt.timedelta(minutes=15),
            clock=clock,
        ),
        mailer=mailer,  # type: ignore[arg-type]
    )


@pytest.fixture()
def auth_app(app: FastAPI, auth_service: AuthService) -> FastAPI:
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    return app


@pytest.fixture()
def auth_client(auth_app: FastAPI) -> TestClient:
    return TestClient(auth_app)
