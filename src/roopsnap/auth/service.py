from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass

import sqlalchemy as sa  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from roopsnap.auth.crypto import (
    BCRYPT_MAX_PASSWORD_BYTES,
    DUMMY_PASSWORD_HASH,
    hash_password,
    verify_password,
)
from roopsnap.auth.exceptions import (
    INVALID_CREDENTIALS,
    NOT_AUTHENTICATED,
    AuthServiceConflictException,
    AuthServiceUnauthorizedException,
    AuthServiceValidationException,
)
from roopsnap.auth.models import User
from roopsnap.auth.repository import AuthRepository
from roopsnap.auth.reset_codes import (
    InMemoryResetCodeStore,
    ResetCodeOutcome,
    ResetCodeRegistry,
)
from roopsnap.auth.sessions import SessionContext, SessionManager
from roopsnap.commons.ids import uuid7_uuid
from roopsnap.core.settings import settings
from roopsnap.mail.exceptions import MailDeliveryException
from roopsnap.mail.sender import MailSender, get_mail_sender

logger = logging.getLogger(__name__)

FORGOT_PASSWORD_MESSAGE = (
    "If an account exists with this email, a reset code has been sent."
)
PASSWORD_RESET_MESSAGE = "Password reset successfully"
PASSWORD_TOO_LONG_MESSAGE = (
    f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes long"
)

# Reset-password failures stay distinguishable to the caller.
RESET_CODE_ERRORS: dict[ResetCodeOutcome, str] = {
    ResetCodeOutcome.NOT_FOUND: "No reset code found for this email",
    ResetCodeOutcome.INVALID_CODE: "Invalid reset code",
    ResetCodeOutcome.EXPIRED: "Reset code has expired",
}


def _password_too_short_message() -> str:
    return f"Password must be at least {settings.AUTH_PASSWORD_MIN_LENGTH} characters long"


@dataclass(frozen=True)
class PendingResetEmail:
    email: str
    code: str


@dataclass
class AuthService:
    repo: AuthRepository
    sessions: SessionManager
    reset_codes: ResetCodeRegistry
    mailer: MailSender

    @classmethod
    def create(cls) -> "AuthService":
        repo = AuthRepository()
        return cls(
            repo=repo,
            sessions=SessionManager(repo=repo),
            reset_codes=ResetCodeRegistry(
                store=InMemoryResetCodeStore(),
                ttl=dt.timedelta(minutes=int(settings.AUTH_RESET_CODE_TTL_MINUTES)),
            ),
            mailer=get_mail_sender(),
        )

    def _check_password_length(self, password: str) -> None:
        if len(password) < int(settings.AUTH_PASSWORD_MIN_LENGTH):
            raise AuthServiceValidationException(_password_too_short_message())
        if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise AuthServiceValidationException(PASSWORD_TOO_LONG_MESSAGE)

    async def create_user(
        self, session: AsyncSession, *, email: str, password: str
    ) -> User:
        existing = await self.repo.get_user_by_email(session, email=email)
        if existing is not None:
            raise AuthServiceConflictException("User with this email already exists")
        try:
            user = await self.repo.insert_user(
                session,
                user_id=uuid7_uuid(),
                email=email,
                password_hash=hash_password(password),
            )
        except sa.exc.IntegrityError as exc:
            # Lost a race with a concurrent register for the same email.
            await session.rollback()
            raise AuthServiceConflictException(
                "User with this email already exists"
            ) from exc
        await session.commit()
        return user

    async def register(
        self, session: AsyncSession, *, email: str | None, password: str | None
    ) -> User:
        if not email or not password:
            raise AuthServiceValidationException("Email and password are required")
        self._check_password_length(password)
        return await self.create_user(session, email=email, password=password)

    async def login(
        self, session: AsyncSession, *, email: str | None, password: str | None
    ) -> tuple[User, str]:
        if not email or not password:
            raise AuthServiceValidationException("Email and password are required")

        user = await self.repo.get_user_by_email(session, email=email)
        if user is None:
            verify_password(password, DUMMY_PASSWORD_HASH)
            raise AuthServiceUnauthorizedException(INVALID_CREDENTIALS)

        if not verify_password(password, user.password_hash):
            raise AuthServiceUnauthorizedException(INVALID_CREDENTIALS)

        await self.repo.touch_last_login(session, user_id=user.id)
        token = await self.sessions.create(session, user=user)
        await session.commit()
        return user, token

    async def logout(self, session: AsyncSession, *, token: str | None) -> None:
        await self.sessions.destroy(session, token=token)
        await session.commit()

    async def check(
        self, session: AsyncSession, *, token: str | None
    ) -> SessionContext:
        ctx = await self.sessions.resolve(session, token=token)
        if ctx is None:
            raise AuthServiceUnauthorizedException(NOT_AUTHENTICATED)
        return ctx

    async def forgot_password(
        self, session: AsyncSession, *, email: str | None
    ) -> PendingResetEmail | None:
        """
        Issue a reset code for a known email.

        Delivery is left to the caller (`deliver_reset_code`) so the response
        does not wait on SMTP; unknown and known emails answer alike.
        """
        if not email:
            raise AuthServiceValidationException("Email is required")

        user = await self.repo.get_user_by_email(session, email=email)
        if user is None:
            return None

        code = await self.reset_codes.issue(user.email)
        return PendingResetEmail(email=user.email, code=code)

    async def deliver_reset_code(self, pending: PendingResetEmail) -> None:
        try:
            await self.mailer.send_reset_code(to_email=pending.email, code=pending.code)
        except MailDeliveryException as exc:
            # The code stays issued.
            logger.error(
                "Reset code delivery failed for %s: %s", pending.email, exc.details
            )

    async def reset_password(
        self,
        session: AsyncSession,
        *,
        email: str | None,
        code: str | None,
        new_password: str | None,
    ) -> str:
        if not email or not code or not new_password:
            raise AuthServiceValidationException(
                "Email, code, and new password are required"
            )
        self._check_password_length(new_password)
        # Hash before consuming so a failure here leaves the code usable.
        password_hash = hash_password(new_password)

        outcome = await self.reset_codes.consume(email, code)
        if outcome is not ResetCodeOutcome.OK:
            raise AuthServiceValidationException(RESET_CODE_ERRORS[outcome])

        await self.repo.update_password_hash(
            session, email=email, password_hash=password_hash
        )
        await session.commit()
        logger.info("Password reset for %s", email)
        return PASSWORD_RESET_MESSAGE
