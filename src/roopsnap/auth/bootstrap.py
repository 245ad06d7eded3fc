from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from roopsnap.auth.models import User
from roopsnap.auth.service import AuthService
from roopsnap.core.settings import Settings

logger = logging.getLogger(__name__)


async def ensure_bootstrap_user(
    session: AsyncSession, *, svc: AuthService, settings: Settings
) -> User | None:
    """
    Create the default admin when the users table is empty.

    Called from the app lifespan when `AUTH_BOOTSTRAP_ENABLED` is set.

    Only the hash is stored. The plaintext password is logged once, and only
    in development mode.
    """
    if await svc.repo.count_users(session) > 0:
        return None

    user = await svc.create_user(
        session, email=settings.ADMIN_EMAIL, password=settings.ADMIN_PASSWORD
    )
    if settings.ENVIRONMENT.strip().lower() == "development":
        logger.warning(
            "Created bootstrap admin user %s with password %r; change it after first login",
            user.email,
            settings.ADMIN_PASSWORD,
        )
    else:
        logger.info("Created bootstrap admin user %s", user.email)
    return user
