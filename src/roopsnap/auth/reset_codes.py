"""
Password-reset codes.

Codes live in a `ResetCodeStore` keyed by email. The registry owns the rules
(six digits, fixed TTL, one live code per email, single use); the store only
keeps entries, so a persistent backend can replace the in-memory one without
touching the handlers.
"""

from __future__ import annotations

import datetime as dt
import enum
import hmac
import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

logger = logging.getLogger(__name__)

RESET_CODE_DIGITS = 6


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.UTC)


@dataclass(frozen=True)
class ResetCodeEntry:
    code: str
    expires_at: dt.datetime


class ResetCodeOutcome(enum.Enum):
    OK = "ok"
    INVALID_CODE = "invalid_code"
    EXPIRED = "expired"
    NOT_FOUND = "not_found"


class ResetCodeStore(Protocol):
    async def get(self, email: str) -> ResetCodeEntry | None: ...

    async def set(self, email: str, entry: ResetCodeEntry) -> None: ...

    async def delete(self, email: str) -> None: ...


@dataclass
class InMemoryResetCodeStore:
    """Process-local store; entries are lost on restart."""

    entries: dict[str, ResetCodeEntry] = field(default_factory=dict)

    async def get(self, email: str) -> ResetCodeEntry | None:
        return self.entries.get(email)

    async def set(self, email: str, entry: ResetCodeEntry) -> None:
        self.entries[email] = entry

    async def delete(self, email: str) -> None:
        self.entries.pop(email, None)


def generate_reset_code() -> str:
    return f"{secrets.randbelow(10**RESET_CODE_DIGITS):0{RESET_CODE_DIGITS}d}"


@dataclass
class ResetCodeRegistry:
    store: ResetCodeStore
    ttl: dt.timedelta = dt.timedelta(minutes=15)
    clock: Callable[[], dt.datetime] = _utcnow

    async def issue(self, email: str) -> str:
        code = generate_reset_code()
        # Overwrites any unconsumed code for this email.
        await self.store.set(
            email, ResetCodeEntry(code=code, expires_at=self.clock() + self.ttl)
        )
        logger.info("Issued password reset code for %s", email)
        return code

    async def consume(self, email: str, code: str) -> ResetCodeOutcome:
        entry = await self.store.get(email)
        if entry is None:
            return ResetCodeOutcome.NOT_FOUND
        if not hmac.compare_digest(entry.code.encode("utf-8"), code.encode("utf-8")):
            return ResetCodeOutcome.INVALID_CODE
        await self.store.delete(email)
        if self.clock() > entry.expires_at:
            return ResetCodeOutcome.EXPIRED
        return ResetCodeOutcome.OK
