from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from roopsnap.contacts.exceptions import (
    CONTACT_NOT_FOUND,
    ContactsServiceNotFoundException,
    ContactsServiceValidationException,
)
from roopsnap.contacts.models import Contact
from roopsnap.contacts.repository import ContactsRepository

DEFAULT_STATUS_UPDATE = "read"


@dataclass(frozen=True)
class ContactsService:
    repo: ContactsRepository

    @classmethod
    def create(cls) -> "ContactsService":
        return cls(repo=ContactsRepository())

    async def submit(
        self,
        session: AsyncSession,
        *,
        name: str | None,
        email: str | None,
        message: str | None,
        phone: str | None,
    ) -> Contact:
        if not name or not email or not message:
            raise ContactsServiceValidationException(
                "Name, email, and message are required"
            )
        c = await self.repo.insert_contact(
            session, name=name, email=email, message=message, phone=phone or None
        )
        await session.commit()
        return c

    async def list_contacts(self, session: AsyncSession) -> list[Contact]:
        return await self.repo.list_contacts(session)

    async def get_contact(self, session: AsyncSession, *, contact_id: int) -> Contact:
        c = await self.repo.get_contact(session, contact_id=contact_id)
        if c is None:
            raise ContactsServiceNotFoundException(CONTACT_NOT_FOUND)
        return c

    async def update_status(
        self, session: AsyncSession, *, contact_id: int, status: str | None
    ) -> None:
        # Unknown ids are a no-op.
        await self.repo.update_status(
            session, contact_id=contact_id, status=status or DEFAULT_STATUS_UPDATE
        )
        await session.commit()
