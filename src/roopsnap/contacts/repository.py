from __future__ import annotations

from dataclasses import dataclass

import sqlalchemy as sa  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from roopsnap.contacts.models import Contact


@dataclass(frozen=True)
class ContactsRepository:
    async def insert_contact(
        self,
        session: AsyncSession,
        *,
        name: str,
        email: str,
        message: str,
        phone: str | None,
    ) -> Contact:
        c = Contact(name=name, email=email, message=message, phone=phone)
        session.add(c)
        await session.flush()
        return c

    async def list_contacts(self, session: AsyncSession) -> list[Contact]:
        stmt = sa.select(Contact).order_by(Contact.submitted_at.desc(), Contact.id.desc())
        res = await session.execute(stmt)
        return list(res.scalars().all())

    async def get_contact(
        self, session: AsyncSession, *, contact_id: int
    ) -> Contact | None:
        stmt = sa.select(Contact).where(Contact.id == contact_id)
        res = await session.execute(stmt)
        return res.scalar_one_or_none()

    async def update_status(
        self, session: AsyncSession, *, contact_id: int, status: str
    ) -> int:
        stmt = sa.update(Contact).where(Contact.id == contact_id).values(status=status)
        res = await session.execute(stmt)
        await session.flush()
        return int(res.rowcount or 0)
