from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import APIRouter, Depends  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from roopsnap.auth.depends import AdminPrincipal, authenticate_admin
from roopsnap.commons.depends import database_session
from roopsnap.contacts.schemas import (
    ContactPublic,
    MessageResponse,
    SubmitContactRequest,
    SubmitContactResponse,
    UpdateContactRequest,
)
from roopsnap.contacts.service import ContactsService

router = APIRouter(prefix="/api", tags=["contacts"])


@lru_cache
def get_contacts_service() -> ContactsService:
    return ContactsService.create()


def _to_public(c) -> ContactPublic:  # type: ignore[no-untyped-def]
    return ContactPublic(
        id=c.id,
        name=c.name,
        email=c.email,
        message=c.message,
        phone=c.phone,
        submitted_at=c.submitted_at,
        status=c.status,
    )


@router.post("/contact", response_model=SubmitContactResponse)
async def submit_contact(
    req: SubmitContactRequest,
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[ContactsService, Depends(get_contacts_service)],
) -> SubmitContactResponse:
    c = await svc.submit(
        session, name=req.name, email=req.email, message=req.message, phone=req.phone
    )
    return SubmitContactResponse(id=c.id, message="Contact form submitted successfully")


@router.get("/contacts", response_model=list[ContactPublic])
async def list_contacts(
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[ContactsService, Depends(get_contacts_service)],
    admin: Annotated[AdminPrincipal, Depends(authenticate_admin)],
) -> list[ContactPublic]:
    return [_to_public(c) for c in await svc.list_contacts(session)]


@router.get("/contacts/{contact_id}", response_model=ContactPublic)
async def get_contact(
    contact_id: int,
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[ContactsService, Depends(get_contacts_service)],
    admin: Annotated[AdminPrincipal, Depends(authenticate_admin)],
) -> ContactPublic:
    return _to_public(await svc.get_contact(session, contact_id=contact_id))


@router.patch("/contacts/{contact_id}", response_model=MessageResponse)
async def update_contact(
    contact_id: int,
    req: UpdateContactRequest,
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[ContactsService, Depends(get_contacts_service)],
    admin: Annotated[AdminPrincipal, Depends(authenticate_admin)],
) -> MessageResponse:
    await svc.update_status(session, contact_id=contact_id, status=req.status)
    return MessageResponse(message="Contact status updated successfully")
