from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from roopsnap.auth.depends import AdminPrincipal, authenticate_admin
from roopsnap.commons.depends import database_session
from roopsnap.photos.schemas import MessageResponse, PhotoPublic, UploadPhotoResponse
from roopsnap.photos.service import PhotosService

router = APIRouter(prefix="/api/photos", tags=["photos"])


@lru_cache
def get_photos_service() -> PhotosService:
    return PhotosService.create()


def _to_public(p) -> PhotoPublic:  # type: ignore[no-untyped-def]
    return PhotoPublic(
        id=p.id,
        filename=p.filename,
        original_name=p.original_name,
        file_path=p.file_path,
        description=p.description,
        category=p.category,
        uploaded_at=p.uploaded_at,
    )


@router.get("", response_model=list[PhotoPublic])
async def list_photos(
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[PhotosService, Depends(get_photos_service)],
    category: str | None = Query(default=None),
) -> list[PhotoPublic]:
    items = await svc.list_photos(session, category=category)
    return [_to_public(p) for p in items]


@router.get("/{photo_id}", response_model=PhotoPublic)
async def get_photo(
    photo_id: int,
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[PhotosService, Depends(get_photos_service)],
) -> PhotoPublic:
    return _to_public(await svc.get_photo(session, photo_id=photo_id))


@router.post("/upload", response_model=UploadPhotoResponse)
async def upload_photo(
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[PhotosService, Depends(get_photos_service)],
    admin: Annotated[AdminPrincipal, Depends(authenticate_admin)],
    photo: Annotated[UploadFile | None, File()] = None,
    description: Annotated[str | None, Form()] = None,
    category: Annotated[str | None, Form()] = None,
) -> UploadPhotoResponse:
    # One byte past the limit is enough to reject an oversize upload.
    data = await photo.read(svc.max_bytes + 1) if photo is not None else None
    p = await svc.upload_photo(
        session,
        original_name=photo.filename if photo is not None else None,
        content_type=photo.content_type if photo is not None else None,
        data=data,
        description=description,
        category=category,
    )
    return UploadPhotoResponse(
        id=p.id,
        filename=p.filename,
        file_path=p.file_path,
        description=p.description,
        category=p.category,
        message="Photo uploaded successfully",
    )


@router.delete("/{photo_id}", response_model=MessageResponse)
async def delete_photo(
    photo_id: int,
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[PhotosService, Depends(get_photos_service)],
    admin: Annotated[AdminPrincipal, Depends(authenticate_admin)],
) -> MessageResponse:
    await svc.delete_photo(session, photo_id=photo_id)
    return MessageResponse(message="Photo deleted successfully")
