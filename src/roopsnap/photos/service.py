from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from fastapi.concurrency import run_in_threadpool  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from roopsnap.core.settings import settings
from roopsnap.photos.exceptions import (
    FILE_TOO_LARGE,
    NO_FILE_UPLOADED,
    ONLY_IMAGES_ALLOWED,
    PHOTO_NOT_FOUND,
    PhotosServiceNotFoundException,
    PhotosServiceValidationException,
)
from roopsnap.photos.models import Photo
from roopsnap.photos.repository import PhotosRepository
from roopsnap.photos.storage import PhotoStorage, is_allowed_image, new_photo_filename


@dataclass(frozen=True)
class PhotosService:
    repo: PhotosRepository
    storage: PhotoStorage
    max_bytes: int

    @classmethod
    def create(cls) -> "PhotosService":
        return cls(
            repo=PhotosRepository(),
            storage=PhotoStorage(root=Path(settings.UPLOADS_DIR)),
            max_bytes=int(settings.UPLOAD_MAX_BYTES),
        )

    async def list_photos(
        self, session: AsyncSession, *, category: str | None
    ) -> list[Photo]:
        return await self.repo.list_photos(session, category=category)

    async def get_photo(self, session: AsyncSession, *, photo_id: int) -> Photo:
        photo = await self.repo.get_photo(session, photo_id=photo_id)
        if photo is None:
            raise PhotosServiceNotFoundException(PHOTO_NOT_FOUND)
        return photo

    async def upload_photo(
        self,
        session: AsyncSession,
        *,
        original_name: str | None,
        content_type: str | None,
        data: bytes | None,
        description: str | None,
        category: str | None,
    ) -> Photo:
        if not original_name or data is None:
            raise PhotosServiceValidationException(NO_FILE_UPLOADED)
        if not is_allowed_image(original_name, content_type):
            raise PhotosServiceValidationException(ONLY_IMAGES_ALLOWED)
        if len(data) > self.max_bytes:
            raise PhotosServiceValidationException(FILE_TOO_LARGE)

        filename = new_photo_filename(original_name)
        await run_in_threadpool(self.storage.save, filename, data)
        try:
            photo = await self.repo.insert_photo(
                session,
                filename=filename,
                original_name=original_name,
                file_path=self.storage.url_for(filename),
                description=description or None,
                category=category or None,
            )
            await session.commit()
        except Exception:
            await run_in_threadpool(self.storage.remove, filename)
            raise
        return photo

    async def delete_photo(self, session: AsyncSession, *, photo_id: int) -> None:
        photo = await self.repo.get_photo(session, photo_id=photo_id)
        if photo is None:
            raise PhotosServiceNotFoundException(PHOTO_NOT_FOUND)
        await self.repo.delete_photo(session, photo_id=photo_id)
        await session.commit()
        await run_in_threadpool(self.storage.remove, photo.filename)
