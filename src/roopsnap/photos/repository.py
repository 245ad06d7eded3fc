from __future__ import annotations

from dataclasses import dataclass

import sqlalchemy as sa  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from roopsnap.photos.models import Photo


@dataclass(frozen=True)
class PhotosRepository:
    async def list_photos(
        self, session: AsyncSession, *, category: str | None
    ) -> list[Photo]:
        stmt = sa.select(Photo).order_by(Photo.uploaded_at.desc(), Photo.id.desc())
        if category:
            stmt = stmt.where(Photo.category == category)
        res = await session.execute(stmt)
        return list(res.scalars().all())

    async def get_photo(self, session: AsyncSession, *, photo_id: int) -> Photo | None:
        stmt = sa.select(Photo).where(Photo.id == photo_id)
        res = await session.execute(stmt)
        return res.scalar_one_or_none()

    async def insert_photo(
        self,
        session: AsyncSession,
        *,
        filename: str,
        original_name: str | None,
        file_path: str,
        description: str | None,
        category: str | None,
    ) -> Photo:
        photo = Photo(
            filename=filename,
            original_name=original_name,
            file_path=file_path,
            description=description,
            category=category,
        )
        session.add(photo)
        await session.flush()
        return photo

    async def delete_photo(self, session: AsyncSession, *, photo_id: int) -> int:
        stmt = sa.delete(Photo).where(Photo.id == photo_id)
        res = await session.execute(stmt)
        await session.flush()
        return int(res.rowcount or 0)
