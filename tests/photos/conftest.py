from __future__ import annotations

import datetime as dt

import pytest  # type: ignore[import-not-found]
from fastapi import FastAPI
from fastapi.testclient import TestClient

from roopsnap.core.settings import settings
from roopsnap.photos import api as photos_api
from roopsnap.photos.models import Photo
from roopsnap.photos.service import PhotosService
from roopsnap.photos.storage import PhotoStorage

ADMIN_KEY = "test-admin-key"


class FakePhotosRepository:
    def __init__(self) -> None:
        self.rows: dict[int, Photo] = {}
        self.next_id = 1
        self.fail_insert = False

    async def list_photos(self, session, *, category):  # type: ignore[no-untyped-def]
        rows = [p for p in self.rows.values() if not category or p.category == category]
        return sorted(rows, key=lambda p: (p.uploaded_at, p.id), reverse=True)

    async def get_photo(self, session, *, photo_id):  # type: ignore[no-untyped-def]
        return self.rows.get(photo_id)

    async def insert_photo(  # type: ignore[no-untyped-def]
        self, session, *, filename, original_name, file_path, description, category
    ):
        if self.fail_insert:
            raise RuntimeError("insert failed")
        p = Photo(
            id=self.next_id,
            filename=filename,
            original_name=original_name,
            file_path=file_path,
            description=description,
            category=category,
            uploaded_at=dt.datetime.now(dt.UTC),
        )
        self.rows[p.id] = p
        self.next_id += 1
        return p

    async def delete_photo(self, session, *, photo_id) -> int:  # type: ignore[no-untyped-def]
        return 1 if self.rows.pop(photo_id, None) is not None else 0


@pytest.fixture()
def photos_repo() -> FakePhotosRepository:
    return FakePhotosRepository()


@pytest.fixture()
def photos_service(photos_repo: FakePhotosRepository, tmp_path) -> PhotosService:  # type: ignore[no-untyped-def]
    return PhotosService(
        repo=photos_repo,  # type: ignore[arg-type]
        storage=PhotoStorage(root=tmp_path / "uploads"),
        max_bytes=1024,
    )


@pytest.fixture()
def photos_client(
    app: FastAPI, photos_service: PhotosService, monkeypatch: pytest.MonkeyPatch
) -> TestClient:
    monkeypatch.setattr(settings, "ADMIN_API_KEY", ADMIN_KEY)
    app.dependency_overrides[photos_api.get_photos_service] = lambda: photos_service
    return TestClient(app)


@pytest.fixture()
def admin_headers() -> dict[str, str]:
    return {"X-Admin-Key": ADMIN_KEY}
