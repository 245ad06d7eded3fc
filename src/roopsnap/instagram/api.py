from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query  # type: ignore[import-not-found]

from roopsnap.instagram.client import DEFAULT_LIMIT, InstagramClient, get_instagram_client

router = APIRouter(prefix="/api/instagram", tags=["instagram"])


@router.get("/posts")
async def list_posts(
    client: Annotated[InstagramClient, Depends(get_instagram_client)],
    limit: int = Query(default=DEFAULT_LIMIT, ge=1, le=100),
) -> dict[str, Any]:
    return await client.list_media(limit=limit)
