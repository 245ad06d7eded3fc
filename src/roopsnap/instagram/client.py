from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx  # type: ignore[import-not-found]

from roopsnap.core.settings import settings
from roopsnap.instagram.exceptions import (
    InstagramException,
    InstagramNotConfiguredException,
)

logger = logging.getLogger(__name__)

MEDIA_FIELDS = "id,caption,media_type,media_url,permalink,thumbnail_url,timestamp"
DEFAULT_LIMIT = 6


@dataclass(frozen=True)
class InstagramClient:
    base_url: str
    access_token: str
    timeout_s: float
    transport: httpx.AsyncBaseTransport | None = None

    async def list_media(self, *, limit: int = DEFAULT_LIMIT) -> dict[str, Any]:
        params = {
            "fields": MEDIA_FIELDS,
            "limit": str(limit),
            "access_token": self.access_token,
        }
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout_s, transport=self.transport
            ) as client:
                resp = await client.get("/me/media", params=params)
        except httpx.HTTPError as exc:
            logger.error("Error fetching Instagram posts: %s", exc)
            raise InstagramException("Failed to fetch Instagram posts", str(exc)) from exc

        try:
            data = resp.json()
        except json.JSONDecodeError as exc:
            raise InstagramException(
                "Failed to parse Instagram response", str(exc)
            ) from exc

        if isinstance(data, dict) and data.get("error"):
            err = data["error"]
            detail = err.get("message") if isinstance(err, dict) else str(err)
            raise InstagramException("Instagram API error", detail)
        return data


def get_instagram_client() -> InstagramClient:
    if not settings.INSTAGRAM_ACCESS_TOKEN:
        raise InstagramNotConfiguredException(
            "Instagram access token not configured",
            "Please set INSTAGRAM_ACCESS_TOKEN environment variable",
        )
    return InstagramClient(
        base_url=str(settings.INSTAGRAM_GRAPH_URL),
        access_token=str(settings.INSTAGRAM_ACCESS_TOKEN),
        timeout_s=float(settings.INSTAGRAM_TIMEOUT_S),
    )
