from __future__ import annotations

import logging
import re
import secrets
import time
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

_IMAGE_TYPES_RE = re.compile(r"jpeg|jpg|png|gif|webp")


def is_allowed_image(original_name: str, content_type: str | None) -> bool:
    # Both the extension and the declared content type must name an image type.
    ext_ok = bool(_IMAGE_TYPES_RE.search(Path(original_name).suffix.lower()))
    mime_ok = bool(_IMAGE_TYPES_RE.search(content_type or ""))
    return ext_ok and mime_ok


def new_photo_filename(original_name: str) -> str:
    unique_suffix = f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}"
    return f"photo-{unique_suffix}{Path(original_name).suffix}"


@dataclass(frozen=True)
class PhotoStorage:
    """Uploaded images on local disk, served back under `/uploads`."""

    root: Path
    url_prefix: str = "/uploads"

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def path_for(self, filename: str) -> Path:
        # Drop any directory part.
        return self.root / Path(filename).name

    def url_for(self, filename: str) -> str:
        return f"{self.url_prefix}/{filename}"

    def save(self, filename: str, data: bytes) -> Path:
        self.ensure_root()
        path = self.path_for(filename)
        path.write_bytes(data)
        return path

    def remove(self, filename: str) -> bool:
        path = self.path_for(filename)
        if not path.exists():
            return False
        try:
            path.unlink()
        except OSError as exc:
            logger.warning("Failed to remove photo file %s: %s", path, exc)
            return False
        return True
