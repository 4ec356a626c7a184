"""Storage for uploaded post images."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path, PurePath

import aiofiles
from fastapi import UploadFile

from postboard.core.settings import settings

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = frozenset({"image/png", "image/jpg", "image/jpeg"})
_CHUNK_SIZE = 64 * 1024


class ImageStore:
    """Local directory of uploaded images served under a public prefix."""

    def __init__(self, root: str | Path, public_name: str = "images") -> None:
        self.root = Path(root)
        self.public_name = public_name

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def public_path(self, filename: str) -> str:
        return f"{self.public_name}/{filename}"

    def resolve(self, public_path: str) -> Path:
        """Map a stored public path onto a file inside ``root``.

        Only the final path component is used, so a path can never point
        outside the image directory.
        """
        return self.root / PurePath(public_path.replace("\\", "/")).name

    async def save(self, upload: UploadFile) -> str | None:
        """Persist ``upload`` and return its public path.

        Returns:
            The stored path, or None when the file is not a PNG/JPEG image.
        """
        if upload.content_type not in ALLOWED_CONTENT_TYPES or not upload.filename:
            logger.info(
                "Ignoring upload %r with content type %s", upload.filename, upload.content_type
            )
            return None

        self.ensure_root()
        stamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S%f")
        filename = f"{stamp}-{PurePath(upload.filename).name}"
        async with aiofiles.open(self.root / filename, "wb") as out:
            while chunk := await upload.read(_CHUNK_SIZE):
                await out.write(chunk)

        logger.info("Stored image %s", filename)
        return self.public_path(filename)

    def clear(self, public_path: str | None) -> bool:
        """Delete a stored image; failures are logged, never raised.

        Returns:
            True if a file was removed.
        """
        if not public_path:
            return False
        target = self.resolve(public_path)
        try:
            target.unlink()
        except FileNotFoundError:
            logger.warning("Image %s already missing; nothing to delete", target)
            return False
        except OSError as exc:
            logger.warning("Failed to delete image %s: %s", target, exc)
            return False
        logger.info("Deleted image %s", target)
        return True


def get_image_store() -> ImageStore:
    """Return an image store configured from application settings."""
    return ImageStore(settings.images_dir, settings.images_public_name)
