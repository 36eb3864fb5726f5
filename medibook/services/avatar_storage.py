from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import logging
import uuid

from ..core.config import settings
from ..core.errors import ValidationError

logger = logging.getLogger(__name__)

ALLOWED_AVATAR_TYPES = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/webp": ".webp",
}


@dataclass
class AvatarUpload:
    content: bytes
    content_type: Optional[str]
    filename: Optional[str] = None


@dataclass
class StoredAvatar:
    public_id: str
    url: str


class AvatarStorage:
    """Keeps doctor avatars on the local filesystem under ``<root>/avatars``."""

    folder = "avatars"

    def __init__(self, root: str, base_url: str):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    def save(self, upload: AvatarUpload) -> StoredAvatar:
        extension = ALLOWED_AVATAR_TYPES.get(upload.content_type or "")
        if extension is None:
            raise ValidationError("File format not supported. Use png, jpeg or webp.")
        if not upload.content:
            raise ValidationError("Doctor avatar is empty")

        public_id = f"{self.folder}/{uuid.uuid4().hex}"
        path = self.root / f"{public_id}{extension}"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(upload.content)

        logger.info(f"Stored avatar {public_id} ({len(upload.content)} bytes)")
        return StoredAvatar(public_id=public_id, url=f"{self.base_url}/{public_id}{extension}")

    def delete(self, public_id: str) -> None:
        for path in (self.root / self.folder).glob(f"{Path(public_id).name}.*"):
            path.unlink()


def get_avatar_storage() -> AvatarStorage:
    """Avatar storage dependency."""
    return AvatarStorage(settings.MEDIA_ROOT, settings.MEDIA_URL)
