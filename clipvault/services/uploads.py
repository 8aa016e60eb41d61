import re
import time
import uuid
from typing import Optional

from clipvault.config import Settings
from clipvault.errors import (
    CLIP_NOT_FOUND,
    NotFoundOrDenied,
    StorageUnavailable,
    ValidationFailure,
)
from clipvault.models import (
    UploadFinalize,
    UploadFinalized,
    UploadLimits,
    UploadRequest,
    UploadUrlResponse,
)
from clipvault.services.s3 import S3Service
from clipvault.store import ClipStore, DuplicateObjectKey

SAFE_EXT = re.compile(r"[^a-z0-9]")


def now_ms() -> int:
    return int(time.time() * 1000)


_last_created_at = 0


def next_created_at() -> int:
    """Creation timestamp for a new clip. Never goes backwards, even if the wall clock does."""
    global _last_created_at
    _last_created_at = max(_last_created_at, now_ms())
    return _last_created_at


def clip_key_prefix(user_id: str) -> str:
    return f"clips/{user_id}/"


def build_object_key(user_id: str, ext: str) -> str:
    ext = SAFE_EXT.sub("", ext.lower()) or "mp4"
    return f"{clip_key_prefix(user_id)}{now_ms()}-{uuid.uuid4().hex[:13]}.{ext}"


class UploadService:
    """Two-step upload: presign a PUT, then catalogue the clip once the bytes are in.

    Content bytes are never inspected here; only the size the client
    reports is checked against the limit, at both steps.
    """

    def __init__(self, store: ClipStore, s3: S3Service, settings: Settings):
        self.store = store
        self.s3 = s3
        self.settings = settings

    def check_size(self, size_bytes: int):
        limit = self.settings.max_upload_bytes
        if size_bytes > limit:
            raise ValidationFailure(
                f"File size {size_bytes} bytes exceeds maximum allowed size of "
                f"{limit} bytes ({round(limit / 1024 / 1024)}MB)"
            )

    def check_content_type(self, content_type: str):
        allowed = self.settings.allowed_mime_types
        if content_type not in allowed:
            raise ValidationFailure(
                f"Content type {content_type} is not allowed. "
                f"Supported types: {', '.join(allowed)}"
            )

    def get_upload_limits(self) -> UploadLimits:
        limit = self.settings.max_upload_bytes
        return UploadLimits(
            max_file_size_bytes=limit,
            max_file_size_mb=round(limit / 1024 / 1024),
            allowed_mime_types=list(self.settings.allowed_mime_types),
        )

    async def request_upload(self, user_id: str, request: UploadRequest) -> UploadUrlResponse:
        self.check_size(request.size_bytes)
        self.check_content_type(request.content_type)

        object_key = build_object_key(user_id, request.ext)
        put_url: Optional[str] = await self.s3.generate_presigned_upload_url(
            object_key,
            content_type=request.content_type,
            content_length=request.size_bytes,
        )
        if put_url is None:
            raise StorageUnavailable("Object storage not configured")

        return UploadUrlResponse(object_key=object_key, put_url=put_url)

    async def finalize_upload(self, user_id: str, upload: UploadFinalize) -> UploadFinalized:
        self.check_size(upload.bytes)

        # Keys are issued under the caller's prefix; anything else is not theirs.
        if not upload.object_key.startswith(clip_key_prefix(user_id)):
            raise NotFoundOrDenied(CLIP_NOT_FOUND)

        already_catalogued = f"Object key {upload.object_key} is already catalogued"
        if await self.store.find_clip_by_object_key(upload.object_key) is not None:
            raise ValidationFailure(already_catalogued)

        record = {
            "user_id": user_id,
            "object_key": upload.object_key,
            "created_at": next_created_at(),
            "bytes": upload.bytes,
            "duration_ms": upload.duration_ms,
            "width": upload.width,
            "height": upload.height,
            "tags": [],
            "favorite": False,
        }
        # A concurrent finalize of the same key can slip past the lookup above.
        try:
            clip_id = await self.store.insert_clip(record)
        except DuplicateObjectKey:
            raise ValidationFailure(already_catalogued)
        return UploadFinalized(clip_id=clip_id)
