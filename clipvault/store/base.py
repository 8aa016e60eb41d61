from abc import ABC, abstractmethod
from typing import Any, Optional

from clipvault.models import ClipInDB, SessionInDB


class DuplicateObjectKey(Exception):
    """An insert reused an object key that is already catalogued."""


def ordering_key(record) -> tuple:
    """Newest first; records sharing a timestamp fall back to id, highest first."""
    return (record.created_at, record.id)


class ClipStore(ABC):
    """Durable storage of clip and session records.

    Scans return records ordered by ``created_at`` descending with the record
    id as tie-break. Each single-record read or write is atomic; nothing
    spans records.
    """

    # Clips

    @abstractmethod
    async def insert_clip(self, record: dict[str, Any]) -> str:
        ...

    @abstractmethod
    async def get_clip(self, clip_id: str) -> Optional[ClipInDB]:
        ...

    @abstractmethod
    async def patch_clip(self, clip_id: str, fields: dict[str, Any]) -> None:
        """Apply ``fields`` in one write. A ``None`` value removes the field."""

    @abstractmethod
    async def delete_clip(self, clip_id: str) -> None:
        ...

    @abstractmethod
    async def scan_clips_by_owner(
        self,
        user_id: str,
        start: Optional[int] = None,
        end: Optional[int] = None,
    ) -> list[ClipInDB]:
        """All of the owner's clips, optionally bounded (inclusive) on created_at."""

    @abstractmethod
    async def find_clip_by_object_key(self, object_key: str) -> Optional[ClipInDB]:
        ...

    # Sessions

    @abstractmethod
    async def insert_session(self, record: dict[str, Any]) -> str:
        ...

    @abstractmethod
    async def get_session(self, session_id: str) -> Optional[SessionInDB]:
        ...

    @abstractmethod
    async def patch_session(self, session_id: str, fields: dict[str, Any]) -> None:
        ...

    @abstractmethod
    async def delete_session(self, session_id: str) -> None:
        ...

    @abstractmethod
    async def scan_sessions_by_owner(self, user_id: str) -> list[SessionInDB]:
        ...

    async def ping(self) -> bool:
        return True
