from typing import Any, Optional
import copy

from bson import ObjectId

from clipvault.models import ClipInDB, SessionInDB
from clipvault.store.base import ClipStore, DuplicateObjectKey, ordering_key


class InMemoryClipStore(ClipStore):
    """Process-local store for tests and local development.

    Records are kept as plain dicts, the same shape as the Mongo documents,
    and copied on the way in and out.
    """

    def __init__(self):
        self.clips: dict[str, dict] = {}
        self.sessions: dict[str, dict] = {}

    @staticmethod
    def _new_id(record: dict[str, Any]) -> str:
        return str(record.get("_id") or ObjectId())

    @staticmethod
    def _apply(document: dict, fields: dict[str, Any]) -> None:
        for key, value in fields.items():
            if value is None:
                document.pop(key, None)
            else:
                document[key] = copy.deepcopy(value)

    async def insert_clip(self, record: dict[str, Any]) -> str:
        if any(c["object_key"] == record["object_key"] for c in self.clips.values()):
            raise DuplicateObjectKey(f"Duplicate object key: {record['object_key']}")
        clip_id = self._new_id(record)
        document = copy.deepcopy(record)
        document["_id"] = clip_id
        self.clips[clip_id] = document
        return clip_id

    async def get_clip(self, clip_id: str) -> Optional[ClipInDB]:
        document = self.clips.get(clip_id)
        if document is None:
            return None
        return ClipInDB.model_validate(copy.deepcopy(document))

    async def patch_clip(self, clip_id: str, fields: dict[str, Any]) -> None:
        document = self.clips.get(clip_id)
        if document is not None:
            self._apply(document, fields)

    async def delete_clip(self, clip_id: str) -> None:
        self.clips.pop(clip_id, None)

    async def scan_clips_by_owner(
        self,
        user_id: str,
        start: Optional[int] = None,
        end: Optional[int] = None,
    ) -> list[ClipInDB]:
        clips = []
        for document in self.clips.values():
            if document["user_id"] != user_id:
                continue
            if start is not None and document["created_at"] < start:
                continue
            if end is not None and document["created_at"] > end:
                continue
            clips.append(ClipInDB.model_validate(copy.deepcopy(document)))
        clips.sort(key=ordering_key, reverse=True)
        return clips

    async def find_clip_by_object_key(self, object_key: str) -> Optional[ClipInDB]:
        for document in self.clips.values():
            if document["object_key"] == object_key:
                return ClipInDB.model_validate(copy.deepcopy(document))
        return None

    async def insert_session(self, record: dict[str, Any]) -> str:
        session_id = self._new_id(record)
        document = copy.deepcopy(record)
        document["_id"] = session_id
        self.sessions[session_id] = document
        return session_id

    async def get_session(self, session_id: str) -> Optional[SessionInDB]:
        document = self.sessions.get(session_id)
        if document is None:
            return None
        return SessionInDB.model_validate(copy.deepcopy(document))

    async def patch_session(self, session_id: str, fields: dict[str, Any]) -> None:
        document = self.sessions.get(session_id)
        if document is not None:
            self._apply(document, fields)

    async def delete_session(self, session_id: str) -> None:
        self.sessions.pop(session_id, None)

    async def scan_sessions_by_owner(self, user_id: str) -> list[SessionInDB]:
        sessions = [
            SessionInDB.model_validate(copy.deepcopy(d))
            for d in self.sessions.values()
            if d["user_id"] == user_id
        ]
        sessions.sort(key=ordering_key, reverse=True)
        return sessions
