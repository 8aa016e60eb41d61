from typing import Any, Optional

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import DuplicateKeyError

from clipvault.models import ClipInDB, SessionInDB
from clipvault.store.base import ClipStore, DuplicateObjectKey

NEWEST_FIRST = [("created_at", DESCENDING), ("_id", DESCENDING)]


def to_object_id(record_id: str) -> Optional[ObjectId]:
    """Parse an id from the API. Malformed ids are simply not found."""
    if not ObjectId.is_valid(record_id):
        return None
    return ObjectId(record_id)


def clip_from_document(document: dict) -> ClipInDB:
    document["_id"] = str(document["_id"])
    return ClipInDB.model_validate(document)


def session_from_document(document: dict) -> SessionInDB:
    document["_id"] = str(document["_id"])
    return SessionInDB.model_validate(document)


def split_update(fields: dict[str, Any]) -> dict[str, dict]:
    """Build a single update document; ``None`` values become ``$unset``."""
    update: dict[str, dict] = {}
    to_set = {k: v for k, v in fields.items() if v is not None}
    to_unset = {k: "" for k, v in fields.items() if v is None}
    if to_set:
        update["$set"] = to_set
    if to_unset:
        update["$unset"] = to_unset
    return update


def created_at_bounds(start: Optional[int], end: Optional[int]) -> dict:
    bounds = {}
    if start is not None:
        bounds["$gte"] = start
    if end is not None:
        bounds["$lte"] = end
    return bounds


class MongoClipStore(ClipStore):
    """Clip store on top of a motor database (collections ``clips`` and ``sessions``)."""

    def __init__(self, db):
        self.db = db

    async def ensure_indexes(self):
        await self.db.clips.create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])
        await self.db.clips.create_index("object_key", unique=True)
        await self.db.clips.create_index("session_id")
        await self.db.sessions.create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])

    async def ping(self) -> bool:
        try:
            await self.db.command("ping")
            return True
        except Exception as e:
            print(f"MongoDB ping failed: {e}")
            return False

    # Clips

    async def insert_clip(self, record: dict[str, Any]) -> str:
        try:
            result = await self.db.clips.insert_one(dict(record))
        except DuplicateKeyError as e:
            raise DuplicateObjectKey(f"Duplicate object key: {record['object_key']}") from e
        return str(result.inserted_id)

    async def get_clip(self, clip_id: str) -> Optional[ClipInDB]:
        object_id = to_object_id(clip_id)
        if object_id is None:
            return None
        document = await self.db.clips.find_one({"_id": object_id})
        return clip_from_document(document) if document else None

    async def patch_clip(self, clip_id: str, fields: dict[str, Any]) -> None:
        object_id = to_object_id(clip_id)
        update = split_update(fields)
        if object_id is None or not update:
            return
        await self.db.clips.update_one({"_id": object_id}, update)

    async def delete_clip(self, clip_id: str) -> None:
        object_id = to_object_id(clip_id)
        if object_id is not None:
            await self.db.clips.delete_one({"_id": object_id})

    async def scan_clips_by_owner(
        self,
        user_id: str,
        start: Optional[int] = None,
        end: Optional[int] = None,
    ) -> list[ClipInDB]:
        query: dict[str, Any] = {"user_id": user_id}
        bounds = created_at_bounds(start, end)
        if bounds:
            query["created_at"] = bounds
        cursor = self.db.clips.find(query).sort(NEWEST_FIRST)
        documents = await cursor.to_list(length=None)
        return [clip_from_document(d) for d in documents]

    async def find_clip_by_object_key(self, object_key: str) -> Optional[ClipInDB]:
        document = await self.db.clips.find_one({"object_key": object_key})
        return clip_from_document(document) if document else None

    # Sessions

    async def insert_session(self, record: dict[str, Any]) -> str:
        result = await self.db.sessions.insert_one(dict(record))
        return str(result.inserted_id)

    async def get_session(self, session_id: str) -> Optional[SessionInDB]:
        object_id = to_object_id(session_id)
        if object_id is None:
            return None
        document = await self.db.sessions.find_one({"_id": object_id})
        return session_from_document(document) if document else None

    async def patch_session(self, session_id: str, fields: dict[str, Any]) -> None:
        object_id = to_object_id(session_id)
        update = split_update(fields)
        if object_id is None or not update:
            return
        await self.db.sessions.update_one({"_id": object_id}, update)

    async def delete_session(self, session_id: str) -> None:
        object_id = to_object_id(session_id)
        if object_id is not None:
            await self.db.sessions.delete_one({"_id": object_id})

    async def scan_sessions_by_owner(self, user_id: str) -> list[SessionInDB]:
        cursor = self.db.sessions.find({"user_id": user_id}).sort(NEWEST_FIRST)
        documents = await cursor.to_list(length=None)
        return [session_from_document(d) for d in documents]
