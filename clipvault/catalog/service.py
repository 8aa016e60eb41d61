import time
from typing import Optional

from clipvault.catalog.filters import list_clips
from clipvault.catalog.search import DEFAULT_LIMIT, search_clips
from clipvault.errors import (
    CLIP_NOT_FOUND,
    SESSION_NOT_FOUND,
    NotFoundOrDenied,
    StorageUnavailable,
)
from clipvault.models import (
    ClipFilters,
    ClipInDB,
    ClipMetaUpdate,
    ClipPage,
    ClipResponse,
    PaginationOpts,
    SearchPage,
    SessionInDB,
    SessionResponse,
    clip_to_response,
)
from clipvault.services.s3 import S3Service
from clipvault.store import ClipStore


def session_to_response(session: SessionInDB) -> SessionResponse:
    return SessionResponse(id=session.id, name=session.name, created_at=session.created_at)


class ClipCatalog:
    """Owner-scoped operations on clips and sessions.

    Every single-record operation re-reads the record and compares its owner
    with ``user_id``; a record owned by someone else is reported exactly like
    a missing one.
    """

    def __init__(
        self,
        store: ClipStore,
        s3: Optional[S3Service] = None,
        default_search_limit: int = DEFAULT_LIMIT,
    ):
        self.store = store
        self.s3 = s3
        self.default_search_limit = default_search_limit

    async def _owned_clip(self, user_id: str, clip_id: str) -> ClipInDB:
        clip = await self.store.get_clip(clip_id)
        if clip is None or clip.user_id != user_id:
            raise NotFoundOrDenied(CLIP_NOT_FOUND)
        return clip

    async def _owned_session(self, user_id: str, session_id: str) -> SessionInDB:
        session = await self.store.get_session(session_id)
        if session is None or session.user_id != user_id:
            raise NotFoundOrDenied(SESSION_NOT_FOUND)
        return session

    # Clips

    async def list_clips(
        self,
        user_id: str,
        filters: Optional[ClipFilters] = None,
        pagination: Optional[PaginationOpts] = None,
    ) -> ClipPage:
        return await list_clips(self.store, user_id, filters, pagination or PaginationOpts())

    async def search_clips(
        self,
        user_id: str,
        q: str,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> SearchPage:
        return await search_clips(
            self.store, user_id, q, limit, cursor, default_limit=self.default_search_limit
        )

    async def get_clip(self, user_id: str, clip_id: str) -> ClipResponse:
        return clip_to_response(await self._owned_clip(user_id, clip_id))

    async def update_clip_meta(
        self,
        user_id: str,
        clip_id: str,
        update: ClipMetaUpdate,
    ) -> ClipResponse:
        """Write the supplied fields in one patch, or nothing at all."""
        clip = await self._owned_clip(user_id, clip_id)

        # Only fields the caller actually sent; session_id is the one field
        # that may be null, which detaches the clip.
        fields = update.model_dump(mode="json", exclude_unset=True)

        if fields.get("session_id") is not None:
            await self._owned_session(user_id, fields["session_id"])

        if fields:
            await self.store.patch_clip(clip_id, fields)
            clip = await self._owned_clip(user_id, clip_id)
        return clip_to_response(clip)

    async def delete_clip(self, user_id: str, clip_id: str) -> None:
        await self._owned_clip(user_id, clip_id)
        await self.store.delete_clip(clip_id)

    async def get_playback_url(self, user_id: str, object_key: str) -> str:
        clip = await self.store.find_clip_by_object_key(object_key)
        if clip is None or clip.user_id != user_id:
            raise NotFoundOrDenied(CLIP_NOT_FOUND)

        url = await self.s3.generate_presigned_download_url(object_key) if self.s3 else None
        if url is None:
            raise StorageUnavailable("Object storage not configured")
        return url

    # Sessions

    async def create_session(self, user_id: str, name: str) -> str:
        return await self.store.insert_session({
            "user_id": user_id,
            "name": name,
            "created_at": int(time.time() * 1000),
        })

    async def list_sessions(self, user_id: str) -> list[SessionResponse]:
        sessions = await self.store.scan_sessions_by_owner(user_id)
        return [session_to_response(s) for s in sessions]

    async def get_session(self, user_id: str, session_id: str) -> SessionResponse:
        return session_to_response(await self._owned_session(user_id, session_id))

    async def rename_session(self, user_id: str, session_id: str, name: str) -> SessionResponse:
        session = await self._owned_session(user_id, session_id)
        await self.store.patch_session(session_id, {"name": name})
        return session_to_response(session.model_copy(update={"name": name}))

    async def delete_session(self, user_id: str, session_id: str) -> None:
        """Delete the session. Clips that point at it keep their session_id."""
        await self._owned_session(user_id, session_id)
        await self.store.delete_session(session_id)
