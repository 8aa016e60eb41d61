from fastapi import APIRouter, Depends, Query, status
from typing import Optional

from clipvault.catalog import ClipCatalog
from clipvault.dependencies import get_catalog
from clipvault.middleware import get_caller_id
from clipvault.models import (
    Angle,
    Apparatus,
    ClipFilters,
    ClipMetaUpdate,
    ClipPage,
    ClipResponse,
    DateRange,
    PaginationOpts,
    PlaybackUrlRequest,
    PlaybackUrlResponse,
    SearchPage,
)

router = APIRouter(prefix="/clips", tags=["clips"])

OPEN_END = 2**63 - 1


def date_range_from_query(start: Optional[int], end: Optional[int]) -> Optional[DateRange]:
    """A single bound leaves the other side open."""
    if start is None and end is None:
        return None
    return DateRange(
        start=start if start is not None else 0,
        end=end if end is not None else OPEN_END,
    )


@router.get("", response_model=ClipPage)
async def list_clips(
    tags: Optional[list[str]] = Query(None),
    angle: Optional[Angle] = None,
    apparatus: Optional[Apparatus] = None,
    favorite: Optional[bool] = None,
    session_id: Optional[str] = None,
    start: Optional[int] = None,
    end: Optional[int] = None,
    num_items: int = Query(20, ge=1),
    cursor: Optional[str] = None,
    user_id: str = Depends(get_caller_id),
    catalog: ClipCatalog = Depends(get_catalog),
):
    """
    List the caller's clips, newest first.
    - tags: clip must carry at least one of them
    - every other filter must match exactly
    - start/end: inclusive bounds on created_at (epoch ms)
    """
    filters = ClipFilters(
        tags=tags,
        angle=angle,
        apparatus=apparatus,
        favorite=favorite,
        session_id=session_id,
        date_range=date_range_from_query(start, end),
    )
    return await catalog.list_clips(
        user_id, filters, PaginationOpts(num_items=num_items, cursor=cursor)
    )


@router.get("/search", response_model=SearchPage)
async def search_clips(
    q: str = "",
    limit: Optional[int] = None,
    cursor: Optional[str] = None,
    user_id: str = Depends(get_caller_id),
    catalog: ClipCatalog = Depends(get_catalog),
):
    """Search the caller's clips by tags, object key, angle and apparatus."""
    return await catalog.search_clips(user_id, q, limit, cursor)


@router.post("/playback-url", response_model=PlaybackUrlResponse)
async def get_playback_url(
    request: PlaybackUrlRequest,
    user_id: str = Depends(get_caller_id),
    catalog: ClipCatalog = Depends(get_catalog),
):
    """Short-lived download URL for one of the caller's clips."""
    url = await catalog.get_playback_url(user_id, request.object_key)
    return PlaybackUrlResponse(get_url=url)


@router.get("/{clip_id}", response_model=ClipResponse)
async def get_clip(
    clip_id: str,
    user_id: str = Depends(get_caller_id),
    catalog: ClipCatalog = Depends(get_catalog),
):
    return await catalog.get_clip(user_id, clip_id)


@router.patch("/{clip_id}", response_model=ClipResponse)
async def update_clip_meta(
    clip_id: str,
    update: ClipMetaUpdate,
    user_id: str = Depends(get_caller_id),
    catalog: ClipCatalog = Depends(get_catalog),
):
    """Update tags, angle, apparatus, favorite or session. Omitted fields are kept."""
    return await catalog.update_clip_meta(user_id, clip_id, update)


@router.delete("/{clip_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_clip(
    clip_id: str,
    user_id: str = Depends(get_caller_id),
    catalog: ClipCatalog = Depends(get_catalog),
):
    await catalog.delete_clip(user_id, clip_id)
