from typing import Callable, Optional

from clipvault.catalog.pagination import paginate
from clipvault.models import (
    ClipFilters,
    ClipInDB,
    ClipPage,
    PaginationOpts,
    clip_to_response,
)
from clipvault.store import ClipStore

ClipPredicate = Callable[[ClipInDB], bool]


def build_predicates(filters: ClipFilters) -> list[ClipPredicate]:
    """One predicate per supplied filter. The date range is not included,
    the store applies it while scanning."""
    predicates: list[ClipPredicate] = []

    if filters.tags:
        wanted = set(filters.tags)
        predicates.append(lambda clip: any(tag in wanted for tag in clip.tags))

    if filters.angle is not None:
        predicates.append(lambda clip: clip.angle == filters.angle)

    if filters.apparatus is not None:
        predicates.append(lambda clip: clip.apparatus == filters.apparatus)

    if filters.favorite is not None:
        predicates.append(lambda clip: clip.favorite == filters.favorite)

    if filters.session_id is not None:
        predicates.append(lambda clip: clip.session_id == filters.session_id)

    return predicates


async def filter_clips(
    store: ClipStore,
    user_id: str,
    filters: Optional[ClipFilters] = None,
) -> list[ClipInDB]:
    """The owner's clips that satisfy every supplied filter, newest first."""
    filters = filters or ClipFilters()
    start = end = None
    if filters.date_range is not None:
        start, end = filters.date_range.start, filters.date_range.end

    clips = await store.scan_clips_by_owner(user_id, start=start, end=end)
    predicates = build_predicates(filters)
    return [clip for clip in clips if all(p(clip) for p in predicates)]


async def list_clips(
    store: ClipStore,
    user_id: str,
    filters: Optional[ClipFilters],
    pagination: PaginationOpts,
) -> ClipPage:
    clips = await filter_clips(store, user_id, filters)
    page, is_done, continue_cursor = paginate(clips, pagination.cursor, pagination.num_items)
    return ClipPage(
        page=[clip_to_response(c) for c in page],
        is_done=is_done,
        continue_cursor=continue_cursor,
    )
