import pytest

from clipvault.catalog import filter_clips, list_clips
from clipvault.models import ClipFilters, DateRange, PaginationOpts

from conftest import OTHER, OWNER

pytestmark = pytest.mark.anyio


async def ids(store, filters=None, user_id=OWNER):
    return [c.id for c in await filter_clips(store, user_id, filters)]


async def test_no_filters_returns_owner_clips_newest_first(store, add_clip):
    older = await add_clip(created_at=100)
    newer = await add_clip(created_at=300)
    middle = await add_clip(created_at=200)
    await add_clip(user_id=OTHER, created_at=250)

    assert await ids(store) == [newer, middle, older]


async def test_other_owner_never_listed_even_when_filters_match(store, add_clip):
    await add_clip(user_id=OTHER, tags=["press"], favorite=True)

    assert await ids(store, ClipFilters(tags=["press"], favorite=True)) == []


async def test_tags_are_or_within_field(store, add_clip):
    clip = await add_clip(tags=["a", "b"])

    assert await ids(store, ClipFilters(tags=["b", "c"])) == [clip]
    assert await ids(store, ClipFilters(tags=["c", "d"])) == []


async def test_tag_match_is_exact_and_case_sensitive(store, add_clip):
    await add_clip(tags=["Handstand"])

    assert await ids(store, ClipFilters(tags=["handstand"])) == []
    assert await ids(store, ClipFilters(tags=["hand"])) == []


async def test_empty_tag_list_imposes_no_constraint(store, add_clip):
    clip = await add_clip(tags=[])

    assert await ids(store, ClipFilters(tags=[])) == [clip]


async def test_filters_combine_with_and(store, add_clip, add_session):
    session_id = await add_session()
    wanted = await add_clip(
        tags=["planche"], angle="side", apparatus="rings", favorite=True, session_id=session_id
    )
    await add_clip(tags=["planche"], angle="front", apparatus="rings", favorite=True)
    await add_clip(tags=["planche"], angle="side", apparatus="floor", favorite=True)
    await add_clip(tags=["planche"], angle="side", apparatus="rings", favorite=False)
    await add_clip(tags=["lever"], angle="side", apparatus="rings", favorite=True)

    filters = ClipFilters(
        tags=["planche"], angle="side", apparatus="rings", favorite=True, session_id=session_id
    )
    assert await ids(store, filters) == [wanted]


async def test_favorite_false_matches_clips_without_the_flag(store, add_clip):
    plain = await add_clip(favorite=False)
    await add_clip(favorite=True)
    bare = await store.insert_clip(
        {"user_id": OWNER, "object_key": "k-bare", "created_at": 1, "bytes": 1, "tags": []}
    )

    assert await ids(store, ClipFilters(favorite=False)) == [plain, bare]


async def test_angle_45(store, add_clip):
    clip = await add_clip(angle="45")
    await add_clip(angle="front")

    assert await ids(store, ClipFilters(angle="45")) == [clip]


async def test_date_range_is_inclusive(store, add_clip):
    await add_clip(created_at=99)
    at_start = await add_clip(created_at=100)
    inside = await add_clip(created_at=150)
    at_end = await add_clip(created_at=200)
    await add_clip(created_at=201)

    filters = ClipFilters(date_range=DateRange(start=100, end=200))
    assert await ids(store, filters) == [at_end, inside, at_start]


async def test_inverted_date_range_is_empty_not_an_error(store, add_clip):
    await add_clip(created_at=150)

    assert await ids(store, ClipFilters(date_range=DateRange(start=200, end=100))) == []


async def test_identical_timestamps_ordered_by_id_descending(store):
    for clip_id in ["aaa", "ccc", "bbb"]:
        await store.insert_clip(
            {"_id": clip_id, "user_id": OWNER, "object_key": clip_id,
             "created_at": 500, "bytes": 1, "tags": []}
        )

    assert await ids(store) == ["ccc", "bbb", "aaa"]


async def test_pages_cover_filtered_sequence_exactly_once(store, add_clip):
    expected = []
    for n in range(1, 12):
        clip_id = await add_clip(created_at=n, tags=["even"] if n % 2 == 0 else ["odd"])
        if n % 2:
            expected.append(clip_id)
    expected.reverse()

    seen, cursor = [], None
    while True:
        result = await list_clips(
            store, OWNER, ClipFilters(tags=["odd"]), PaginationOpts(num_items=2, cursor=cursor)
        )
        seen.extend(c.id for c in result.page)
        if result.is_done:
            assert result.continue_cursor is None
            break
        cursor = result.continue_cursor

    assert seen == expected


async def test_favorite_example(store, add_clip):
    c1 = await add_clip(tags=["handstand", "front"], created_at=100, favorite=True)
    await add_clip(tags=["press"], created_at=200, favorite=False)

    result = await list_clips(store, OWNER, ClipFilters(favorite=True), PaginationOpts(num_items=10))

    assert [c.id for c in result.page] == [c1]
    assert result.is_done is True
    assert result.continue_cursor is None


async def test_page_does_not_expose_owner(store, add_clip):
    await add_clip()

    result = await list_clips(store, OWNER, None, PaginationOpts(num_items=5))

    assert "user_id" not in result.page[0].model_dump()
