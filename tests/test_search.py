import pytest

from clipvault.catalog import search_clips

from conftest import OTHER, OWNER

pytestmark = pytest.mark.anyio


class CountingStore:
    """Wraps a store and counts scans."""

    def __init__(self, store):
        self.store = store
        self.scans = 0

    async def scan_clips_by_owner(self, *args, **kwargs):
        self.scans += 1
        return await self.store.scan_clips_by_owner(*args, **kwargs)


async def result_ids(store, q, **kwargs):
    page = await search_clips(store, OWNER, q, **kwargs)
    return [c.id for c in page.results]


@pytest.mark.parametrize("q", ["", "   ", "?!-"])
async def test_blank_query_short_circuits(store, add_clip, q):
    await add_clip(tags=["handstand"])
    counting = CountingStore(store)

    page = await search_clips(counting, OWNER, q, 10, None)

    assert page.results == []
    assert page.is_done is True
    assert page.cursor is None
    assert counting.scans == 0


async def test_partial_word_matches_both_directions(store, add_clip):
    clip = await add_clip(tags=["handstand"])

    assert await result_ids(store, "hand") == [clip]
    assert await result_ids(store, "handstands") == [clip]


async def test_unrelated_word_does_not_match(store, add_clip):
    await add_clip(tags=["floor"])

    assert await result_ids(store, "handstand") == []


async def test_every_query_token_must_match(store, add_clip):
    both = await add_clip(tags=["handstand", "press"])
    await add_clip(tags=["handstand"])

    assert await result_ids(store, "hand press") == [both]


async def test_matches_object_key_angle_and_apparatus(store, add_clip):
    clip = await add_clip(object_key="clips/u/1700-abcdef.mov", angle="45", apparatus="parallettes")

    assert await result_ids(store, "abcdef") == [clip]
    assert await result_ids(store, "mov") == [clip]
    assert await result_ids(store, "45") == [clip]
    assert await result_ids(store, "parallette") == [clip]


async def test_query_is_case_and_punctuation_insensitive(store, add_clip):
    clip = await add_clip(tags=["Back-Lever"])

    assert await result_ids(store, "BACK lever!") == [clip]


async def test_only_owner_clips_are_searched(store, add_clip):
    await add_clip(user_id=OTHER, tags=["handstand"])

    assert await result_ids(store, "handstand") == []


async def test_results_newest_first_and_paged(store, add_clip):
    clips = [await add_clip(created_at=n, tags=["press"]) for n in range(1, 6)]
    await add_clip(created_at=10, tags=["floor"])

    first = await search_clips(store, OWNER, "press", 2, None)
    assert [c.id for c in first.results] == [clips[4], clips[3]]
    assert first.is_done is False
    assert first.cursor == "2"

    last = await search_clips(store, OWNER, "press", 2, "4")
    assert [c.id for c in last.results] == [clips[0]]
    assert last.is_done is True
    assert last.cursor is None


async def test_malformed_cursor_restarts_from_first_page(store, add_clip):
    clip = await add_clip(tags=["press"])

    page = await search_clips(store, OWNER, "press", 10, "not-a-number")

    assert [c.id for c in page.results] == [clip]


@pytest.mark.parametrize("limit", [None, 0, -3])
async def test_missing_limit_defaults_to_twenty(store, add_clip, limit):
    for n in range(25):
        await add_clip(created_at=n, tags=["press"])

    page = await search_clips(store, OWNER, "press", limit, None)

    assert len(page.results) == 20
    assert page.cursor == "20"


async def test_search_example(store, add_clip):
    c1 = await add_clip(tags=["handstand", "front"], created_at=100, favorite=True)
    await add_clip(tags=["press"], created_at=200)

    page = await search_clips(store, OWNER, "hand", 10, None)

    assert [c.id for c in page.results] == [c1]
    assert page.is_done is True
    assert page.cursor is None


async def test_short_clip_token_inside_query_token_matches(store, add_clip):
    clip = await add_clip(tags=["l", "sit"])

    assert await result_ids(store, "lsit") == [clip]
