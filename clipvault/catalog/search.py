from typing import Optional

from clipvault.catalog.pagination import paginate
from clipvault.catalog.tokenizer import tokenize
from clipvault.models import ClipInDB, SearchPage, clip_to_response
from clipvault.store import ClipStore

DEFAULT_LIMIT = 20


def search_tokens(clip: ClipInDB) -> list[str]:
    """Tokens of the text a clip is searchable by: tags, object key, angle, apparatus."""
    fields = [
        *clip.tags,
        clip.object_key,
        clip.angle.value if clip.angle else "",
        clip.apparatus.value if clip.apparatus else "",
    ]
    return tokenize(" ".join(fields).lower())


def tokens_overlap(a: str, b: str) -> bool:
    return a in b or b in a


def matches_query(clip: ClipInDB, query_tokens: list[str]) -> bool:
    """Every query token must be contained in, or contain, some clip token."""
    clip_tokens = search_tokens(clip)
    return all(
        any(tokens_overlap(clip_token, query_token) for clip_token in clip_tokens)
        for query_token in query_tokens
    )


async def search_clips(
    store: ClipStore,
    user_id: str,
    q: str,
    limit: Optional[int] = None,
    cursor: Optional[str] = None,
    default_limit: int = DEFAULT_LIMIT,
) -> SearchPage:
    """Boolean token search over the owner's clips, newest first.

    Partial words match in both directions ("hand" finds "handstand" and
    "handstands" finds "handstand") but there is no typo tolerance and no
    ranking.
    """
    if not limit or limit < 0:
        limit = default_limit

    query_tokens = tokenize(q) if q and q.strip() else []
    if not query_tokens:
        return SearchPage(results=[], cursor=None, is_done=True)

    clips = await store.scan_clips_by_owner(user_id)
    matching = [clip for clip in clips if matches_query(clip, query_tokens)]

    results, is_done, next_cursor = paginate(matching, cursor, limit)
    return SearchPage(
        results=[clip_to_response(c) for c in results],
        cursor=next_cursor,
        is_done=is_done,
    )
