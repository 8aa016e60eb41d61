"""Offset cursors shared by listing and search.

A cursor is the decimal offset of the next item in the freshly computed
result sequence. Because the sequence is recomputed on every request, an
insert or delete between two page requests can shift the offsets and make
a caller skip or see a record twice. That is accepted; there is no snapshot.
"""
import re
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")

DECIMAL = re.compile(r"\s*[0-9]+\s*")


def parse_cursor(cursor: Optional[str]) -> int:
    """Offset encoded in ``cursor``. Missing or garbled cursors restart at 0."""
    if not cursor or not DECIMAL.fullmatch(cursor):
        return 0
    return int(cursor)


def paginate(
    sequence: Sequence[T],
    cursor: Optional[str],
    page_size: int,
) -> tuple[list[T], bool, Optional[str]]:
    """Slice one page. Returns ``(page, is_done, next_cursor)``."""
    offset = parse_cursor(cursor)
    end = offset + page_size
    page = list(sequence[offset:end])
    is_done = end >= len(sequence)
    return page, is_done, None if is_done else str(end)
