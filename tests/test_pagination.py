import pytest

from clipvault.catalog import paginate, parse_cursor


@pytest.mark.parametrize(
    "cursor, expected",
    [
        (None, 0),
        ("", 0),
        ("0", 0),
        ("40", 40),
        ("abc", 0),
        ("12abc", 0),
        ("-5", 0),
        ("1.5", 0),
    ],
)
def test_parse_cursor(cursor, expected):
    assert parse_cursor(cursor) == expected


def test_first_page():
    page, is_done, cursor = paginate(list(range(5)), None, 2)
    assert page == [0, 1]
    assert is_done is False
    assert cursor == "2"


def test_last_page_exact_fit():
    page, is_done, cursor = paginate(list(range(4)), "2", 2)
    assert page == [2, 3]
    assert is_done is True
    assert cursor is None


def test_offset_past_end():
    page, is_done, cursor = paginate(list(range(3)), "10", 2)
    assert page == []
    assert is_done is True
    assert cursor is None


def test_empty_sequence():
    assert paginate([], None, 10) == ([], True, None)


def test_following_cursors_reproduces_sequence():
    sequence = list(range(23))
    collected, cursor = [], None
    while True:
        page, is_done, cursor = paginate(sequence, cursor, 5)
        collected.extend(page)
        if is_done:
            break
    assert collected == sequence
