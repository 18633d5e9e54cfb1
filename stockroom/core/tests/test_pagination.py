from urllib.parse import parse_qs, urlparse

import pytest

from stockroom.core.pagination import compute_window, page_url
from stockroom.data.models import ELLIPSIS


@pytest.mark.parametrize(
    "current, total, radius, expected",
    [
        (1, 1, 2, [1]),
        (1, 2, 2, [1, 2]),
        (2, 2, 2, [1, 2]),
        (1, 3, 2, [1, 2, 3]),
        (5, 10, 2, [1, ELLIPSIS, 3, 4, 5, 6, 7, ELLIPSIS, 10]),
        (1, 10, 2, [1, 2, 3, ELLIPSIS, 10]),
        (10, 10, 2, [1, ELLIPSIS, 8, 9, 10]),
        (4, 10, 2, [1, 2, 3, 4, 5, 6, ELLIPSIS, 10]),
        (7, 10, 2, [1, ELLIPSIS, 5, 6, 7, 8, 9, 10]),
        (5, 10, 0, [1, ELLIPSIS, 5, ELLIPSIS, 10]),
    ],
)
def test_tokens(current, total, radius, expected):
    assert compute_window(current, total, radius).tokens == expected


def test_single_page_window_does_not_render():
    window = compute_window(1, 1)
    assert window.tokens == [1]
    assert not window.should_render
    assert not window.has_previous
    assert not window.has_next


def test_previous_and_next():
    assert compute_window(1, 3).has_next and not compute_window(1, 3).has_previous
    middle = compute_window(2, 3)
    assert middle.has_previous and middle.has_next
    last = compute_window(3, 3)
    assert last.has_previous and not last.has_next


def test_invalid_inputs_are_clamped():
    window = compute_window(0, 0)
    assert window.tokens == [1]
    assert window.current_page == 1
    assert window.total_pages == 1

    assert compute_window(-3, 10).tokens == compute_window(1, 10).tokens


def test_page_past_the_end_is_not_clamped_down():
    window = compute_window(12, 10)
    assert window.tokens == [1, ELLIPSIS, 10]
    assert window.has_previous
    assert not window.has_next


def test_page_numbers_are_strictly_increasing():
    for total in range(1, 15):
        for current in range(1, total + 1):
            numbers = [t for t in compute_window(current, total).tokens if t != ELLIPSIS]
            assert numbers == sorted(set(numbers))
            assert numbers[0] == 1 and numbers[-1] == total
            assert current in numbers


def test_page_url_keeps_other_params():
    url = page_url("/inventory", {"q": "red mug", "pageSize": "5", "page": "2"}, 3)
    parsed = urlparse(url)
    assert parsed.path == "/inventory"
    assert parse_qs(parsed.query) == {"q": ["red mug"], "pageSize": ["5"], "page": ["3"]}


def test_page_url_without_params():
    assert page_url("", None, 4) == "?page=4"
