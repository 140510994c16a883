import random

from book_highlights.models import Highlight
from book_highlights.sampling import sample_highlights


def make_pool(size: int) -> list[Highlight]:
    return [Highlight(book_title="Book", author=None, text=f"Highlight {i}", source_file="b.md") for i in range(size)]


def test_sample_has_requested_size_and_distinct_members() -> None:
    pool = make_pool(20)

    sample = sample_highlights(pool, 5)

    assert len(sample) == 5
    assert len(set(sample)) == 5
    assert all(item in pool for item in sample)


def test_sample_is_bounded_by_pool_size() -> None:
    pool = make_pool(3)

    assert sorted(h.text for h in sample_highlights(pool, 10)) == sorted(h.text for h in pool)


def test_empty_pool() -> None:
    assert sample_highlights([], 5) == []


def test_injected_random_source_is_repeatable() -> None:
    pool = make_pool(20)

    first = sample_highlights(pool, 5, random.Random(7))
    second = sample_highlights(pool, 5, random.Random(7))

    assert first == second


def test_count_below_one_returns_one() -> None:
    assert len(sample_highlights(make_pool(4), 0)) == 1
