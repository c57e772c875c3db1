"""Tests for the page strip and results summary."""

from src.table_engine.config import ELLIPSIS
from src.table_engine.models import PageResult
from src.table_engine.pagination import results_summary, visible_pages


def _result(items, total_matches, page, size):
    total_pages = -(-total_matches // size)
    return PageResult(
        items=[{}] * items,
        total_matches=total_matches,
        total_pages=total_pages,
        page=page,
        size=size,
    )


# ── Page strip ───────────────────────────────────────────────────────

class TestVisiblePages:
    def test_single_page_has_no_strip(self):
        assert visible_pages(1, 1) == []

    def test_no_pages_has_no_strip(self):
        assert visible_pages(1, 0) == []

    def test_short_strip_lists_every_page(self):
        assert visible_pages(2, 5) == [1, 2, 3, 4, 5]

    def test_exactly_max_visible(self):
        assert visible_pages(4, 7) == [1, 2, 3, 4, 5, 6, 7]

    def test_truncated_at_start(self):
        assert visible_pages(1, 20) == [1, 2, 3, 4, 5, 6, ELLIPSIS, 20]

    def test_truncated_both_sides(self):
        assert visible_pages(10, 20) == [1, ELLIPSIS, 7, 8, 9, 10, 11, ELLIPSIS, 20]

    def test_truncated_near_end(self):
        assert visible_pages(20, 20) == [1, ELLIPSIS, 17, 18, 19, 20]

    def test_custom_width(self):
        assert visible_pages(5, 10, max_visible=5) == [1, ELLIPSIS, 3, 4, 5, ELLIPSIS, 10]

    def test_first_and_last_always_present(self):
        for current in range(1, 31):
            strip = visible_pages(current, 30)
            assert strip[0] == 1
            assert strip[-1] == 30


# ── Summary ──────────────────────────────────────────────────────────

class TestResultsSummary:
    def test_first_page(self):
        assert results_summary(_result(10, 42, 1, 10)) == "Showing 1–10 of 42"

    def test_last_partial_page(self):
        assert results_summary(_result(2, 42, 5, 10)) == "Showing 41–42 of 42"

    def test_no_results(self):
        assert results_summary(_result(0, 0, 1, 10)) == "No results"

    def test_past_the_end(self):
        assert results_summary(_result(0, 42, 99, 10)) == "Page 99 of 5"
