"""Page strip and results summary for a computed page."""

from typing import List, Union

from src.table_engine.config import ELLIPSIS, MAX_VISIBLE_PAGES
from src.table_engine.models import PageResult

PageMarker = Union[int, str]


def visible_pages(
    current_page: int,
    total_pages: int,
    max_visible: int = MAX_VISIBLE_PAGES,
) -> List[PageMarker]:
    """Page numbers to show between "previous" and "next".

    The first and last pages are always present once the strip is
    truncated; skipped runs are marked with ``ELLIPSIS``.

    Examples (max_visible=7):
        (1, 1)   -> []
        (2, 5)   -> [1, 2, 3, 4, 5]
        (1, 20)  -> [1, 2, 3, 4, 5, 6, "...", 20]
        (10, 20) -> [1, "...", 7, 8, 9, 10, 11, "...", 20]
    """
    if total_pages <= 1:
        return []

    if total_pages <= max_visible:
        return list(range(1, total_pages + 1))

    pages: List[PageMarker] = [1]

    start = max(2, current_page - max_visible // 2)
    end = min(total_pages - 1, start + max_visible - 3)

    if start > 2:
        pages.append(ELLIPSIS)

    pages.extend(range(start, end + 1))

    if end < total_pages - 1:
        pages.append(ELLIPSIS)

    pages.append(total_pages)
    return pages


def results_summary(result: PageResult) -> str:
    """Human-readable line such as "Showing 1–10 of 42"."""
    if result.total_matches == 0:
        return "No results"
    if not result.items:
        return f"Page {result.page} of {result.total_pages}"
    return (
        f"Showing {result.start_index}–{result.end_index} "
        f"of {result.total_matches}"
    )
