"""Table controller - owns one screen's control values and recomputes pages.

The engine is a pure function and never couples page resets to other
inputs. This controller carries those caller obligations: changing the
query, a filter or the page size always returns to page 1.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from src.table_engine.config import DEFAULT_PAGE_SIZE, MAX_VISIBLE_PAGES, SORT_ASCENDING
from src.table_engine.data_table import TabularDataEngine
from src.table_engine.models import ColumnSpec, PageRequest, PageResult, Record, SortState
from src.table_engine.pagination import PageMarker, results_summary, visible_pages

logger = logging.getLogger(__name__)


@dataclass
class TableState:
    """Current UI control values for one listing."""

    query: str = ""
    filters: Dict[str, Any] = field(default_factory=dict)
    sort: Optional[SortState] = None
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def page_request(self) -> PageRequest:
        return PageRequest(page=self.page, size=self.page_size)


class TableController:
    """Main controller for a listing screen.

    Coordinates between TableState (control values) and TabularDataEngine
    (page computation). Every read recomputes from the full record set.
    """

    def __init__(
        self,
        records: Sequence[Record] = (),
        columns: Iterable[ColumnSpec] = (),
        page_size: int = DEFAULT_PAGE_SIZE,
        default_sort: Optional[SortState] = None,
        engine: Optional[TabularDataEngine] = None,
    ):
        if page_size < 1:
            raise ValueError(f"Page size must be >= 1 (got {page_size})")
        self.records: List[Record] = list(records)
        self.columns: List[ColumnSpec] = list(columns)
        self.engine = engine or TabularDataEngine()
        self.state = TableState(sort=default_sort, page_size=page_size)

    def _column(self, name: str) -> Optional[ColumnSpec]:
        for column in self.columns:
            if column.field == name:
                return column
        return None

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------
    def set_records(self, records: Sequence[Record]):
        """Replace the record collection (a fresh view load)."""
        self.records = list(records)
        self.state.page = 1
        logger.debug("Loaded %d records", len(self.records))

    def set_query(self, query: str):
        self.state.query = query
        self.state.page = 1

    def set_filter(self, name: str, value: Any):
        """Constrain *name* to *value*; None or "" removes the constraint.

        Raises:
            ValueError: If the column exists but is not filterable.
        """
        column = self._column(name)
        if column is not None and not column.filterable:
            raise ValueError(f"Column '{name}' is not filterable")

        if value is None or value == "":
            self.state.filters.pop(name, None)
        else:
            self.state.filters[name] = value
        self.state.page = 1

    def clear_filters(self):
        self.state.filters.clear()
        self.state.query = ""
        self.state.page = 1

    def set_sort(self, name: str, direction: str = SORT_ASCENDING) -> SortState:
        """Sort by *name* in *direction*. Page is kept.

        Raises:
            ValueError: If the column exists but is not sortable, or the
                direction is unknown.
        """
        column = self._column(name)
        if column is not None and not column.sortable:
            raise ValueError(f"Column '{name}' is not sortable")
        self.state.sort = SortState(field=name, direction=direction)
        return self.state.sort

    def toggle_sort(self, name: str) -> SortState:
        """Header click: the active column flips, a new column starts ascending."""
        current = self.state.sort
        if current is not None and current.field == name:
            return self.set_sort(name, current.toggled().direction)
        return self.set_sort(name, SORT_ASCENDING)

    def clear_sort(self):
        self.state.sort = None

    def set_page_size(self, size: int):
        if size < 1:
            raise ValueError(f"Page size must be >= 1 (got {size})")
        self.state.page_size = size
        self.state.page = 1

    def go_to_page(self, page: int):
        """Jump to *page*. Pages past the end render as empty."""
        if page < 1:
            raise ValueError(f"Page number must be >= 1 (got {page})")
        self.state.page = page

    def next_page(self) -> int:
        result = self.current_page()
        if result.has_next:
            self.state.page += 1
        return self.state.page

    def previous_page(self) -> int:
        if self.state.page > 1:
            # Stepping back from past the end lands on the last real page
            total_pages = self.current_page().total_pages
            self.state.page = max(1, min(self.state.page - 1, total_pages))
        return self.state.page

    # ------------------------------------------------------------------
    # Outputs
    # ------------------------------------------------------------------
    def current_page(self) -> PageResult:
        return self.engine.compute_page(
            self.records,
            query=self.state.query,
            filters=dict(self.state.filters),
            sort=self.state.sort,
            page_request=self.state.page_request(),
            columns=self.columns,
        )

    def page_strip(self, max_visible: int = MAX_VISIBLE_PAGES) -> List[PageMarker]:
        result = self.current_page()
        return visible_pages(result.page, result.total_pages, max_visible)

    def summary(self) -> str:
        return results_summary(self.current_page())

    def rendered_rows(self) -> List[Dict[str, str]]:
        """Current page as column title -> display string."""
        return [
            {column.title or column.field: column.display(record) for column in self.columns}
            for record in self.current_page().items
        ]
