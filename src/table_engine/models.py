"""Value types shared by the data-table engine and its callers."""

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from src.table_engine.config import (
    DEFAULT_PAGE_SIZE,
    SORT_ASCENDING,
    SORT_DESCENDING,
    SORT_DIRECTIONS,
)

# One listing row (member, player, tournament, ...). Opaque to the engine.
Record = Mapping[str, Any]

# Active exact-match constraints keyed by field name
FilterState = Dict[str, Any]

Extractor = Callable[[Any, Record], Any]
Renderer = Callable[[Any, Record], str]


def value_to_text(value: Any) -> str:
    """Return the textual form search and filters compare against.

    Examples:
        None        -> ""
        True        -> "true"
        3.0         -> "3"
        2.5         -> "2.5"
        ["U19", 2]  -> "U19,2"
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, (list, tuple)):
        return ",".join(value_to_text(item) for item in value)
    return str(value)


@dataclass(frozen=True)
class FilterOption:
    """One choice of a filterable column's dropdown."""

    value: str
    label: str


@dataclass(frozen=True)
class ColumnSpec:
    """Per-field configuration for a listing column.

    ``extract`` produces the value used for sorting; ``render`` produces the
    string shown in the table cell. Both receive ``(raw_value, record)``.
    Columns without them fall back to the raw stored value.
    """

    field: str
    title: str = ""
    sortable: bool = False
    filterable: bool = False
    searchable: bool = True
    extract: Optional[Extractor] = None
    render: Optional[Renderer] = None
    options: Tuple[FilterOption, ...] = ()

    def sort_value(self, record: Record) -> Any:
        raw = record.get(self.field)
        if self.extract is not None:
            return self.extract(raw, record)
        return raw

    def display(self, record: Record) -> str:
        raw = record.get(self.field)
        if self.render is not None:
            return self.render(raw, record)
        return value_to_text(raw)


@dataclass(frozen=True)
class SortState:
    """Active sort field and direction."""

    field: str
    direction: str = SORT_ASCENDING

    def __post_init__(self):
        if self.direction not in SORT_DIRECTIONS:
            raise ValueError(
                f"Invalid sort direction '{self.direction}'. "
                f"Must be one of: {SORT_DIRECTIONS}"
            )

    @property
    def ascending(self) -> bool:
        return self.direction == SORT_ASCENDING

    def toggled(self) -> "SortState":
        """Same field, opposite direction."""
        direction = SORT_DESCENDING if self.ascending else SORT_ASCENDING
        return SortState(field=self.field, direction=direction)


@dataclass(frozen=True)
class PageRequest:
    """One-based page number and page size."""

    page: int = 1
    size: int = DEFAULT_PAGE_SIZE

    def validate(self):
        if self.page < 1:
            raise ValueError(f"Page number must be >= 1 (got {self.page})")
        if self.size < 1:
            raise ValueError(f"Page size must be >= 1 (got {self.size})")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.size


@dataclass
class PageResult:
    """The rows to render for one page plus pagination totals."""

    items: List[Record]
    total_matches: int
    total_pages: int
    page: int
    size: int

    @classmethod
    def empty(cls, page_request: PageRequest) -> "PageResult":
        return cls(
            items=[],
            total_matches=0,
            total_pages=0,
            page=page_request.page,
            size=page_request.size,
        )

    @property
    def start_index(self) -> int:
        """One-based index of the first row on this page (0 if none)."""
        if not self.items:
            return 0
        return (self.page - 1) * self.size + 1

    @property
    def end_index(self) -> int:
        """One-based index of the last row on this page (0 if none)."""
        if not self.items:
            return 0
        return self.start_index + len(self.items) - 1

    @property
    def has_previous(self) -> bool:
        return self.page > 1 and self.total_pages > 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages
