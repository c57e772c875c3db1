from src.table_engine.data_table import TabularDataEngine, compute_page
from src.table_engine.models import (
    ColumnSpec,
    FilterOption,
    FilterState,
    PageRequest,
    PageResult,
    Record,
    SortState,
    value_to_text,
)
from src.table_engine.pagination import results_summary, visible_pages
from src.table_engine.table_state import TableController, TableState

__all__ = [
    "ColumnSpec",
    "FilterOption",
    "FilterState",
    "PageRequest",
    "PageResult",
    "Record",
    "SortState",
    "TableController",
    "TableState",
    "TabularDataEngine",
    "compute_page",
    "results_summary",
    "value_to_text",
    "visible_pages",
]
