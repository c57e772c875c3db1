"""Client-side data-table engine.

Turns a fully materialised record collection plus the current UI control
values into the exact page of rows to render. The pipeline always runs in
the same order:

1. Search   - case-insensitive substring match against any field.
2. Filter   - exact text equality per (field, value), AND-ed together.
3. Sort     - stable, by the column's extracted value or the raw field.
4. Paginate - slice the requested one-based page.

Every call is a pure function of its arguments. Nothing is cached between
calls and the inputs are never mutated.
"""

import logging
import math
import numbers
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence

import pandas as pd

from src.table_engine.models import (
    ColumnSpec,
    FilterState,
    PageRequest,
    PageResult,
    Record,
    SortState,
    value_to_text,
)

logger = logging.getLogger(__name__)

# Object-column types whose members order safely against each other.
# Anything else (mixed numbers and strings, lists, ...) sorts by its text.
_ORDERABLE_OBJECT_TYPES = {
    "string", "boolean", "empty", "date", "datetime", "decimal",
}


def _text_key(value: Any) -> Optional[str]:
    """Text sort key; missing values stay missing so they sort last."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return None
    return value_to_text(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (numbers.Real, Decimal)) and not isinstance(value, bool)


class TabularDataEngine:
    """Search, filter, sort and paginate an in-memory record collection."""

    def compute_page(
        self,
        records: Sequence[Record],
        query: str = "",
        filters: Optional[FilterState] = None,
        sort: Optional[SortState] = None,
        page_request: Optional[PageRequest] = None,
        columns: Iterable[ColumnSpec] = (),
    ) -> PageResult:
        """Produce the page of records to render.

        Args:
            records: Ordered records, all exposing the same field names.
            query: Free-text search. Empty matches everything.
            filters: Field -> required literal value. Keys whose value is
                None or "" are unconstrained.
            sort: Optional sort field and direction. None keeps input order.
            page_request: One-based page and page size.
            columns: Column specs supplying sort extractors and search
                opt-outs. Fields without a column use their raw value.

        Returns:
            PageResult with the page's records (the caller's own objects)
            and the match/page totals.

        Raises:
            ValueError: If the page number or page size is below 1.
        """
        page_request = page_request or PageRequest()
        page_request.validate()

        records = list(records)
        if not records:
            return PageResult.empty(page_request)

        column_map = {column.field: column for column in columns}
        texts = self._text_frame(records)

        mask = pd.Series(True, index=texts.index)
        if query:
            mask &= self._search_mask(texts, query, column_map)
        mask &= self._filter_mask(texts, filters or {})

        positions = [int(i) for i in texts.index[mask.to_numpy()]]

        if sort is not None and positions:
            positions = self._sort_positions(records, positions, sort, column_map)

        logger.debug(
            "Computed page %d/%d: %d of %d records match (query=%r, filters=%s, sort=%s)",
            page_request.page,
            math.ceil(len(positions) / page_request.size),
            len(positions),
            len(records),
            query,
            filters,
            sort,
        )
        return self._paginate(records, positions, page_request)

    # ------------------------------------------------------------------
    # Search / filter
    # ------------------------------------------------------------------
    @staticmethod
    def _text_frame(records: List[Record]) -> pd.DataFrame:
        """One row per record, every cell as the text search and filters see."""
        rows = [
            {name: value_to_text(value) for name, value in record.items()}
            for record in records
        ]
        return pd.DataFrame(rows, index=range(len(records)), dtype=object).fillna("")

    @staticmethod
    def _search_mask(
        texts: pd.DataFrame, query: str, column_map: Dict[str, ColumnSpec]
    ) -> pd.Series:
        needle = query.lower()
        searched = [
            name for name in texts.columns
            if name not in column_map or column_map[name].searchable
        ]
        if not searched:
            return pd.Series(False, index=texts.index)

        hits = texts[searched].apply(
            lambda col: col.str.lower().str.contains(needle, regex=False)
        )
        return hits.any(axis=1)

    @staticmethod
    def _filter_mask(texts: pd.DataFrame, filters: FilterState) -> pd.Series:
        mask = pd.Series(True, index=texts.index)
        for name, value in filters.items():
            if value is None or value == "":
                continue
            if name not in texts.columns:
                # No record carries the field, so nothing can equal the value
                return pd.Series(False, index=texts.index)
            mask &= texts[name] == value_to_text(value)
        return mask

    # ------------------------------------------------------------------
    # Sort
    # ------------------------------------------------------------------
    def _sort_positions(
        self,
        records: List[Record],
        positions: List[int],
        sort: SortState,
        column_map: Dict[str, ColumnSpec],
    ) -> List[int]:
        column = column_map.get(sort.field)
        if column is None and not any(sort.field in record for record in records):
            logger.warning(
                "Sort field %r matches no column or record field; keeping input order",
                sort.field,
            )
            return positions

        keys = pd.Series(
            [self._sort_value(records[i], sort.field, column) for i in positions],
            index=positions,
        )
        keys = self._orderable(keys)

        ordered = keys.sort_values(
            ascending=sort.ascending, kind="stable", na_position="last"
        )
        return [int(i) for i in ordered.index]

    @staticmethod
    def _sort_value(record: Record, name: str, column: Optional[ColumnSpec]) -> Any:
        if column is not None:
            return column.sort_value(record)
        return record.get(name)

    @staticmethod
    def _orderable(keys: pd.Series) -> pd.Series:
        """Fall back to text keys when an object column mixes types.

        All-number columns keep their values even when pandas cannot infer
        a numeric dtype (ints beyond int64, Decimal mixed with float).
        """
        if not pd.api.types.is_object_dtype(keys):
            return keys
        present = keys[keys.notna()]
        if len(present) and all(_is_number(v) for v in present):
            return keys
        if pd.api.types.infer_dtype(keys, skipna=True) in _ORDERABLE_OBJECT_TYPES:
            return keys
        return keys.map(_text_key)

    # ------------------------------------------------------------------
    # Paginate
    # ------------------------------------------------------------------
    @staticmethod
    def _paginate(
        records: List[Record], positions: List[int], page_request: PageRequest
    ) -> PageResult:
        total_matches = len(positions)
        start = page_request.offset
        window = positions[start:start + page_request.size]

        return PageResult(
            items=[records[i] for i in window],
            total_matches=total_matches,
            total_pages=math.ceil(total_matches / page_request.size),
            page=page_request.page,
            size=page_request.size,
        )


_default_engine = TabularDataEngine()


def compute_page(
    records: Sequence[Record],
    query: str = "",
    filters: Optional[FilterState] = None,
    sort: Optional[SortState] = None,
    page_request: Optional[PageRequest] = None,
    columns: Iterable[ColumnSpec] = (),
) -> PageResult:
    """Module-level shortcut for ``TabularDataEngine().compute_page``."""
    return _default_engine.compute_page(
        records, query, filters, sort, page_request, columns
    )
