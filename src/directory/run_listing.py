"""Print one page of a listing from its JSON snapshot.

Usage:
    python -m src.directory.run_listing LISTING [options]

Examples:
    python -m src.directory.run_listing players --filter districtName=Warangal
    python -m src.directory.run_listing tournaments --query open --sort startDate --descending
    python -m src.directory.run_listing members --page 2 --size 5 --data-dir /path/to/snapshots
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from src.directory.columns import LISTINGS, get_listing
from src.directory.record_repository import RecordRepository, RecordSourceError
from src.logging_config import setup_logging
from src.table_engine.config import SORT_ASCENDING, SORT_DESCENDING
from src.table_engine.table_state import TableController

logger = logging.getLogger(__name__)


def _parse_filters(pairs: List[str]) -> Dict[str, str]:
    """Turn ``["district=Warangal", ...]`` into a filter mapping."""
    filters = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise ValueError(f"Filter must look like FIELD=VALUE (got '{pair}')")
        filters[name.strip()] = value.strip()
    return filters


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Show one page of an association listing")
    p.add_argument("listing", help=f"Listing name ({', '.join(sorted(LISTINGS))})")
    p.add_argument("--data-dir", type=Path, default=None, help="Directory holding <listing>.json snapshots")
    p.add_argument("--query", default="", help="Free-text search")
    p.add_argument("--filter", dest="filters", action="append", default=[], metavar="FIELD=VALUE",
                   help="Exact-match filter, repeatable")
    p.add_argument("--sort", default=None, metavar="FIELD", help="Sort field (defaults to the listing's)")
    p.add_argument("--descending", action="store_true", help="Sort descending")
    p.add_argument("--page", type=int, default=1)
    p.add_argument("--size", type=int, default=None, help="Rows per page (defaults to the listing's)")
    p.add_argument("--log-level", default="WARNING")
    return p.parse_args(argv)


def render_listing(
    listing_name: str,
    data_dir: Optional[Path] = None,
    query: str = "",
    filters: Optional[Dict[str, str]] = None,
    sort_field: Optional[str] = None,
    descending: bool = False,
    page: int = 1,
    size: Optional[int] = None,
) -> str:
    """Build the printable page for a listing.

    Raises:
        KeyError: Unknown listing.
        FileNotFoundError: No snapshot for the listing.
        RecordSourceError: Unreadable snapshot.
        ValueError: Invalid page, size, filter or sort column.
    """
    listing = get_listing(listing_name)
    records = RecordRepository(data_dir).load_records(listing.name)

    controller = TableController(
        records,
        columns=listing.columns,
        page_size=size or listing.page_size,
        default_sort=listing.default_sort,
    )
    controller.set_query(query)
    for name, value in (filters or {}).items():
        controller.set_filter(name, value)
    direction = SORT_DESCENDING if descending else SORT_ASCENDING
    if sort_field is not None:
        controller.set_sort(sort_field, direction)
    elif descending:
        if controller.state.sort is None:
            raise ValueError("--descending needs a sort field")
        controller.set_sort(controller.state.sort.field, direction)
    controller.go_to_page(page)

    rows = controller.rendered_rows()
    titles = [column.title or column.field for column in listing.columns]

    lines = [listing.title]
    if rows:
        lines.append(pd.DataFrame(rows, columns=titles).to_string(index=False))
    else:
        lines.append("(no rows)")

    strip = controller.page_strip()
    if strip:
        lines.append("Pages: " + " ".join(str(marker) for marker in strip))
    lines.append(controller.summary())
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        output = render_listing(
            args.listing,
            data_dir=args.data_dir,
            query=args.query,
            filters=_parse_filters(args.filters),
            sort_field=args.sort,
            descending=args.descending,
            page=args.page,
            size=args.size,
        )
    except (KeyError, FileNotFoundError, RecordSourceError, ValueError) as e:
        logger.error("Listing failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
