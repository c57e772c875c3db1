"""Column registries for the association's listing screens.

Each listing pairs its ColumnSpecs with the default sort and page size the
screen opens with. Renderers produce the cell text; extractors produce the
value a column sorts by when that differs from the stored field.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional, Tuple

from src.table_engine.config import DEFAULT_PAGE_SIZE, SORT_ASCENDING, SORT_DESCENDING
from src.table_engine.models import ColumnSpec, FilterOption, Record, SortState

PLAYER_CATEGORIES = {
    "MEN": "Men",
    "WOMEN": "Women",
    "JUNIOR": "Junior",
    "SENIOR": "Senior",
}

HIERARCHY_LEVELS = {
    "0": "Executive",
    "1": "Senior",
    "2": "General",
}

TOURNAMENT_STATUSES = ("Upcoming", "Ongoing", "Completed", "Cancelled")


@dataclass(frozen=True)
class ListingConfig:
    """Everything a listing screen needs to drive its table."""

    name: str
    title: str
    columns: Tuple[ColumnSpec, ...]
    default_sort: Optional[SortState] = None
    page_size: int = DEFAULT_PAGE_SIZE

    def column(self, field_name: str) -> Optional[ColumnSpec]:
        for column in self.columns:
            if column.field == field_name:
                return column
        return None


# ------------------------------------------------------------------
# Value helpers
# ------------------------------------------------------------------
def calculate_age(date_of_birth: Optional[str], today: Optional[date] = None) -> Optional[int]:
    """Whole years since an ISO ``YYYY-MM-DD`` birth date, None if unknown."""
    if not date_of_birth:
        return None
    try:
        born = date.fromisoformat(str(date_of_birth)[:10])
    except ValueError:
        return None

    today = today or date.today()
    age = today.year - born.year
    if (today.month, today.day) < (born.month, born.day):
        age -= 1
    return age


def format_indian_number(value: Any) -> str:
    """Group digits the Indian way: 3 digits, then pairs (12,34,567)."""
    if value is None or value == "":
        return ""
    number = int(round(float(value)))
    sign = "-" if number < 0 else ""
    digits = str(abs(number))
    if len(digits) <= 3:
        return sign + digits

    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return sign + ",".join(groups + [tail])


def _win_percentage(value: Any, record: Record) -> float:
    stats = value if isinstance(value, dict) else {}
    return float(stats.get("winPercentage") or 0)


def _age(value: Any, record: Record) -> Optional[int]:
    return calculate_age(record.get("dateOfBirth"))


def _render_age(value: Any, record: Record) -> str:
    age = _age(value, record)
    return "Not specified" if age is None else str(age)


def _options(labels: Dict[str, str]) -> Tuple[FilterOption, ...]:
    return tuple(FilterOption(value=v, label=label) for v, label in labels.items())


# ------------------------------------------------------------------
# Listings
# ------------------------------------------------------------------
MEMBERS = ListingConfig(
    name="members",
    title="Members",
    columns=(
        ColumnSpec("name", "Name", sortable=True),
        ColumnSpec("position", "Position"),
        ColumnSpec("email", "Email", sortable=True),
        ColumnSpec("phone", "Phone", sortable=True),
        ColumnSpec(
            "hierarchyLevel", "Hierarchy", sortable=True, filterable=True,
            render=lambda v, r: f"Level {v or 0}",
            options=_options(HIERARCHY_LEVELS),
        ),
        ColumnSpec(
            "isActive", "Status", sortable=True, filterable=True,
            render=lambda v, r: "Active" if v else "Inactive",
            options=_options({"true": "Active", "false": "Inactive"}),
        ),
    ),
    default_sort=SortState("hierarchyLevel", SORT_ASCENDING),
)

PLAYERS = ListingConfig(
    name="players",
    title="Players",
    columns=(
        ColumnSpec("name", "Name", sortable=True),
        ColumnSpec(
            "districtName", "District", filterable=True,
            render=lambda v, r: v or "Not specified",
        ),
        ColumnSpec(
            "age", "Age", sortable=True, searchable=False,
            extract=_age,
            render=_render_age,
        ),
        ColumnSpec(
            "category", "Category", sortable=True, filterable=True,
            render=lambda v, r: PLAYER_CATEGORIES.get(v, v or ""),
            options=_options(PLAYER_CATEGORIES),
        ),
        ColumnSpec(
            "statistics", "Win %", sortable=True, searchable=False,
            extract=_win_percentage,
            render=lambda v, r: f"{_win_percentage(v, r):.1f}%",
        ),
        ColumnSpec(
            "totalAchievements", "Achievements", sortable=True,
            render=lambda v, r: str(v or 0),
        ),
    ),
    default_sort=SortState("name", SORT_ASCENDING),
)

TOURNAMENTS = ListingConfig(
    name="tournaments",
    title="Tournaments",
    columns=(
        ColumnSpec("name", "Tournament", sortable=True),
        ColumnSpec("startDate", "Starts", sortable=True),
        ColumnSpec("venue", "Venue"),
        ColumnSpec("district", "District", filterable=True),
        ColumnSpec(
            "status", "Status", filterable=True,
            options=tuple(FilterOption(s, s) for s in TOURNAMENT_STATUSES),
        ),
        ColumnSpec(
            "entryFee", "Entry fee", sortable=True,
            render=lambda v, r: f"₹{format_indian_number(v)}" if v is not None else "Free",
        ),
    ),
    default_sort=SortState("startDate", SORT_ASCENDING),
)

NEWS = ListingConfig(
    name="news",
    title="News",
    columns=(
        ColumnSpec("title", "Title", sortable=True),
        ColumnSpec("category", "Category", filterable=True),
        ColumnSpec("publishedAt", "Published", sortable=True),
        ColumnSpec(
            "isFeatured", "Featured", filterable=True,
            render=lambda v, r: "Featured" if v else "",
            options=_options({"true": "Featured", "false": "Regular"}),
        ),
    ),
    default_sort=SortState("publishedAt", SORT_DESCENDING),
)

MEDIA = ListingConfig(
    name="media",
    title="Media galleries",
    columns=(
        ColumnSpec("title", "Gallery", sortable=True),
        ColumnSpec("category", "Category", filterable=True),
        ColumnSpec("eventDate", "Event date", sortable=True),
        ColumnSpec("itemCount", "Items", sortable=True),
    ),
    default_sort=SortState("eventDate", SORT_DESCENDING),
    page_size=12,
)

DISTRICTS = ListingConfig(
    name="districts",
    title="Districts",
    columns=(
        ColumnSpec("name", "District", sortable=True),
        ColumnSpec("playerCount", "Players", sortable=True),
        ColumnSpec("activeClubs", "Clubs", sortable=True),
        ColumnSpec(
            "area", "Area", sortable=True,
            render=lambda v, r: f"{format_indian_number(v)} km²",
        ),
        ColumnSpec(
            "population", "Population", sortable=True,
            render=lambda v, r: format_indian_number(v),
        ),
    ),
    default_sort=SortState("name", SORT_ASCENDING),
    page_size=33,
)

LISTINGS: Dict[str, ListingConfig] = {
    listing.name: listing
    for listing in (MEMBERS, PLAYERS, TOURNAMENTS, NEWS, MEDIA, DISTRICTS)
}


def get_listing(name: str) -> ListingConfig:
    """Look up a listing by name.

    Raises:
        KeyError: If no listing has that name.
    """
    try:
        return LISTINGS[name]
    except KeyError:
        raise KeyError(
            f"Unknown listing '{name}'. Must be one of: {sorted(LISTINGS)}"
        ) from None
