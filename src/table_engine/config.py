# Sort directions accepted by SortState
SORT_ASCENDING = "ascending"
SORT_DESCENDING = "descending"
SORT_DIRECTIONS = (SORT_ASCENDING, SORT_DESCENDING)

# Rows per page unless a listing overrides it
DEFAULT_PAGE_SIZE = 10

# Page buttons shown in the strip between "previous" and "next"
MAX_VISIBLE_PAGES = 7

# Marker placed in the page strip where pages are skipped
ELLIPSIS = "..."
