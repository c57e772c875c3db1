from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
LISTINGS_DIR = DATA_DIR / "listings"

# Response cache lifetimes, in seconds
CACHE_DURATIONS = {
    "short": 5 * 60,
    "medium": 15 * 60,
    "long": 60 * 60,
}

CACHE_MAX_ENTRIES = 128
