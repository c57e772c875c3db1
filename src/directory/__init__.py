from src.directory.columns import LISTINGS, ListingConfig, get_listing
from src.directory.record_repository import RecordRepository, RecordSourceError
from src.directory.response_cache import ResponseCache

__all__ = [
    "LISTINGS",
    "ListingConfig",
    "RecordRepository",
    "RecordSourceError",
    "ResponseCache",
    "get_listing",
]
