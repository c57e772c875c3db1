"""Record repository - load and save listing snapshots as JSON files.

Each listing lives in ``<data_dir>/<listing>.json`` in either shape the
backend list endpoints return:

- a bare list of records
- the paginated envelope ``{"data": [...], "pagination": {...}}``
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from src.directory.config import LISTINGS_DIR
from src.directory.response_cache import ResponseCache
from src.table_engine.models import Record, value_to_text

logger = logging.getLogger(__name__)


class RecordSourceError(Exception):
    """Raised when a listing snapshot cannot be read as records."""


class RecordRepository:
    """Reads listing records through a response cache."""

    def __init__(
        self,
        data_dir: Optional[Path] = None,
        cache: Optional[ResponseCache] = None,
    ):
        self.data_dir = Path(data_dir) if data_dir is not None else LISTINGS_DIR
        self.cache = cache if cache is not None else ResponseCache()

    def _listing_path(self, listing: str) -> Path:
        return self.data_dir / f"{listing}.json"

    def load_records(
        self,
        listing: str,
        params: Optional[Dict[str, Any]] = None,
        use_cache: bool = True,
        ttl: Optional[float] = None,
    ) -> List[Dict[str, Any]]:
        """Load the records of *listing*, narrowed by exact-match *params*.

        Args:
            listing: Listing name, e.g. ``"players"``.
            params: Field -> value constraints applied like the backend's
                list endpoint query parameters.
            use_cache: Serve from / store into the response cache.
            ttl: Cache lifetime for this entry in seconds.

        Returns:
            Fresh copies of the matching records, in stored order.

        Raises:
            FileNotFoundError: If no snapshot exists for the listing.
            RecordSourceError: If the snapshot is not valid listing JSON.
        """
        key = ResponseCache.make_key(listing, params)

        if use_cache:
            cached = self.cache.get(key)
            if cached is not None:
                return copy.deepcopy(cached)

        records = self._read_snapshot(listing)

        if params:
            wanted = {name: value_to_text(value) for name, value in params.items()}
            records = [
                record for record in records
                if all(value_to_text(record.get(name)) == text for name, text in wanted.items())
            ]

        if use_cache:
            self.cache.set(key, records, ttl=ttl)

        return copy.deepcopy(records)

    def save_records(self, listing: str, records: Sequence[Record]) -> Path:
        """Write *records* as the listing's snapshot and invalidate its cache.

        Returns:
            Path to the written file.
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)
        filepath = self._listing_path(listing)

        payload = {
            "data": [dict(record) for record in records],
            "pagination": {
                "page": 1,
                "size": len(records),
                "total": len(records),
                "totalPages": 1 if records else 0,
            },
        }
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)

        self.cache.invalidate(f"{listing}?")
        logger.info("Saved %d %s records to %s", len(records), listing, filepath)
        return filepath

    def _read_snapshot(self, listing: str) -> List[Dict[str, Any]]:
        filepath = self._listing_path(listing)
        if not filepath.exists():
            raise FileNotFoundError(
                f"No snapshot found for listing '{listing}': {filepath}"
            )

        try:
            with open(filepath, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except json.JSONDecodeError as e:
            raise RecordSourceError(f"Corrupt snapshot {filepath}: {e}") from e

        records = payload.get("data") if isinstance(payload, dict) else payload
        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            raise RecordSourceError(
                f"Malformed snapshot {filepath}: expected a list of records "
                "or an object with a 'data' list"
            )

        self._warn_if_not_uniform(listing, records)
        logger.info("Loaded %d %s records from %s", len(records), listing, filepath.name)
        return records

    @staticmethod
    def _warn_if_not_uniform(listing: str, records: List[Dict[str, Any]]):
        if not records:
            return
        expected = set(records[0])
        odd = sum(1 for record in records if set(record) != expected)
        if odd:
            logger.warning(
                "%d of %d %s records do not share the first record's fields",
                odd, len(records), listing,
            )
