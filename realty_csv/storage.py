"""
Bulk-create seam for parsed property records.
The store itself (database, REST API) lives outside this package.
"""

import logging
from typing import Any, Dict, List, Protocol, Sequence

from realty_csv.config import BULK_CHUNK_SIZE

logger = logging.getLogger(__name__)


class BulkCreateStore(Protocol):
    def create_bulk(self, records: List[Dict[str, Any]]) -> int:
        """Insert records in one call and return how many were created."""


def import_properties(store: BulkCreateStore, records: Sequence[Dict[str, Any]],
                      chunk_size: int = BULK_CHUNK_SIZE) -> int:
    """
    Send records to the store in chunks and return the total created.
    Store errors propagate; nothing here retries.
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    total_saved = 0
    for start in range(0, len(records), chunk_size):
        chunk = list(records[start:start + chunk_size])
        total_saved += store.create_bulk(chunk)
        logger.info(f"Saved {total_saved}/{len(records)} properties")

    return total_saved
