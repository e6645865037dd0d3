"""
Parcel context for the assistant prompt.

Raw parcel rows are loosely shaped, so each one is projected onto a fixed set
of fields with a placeholder for anything missing. The prompt never sees
``None``.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Mapping

from errors import DatastoreError
from utils.logger import logger


@dataclass
class ParcelContext:
    """One parcel as presented to the model."""
    parcel_id: str = "N/A"
    from_county: str = "Unknown"
    to_county: str = "Unknown"
    status: str = "Unknown"
    courier_service: str = "Unknown"
    created_at: str = "Unknown"
    description: str = "No description"
    recipient_name: str = "Unknown"

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ParcelContext":
        defaults = cls()
        values = {}
        for name, default in asdict(defaults).items():
            value = row.get(name)
            # falsy values (None, "", 0) fall back like missing keys
            values[name] = value if value else default
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def normalize_parcels(rows: Iterable[Mapping[str, Any]]) -> List[ParcelContext]:
    """Project raw rows onto ParcelContext, skipping anything that is not a mapping."""
    parcels = []
    for row in rows or []:
        if not isinstance(row, Mapping):
            logger.warning(f"Skipping malformed parcel row: {row!r}")
            continue
        parcels.append(ParcelContext.from_row(row))
    return parcels


def fetch_parcel_context(store, user_id: str) -> List[ParcelContext]:
    """
    Fetch and normalize the user's parcels.

    A failing store is logged and yields an empty context; the assistant can
    still answer without parcel data.

    Args:
        store: Object with ``fetch_parcels(user_id)``
        user_id: Owner identifier from the request

    Returns:
        List of ParcelContext, newest first
    """
    try:
        rows = store.fetch_parcels(user_id)
    except DatastoreError as e:
        logger.error(f"Error fetching parcels: {e}")
        return []
    except Exception as e:
        logger.exception(f"Error fetching parcels: {e}")
        return []

    parcels = normalize_parcels(rows)
    logger.info(f"Loaded {len(parcels)} parcels for user {user_id}")
    return parcels
