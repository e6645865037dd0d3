"""
Parcel store backends.

Each store exposes ``fetch_parcels(user_id) -> list[dict]`` returning raw rows
newest first, and raises ``DatastoreError`` on failure.
"""

from config import Settings
from errors import ConfigurationError

from .dynamodb_store import DynamoDBParcelStore
from .supabase_store import SupabaseParcelStore

__all__ = ["DynamoDBParcelStore", "SupabaseParcelStore", "get_parcel_store"]


def get_parcel_store(settings: Settings):
    """Build the parcel store selected by ``DATASTORE_BACKEND``."""
    backend = settings.datastore_backend
    if backend == "supabase":
        return SupabaseParcelStore(
            url=settings.supabase_url,
            service_key=settings.supabase_service_role_key,
            table=settings.parcels_table,
            owner_column=settings.parcels_owner_column,
        )
    if backend == "dynamodb":
        return DynamoDBParcelStore(
            table_name=settings.parcels_table,
            owner_column=settings.parcels_owner_column,
            index_name=settings.parcels_index,
            region_name=settings.aws_region,
        )
    raise ConfigurationError(f"Unsupported DATASTORE_BACKEND: {backend}")
