from .parcels import ParcelContext, fetch_parcel_context, normalize_parcels
from .prompt import build_prompt

__all__ = ["ParcelContext", "build_prompt", "fetch_parcel_context", "normalize_parcels"]
