"""
Supabase Parcel Store
---------------------
Reads parcel rows through the Supabase PostgREST API:

    GET {SUPABASE_URL}/rest/v1/{table}?select=*&{owner}=eq.{user_id}&order=created_at.desc

Authenticated with the service-role key in both the ``apikey`` and
``Authorization`` headers.
"""

import json
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Dict, List, Optional

from errors import DatastoreError
from utils.logger import logger


class SupabaseParcelStore:
    """PostgREST-backed parcel lookup."""

    def __init__(
        self,
        url: str,
        service_key: str,
        table: str = "parcels",
        owner_column: str = "user_id",
        timeout: Optional[float] = None,
    ):
        self.url = (url or "").rstrip("/")
        self.service_key = service_key or ""
        self.table = table
        self.owner_column = owner_column
        self.timeout = timeout

    def _build_url(self, user_id: str) -> str:
        query = urllib.parse.urlencode({
            "select": "*",
            self.owner_column: f"eq.{user_id}",
            "order": "created_at.desc",
        })
        return f"{self.url}/rest/v1/{urllib.parse.quote(self.table)}?{query}"

    def fetch_parcels(self, user_id: str) -> List[Dict[str, Any]]:
        """Return the user's parcel rows, newest first."""
        if not self.url:
            raise DatastoreError("SUPABASE_URL is not configured")

        req = urllib.request.Request(
            self._build_url(user_id),
            headers={
                "apikey": self.service_key,
                "Authorization": f"Bearer {self.service_key}",
                "Accept": "application/json",
            },
            method="GET",
        )

        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                data = json.loads(response.read().decode())
        except urllib.error.HTTPError as e:
            detail = e.read().decode(errors="replace")
            raise DatastoreError(f"Supabase query failed: {e.code} - {detail}") from e
        except urllib.error.URLError as e:
            raise DatastoreError(f"Supabase network error: {e.reason}") from e
        except json.JSONDecodeError as e:
            raise DatastoreError(f"Supabase returned invalid JSON: {e}") from e

        if not isinstance(data, list):
            raise DatastoreError(f"Unexpected Supabase response: {type(data).__name__}")

        logger.info(f"Fetched {len(data)} parcels from Supabase table {self.table}")
        return data
