"""
DynamoDB Parcel Store
---------------------
Alternative parcel backend for deployments that keep parcels in DynamoDB.

Table schema:
    - Partition key: owner column (default ``user_id``)
    - Sort key: ``created_at`` (ISO-8601 string)

When parcels are keyed by ``parcel_id`` instead, set ``PARCELS_INDEX`` to a
GSI with the same key layout.
"""

from typing import Any, Dict, List, Optional

import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import BotoCoreError, ClientError

from errors import DatastoreError
from utils.logger import logger


class DynamoDBParcelStore:
    """DynamoDB-backed parcel lookup."""

    def __init__(
        self,
        table_name: str = "parcels",
        owner_column: str = "user_id",
        index_name: Optional[str] = None,
        region_name: Optional[str] = None,
    ):
        self.table_name = table_name
        self.owner_column = owner_column
        self.index_name = index_name
        self.region_name = region_name
        self._table = None

    def _get_table(self):
        """Lazily create the DynamoDB table resource."""
        if self._table is None:
            logger.info(f"Initializing DynamoDB table {self.table_name} in region: {self.region_name}")
            dynamodb = boto3.resource("dynamodb", region_name=self.region_name)
            self._table = dynamodb.Table(self.table_name)
        return self._table

    def fetch_parcels(self, user_id: str) -> List[Dict[str, Any]]:
        """Return the user's parcel items, newest first."""
        query_kwargs = {
            "KeyConditionExpression": Key(self.owner_column).eq(user_id),
            "ScanIndexForward": False,
        }
        if self.index_name:
            query_kwargs["IndexName"] = self.index_name

        items: List[Dict[str, Any]] = []
        try:
            table = self._get_table()
            while True:
                response = table.query(**query_kwargs)
                items.extend(response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                query_kwargs["ExclusiveStartKey"] = last_key
        except (ClientError, BotoCoreError) as e:
            raise DatastoreError(f"DynamoDB query failed: {e}") from e

        logger.info(f"Fetched {len(items)} parcels from DynamoDB table {self.table_name}")
        return items
