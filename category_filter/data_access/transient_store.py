"""
Repository for the Transients table.

The Transient Store is a generic key-value store with per-entry expiry.
DynamoDB deletes expired items lazily, so every read checks ``expiresAt``
itself and treats an expired item as absent.
"""
import time
import logging
from typing import Optional

from .dynamodb_client import DynamoDBClient

logger = logging.getLogger(__name__)


class TransientStore:
    """
    Repository for expiring string values and version counters in DynamoDB.

    Item layout:
        transientKey: partition key
        value: stored string (never mutated, only replaced)
        createdAt: epoch seconds when stored
        expiresAt: epoch seconds, also the table TTL attribute
        version: counter value (counter items only, no expiry)
    """

    def __init__(self, table_name: str, dynamodb_client: Optional[DynamoDBClient] = None):
        """
        Initialize Transient Store.

        Args:
            table_name: Name of the Transients table
            dynamodb_client: Optional DynamoDB client instance
        """
        self.table_name = table_name
        self.client = dynamodb_client or DynamoDBClient()

    def get(self, key: str) -> Optional[str]:
        """
        Get a stored value.

        Args:
            key: Transient key

        Returns:
            Stored value, or None if absent or expired
        """
        item = self.client.get_item(
            table_name=self.table_name,
            key={'transientKey': key}
        )

        if not item or 'value' not in item:
            return None

        expires_at = int(item.get('expiresAt', 0))
        if int(time.time()) >= expires_at:
            logger.debug(f"Transient {key} expired at {expires_at}")
            return None

        return item['value']

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """
        Store a value, replacing any previous one.

        Args:
            key: Transient key
            value: Value to store
            ttl_seconds: Lifetime of the entry in seconds
        """
        current_time = int(time.time())

        self.client.put_item(
            table_name=self.table_name,
            item={
                'transientKey': key,
                'value': value,
                'createdAt': current_time,
                'expiresAt': current_time + ttl_seconds,
            }
        )

    def get_counter(self, key: str) -> int:
        """
        Read a version counter.

        Args:
            key: Counter key

        Returns:
            Current counter value, 0 if never incremented
        """
        item = self.client.get_item(
            table_name=self.table_name,
            key={'transientKey': key}
        )
        if not item:
            return 0
        return int(item.get('version', 0))

    def increment_counter(self, key: str) -> int:
        """
        Atomically increment a version counter.

        Args:
            key: Counter key

        Returns:
            Counter value after increment
        """
        return self.client.atomic_increment(
            table_name=self.table_name,
            key={'transientKey': key},
            attribute_name='version',
            increment_value=1
        )
