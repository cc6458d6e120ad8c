"""DynamoDB-backed cache for the upstream alerts feed."""
import json
import logging
import time
from typing import Any, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300


class AlertCache:
    """Short-lived cache of raw alert lists, one item per cache key.

    Items carry the feed as JSON text in ``payload`` and an ``expires_at``
    epoch second that doubles as the table's TTL attribute. DynamoDB TTL
    deletion is lazy, so freshness is always checked on read.
    """

    def __init__(
        self,
        table_name: str,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        region_name: Optional[str] = None
    ):
        """
        Initialize DynamoDB table reference.

        Args:
            table_name: Name of the DynamoDB table
            ttl_seconds: How long a stored feed stays fresh
            region_name: AWS region, defaults to the environment's
        """
        self.table_name = table_name
        self.ttl_seconds = ttl_seconds
        self.dynamodb = boto3.resource('dynamodb', region_name=region_name)
        self.table = self.dynamodb.Table(table_name)
        logger.info(f"Initialized AlertCache for table: {table_name}")

    def get(self, cache_key: str, now: Optional[float] = None) -> Optional[List[Any]]:
        """
        Return the cached alerts for a key if they are still fresh.

        Args:
            cache_key: Cache key, usually the upstream URL
            now: Current epoch seconds (default: time.time())

        Returns:
            List of alert objects, or None on a miss, expiry or read error
        """
        now = time.time() if now is None else now

        try:
            response = self.table.get_item(Key={'cache_key': cache_key})
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error reading cache item '{cache_key}': {e}")
            return None

        item = response.get('Item')
        if not item:
            logger.info(f"Cache miss for '{cache_key}'")
            return None

        if int(item.get('expires_at', 0)) <= now:
            logger.info(f"Cached alerts for '{cache_key}' have expired")
            return None

        try:
            alerts = json.loads(item['payload'])
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Discarding unreadable cache item '{cache_key}': {e}")
            return None

        logger.info(f"Cache hit for '{cache_key}' ({len(alerts)} alerts)")
        return alerts

    def put(self, cache_key: str, alerts: List[Any], now: Optional[float] = None) -> bool:
        """
        Store alerts under a key.

        Args:
            cache_key: Cache key, usually the upstream URL
            alerts: Alert objects as returned by the API
            now: Current epoch seconds (default: time.time())

        Returns:
            True if the item was written, False otherwise
        """
        now = int(time.time() if now is None else now)
        item = {
            'cache_key': cache_key,
            'payload': json.dumps(alerts),
            'fetched_at': now,
            'expires_at': now + self.ttl_seconds
        }

        try:
            self.table.put_item(Item=item)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error writing cache item '{cache_key}': {e}")
            return False

        logger.info(
            f"Cached {len(alerts)} alerts for '{cache_key}' "
            f"for {self.ttl_seconds} seconds"
        )
        return True
