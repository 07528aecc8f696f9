# payprocess/state/redis.py
"""Redis-based state store implementation."""

from typing import Optional
import json
import time
import logging

import redis.asyncio as aioredis

from ..core import SavedState
from ..exceptions import InvalidSavedStateError

logger = logging.getLogger(__name__)


class RedisStateStore:
    """Redis-based store of saved payment states.

    Lets a payment interrupted on one worker be resumed on another.
    Requires the redis extra: pip install payprocess[redis]
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        key_prefix: str = "payprocess:saved:",
        ttl: int = 3600
    ):
        """Initialize the Redis state store.

        Args:
            redis_url: Redis connection URL
            key_prefix: Prefix for all keys stored in Redis
            ttl: Time-to-live for stored data in seconds (default: 1 hour)
        """
        self.redis_url = redis_url
        self.key_prefix = key_prefix
        self.ttl = ttl
        self._client: Optional[aioredis.Redis] = None
        logger.debug(f"RedisStateStore initialized with URL: {redis_url}")

    async def _get_client(self) -> aioredis.Redis:
        """Get or create Redis client connection.

        Returns:
            Redis client instance
        """
        if self._client is None:
            self._client = await aioredis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True
            )
            logger.debug("Redis client connected")
        return self._client

    def _make_key(self, payment_id: str) -> str:
        """Generate Redis key with prefix.

        Args:
            payment_id: Payment identifier

        Returns:
            Full Redis key
        """
        return f"{self.key_prefix}{payment_id}"

    async def set(self, key: str, saved_state: SavedState) -> None:
        """Store a saved state in Redis.

        Args:
            key: Unique payment identifier
            saved_state: Snapshot taken with UnifiedPaymentProcess.get_saved_state()

        Raises:
            Exception: If Redis operation fails
        """
        client = await self._get_client()
        data = {
            'state': saved_state.to_record(),
            'ts': time.time()
        }
        await client.setex(self._make_key(key), self.ttl, json.dumps(data))
        logger.debug(f"Stored saved state for payment {key} in Redis (TTL: {self.ttl}s)")

    async def get(self, key: str) -> Optional[SavedState]:
        """Retrieve a saved state from Redis.

        Args:
            key: Unique payment identifier

        Returns:
            The decoded SavedState if found, None otherwise

        Raises:
            InvalidSavedStateError: If the stored data can not be decoded
            Exception: If Redis operation fails
        """
        client = await self._get_client()
        data_str = await client.get(self._make_key(key))
        if data_str is None:
            logger.debug(f"No saved state found for payment {key} in Redis")
            return None

        try:
            data = json.loads(data_str)
        except json.JSONDecodeError as e:
            raise InvalidSavedStateError(f"corrupted saved state for payment {key}") from e
        if not isinstance(data, dict) or 'state' not in data:
            raise InvalidSavedStateError(f"corrupted saved state for payment {key}")

        logger.debug(f"Retrieved saved state for payment {key} from Redis")
        return SavedState.from_record(data['state'])

    async def delete(self, key: str) -> None:
        """Delete a saved state from Redis.

        Args:
            key: Unique payment identifier

        Raises:
            Exception: If Redis operation fails
        """
        client = await self._get_client()
        deleted = await client.delete(self._make_key(key))
        if deleted:
            logger.debug(f"Deleted saved state for payment {key} from Redis")
        else:
            logger.debug(f"No saved state to delete for payment {key} in Redis")

    async def close(self) -> None:
        """Close the Redis connection."""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.debug("Redis client closed")
