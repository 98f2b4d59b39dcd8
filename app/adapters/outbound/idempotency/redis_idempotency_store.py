"""Redis idempotency store adapter for webhook events."""

from typing import Optional

from redis import asyncio as aioredis

from app.application.ports.idempotency_store import IdempotencyStore


class RedisIdempotencyStore(IdempotencyStore):
    """Redis adapter remembering processed Stripe event ids."""

    KEY_PREFIX = "stripe:event:"

    def __init__(self, redis_url: str) -> None:
        """
        Initialize Redis idempotency store.

        Args:
            redis_url: Redis connection URL
        """
        self._redis_url = redis_url
        self._client: Optional[aioredis.Redis] = None

    async def _get_client(self) -> aioredis.Redis:
        """
        Get or create Redis client.

        Returns:
            Redis client instance
        """
        if self._client is None:
            self._client = await aioredis.from_url(
                self._redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._client

    def _make_key(self, event_id: str) -> str:
        return f"{self.KEY_PREFIX}{event_id}"

    async def is_processed(self, event_id: str) -> bool:
        """
        Check if an event has been processed.

        Args:
            event_id: Stripe event identifier

        Returns:
            True if the event has been processed, False otherwise
        """
        client = await self._get_client()
        exists = await client.exists(self._make_key(event_id))
        return exists > 0

    async def mark_processed(self, event_id: str, ttl_seconds: int) -> None:
        """
        Mark an event as processed with a TTL.

        Args:
            event_id: Stripe event identifier
            ttl_seconds: Time-to-live in seconds
        """
        client = await self._get_client()
        await client.setex(self._make_key(event_id), ttl_seconds, "1")

    async def close(self) -> None:
        """Close Redis connection."""
        if self._client:
            await self._client.close()
            self._client = None
