"""Idempotency store port for redelivered webhook events."""

from abc import ABC, abstractmethod


class IdempotencyStore(ABC):
    """Port interface for remembering processed webhook events."""

    @abstractmethod
    async def is_processed(self, event_id: str) -> bool:
        """
        Check if a webhook event has already been processed.

        Args:
            event_id: Payment provider event identifier

        Returns:
            True if the event has been processed, False otherwise
        """
        pass

    @abstractmethod
    async def mark_processed(self, event_id: str, ttl_seconds: int) -> None:
        """
        Remember a webhook event as processed for a limited time.

        Args:
            event_id: Payment provider event identifier
            ttl_seconds: Time-to-live in seconds
        """
        pass

    async def close(self) -> None:
        """Release connections held by the store (no-op by default)."""
        pass
