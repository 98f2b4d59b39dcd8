"""No-op idempotency store adapter for when webhook de-duplication is disabled."""

from app.application.ports.idempotency_store import IdempotencyStore


class NoOpIdempotencyStore(IdempotencyStore):
    """No-op adapter: every event is treated as new.

    Redelivered payments are still absorbed by the unique session id.
    """

    async def is_processed(self, event_id: str) -> bool:
        """
        Always return False (not processed).

        Args:
            event_id: Stripe event identifier (ignored)

        Returns:
            Always False
        """
        return False

    async def mark_processed(self, event_id: str, ttl_seconds: int) -> None:
        """
        No-op (does nothing).

        Args:
            event_id: Stripe event identifier (ignored)
            ttl_seconds: TTL (ignored)
        """
        pass
