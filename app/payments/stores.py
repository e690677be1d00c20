"""
Cache-backed record of completed checkout sessions.

The webhook handler writes one record per checkout session the provider
confirms as paid. Records live in the Django cache (Redis in production)
for CHECKOUT_RECORD_TTL_SECONDS; there is no durable transaction storage.

Record format:
    key:   "checkout:completed:{session_id}"
    value: {"session_id", "payment_intent_id", "event_id", "recorded_at"}
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.utils import timezone

if TYPE_CHECKING:
    from typing import Any

    from core.protocols import CacheBackend

logger = logging.getLogger(__name__)

KEY_PREFIX = "checkout:completed"


class CacheCheckoutSessionStore:
    """
    CheckoutSessionStore on top of a Django cache backend.

    Uses cache.add (insert-if-absent), so a repeated delivery of the same
    session never replaces the first record. Redis SET NX keeps that
    guarantee across worker processes.
    """

    def __init__(self, backend: CacheBackend, ttl_seconds: int):
        self.backend = backend
        self.ttl_seconds = ttl_seconds

    @staticmethod
    def make_key(session_id: str) -> str:
        return f"{KEY_PREFIX}:{session_id}"

    def record_completed_session(
        self,
        session_id: str,
        payment_intent_id: str | None,
        event_id: str,
    ) -> bool:
        record = {
            "session_id": session_id,
            "payment_intent_id": payment_intent_id,
            "event_id": event_id,
            "recorded_at": timezone.now().isoformat(),
        }
        added = self.backend.add(self.make_key(session_id), record, timeout=self.ttl_seconds)
        if added:
            logger.debug(
                "Recorded completed checkout session",
                extra={"session_id": session_id, "event_id": event_id},
            )
        return bool(added)

    def get_completed_session(self, session_id: str) -> dict[str, Any] | None:
        return self.backend.get(self.make_key(session_id))
