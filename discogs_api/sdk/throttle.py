"""Pre-call cooldown driven by the last seen Discogs rate-limit headers."""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from typing import Awaitable, Callable

from discogs_api.sdk.models import RateLimitSnapshot

logger = logging.getLogger(__name__)


class RateLimitThrottle:
    """Thread-safe holder of the rate-limit snapshot plus the cooldown check.

    Responses write the snapshot through :meth:`update`; endpoint calls run
    :meth:`check` / :meth:`acheck` before going out. When the remaining quota
    is at or below *threshold* the caller sleeps *cooldown* seconds, then
    *grace* seconds more. *sleep* and *async_sleep* default to
    ``time.sleep`` and ``asyncio.sleep``.
    """

    def __init__(
        self,
        threshold: int = 2,
        cooldown: float = 60.0,
        grace: float = 1.0,
        *,
        sleep: Callable[[float], None] | None = None,
        async_sleep: Callable[[float], Awaitable[None]] | None = None,
    ) -> None:
        self.threshold = threshold
        self.cooldown = cooldown
        self.grace = grace
        self.sleep = sleep
        self.async_sleep = async_sleep
        self._snapshot = RateLimitSnapshot.initial()
        self._lock = threading.Lock()

    @property
    def snapshot(self) -> RateLimitSnapshot:
        with self._lock:
            return self._snapshot

    def update(self, snapshot: RateLimitSnapshot) -> None:
        with self._lock:
            self._snapshot = snapshot

    def reset(self) -> None:
        """Go back to the pre-first-request placeholder."""
        self.update(RateLimitSnapshot.initial())

    def _must_wait(self) -> bool:
        snapshot = self.snapshot
        logger.info(
            "%s Discogs requests remaining",
            snapshot.remaining,
            extra={"rate_remaining": snapshot.remaining},
        )
        if not snapshot.is_exhausted(self.threshold):
            return False
        logger.warning(
            "Discogs rate limit nearly used up (%s remaining, threshold %s); "
            "waiting %.0fs before the next request",
            snapshot.remaining,
            self.threshold,
            self.cooldown,
            extra={"rate_remaining": snapshot.remaining, "wait_seconds": self.cooldown},
        )
        return True

    def _after_wait(self) -> None:
        # Not refreshed after the wait: re-reading the counter costs an API call,
        # so the value logged here is still the pre-wait one.
        logger.info(
            "Cooldown over, continuing (%s remaining as of the last response)",
            self.snapshot.remaining,
            extra={"rate_remaining": self.snapshot.remaining},
        )

    def check(self) -> float:
        """Block while the quota is low. Returns the number of seconds slept."""
        if not self._must_wait():
            return 0.0
        sleep = self.sleep or time.sleep
        sleep(self.cooldown)
        sleep(self.grace)
        self._after_wait()
        return self.cooldown + self.grace

    async def acheck(self) -> float:
        """Async counterpart of :meth:`check`."""
        if not self._must_wait():
            return 0.0
        sleep = self.async_sleep or asyncio.sleep
        await sleep(self.cooldown)
        await sleep(self.grace)
        self._after_wait()
        return self.cooldown + self.grace
