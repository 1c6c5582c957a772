"""Tests for the rate-limit cooldown check."""

from __future__ import annotations

import logging
import threading
from unittest.mock import AsyncMock, MagicMock

from discogs_api.sdk import RateLimitSnapshot
from discogs_api.sdk.throttle import RateLimitThrottle


def _throttle(remaining: int | None) -> tuple[RateLimitThrottle, MagicMock]:
    sleep = MagicMock()
    throttle = RateLimitThrottle(sleep=sleep)
    throttle.update(RateLimitSnapshot(limit=60, remaining=remaining, used=0))
    return throttle, sleep


class TestCheck:
    def test_defaults(self):
        throttle = RateLimitThrottle()
        assert (throttle.threshold, throttle.cooldown, throttle.grace) == (2, 60.0, 1.0)
        assert throttle.snapshot == RateLimitSnapshot.initial()

    def test_waits_at_threshold(self):
        throttle, sleep = _throttle(2)
        assert throttle.check() == 61.0
        assert [c.args for c in sleep.call_args_list] == [(60.0,), (1.0,)]

    def test_waits_below_threshold(self):
        throttle, sleep = _throttle(0)
        throttle.check()
        assert sleep.call_count == 2

    def test_no_wait_above_threshold(self):
        throttle, sleep = _throttle(3)
        assert throttle.check() == 0.0
        sleep.assert_not_called()

    def test_unknown_remaining_never_waits(self):
        throttle, sleep = _throttle(None)
        assert throttle.check() == 0.0
        sleep.assert_not_called()

    def test_snapshot_not_refreshed_after_wait(self, caplog):
        throttle, _ = _throttle(1)
        with caplog.at_level(logging.INFO, logger="discogs_api.sdk.throttle"):
            throttle.check()
        assert throttle.snapshot.remaining == 1
        assert "1 remaining as of the last response" in caplog.text

    def test_warning_logged(self, caplog):
        throttle, _ = _throttle(2)
        with caplog.at_level(logging.WARNING, logger="discogs_api.sdk.throttle"):
            throttle.check()
        assert "nearly used up" in caplog.text
        assert "threshold 2" in caplog.text

    def test_reset(self):
        throttle, _ = _throttle(0)
        throttle.reset()
        assert throttle.snapshot == RateLimitSnapshot.initial()


class TestAsyncCheck:
    async def test_waits(self):
        sleep = AsyncMock()
        throttle = RateLimitThrottle(cooldown=0.5, grace=0.25, async_sleep=sleep)
        throttle.update(RateLimitSnapshot(limit=60, remaining=2, used=58))
        assert await throttle.acheck() == 0.75
        assert [c.args for c in sleep.await_args_list] == [(0.5,), (0.25,)]

    async def test_no_wait(self):
        sleep = AsyncMock()
        throttle = RateLimitThrottle(async_sleep=sleep)
        assert await throttle.acheck() == 0.0
        sleep.assert_not_awaited()

    async def test_real_sleep_default(self):
        throttle = RateLimitThrottle(cooldown=0.01, grace=0.0)
        throttle.update(RateLimitSnapshot(limit=60, remaining=0, used=60))
        assert await throttle.acheck() == 0.01


class TestConcurrentUpdates:
    def test_last_writer_wins(self):
        throttle = RateLimitThrottle()
        snapshots = [RateLimitSnapshot(60, n, 60 - n) for n in range(50)]
        threads = [threading.Thread(target=throttle.update, args=(s,)) for s in snapshots]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert throttle.snapshot in snapshots
