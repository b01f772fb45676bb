"""Rate limiting for polite crawling."""

import asyncio
from time import monotonic


class RateLimiter:
    """Enforce a minimum delay between consecutive requests.

    Requests are issued one at a time, so only the spacing between their
    start times is tracked.
    """

    _MAX_DELAY = 30.0  # Upper bound for adaptive back-off

    def __init__(self, delay_seconds: float = 1.0):
        self.delay_seconds = delay_seconds
        self._original_delay = delay_seconds
        self._last_request_time: float | None = None
        self.backoff_count: int = 0

    async def wait(self) -> None:
        """Sleep until at least ``delay_seconds`` have passed since the last call."""
        if self._last_request_time is not None:
            wait_time = self.delay_seconds - (monotonic() - self._last_request_time)
            if wait_time > 0:
                await asyncio.sleep(wait_time)
        self._last_request_time = monotonic()

    def back_off(self) -> None:
        """Double the delay between requests (capped at _MAX_DELAY).

        Called when the site answers 429 so later pages slow down.
        """
        self.delay_seconds = min(max(self.delay_seconds, 0.5) * 2, self._MAX_DELAY)
        self.backoff_count += 1

    def ease_off(self) -> None:
        """Halve the delay back toward the configured value."""
        self.delay_seconds = max(self.delay_seconds / 2, self._original_delay)
