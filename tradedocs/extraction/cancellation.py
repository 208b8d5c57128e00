import threading
import time

from tradedocs.extraction.exceptions import ExtractionCancelledError


class CancellationToken:
    """Cooperative cancellation signal shared by a run and its model calls.

    A token is cancelled either explicitly through ``cancel()`` or implicitly
    once its deadline (seconds from construction) has passed. Adapters poll it
    while waiting on the provider so an abandoned run stops its in-flight call.
    """

    def __init__(self, deadline_seconds: float | None = None) -> None:
        self._event = threading.Event()
        self._deadline = (
            time.monotonic() + deadline_seconds if deadline_seconds is not None else None
        )

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def remaining_seconds(self) -> float | None:
        """Seconds left before the deadline, or None when no deadline is set."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise ExtractionCancelledError("Extraction was cancelled")
        if self.cancelled:
            raise ExtractionCancelledError("Extraction deadline exceeded")

    def narrow_timeout(self, timeout_seconds: float | None) -> float | None:
        """Return the shorter of ``timeout_seconds`` and the time left before the deadline.

        None means no limit, so a set deadline always wins over an unset timeout.
        """
        remaining = self.remaining_seconds()
        if remaining is None:
            return timeout_seconds
        if timeout_seconds is None:
            return remaining
        return min(timeout_seconds, remaining)
