"""Per-pass cancellation and deadline tracking."""

from __future__ import annotations

import threading
import time

from .errors import ReconcileCancelled


class Cancellation:
    """Cancellation signal handed to a single reconciliation pass.

    A pass is cancelled when its deadline passes or when the caller sets the
    shared event (e.g. on operator shutdown).
    """

    def __init__(
        self,
        timeout: float | None = None,
        event: threading.Event | None = None,
    ) -> None:
        self._deadline = time.monotonic() + timeout if timeout is not None else None
        self._event = event or threading.Event()

    def cancel(self) -> None:
        """Cancel the pass."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None when there is no deadline."""
        if self._deadline is None:
            return None
        return max(self._deadline - time.monotonic(), 0.0)

    def check(self, operation: str) -> None:
        """Raise ReconcileCancelled if the pass must not start another call."""
        if self.cancelled:
            raise ReconcileCancelled(f"Reconciliation cancelled before {operation}")
