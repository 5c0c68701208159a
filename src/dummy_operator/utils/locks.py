"""Mutual exclusion of reconciliation passes per Dummy identity."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Hashable, Iterator

from .errors import ReconcileCancelled


class IdentityLocks:
    """One lock per identity, shared by every entry point that runs a pass.

    kopf serializes handlers per watched object, but the Dummy handler and the
    owned-Deployment watcher watch different objects. Both take the lock of
    the Dummy's identity so that at most one pass per Dummy is in flight.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[Hashable, threading.Lock] = {}

    def _lock_for(self, key: Hashable) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, key: Hashable, timeout: float | None = None) -> Iterator[None]:
        """Hold the lock of ``key``, waiting at most ``timeout`` seconds for it."""
        lock = self._lock_for(key)
        if not lock.acquire(timeout=-1 if timeout is None else timeout):
            raise ReconcileCancelled(f"Timed out waiting for the running pass of {key}")
        try:
            yield
        finally:
            lock.release()
