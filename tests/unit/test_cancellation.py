"""Unit tests for pass cancellation."""

from __future__ import annotations

import threading

import pytest

from dummy_operator.utils.cancellation import Cancellation
from dummy_operator.utils.errors import ReconcileCancelled


class TestCancellation:
    """Test cases for Cancellation."""

    def test_no_deadline(self):
        cancellation = Cancellation()

        assert cancellation.remaining() is None
        assert not cancellation.cancelled
        cancellation.check("get_dummy")

    def test_remaining_is_bounded_by_timeout(self):
        cancellation = Cancellation(timeout=10.0)

        remaining = cancellation.remaining()
        assert remaining is not None
        assert 0 < remaining <= 10.0

    def test_expired_deadline(self):
        cancellation = Cancellation(timeout=0.0)

        assert cancellation.cancelled
        assert cancellation.remaining() == 0.0
        with pytest.raises(ReconcileCancelled, match="get_deployment"):
            cancellation.check("get_deployment")

    def test_cancel(self):
        cancellation = Cancellation(timeout=60.0)

        cancellation.cancel()

        assert cancellation.cancelled
        with pytest.raises(ReconcileCancelled):
            cancellation.check("create_deployment")

    def test_shared_event(self):
        event = threading.Event()
        cancellation = Cancellation(event=event)

        event.set()

        assert cancellation.cancelled
