"""Tests for Prometheus metrics."""

from __future__ import annotations

from prometheus_client import REGISTRY

from dummy_operator.metrics import (
    api_call_duration_seconds,
    api_call_total,
    deployments_created_total,
    error_total,
    reconcile_duration_seconds,
    reconcile_total,
    requeue_total,
)


class TestMetricsExist:
    """Test that all expected metrics are defined."""

    def test_reconcile_total_exists(self):
        # Prometheus counters don't include "_total" in their _name attribute
        assert reconcile_total._name == "dummy_operator_reconcile"

    def test_reconcile_duration_exists(self):
        assert reconcile_duration_seconds._name == "dummy_operator_reconcile_duration_seconds"

    def test_error_total_exists(self):
        assert error_total._name == "dummy_operator_error"

    def test_deployments_created_total_exists(self):
        assert deployments_created_total._name == "dummy_operator_deployments_created"

    def test_requeue_total_exists(self):
        assert requeue_total._name == "dummy_operator_requeue"

    def test_api_call_metrics_exist(self):
        assert api_call_total._name == "dummy_operator_api_call"
        assert api_call_duration_seconds._name == "dummy_operator_api_call_duration_seconds"


class TestMetricsRecording:
    """Test that metrics record values."""

    def test_deployments_created_increments(self):
        before = REGISTRY.get_sample_value(
            "dummy_operator_deployments_created_total", {"namespace": "metrics-test"}
        ) or 0.0

        deployments_created_total.labels(namespace="metrics-test").inc()

        after = REGISTRY.get_sample_value("dummy_operator_deployments_created_total", {"namespace": "metrics-test"})
        assert after == before + 1

    def test_reconcile_duration_observes(self):
        reconcile_duration_seconds.labels(kind="MetricsTest").observe(0.2)

        count = REGISTRY.get_sample_value(
            "dummy_operator_reconcile_duration_seconds_count", {"kind": "MetricsTest"}
        )
        assert count is not None and count >= 1
