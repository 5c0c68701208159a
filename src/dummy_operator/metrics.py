"""Prometheus metrics for the Dummy Operator."""

from prometheus_client import Counter, Histogram

# Reconciliation metrics
reconcile_total = Counter(
    "dummy_operator_reconcile_total",
    "Total number of reconciliations",
    ["kind", "result"],
)

reconcile_duration_seconds = Histogram(
    "dummy_operator_reconcile_duration_seconds",
    "Duration of reconciliations in seconds",
    ["kind"],
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0],
)

error_total = Counter(
    "dummy_operator_error_total",
    "Total number of reconciliation errors",
    ["kind", "error_type"],
)

# Workload metrics
deployments_created_total = Counter(
    "dummy_operator_deployments_created_total",
    "Total number of Deployments created for Dummy resources",
    ["namespace"],
)

requeue_total = Counter(
    "dummy_operator_requeue_total",
    "Total number of explicit requeues requested by the reconciler",
    ["kind", "reason"],
)

# API call metrics
api_call_total = Counter(
    "dummy_operator_api_call_total",
    "Total number of API calls",
    ["api_type", "operation", "result"],
)

api_call_duration_seconds = Histogram(
    "dummy_operator_api_call_duration_seconds",
    "Duration of API calls in seconds",
    ["api_type", "operation"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0],
)
