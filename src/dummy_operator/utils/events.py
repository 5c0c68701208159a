"""Utilities for emitting Kubernetes events."""

from __future__ import annotations

from typing import Any

import kopf

from ..constants import (
    EVENT_REASON_DEPLOYMENT_CREATED,
    EVENT_REASON_RECONCILE_FAILED,
    EVENT_REASON_RECONCILE_STARTED,
    EVENT_REASON_STATUS_UPDATED,
)


def emit_event(
    body: dict[str, Any],
    reason: str,
    message: str,
    type_: str = "Normal",
) -> None:
    """Emit a Kubernetes event.

    Args:
        body: Resource the event is attached to (apiVersion, kind, metadata)
        reason: Event reason
        message: Event message
        type_: Event type (Normal or Warning)
    """
    kopf.event(
        body,
        reason=reason,
        message=message,
        type=type_,
    )


def emit_reconcile_started(body: dict[str, Any]) -> None:
    """Emit reconcile started event."""
    emit_event(body, EVENT_REASON_RECONCILE_STARTED, "Reconciliation started")


def emit_reconcile_failed(body: dict[str, Any], message: str) -> None:
    """Emit reconcile failed event."""
    emit_event(body, EVENT_REASON_RECONCILE_FAILED, message, type_="Warning")


def emit_deployment_created(body: dict[str, Any], deployment_name: str) -> None:
    """Emit deployment created event."""
    emit_event(body, EVENT_REASON_DEPLOYMENT_CREATED, f"Deployment {deployment_name} created")


def emit_status_updated(body: dict[str, Any], pod_status: str) -> None:
    """Emit status updated event."""
    emit_event(body, EVENT_REASON_STATUS_UPDATED, f"Status updated, podStatus is {pod_status}")
