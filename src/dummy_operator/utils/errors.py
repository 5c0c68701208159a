"""Error taxonomy for reconciliation passes."""

from __future__ import annotations

from kubernetes.client.exceptions import ApiException


class ReconcileError(Exception):
    """Base class for errors that abort a reconciliation pass."""


class ConfigurationError(ReconcileError):
    """A required configuration value is missing from the environment."""


class ReconcileCancelled(ReconcileError):
    """The pass was cancelled or ran past its deadline."""


class StoreError(ReconcileError):
    """A read or write against the cluster object store failed."""

    def __init__(self, message: str, operation: str, status: int | None = None):
        super().__init__(message)
        self.operation = operation
        self.status = status


class NotFoundError(StoreError):
    """The requested object does not exist."""


class ConflictError(StoreError):
    """The write was rejected because the object changed or already exists."""


class TransientStoreError(StoreError):
    """Any other store failure (network, server error, throttling)."""


def classify_api_exception(error: Exception, operation: str) -> StoreError:
    """Translate a kubernetes client error into a StoreError subclass.

    Args:
        error: Exception raised by the kubernetes client
        operation: Store operation that failed (e.g. "get_dummy")

    Returns:
        NotFoundError for 404, ConflictError for 409,
        TransientStoreError for everything else
    """
    status = error.status if isinstance(error, ApiException) else None
    reason = getattr(error, "reason", None) or str(error)
    message = f"{operation} failed: {reason}"

    if status == 404:
        return NotFoundError(message, operation, status)
    if status == 409:
        return ConflictError(message, operation, status)
    return TransientStoreError(message, operation, status)
