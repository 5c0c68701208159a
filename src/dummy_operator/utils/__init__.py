"""Utility functions for the Dummy Operator."""

from .cancellation import Cancellation
from .conditions import set_available_condition, update_condition
from .errors import (
    ConfigurationError,
    ConflictError,
    NotFoundError,
    ReconcileCancelled,
    ReconcileError,
    StoreError,
    TransientStoreError,
    classify_api_exception,
)
from .events import emit_event
from .locks import IdentityLocks

__all__ = [
    "Cancellation",
    "update_condition",
    "set_available_condition",
    "emit_event",
    "IdentityLocks",
    "ReconcileError",
    "ConfigurationError",
    "ReconcileCancelled",
    "StoreError",
    "NotFoundError",
    "ConflictError",
    "TransientStoreError",
    "classify_api_exception",
]
