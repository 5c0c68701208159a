"""Cluster object store interface used by the reconciler."""

from __future__ import annotations

from typing import Any, Protocol


class ClusterStore(Protocol):
    """Protocol defining the object store operations the reconciler needs.

    Every method is a blocking call. Failures are raised as StoreError
    subclasses: NotFoundError, ConflictError or TransientStoreError.
    """

    def get_dummy(self, name: str, namespace: str, timeout: float | None = None) -> dict[str, Any]:
        """Get a Dummy resource by identity."""
        ...

    def get_deployment(self, name: str, namespace: str, timeout: float | None = None) -> dict[str, Any]:
        """Get a Deployment by identity."""
        ...

    def create_deployment(self, body: dict[str, Any], timeout: float | None = None) -> dict[str, Any]:
        """Create a Deployment."""
        ...

    def update_dummy_status(self, body: dict[str, Any], timeout: float | None = None) -> dict[str, Any]:
        """Replace the status subresource of a Dummy.

        The body's metadata.resourceVersion must match the stored object,
        otherwise ConflictError is raised.
        """
        ...
