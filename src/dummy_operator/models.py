"""Value types passed between the dispatcher and the reconciler."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ResourceIdentity:
    """Name and namespace shared by a Dummy and its Deployment."""

    name: str
    namespace: str

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


@dataclass(frozen=True)
class ReconcileResult:
    """Outcome of a successful reconciliation pass.

    ``requeue_after`` is the delay in seconds before the next pass is
    scheduled; None means only future changes trigger another pass.
    """

    requeue_after: float | None = None

    @property
    def requeue(self) -> bool:
        return self.requeue_after is not None
