"""Handler for Dummy CRD."""

from __future__ import annotations

import copy
import os
from typing import Any, Mapping

import kopf

from .. import metrics
from ..builders.deployment import deployment_for_dummy, image_for_dummy
from ..constants import (
    API_GROUP,
    API_GROUP_VERSION,
    API_VERSION,
    CONFLICT_RETRY_DELAY_SECONDS,
    KIND_DUMMY,
    LABEL_PART_OF,
    PART_OF,
    PLURAL_DUMMY,
    REQUEUE_AFTER_CREATE_SECONDS,
    STATUS_PENDING,
    STATUS_RUNNING,
)
from ..models import ReconcileResult, ResourceIdentity
from ..services.store.base import ClusterStore
from ..tracing import add_span_attribute, trace_span
from ..utils.cancellation import Cancellation
from ..utils.conditions import set_available_condition
from ..utils.errors import ConflictError, NotFoundError, StoreError
from ..utils.events import emit_deployment_created, emit_reconcile_started, emit_status_updated
from ..utils.locks import IdentityLocks
from .base import BaseHandler

RECONCILE_TIMEOUT_SECONDS = float(os.getenv("RECONCILE_TIMEOUT_SECONDS", "30"))
RETRY_BACKOFF_SECONDS = float(os.getenv("RETRY_BACKOFF_SECONDS", "10"))

# Deployments built by this operator carry this label; the watcher filters on it
OWNED_DEPLOYMENT_LABELS = {LABEL_PART_OF: PART_OF}


class DummyReconciler(BaseHandler):
    """Drives the Deployment of a Dummy toward the state the Dummy declares.

    Each call to :meth:`reconcile` is one independent pass. Nothing is kept
    between passes except what is stored on the two objects, so a pass that
    stopped halfway (Deployment created, status not written) is repaired by
    the next one.
    """

    def __init__(self, store: ClusterStore, environ: Mapping[str, str] | None = None):
        """Initialize the reconciler.

        Args:
            store: Object store used for every read and write
            environ: Environment the operand image is read from (defaults to os.environ)
        """
        super().__init__(KIND_DUMMY)
        self.store = store
        self.environ = environ

    def reconcile(
        self,
        identity: ResourceIdentity,
        cancellation: Cancellation | None = None,
    ) -> ReconcileResult:
        """Run one reconciliation pass for the Dummy with the given identity."""
        cancellation = cancellation or Cancellation()

        with trace_span(
            "reconcile_dummy",
            kind=KIND_DUMMY,
            attributes={"dummy.name": identity.name, "dummy.namespace": identity.namespace},
        ):
            dummy = self.fetch_dummy(identity, cancellation)
            if dummy is None:
                return ReconcileResult()

            return self.reconcile_with_metrics(
                dummy, lambda: self._reconcile_dummy(dummy, identity, cancellation)
            )

    def fetch_dummy(self, identity: ResourceIdentity, cancellation: Cancellation) -> dict[str, Any] | None:
        """Load the Dummy, or return None when it no longer exists."""
        cancellation.check("get_dummy")
        meta = {"name": identity.name, "namespace": identity.namespace}
        try:
            return self.store.get_dummy(identity.name, identity.namespace, timeout=cancellation.remaining())
        except NotFoundError:
            # Deleted between the trigger and this pass
            self.log_info(
                meta,
                "Dummy resource not found, ignoring since object must be deleted",
                event="fetch",
                reason="NotFound",
            )
            return None
        except StoreError as e:
            self.log_error(meta, "Failed to get Dummy", error=e, event="fetch", reason="GetFailed")
            raise

    def find_deployment(self, identity: ResourceIdentity, cancellation: Cancellation) -> dict[str, Any] | None:
        """Look up the Deployment owned by the Dummy, or None when it is absent."""
        cancellation.check("get_deployment")
        try:
            return self.store.get_deployment(identity.name, identity.namespace, timeout=cancellation.remaining())
        except NotFoundError:
            return None
        except StoreError as e:
            meta = {"name": identity.name, "namespace": identity.namespace}
            self.log_error(meta, "Failed to get Deployment", error=e, event="fetch", reason="GetFailed")
            raise

    def _reconcile_dummy(
        self,
        dummy: dict[str, Any],
        identity: ResourceIdentity,
        cancellation: Cancellation,
    ) -> ReconcileResult:
        deployment = self.find_deployment(identity, cancellation)
        if deployment is None:
            return self._create_deployment(dummy, cancellation)
        return self._sync_status(dummy, cancellation)

    def _create_deployment(self, dummy: dict[str, Any], cancellation: Cancellation) -> ReconcileResult:
        meta = dummy["metadata"]
        spec = dummy.get("spec") or {}

        with trace_span("create_deployment", kind=KIND_DUMMY):
            image = image_for_dummy(self.environ)
            deployment = deployment_for_dummy(dummy, image)

            cancellation.check("create_deployment")
            emit_reconcile_started(dummy)
            try:
                self.store.create_deployment(deployment, timeout=cancellation.remaining())
            except StoreError as e:
                self.log_error(
                    meta,
                    "Failed to create new Deployment",
                    error=e,
                    event="create",
                    reason="CreateFailed",
                    deployment_namespace=meta["namespace"],
                    deployment_name=meta["name"],
                )
                raise

            metrics.deployments_created_total.labels(namespace=meta["namespace"]).inc()
            add_span_attribute("deployment.created", True)
            emit_deployment_created(dummy, meta["name"])
            self.log_info(meta, "Deployment created", event="create", reason="DeploymentCreated", image=image)

        status = copy.deepcopy(dummy.get("status") or {})
        status["podStatus"] = STATUS_RUNNING
        status["echoSpec"] = spec.get("message", "")
        status["conditions"] = set_available_condition(
            status.get("conditions") or [],
            True,
            f"Deployment for custom resource ({meta['name']}) with {spec.get('size', 0)} replicas created successfully",
            observed_generation=meta.get("generation"),
        )
        self.write_status(dummy, status, cancellation)

        # Re-check once the new Deployment has had time to settle
        metrics.requeue_total.labels(kind=KIND_DUMMY, reason="DeploymentCreated").inc()
        return ReconcileResult(requeue_after=REQUEUE_AFTER_CREATE_SECONDS)

    def _sync_status(self, dummy: dict[str, Any], cancellation: Cancellation) -> ReconcileResult:
        meta = dummy["metadata"]
        spec = dummy.get("spec") or {}
        current = dummy.get("status") or {}

        status = copy.deepcopy(current)
        if not status.get("podStatus"):
            status["podStatus"] = STATUS_PENDING
        status["echoSpec"] = spec.get("message", "")

        self.log_info(meta, "Logging dummy info", event="sync", reason="Sync", spec_message=status["echoSpec"])

        if status == current:
            return ReconcileResult()

        emit_reconcile_started(dummy)
        self.write_status(dummy, status, cancellation)
        return ReconcileResult()

    def write_status(self, dummy: dict[str, Any], status: dict[str, Any], cancellation: Cancellation) -> None:
        """Persist the status subresource; stale writes surface as ConflictError."""
        meta = dummy["metadata"]
        cancellation.check("update_dummy_status")
        body = dict(dummy)
        body["status"] = status
        try:
            self.store.update_dummy_status(body, timeout=cancellation.remaining())
        except ConflictError as e:
            self.log_warning(
                meta,
                "Dummy changed since it was read, retrying",
                event="status",
                reason="StatusConflict",
                error=str(e),
            )
            raise
        except StoreError as e:
            self.log_error(meta, "Failed to update Dummy status", error=e, event="status", reason="StatusUpdateFailed")
            raise
        emit_status_updated(dummy, status["podStatus"])


def controller_owner(meta: Mapping[str, Any]) -> ResourceIdentity | None:
    """Return the identity of the Dummy controlling an object, if any."""
    for ref in meta.get("ownerReferences") or []:
        if ref.get("controller") and ref.get("kind") == KIND_DUMMY and ref.get("apiVersion") == API_GROUP_VERSION:
            return ResourceIdentity(name=ref["name"], namespace=meta.get("namespace", "default"))
    return None


def run_pass(reconciler: DummyReconciler, identity: ResourceIdentity, locks: IdentityLocks) -> ReconcileResult:
    """Run a pass with the configured deadline, asking kopf for a quick retry on conflicts.

    Passes for the same identity never overlap, whichever watch triggered them.
    """
    try:
        with locks.hold(identity, timeout=RECONCILE_TIMEOUT_SECONDS):
            cancellation = Cancellation(timeout=RECONCILE_TIMEOUT_SECONDS)
            return reconciler.reconcile(identity, cancellation)
    except ConflictError as e:
        metrics.requeue_total.labels(kind=KIND_DUMMY, reason="Conflict").inc()
        raise kopf.TemporaryError(str(e), delay=CONFLICT_RETRY_DELAY_SECONDS) from e


@kopf.on.create(API_GROUP, API_VERSION, PLURAL_DUMMY, backoff=RETRY_BACKOFF_SECONDS)
@kopf.on.update(API_GROUP, API_VERSION, PLURAL_DUMMY, backoff=RETRY_BACKOFF_SECONDS)
@kopf.on.resume(API_GROUP, API_VERSION, PLURAL_DUMMY, backoff=RETRY_BACKOFF_SECONDS)
def handle_dummy(
    name: str,
    namespace: str,
    memo: kopf.Memo,
    **kwargs: Any,
) -> None:
    """Handle Dummy resource reconciliation."""
    identity = ResourceIdentity(name=name, namespace=namespace)
    result = run_pass(memo.reconciler, identity, memo.pass_locks)
    if result.requeue:
        # kopf has no success-with-delay outcome for change handlers
        raise kopf.TemporaryError(
            f"Scheduled re-check of {identity} in {result.requeue_after:.0f}s",
            delay=result.requeue_after,
        )


def owned_by_dummy(meta: kopf.Meta, **_: Any) -> bool:
    return controller_owner(meta) is not None


@kopf.on.event("apps", "v1", "deployments", labels=OWNED_DEPLOYMENT_LABELS, when=owned_by_dummy)
def handle_owned_deployment(
    meta: kopf.Meta,
    memo: kopf.Memo,
    **kwargs: Any,
) -> None:
    """Reconcile the owning Dummy whenever one of its Deployments changes."""
    identity = controller_owner(meta)
    if identity is not None:
        run_pass(memo.reconciler, identity, memo.pass_locks)
