"""Main entry point for the Dummy Operator."""

from __future__ import annotations

import logging
import os
import threading
from typing import Any

import kopf
from werkzeug.serving import make_server

from . import handlers  # noqa: F401
from . import health
from . import logging as structured_logging
from .handlers.dummy import DummyReconciler
from .utils.locks import IdentityLocks
from .services.kubernetes.client import KubernetesStore, load_kube_config
from .tracing import initialize_tracing

logger = logging.getLogger(__name__)


@kopf.on.startup()
def configure(settings: kopf.OperatorSettings, memo: kopf.Memo, **_: Any) -> None:
    """Configure the operator."""
    # Set up structured JSON logging
    structured_logging.setup_structured_logging()
    initialize_tracing()

    # Use annotations so kopf's own bookkeeping never touches the status subresource
    settings.persistence.progress_storage = kopf.AnnotationsProgressStorage()
    settings.persistence.diffbase_storage = kopf.AnnotationsDiffBaseStorage()

    settings.posting.level = logging.INFO
    settings.networking.request_timeout = 30.0
    settings.execution.max_workers = int(os.getenv("MAX_WORKERS", "4"))

    load_kube_config()
    memo.reconciler = DummyReconciler(KubernetesStore())
    memo.pass_locks = IdentityLocks()

    # Start metrics HTTP server with health check endpoints
    metrics_port = int(os.getenv("METRICS_PORT", "8080"))
    server = make_server("", metrics_port, health.create_combined_wsgi_app(), threaded=True)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    logger.info("Metrics and health endpoints listening on port %d", metrics_port)


def run() -> None:
    """Run the operator in the current process."""
    namespaces = _watched_namespaces()
    kopf.run(clusterwide=not namespaces, namespaces=namespaces)


def _watched_namespaces() -> list[str]:
    watch_namespace = os.getenv("WATCH_NAMESPACE")
    if not watch_namespace:
        return []
    return [ns.strip() for ns in watch_namespace.split(",") if ns.strip()]
