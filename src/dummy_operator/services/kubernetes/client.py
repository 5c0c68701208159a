"""Kubernetes API implementation of the cluster object store."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

from kubernetes import client, config
from kubernetes.client.exceptions import ApiException
from urllib3.exceptions import HTTPError

from ... import metrics
from ...constants import API_GROUP, API_VERSION, FIELD_MANAGER, PLURAL_DUMMY
from ...utils.errors import classify_api_exception

logger = logging.getLogger(__name__)


def load_kube_config() -> None:
    """Load in-cluster configuration, falling back to the local kubeconfig."""
    try:
        config.load_incluster_config()
    except config.ConfigException:
        config.load_kube_config()


class KubernetesStore:
    """Cluster object store backed by the Kubernetes API."""

    def __init__(self, api_client: client.ApiClient | None = None) -> None:
        """Initialize the store.

        Args:
            api_client: Configured API client; the default client is used when omitted
        """
        self.api_client = api_client or client.ApiClient()
        self.custom_api = client.CustomObjectsApi(self.api_client)
        self.apps_api = client.AppsV1Api(self.api_client)

    def _call(self, operation: str, fn: Callable[..., Any], **kwargs: Any) -> Any:
        """Run an API call, recording metrics and translating failures."""
        timeout = kwargs.pop("timeout", None)
        if timeout is not None:
            kwargs["_request_timeout"] = timeout

        start_time = time.time()
        try:
            result = fn(**kwargs)
            metrics.api_call_total.labels(api_type="k8s", operation=operation, result="success").inc()
            return result
        except (ApiException, HTTPError) as e:
            metrics.api_call_total.labels(api_type="k8s", operation=operation, result="error").inc()
            raise classify_api_exception(e, operation) from e
        finally:
            duration = time.time() - start_time
            metrics.api_call_duration_seconds.labels(api_type="k8s", operation=operation).observe(duration)

    def get_dummy(self, name: str, namespace: str, timeout: float | None = None) -> dict[str, Any]:
        return self._call(
            "get_dummy",
            self.custom_api.get_namespaced_custom_object,
            group=API_GROUP,
            version=API_VERSION,
            namespace=namespace,
            plural=PLURAL_DUMMY,
            name=name,
            timeout=timeout,
        )

    def get_deployment(self, name: str, namespace: str, timeout: float | None = None) -> dict[str, Any]:
        deployment = self._call(
            "get_deployment",
            self.apps_api.read_namespaced_deployment,
            name=name,
            namespace=namespace,
            timeout=timeout,
        )
        return self.api_client.sanitize_for_serialization(deployment)

    def create_deployment(self, body: dict[str, Any], timeout: float | None = None) -> dict[str, Any]:
        deployment = self._call(
            "create_deployment",
            self.apps_api.create_namespaced_deployment,
            namespace=body["metadata"]["namespace"],
            body=body,
            field_manager=FIELD_MANAGER,
            timeout=timeout,
        )
        return self.api_client.sanitize_for_serialization(deployment)

    def update_dummy_status(self, body: dict[str, Any], timeout: float | None = None) -> dict[str, Any]:
        meta = body["metadata"]
        return self._call(
            "update_dummy_status",
            self.custom_api.replace_namespaced_custom_object_status,
            group=API_GROUP,
            version=API_VERSION,
            namespace=meta["namespace"],
            plural=PLURAL_DUMMY,
            name=meta["name"],
            body=body,
            field_manager=FIELD_MANAGER,
            timeout=timeout,
        )
