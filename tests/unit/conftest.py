"""Shared fixtures for unit tests."""

from __future__ import annotations

import copy
from typing import Any
from unittest.mock import patch

import pytest

from dummy_operator.constants import API_GROUP_VERSION, KIND_DUMMY
from dummy_operator.utils.errors import ConflictError, NotFoundError


def make_dummy(
    name: str = "test-dummy",
    namespace: str = "test-dummy",
    size: int = 1,
    message: str | None = None,
    status: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a Dummy object as returned by the API server."""
    spec: dict[str, Any] = {"size": size}
    if message is not None:
        spec["message"] = message
    dummy = {
        "apiVersion": API_GROUP_VERSION,
        "kind": KIND_DUMMY,
        "metadata": {
            "name": name,
            "namespace": namespace,
            "uid": f"uid-{name}",
            "resourceVersion": "1",
            "generation": 1,
        },
        "spec": spec,
    }
    if status is not None:
        dummy["status"] = status
    return dummy


class FakeStore:
    """In-memory cluster object store with optimistic concurrency on status writes."""

    def __init__(self) -> None:
        self.dummies: dict[tuple[str, str], dict[str, Any]] = {}
        self.deployments: dict[tuple[str, str], dict[str, Any]] = {}
        self.created: list[dict[str, Any]] = []
        self.status_updates: list[dict[str, Any]] = []
        self.errors: dict[str, Exception] = {}
        self.timeouts: list[float | None] = []

    def add_dummy(self, dummy: dict[str, Any]) -> None:
        meta = dummy["metadata"]
        self.dummies[(meta["namespace"], meta["name"])] = copy.deepcopy(dummy)

    def add_deployment(self, name: str, namespace: str) -> None:
        self.deployments[(namespace, name)] = {
            "apiVersion": "apps/v1",
            "kind": "Deployment",
            "metadata": {"name": name, "namespace": namespace},
            "spec": {"replicas": 1},
        }

    def dummy(self, name: str = "test-dummy", namespace: str = "test-dummy") -> dict[str, Any]:
        return self.dummies[(namespace, name)]

    def _check(self, operation: str, timeout: float | None) -> None:
        self.timeouts.append(timeout)
        if operation in self.errors:
            raise self.errors[operation]

    def get_dummy(self, name: str, namespace: str, timeout: float | None = None) -> dict[str, Any]:
        self._check("get_dummy", timeout)
        try:
            return copy.deepcopy(self.dummies[(namespace, name)])
        except KeyError:
            raise NotFoundError("get_dummy failed: Not Found", "get_dummy", 404) from None

    def get_deployment(self, name: str, namespace: str, timeout: float | None = None) -> dict[str, Any]:
        self._check("get_deployment", timeout)
        try:
            return copy.deepcopy(self.deployments[(namespace, name)])
        except KeyError:
            raise NotFoundError("get_deployment failed: Not Found", "get_deployment", 404) from None

    def create_deployment(self, body: dict[str, Any], timeout: float | None = None) -> dict[str, Any]:
        self._check("create_deployment", timeout)
        key = (body["metadata"]["namespace"], body["metadata"]["name"])
        if key in self.deployments:
            raise ConflictError("create_deployment failed: AlreadyExists", "create_deployment", 409)
        self.deployments[key] = copy.deepcopy(body)
        self.created.append(copy.deepcopy(body))
        return copy.deepcopy(body)

    def update_dummy_status(self, body: dict[str, Any], timeout: float | None = None) -> dict[str, Any]:
        self._check("update_dummy_status", timeout)
        meta = body["metadata"]
        key = (meta["namespace"], meta["name"])
        if key not in self.dummies:
            raise NotFoundError("update_dummy_status failed: Not Found", "update_dummy_status", 404)
        stored = self.dummies[key]
        if stored["metadata"]["resourceVersion"] != meta.get("resourceVersion"):
            raise ConflictError("update_dummy_status failed: Conflict", "update_dummy_status", 409)
        stored["status"] = copy.deepcopy(body["status"])
        stored["metadata"]["resourceVersion"] = str(int(stored["metadata"]["resourceVersion"]) + 1)
        self.status_updates.append(copy.deepcopy(body["status"]))
        return copy.deepcopy(stored)


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture(autouse=True)
def kopf_event():
    """Capture events instead of posting them to a cluster."""
    with patch("dummy_operator.utils.events.kopf.event") as mock_event:
        yield mock_event


@pytest.fixture(name="make_dummy")
def make_dummy_fixture():
    return make_dummy


@pytest.fixture
def operand_image(monkeypatch: pytest.MonkeyPatch) -> str:
    image = "example.com/image:test"
    monkeypatch.setenv("DUMMY_IMAGE", image)
    return image
