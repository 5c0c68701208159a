"""Unit tests for the Deployment builder."""

from __future__ import annotations

import pytest

from dummy_operator.builders.deployment import (
    deployment_for_dummy,
    image_for_dummy,
    image_tag,
    labels_for_dummy,
)
from dummy_operator.utils.errors import ConfigurationError

IMAGE = "example.com/image:test"


class TestImageForDummy:
    """Test operand image lookup."""

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("DUMMY_IMAGE", IMAGE)

        assert image_for_dummy() == IMAGE

    def test_reads_given_mapping(self):
        assert image_for_dummy({"DUMMY_IMAGE": "other:1"}) == "other:1"

    def test_missing_raises_configuration_error(self, monkeypatch):
        monkeypatch.delenv("DUMMY_IMAGE", raising=False)

        with pytest.raises(ConfigurationError, match="DUMMY_IMAGE"):
            image_for_dummy()


class TestImageTag:
    """Test tag extraction from image references."""

    @pytest.mark.parametrize(
        ("image", "tag"),
        [
            ("example.com/image:test", "test"),
            ("image:1.2.3", "1.2.3"),
            ("localhost:5000/image:v2", "v2"),
            ("localhost:5000/image", ""),
            ("image", ""),
            ("repo/image:v1@sha256:abcdef", "v1"),
            ("repo/image@sha256:abcdef", ""),
        ],
    )
    def test_image_tag(self, image, tag):
        assert image_tag(image) == tag


class TestLabels:
    """Test pod labels."""

    def test_labels_for_dummy(self):
        labels = labels_for_dummy("test-dummy", IMAGE)

        assert labels == {
            "app.kubernetes.io/name": "Dummy",
            "app.kubernetes.io/instance": "test-dummy",
            "app.kubernetes.io/version": "test",
            "app.kubernetes.io/part-of": "custom-kubernetes-operator",
            "app.kubernetes.io/created-by": "controller-manager",
        }


class TestDeploymentForDummy:
    """Test the Deployment manifest."""

    @pytest.fixture
    def deployment(self, make_dummy) -> dict:
        return deployment_for_dummy(make_dummy(size=5), IMAGE)

    def test_identity_and_replicas(self, deployment):
        assert deployment["apiVersion"] == "apps/v1"
        assert deployment["kind"] == "Deployment"
        assert deployment["metadata"]["name"] == "test-dummy"
        assert deployment["metadata"]["namespace"] == "test-dummy"
        assert deployment["spec"]["replicas"] == 1

    def test_selector_matches_template(self, deployment):
        selector = deployment["spec"]["selector"]["matchLabels"]
        template_labels = deployment["spec"]["template"]["metadata"]["labels"]

        assert selector == template_labels == labels_for_dummy("test-dummy", IMAGE)

    def test_deployment_carries_pod_labels(self, deployment):
        assert deployment["metadata"]["labels"] == labels_for_dummy("test-dummy", IMAGE)

    def test_container(self, deployment):
        containers = deployment["spec"]["template"]["spec"]["containers"]

        assert len(containers) == 1
        assert containers[0]["name"] == "dummy"
        assert containers[0]["image"] == IMAGE
        assert containers[0]["imagePullPolicy"] == "IfNotPresent"

    def test_pod_security_context(self, deployment):
        pod_ctx = deployment["spec"]["template"]["spec"]["securityContext"]

        assert pod_ctx == {"runAsNonRoot": True, "seccompProfile": {"type": "RuntimeDefault"}}

    def test_container_security_context(self, deployment):
        ctx = deployment["spec"]["template"]["spec"]["containers"][0]["securityContext"]

        assert ctx == {
            "runAsNonRoot": True,
            "runAsUser": 1001,
            "allowPrivilegeEscalation": False,
            "capabilities": {"drop": ["ALL"]},
        }

    def test_owner_reference(self, deployment):
        refs = deployment["metadata"]["ownerReferences"]

        assert len(refs) == 1
        assert refs[0]["apiVersion"] == "interview.com/v1alpha1"
        assert refs[0]["kind"] == "Dummy"
        assert refs[0]["name"] == "test-dummy"
        assert refs[0]["uid"] == "uid-test-dummy"
        assert refs[0]["controller"] is True
        assert refs[0]["blockOwnerDeletion"] is True

    def test_deterministic(self, make_dummy):
        dummy = make_dummy()

        assert deployment_for_dummy(dummy, IMAGE) == deployment_for_dummy(dummy, IMAGE)

    def test_does_not_modify_dummy(self, make_dummy):
        dummy = make_dummy()
        before = repr(dummy)

        deployment_for_dummy(dummy, IMAGE)

        assert repr(dummy) == before
