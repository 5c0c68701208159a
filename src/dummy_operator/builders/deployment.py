"""Builder for the Deployment owned by a Dummy resource."""

from __future__ import annotations

import os
from typing import Any, Mapping

import kopf

from ..constants import (
    CONTAINER_NAME,
    CREATED_BY,
    DEFAULT_REPLICAS,
    IMAGE_ENV_VAR,
    KIND_DUMMY,
    LABEL_CREATED_BY,
    LABEL_INSTANCE,
    LABEL_NAME,
    LABEL_PART_OF,
    LABEL_VERSION,
    PART_OF,
    RUN_AS_USER,
)
from ..utils.errors import ConfigurationError


def image_for_dummy(environ: Mapping[str, str] | None = None) -> str:
    """Get the operand image managed by this operator.

    Args:
        environ: Environment to read from (defaults to os.environ)

    Returns:
        Container image reference

    Raises:
        ConfigurationError: If the DUMMY_IMAGE variable is not set
    """
    env = os.environ if environ is None else environ
    image = env.get(IMAGE_ENV_VAR)
    if image is None:
        raise ConfigurationError(f"Unable to find {IMAGE_ENV_VAR} environment variable with the image")
    return image


def image_tag(image: str) -> str:
    """Extract the tag from an image reference, or "" when it has none."""
    reference = image.split("@", 1)[0]
    last_segment = reference.rsplit("/", 1)[-1]
    if ":" not in last_segment:
        return ""
    return last_segment.rsplit(":", 1)[1]


def labels_for_dummy(name: str, image: str) -> dict[str, str]:
    """Return the labels used to select the pods of a Dummy."""
    return {
        LABEL_NAME: KIND_DUMMY,
        LABEL_INSTANCE: name,
        LABEL_VERSION: image_tag(image),
        LABEL_PART_OF: PART_OF,
        LABEL_CREATED_BY: CREATED_BY,
    }


def deployment_for_dummy(dummy: dict[str, Any], image: str) -> dict[str, Any]:
    """Create the Deployment manifest for a Dummy resource.

    Replicas are fixed at one; ``spec.size`` is not consulted. The pod and
    container security contexts are always the restricted profile.

    Args:
        dummy: Dummy object (apiVersion, kind, metadata, spec)
        image: Operand container image

    Returns:
        Deployment manifest with a controller owner reference to the Dummy
    """
    meta = dummy.get("metadata", {})
    name = meta["name"]
    labels = labels_for_dummy(name, image)

    deployment = {
        "apiVersion": "apps/v1",
        "kind": "Deployment",
        "metadata": {
            "name": name,
            "namespace": meta["namespace"],
            "labels": dict(labels),
        },
        "spec": {
            "replicas": DEFAULT_REPLICAS,
            "selector": {"matchLabels": dict(labels)},
            "template": {
                "metadata": {"labels": dict(labels)},
                "spec": {
                    "securityContext": {
                        "runAsNonRoot": True,
                        "seccompProfile": {"type": "RuntimeDefault"},
                    },
                    "containers": [
                        {
                            "name": CONTAINER_NAME,
                            "image": image,
                            "imagePullPolicy": "IfNotPresent",
                            "securityContext": {
                                "runAsNonRoot": True,
                                "runAsUser": RUN_AS_USER,
                                "allowPrivilegeEscalation": False,
                                "capabilities": {"drop": ["ALL"]},
                            },
                        }
                    ],
                },
            },
        },
    }

    # Garbage collection of the Deployment follows the Dummy
    kopf.append_owner_reference(deployment, owner=dummy, controller=True, block_owner_deletion=True)
    return deployment
