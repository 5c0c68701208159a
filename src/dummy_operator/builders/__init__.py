"""Builder modules for creating resources from CRD specs."""

from .deployment import deployment_for_dummy, image_for_dummy, image_tag, labels_for_dummy

__all__ = ["deployment_for_dummy", "image_for_dummy", "image_tag", "labels_for_dummy"]
