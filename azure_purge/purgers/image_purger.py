"""
Image Purger Module
===================

Removes stale VM images from the managed resource group.

Two routines share this module:

- :class:`InvalidImagePurger` deletes images that were never tagged
  ``valid: true`` once they are older than the build timeout.
- :class:`OldImagePurger` keeps only the ``keep_images`` most recent images
  of each kind, where the kind is the name prefix before the timestamp.

Naming Convention
-----------------
Images are named ``<prefix>-<YYYYMMDDHHmm>``. Because the timestamp is
fixed-width and zero-padded, sorting names in reverse lexicographic order
puts the newest image of each prefix first.

Names that do not follow the convention are always deleted by both
routines.

Example
-------
>>> from azure_purge.purgers.image_purger import select_invalid_images
>>>
>>> images = [
...     {"name": "rhel-201801010000", "tags": {"valid": "true"}},
...     {"name": "rhel-201801020000", "tags": {}},
...     {"name": "scratch", "tags": {"valid": "true"}},
... ]
>>> [i["name"] for i in select_invalid_images(images, now, timedelta(hours=6))]
['rhel-201801020000', 'scratch']
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from azure_purge.core.base_purger import BasePurger
from azure_purge.core.naming import parse_build_timestamp

# Module logger
logger = logging.getLogger(__name__)

IMAGE_TIMESTAMP_RX = re.compile(r"^.*-([0-9]{12})\Z")
IMAGE_PREFIX_RX = re.compile(r"^(.*)-[0-9]{12}\Z")

VALID_TAG = "valid"


def select_invalid_images(
    images: List[Dict[str, Any]],
    now: datetime,
    build_timeout: timedelta,
) -> List[Dict[str, Any]]:
    """
    Select images that are not tagged valid and are past the build timeout.

    Parameters
    ----------
    images : list of dict
        Image dicts with 'name' and 'tags'.
    now : datetime
        The purge instant (timezone-aware UTC).
    build_timeout : timedelta
        Images younger than this are kept whatever their tags.

    Returns
    -------
    list of dict
        The images to delete, in listing order.
    """
    to_delete = []
    for image in images:
        m = IMAGE_TIMESTAMP_RX.match(image["name"])
        if m is None:
            to_delete.append(image)
            continue

        built = parse_build_timestamp(m.group(1))
        if built is not None and now - built < build_timeout:
            continue

        tags = image.get("tags") or {}
        if tags.get(VALID_TAG) != "true":
            to_delete.append(image)

    return to_delete


def select_old_images(
    images: List[Dict[str, Any]],
    keep_images: int,
) -> List[Dict[str, Any]]:
    """
    Select every image beyond the newest ``keep_images`` of its prefix.

    Parameters
    ----------
    images : list of dict
        Image dicts with a 'name'.
    keep_images : int
        Number of images kept per prefix.

    Returns
    -------
    list of dict
        The images to delete, newest first.
    """
    to_delete = []
    last_prefix: Optional[str] = None
    count = 0

    for image in sorted(images, key=lambda i: i["name"], reverse=True):
        m = IMAGE_PREFIX_RX.match(image["name"])
        if m is None:
            to_delete.append(image)
            last_prefix = None
        elif m.group(1) != last_prefix:
            last_prefix = m.group(1)
            count = 1
        else:
            count += 1
            if count > keep_images:
                to_delete.append(image)

    return to_delete


class _ImagePurger(BasePurger):
    """Shared listing and deletion for the image routines."""

    def get_resource_type(self) -> str:
        return "image"

    def get_all_resources(self) -> List[Dict[str, Any]]:
        return self.azure_client.list_images()

    def submit_delete(self, resource: Dict[str, Any]) -> Any:
        return self.azure_client.begin_delete_image(resource["name"])


class InvalidImagePurger(_ImagePurger):
    """
    Deletes images not tagged ``valid: true`` once past the build timeout.

    An image whose timestamp is younger than ``config.build_timeout`` is
    still being built or tested and is left alone. A 12-digit suffix that is
    not a real date gives no age, so such images must carry the valid tag.
    """

    routine = "invalid-images"

    def select_for_deletion(
        self, resources: List[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        return select_invalid_images(
            resources, self.config.now, self.config.build_timeout
        )


class OldImagePurger(_ImagePurger):
    """Keeps the ``config.keep_images`` newest images of each prefix."""

    routine = "old-images"

    def select_for_deletion(
        self, resources: List[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        return select_old_images(resources, self.config.keep_images)
