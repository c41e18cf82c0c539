"""
Blob Purger Module
==================

Removes VHD blobs that no longer back a live image.

A blob is kept when its name is ``<image name>.vhd`` for an image that
currently exists in the managed resource group. Otherwise it is kept only
while its timestamp is younger than the build timeout, which covers uploads
whose image has not been created yet.

Example
-------
>>> from azure_purge.purgers.blob_purger import BlobPurger
>>>
>>> purger = BlobPurger(client, config)
>>> result = purger.purge()
>>> print(f"Deleted {result.selected_count} orphaned blobs")
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta
from typing import Any, Dict, List

from azure_purge.core.base_purger import BasePurger
from azure_purge.core.naming import parse_build_timestamp

# Module logger
logger = logging.getLogger(__name__)

BLOB_TIMESTAMP_RX = re.compile(r"-([0-9]{12})\.vhd\Z")


def select_orphan_blobs(
    blobs: List[Dict[str, Any]],
    images: List[Dict[str, Any]],
    now: datetime,
    build_timeout: timedelta,
) -> List[Dict[str, Any]]:
    """
    Select blobs with no matching image that are past the build timeout.

    Parameters
    ----------
    blobs : list of dict
        Blob dicts with a 'name'.
    images : list of dict
        The live images; ``<name>.vhd`` of each is protected.
    now : datetime
        The purge instant (timezone-aware UTC).
    build_timeout : timedelta
        Grace period for blobs without an image.

    Returns
    -------
    list of dict
        The blobs to delete, in listing order.
    """
    allowed = {image["name"] + ".vhd" for image in images}

    to_delete = []
    for blob in blobs:
        if blob["name"] in allowed:
            continue

        m = BLOB_TIMESTAMP_RX.search(blob["name"])
        if m is not None:
            uploaded = parse_build_timestamp(m.group(1))
            if uploaded is not None and now - uploaded < build_timeout:
                continue

        to_delete.append(blob)

    return to_delete


class BlobPurger(BasePurger):
    """
    Deletes VHD blobs in ``config.container`` with no corresponding image.

    The image list is fetched when the routine lists its blobs, so images
    removed by earlier routines of the same run no longer protect their
    blobs.
    """

    routine = "orphan-blobs"

    def __init__(self, azure_client, config, executor=None) -> None:
        super().__init__(azure_client, config, executor)
        self._images: List[Dict[str, Any]] = []

    def get_resource_type(self) -> str:
        return "blob"

    def get_all_resources(self) -> List[Dict[str, Any]]:
        self._images = self.azure_client.list_images()
        return self.azure_client.list_blobs()

    def select_for_deletion(
        self, resources: List[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        return select_orphan_blobs(
            resources, self._images, self.config.now, self.config.build_timeout
        )

    def submit_delete(self, resource: Dict[str, Any]) -> Any:
        return self.azure_client.delete_blob(resource["name"])
