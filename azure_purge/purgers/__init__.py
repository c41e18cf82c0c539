"""
Purge Routines
==============

Each routine pairs a pure decision function with a :class:`BasePurger`
subclass that lists and deletes through the Azure client.

Available Purgers
-----------------
InvalidImagePurger
    Deletes images not tagged valid once past the build timeout.
OldImagePurger
    Keeps only the newest images of each name prefix.
BlobPurger
    Deletes VHD blobs with no matching image.
GroupPurger
    Deletes resource groups whose ``now`` tag has expired.

See Also
--------
azure_purge.core.base_purger : Base class for all purgers.
"""

from azure_purge.purgers.blob_purger import BlobPurger, select_orphan_blobs
from azure_purge.purgers.group_purger import GroupPurger, select_expired_groups
from azure_purge.purgers.image_purger import (
    InvalidImagePurger,
    OldImagePurger,
    select_invalid_images,
    select_old_images,
)

__all__ = [
    "BlobPurger",
    "GroupPurger",
    "InvalidImagePurger",
    "OldImagePurger",
    "select_expired_groups",
    "select_invalid_images",
    "select_old_images",
    "select_orphan_blobs",
]
