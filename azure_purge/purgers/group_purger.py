"""
Resource Group Purger Module
============================

Removes resource groups whose creation-epoch tag has expired.

Groups created by test clusters carry a ``now`` tag holding the Unix time
(in seconds) they were created. Once ``group_timeout`` has elapsed since
then the group is deleted. Groups without the tag are not managed here and
are never touched.

Example
-------
>>> from azure_purge.purgers.group_purger import select_expired_groups
>>>
>>> groups = [
...     {"name": "ci-1", "tags": {"now": "1514764800"}},
...     {"name": "prod", "tags": {}},
... ]
>>> [g["name"] for g in select_expired_groups(groups, now, timedelta(days=3))]
['ci-1']
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from azure_purge.core.base_purger import BasePurger

# Module logger
logger = logging.getLogger(__name__)

CREATED_TAG = "now"

EPOCH_RX = re.compile(r"-?[0-9]+")


def _parse_epoch(value: str) -> Optional[int]:
    # ASCII digits with an optional minus, within int64
    if not isinstance(value, str) or not EPOCH_RX.fullmatch(value):
        return None
    epoch = int(value)
    if not -(2 ** 63) <= epoch < 2 ** 63:
        return None
    return epoch


def select_expired_groups(
    groups: List[Dict[str, Any]],
    now: datetime,
    group_timeout: timedelta,
) -> List[Dict[str, Any]]:
    """
    Select groups whose ``now`` tag is at least ``group_timeout`` old.

    Parameters
    ----------
    groups : list of dict
        Resource group dicts with 'name' and 'tags'.
    now : datetime
        The purge instant (timezone-aware UTC).
    group_timeout : timedelta
        Lifetime of a tagged group.

    Returns
    -------
    list of dict
        The groups to delete, in listing order.
    """
    now_epoch = now.timestamp()
    timeout = group_timeout.total_seconds()

    to_delete = []
    for group in groups:
        tags = group.get("tags") or {}
        if CREATED_TAG not in tags:
            continue

        created = _parse_epoch(tags[CREATED_TAG])
        if created is None:
            logger.warning(
                f"Keeping resource group {group['name']}: "
                f"unparsable {CREATED_TAG} tag {tags[CREATED_TAG]!r}"
            )
            continue

        if now_epoch - created >= timeout:
            to_delete.append(group)

    return to_delete


class GroupPurger(BasePurger):
    """Deletes resource groups tagged ``now`` once ``config.group_timeout`` has passed."""

    routine = "expired-groups"

    def get_resource_type(self) -> str:
        return "resource_group"

    def get_all_resources(self) -> List[Dict[str, Any]]:
        return self.azure_client.list_groups()

    def select_for_deletion(
        self, resources: List[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        return select_expired_groups(
            resources, self.config.now, self.config.group_timeout
        )

    def submit_delete(self, resource: Dict[str, Any]) -> Any:
        return self.azure_client.begin_delete_group(resource["name"])
