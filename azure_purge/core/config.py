"""
Purge Configuration
===================

Holds every setting a purge run needs, including the single purge instant
shared by all routines. One :class:`PurgeConfig` is built at startup and
passed explicitly to the client and every purger.

Example
-------
>>> from azure_purge.core.config import PurgeConfig, parse_duration
>>>
>>> config = PurgeConfig(
...     subscription_id="00000000-0000-0000-0000-000000000000",
...     build_timeout=parse_duration("6h"),
...     dry_run=True,
... )
>>> config.now.tzinfo is not None
True
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from azure_purge.core.exceptions import ConfigError

DEFAULT_RESOURCE_GROUP = "images"
DEFAULT_STORAGE_ACCOUNT = "openshiftimages"
DEFAULT_CONTAINER = "images"
DEFAULT_KEEP_IMAGES = 5
DEFAULT_BUILD_TIMEOUT = timedelta(hours=6)
DEFAULT_GROUP_TIMEOUT = timedelta(days=3)

_DURATION_RX = re.compile(r"^\s*(\d+)\s*([smhd])\s*$")
_DURATION_UNITS = {
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
}


def parse_duration(value: str) -> timedelta:
    """
    Parse a duration string such as ``"30m"``, ``"6h"`` or ``"3d"``.

    Parameters
    ----------
    value : str
        An integer followed by one of ``s``, ``m``, ``h`` or ``d``.

    Returns
    -------
    timedelta
        The parsed duration.

    Raises
    ------
    ConfigError
        If the string is not a valid duration.
    """
    m = _DURATION_RX.match(value or "")
    if m is None:
        raise ConfigError(
            f"Invalid duration: {value!r}",
            details={"hint": "Use <number><s|m|h|d>, e.g. '6h' or '3d'"},
        )
    amount, unit = m.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


def utcnow() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass
class PurgeConfig:
    """
    Settings for a single purge run.

    Attributes:
        subscription_id: Azure subscription to operate on
        resource_group: Resource group holding the images and storage account
        storage_account: Storage account holding the VHD blobs
        container: Blob container holding the VHD blobs
        keep_images: Images retained per name prefix
        build_timeout: Grace period for fresh images and blobs
        group_timeout: Lifetime of resource groups tagged with ``now``
        dry_run: Report decisions without issuing deletes
        now: The purge instant, captured once when the config is created
    """

    subscription_id: str
    resource_group: str = DEFAULT_RESOURCE_GROUP
    storage_account: str = DEFAULT_STORAGE_ACCOUNT
    container: str = DEFAULT_CONTAINER
    keep_images: int = DEFAULT_KEEP_IMAGES
    build_timeout: timedelta = DEFAULT_BUILD_TIMEOUT
    group_timeout: timedelta = DEFAULT_GROUP_TIMEOUT
    dry_run: bool = False
    now: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        """Validate fields after initialization."""
        if not self.subscription_id or not self.subscription_id.strip():
            raise ConfigError(
                "Subscription ID cannot be empty",
                details={"hint": "Set AZURE_SUBSCRIPTION_ID or pass --subscription-id"},
            )
        if self.keep_images < 1:
            raise ConfigError(
                "keep_images must be at least 1",
                details={"keep_images": self.keep_images},
            )
        if self.build_timeout <= timedelta(0):
            raise ConfigError("build_timeout must be positive")
        if self.group_timeout <= timedelta(0):
            raise ConfigError("group_timeout must be positive")
        if self.now.tzinfo is None:
            self.now = self.now.replace(tzinfo=timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "subscription_id": self.subscription_id,
            "resource_group": self.resource_group,
            "storage_account": self.storage_account,
            "container": self.container,
            "keep_images": self.keep_images,
            "build_timeout_seconds": int(self.build_timeout.total_seconds()),
            "group_timeout_seconds": int(self.group_timeout.total_seconds()),
            "dry_run": self.dry_run,
            "now": self.now.isoformat(),
        }
