"""
Helpers for the ``<prefix>-<YYYYMMDDHHmm>`` naming convention.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

BUILD_TIMESTAMP_FORMAT = "%Y%m%d%H%M"


def parse_build_timestamp(stamp: str) -> Optional[datetime]:
    """
    Parse a 12-digit ``YYYYMMDDHHmm`` stamp as a UTC datetime.

    Returns None when the digits do not form a real date (e.g. month 13).
    """
    try:
        return datetime.strptime(stamp, BUILD_TIMESTAMP_FORMAT).replace(
            tzinfo=timezone.utc
        )
    except ValueError:
        return None
