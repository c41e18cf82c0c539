"""
Pytest configuration and shared fixtures for testing.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from azure_purge.core.azure_client import AzureClient
from azure_purge.core.config import PurgeConfig

SUBSCRIPTION_ID = "00000000-0000-0000-0000-000000000000"


class FakePoller:
    """Stand-in for an Azure LROPoller."""

    def __init__(self, name, events=None, error=None):
        self.name = name
        self.events = events if events is not None else []
        self.error = error

    def result(self):
        self.events.append(("wait", self.name))
        if self.error:
            raise self.error


@pytest.fixture
def now():
    """A fixed purge instant."""
    return datetime(2018, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def stamp(now):
    """Build a 12-digit name timestamp for a moment ``age`` before now."""

    def _stamp(age: timedelta) -> str:
        return (now - age).strftime("%Y%m%d%H%M")

    return _stamp


@pytest.fixture
def config(now):
    """A live-mode configuration with the default thresholds."""
    return PurgeConfig(subscription_id=SUBSCRIPTION_ID, now=now)


@pytest.fixture
def dry_run_config(now):
    """A dry-run configuration with the default thresholds."""
    return PurgeConfig(subscription_id=SUBSCRIPTION_ID, now=now, dry_run=True)


@pytest.fixture
def events():
    """Shared log of submit/wait events across fake pollers."""
    return []


@pytest.fixture
def fake_client(events):
    """
    A fake AzureClient with empty listings.

    Delete calls record a ("submit", name) event and return a FakePoller
    that records ("wait", name) when awaited.
    """
    client = MagicMock(spec=AzureClient)
    client.__enter__.return_value = client
    client.__exit__.return_value = False
    client.list_images.return_value = []
    client.list_blobs.return_value = []
    client.list_groups.return_value = []

    def _begin(name):
        events.append(("submit", name))
        return FakePoller(name, events)

    def _delete_blob(name):
        events.append(("submit", name))
        return None

    client.begin_delete_image.side_effect = _begin
    client.begin_delete_group.side_effect = _begin
    client.delete_blob.side_effect = _delete_blob
    client.validate_credentials.return_value = True
    return client
