"""
Tests for the purge configuration and naming helpers.
"""

from datetime import datetime, timedelta, timezone

import pytest

from azure_purge.core.config import PurgeConfig, parse_duration
from azure_purge.core.exceptions import ConfigError
from azure_purge.core.naming import parse_build_timestamp


class TestParseDuration:
    """Tests for parse_duration."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("30s", timedelta(seconds=30)),
            ("45m", timedelta(minutes=45)),
            ("6h", timedelta(hours=6)),
            ("3d", timedelta(days=3)),
            (" 12h ", timedelta(hours=12)),
        ],
    )
    def test_valid_durations(self, value, expected):
        """Test parsing each supported unit."""
        assert parse_duration(value) == expected

    @pytest.mark.parametrize("value", ["", "6", "h", "6w", "-1h", "1.5h"])
    def test_invalid_durations(self, value):
        """Test that malformed durations raise ConfigError."""
        with pytest.raises(ConfigError):
            parse_duration(value)


class TestPurgeConfig:
    """Tests for PurgeConfig."""

    def test_defaults(self):
        """Test the default thresholds and locations."""
        config = PurgeConfig(subscription_id="sub")

        assert config.resource_group == "images"
        assert config.storage_account == "openshiftimages"
        assert config.container == "images"
        assert config.keep_images == 5
        assert config.build_timeout == timedelta(hours=6)
        assert config.group_timeout == timedelta(days=3)
        assert config.dry_run is False

    def test_now_is_captured_once(self):
        """Test that the purge instant is fixed at construction."""
        config = PurgeConfig(subscription_id="sub")
        first = config.now

        assert config.now is first
        assert config.now.tzinfo is not None

    def test_naive_now_is_treated_as_utc(self):
        """Test that a naive instant is interpreted as UTC."""
        config = PurgeConfig(subscription_id="sub", now=datetime(2018, 1, 1))
        assert config.now == datetime(2018, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"subscription_id": ""},
            {"subscription_id": "   "},
            {"subscription_id": "sub", "keep_images": 0},
            {"subscription_id": "sub", "build_timeout": timedelta(0)},
            {"subscription_id": "sub", "group_timeout": timedelta(hours=-1)},
        ],
    )
    def test_invalid_values(self, kwargs):
        """Test that invalid settings raise ConfigError."""
        with pytest.raises(ConfigError):
            PurgeConfig(**kwargs)

    def test_to_dict(self, config):
        """Test converting config to dictionary."""
        data = config.to_dict()

        assert data["build_timeout_seconds"] == 6 * 3600
        assert data["group_timeout_seconds"] == 3 * 24 * 3600
        assert data["now"] == "2018-06-01T12:00:00+00:00"


class TestParseBuildTimestamp:
    """Tests for parse_build_timestamp."""

    def test_valid_stamp(self):
        """Test parsing a well-formed stamp as UTC."""
        assert parse_build_timestamp("201806011230") == datetime(
            2018, 6, 1, 12, 30, tzinfo=timezone.utc
        )

    @pytest.mark.parametrize("stamp", ["201813010000", "201806310000", "201806012460"])
    def test_impossible_dates(self, stamp):
        """Test that digit runs that are not dates return None."""
        assert parse_build_timestamp(stamp) is None
