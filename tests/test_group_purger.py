"""
Tests for the resource group expiry routine.
"""

import logging
from datetime import timedelta

from azure_purge.purgers.group_purger import GroupPurger, select_expired_groups

GROUP_TIMEOUT = timedelta(days=3)
TIMEOUT_SECONDS = int(GROUP_TIMEOUT.total_seconds())


def names(resources):
    return [r["name"] for r in resources]


class TestSelectExpiredGroups:
    """Tests for the group decision function."""

    def test_untagged_group_is_never_deleted(self, now):
        """Test that groups without a 'now' tag are not managed."""
        groups = [
            {"name": "prod", "tags": {}},
            {"name": "shared", "tags": None},
            {"name": "other", "tags": {"owner": "ops", "created": "0"}},
            {"name": "bare"},
        ]
        assert select_expired_groups(groups, now, GROUP_TIMEOUT) == []

    def test_expiry_boundary(self, now):
        """Test the deletion threshold around the group timeout."""
        epoch = int(now.timestamp())
        groups = [
            {"name": "expired", "tags": {"now": str(epoch - TIMEOUT_SECONDS - 1)}},
            {"name": "exact", "tags": {"now": str(epoch - TIMEOUT_SECONDS)}},
            {"name": "fresh", "tags": {"now": str(epoch - TIMEOUT_SECONDS + 1)}},
            {"name": "future", "tags": {"now": str(epoch + 3600)}},
        ]
        assert names(select_expired_groups(groups, now, GROUP_TIMEOUT)) == [
            "expired",
            "exact",
        ]

    def test_unparsable_tag_is_kept(self, now, caplog):
        """Test that a tag that is not an integer is treated as unexpired."""
        groups = [
            {"name": "odd", "tags": {"now": "yesterday"}},
            {"name": "empty", "tags": {"now": ""}},
            {"name": "float", "tags": {"now": "1514764800.5"}},
        ]

        with caplog.at_level(logging.WARNING):
            assert select_expired_groups(groups, now, GROUP_TIMEOUT) == []

        assert "odd" in caplog.text

    def test_loosely_formatted_tag_is_kept(self, now):
        """Test that only plain ASCII decimal epochs are accepted."""
        groups = [
            {"name": "underscored", "tags": {"now": "1_514_764_800"}},
            {"name": "padded", "tags": {"now": " 1514764800 "}},
            {"name": "newline", "tags": {"now": "1514764800\n"}},
            {"name": "plus", "tags": {"now": "+1514764800"}},
            {"name": "arabic", "tags": {"now": "\u0661\u0665\u0661\u0664\u0667\u0666\u0664\u0668\u0660\u0660"}},
            {"name": "overflow", "tags": {"now": "-" + "9" * 20}},
        ]
        assert select_expired_groups(groups, now, GROUP_TIMEOUT) == []

    def test_negative_epoch_is_parsed(self, now):
        """Test that a signed epoch is accepted."""
        groups = [{"name": "ancient", "tags": {"now": "-1"}}]
        assert names(select_expired_groups(groups, now, GROUP_TIMEOUT)) == ["ancient"]


class TestGroupPurger:
    """Tests for GroupPurger."""

    def test_purge_deletes_expired_groups(self, fake_client, config, events):
        """Test that expired groups are submitted then awaited."""
        fake_client.list_groups.return_value = [
            {"name": "ci-1", "tags": {"now": "1514764800"}},
            {"name": "ci-2", "tags": {"now": "1514764900"}},
            {"name": "prod", "tags": {}},
        ]

        result = GroupPurger(fake_client, config).purge()

        assert result.routine == "expired-groups"
        assert result.resource_type == "resource_group"
        assert result.selected == ["ci-1", "ci-2"]
        assert result.kept_count == 1
        assert events == [
            ("submit", "ci-1"),
            ("submit", "ci-2"),
            ("wait", "ci-1"),
            ("wait", "ci-2"),
        ]

    def test_dry_run_issues_no_deletes(self, fake_client, dry_run_config):
        """Test that dry-run selects but does not delete."""
        fake_client.list_groups.return_value = [
            {"name": "ci-1", "tags": {"now": "1514764800"}},
        ]

        result = GroupPurger(fake_client, dry_run_config).purge()

        assert result.selected == ["ci-1"]
        fake_client.begin_delete_group.assert_not_called()
