"""
Tests for the Delete Executor.
"""

from unittest.mock import MagicMock

import pytest

from azure_purge.cleaners.delete_executor import (
    DeleteExecutor,
    DeleteResult,
    DeleteStatus,
    DeleteSummary,
    describe_decision,
)
from azure_purge.core.exceptions import DeleteError


class TestDescribeDecision:
    """Tests for the decision line."""

    def test_resource_types_use_short_nouns(self):
        """Test that each resource type prints its noun."""
        assert describe_decision("image", "rhel-201801010000") == "delete image rhel-201801010000"
        assert describe_decision("blob", "rhel.vhd") == "delete blob rhel.vhd"
        assert describe_decision("resource_group", "ci-1") == "delete group ci-1"

    def test_unknown_type_falls_back_to_spaced_name(self):
        """Test that an unmapped type is printed readably."""
        assert describe_decision("managed_disk", "d1") == "delete managed disk d1"


class TestDeleteResult:
    """Tests for DeleteResult dataclass."""

    def test_to_dict(self):
        """Test converting result to dictionary."""
        result = DeleteResult("rhel-201801010000", "image", DeleteStatus.SUCCESS)
        data = result.to_dict()

        assert data["name"] == "rhel-201801010000"
        assert data["resource_type"] == "image"
        assert data["status"] == "success"
        assert "timestamp" in data


class TestDeleteSummary:
    """Tests for DeleteSummary dataclass."""

    def test_empty_summary(self):
        """Test empty summary."""
        summary = DeleteSummary()
        assert summary.total == 0
        assert summary.deleted == 0
        assert summary.dry_run == 0
        assert summary.end_time is None

    def test_add_multiple_results(self):
        """Test adding results updates counts."""
        summary = DeleteSummary()
        summary.add_result(DeleteResult("a", "image", DeleteStatus.SUCCESS))
        summary.add_result(DeleteResult("b", "image", DeleteStatus.DRY_RUN))
        summary.add_result(DeleteResult("c", "image", DeleteStatus.DRY_RUN))

        assert summary.total == 3
        assert summary.deleted == 1
        assert summary.dry_run == 2

    def test_complete_sets_end_time(self):
        """Test that complete() sets end_time."""
        summary = DeleteSummary()
        summary.complete()
        assert summary.end_time is not None
        assert summary.to_dict()["end_time"] is not None


class TestDeleteExecutor:
    """Tests for DeleteExecutor."""

    @staticmethod
    def _poller(events, name, error=None):
        poller = MagicMock()

        def _result():
            events.append(("wait", name))
            if error:
                raise error

        poller.result.side_effect = _result
        return poller

    def test_submits_all_before_waiting(self):
        """Test fan-out then fan-in ordering."""
        events = []

        def submit(resource):
            events.append(("submit", resource["name"]))
            return self._poller(events, resource["name"])

        summary = DeleteExecutor().execute(
            [{"name": "a"}, {"name": "b"}, {"name": "c"}], "image", submit
        )

        assert events == [
            ("submit", "a"),
            ("submit", "b"),
            ("submit", "c"),
            ("wait", "a"),
            ("wait", "b"),
            ("wait", "c"),
        ]
        assert summary.deleted == 3
        assert [r.name for r in summary.results] == ["a", "b", "c"]

    def test_none_handle_counts_as_completed(self):
        """Test that synchronous deletes need no waiting."""
        summary = DeleteExecutor().execute(
            [{"name": "x.vhd"}], "blob", lambda resource: None
        )
        assert summary.deleted == 1

    def test_dry_run_never_submits(self):
        """Test that dry-run reports without calling submit."""
        submit = MagicMock()
        decisions = []
        executor = DeleteExecutor(
            dry_run=True,
            decision_callback=lambda kind, name: decisions.append((kind, name)),
        )

        summary = executor.execute([{"name": "a"}, {"name": "b"}], "image", submit)

        submit.assert_not_called()
        assert summary.dry_run == 2
        assert summary.deleted == 0
        assert decisions == [("image", "a"), ("image", "b")]

    def test_decisions_are_reported_before_submission(self):
        """Test that each decision is reported before its delete is issued."""
        events = []

        def submit(resource):
            events.append(("submit", resource["name"]))

        executor = DeleteExecutor(
            decision_callback=lambda kind, name: events.append(("decide", name)),
        )
        executor.execute([{"name": "a"}, {"name": "b"}], "blob", submit)

        assert events == [
            ("decide", "a"),
            ("submit", "a"),
            ("decide", "b"),
            ("submit", "b"),
        ]

    def test_submission_error_aborts_batch(self):
        """Test that a failed submission stops further submissions."""
        submitted = []

        def submit(resource):
            if resource["name"] == "b":
                raise RuntimeError("throttled")
            submitted.append(resource["name"])
            return None

        with pytest.raises(DeleteError) as exc_info:
            DeleteExecutor().execute(
                [{"name": "a"}, {"name": "b"}, {"name": "c"}], "image", submit
            )

        assert submitted == ["a"]
        assert exc_info.value.resource_name == "b"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_completion_error_aborts_wait(self):
        """Test that the first failed operation raises without awaiting the rest."""
        events = []
        pollers = {
            "a": self._poller(events, "a", error=RuntimeError("conflict")),
            "b": self._poller(events, "b"),
        }

        with pytest.raises(DeleteError) as exc_info:
            DeleteExecutor().execute(
                [{"name": "a"}, {"name": "b"}],
                "resource_group",
                lambda resource: pollers[resource["name"]],
            )

        assert events == [("wait", "a")]
        assert exc_info.value.resource_type == "resource_group"
        assert "conflict" in str(exc_info.value)

    def test_empty_batch(self):
        """Test that an empty batch completes with no results."""
        summary = DeleteExecutor().execute([], "image", MagicMock())
        assert summary.total == 0
        assert summary.end_time is not None
