"""
Executor for deleting the resources selected by a purger.

Submits every delete of a batch before waiting on any of them, then blocks
until all have completed. The first failure aborts the batch.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..core.exceptions import DeleteError

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Printed nouns for resource types, as in "delete group ci-1"
DECISION_LABELS = {
    "image": "image",
    "blob": "blob",
    "resource_group": "group",
}


def describe_decision(resource_type: str, name: str) -> str:
    """Return the "delete <type> <name>" line for a deletion decision."""
    label = DECISION_LABELS.get(resource_type, resource_type.replace("_", " "))
    return f"delete {label} {name}"


class DeleteStatus(Enum):
    """Status of a delete operation."""

    SUCCESS = "success"
    DRY_RUN = "dry_run"


@dataclass
class DeleteResult:
    """
    Result of a single resource deletion.

    Attributes:
        name: Resource name
        resource_type: Resource type ('image', 'blob', 'resource_group')
        status: Result status
        timestamp: When the deletion was decided
    """

    name: str
    resource_type: str
    status: DeleteStatus
    timestamp: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "resource_type": self.resource_type,
            "status": self.status.value,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class DeleteSummary:
    """
    Summary of a batch delete operation.

    Attributes:
        total: Total number of resources processed
        deleted: Number deleted
        dry_run: Number processed in dry-run mode
        results: Individual results for each resource
        start_time: When the operation started
        end_time: When the operation completed
    """

    total: int = 0
    deleted: int = 0
    dry_run: int = 0
    results: List[DeleteResult] = field(default_factory=list)
    start_time: datetime = field(default_factory=_utcnow)
    end_time: Optional[datetime] = None

    def add_result(self, result: DeleteResult) -> None:
        """Add a result and update counts."""
        self.results.append(result)
        self.total += 1

        if result.status == DeleteStatus.SUCCESS:
            self.deleted += 1
        elif result.status == DeleteStatus.DRY_RUN:
            self.dry_run += 1

    def complete(self) -> None:
        """Mark the operation as complete."""
        self.end_time = _utcnow()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total": self.total,
            "deleted": self.deleted,
            "dry_run": self.dry_run,
            "results": [r.to_dict() for r in self.results],
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
        }


class DeleteExecutor:
    """
    Fan-out/fan-in deleter.

    Every decision is reported before the delete is issued, so dry-run and
    live runs print the same lines.

    Args:
        dry_run: If True, report decisions without calling ``submit``
        decision_callback: Optional callback receiving
            ``(resource_type, name)`` for each deletion decision
    """

    def __init__(
        self,
        dry_run: bool = False,
        decision_callback: Optional[Callable[[str, str], None]] = None,
    ):
        self.dry_run = dry_run
        self.decision_callback = decision_callback

    def _report(self, resource_type: str, name: str) -> None:
        logger.debug(describe_decision(resource_type, name))
        if self.decision_callback:
            self.decision_callback(resource_type, name)

    def execute(
        self,
        resources: List[Dict[str, Any]],
        resource_type: str,
        submit: Callable[[Dict[str, Any]], Any],
    ) -> DeleteSummary:
        """
        Delete a batch of resources.

        Args:
            resources: Resource dicts with a 'name' key
            resource_type: Resource type, used for reporting and errors
            submit: Issues the delete for one resource and returns a handle
                with a blocking ``result()`` method (an ``LROPoller`` or a
                ``Future``), or None when the delete already completed

        Returns:
            DeleteSummary with results

        Raises:
            DeleteError: On the first submission or completion failure.
                Operations already submitted keep running.
        """
        summary = DeleteSummary()
        pending: List[Tuple[str, Any]] = []

        for resource in resources:
            name = resource["name"]
            self._report(resource_type, name)

            if self.dry_run:
                summary.add_result(
                    DeleteResult(name, resource_type, DeleteStatus.DRY_RUN)
                )
                continue

            try:
                handle = submit(resource)
            except Exception as e:
                raise DeleteError(
                    f"Failed to submit delete for {resource_type} {name}: {e}",
                    resource_name=name,
                    resource_type=resource_type,
                ) from e
            pending.append((name, handle))

        for name, handle in pending:
            if handle is not None:
                try:
                    handle.result()
                except Exception as e:
                    raise DeleteError(
                        f"Delete of {resource_type} {name} did not complete: {e}",
                        resource_name=name,
                        resource_type=resource_type,
                    ) from e
            summary.add_result(DeleteResult(name, resource_type, DeleteStatus.SUCCESS))

        summary.complete()
        return summary
