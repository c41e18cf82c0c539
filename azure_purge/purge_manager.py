"""
Purge Manager Module
====================

Runs the purge routines one after another against a single client and
configuration, and aggregates their results.

Routines run in this order, each re-listing its resources so it sees the
deletions of the ones before it:

1. ``invalid-images`` (:class:`InvalidImagePurger`)
2. ``old-images`` (:class:`OldImagePurger`)
3. ``orphan-blobs`` (:class:`BlobPurger`)
4. ``expired-groups`` (:class:`GroupPurger`)

Example
-------
>>> from azure_purge.purge_manager import PurgeManager
>>>
>>> manager = PurgeManager(client, config)
>>> run = manager.run()
>>> print(f"{run.total_selected} resources selected for deletion")

Notes
-----
The first error raised by a routine stops the run; routines after it do not
start.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Type

from azure_purge.cleaners.delete_executor import DeleteExecutor
from azure_purge.core.base_purger import BasePurger, PurgeResult
from azure_purge.core.config import PurgeConfig
from azure_purge.purgers import (
    BlobPurger,
    GroupPurger,
    InvalidImagePurger,
    OldImagePurger,
)

# Module logger
logger = logging.getLogger(__name__)

DEFAULT_ROUTINES: List[Type[BasePurger]] = [
    InvalidImagePurger,
    OldImagePurger,
    BlobPurger,
    GroupPurger,
]


@dataclass
class PurgeRunResult:
    """
    Aggregated results of a purge run.

    Parameters
    ----------
    now : datetime
        The purge instant every routine compared ages against.
    dry_run : bool
        Whether deletes were skipped.
    results : list of PurgeResult
        One entry per routine, in run order.
    """

    now: datetime
    dry_run: bool
    results: List[PurgeResult] = field(default_factory=list)

    @property
    def total_selected(self) -> int:
        """Resources selected for deletion across all routines."""
        return sum(r.selected_count for r in self.results)

    @property
    def total_deleted(self) -> int:
        """Resources actually deleted across all routines."""
        return sum(r.summary.deleted for r in self.results)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "now": self.now.isoformat(),
            "dry_run": self.dry_run,
            "total_selected": self.total_selected,
            "total_deleted": self.total_deleted,
            "results": [r.to_dict() for r in self.results],
        }


class PurgeManager:
    """
    Orchestrates the purge routines.

    Parameters
    ----------
    azure_client : AzureClient
        Client shared by every routine.
    config : PurgeConfig
        Configuration shared by every routine.
    decision_callback : callable, optional
        Called with ``(resource_type, name)`` for every deletion decision.
    routines : list of BasePurger subclasses, optional
        Routines to run, in order. Defaults to :data:`DEFAULT_ROUTINES`.
    """

    def __init__(
        self,
        azure_client,
        config: PurgeConfig,
        decision_callback: Optional[Callable[[str, str], None]] = None,
        routines: Optional[List[Type[BasePurger]]] = None,
    ) -> None:
        self.azure_client = azure_client
        self.config = config
        self.executor = DeleteExecutor(
            dry_run=config.dry_run,
            decision_callback=decision_callback,
        )
        self.routines = list(routines or DEFAULT_ROUTINES)

    def run(self, progress_callback: Optional[Callable[[PurgeResult], None]] = None) -> PurgeRunResult:
        """
        Run every routine in order.

        Parameters
        ----------
        progress_callback : callable, optional
            Called with each routine's :class:`PurgeResult` as it finishes.

        Returns
        -------
        PurgeRunResult
            Results of all routines.
        """
        run = PurgeRunResult(now=self.config.now, dry_run=self.config.dry_run)
        logger.debug(f"Purge run configuration: {self.config.to_dict()}")

        for routine in self.routines:
            purger = routine(self.azure_client, self.config, self.executor)
            result = purger.purge()
            run.results.append(result)
            if progress_callback:
                progress_callback(result)

        logger.info(
            f"Purge run complete: {run.total_selected} selected, "
            f"{run.total_deleted} deleted"
        )
        return run
