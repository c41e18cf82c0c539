"""
Base Purger Module
==================

Provides the abstract base class for all purge routines in azure-purge.

Every routine follows the same four steps:

1. list resources through the :class:`AzureClient`,
2. select the ones to delete with a pure decision function,
3. issue the deletes through a :class:`DeleteExecutor` (skipped in dry-run),
4. wait for every delete to complete.

Classes
-------
PurgeResult
    Data class containing results from a purge routine.
BasePurger
    Abstract base class for purge routines.

Example
-------
>>> from azure_purge.core.base_purger import BasePurger
>>>
>>> class SnapshotPurger(BasePurger):
...     def get_resource_type(self) -> str:
...         return "snapshot"
...
...     def get_all_resources(self) -> list:
...         return self.azure_client.list_snapshots()
...
...     def select_for_deletion(self, resources: list) -> list:
...         return [r for r in resources if r["name"].startswith("tmp-")]
...
...     def submit_delete(self, resource: dict):
...         return self.azure_client.begin_delete_snapshot(resource["name"])

Notes
-----
Purgers do not catch errors. A failed listing or delete propagates out of
:meth:`BasePurger.purge` and aborts the run.

See Also
--------
azure_purge.purgers : Concrete purge routines.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from azure_purge.cleaners.delete_executor import DeleteExecutor, DeleteSummary
from azure_purge.core.config import PurgeConfig

# Module logger
logger = logging.getLogger(__name__)


@dataclass
class PurgeResult:
    """
    Data class representing the results of one purge routine.

    Parameters
    ----------
    routine : str
        Name of the routine (e.g. 'invalid-images').
    resource_type : str
        Type of resource purged (e.g. 'image', 'blob').
    total_count : int
        Number of resources listed.
    selected : list of str
        Names selected for deletion, in the order they were processed.
    summary : DeleteSummary
        Outcome of the delete batch.
    dry_run : bool
        Whether deletes were skipped.
    """

    routine: str
    resource_type: str
    total_count: int
    selected: List[str]
    summary: DeleteSummary = field(default_factory=DeleteSummary)
    dry_run: bool = False

    @property
    def selected_count(self) -> int:
        """Number of resources selected for deletion."""
        return len(self.selected)

    @property
    def kept_count(self) -> int:
        """Number of listed resources left in place."""
        return self.total_count - self.selected_count

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert purge result to a dictionary for serialization.

        Returns
        -------
        dict
            Dictionary representation suitable for JSON serialization.
        """
        return {
            "routine": self.routine,
            "resource_type": self.resource_type,
            "total_count": self.total_count,
            "selected_count": self.selected_count,
            "kept_count": self.kept_count,
            "selected": self.selected,
            "dry_run": self.dry_run,
            "summary": self.summary.to_dict(),
        }

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"PurgeResult(routine='{self.routine}', "
            f"total={self.total_count}, "
            f"selected={self.selected_count})"
        )


class BasePurger(ABC):
    """
    Abstract base class for all purge routines.

    Parameters
    ----------
    azure_client : AzureClient
        Client used for listing and deleting.
    config : PurgeConfig
        Run configuration, including the shared purge instant.
    executor : DeleteExecutor, optional
        Executor used for the delete batch. Defaults to one honouring
        ``config.dry_run``.

    Attributes
    ----------
    routine : str
        Routine name used in logs and reports. Subclasses override it.
    """

    routine = "purge"

    def __init__(
        self,
        azure_client,
        config: PurgeConfig,
        executor: Optional[DeleteExecutor] = None,
    ) -> None:
        self.azure_client = azure_client
        self.config = config
        self.executor = executor or DeleteExecutor(dry_run=config.dry_run)
        logger.debug(f"Initialized {self.__class__.__name__}")

    @abstractmethod
    def get_resource_type(self) -> str:
        """
        Get the type of resource this purger handles.

        Returns
        -------
        str
            Lowercase identifier, e.g. 'image' or 'resource_group'.
        """
        pass

    @abstractmethod
    def get_all_resources(self) -> List[Dict[str, Any]]:
        """
        List every candidate resource.

        Returns
        -------
        list of dict
            Resource dicts, each with at least a 'name' key.

        Raises
        ------
        ResourceFetchError
            If the listing fails.
        """
        pass

    @abstractmethod
    def select_for_deletion(
        self, resources: List[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        """
        Choose which of ``resources`` to delete.

        Must not call Azure; all inputs come from the listing and the config.
        """
        pass

    @abstractmethod
    def submit_delete(self, resource: Dict[str, Any]) -> Any:
        """
        Issue the delete for one resource.

        Returns
        -------
        object or None
            A handle with a blocking ``result()`` method, or None if the
            delete already completed.
        """
        pass

    def purge(self) -> PurgeResult:
        """
        Run the routine: list, select, delete, wait.

        Returns
        -------
        PurgeResult
            Counts and names of the selected resources and the delete summary.
        """
        resource_type = self.get_resource_type()
        logger.info(f"Starting {self.routine}")

        resources = self.get_all_resources()
        to_delete = self.select_for_deletion(resources)
        logger.debug(
            f"Selected {len(to_delete)} of {len(resources)} {resource_type}s for deletion"
        )

        summary = self.executor.execute(to_delete, resource_type, self.submit_delete)

        result = PurgeResult(
            routine=self.routine,
            resource_type=resource_type,
            total_count=len(resources),
            selected=[r["name"] for r in to_delete],
            summary=summary,
            dry_run=self.executor.dry_run,
        )
        logger.info(
            f"Finished {self.routine}: {result.selected_count}/{result.total_count} "
            f"{resource_type}s {'would be ' if result.dry_run else ''}deleted"
        )
        return result

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"{self.__class__.__name__}("
            f"routine='{self.routine}', "
            f"resource_type='{self.get_resource_type()}')"
        )
