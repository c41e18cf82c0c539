"""
Resource Cleaners
=================

Provides the executor that deletes the resources selected by a purger.

Data Classes
------------
DeleteStatus
    Enum representing the status of a delete operation.
DeleteResult
    Result of a single resource deletion.
DeleteSummary
    Summary of a batch delete operation.

Example
-------
>>> from azure_purge.cleaners import DeleteExecutor
>>>
>>> executor = DeleteExecutor(dry_run=True)
>>> summary = executor.execute(images, "image", lambda i: client.begin_delete_image(i["name"]))
>>> print(f"Would delete: {summary.dry_run}")
"""

from azure_purge.cleaners.delete_executor import (
    DeleteExecutor,
    DeleteResult,
    DeleteStatus,
    DeleteSummary,
    describe_decision,
)

__all__ = [
    "DeleteExecutor",
    "DeleteResult",
    "DeleteStatus",
    "DeleteSummary",
    "describe_decision",
]
