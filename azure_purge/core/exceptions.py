"""
Custom Exceptions for azure-purge
=================================

This module defines a hierarchy of custom exceptions used throughout
the application for consistent error handling and reporting.

Exception Hierarchy
-------------------
::

    AzurePurgeError (base)
    ├── ConfigError
    ├── AzureClientError
    │   ├── CredentialsError
    │   └── ServiceError
    ├── PurgerError
    │   └── ResourceFetchError
    └── CleanerError
        └── DeleteError

Every error aborts the run: nothing in this package retries or aggregates
failures. The CLI catches :class:`AzurePurgeError` at the top level, prints
it and exits non-zero.

Example
-------
>>> from azure_purge.core.exceptions import AzurePurgeError, DeleteError
>>>
>>> try:
...     purger.purge()
... except DeleteError as e:
...     print(f"Delete failed for {e.resource_name}: {e}")
... except AzurePurgeError as e:
...     print(f"Purge failed: {e}")
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class AzurePurgeError(Exception):
    """
    Base exception for all azure-purge errors.

    Parameters
    ----------
    message : str
        Human-readable error message.
    details : dict, optional
        Additional context about the error.

    Example
    -------
    >>> raise AzurePurgeError("Something went wrong", details={"code": 500})
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class ConfigError(AzurePurgeError):
    """
    Raised when the purge configuration is invalid.

    Example
    -------
    >>> raise ConfigError(
    ...     "keep_images must be at least 1",
    ...     details={"keep_images": 0}
    ... )
    """

    pass


# =============================================================================
# Azure Client Exceptions
# =============================================================================


class AzureClientError(AzurePurgeError):
    """
    Base exception for Azure client-related errors.

    Parameters
    ----------
    message : str
        Human-readable error message.
    service : str, optional
        The Azure service that caused the error (e.g. 'compute', 'storage').
    details : dict, optional
        Additional context about the error.
    """

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.service = service
        full_details = details or {}
        if service:
            full_details["service"] = service
        super().__init__(message, full_details)


class CredentialsError(AzureClientError):
    """
    Raised when Azure credentials are invalid, missing, or expired.

    Example
    -------
    >>> raise CredentialsError(
    ...     "Azure credentials not found",
    ...     details={"hint": "Run 'az login' or set AZURE_CLIENT_ID"}
    ... )
    """

    pass


class ServiceError(AzureClientError):
    """
    Raised when an Azure service client cannot be created or reached.

    Example
    -------
    >>> raise ServiceError(
    ...     "Failed to fetch storage account keys",
    ...     service="storage",
    ... )
    """

    pass


# =============================================================================
# Purger Exceptions
# =============================================================================


class PurgerError(AzurePurgeError):
    """
    Base exception for purger-related errors.

    Parameters
    ----------
    message : str
        Human-readable error message.
    resource_type : str, optional
        The type of resource being purged.
    details : dict, optional
        Additional context about the error.
    """

    def __init__(
        self,
        message: str,
        resource_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.resource_type = resource_type
        full_details = details or {}
        if resource_type:
            full_details["resource_type"] = resource_type
        super().__init__(message, full_details)


class ResourceFetchError(PurgerError):
    """
    Raised when unable to list resources from Azure.

    Example
    -------
    >>> raise ResourceFetchError(
    ...     "Failed to list images",
    ...     resource_type="image",
    ... )
    """

    pass


# =============================================================================
# Cleaner Exceptions
# =============================================================================


class CleanerError(AzurePurgeError):
    """
    Base exception for cleaner-related errors.

    Parameters
    ----------
    message : str
        Human-readable error message.
    resource_name : str, optional
        The name of the resource being deleted.
    resource_type : str, optional
        The type of resource being deleted.
    details : dict, optional
        Additional context about the error.
    """

    def __init__(
        self,
        message: str,
        resource_name: Optional[str] = None,
        resource_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.resource_name = resource_name
        self.resource_type = resource_type
        full_details = details or {}
        if resource_name:
            full_details["resource_name"] = resource_name
        if resource_type:
            full_details["resource_type"] = resource_type
        super().__init__(message, full_details)


class DeleteError(CleanerError):
    """
    Raised when a delete request fails to submit or to complete.

    Example
    -------
    >>> raise DeleteError(
    ...     "Failed to delete image",
    ...     resource_name="rhel-201801010000",
    ...     resource_type="image"
    ... )
    """

    pass
