"""
Core Infrastructure Components
==============================

This module provides the foundational components for azure-purge:

- :class:`AzureClient` - Manages Azure credentials and service clients
- :class:`PurgeConfig` - Settings and purge instant for a run
- :class:`BasePurger` - Abstract base class for purge routines
- Exception hierarchy for error handling

Exceptions
----------
AzurePurgeError
    Base exception for all azure-purge errors.
ConfigError
    Raised when the configuration is invalid.
AzureClientError
    Base exception for Azure client errors.
CredentialsError
    Raised when credentials are invalid or missing.
ServiceError
    Raised when Azure service access fails.
PurgerError
    Base exception for purger errors.
ResourceFetchError
    Raised when listing resources fails.
CleanerError
    Base exception for cleaner errors.
DeleteError
    Raised when a delete fails to submit or complete.

See Also
--------
azure_purge.purgers : Purge routine implementations.
azure_purge.cleaners : Delete executor.
"""

from azure_purge.core.exceptions import (
    AzureClientError,
    AzurePurgeError,
    CleanerError,
    ConfigError,
    CredentialsError,
    DeleteError,
    PurgerError,
    ResourceFetchError,
    ServiceError,
)
from azure_purge.core.config import PurgeConfig, parse_duration
from azure_purge.core.azure_client import AzureClient
from azure_purge.core.base_purger import BasePurger, PurgeResult

__all__ = [
    # Client
    "AzureClient",
    # Configuration
    "PurgeConfig",
    "parse_duration",
    # Purger base
    "BasePurger",
    "PurgeResult",
    # Exceptions - Base
    "AzurePurgeError",
    "ConfigError",
    # Exceptions - Azure Client
    "AzureClientError",
    "CredentialsError",
    "ServiceError",
    # Exceptions - Purger
    "PurgerError",
    "ResourceFetchError",
    # Exceptions - Cleaner
    "CleanerError",
    "DeleteError",
]
