"""
Azure Client Module
===================

Provides a wrapper around the Azure SDK for Python that exposes exactly the
list and delete operations the purge routines need.

Classes
-------
AzureClient
    Main client class for Azure operations.

Example
-------
>>> from azure_purge.core.azure_client import AzureClient
>>> from azure_purge.core.config import PurgeConfig
>>>
>>> config = PurgeConfig(subscription_id="00000000-0000-0000-0000-000000000000")
>>> client = AzureClient(config)
>>> client.validate_credentials()
True
>>> images = client.list_images()
>>> poller = client.begin_delete_image(images[0]["name"])
>>> poller.result()

Notes
-----
Credentials and service clients are created lazily on first access and
cached. Authentication, retries, pagination and long-running operation
polling are all left to the SDK.

See Also
--------
azure.identity : Credential providers.
azure.mgmt.compute, azure.mgmt.resource, azure.mgmt.storage : Management clients.
azure.storage.blob : Blob data-plane client.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from azure.core.exceptions import AzureError, ClientAuthenticationError
from azure.identity import DefaultAzureCredential
from azure.mgmt.compute import ComputeManagementClient
from azure.mgmt.resource import ResourceManagementClient
from azure.mgmt.storage import StorageManagementClient
from azure.storage.blob import BlobServiceClient, ContainerClient

from azure_purge.core.config import PurgeConfig
from azure_purge.core.exceptions import (
    AzureClientError,
    CredentialsError,
    ResourceFetchError,
    ServiceError,
)

# Module logger
logger = logging.getLogger(__name__)

MANAGEMENT_SCOPE = "https://management.azure.com/.default"
BLOB_ENDPOINT = "https://{account}.blob.core.windows.net"


class AzureClient:
    """
    Azure client wrapper with lazy credential and service client creation.

    Parameters
    ----------
    config : PurgeConfig
        Run configuration (subscription, resource group, storage account,
        container).
    credential : TokenCredential, optional
        Credential to use. Defaults to ``DefaultAzureCredential``, which
        reads the environment, managed identity or the Azure CLI login.

    Raises
    ------
    CredentialsError
        If Azure credentials are not found or invalid.
    ServiceError
        If unable to reach an Azure service.
    ResourceFetchError
        If listing resources fails.
    """

    def __init__(
        self,
        config: PurgeConfig,
        credential: Optional[Any] = None,
    ) -> None:
        """Initialize Azure client with the specified configuration."""
        self.config = config
        self.subscription_id = config.subscription_id

        # Lazy-loaded components
        self._credential = credential
        self._owns_credential = credential is None
        self._clients: Dict[str, Any] = {}

        logger.debug(f"Initialized AzureClient for subscription {self.subscription_id}")

    @property
    def credential(self) -> Any:
        """Get or create the Azure credential (lazy initialization)."""
        if self._credential is None:
            try:
                self._credential = DefaultAzureCredential()
            except Exception as e:
                raise CredentialsError(
                    f"Failed to create Azure credential: {e}",
                    details={"hint": "Run 'az login' or set AZURE_CLIENT_ID/AZURE_TENANT_ID/AZURE_CLIENT_SECRET"},
                ) from e
        return self._credential

    # =========================================================================
    # Service Client Accessors
    # =========================================================================

    def get_compute_client(self) -> ComputeManagementClient:
        """Get the compute management client."""
        if "compute" not in self._clients:
            self._clients["compute"] = ComputeManagementClient(
                self.credential, self.subscription_id
            )
            logger.debug("Created compute client")
        return self._clients["compute"]

    def get_resource_client(self) -> ResourceManagementClient:
        """Get the resource management client."""
        if "resource" not in self._clients:
            self._clients["resource"] = ResourceManagementClient(
                self.credential, self.subscription_id
            )
            logger.debug("Created resource client")
        return self._clients["resource"]

    def get_storage_client(self) -> StorageManagementClient:
        """Get the storage management client."""
        if "storage" not in self._clients:
            self._clients["storage"] = StorageManagementClient(
                self.credential, self.subscription_id
            )
            logger.debug("Created storage client")
        return self._clients["storage"]

    def get_container_client(self) -> ContainerClient:
        """
        Get the blob container client for the configured container.

        The blob client authenticates with the first access key of the
        storage account, fetched through the management API.

        Returns
        -------
        ContainerClient
            Client for ``config.container`` in ``config.storage_account``.

        Raises
        ------
        CredentialsError
            If the management credential is rejected.
        ServiceError
            If the account keys cannot be read.
        """
        if "container" in self._clients:
            return self._clients["container"]

        account = self.config.storage_account
        try:
            keys = self.get_storage_client().storage_accounts.list_keys(
                self.config.resource_group, account
            )
        except ClientAuthenticationError as e:
            raise CredentialsError(
                f"Not authorized to read keys for storage account {account}: {e}",
                service="storage",
            ) from e
        except AzureError as e:
            raise ServiceError(
                f"Failed to fetch keys for storage account {account}: {e}",
                service="storage",
                details={"resource_group": self.config.resource_group},
            ) from e

        key_list = list(keys.keys or [])
        if not key_list or not key_list[0].value:
            raise ServiceError(
                f"No keys returned for storage account {account}",
                service="storage",
            )

        blob_service = BlobServiceClient(
            account_url=BLOB_ENDPOINT.format(account=account),
            credential={"account_name": account, "account_key": key_list[0].value},
        )
        self._clients["blob"] = blob_service
        self._clients["container"] = blob_service.get_container_client(
            self.config.container
        )
        logger.debug(f"Created container client for {account}/{self.config.container}")
        return self._clients["container"]

    # =========================================================================
    # Listing
    # =========================================================================

    def list_images(self) -> List[Dict[str, Any]]:
        """
        List the images in the configured resource group.

        Returns
        -------
        list of dict
            One ``{"id", "name", "location", "tags"}`` dict per image.
        """
        try:
            pages = self.get_compute_client().images.list_by_resource_group(
                self.config.resource_group
            )
            return [
                {
                    "id": image.id,
                    "name": image.name,
                    "location": image.location,
                    "tags": dict(image.tags or {}),
                }
                for image in pages
            ]
        except ClientAuthenticationError as e:
            raise CredentialsError(f"Failed to list images: {e}", service="compute") from e
        except AzureError as e:
            raise ResourceFetchError(
                f"Failed to list images in {self.config.resource_group}: {e}",
                resource_type="image",
            ) from e

    def list_groups(self) -> List[Dict[str, Any]]:
        """
        List every resource group in the subscription.

        Returns
        -------
        list of dict
            One ``{"id", "name", "location", "tags"}`` dict per group.
        """
        try:
            return [
                {
                    "id": group.id,
                    "name": group.name,
                    "location": group.location,
                    "tags": dict(group.tags or {}),
                }
                for group in self.get_resource_client().resource_groups.list()
            ]
        except ClientAuthenticationError as e:
            raise CredentialsError(
                f"Failed to list resource groups: {e}", service="resource"
            ) from e
        except AzureError as e:
            raise ResourceFetchError(
                f"Failed to list resource groups: {e}",
                resource_type="resource_group",
            ) from e

    def list_blobs(self) -> List[Dict[str, Any]]:
        """
        List the blobs in the configured container.

        Returns
        -------
        list of dict
            One ``{"name", "last_modified"}`` dict per blob.
        """
        container = self.get_container_client()
        try:
            return [
                {"name": blob.name, "last_modified": blob.last_modified}
                for blob in container.list_blobs()
            ]
        except ClientAuthenticationError as e:
            raise CredentialsError(f"Failed to list blobs: {e}", service="storage") from e
        except AzureError as e:
            raise ResourceFetchError(
                f"Failed to list blobs in {self.config.storage_account}/{self.config.container}: {e}",
                resource_type="blob",
            ) from e

    # =========================================================================
    # Deletion
    # =========================================================================

    def begin_delete_image(self, name: str) -> Any:
        """Start deleting an image; returns the SDK's ``LROPoller``."""
        logger.debug(f"Submitting delete for image {name}")
        return self.get_compute_client().images.begin_delete(
            self.config.resource_group, name
        )

    def begin_delete_group(self, name: str) -> Any:
        """Start deleting a resource group; returns the SDK's ``LROPoller``."""
        logger.debug(f"Submitting delete for resource group {name}")
        return self.get_resource_client().resource_groups.begin_delete(name)

    def delete_blob(self, name: str) -> None:
        """Delete a blob. Blob deletes complete synchronously."""
        logger.debug(f"Deleting blob {name}")
        self.get_container_client().delete_blob(name)

    # =========================================================================
    # Credential Operations
    # =========================================================================

    def validate_credentials(self) -> bool:
        """
        Validate Azure credentials by requesting a management token.

        Returns
        -------
        bool
            True if a token was issued.

        Raises
        ------
        CredentialsError
            If no credential source could issue a token.
        """
        try:
            self.credential.get_token(MANAGEMENT_SCOPE)
            logger.info("Credentials validated")
            return True
        except ClientAuthenticationError as e:
            raise CredentialsError(
                "Invalid or missing Azure credentials",
                details={"error": str(e), "hint": "Run 'az login' or configure a service principal"},
            ) from e
        except AzureClientError:
            raise
        except Exception as e:
            logger.exception("Credential validation failed")
            raise CredentialsError(f"Failed to validate credentials: {e}") from e

    # =========================================================================
    # Context Manager Support
    # =========================================================================

    def __enter__(self) -> AzureClient:
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager and close cached clients."""
        self.close()

    def close(self) -> None:
        """
        Close every cached service client, newest first.

        A credential created here is closed too; one passed in by the caller
        is left open.
        """
        for client in reversed(list(self._clients.values())):
            close = getattr(client, "close", None)
            if close is not None:
                close()
        self._clients.clear()

        if self._owns_credential and self._credential is not None:
            self._credential.close()
            self._credential = None

    def __repr__(self) -> str:
        """Return string representation of the client."""
        return (
            f"AzureClient(subscription_id='{self.subscription_id}', "
            f"resource_group='{self.config.resource_group}')"
        )


__all__ = ["AzureClient", "AzureClientError"]
