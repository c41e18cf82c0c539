"""
azure-purge: Stale Azure Resource Purger
========================================

Deletes stale VM images, orphaned VHD blobs and expired resource groups
from an Azure subscription, based on naming conventions, tags and age
thresholds.

Modules
-------
core
    Core infrastructure components (Azure client, configuration, base purger)
purgers
    The purge routines and their decision functions
cleaners
    The delete executor
reporters
    Terminal output

Example
-------
>>> from azure_purge import AzureClient, PurgeConfig, PurgeManager
>>>
>>> config = PurgeConfig(subscription_id="...", dry_run=True)
>>> with AzureClient(config) as client:
...     run = PurgeManager(client, config).run()
>>> print(f"Would delete {run.total_selected} resources")

Notes
-----
Requires Azure credentials usable by ``DefaultAzureCredential``:
- Environment variables (AZURE_CLIENT_ID, AZURE_TENANT_ID, AZURE_CLIENT_SECRET)
- Managed identity (when running on Azure infrastructure)
- Azure CLI login (``az login``)

See Also
--------
azure-identity : Azure credential providers for Python
"""

__version__ = "0.1.0"
__license__ = "MIT"

# Public API
from azure_purge.core.azure_client import AzureClient
from azure_purge.core.base_purger import BasePurger, PurgeResult
from azure_purge.core.config import PurgeConfig
from azure_purge.core.exceptions import AzurePurgeError
from azure_purge.purge_manager import PurgeManager, PurgeRunResult

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Core classes
    "AzureClient",
    "AzurePurgeError",
    "BasePurger",
    "PurgeConfig",
    "PurgeResult",
    "PurgeManager",
    "PurgeRunResult",
]
