"""
Backing store adapters.

`build_stores()` creates the process-wide record and object store clients
from settings; the app factory calls it once at startup.
"""

from __future__ import annotations

import logging
from typing import Tuple

from ..config import Settings
from .base import ObjectStore, RecordStore, StoreUnavailableError

logger = logging.getLogger(__name__)

__all__ = ["ObjectStore", "RecordStore", "StoreUnavailableError", "build_stores"]


def build_stores(settings: Settings) -> Tuple[RecordStore, ObjectStore]:
    if settings.store_backend == "azure":
        from .azure_store import AzureBlobObjectStore, AzureTableRecordStore

        logger.info("Using Azure stores (table=%s)", settings.table_name)
        return (
            AzureTableRecordStore.from_connection_string(
                settings.storage_account_connection_string, settings.table_name
            ),
            AzureBlobObjectStore.from_sas(settings.blob_service_endpoint, settings.blob_service_sas_token),
        )

    from .filesystem_store import FilesystemObjectStore, FilesystemRecordStore

    root = settings.data_root.resolve()
    logger.info("Using filesystem stores rooted at %s", root)
    return (
        FilesystemRecordStore(root, settings.table_name),
        FilesystemObjectStore(root, settings.media_base_url or None),
    )
