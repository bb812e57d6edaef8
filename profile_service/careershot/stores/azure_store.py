"""
Azure Table Storage / Azure Blob Storage adapters.

Both wrap long-lived SDK clients that are created once at startup and shared
by every request. SDK failures surface as `StoreUnavailableError`.
"""

from __future__ import annotations

from typing import Iterator

from azure.core.exceptions import AzureError
from azure.data.tables import TableClient, TableServiceClient
from azure.storage.blob import BlobServiceClient
from pydantic import ValidationError

from ..schemas import ProfileRecord
from .base import StoreUnavailableError, strip_access_token

PARTITION_FILTER = "PartitionKey eq @partition_key"


class AzureTableRecordStore:
    """Profile records from an Azure table, queried one partition at a time."""

    def __init__(self, table_client: TableClient) -> None:
        self._table = table_client

    @classmethod
    def from_connection_string(cls, connection_string: str, table_name: str) -> "AzureTableRecordStore":
        service = TableServiceClient.from_connection_string(conn_str=connection_string)
        return cls(service.get_table_client(table_name))

    def query_partition(self, partition_key: str) -> Iterator[ProfileRecord]:
        # The SDK escapes parameter values, so user input never lands in the filter text.
        try:
            entities = self._table.query_entities(
                query_filter=PARTITION_FILTER,
                parameters={"partition_key": partition_key},
            )
            for entity in entities:
                yield ProfileRecord.model_validate(dict(entity))
        except AzureError as exc:
            raise StoreUnavailableError(f"table query failed for partition {partition_key!r}") from exc
        except ValidationError as exc:
            raise StoreUnavailableError("table returned a malformed profile entity") from exc


class AzureBlobObjectStore:
    """Existence checks and public URLs for blobs."""

    def __init__(self, service_client: BlobServiceClient) -> None:
        self._service = service_client

    @classmethod
    def from_sas(cls, endpoint: str, sas_token: str) -> "AzureBlobObjectStore":
        account_url = f"{endpoint.rstrip('/')}?{sas_token.lstrip('?')}"
        return cls(BlobServiceClient(account_url=account_url))

    def exists(self, container: str, key: str) -> bool:
        blob = self._service.get_blob_client(container=container, blob=key)
        try:
            return bool(blob.exists())
        except AzureError as exc:
            raise StoreUnavailableError(f"existence check failed for {container}/{key}") from exc

    def public_url(self, container: str, key: str) -> str:
        blob = self._service.get_blob_client(container=container, blob=key)
        return strip_access_token(blob.url)
