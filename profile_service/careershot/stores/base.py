"""
Capability interfaces for the two backing stores.

The resolver only ever talks to these protocols, so any implementation
(local filesystem, Azure, a test double) can be injected.
"""

from __future__ import annotations

from typing import Iterator, Protocol, runtime_checkable
from urllib.parse import urlsplit, urlunsplit

from ..schemas import ProfileRecord


class StoreUnavailableError(RuntimeError):
    """A backing store call failed; the original error is chained."""


@runtime_checkable
class RecordStore(Protocol):
    def query_partition(self, partition_key: str) -> Iterator[ProfileRecord]:
        """
        Lazily yield every record in `partition_key`, in store order.

        Implementations must not build filter expressions by interpolating
        `partition_key` into a query string.
        """
        ...


@runtime_checkable
class ObjectStore(Protocol):
    def exists(self, container: str, key: str) -> bool:
        ...

    def public_url(self, container: str, key: str) -> str:
        """Stable URL for an object, without any access-token query."""
        ...


def strip_access_token(url: str) -> str:
    """Drop the query string and fragment (e.g. a SAS token) from a URL."""
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))
