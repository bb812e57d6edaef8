"""
Filesystem-backed record and object stores.

Records live at:

    <DATA_ROOT>/tables/<table>/<PartitionKey>/<RowKey>.json

one JSON entity (PascalCase properties) per file. Objects live at:

    <DATA_ROOT>/blobs/<container>/<key>

Used for local development and tests; production uses `azure_store`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterator, Optional
from urllib.parse import quote

from ..schemas import ProfileRecord
from .base import StoreUnavailableError, strip_access_token


def _is_safe_component(value: str) -> bool:
    # A single path segment that cannot climb out of its parent directory.
    return bool(value) and value not in (".", "..") and "/" not in value and "\\" not in value


class FilesystemRecordStore:
    """Reads profile entities from one directory per partition."""

    def __init__(self, root: Path, table: str) -> None:
        self._table_dir = Path(root) / "tables" / table

    @property
    def table_dir(self) -> Path:
        return self._table_dir

    def query_partition(self, partition_key: str) -> Iterator[ProfileRecord]:
        if not _is_safe_component(partition_key):
            return
        partition_dir = self._table_dir / partition_key
        if not partition_dir.is_dir():
            return

        try:
            entries = sorted(partition_dir.glob("*.json"))
        except OSError as exc:
            raise StoreUnavailableError(f"cannot list partition {partition_key!r}") from exc

        for path in entries:
            try:
                entity = json.loads(path.read_text(encoding="utf-8"))
                record = ProfileRecord.model_validate(entity)
            except (OSError, ValueError) as exc:
                raise StoreUnavailableError(f"unreadable record {path.name}") from exc
            yield record


class FilesystemObjectStore:
    """Resolves object keys to files under one directory per container."""

    def __init__(self, root: Path, base_url: Optional[str] = None) -> None:
        self._blob_dir = Path(root) / "blobs"
        self._base_url = (base_url or "").rstrip("/")

    def _path(self, container: str, key: str) -> Optional[Path]:
        if not (_is_safe_component(container) and _is_safe_component(key)):
            return None
        return self._blob_dir / container / key

    def exists(self, container: str, key: str) -> bool:
        path = self._path(container, key)
        if path is None:
            return False
        try:
            return path.is_file()
        except OSError as exc:
            raise StoreUnavailableError(f"cannot stat {container}/{key}") from exc

    def public_url(self, container: str, key: str) -> str:
        if self._base_url:
            url = f"{self._base_url}/{quote(container)}/{quote(key)}"
        else:
            url = (self._blob_dir / container / key).resolve().as_uri()
        return strip_access_token(url)
