import json
from pathlib import Path

import pytest

from careershot.config import Settings
from careershot.stores.filesystem_store import FilesystemObjectStore, FilesystemRecordStore

TABLE = "careershotinformation"
CONTAINER = "media-dev"

# Variables a host or container runtime may set that must not reach Settings.
AMBIENT_ENV = (
    "CONTAINER_NAME",
    "TABLE_NAME",
    "DATA_ROOT",
    "MEDIA_CONTAINER_NAME",
    "RECORD_TABLE_NAME",
    "PROFILE_DATA_ROOT",
)


def write_record(root: Path, name: str, row_key: str | None = None, **fields: str) -> Path:
    """Store a profile entity the way the record table shapes it."""
    partition_key = name.strip()[0].upper()
    row_key = row_key if row_key is not None else "".join(name.lower().split())
    entity = {
        "PartitionKey": partition_key,
        "RowKey": row_key,
        "Name": name,
        "Description": fields.get("description", f"{name} bio"),
        "LinkedIn": fields.get("linked_in", ""),
        "GitHub": fields.get("git_hub", ""),
        "Skills": fields.get("skills", "[]"),
    }
    path = root / "tables" / TABLE / partition_key / f"{row_key}.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(entity), encoding="utf-8")
    return path


def write_blob(root: Path, key: str, data: bytes = b"\x00") -> Path:
    path = root / "blobs" / CONTAINER / key
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in AMBIENT_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def record_store(tmp_path: Path) -> FilesystemRecordStore:
    return FilesystemRecordStore(tmp_path, TABLE)


@pytest.fixture
def object_store(tmp_path: Path) -> FilesystemObjectStore:
    return FilesystemObjectStore(tmp_path, base_url="https://media.example.com")


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        store_backend="filesystem",
        data_root=tmp_path,
        table_name=TABLE,
        container_name=CONTAINER,
        media_base_url="https://media.example.com",
        auth_mode="production",
        auth_secret="test-secret-with-at-least-32-bytes!!",
        auth_authority="https://login.example.com",
        auth_audience="careershot-api",
    )
