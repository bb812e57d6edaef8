from pathlib import Path

import pytest

from careershot.stores.base import ObjectStore, RecordStore, StoreUnavailableError
from careershot.stores.filesystem_store import FilesystemObjectStore, FilesystemRecordStore

from conftest import CONTAINER, TABLE, write_blob, write_record


def test_filesystem_stores_satisfy_protocols(record_store, object_store):
    assert isinstance(record_store, RecordStore)
    assert isinstance(object_store, ObjectStore)


def test_query_partition_yields_records_in_file_order(tmp_path: Path, record_store: FilesystemRecordStore):
    write_record(tmp_path, "John Doe")
    write_record(tmp_path, "Jane Doe", git_hub="https://github.com/jane")
    write_record(tmp_path, "Alice Liddell")

    records = list(record_store.query_partition("J"))

    assert [r.row_key for r in records] == ["janedoe", "johndoe"]
    assert records[0].git_hub == "https://github.com/jane"
    assert all(r.partition_key == "J" for r in records)


def test_query_partition_is_lazy(tmp_path: Path, record_store: FilesystemRecordStore):
    write_record(tmp_path, "Jane Doe")
    # Nothing is read until iteration starts.
    iterator = record_store.query_partition("J")
    (tmp_path / "tables" / TABLE / "J" / "janedoe.json").unlink()
    assert list(iterator) == []


def test_missing_partition_is_empty(record_store: FilesystemRecordStore):
    assert list(record_store.query_partition("Q")) == []


@pytest.mark.parametrize("partition_key", ["", ".", "..", "/", "\\"])
def test_unsafe_partition_keys_are_empty(tmp_path: Path, record_store: FilesystemRecordStore, partition_key):
    write_record(tmp_path, "Jane Doe")
    assert list(record_store.query_partition(partition_key)) == []


def test_corrupt_record_raises_store_error(tmp_path: Path, record_store: FilesystemRecordStore):
    path = tmp_path / "tables" / TABLE / "J" / "broken.json"
    path.parent.mkdir(parents=True)
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(StoreUnavailableError):
        list(record_store.query_partition("J"))


def test_exists(tmp_path: Path, object_store: FilesystemObjectStore):
    write_blob(tmp_path, "janedoe.png")

    assert object_store.exists(CONTAINER, "janedoe.png") is True
    assert object_store.exists(CONTAINER, "janedoe.jpg") is False
    assert object_store.exists("other-container", "janedoe.png") is False


def test_exists_rejects_path_escapes(tmp_path: Path, object_store: FilesystemObjectStore):
    (tmp_path / "secret.txt").write_text("x")
    assert object_store.exists(CONTAINER, "../../secret.txt") is False
    assert object_store.exists("..", "secret.txt") is False


def test_public_url_with_base_url(object_store: FilesystemObjectStore):
    assert object_store.public_url(CONTAINER, "jane doe.png") == "https://media.example.com/media-dev/jane%20doe.png"


def test_public_url_without_base_url_is_file_uri(tmp_path: Path):
    store = FilesystemObjectStore(tmp_path)
    url = store.public_url(CONTAINER, "janedoe.pdf")
    assert url.startswith("file://")
    assert url.endswith("/blobs/media-dev/janedoe.pdf")


def test_entity_without_name_is_yielded_not_fatal(tmp_path: Path, record_store: FilesystemRecordStore):
    write_record(tmp_path, "Jane Doe")
    nameless = tmp_path / "tables" / TABLE / "J" / "aaa.json"
    nameless.write_text('{"PartitionKey": "J", "RowKey": "aaa"}', encoding="utf-8")

    records = list(record_store.query_partition("J"))

    assert [r.name for r in records] == ["", "Jane Doe"]
