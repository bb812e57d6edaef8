"""
Resolve a name query against the record and object stores.

Matching rules:

- A query is normalized by lowercasing it and removing all whitespace.
- The partition is the first non-whitespace character of the raw query,
  passed through `str.upper()`, the same rule writers use when they derive
  `PartitionKey` from a display name (so "ß" selects partition "SS").
- Records in that partition are scanned in store order; the first one whose
  own `name` normalizes to the query wins. `row_key` is not consulted.
- The photo is found by checking `<key>.jpg`, `<key>.jpeg`, `<key>.png`
  in that order. The resume is always `<key>.pdf` and is never checked.

Expected outcomes (empty query, no record, no photo, store failure) come back
as a `ResolutionError` value instead of being raised.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from ..schemas import ProfileRecord
from ..stores.base import ObjectStore, RecordStore, strip_access_token

logger = logging.getLogger(__name__)

PHOTO_EXTENSIONS: Tuple[str, ...] = ("jpg", "jpeg", "png")
RESUME_EXTENSION = "pdf"


class ErrorKind(enum.Enum):
    MISSING_PARAMETER = "MissingParameter"
    NOT_FOUND = "NotFound"
    ARTIFACT_NOT_FOUND = "ArtifactNotFound"
    BACKEND_UNAVAILABLE = "BackendUnavailable"


_STATUS_CODES = {
    ErrorKind.MISSING_PARAMETER: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.ARTIFACT_NOT_FOUND: 404,
    ErrorKind.BACKEND_UNAVAILABLE: 500,
}


@dataclass(frozen=True)
class ResolutionError:
    kind: ErrorKind
    message: str

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self.kind]


@dataclass(frozen=True)
class ArtifactLocators:
    photo_url: str
    resume_url: str


@dataclass(frozen=True)
class ProfileResult:
    record: ProfileRecord
    locators: ArtifactLocators


ResolutionResult = Union[ProfileResult, ResolutionError]

MISSING_PARAMETER = ResolutionError(ErrorKind.MISSING_PARAMETER, "Name parameter is required")
NOT_FOUND = ResolutionError(ErrorKind.NOT_FOUND, "User not found")
ARTIFACT_NOT_FOUND = ResolutionError(ErrorKind.ARTIFACT_NOT_FOUND, "User photo not found")
BACKEND_UNAVAILABLE = ResolutionError(ErrorKind.BACKEND_UNAVAILABLE, "Backend unavailable")


def normalize_name(value: str) -> str:
    """Lowercase `value` and drop every whitespace character."""
    return "".join(value.lower().split())


def partition_key_for(value: str) -> str:
    """Uppercased first non-whitespace character of `value`."""
    return value.lstrip()[0].upper()


class Resolver:
    """
    Stateless resolver over two injected store capabilities.

    One instance is shared by all requests; it holds only the read-only
    store handles and its scan limit.
    """

    def __init__(
        self,
        record_store: RecordStore,
        object_store: ObjectStore,
        container: str,
        max_partition_scan: int = 5000,
    ) -> None:
        self._records = record_store
        self._objects = object_store
        self._container = container
        self._max_scan = max_partition_scan

    def resolve(self, raw_query: Optional[str]) -> ResolutionResult:
        if raw_query is None:
            return MISSING_PARAMETER
        key = normalize_name(raw_query)
        if not key:
            return MISSING_PARAMETER

        try:
            record = self._match(partition_key_for(raw_query), key)
            if record is None:
                return NOT_FOUND

            photo_key = self._find_photo(key)
            if photo_key is None:
                logger.info("Profile %r has no photo in container %s", key, self._container)
                return ARTIFACT_NOT_FOUND

            locators = ArtifactLocators(
                photo_url=strip_access_token(self._objects.public_url(self._container, photo_key)),
                resume_url=strip_access_token(
                    self._objects.public_url(self._container, f"{key}.{RESUME_EXTENSION}")
                ),
            )
        except Exception:
            logger.exception("Store call failed while resolving %r", key)
            return BACKEND_UNAVAILABLE

        return ProfileResult(record=record, locators=locators)

    def _match(self, partition_key: str, key: str) -> Optional[ProfileRecord]:
        logger.debug("Scanning partition %r for %r", partition_key, key)

        for scanned, record in enumerate(self._records.query_partition(partition_key), start=1):
            if normalize_name(record.name) == key:
                logger.debug("Matched %r after %d record(s)", key, scanned)
                return record
            if scanned >= self._max_scan:
                logger.warning(
                    "Partition %r scan stopped at %d records without a match for %r",
                    partition_key,
                    self._max_scan,
                    key,
                )
                return None
        return None

    def _find_photo(self, key: str) -> Optional[str]:
        for extension in PHOTO_EXTENSIONS:
            candidate = f"{key}.{extension}"
            if self._objects.exists(self._container, candidate):
                return candidate
        return None
