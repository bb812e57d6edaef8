"""
Pydantic schemas for the profile lookup service.

Two shapes live here:

- `ProfileRecord` mirrors the entity stored in the record table, whose
  property names are PascalCase (`PartitionKey`, `RowKey`, `LinkedIn`, ...).
- `UserProfileResponse` is the JSON returned by GET /api/user, whose keys
  are camelCase (`linkedIn`, `photoUrl`, ...).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel, to_pascal


class ProfileRecord(BaseModel):
    """
    Profile entity as stored in the record table.

    - partition_key: first letter of the display name, uppercased
    - row_key: normalized identifier (informational; matching uses `name`)
    - name: display name with its original casing and spacing
    - skills: serialized structured value, passed through unparsed

    Missing properties default to the empty string; a record with an empty
    name never matches a lookup.
    """

    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    partition_key: str = ""
    row_key: str = ""
    name: str = ""
    description: str = ""
    linked_in: str = ""
    git_hub: str = ""
    skills: str = ""


class UserProfileResponse(BaseModel):
    """Response payload for GET /api/user."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    description: str
    linked_in: str
    git_hub: str
    skills: str
    photo_url: str
    resume_url: str


class ErrorResponse(BaseModel):
    """Error body returned with every non-2xx status."""

    detail: str


class HealthResponse(BaseModel):
    """Simple health check response."""

    status: str
