"""Resource models — Catalog entries and contents for index schema resources."""

from __future__ import annotations

from pydantic import BaseModel, Field

JSON_MIME_TYPE = "application/json"


class ResourceEntry(BaseModel):
    """A discoverable resource: the schema of one index."""

    uri: str = Field(description="Resource URI (<scheme>://<host>/<index>/schema)")
    name: str = Field(description="Human-readable resource name")
    mime_type: str = Field(default=JSON_MIME_TYPE, description="Content type of the resource")


class ResourceContents(BaseModel):
    """Contents returned when a resource is read."""

    uri: str = Field(description="The URI that was read")
    text: str = Field(description="Pretty-printed JSON mapping of the index")
    mime_type: str = Field(default=JSON_MIME_TYPE, description="Content type of the text")
