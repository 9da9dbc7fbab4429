"""Tool models — Descriptors, per-tool argument shapes and the tool result type.

Tool arguments are validated through ``ToolInvocation``, a union tagged by
tool name, so each tool's arguments are checked against exactly one shape
before anything is sent to the backend.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field

NonEmptyStr = Annotated[str, Field(min_length=1)]


class ToolDescriptor(BaseModel):
    """Discovery information for one tool."""

    name: str = Field(description="Tool name used in invocations")
    description: str = Field(description="What the tool does")
    input_schema: dict[str, Any] = Field(description="JSON Schema of the tool arguments")


# ═══════════════════════════════════════════════════════════════════════════════
# Argument shapes
# ═══════════════════════════════════════════════════════════════════════════════


class SearchArguments(BaseModel):
    """Arguments of the ``search`` tool."""

    index: NonEmptyStr = Field(description="Index name or pattern to search")
    query: dict[str, Any] = Field(description="Search request body (query DSL)")


class CreateIndexArguments(BaseModel):
    """Arguments of the ``create_index`` tool."""

    index: NonEmptyStr = Field(description="Name of the index to create")
    mappings: dict[str, Any] = Field(default_factory=dict, description="Index mappings configuration")
    settings: dict[str, Any] = Field(default_factory=dict, description="Index settings configuration")


class ListIndicesArguments(BaseModel):
    """Arguments of the ``list_indices`` tool (none)."""


class IndexDocumentArguments(BaseModel):
    """Arguments of the ``index_document`` tool.

    ``id`` is tri-state: absent or null lets the engine assign an ID, an
    empty string is rejected, any other string is used as the document ID.
    """

    index: NonEmptyStr = Field(description="Target index")
    document: dict[str, Any] = Field(description="Document to index")
    id: NonEmptyStr | None = Field(default=None, description="Optional document ID")


# ═══════════════════════════════════════════════════════════════════════════════
# Tagged invocations
# ═══════════════════════════════════════════════════════════════════════════════


class SearchInvocation(BaseModel):
    name: Literal["search"]
    arguments: SearchArguments


class CreateIndexInvocation(BaseModel):
    name: Literal["create_index"]
    arguments: CreateIndexArguments


class ListIndicesInvocation(BaseModel):
    name: Literal["list_indices"]
    arguments: ListIndicesArguments = Field(default_factory=ListIndicesArguments)


class IndexDocumentInvocation(BaseModel):
    name: Literal["index_document"]
    arguments: IndexDocumentArguments


ToolInvocation = Annotated[
    SearchInvocation | CreateIndexInvocation | ListIndicesInvocation | IndexDocumentInvocation,
    Field(discriminator="name"),
]


# ═══════════════════════════════════════════════════════════════════════════════
# Result
# ═══════════════════════════════════════════════════════════════════════════════


class ToolResult(BaseModel):
    """Outcome of a tool call: a success payload or an error descriptor.

    Both outcomes carry a single text body; ``is_error`` tells them apart.
    """

    text: str = Field(description="Pretty-printed JSON payload, or the error message")
    is_error: bool = Field(default=False, description="Whether the call failed")

    @classmethod
    def fail(cls, message: str) -> ToolResult:
        return cls(text=message, is_error=True)
