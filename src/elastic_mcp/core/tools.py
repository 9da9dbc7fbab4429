"""Tool Registry — The fixed set of tools and their dispatch to the backend.

Tools:
  - search: Run a query DSL body against an index, returning the hits
  - create_index: Create an index with optional mappings and settings
  - list_indices: List all indices with their stats
  - index_document: Write a document and refresh so it is searchable at once

Every call goes request → validate → one backend call → ``ToolResult``.
Unknown names and malformed arguments are rejected before the backend is
touched; backend failures come back as error results, never as exceptions.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import TypeAdapter, ValidationError

from elastic_mcp.adapters.base.adapter import SearchBackend
from elastic_mcp.core.exceptions import ElasticMcpError, InvalidArgumentsError, UnknownToolError
from elastic_mcp.core.normalizer import failure, guarded, success
from elastic_mcp.models.tool import (
    CreateIndexArguments,
    IndexDocumentArguments,
    ListIndicesArguments,
    SearchArguments,
    ToolDescriptor,
    ToolInvocation,
    ToolResult,
)

logger = logging.getLogger(__name__)

SEARCH_FAILED = "Search failed"
CREATE_INDEX_FAILED = "Failed to create index"
LIST_INDICES_FAILED = "Failed to list indices"
INDEX_DOCUMENT_FAILED = "Failed to index document"

TOOLS: tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        name="search",
        description="Run an Elasticsearch query",
        input_schema={
            "type": "object",
            "properties": {
                "index": {"type": "string"},
                "query": {"type": "object"},
            },
            "required": ["index", "query"],
        },
    ),
    ToolDescriptor(
        name="create_index",
        description="Create a new Elasticsearch index",
        input_schema={
            "type": "object",
            "properties": {
                "index": {"type": "string"},
                "mappings": {
                    "type": "object",
                    "description": "Index mappings configuration",
                    "default": {},
                },
                "settings": {
                    "type": "object",
                    "description": "Index settings configuration",
                    "default": {},
                },
            },
            "required": ["index"],
        },
    ),
    ToolDescriptor(
        name="list_indices",
        description="List all Elasticsearch indices",
        input_schema={
            "type": "object",
            "properties": {},
            "required": [],
        },
    ),
    ToolDescriptor(
        name="index_document",
        description="Index a document in Elasticsearch",
        input_schema={
            "type": "object",
            "properties": {
                "index": {"type": "string"},
                "id": {
                    "type": "string",
                    "description": "Optional document ID. If not provided, Elasticsearch will generate one",
                },
                "document": {
                    "type": "object",
                    "description": "Document to index",
                },
            },
            "required": ["index", "document"],
        },
    ),
)

TOOL_NAMES: frozenset[str] = frozenset(tool.name for tool in TOOLS)

_invocation_adapter: TypeAdapter[ToolInvocation] = TypeAdapter(ToolInvocation)


def _format_validation_error(error: ValidationError) -> str:
    """Flatten pydantic errors to ``field: message`` pairs."""
    parts = []
    for item in error.errors():
        # Drop the union tag and the "arguments" prefix from the location
        loc = ".".join(str(p) for p in item["loc"][2:]) or "arguments"
        parts.append(f"{loc}: {item['msg']}")
    return "; ".join(parts)


def parse_invocation(name: str, arguments: dict[str, Any] | None) -> ToolInvocation:
    """Validate a tool name and its arguments.

    Raises:
        UnknownToolError: If ``name`` is not a registered tool.
        InvalidArgumentsError: If the arguments do not match the tool's shape.
    """
    if name not in TOOL_NAMES:
        raise UnknownToolError(f"Unknown tool: {name}")
    try:
        return _invocation_adapter.validate_python({"name": name, "arguments": arguments or {}})
    except ValidationError as e:
        raise InvalidArgumentsError(f"Invalid arguments for {name}: {_format_validation_error(e)}") from e


class ToolRegistry:
    """Declares the tools and routes invocations to the backend.

    Args:
        backend: The shared search backend.
    """

    def __init__(self, backend: SearchBackend) -> None:
        self._backend = backend
        self._handlers: dict[str, Callable[[Any], Awaitable[Any]]] = {
            "search": self._search,
            "create_index": self._create_index,
            "list_indices": self._list_indices,
            "index_document": self._index_document,
        }

    def list_tools(self) -> list[ToolDescriptor]:
        """Return the tool descriptors."""
        return list(TOOLS)

    async def call_tool(self, name: str, arguments: dict[str, Any] | None = None) -> ToolResult:
        """Invoke a tool.

        Args:
            name: Tool name.
            arguments: Tool arguments as received from the caller.

        Returns:
            A success result with the pretty-printed payload, or an error
            result carrying one descriptive message.
        """
        logger.info("Tool called: %s", name)
        try:
            invocation = parse_invocation(name, arguments)
            payload = await self._handlers[invocation.name](invocation.arguments)
        except ElasticMcpError as e:
            logger.info("Tool %s failed: %s", name, e)
            return failure(e)
        return success(payload)

    # ── Handlers ─────────────────────────────────────────────────────────

    async def _search(self, args: SearchArguments) -> Any:
        result = await guarded(SEARCH_FAILED, self._backend.search(args.index, args.query))
        return result.get("hits")

    async def _create_index(self, args: CreateIndexArguments) -> Any:
        return await guarded(
            CREATE_INDEX_FAILED,
            self._backend.create_index(args.index, mappings=args.mappings, settings=args.settings),
        )

    async def _list_indices(self, args: ListIndicesArguments) -> Any:
        return await guarded(LIST_INDICES_FAILED, self._backend.list_indices())

    async def _index_document(self, args: IndexDocumentArguments) -> Any:
        return await guarded(
            INDEX_DOCUMENT_FAILED,
            self._backend.index_document(args.index, args.document, doc_id=args.id, refresh=True),
        )
