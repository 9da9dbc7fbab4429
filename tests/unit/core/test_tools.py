"""Tests for the tool registry (discovery, validation and dispatch)."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest

from elastic_mcp.core.exceptions import InvalidArgumentsError, UnknownToolError
from elastic_mcp.core.tools import TOOL_NAMES, ToolRegistry, parse_invocation
from elastic_mcp.models.tool import IndexDocumentArguments, IndexDocumentInvocation, SearchInvocation

# ── Discovery ────────────────────────────────────────────────────────────────


class TestListTools:
    def test_closed_set(self, registry: ToolRegistry) -> None:
        names = [t.name for t in registry.list_tools()]
        assert names == ["search", "create_index", "list_indices", "index_document"]
        assert set(names) == TOOL_NAMES

    def test_required_fields(self, registry: ToolRegistry) -> None:
        required = {t.name: t.input_schema["required"] for t in registry.list_tools()}
        assert required == {
            "search": ["index", "query"],
            "create_index": ["index"],
            "list_indices": [],
            "index_document": ["index", "document"],
        }

    def test_create_index_defaults_declared(self, registry: ToolRegistry) -> None:
        tool = next(t for t in registry.list_tools() if t.name == "create_index")
        assert tool.input_schema["properties"]["mappings"]["default"] == {}
        assert tool.input_schema["properties"]["settings"]["default"] == {}


# ── Argument validation ──────────────────────────────────────────────────────


class TestParseInvocation:
    def test_search(self) -> None:
        invocation = parse_invocation("search", {"index": "orders", "query": {"query": {"match_all": {}}}})
        assert isinstance(invocation, SearchInvocation)
        assert invocation.arguments.index == "orders"

    def test_extra_keys_ignored(self) -> None:
        invocation = parse_invocation("list_indices", {"verbose": True})
        assert invocation.name == "list_indices"

    def test_list_indices_without_arguments(self) -> None:
        assert parse_invocation("list_indices", None).name == "list_indices"

    def test_unknown_tool(self) -> None:
        with pytest.raises(UnknownToolError, match="^Unknown tool: delete_index$"):
            parse_invocation("delete_index", {})

    def test_missing_required_field(self) -> None:
        with pytest.raises(InvalidArgumentsError, match="^Invalid arguments for search: query: Field required$"):
            parse_invocation("search", {"index": "orders"})

    def test_wrong_type(self) -> None:
        with pytest.raises(InvalidArgumentsError, match="index"):
            parse_invocation("create_index", {"index": 42})

    def test_query_must_be_object(self) -> None:
        with pytest.raises(InvalidArgumentsError, match="query"):
            parse_invocation("search", {"index": "orders", "query": "match_all"})

    def test_empty_index_rejected(self) -> None:
        with pytest.raises(InvalidArgumentsError, match="index"):
            parse_invocation("search", {"index": "", "query": {}})


class TestDocumentIdTriState:
    def test_absent(self) -> None:
        invocation = parse_invocation("index_document", {"index": "orders", "document": {"a": 1}})
        assert isinstance(invocation, IndexDocumentInvocation)
        assert invocation.arguments.id is None

    def test_null(self) -> None:
        args = IndexDocumentArguments.model_validate({"index": "orders", "document": {}, "id": None})
        assert args.id is None

    def test_empty_rejected(self) -> None:
        with pytest.raises(InvalidArgumentsError, match="id"):
            parse_invocation("index_document", {"index": "orders", "document": {}, "id": ""})

    def test_provided(self) -> None:
        invocation = parse_invocation("index_document", {"index": "orders", "document": {}, "id": "o-9"})
        assert invocation.arguments.id == "o-9"


# ── Dispatch ─────────────────────────────────────────────────────────────────


class TestCallTool:
    async def test_search_returns_hits(
        self, registry: ToolRegistry, backend: AsyncMock, sample_search_response: dict
    ) -> None:
        result = await registry.call_tool("search", {"index": "orders", "query": {"match_all": {}}})

        backend.search.assert_awaited_once_with("orders", {"match_all": {}})
        assert result.is_error is False
        payload = json.loads(result.text)
        assert payload == sample_search_response["hits"]
        assert len(payload["hits"]) == 3
        assert result.text == json.dumps(sample_search_response["hits"], indent=2)

    async def test_create_index_defaults(self, registry: ToolRegistry, backend: AsyncMock) -> None:
        result = await registry.call_tool("create_index", {"index": "orders"})

        backend.create_index.assert_awaited_once_with("orders", mappings={}, settings={})
        assert result.is_error is False
        assert json.loads(result.text)["acknowledged"] is True

    async def test_create_index_with_mappings(self, registry: ToolRegistry, backend: AsyncMock) -> None:
        mappings = {"properties": {"name": {"type": "text"}}}
        settings = {"number_of_shards": 1}
        await registry.call_tool("create_index", {"index": "users", "mappings": mappings, "settings": settings})
        backend.create_index.assert_awaited_once_with("users", mappings=mappings, settings=settings)

    async def test_list_indices(self, registry: ToolRegistry, backend: AsyncMock, sample_indices: list) -> None:
        result = await registry.call_tool("list_indices", {})
        backend.list_indices.assert_awaited_once_with()
        assert json.loads(result.text) == sample_indices

    async def test_index_document_without_id_refreshes(self, registry: ToolRegistry, backend: AsyncMock) -> None:
        result = await registry.call_tool("index_document", {"index": "orders", "document": {"order_id": "o-4"}})

        backend.index_document.assert_awaited_once_with("orders", {"order_id": "o-4"}, doc_id=None, refresh=True)
        assert result.is_error is False
        assert json.loads(result.text)["_id"] == "generated-1"

    async def test_index_document_with_id(self, registry: ToolRegistry, backend: AsyncMock) -> None:
        await registry.call_tool("index_document", {"index": "orders", "id": "o-4", "document": {}})
        backend.index_document.assert_awaited_once_with("orders", {}, doc_id="o-4", refresh=True)

    async def test_unknown_tool_makes_no_backend_call(self, registry: ToolRegistry, backend: AsyncMock) -> None:
        result = await registry.call_tool("drop_everything", {"index": "orders"})

        assert result.is_error is True
        assert result.text == "Unknown tool: drop_everything"
        assert backend.mock_calls == []

    async def test_invalid_arguments_make_no_backend_call(self, registry: ToolRegistry, backend: AsyncMock) -> None:
        result = await registry.call_tool("index_document", {"index": "orders"})

        assert result.is_error is True
        assert result.text.startswith("Invalid arguments for index_document: document")
        assert backend.mock_calls == []

    @pytest.mark.parametrize(
        ("name", "arguments", "method", "prefix"),
        [
            ("search", {"index": "orders", "query": {}}, "search", "Search failed: "),
            ("create_index", {"index": "orders"}, "create_index", "Failed to create index: "),
            ("list_indices", {}, "list_indices", "Failed to list indices: "),
            ("index_document", {"index": "orders", "document": {}}, "index_document", "Failed to index document: "),
        ],
    )
    async def test_backend_failure_is_prefixed(
        self,
        registry: ToolRegistry,
        backend: AsyncMock,
        name: str,
        arguments: dict,
        method: str,
        prefix: str,
    ) -> None:
        getattr(backend, method).side_effect = ConnectionRefusedError("Connection refused")

        result = await registry.call_tool(name, arguments)

        assert result.is_error is True
        assert result.text == f"{prefix}Connection refused"

    async def test_backend_failure_without_message(self, registry: ToolRegistry, backend: AsyncMock) -> None:
        backend.list_indices.side_effect = RuntimeError()
        result = await registry.call_tool("list_indices")
        assert result.text == "Failed to list indices: Unknown error"
