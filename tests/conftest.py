"""Shared test fixtures and configuration."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

import pytest

from elastic_mcp.adapters.base.adapter import SearchBackend
from elastic_mcp.config.settings import Settings
from elastic_mcp.core.resources import ResourceCatalog
from elastic_mcp.core.tools import ToolRegistry

RESOURCE_BASE = "elasticsearch://elastic@localhost:9200/"


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def sample_indices() -> list[dict[str, Any]]:
    """Cat-indices rows as returned with ``format=json``."""
    return [
        {"health": "green", "status": "open", "index": "orders", "docs.count": "3"},
        {"health": "yellow", "status": "open", "index": "users", "docs.count": "12"},
    ]


@pytest.fixture
def sample_mapping() -> dict[str, Any]:
    """Get-mapping envelope for the ``orders`` index."""
    return {
        "orders": {
            "mappings": {
                "properties": {
                    "order_id": {"type": "keyword"},
                    "total": {"type": "double"},
                    "placed_at": {"type": "date"},
                }
            }
        }
    }


@pytest.fixture
def sample_search_response() -> dict[str, Any]:
    """Search response with three hits."""
    return {
        "took": 2,
        "timed_out": False,
        "hits": {
            "total": {"value": 3, "relation": "eq"},
            "max_score": 1.0,
            "hits": [
                {"_index": "orders", "_id": "o-1", "_score": 1.0, "_source": {"order_id": "o-1", "total": 10.5}},
                {"_index": "orders", "_id": "o-2", "_score": 1.0, "_source": {"order_id": "o-2", "total": 99.0}},
                {"_index": "orders", "_id": "o-3", "_score": 1.0, "_source": {"order_id": "o-3", "total": 42.0}},
            ],
        },
    }


@pytest.fixture
def backend(
    sample_indices: list[dict[str, Any]],
    sample_mapping: dict[str, Any],
    sample_search_response: dict[str, Any],
) -> AsyncMock:
    """A fake search backend with canned responses."""
    mock = AsyncMock(spec=SearchBackend)
    mock.name = "fake"
    mock.list_indices.return_value = sample_indices
    mock.get_mapping.return_value = sample_mapping
    mock.search.return_value = sample_search_response
    mock.create_index.return_value = {"acknowledged": True, "shards_acknowledged": True, "index": "orders"}
    mock.index_document.return_value = {
        "_index": "orders",
        "_id": "generated-1",
        "_version": 1,
        "result": "created",
        "forced_refresh": True,
    }
    return mock


@pytest.fixture
def catalog(backend: AsyncMock) -> ResourceCatalog:
    return ResourceCatalog(backend, RESOURCE_BASE)


@pytest.fixture
def registry(backend: AsyncMock) -> ToolRegistry:
    return ToolRegistry(backend)
