"""Base search backend — Abstract interface for all engine connectors.

Every backend must implement this interface to be served over MCP.
The adapter is responsible for:
  1. Owning the engine client (creation and shutdown)
  2. Listing indices with their stats
  3. Fetching index mappings
  4. Executing raw query DSL searches
  5. Creating indices and writing documents

Adapters return plain JSON-compatible Python structures (dicts and lists)
and let engine client exceptions propagate; wrapping failures into protocol
errors is the job of the core layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class SearchBackend(ABC):
    """Abstract base class for search backend adapters.

    All adapters must implement:
      - list_indices(): Every index with its cat-API stats
      - get_mapping(): Mapping envelope for one index
      - search(): Run a query body against an index
      - create_index(): Create an index with mappings and settings
      - index_document(): Write or replace a single document

    An adapter instance is created once at startup and shared by every
    request handler, so it must not keep per-request state.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique adapter name (e.g., 'elasticsearch', 'opensearch')."""

    @abstractmethod
    async def initialize(self) -> None:
        """Create the engine client.

        Called once during process bootstrap.
        """

    @abstractmethod
    async def shutdown(self) -> None:
        """Close the engine client and release its connections."""

    @abstractmethod
    async def list_indices(self) -> list[dict[str, Any]]:
        """List all indices with their stats.

        Returns:
            One mapping per index, in backend order. Each carries at least
            an ``index`` key plus backend metadata (health, status, docs.count).
        """

    @abstractmethod
    async def get_mapping(self, index: str) -> dict[str, Any]:
        """Retrieve the mapping envelope for an index.

        Args:
            index: Index name (or alias).

        Returns:
            The raw response, keyed by concrete index name.
        """

    @abstractmethod
    async def search(self, index: str, body: dict[str, Any]) -> dict[str, Any]:
        """Execute a query DSL body against an index.

        Args:
            index: Index name or pattern.
            body: Full search request body.

        Returns:
            The raw search response.
        """

    @abstractmethod
    async def create_index(
        self,
        index: str,
        mappings: dict[str, Any],
        settings: dict[str, Any],
    ) -> dict[str, Any]:
        """Create an index.

        Returns:
            The backend creation acknowledgment.
        """

    @abstractmethod
    async def index_document(
        self,
        index: str,
        document: dict[str, Any],
        doc_id: str | None = None,
        refresh: bool = True,
    ) -> dict[str, Any]:
        """Write or replace a document.

        Args:
            index: Target index.
            document: Document source.
            doc_id: Document ID; ``None`` lets the engine assign one.
            refresh: Make the write visible to searches before returning.

        Returns:
            The backend write acknowledgment.
        """
