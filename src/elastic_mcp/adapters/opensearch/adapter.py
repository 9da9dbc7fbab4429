"""OpenSearch adapter — Index introspection, search and ingestion for OpenSearch (v2+).

OpenSearch is an AWS-maintained fork of Elasticsearch with a compatible
query DSL and API surface.  This adapter uses ``opensearch-py`` (async)
and serves the same resources and tools as the Elasticsearch adapter.

Install the optional dependency::

    pip install elastic-mcp[opensearch]
    # or: pip install "opensearch-py[async]"
"""

from __future__ import annotations

import logging
from typing import Any

from elastic_mcp.adapters.base.adapter import SearchBackend
from elastic_mcp.adapters.base.exceptions import ConfigurationError, ConnectionError

logger = logging.getLogger(__name__)


class OpenSearchAdapter(SearchBackend):
    """Search backend for OpenSearch (v2+).

    Args:
        hosts: List of OpenSearch node URLs (without credentials).
        username: Optional HTTP basic-auth username.
        password: Optional HTTP basic-auth password.
        api_key: Not supported by ``opensearch-py``; rejected at initialization.
        verify_certs: Whether to verify TLS certificates.
        ca_certs: Optional path to a CA bundle.
        request_timeout: Per-request timeout in seconds, enforced by the client.
        **kwargs: Additional keyword arguments forwarded to ``AsyncOpenSearch``.
    """

    def __init__(
        self,
        hosts: list[str] | None = None,
        username: str | None = None,
        password: str | None = None,
        api_key: str | None = None,
        verify_certs: bool = True,
        ca_certs: str | None = None,
        request_timeout: float = 30.0,
        **kwargs: Any,
    ) -> None:
        self._hosts = hosts or ["https://localhost:9200"]
        self._username = username
        self._password = password
        self._api_key = api_key
        self._verify_certs = verify_certs
        self._ca_certs = ca_certs
        self._request_timeout = request_timeout
        self._extra_kwargs = kwargs
        self._client: Any = None

    @property
    def name(self) -> str:
        return "opensearch"

    async def initialize(self) -> None:
        """Create the ``AsyncOpenSearch`` client and probe the cluster."""
        if self._api_key:
            raise ConfigurationError("opensearch-py does not support API key auth; use basic auth in the URL.")

        try:
            from opensearchpy import AsyncOpenSearch
        except ImportError as e:
            raise ConfigurationError(
                "opensearch-py package is required.  Install with: pip install elastic-mcp[opensearch]"
            ) from e

        client_kwargs: dict[str, Any] = {
            "hosts": self._hosts,
            "verify_certs": self._verify_certs,
            "ssl_show_warn": False,
            "timeout": self._request_timeout,
        }
        if self._username:
            client_kwargs["http_auth"] = (self._username, self._password or "")
        if self._ca_certs:
            client_kwargs["ca_certs"] = self._ca_certs

        client_kwargs.update(self._extra_kwargs)

        self._client = AsyncOpenSearch(**client_kwargs)
        try:
            info = await self._client.info()
            version = info.get("version", {}).get("number", "unknown")
            cluster = info.get("cluster_name", "unknown")
            logger.info("Connected to OpenSearch cluster: %s (v%s)", cluster, version)
        except Exception as e:
            logger.warning("OpenSearch cluster at %s is not reachable yet: %s", self._hosts, e)

    async def shutdown(self) -> None:
        """Close the OpenSearch client."""
        if self._client:
            await self._client.close()
            self._client = None

    def _require_client(self) -> Any:
        if not self._client:
            raise ConnectionError("OpenSearch client not initialized.")
        return self._client

    # ── Introspection ────────────────────────────────────────────────────

    async def list_indices(self) -> list[dict[str, Any]]:
        client = self._require_client()
        return list(await client.cat.indices(format="json"))

    async def get_mapping(self, index: str) -> dict[str, Any]:
        client = self._require_client()
        return dict(await client.indices.get_mapping(index=index))

    # ── Search ───────────────────────────────────────────────────────────

    async def search(self, index: str, body: dict[str, Any]) -> dict[str, Any]:
        client = self._require_client()
        return dict(await client.search(index=index, body=body))

    # ── Writes ───────────────────────────────────────────────────────────

    async def create_index(
        self,
        index: str,
        mappings: dict[str, Any],
        settings: dict[str, Any],
    ) -> dict[str, Any]:
        client = self._require_client()
        body = {"mappings": mappings, "settings": settings}
        return dict(await client.indices.create(index=index, body=body))

    async def index_document(
        self,
        index: str,
        document: dict[str, Any],
        doc_id: str | None = None,
        refresh: bool = True,
    ) -> dict[str, Any]:
        client = self._require_client()
        return dict(await client.index(index=index, body=document, id=doc_id, refresh=refresh))
