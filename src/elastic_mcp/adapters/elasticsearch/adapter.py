"""Elasticsearch adapter — Index introspection, search and ingestion for Elasticsearch (v8+).

Uses the official ``elasticsearch`` async client.  Responses are unwrapped
from ``ObjectApiResponse`` / ``ListApiResponse`` into plain Python structures
so the core layer can serialize them directly.
"""

from __future__ import annotations

import logging
from typing import Any

from elastic_mcp.adapters.base.adapter import SearchBackend
from elastic_mcp.adapters.base.exceptions import ConfigurationError, ConnectionError

logger = logging.getLogger(__name__)


def _body(response: Any) -> Any:
    """Unwrap an API response object to its JSON body."""
    return getattr(response, "body", response)


class ElasticsearchAdapter(SearchBackend):
    """Search backend for Elasticsearch (v8+).

    Args:
        hosts: List of Elasticsearch node URLs (without credentials).
        username: Optional HTTP basic-auth username.
        password: Optional HTTP basic-auth password.
        api_key: Optional API key (encoded string).
        verify_certs: Whether to verify TLS certificates.
        ca_certs: Optional path to a CA bundle.
        request_timeout: Per-request timeout in seconds, enforced by the client.
        **kwargs: Additional keyword arguments forwarded to ``AsyncElasticsearch``.
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
        self._hosts = hosts or ["http://localhost:9200"]
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
        return "elasticsearch"

    def _client_kwargs(self) -> dict[str, Any]:
        client_kwargs: dict[str, Any] = {
            "hosts": self._hosts,
            "request_timeout": self._request_timeout,
        }
        if self._username:
            client_kwargs["basic_auth"] = (self._username, self._password or "")
        if self._api_key:
            client_kwargs["api_key"] = self._api_key
        # TLS options are only accepted for https nodes
        if any(host.startswith("https://") for host in self._hosts):
            if self._ca_certs:
                client_kwargs["ca_certs"] = self._ca_certs
            if not self._verify_certs:
                client_kwargs["verify_certs"] = False
                client_kwargs["ssl_show_warn"] = False

        client_kwargs.update(self._extra_kwargs)
        return client_kwargs

    async def initialize(self) -> None:
        """Create the ``AsyncElasticsearch`` client and probe the cluster.

        An unreachable cluster is logged, not raised: requests made while it
        is down fail individually.
        """
        try:
            from elasticsearch import AsyncElasticsearch
        except ImportError as e:
            raise ConfigurationError(
                "elasticsearch package is required.  Install with: pip install elasticsearch"
            ) from e

        self._client = AsyncElasticsearch(**self._client_kwargs())
        try:
            info = _body(await self._client.info())
            version = info.get("version", {}).get("number", "unknown")
            cluster = info.get("cluster_name", "unknown")
            logger.info("Connected to Elasticsearch cluster: %s (v%s)", cluster, version)
        except Exception as e:
            logger.warning("Elasticsearch cluster at %s is not reachable yet: %s", self._hosts, e)

    async def shutdown(self) -> None:
        """Close the Elasticsearch client."""
        if self._client:
            await self._client.close()
            self._client = None

    def _require_client(self) -> Any:
        if not self._client:
            raise ConnectionError("Elasticsearch client not initialized.")
        return self._client

    # ── Introspection ────────────────────────────────────────────────────

    async def list_indices(self) -> list[dict[str, Any]]:
        client = self._require_client()
        response = await client.cat.indices(format="json")
        return list(_body(response))

    async def get_mapping(self, index: str) -> dict[str, Any]:
        client = self._require_client()
        response = await client.indices.get_mapping(index=index)
        return dict(_body(response))

    # ── Search ───────────────────────────────────────────────────────────

    async def search(self, index: str, body: dict[str, Any]) -> dict[str, Any]:
        client = self._require_client()
        response = await client.search(index=index, body=body)
        return dict(_body(response))

    # ── Writes ───────────────────────────────────────────────────────────

    async def create_index(
        self,
        index: str,
        mappings: dict[str, Any],
        settings: dict[str, Any],
    ) -> dict[str, Any]:
        client = self._require_client()
        response = await client.indices.create(index=index, mappings=mappings, settings=settings)
        return dict(_body(response))

    async def index_document(
        self,
        index: str,
        document: dict[str, Any],
        doc_id: str | None = None,
        refresh: bool = True,
    ) -> dict[str, Any]:
        client = self._require_client()
        response = await client.index(index=index, id=doc_id, document=document, refresh=refresh)
        return dict(_body(response))
