"""Integration test fixtures — Docker-based search backends.

Expects backends to be running, e.g.:
    docker run -p 9200:9200 -e discovery.type=single-node -e xpack.security.enabled=false elasticsearch:8.15.0
    docker run -p 9201:9200 -e discovery.type=single-node -e DISABLE_SECURITY_PLUGIN=true opensearchproject/opensearch:2

Tests are skipped when the backend does not answer.  Every test index is
prefixed with ``mcp-test-`` and removed before the session starts.
"""

from __future__ import annotations

import os
import time
import uuid

import httpx
import pytest

TEST_INDEX_PREFIX = "mcp-test-"


def _wait_for_service(url: str, timeout: float = 10.0) -> bool:
    """Block until *url* returns HTTP 200, or timeout."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        try:
            r = httpx.get(url, timeout=5)
            if r.status_code == 200:
                return True
        except httpx.HTTPError:
            pass
        time.sleep(1)
    return False


def _drop_test_indices(host: str) -> None:
    with httpx.Client(base_url=host, timeout=30) as client:
        resp = client.get("/_cat/indices", params={"format": "json"})
        resp.raise_for_status()
        for row in resp.json():
            if row["index"].startswith(TEST_INDEX_PREFIX):
                client.delete(f"/{row['index']}")


def _backend_ready(env_var: str, default: str, label: str) -> str:
    host = os.environ.get(env_var, default)
    if not _wait_for_service(host):
        pytest.skip(f"{label} not available at {host}")
    _drop_test_indices(host)
    return host


@pytest.fixture
def index_name() -> str:
    """A fresh index name under the test prefix."""
    return f"{TEST_INDEX_PREFIX}{uuid.uuid4().hex[:8]}"


@pytest.fixture(scope="session")
def elasticsearch_ready() -> str:
    """Ensure Elasticsearch is running and free of leftover test indices."""
    return _backend_ready("ELASTIC_MCP_TEST_ES_URL", "http://localhost:9200", "Elasticsearch")


@pytest.fixture(scope="session")
def opensearch_ready() -> str:
    """Ensure OpenSearch is running and free of leftover test indices."""
    return _backend_ready("ELASTIC_MCP_TEST_OS_URL", "http://localhost:9201", "OpenSearch")
