"""Search backend adapters — Connectors for the engines behind the MCP server.

Built-in adapters:
  - elasticsearch: Elasticsearch v8+ (``elasticsearch`` async client)
  - opensearch: OpenSearch v2+ (``opensearch-py`` async client)

Implement ``SearchBackend`` to expose another engine with the same contract.
"""
