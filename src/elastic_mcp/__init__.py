"""elastic-mcp — Model Context Protocol server for Elasticsearch and OpenSearch."""

__version__ = "0.1.0"
