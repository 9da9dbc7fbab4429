"""Base adapter interface — Abstract contract for search backend connectors."""

from elastic_mcp.adapters.base.adapter import SearchBackend
from elastic_mcp.adapters.base.registry import AdapterRegistry

__all__ = ["AdapterRegistry", "SearchBackend"]
