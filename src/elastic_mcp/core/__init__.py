"""Core request-dispatch layer — Resource catalog, tool registry and response normalization."""

from elastic_mcp.core.resources import ResourceCatalog
from elastic_mcp.core.tools import ToolRegistry

__all__ = ["ResourceCatalog", "ToolRegistry"]
