"""MCP server — Wires the resource catalog and tool registry to the protocol.

``create_mcp_server`` registers the four MCP handlers on a low-level
``mcp`` server; ``run_server`` owns the process lifecycle: it builds the
backend adapter once, serves over stdio, and closes the adapter on exit.
"""

from __future__ import annotations

import logging
from typing import Any

from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, Resource, TextContent, Tool
from pydantic import AnyUrl

from elastic_mcp.adapters.base.adapter import SearchBackend
from elastic_mcp.adapters.base.registry import AdapterRegistry
from elastic_mcp.config.settings import Settings
from elastic_mcp.core.endpoint import Endpoint, parse_endpoint
from elastic_mcp.core.resources import ResourceCatalog
from elastic_mcp.core.tools import ToolRegistry

logger = logging.getLogger(__name__)


def create_mcp_server(
    catalog: ResourceCatalog,
    registry: ToolRegistry,
    name: str = "elasticsearch-mcp",
    version: str | None = None,
) -> Server:
    """Create the MCP server and register its handlers.

    Args:
        catalog: Resolver for index schema resources.
        registry: Tool registry.
        name: Server name for identification.
        version: Server version reported at initialization.

    Returns:
        Configured MCP Server instance.
    """
    server: Server = Server(name, version=version)

    @server.list_resources()
    async def list_resources() -> list[Resource]:
        entries = await catalog.list_resources()
        return [Resource(uri=entry.uri, name=entry.name, mimeType=entry.mime_type) for entry in entries]

    @server.read_resource()
    async def read_resource(uri: AnyUrl) -> list[ReadResourceContents]:
        contents = await catalog.read_resource(str(uri))
        return [ReadResourceContents(content=contents.text, mime_type=contents.mime_type)]

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return [
            Tool(name=tool.name, description=tool.description, inputSchema=tool.input_schema)
            for tool in registry.list_tools()
        ]

    # Arguments are validated by the registry's own models
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> CallToolResult:
        result = await registry.call_tool(name, arguments)
        return CallToolResult(
            content=[TextContent(type="text", text=result.text)],
            isError=result.is_error,
        )

    return server


async def create_backend(settings: Settings, endpoint: Endpoint) -> SearchBackend:
    """Construct and initialize the backend adapter selected in settings."""
    backend_cfg = settings.backend
    return await AdapterRegistry().initialize_adapter(
        backend_cfg.kind,
        hosts=[endpoint.url],
        username=endpoint.username,
        password=endpoint.password,
        api_key=backend_cfg.api_key,
        verify_certs=backend_cfg.verify_certs,
        ca_certs=backend_cfg.ca_certs,
        request_timeout=backend_cfg.request_timeout,
    )


async def run_server(settings: Settings, url: str) -> None:
    """Serve the backend at ``url`` over MCP stdio until the client disconnects.

    Args:
        settings: Application settings.
        url: Backend endpoint URL, optionally with basic-auth credentials.
    """
    endpoint = parse_endpoint(url, resource_scheme=settings.server.resource_scheme)
    backend = await create_backend(settings, endpoint)
    try:
        server = create_mcp_server(
            ResourceCatalog(backend, endpoint.resource_base),
            ToolRegistry(backend),
            name=settings.server.name,
            version=settings.version,
        )
        logger.info("Serving %s backend at %s over stdio", backend.name, endpoint.url)
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await backend.shutdown()
        logger.info("elastic-mcp shutdown complete")
