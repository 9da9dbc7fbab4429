"""Response normalizer — Converts backend results and failures into protocol payloads.

Shared by the resource catalog and the tool registry:

- ``to_pretty_json`` renders any backend result as indented JSON text.
- ``guarded`` awaits one backend call and rewraps any failure as an
  ``OperationError`` naming the operation.
- ``success`` / ``failure`` build the single ``ToolResult`` type.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable
from typing import Any, TypeVar

from elastic_mcp.core.exceptions import ElasticMcpError, OperationError
from elastic_mcp.models.tool import ToolResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


def to_pretty_json(data: Any) -> str:
    """Serialize a backend result as two-space indented JSON."""
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


async def guarded(operation: str, call: Awaitable[T]) -> T:
    """Await a backend call, rewrapping any failure.

    Args:
        operation: Error prefix naming the operation (e.g. ``"Search failed"``).
        call: The pending backend call.

    Returns:
        The backend result.

    Raises:
        OperationError: If the call raised anything.
    """
    try:
        return await call
    except Exception as e:
        logger.warning("%s: %s", operation, e, exc_info=logger.isEnabledFor(logging.DEBUG))
        raise OperationError(operation, e) from e


def success(data: Any) -> ToolResult:
    """Build a successful tool result from a backend payload."""
    return ToolResult(text=to_pretty_json(data), is_error=False)


def failure(error: ElasticMcpError) -> ToolResult:
    """Build a failed tool result from a core error."""
    return ToolResult.fail(str(error))
