"""Core exceptions — Input-shape errors and wrapped backend failures.

Input-shape errors (``InvalidResourceError``, ``UnknownToolError``,
``InvalidArgumentsError``) are raised before any backend call is made.
``OperationError`` wraps whatever the backend client raised, prefixed with
the operation that failed.
"""

from __future__ import annotations

UNKNOWN_ERROR = "Unknown error"


def error_message(error: BaseException) -> str:
    """Return the exception's message, or a generic one if it carries none."""
    return str(error) or UNKNOWN_ERROR


class ElasticMcpError(Exception):
    """Base exception for errors reported back to the MCP caller."""


class InvalidEndpointError(ElasticMcpError):
    """Raised when the backend endpoint URL cannot be used."""


class InvalidResourceError(ElasticMcpError):
    """Raised when a resource URI does not address an index schema."""


class UnknownToolError(ElasticMcpError):
    """Raised when a tool name is outside the registered set."""


class InvalidArgumentsError(ElasticMcpError):
    """Raised when tool arguments do not match the tool's input shape."""


class OperationError(ElasticMcpError):
    """Raised when a backend operation fails.

    Attributes:
        operation: Description of the failed operation (e.g. ``"Search failed"``).
        cause: The original exception.
    """

    def __init__(self, operation: str, cause: BaseException) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation}: {error_message(cause)}")
