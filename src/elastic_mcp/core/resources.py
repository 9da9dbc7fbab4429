"""Resource Catalog — One schema resource per index.

Resource URIs have the form ``<scheme>://<host>/<index>/schema`` and are
resolved against the base URI derived from the backend endpoint.  Reading a
resource returns the index mapping as pretty-printed JSON.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote, unquote, urlsplit

from elastic_mcp.adapters.base.adapter import SearchBackend
from elastic_mcp.core.exceptions import InvalidResourceError, OperationError
from elastic_mcp.core.normalizer import guarded, to_pretty_json
from elastic_mcp.models.resource import JSON_MIME_TYPE, ResourceContents, ResourceEntry

logger = logging.getLogger(__name__)

SCHEMA_SEGMENT = "schema"

LIST_INDICES_FAILED = "Failed to list indices"
GET_MAPPING_FAILED = "Failed to get mapping"


def resource_uri(base: str, index: str) -> str:
    """Resolve ``<index>/schema`` against the base URI.

    Like relative URL resolution, the last path segment of the base is
    replaced, so a base path ending in ``/`` is kept whole.
    """
    directory = base[: base.rindex("/") + 1]
    return f"{directory}{quote(index, safe='')}/{SCHEMA_SEGMENT}"


def parse_resource_uri(uri: str) -> str:
    """Extract the index name from a schema resource URI.

    Raises:
        InvalidResourceError: If the last path segment is not ``schema`` or
            the segment before it is empty.
    """
    try:
        segments = urlsplit(uri).path.split("/")
    except ValueError as e:
        raise InvalidResourceError(f"Invalid resource URI: {uri}") from e

    schema = segments.pop()
    index = unquote(segments.pop()) if segments else ""
    if schema != SCHEMA_SEGMENT or not index:
        raise InvalidResourceError(f"Invalid resource URI: {uri}")
    return index


class ResourceCatalog:
    """Lists and reads index schema resources.

    Args:
        backend: The shared search backend.
        resource_base: Base URI computed from the endpoint at startup.
    """

    def __init__(self, backend: SearchBackend, resource_base: str) -> None:
        self._backend = backend
        self._resource_base = resource_base

    async def list_resources(self) -> list[ResourceEntry]:
        """Return one schema resource per index, in backend order."""
        indices = await guarded(LIST_INDICES_FAILED, self._backend.list_indices())
        return [
            ResourceEntry(
                uri=resource_uri(self._resource_base, entry["index"]),
                name=f'"{entry["index"]}" index schema',
                mime_type=JSON_MIME_TYPE,
            )
            for entry in indices
        ]

    async def read_resource(self, uri: str) -> ResourceContents:
        """Return the mapping of the index addressed by ``uri``.

        The URI is validated before the backend is called.
        """
        index = parse_resource_uri(uri)
        envelope = await guarded(GET_MAPPING_FAILED, self._backend.get_mapping(index))
        mapping = _select_mapping(envelope, index)
        logger.debug("Read schema resource for index %s", index)
        return ResourceContents(uri=uri, text=to_pretty_json(mapping), mime_type=JSON_MIME_TYPE)


def _select_mapping(envelope: dict[str, Any], index: str) -> Any:
    """Pick the mapping for ``index`` out of the get-mapping response.

    The response is keyed by concrete index name; when ``index`` is an alias
    of exactly one index, that index's entry is returned.
    """
    if index in envelope:
        return envelope[index]
    if len(envelope) == 1:
        return next(iter(envelope.values()))
    raise OperationError(GET_MAPPING_FAILED, LookupError(f"no mapping returned for index [{index}]"))
