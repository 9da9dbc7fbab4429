"""Adapter Registry — Resolves backend names to adapter classes.

Built-in adapters are imported lazily so that an optional client library
(e.g. ``opensearch-py``) is only required when its backend is selected.
"""

from __future__ import annotations

import importlib
import logging
from typing import Any

from elastic_mcp.adapters.base.adapter import SearchBackend
from elastic_mcp.adapters.base.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Maps adapter names to (module_path, class_name) for lazy import
_BUILTIN_ADAPTERS: dict[str, tuple[str, str]] = {
    "elasticsearch": ("elastic_mcp.adapters.elasticsearch.adapter", "ElasticsearchAdapter"),
    "opensearch": ("elastic_mcp.adapters.opensearch.adapter", "OpenSearchAdapter"),
}


class AdapterNotFoundError(ConfigurationError):
    """Raised when a requested adapter is not registered."""


class AdapterRegistry:
    """Registry for search backend adapter classes.

    Example:
        >>> registry = AdapterRegistry()
        >>> adapter = await registry.initialize_adapter("elasticsearch", hosts=["http://localhost:9200"])
    """

    def __init__(self) -> None:
        self._classes: dict[str, type[SearchBackend]] = {}

    def register(self, name: str, adapter_class: type[SearchBackend]) -> None:
        """Register an adapter class.

        Args:
            name: Unique name for this adapter type.
            adapter_class: The adapter class to register.
        """
        if name in self._classes:
            logger.warning("Overwriting existing adapter registration: %s", name)
        self._classes[name] = adapter_class
        logger.debug("Registered adapter: %s", name)

    def resolve(self, name: str) -> type[SearchBackend]:
        """Return the adapter class registered under ``name``.

        Built-in adapters are imported on first use.

        Raises:
            AdapterNotFoundError: If no adapter is known under this name.
            ConfigurationError: If the adapter's client library is missing.
        """
        if name in self._classes:
            return self._classes[name]

        entry = _BUILTIN_ADAPTERS.get(name)
        if entry is None:
            raise AdapterNotFoundError(
                f"No adapter registered with name '{name}'. "
                f"Available adapters: {self.registered_adapters}"
            )

        module_path, class_name = entry
        try:
            module = importlib.import_module(module_path)
        except ImportError as e:
            raise ConfigurationError(f"Failed to import adapter '{name}': {e}") from e

        adapter_class = getattr(module, class_name)
        self._classes[name] = adapter_class
        return adapter_class

    async def initialize_adapter(self, name: str, **kwargs: Any) -> SearchBackend:
        """Create and initialize an adapter instance.

        Args:
            name: The adapter name.
            **kwargs: Configuration parameters passed to the adapter constructor.

        Returns:
            The initialized adapter instance.
        """
        adapter_class = self.resolve(name)
        adapter = adapter_class(**kwargs)
        await adapter.initialize()
        logger.info("Initialized adapter: %s", name)
        return adapter

    @property
    def registered_adapters(self) -> list[str]:
        """List all known adapter names, built-in and registered."""
        return sorted(set(_BUILTIN_ADAPTERS) | set(self._classes))
