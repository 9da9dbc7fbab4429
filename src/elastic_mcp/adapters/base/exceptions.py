"""Adapter-specific exceptions."""


class AdapterError(Exception):
    """Base exception for adapter errors."""


class ConnectionError(AdapterError):
    """Raised when the adapter has no usable connection to the search backend."""


class ConfigurationError(AdapterError):
    """Raised when adapter configuration is invalid."""
