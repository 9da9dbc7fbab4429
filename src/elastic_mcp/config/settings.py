"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. Environment variables (ELASTIC_MCP_ prefix)
  2. YAML config file (if specified)
  3. Default values

The backend endpoint URL itself is not part of the settings: it is the
required positional argument of the ``elastic-mcp`` command.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from elastic_mcp import __version__


class ServerSettings(BaseModel):
    """MCP server identity and resource addressing."""

    name: str = Field(default="elasticsearch-mcp", description="Server name reported to MCP clients")
    resource_scheme: str = Field(default="elasticsearch", description="URI scheme of index schema resources")


class BackendSettings(BaseModel):
    """Search backend client configuration."""

    kind: Literal["elasticsearch", "opensearch"] = Field(
        default="elasticsearch",
        description="Backend adapter: elasticsearch, opensearch",
    )
    api_key: str | None = Field(default=None, description="API key authentication (Elasticsearch only)")
    verify_certs: bool = Field(default=True, description="Verify TLS certificates of https nodes")
    ca_certs: str | None = Field(default=None, description="Path to a CA bundle for https nodes")
    request_timeout: float = Field(default=30.0, gt=0, description="Per-request timeout in seconds")


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="console", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the ELASTIC_MCP_ prefix.
    Nested settings use double underscores: ELASTIC_MCP_BACKEND__KIND=opensearch

    Example:
        ELASTIC_MCP_BACKEND__API_KEY=...
        ELASTIC_MCP_BACKEND__VERIFY_CERTS=false
        ELASTIC_MCP_OBSERVABILITY__LOG_LEVEL=debug
    """

    model_config = {
        "env_prefix": "ELASTIC_MCP_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    version: str = Field(default=__version__, description="Server version reported to MCP clients")

    server: ServerSettings = Field(default_factory=ServerSettings)
    backend: BackendSettings = Field(default_factory=BackendSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file are used as defaults; environment variables
        still take precedence.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
