"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. Environment variables (CPSEARCH_ prefix), then a .env file
  2. YAML config file or constructor arguments
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource


class ServerSettings(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Server bind address")
    port: int = Field(default=8080, description="Server port")
    workers: int = Field(default=1, description="Number of worker processes")
    cors_origins: list[str] = Field(
        default=["http://localhost:9000"],
        description="Browser origins allowed to call the API",
    )


class BackendSettings(BaseModel):
    """Search backend connection and index configuration."""

    entrypoint: str = Field(default="http://localhost:9200", description="Backend URL")
    username: str | None = Field(default=None, description="Basic-auth username")
    password: str | None = Field(default=None, description="Basic-auth password")
    index: str = Field(default="postal_codes", description="Index holding the documents")
    verify_certs: bool = Field(default=False, description="Verify TLS certificates")
    create_index_on_startup: bool = Field(default=True, description="Create the index at startup if missing")
    max_results: int = Field(default=10, ge=1, le=100, description="Maximum hits returned per search")

    @field_validator("entrypoint")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")
    log_file: str | None = Field(default=None, description="Optional path of a log file")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the CPSEARCH_ prefix.
    Nested settings use double underscores: CPSEARCH_BACKEND__INDEX=colonias

    Example:
        CPSEARCH_BACKEND__ENTRYPOINT=https://search.internal:9200
        CPSEARCH_BACKEND__USERNAME=admin
        CPSEARCH_OBSERVABILITY__LOG_FILE=/var/log/cpsearch.log
    """

    model_config = {
        "env_prefix": "CPSEARCH_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    app_name: str = Field(default="cpsearch", description="Application name, used as the API title")
    debug: bool = Field(default=False, description="Starlette debug mode (tracebacks in 500 responses)")
    fail_fast: bool = Field(
        default=False,
        description="Terminate the process on any backend error instead of answering 502",
    )

    server: ServerSettings = Field(default_factory=ServerSettings)
    backend: BackendSettings = Field(default_factory=BackendSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment outranks YAML values passed in as constructor arguments
        return env_settings, dotenv_settings, init_settings, file_secret_settings

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file are used as defaults; environment variables
        still take precedence, key by key.

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
            data: dict[str, Any] = yaml.safe_load(f) or {}

        return cls(**data)
