"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. Environment variables (SOLRID_ prefix), then a .env file
  2. YAML config file (if specified)
  3. Default values
"""

from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, YamlConfigSettingsSource

from solrid.backend.handlers import Operation

# YAML file read by the next Settings() built through Settings.from_yaml()
_yaml_file: ContextVar[Path | None] = ContextVar("solrid_yaml_file", default=None)


class SolrSettings(BaseModel):
    """Solr backend configuration."""

    base_url: str = Field(default="http://localhost:8983/solr", description="Solr base URL")
    collection: str = Field(default="biblio", description="Solr collection/core name")
    id_fields: str | None = Field(
        default=None,
        description="Comma-separated fields holding a record identifier (default: id)",
    )
    username: str | None = Field(default=None, description="Basic-auth username")
    password: str | None = Field(default=None, description="Basic-auth password")
    timeout: float = Field(default=30.0, gt=0, description="HTTP request timeout in seconds")
    handlers: dict[str, str] = Field(
        default_factory=dict,
        description="Request handler overrides keyed by operation (retrieve, similar)",
    )

    @field_validator("id_fields", mode="before")
    @classmethod
    def _join_id_fields(cls, v: object) -> object:
        """Accept a YAML list as well as a comma-separated string."""
        if isinstance(v, list | tuple):
            return ", ".join(str(item) for item in v)
        return v

    @field_validator("handlers")
    @classmethod
    def _check_operations(cls, v: dict[str, str]) -> dict[str, str]:
        known = {op.value for op in Operation}
        unknown = sorted(set(v) - known)
        if unknown:
            raise ValueError(f"Unknown operations in handlers: {unknown}. Expected one of {sorted(known)}")
        return v


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the SOLRID_ prefix.
    Nested settings use double underscores: SOLRID_SOLR__ID_FIELDS=id,marc_001

    Example:
        SOLRID_SOLR__BASE_URL=http://solr:8983/solr
        SOLRID_SOLR__ID_FIELDS="id, marc_001"
        SOLRID_OBSERVABILITY__LOG_FORMAT=console
    """

    model_config = {
        "env_prefix": "SOLRID_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    solr: SolrSettings = Field(default_factory=SolrSettings)
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
        """Insert the YAML file (if any) between env/.env values and defaults."""
        sources = [init_settings, env_settings, dotenv_settings]
        yaml_file = _yaml_file.get()
        if yaml_file is not None:
            sources.append(YamlConfigSettingsSource(settings_cls, yaml_file=yaml_file))
        sources.append(file_secret_settings)
        return tuple(sources)

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
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        token = _yaml_file.set(config_path)
        try:
            return cls()
        finally:
            _yaml_file.reset(token)
