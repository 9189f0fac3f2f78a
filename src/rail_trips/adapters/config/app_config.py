"""12-factor configuration adapter using environment variables and TOML config."""

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rail_trips.domain.models.trip import ACCOUNTING_CODE_MAX_LENGTH

STORAGE_BACKENDS = ("sql", "memory")


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=8000, description="Port to bind the server to")
    log_level: str = Field(default="INFO", description="Logging level name (DEBUG, INFO, ...)")

    # Network data
    distances_file: str = Field(
        default="data/distances.json",
        description="Path to the JSON file listing rail lines and segment distances",
    )

    # Storage configuration
    storage_backend: str = Field(
        default="sql", description="Trip storage backend: 'sql' or 'memory'"
    )
    database_url: str = Field(
        default="sqlite:///rail_trips.db",
        description="SQLAlchemy database URL used when storage_backend is 'sql'",
    )

    # Request validation
    accounting_code_max_length: int = Field(
        default=ACCOUNTING_CODE_MAX_LENGTH,
        description="Maximum length of an analytic (accounting) code; "
        "bounded by the width of the stored column",
    )

    # Rate limiting configuration
    rate_limit_per_minute: int = Field(
        default=100,
        description="Maximum number of requests allowed per IP address per minute",
    )

    # Optional TOML file overriding the values above
    config_file: str | None = Field(
        default=None,
        description="Path to TOML configuration file with [server], [storage] and [network] tables",
    )

    @field_validator("storage_backend")
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        """Validate storage backend is either 'sql' or 'memory'."""
        if v.lower() not in STORAGE_BACKENDS:
            raise ValueError("storage_backend must be either 'sql' or 'memory'")
        return v.lower()

    @field_validator("accounting_code_max_length")
    @classmethod
    def validate_accounting_code_max_length(cls, v: int) -> int:
        """Validate the limit fits the stored analytic code column."""
        if not 1 <= v <= ACCOUNTING_CODE_MAX_LENGTH:
            raise ValueError(
                f"accounting_code_max_length must be between 1 and {ACCOUNTING_CODE_MAX_LENGTH}"
            )
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"log_level must be a logging level name, got '{v}'")
        return level

    def _load_toml_data(self) -> dict[str, Any]:
        """Load and parse the TOML file."""
        if not self.config_file:
            raise ValueError("config_file must be set to load a configuration file")

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            return tomllib.load(f)

    def load_config_file(self) -> "AppConfig":
        """Apply [server], [storage] and [network] settings from config_file, if set."""
        if not self.config_file:
            return self

        toml_data = self._load_toml_data()

        server = toml_data.get("server", {})
        if "host" in server:
            self.host = server["host"]
        if "port" in server:
            self.port = server["port"]
        if "log_level" in server:
            self.log_level = server["log_level"]
        if "rate_limit_per_minute" in server:
            self.rate_limit_per_minute = server["rate_limit_per_minute"]

        storage = toml_data.get("storage", {})
        if "backend" in storage:
            self.storage_backend = storage["backend"]
        if "database_url" in storage:
            self.database_url = storage["database_url"]

        network = toml_data.get("network", {})
        if "distances_file" in network:
            self.distances_file = network["distances_file"]
        if "accounting_code_max_length" in network:
            self.accounting_code_max_length = network["accounting_code_max_length"]

        return self
