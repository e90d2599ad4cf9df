"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for file locations and
logging settings. Every value can be overridden via environment
variables:
- TPA_NETWORK_DATA_DIR=/path/to/data
- TPA_NETWORK_NETWORK_FILE=berlin_network_bus.csv
- TPA_REPORT_OUTPUT_DIR=/path/to/reports
- TPA_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.errors import ConfigurationError


class NetworkConfig(BaseSettings):
    """Input network files.

    Environment variables prefixed with TPA_NETWORK_.
    """

    model_config = SettingsConfigDict(env_prefix="TPA_NETWORK_")

    data_dir: Path = Field(default_factory=Path.cwd)
    network_file: str = "berlin_network_bus.csv"
    adjacency_file: str = "berlin_list_bus.csv"

    @property
    def network_path(self) -> Path:
        """Full path to the raw edge-record CSV file."""
        return self.data_dir / self.network_file

    @property
    def adjacency_path(self) -> Path:
        """Full path to the adjacency list CSV file."""
        return self.data_dir / self.adjacency_file


class ReportConfig(BaseSettings):
    """Output report files.

    Environment variables prefixed with TPA_REPORT_.
    """

    model_config = SettingsConfigDict(env_prefix="TPA_REPORT_")

    output_dir: Path = Field(default_factory=Path.cwd)
    paths_file: str = "berlin_path.csv"
    performance_file: str = "performance.csv"
    details_file: str = "output.csv"

    @property
    def paths_path(self) -> Path:
        """Full path to the shortest-path report."""
        return self.output_dir / self.paths_file

    @property
    def performance_path(self) -> Path:
        """Full path to the performance report."""
        return self.output_dir / self.performance_file

    @property
    def details_path(self) -> Path:
        """Full path to the per-hop distance/parent report."""
        return self.output_dir / self.details_file


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with TPA_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="TPA_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging

    @field_validator("level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.network.adjacency_path)
        print(config.report.performance_path)

    Environment variables prefixed with TPA_.
    """

    model_config = SettingsConfigDict(env_prefix="TPA_")

    network: NetworkConfig = Field(default_factory=NetworkConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Raises:
        ConfigurationError: If a setting fails validation.
    """
    try:
        return AppConfig()
    except ValidationError as e:
        first = e.errors()[0]
        setting = ".".join(str(part) for part in first.get("loc", ()))
        raise ConfigurationError(
            f"Invalid configuration for {setting or 'settings'}: {first.get('msg', e)}",
            setting_name=setting,
            cause=e,
        )


def reset_config() -> None:
    """Reset the configuration cache."""
    get_config.cache_clear()
