"""Configuration management for the Redline tracker."""

from .loader import (
    Config,
    apply_env_overrides,
    default_config_path,
    load_config,
    load_sources,
    save_config,
    save_sources,
)
from .models import AIConfig, ConfigModel, PostgresConfig, ProviderConfig, ScrapingConfig, SourceConfig

__all__ = [
    "Config",
    "ConfigModel",
    "AIConfig",
    "PostgresConfig",
    "ProviderConfig",
    "ScrapingConfig",
    "SourceConfig",
    "apply_env_overrides",
    "default_config_path",
    "load_config",
    "load_sources",
    "save_config",
    "save_sources",
]
