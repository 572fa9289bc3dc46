"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, optional_env_var
from .errors import ConfigurationError
from .logging import configure_logging
from .migration import MigrationConfig, MigrationStrategy, get_migration_config, parse_strategy

__all__ = [
    "ConfigurationError",
    "MigrationConfig",
    "MigrationStrategy",
    "configure_logging",
    "env_flag",
    "get_migration_config",
    "optional_env_var",
    "parse_strategy",
]
