"""Migration run configuration values."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from repertipy.domain.model import MigrationStrategy

from .env import env_flag, optional_env_var
from .errors import ConfigurationError

STRATEGY_ENV_VAR = "REPERTIPY_MIGRATION_STRATEGY"
CREATE_MISSING_ENV_VAR = "REPERTIPY_CREATE_MISSING"
LOG_LEVEL_ENV_VAR = "REPERTIPY_LOG_LEVEL"


@dataclass(frozen=True, slots=True)
class MigrationConfig:
    strategy: MigrationStrategy = MigrationStrategy.PER_STUDENT
    create_missing: bool = True
    log_level: int = logging.INFO


def parse_strategy(value: str) -> MigrationStrategy:
    try:
        return MigrationStrategy(value.strip().lower())
    except ValueError as exc:
        choices = ", ".join(strategy.value for strategy in MigrationStrategy)
        raise ConfigurationError(
            f"Unknown migration strategy {value!r} (expected one of: {choices})"
        ) from exc


def _parse_log_level(value: str) -> int:
    level = logging.getLevelName(value.upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown log level: {value!r}")
    return level


def get_migration_config() -> MigrationConfig:
    strategy = optional_env_var(STRATEGY_ENV_VAR)
    log_level = optional_env_var(LOG_LEVEL_ENV_VAR)
    return MigrationConfig(
        strategy=parse_strategy(strategy) if strategy else MigrationStrategy.PER_STUDENT,
        create_missing=env_flag(CREATE_MISSING_ENV_VAR, default=True),
        log_level=_parse_log_level(log_level) if log_level else logging.INFO,
    )
