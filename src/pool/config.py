"""
Engine Configuration

Frozen dataclass конфигурация движка пула и загрузчик из окружения.

Переменные окружения:
- AMM_POOL_ADDRESS: идентичность пула (по умолчанию выводится из пары активов)
- AMM_ENFORCE_INVARIANTS: проверка инвариантов после каждой операции
- AMM_VALIDATE_EVENT_CONTRACTS: валидация payload событий по JSON Schema
- AMM_EVENT_LOG_LIMIT: размер журнала событий в памяти
"""

import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from src.core.domain.units import is_null_address

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigError(Exception):
    """Ошибка загрузки или валидации конфигурации."""


@dataclass(frozen=True)
class EngineConfig:
    """Конфигурация движка пула.

    Fee-кривая и MINIMUM_LIQUIDITY не конфигурируются.
    """

    pool_address: Optional[str] = None
    enforce_invariants: bool = True
    validate_event_contracts: bool = True
    event_log_limit: int = 10_000

    def __post_init__(self):
        if self.pool_address is not None and is_null_address(self.pool_address):
            raise ConfigError(f"pool_address cannot be a null address: {self.pool_address!r}")

        if isinstance(self.event_log_limit, bool) or not isinstance(self.event_log_limit, int):
            raise ConfigError(f"event_log_limit must be an integer, got {self.event_log_limit!r}")

        if self.event_log_limit <= 0:
            raise ConfigError(f"event_log_limit must be positive, got {self.event_log_limit}")


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean flag, got {raw!r}")


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e


def load_engine_config(env: Optional[Mapping[str, str]] = None, **overrides: Any) -> EngineConfig:
    """
    Загрузка EngineConfig из окружения.

    Приоритет: overrides > env > defaults.

    Args:
        env: Источник переменных (None → os.environ)
        **overrides: Явные значения полей EngineConfig

    Returns:
        EngineConfig

    Raises:
        ConfigError: Некорректное значение или неизвестное поле
    """
    if env is None:
        env = os.environ

    values: dict = {}

    if env.get("AMM_POOL_ADDRESS"):
        values["pool_address"] = env["AMM_POOL_ADDRESS"].strip()
    if "AMM_ENFORCE_INVARIANTS" in env:
        values["enforce_invariants"] = _parse_bool(
            "AMM_ENFORCE_INVARIANTS", env["AMM_ENFORCE_INVARIANTS"]
        )
    if "AMM_VALIDATE_EVENT_CONTRACTS" in env:
        values["validate_event_contracts"] = _parse_bool(
            "AMM_VALIDATE_EVENT_CONTRACTS", env["AMM_VALIDATE_EVENT_CONTRACTS"]
        )
    if "AMM_EVENT_LOG_LIMIT" in env:
        values["event_log_limit"] = _parse_int("AMM_EVENT_LOG_LIMIT", env["AMM_EVENT_LOG_LIMIT"])

    try:
        config = replace(EngineConfig(**values), **overrides)
    except TypeError as e:
        raise ConfigError(f"Unknown configuration field: {e}") from e

    logger.info(
        f"[CONFIG] Engine configuration loaded: pool_address={config.pool_address}, "
        f"enforce_invariants={config.enforce_invariants}, "
        f"validate_event_contracts={config.validate_event_contracts}, "
        f"event_log_limit={config.event_log_limit}"
    )
    return config
