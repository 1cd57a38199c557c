"""
Тесты для Engine Configuration

Проверяет:
1. Значения по умолчанию
2. Загрузку из окружения и приоритет overrides
3. Отклонение некорректных значений
"""

import pytest

from src.core.domain.units import ZERO_ADDRESS
from src.pool.config import ConfigError, EngineConfig, load_engine_config

POOL = "0x" + "9" * 40


class TestEngineConfig:
    """Тесты EngineConfig."""

    def test_defaults(self) -> None:
        config = EngineConfig()
        assert config.pool_address is None
        assert config.enforce_invariants is True
        assert config.validate_event_contracts is True
        assert config.event_log_limit == 10_000

    def test_null_pool_address_rejected(self) -> None:
        with pytest.raises(ConfigError):
            EngineConfig(pool_address=ZERO_ADDRESS)

    @pytest.mark.parametrize("limit", [0, -5, True, "100"])
    def test_invalid_event_log_limit(self, limit) -> None:
        with pytest.raises(ConfigError):
            EngineConfig(event_log_limit=limit)

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            EngineConfig().event_log_limit = 5


class TestLoadEngineConfig:
    """Тесты load_engine_config."""

    def test_empty_env(self) -> None:
        assert load_engine_config(env={}) == EngineConfig()

    def test_from_env(self) -> None:
        env = {
            "AMM_POOL_ADDRESS": f"  {POOL} ",
            "AMM_ENFORCE_INVARIANTS": "off",
            "AMM_VALIDATE_EVENT_CONTRACTS": "No",
            "AMM_EVENT_LOG_LIMIT": "50",
        }
        config = load_engine_config(env=env)
        assert config == EngineConfig(
            pool_address=POOL,
            enforce_invariants=False,
            validate_event_contracts=False,
            event_log_limit=50,
        )

    def test_overrides_win(self) -> None:
        config = load_engine_config(env={"AMM_EVENT_LOG_LIMIT": "50"}, event_log_limit=7)
        assert config.event_log_limit == 7

    def test_invalid_bool(self) -> None:
        with pytest.raises(ConfigError, match="AMM_ENFORCE_INVARIANTS"):
            load_engine_config(env={"AMM_ENFORCE_INVARIANTS": "maybe"})

    def test_invalid_int(self) -> None:
        with pytest.raises(ConfigError, match="AMM_EVENT_LOG_LIMIT"):
            load_engine_config(env={"AMM_EVENT_LOG_LIMIT": "many"})

    def test_unknown_override(self) -> None:
        with pytest.raises(ConfigError, match="Unknown configuration field"):
            load_engine_config(env={}, fee_bps=30)

    def test_reads_os_environ(self, monkeypatch) -> None:
        monkeypatch.setenv("AMM_EVENT_LOG_LIMIT", "3")
        assert load_engine_config().event_log_limit == 3
