"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов пула:
- Валидность самих схем
- Валидация правильных payload'ов событий и снапшота
- Детекция нарушений required полей
- Детекция нарушений типов и constraints (minimum/enum/const)
- Интеграция с Pydantic моделями
"""

import json
from pathlib import Path

import pytest
from jsonschema import ValidationError

from src.core.contracts import (
    LiquidityAddedValidator,
    LiquidityRemovedValidator,
    PoolSnapshotValidator,
    SchemaLoader,
    SwapValidator,
    event_validator,
    validate_event,
    validate_liquidity_added,
    validate_liquidity_removed,
    validate_pool_snapshot,
    validate_snapshot,
    validate_swap,
)
from src.core.domain import LiquidityAdded, LiquidityRemoved, PoolSnapshot, PoolStatus, Swapped

ALICE = "0x" + "a" * 40
BOB = "0x" + "b" * 40
TOKEN_X = "0x" + "1" * 40
TOKEN_Y = "0x" + "2" * 40


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_liquidity_added():
    """Валидный liquidity_added payload."""
    return {
        "event": "liquidity_added",
        "sender": ALICE,
        "amount_x": 1_000_000,
        "amount_y": 4_000_000,
    }


@pytest.fixture
def valid_liquidity_removed():
    """Валидный liquidity_removed payload."""
    return {
        "event": "liquidity_removed",
        "sender": ALICE,
        "amount_x": 500,
        "amount_y": 2_000,
        "to": BOB,
    }


@pytest.fixture
def valid_swap():
    """Валидный swap payload."""
    return {
        "event": "swap",
        "sender": BOB,
        "amount_in": 100,
        "amount_out": 90,
        "to": BOB,
    }


@pytest.fixture
def valid_pool_snapshot():
    """Валидный pool_snapshot."""
    return {
        "asset_x": TOKEN_X,
        "asset_y": TOKEN_Y,
        "reserve_x": 1_000_000,
        "reserve_y": 1_000_000,
        "total_shares": 1_000_000,
        "locked_shares": 1_000,
        "status": "ACTIVE",
    }


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Тесты загрузчика схем."""

    def test_all_schemas_load(self) -> None:
        """Все поставляемые схемы загружаются и проходят meta-validation"""
        loader = SchemaLoader()
        for name in ("liquidity_added", "liquidity_removed", "swap", "pool_snapshot"):
            schema = loader.load_schema(name)
            assert schema["title"] == name

    def test_schema_cached(self) -> None:
        """Повторная загрузка возвращает тот же объект"""
        loader = SchemaLoader()
        assert loader.load_schema("swap") is loader.load_schema("swap")

    def test_missing_schema(self) -> None:
        """Неизвестная схема → FileNotFoundError"""
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_missing_directory(self, tmp_path: Path) -> None:
        """Несуществующий каталог → RuntimeError"""
        with pytest.raises(RuntimeError):
            SchemaLoader(tmp_path / "nope")

    def test_invalid_schema_rejected(self, tmp_path: Path) -> None:
        """Файл, не являющийся JSON Schema → ValueError"""
        (tmp_path / "broken.json").write_text(json.dumps({"type": 42}), encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON Schema"):
            SchemaLoader(tmp_path).load_schema("broken")


# =============================================================================
# EVENT CONTRACTS
# =============================================================================


class TestLiquidityAddedContract:
    """Тесты liquidity_added контракта."""

    def test_valid(self, valid_liquidity_added) -> None:
        validate_liquidity_added(valid_liquidity_added)
        assert LiquidityAddedValidator().is_valid(valid_liquidity_added)

    def test_missing_required(self, valid_liquidity_added) -> None:
        """Отсутствие amount_y → ValidationError"""
        del valid_liquidity_added["amount_y"]
        with pytest.raises(ValidationError):
            validate_liquidity_added(valid_liquidity_added)

    def test_negative_amount(self, valid_liquidity_added) -> None:
        valid_liquidity_added["amount_x"] = -1
        assert not LiquidityAddedValidator().is_valid(valid_liquidity_added)

    def test_float_amount(self, valid_liquidity_added) -> None:
        """Количества - только целые"""
        valid_liquidity_added["amount_x"] = 1.5
        assert not LiquidityAddedValidator().is_valid(valid_liquidity_added)

    def test_wrong_event_name(self, valid_liquidity_added) -> None:
        valid_liquidity_added["event"] = "swap"
        assert not LiquidityAddedValidator().is_valid(valid_liquidity_added)

    def test_additional_properties(self, valid_liquidity_added) -> None:
        valid_liquidity_added["shares"] = 10
        assert not LiquidityAddedValidator().is_valid(valid_liquidity_added)


class TestLiquidityRemovedContract:
    """Тесты liquidity_removed контракта."""

    def test_valid(self, valid_liquidity_removed) -> None:
        validate_liquidity_removed(valid_liquidity_removed)

    def test_empty_recipient(self, valid_liquidity_removed) -> None:
        valid_liquidity_removed["to"] = ""
        with pytest.raises(ValidationError):
            validate_liquidity_removed(valid_liquidity_removed)

    def test_collects_all_errors(self, valid_liquidity_removed) -> None:
        """iter_errors возвращает все нарушения"""
        valid_liquidity_removed["amount_x"] = -1
        valid_liquidity_removed["amount_y"] = "many"
        errors = list(LiquidityRemovedValidator().iter_errors(valid_liquidity_removed))
        assert len(errors) == 2


class TestSwapContract:
    """Тесты swap контракта."""

    def test_valid(self, valid_swap) -> None:
        validate_swap(valid_swap)

    def test_zero_output_allowed(self, valid_swap) -> None:
        """Нулевой выход допустим (пыльный обмен без минимума)"""
        valid_swap["amount_out"] = 0
        assert SwapValidator().is_valid(valid_swap)

    def test_zero_input_rejected(self, valid_swap) -> None:
        valid_swap["amount_in"] = 0
        with pytest.raises(ValidationError):
            validate_swap(valid_swap)


# =============================================================================
# POOL SNAPSHOT CONTRACT
# =============================================================================


class TestPoolSnapshotContract:
    """Тесты pool_snapshot контракта."""

    def test_valid(self, valid_pool_snapshot) -> None:
        validate_pool_snapshot(valid_pool_snapshot)

    def test_invalid_status(self, valid_pool_snapshot) -> None:
        valid_pool_snapshot["status"] = "PAUSED"
        assert not PoolSnapshotValidator().is_valid(valid_pool_snapshot)

    def test_negative_reserve(self, valid_pool_snapshot) -> None:
        valid_pool_snapshot["reserve_x"] = -5
        assert not PoolSnapshotValidator().is_valid(valid_pool_snapshot)


# =============================================================================
# PYDANTIC INTEGRATION
# =============================================================================


class TestPydanticIntegration:
    """Payload'ы Pydantic моделей соответствуют схемам."""

    def test_events_match_contracts(self) -> None:
        validate_event(LiquidityAdded(sender=ALICE, amount_x=10, amount_y=20))
        validate_event(LiquidityRemoved(sender=ALICE, amount_x=1, amount_y=2, to=BOB))
        validate_event(Swapped(sender=BOB, amount_in=100, amount_out=90, to=BOB))

    def test_snapshot_matches_contract(self, valid_pool_snapshot) -> None:
        snapshot = PoolSnapshot(**valid_pool_snapshot)
        assert snapshot.status == PoolStatus.ACTIVE
        validate_snapshot(snapshot)

    def test_empty_snapshot_matches_contract(self) -> None:
        snapshot = PoolSnapshot(
            asset_x=TOKEN_X,
            asset_y=TOKEN_Y,
            reserve_x=0,
            reserve_y=0,
            total_shares=0,
            locked_shares=0,
            status=PoolStatus.EMPTY,
        )
        validate_snapshot(snapshot)


# =============================================================================
# SHARED VALIDATORS
# =============================================================================


class TestEventValidatorCache:
    """Валидаторы событий строятся один раз."""

    def test_instances_shared(self) -> None:
        validator = event_validator("swap")
        assert isinstance(validator, SwapValidator)
        assert event_validator("swap") is validator
        assert event_validator("swap").validator is validator.validator

    def test_validate_event_uses_shared_instance(self, monkeypatch) -> None:
        seen = []
        shared = event_validator("liquidity_added")
        monkeypatch.setattr(shared, "validate", seen.append)
        validate_event(LiquidityAdded(sender=ALICE, amount_x=10, amount_y=20))
        assert seen == [
            {"event": "liquidity_added", "sender": ALICE, "amount_x": 10, "amount_y": 20}
        ]

    def test_unknown_event(self) -> None:
        with pytest.raises(KeyError):
            event_validator("mint")
