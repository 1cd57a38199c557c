"""
JSON Schema Contract Validators

Модуль для валидации payload'ов пула согласно формальным JSON Schema контрактам.
Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы (src/core/contracts/schema/):
- liquidity_added.json
- liquidity_removed.json
- swap.json
- pool_snapshot.json
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator

from src.core.domain.events import PoolEvent
from src.core.domain.pool_state import PoolSnapshot


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются вместе с пакетом в каталоге schema/ рядом с модулем.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'swap')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class LiquidityAddedValidator(ContractValidator):
    """Валидатор для liquidity_added контракта."""

    def __init__(self):
        super().__init__("liquidity_added")


class LiquidityRemovedValidator(ContractValidator):
    """Валидатор для liquidity_removed контракта."""

    def __init__(self):
        super().__init__("liquidity_removed")


class SwapValidator(ContractValidator):
    """Валидатор для swap контракта."""

    def __init__(self):
        super().__init__("swap")


class PoolSnapshotValidator(ContractValidator):
    """Валидатор для pool_snapshot контракта."""

    def __init__(self):
        super().__init__("pool_snapshot")


# Экземпляры строятся один раз: Draft202012Validator переиспользуется между вызовами
_EVENT_VALIDATORS: Dict[str, ContractValidator] = {
    "liquidity_added": LiquidityAddedValidator(),
    "liquidity_removed": LiquidityRemovedValidator(),
    "swap": SwapValidator(),
}
_SNAPSHOT_VALIDATOR = PoolSnapshotValidator()


def event_validator(event_name: str) -> ContractValidator:
    """
    Общий валидатор для event_name.

    Raises:
        KeyError: Неизвестный event_name
    """
    return _EVENT_VALIDATORS[event_name]


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_liquidity_added(data: Dict[str, Any]) -> None:
    """Валидация liquidity_added payload."""
    event_validator("liquidity_added").validate(data)


def validate_liquidity_removed(data: Dict[str, Any]) -> None:
    """Валидация liquidity_removed payload."""
    event_validator("liquidity_removed").validate(data)


def validate_swap(data: Dict[str, Any]) -> None:
    """Валидация swap payload."""
    event_validator("swap").validate(data)


def validate_pool_snapshot(data: Dict[str, Any]) -> None:
    """Валидация pool_snapshot данных."""
    _SNAPSHOT_VALIDATOR.validate(data)


def validate_event(event: PoolEvent) -> None:
    """
    Валидация payload события по его event_name.

    Args:
        event: Событие пула

    Raises:
        KeyError: Неизвестный event_name
        ValidationError: Payload не соответствует схеме
    """
    event_validator(event.event_name).validate(event.to_payload())


def validate_snapshot(snapshot: PoolSnapshot) -> None:
    """Валидация PoolSnapshot модели против pool_snapshot схемы."""
    validate_pool_snapshot(snapshot.model_dump(mode="json"))
