"""
Contract Validation Module

Модуль для валидации JSON контрактов пула: события и снапшот.
"""

from .validators import (
    ContractValidator,
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

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "LiquidityAddedValidator",
    "LiquidityRemovedValidator",
    "SwapValidator",
    "PoolSnapshotValidator",
    # Functions
    "event_validator",
    "validate_liquidity_added",
    "validate_liquidity_removed",
    "validate_swap",
    "validate_pool_snapshot",
    "validate_event",
    "validate_snapshot",
]
