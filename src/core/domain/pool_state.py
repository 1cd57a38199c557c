"""
PoolSnapshot - Модель состояния пула

Immutable Pydantic модель, представляющая снапшот пула между операциями.
Совместима с JSON Schema (src/core/contracts/schema/pool_snapshot.json).
"""

from enum import Enum
from typing import NamedTuple

from pydantic import BaseModel, Field, model_validator


# =============================================================================
# ENUMS
# =============================================================================


class PoolStatus(str, Enum):
    """
    Стадия жизненного цикла пула.

    EMPTY → ACTIVE ровно один раз, при первом успешном добавлении ликвидности.
    """

    EMPTY = "EMPTY"
    ACTIVE = "ACTIVE"


# =============================================================================
# RESERVES
# =============================================================================


class Reserves(NamedTuple):
    """Снапшот резервов (reserve_x, reserve_y)."""

    reserve_x: int
    reserve_y: int

    def is_empty(self) -> bool:
        """True если хотя бы один резерв равен нулю."""
        return self.reserve_x == 0 or self.reserve_y == 0

    def product(self) -> int:
        """Constant product k = reserve_x * reserve_y."""
        return self.reserve_x * self.reserve_y


# =============================================================================
# POOL SNAPSHOT
# =============================================================================


class PoolSnapshot(BaseModel):
    """
    Снапшот состояния пула.

    Инвариант покоя: reserve_x == 0 <=> reserve_y == 0 <=> total_shares == 0.
    """

    asset_x: str = Field(..., min_length=1, description="Идентификатор актива X")
    asset_y: str = Field(..., min_length=1, description="Идентификатор актива Y")

    reserve_x: int = Field(..., ge=0, description="Резерв актива X")
    reserve_y: int = Field(..., ge=0, description="Резерв актива Y")

    total_shares: int = Field(..., ge=0, description="Все выпущенные shares (включая locked)")
    locked_shares: int = Field(..., ge=0, description="Перманентно заблокированные shares")

    status: PoolStatus = Field(..., description="Стадия жизненного цикла")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_at_rest_invariant(self) -> "PoolSnapshot":
        """Пул либо полностью пуст, либо полностью фондирован."""
        empties = {self.reserve_x == 0, self.reserve_y == 0, self.total_shares == 0}
        if len(empties) != 1:
            raise ValueError(
                f"Pool is partially funded: reserves=({self.reserve_x}, {self.reserve_y}), "
                f"total_shares={self.total_shares}"
            )

        if self.asset_x == self.asset_y:
            raise ValueError(f"asset_x and asset_y must differ: {self.asset_x}")

        if self.locked_shares > self.total_shares:
            raise ValueError(
                f"locked_shares {self.locked_shares} exceeds total_shares {self.total_shares}"
            )

        expected = PoolStatus.EMPTY if self.total_shares == 0 else PoolStatus.ACTIVE
        if self.status != expected:
            raise ValueError(f"status {self.status.value} inconsistent with total_shares")
        return self

    def reserves(self) -> Reserves:
        """Резервы как Reserves tuple."""
        return Reserves(self.reserve_x, self.reserve_y)
