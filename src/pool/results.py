"""Результаты операций пула (tagged results).

Каждая публичная операция возвращает frozen dataclass: ok=True и значения,
либо ok=False, вид ошибки и детали. Неуспешный результат гарантирует,
что состояние пула не изменилось.
"""

from dataclasses import dataclass
from typing import Optional

from src.core.domain.errors import AMMError, AMMErrorKind


@dataclass(frozen=True)
class OperationResult:
    """Базовый результат операции."""

    ok: bool
    error: Optional[AMMErrorKind] = None
    details: str = ""

    def raise_for_error(self) -> None:
        """Бросает AMMError для неуспешного результата."""
        if not self.ok:
            raise AMMError(self.error or AMMErrorKind.INVARIANT_VIOLATION, self.details)


@dataclass(frozen=True)
class AddLiquidityResult(OperationResult):
    """Результат add_liquidity."""

    amount_x: int = 0
    amount_y: int = 0
    shares: int = 0


@dataclass(frozen=True)
class RemoveLiquidityResult(OperationResult):
    """Результат remove_liquidity."""

    amount_x: int = 0
    amount_y: int = 0


@dataclass(frozen=True)
class SwapResult(OperationResult):
    """Результат swap."""

    amount_in: int = 0
    amount_out: int = 0


@dataclass(frozen=True)
class PriceResult(OperationResult):
    """Результат get_price (масштаб 10^18)."""

    price: int = 0


@dataclass(frozen=True)
class QuoteResult(OperationResult):
    """Результат get_amount_out."""

    amount_out: int = 0
