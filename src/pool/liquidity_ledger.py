"""LiquidityLedger - учёт shares пула.

Инвариант: стоимость share пропорциональна резервам.
- total_shares = sum(balances) + locked_shares
- locked_shares (MINIMUM_LIQUIDITY) минтятся один раз при первом
  фондировании в зарезервированный lock sink и никогда не сжигаются
- lock sink не является держателем и не попадает в holders()
- burn не может опустить total_shares ниже locked_shares или до нуля
"""

from typing import Dict, List, Tuple

from src.core.domain.errors import AMMError, AMMErrorKind
from src.core.domain.pool_state import Reserves
from src.core.domain.units import MINIMUM_LIQUIDITY, Address
from src.core.math.liquidity_math import (
    compute_initial_shares,
    compute_optimal_amounts,
    compute_shares_to_mint,
    compute_withdrawal,
)


class LiquidityLedger:
    """Балансы shares и lock sink."""

    def __init__(self):
        self.balances: Dict[Address, int] = {}
        self.locked_shares = 0
        self.total_shares = 0

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def balance_of(self, holder: Address) -> int:
        return self.balances.get(holder, 0)

    def holders(self) -> List[Address]:
        """Текущие держатели с ненулевым балансом (без lock sink)."""
        return sorted(h for h, v in self.balances.items() if v > 0)

    def is_conserved(self) -> bool:
        """total_shares == sum(balances) + locked_shares."""
        return self.total_shares == sum(self.balances.values()) + self.locked_shares

    # -------------------------------------------------------------------------
    # Planning
    # -------------------------------------------------------------------------

    def plan_add(
        self,
        desired_x: int,
        desired_y: int,
        min_x: int,
        min_y: int,
        reserves: Reserves,
    ) -> Tuple[int, int, int]:
        """
        Расчёт депозита: (used_x, used_y, shares_issued).

        Пустой пул - bootstrap через sqrt(x*y) - MINIMUM_LIQUIDITY,
        активный - сохранение соотношения резервов.
        """
        if self.total_shares == 0:
            shares = compute_initial_shares(desired_x, desired_y)
            return desired_x, desired_y, shares

        used_x, used_y = compute_optimal_amounts(
            desired_x, desired_y, min_x, min_y, reserves.reserve_x, reserves.reserve_y
        )
        shares = compute_shares_to_mint(
            used_x, used_y, reserves.reserve_x, reserves.reserve_y, self.total_shares
        )
        return used_x, used_y, shares

    def plan_remove(self, holder: Address, shares: int, reserves: Reserves) -> Tuple[int, int]:
        """
        Расчёт вывода: (amount_x, amount_y) pro-rata живых резервов.

        Raises:
            AMMError(INSUFFICIENT_SHARES): у holder меньше shares
        """
        self._require_balance(holder, shares)
        return compute_withdrawal(
            shares, reserves.reserve_x, reserves.reserve_y, self.total_shares
        )

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def lock_minimum_liquidity(self) -> int:
        """
        Перманентная блокировка MINIMUM_LIQUIDITY при первом фондировании.

        Raises:
            AMMError(INVARIANT_VIOLATION): пул уже фондирован
        """
        if self.total_shares != 0 or self.locked_shares != 0:
            raise AMMError(
                AMMErrorKind.INVARIANT_VIOLATION,
                "Minimum liquidity can only be locked on the first funding",
            )
        self.locked_shares = MINIMUM_LIQUIDITY
        self.total_shares += MINIMUM_LIQUIDITY
        return self.locked_shares

    def mint(self, holder: Address, shares: int) -> int:
        if shares <= 0:
            raise AMMError(
                AMMErrorKind.INSUFFICIENT_LIQUIDITY_MINTED, f"Cannot mint {shares} shares"
            )
        self.balances[holder] = self.balance_of(holder) + shares
        self.total_shares += shares
        return self.balances[holder]

    def burn(self, holder: Address, shares: int) -> int:
        """
        Сжигание shares держателя.

        Raises:
            AMMError(INSUFFICIENT_SHARES): у holder меньше shares
            AMMError(INSUFFICIENT_LIQUIDITY): total_shares упал бы ниже lock floor или до нуля
        """
        self._require_balance(holder, shares)

        remaining = self.total_shares - shares
        if remaining < self.locked_shares or remaining <= 0:
            raise AMMError(
                AMMErrorKind.INSUFFICIENT_LIQUIDITY,
                f"Burn of {shares} would leave {remaining} shares "
                f"(locked floor {self.locked_shares})",
            )

        balance = self.balance_of(holder) - shares
        if balance:
            self.balances[holder] = balance
        else:
            del self.balances[holder]
        self.total_shares = remaining
        return balance

    def _require_balance(self, holder: Address, shares: int) -> None:
        held = self.balance_of(holder)
        if held < shares:
            raise AMMError(
                AMMErrorKind.INSUFFICIENT_SHARES,
                f"{holder} holds {held} shares, requested {shares}",
            )
