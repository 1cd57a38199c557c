"""ReservePool - авторитетные резервы пула.

Резервы - внутренние счётчики, изменяемые только внутри транзакционной
границы движка. Внешний перевод актива на адрес пула не сдвигает цену.
Каждая операция читает свежий снапшот через current_reserves().
"""

from typing import Tuple

from src.core.domain.errors import AMMError, AMMErrorKind
from src.core.domain.pool_state import Reserves
from src.core.domain.units import Address


class ReservePool:
    """Резервы двух активов пула."""

    def __init__(self, asset_x: Address, asset_y: Address):
        self.asset_x = asset_x
        self.asset_y = asset_y
        self.reserve_x = 0
        self.reserve_y = 0

    def current_reserves(self) -> Reserves:
        """Свежий снапшот (reserve_x, reserve_y); (0, 0) для пустого пула."""
        return Reserves(self.reserve_x, self.reserve_y)

    def assets_match(self, token_a: Address, token_b: Address) -> bool:
        """True если (token_a, token_b) - ровно два актива пула в любом порядке."""
        # Сравнение на равенство: элементы могут быть нехешируемыми
        return (token_a == self.asset_x and token_b == self.asset_y) or (
            token_a == self.asset_y and token_b == self.asset_x
        )

    def reserve_of(self, asset: Address) -> int:
        """
        Резерв актива.

        Raises:
            AMMError(INVALID_TOKEN): актив не принадлежит пулу
        """
        if asset == self.asset_x:
            return self.reserve_x
        if asset == self.asset_y:
            return self.reserve_y
        raise AMMError(AMMErrorKind.INVALID_TOKEN, f"Asset {asset} is not part of this pool")

    def ordered(self, token_in: Address) -> Tuple[int, int]:
        """(reserve_in, reserve_out) для направления обмена от token_in."""
        if token_in == self.asset_x:
            return self.reserve_x, self.reserve_y
        if token_in == self.asset_y:
            return self.reserve_y, self.reserve_x
        raise AMMError(AMMErrorKind.INVALID_TOKEN, f"Asset {token_in} is not part of this pool")

    def credit(self, amount_x: int, amount_y: int) -> Reserves:
        """Увеличение резервов (депозит или вход обмена)."""
        self.reserve_x += amount_x
        self.reserve_y += amount_y
        return self.current_reserves()

    def debit(self, amount_x: int, amount_y: int) -> Reserves:
        """
        Уменьшение резервов (вывод или выход обмена).

        Raises:
            AMMError(INSUFFICIENT_LIQUIDITY): списание больше резерва
        """
        if amount_x > self.reserve_x or amount_y > self.reserve_y:
            raise AMMError(
                AMMErrorKind.INSUFFICIENT_LIQUIDITY,
                f"Debit ({amount_x}, {amount_y}) exceeds reserves "
                f"({self.reserve_x}, {self.reserve_y})",
            )
        self.reserve_x -= amount_x
        self.reserve_y -= amount_y
        return self.current_reserves()

    def apply_swap_reserves(self, token_in: Address, new_reserve_in: int, new_reserve_out: int) -> Reserves:
        """Установка резервов после обмена в направлении от token_in."""
        if token_in == self.asset_x:
            self.reserve_x, self.reserve_y = new_reserve_in, new_reserve_out
        elif token_in == self.asset_y:
            self.reserve_y, self.reserve_x = new_reserve_in, new_reserve_out
        else:
            raise AMMError(AMMErrorKind.INVALID_TOKEN, f"Asset {token_in} is not part of this pool")
        return self.current_reserves()
