"""SwapEngine - exact-input обмен с защитой от slippage.

Порядок проверок:
1. Маршрут: ровно два элемента, разные токены, оба - активы пула
2. Резервы ненулевые
3. amount_in > 0
4. amount_out >= min_amount_out
"""

import logging
from typing import Sequence, Tuple

from src.core.domain.errors import AMMError, AMMErrorKind
from src.core.domain.units import Address
from src.core.math.swap_math import get_amount_out

logger = logging.getLogger(__name__)


class SwapEngine:
    """Расчёт выхода обмена по fee-кривой 997/1000."""

    @staticmethod
    def resolve_route(
        path: Sequence[Address], asset_x: Address, asset_y: Address
    ) -> Tuple[Address, Address]:
        """
        (token_in, token_out) из маршрута.

        Raises:
            AMMError(INVALID_SWAP_ROUTE): маршрут не из двух элементов
            AMMError(INVALID_TOKEN): одинаковые токены или чужой актив
        """
        if path is None or isinstance(path, str) or len(path) != 2:
            raise AMMError(
                AMMErrorKind.INVALID_SWAP_ROUTE,
                f"Swap path must contain exactly two tokens, got {path!r}",
            )

        token_in, token_out = path[0], path[1]
        if token_in == token_out:
            raise AMMError(
                AMMErrorKind.INVALID_TOKEN, f"token_in and token_out are identical: {token_in}"
            )

        in_pool = (token_in == asset_x and token_out == asset_y) or (
            token_in == asset_y and token_out == asset_x
        )
        if not in_pool:
            raise AMMError(
                AMMErrorKind.INVALID_TOKEN,
                f"Path ({token_in}, {token_out}) does not match pool assets",
            )
        return token_in, token_out

    @staticmethod
    def quote(amount_in: int, reserve_in: int, reserve_out: int) -> int:
        """Чистый quote без побочных эффектов (GetAmountOut)."""
        return get_amount_out(amount_in, reserve_in, reserve_out)

    def plan_swap(
        self,
        amount_in: int,
        min_amount_out: int,
        reserve_in: int,
        reserve_out: int,
    ) -> int:
        """
        Выход обмена с проверкой минимального выхода.

        Raises:
            AMMError(INSUFFICIENT_LIQUIDITY): нулевой резерв
            AMMError(INSUFFICIENT_OUTPUT_AMOUNT): amount_in == 0 или выход ниже минимума
        """
        amount_out = self.quote(amount_in, reserve_in, reserve_out)
        if amount_out < min_amount_out:
            raise AMMError(
                AMMErrorKind.INSUFFICIENT_OUTPUT_AMOUNT,
                f"amount_out {amount_out} below minimum {min_amount_out}",
            )

        logger.debug(
            f"[SWAP] planned: in={amount_in} out={amount_out} "
            f"reserves=({reserve_in}, {reserve_out})"
        )
        return amount_out
