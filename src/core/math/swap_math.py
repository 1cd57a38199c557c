"""
Swap Math - constant product с фиксированной комиссией 0.3%

Формула exact-input обмена:
    amount_in_with_fee = amount_in * 997
    amount_out = amount_in_with_fee * reserve_out // (reserve_in * 1000 + amount_in_with_fee)

Комиссия применяется масштабированием эффективного входа на 997/1000
до формулы x*y=k. Полный amount_in остаётся в пуле, поэтому после обмена
произведение резервов строго растёт.
"""

from typing import Tuple

from src.core.domain.errors import AMMError, AMMErrorKind
from src.core.domain.units import FEE_DENOMINATOR, FEE_NUMERATOR, PRICE_SCALE
from src.core.math.numerical_safeguards import mul_div_floor, product_non_decreasing


# =============================================================================
# AMOUNT OUT
# =============================================================================


def get_amount_out(amount_in: int, reserve_in: int, reserve_out: int) -> int:
    """
    Выход exact-input обмена с учётом комиссии.

    Args:
        amount_in: Точный вход
        reserve_in: Резерв входного актива
        reserve_out: Резерв выходного актива

    Returns:
        amount_out (floor)

    Raises:
        AMMError(INSUFFICIENT_LIQUIDITY): нулевой резерв (проверяется первым)
        AMMError(INSUFFICIENT_OUTPUT_AMOUNT): amount_in == 0

    Examples:
        >>> get_amount_out(100, 1000, 1000)
        90
    """
    if reserve_in == 0 or reserve_out == 0:
        raise AMMError(
            AMMErrorKind.INSUFFICIENT_LIQUIDITY,
            f"Reserves must be non-zero, got ({reserve_in}, {reserve_out})",
        )
    if amount_in == 0:
        raise AMMError(AMMErrorKind.INSUFFICIENT_OUTPUT_AMOUNT, "amount_in must be positive")

    amount_in_with_fee = amount_in * FEE_NUMERATOR
    denominator = reserve_in * FEE_DENOMINATOR + amount_in_with_fee
    return mul_div_floor(amount_in_with_fee, reserve_out, denominator)


# =============================================================================
# SPOT PRICE
# =============================================================================


def get_spot_price(reserve_base: int, reserve_quote: int) -> int:
    """
    Спот-цена базового актива в котируемом, масштаб 10^18.

    price = reserve_quote * 10^18 // reserve_base

    Raises:
        AMMError(INSUFFICIENT_LIQUIDITY): нулевой резерв

    Examples:
        >>> get_spot_price(1000, 2000)
        2000000000000000000
    """
    if reserve_base == 0 or reserve_quote == 0:
        raise AMMError(
            AMMErrorKind.INSUFFICIENT_LIQUIDITY,
            f"Price undefined for reserves ({reserve_base}, {reserve_quote})",
        )
    return mul_div_floor(reserve_quote, PRICE_SCALE, reserve_base)


# =============================================================================
# APPLY
# =============================================================================


def apply_swap(
    amount_in: int,
    amount_out: int,
    reserve_in: int,
    reserve_out: int,
) -> Tuple[int, int]:
    """
    Резервы после обмена с проверкой constant product.

    Returns:
        (new_reserve_in, new_reserve_out)

    Raises:
        AMMError(INSUFFICIENT_LIQUIDITY): amount_out >= reserve_out
        AMMError(INVARIANT_VIOLATION): произведение резервов уменьшилось
    """
    if amount_out >= reserve_out:
        raise AMMError(
            AMMErrorKind.INSUFFICIENT_LIQUIDITY,
            f"amount_out {amount_out} would drain reserve {reserve_out}",
        )

    new_reserve_in = reserve_in + amount_in
    new_reserve_out = reserve_out - amount_out

    if not product_non_decreasing(reserve_in, reserve_out, new_reserve_in, new_reserve_out):
        raise AMMError(
            AMMErrorKind.INVARIANT_VIOLATION,
            f"Constant product decreased: {reserve_in * reserve_out} -> "
            f"{new_reserve_in * new_reserve_out}",
        )
    return new_reserve_in, new_reserve_out
