"""
Liquidity Math - расчёт shares и сумм для ликвидности

Чистые функции без побочных эффектов:
- quote: эквивалент суммы по текущему соотношению резервов
- compute_initial_shares: bootstrap первого депозита (sqrt(x*y) - MINIMUM_LIQUIDITY)
- compute_optimal_amounts: подбор сумм с сохранением соотношения резервов
- compute_shares_to_mint: shares для депозита в активный пул
- compute_withdrawal: pro-rata вывод по сжигаемым shares

Все деления - целочисленные, с округлением вниз.
"""

from typing import Tuple

from src.core.domain.errors import AMMError, AMMErrorKind
from src.core.domain.units import MINIMUM_LIQUIDITY
from src.core.math.numerical_safeguards import isqrt_floor, mul_div_floor


# =============================================================================
# QUOTE
# =============================================================================


def quote(amount_a: int, reserve_a: int, reserve_b: int) -> int:
    """
    Эквивалент amount_a в активе B по текущему соотношению резервов.

    amount_b = amount_a * reserve_b // reserve_a

    Args:
        amount_a: Сумма актива A (> 0)
        reserve_a: Резерв актива A
        reserve_b: Резерв актива B

    Returns:
        Сумма актива B (floor)

    Raises:
        AMMError(INVALID_AMOUNT): amount_a == 0
        AMMError(INSUFFICIENT_LIQUIDITY): нулевой резерв
    """
    if amount_a <= 0:
        raise AMMError(AMMErrorKind.INVALID_AMOUNT, f"amount_a must be positive, got {amount_a}")
    if reserve_a == 0 or reserve_b == 0:
        raise AMMError(
            AMMErrorKind.INSUFFICIENT_LIQUIDITY,
            f"Cannot quote against empty reserves ({reserve_a}, {reserve_b})",
        )
    return mul_div_floor(amount_a, reserve_b, reserve_a)


# =============================================================================
# MINT
# =============================================================================


def compute_initial_shares(amount_x: int, amount_y: int) -> int:
    """
    Shares первого депозита в пустой пул.

    shares = floor(sqrt(amount_x * amount_y)) - MINIMUM_LIQUIDITY

    MINIMUM_LIQUIDITY минтится отдельно в lock sink и не входит в результат.

    Args:
        amount_x: Депозит актива X
        amount_y: Депозит актива Y

    Returns:
        Shares для получателя (> 0)

    Raises:
        AMMError(INSUFFICIENT_LIQUIDITY_MINTED): результат <= 0

    Examples:
        >>> compute_initial_shares(1_000_000, 1_000_000)
        999000
    """
    shares = isqrt_floor(amount_x * amount_y) - MINIMUM_LIQUIDITY
    if shares <= 0:
        raise AMMError(
            AMMErrorKind.INSUFFICIENT_LIQUIDITY_MINTED,
            f"Initial deposit ({amount_x}, {amount_y}) mints {shares} shares "
            f"after locking {MINIMUM_LIQUIDITY}",
        )
    return shares


def compute_optimal_amounts(
    desired_x: int,
    desired_y: int,
    min_x: int,
    min_y: int,
    reserve_x: int,
    reserve_y: int,
) -> Tuple[int, int]:
    """
    Суммы депозита, сохраняющие текущее соотношение резервов.

    Пустой пул: (desired_x, desired_y).
    Активный пул:
        matched_y = desired_x * reserve_y // reserve_x
        если matched_y <= desired_y: требуется matched_y >= min_y → (desired_x, matched_y)
        иначе matched_x = desired_y * reserve_x // reserve_y,
              требуется matched_x >= min_x → (matched_x, desired_y)

    Args:
        desired_x: Желаемый депозит X
        desired_y: Желаемый депозит Y
        min_x: Минимально допустимый депозит X
        min_y: Минимально допустимый депозит Y
        reserve_x: Текущий резерв X
        reserve_y: Текущий резерв Y

    Returns:
        (used_x, used_y)

    Raises:
        AMMError(INSUFFICIENT_B_AMOUNT): matched_y < min_y
        AMMError(INSUFFICIENT_A_AMOUNT): matched_x < min_x
    """
    if reserve_x == 0 and reserve_y == 0:
        return desired_x, desired_y

    matched_y = quote(desired_x, reserve_x, reserve_y)
    if matched_y <= desired_y:
        if matched_y < min_y:
            raise AMMError(
                AMMErrorKind.INSUFFICIENT_B_AMOUNT,
                f"Matched amount_y {matched_y} below minimum {min_y}",
            )
        return desired_x, matched_y

    matched_x = quote(desired_y, reserve_y, reserve_x)
    if matched_x < min_x:
        raise AMMError(
            AMMErrorKind.INSUFFICIENT_A_AMOUNT,
            f"Matched amount_x {matched_x} below minimum {min_x}",
        )
    return matched_x, desired_y


def compute_shares_to_mint(
    used_x: int,
    used_y: int,
    reserve_x: int,
    reserve_y: int,
    total_shares: int,
) -> int:
    """
    Shares для депозита в активный пул.

    shares = min(used_x * T // reserve_x, used_y * T // reserve_y)

    Минимум из двух сторон: излишек одной стороны достаётся существующим
    держателям, а не новому.

    Raises:
        AMMError(INSUFFICIENT_LIQUIDITY): пул пуст
        AMMError(INSUFFICIENT_LIQUIDITY_MINTED): shares == 0
    """
    if reserve_x == 0 or reserve_y == 0 or total_shares == 0:
        raise AMMError(
            AMMErrorKind.INSUFFICIENT_LIQUIDITY,
            "Proportional mint requires a funded pool",
        )

    shares = min(
        mul_div_floor(used_x, total_shares, reserve_x),
        mul_div_floor(used_y, total_shares, reserve_y),
    )
    if shares <= 0:
        raise AMMError(
            AMMErrorKind.INSUFFICIENT_LIQUIDITY_MINTED,
            f"Deposit ({used_x}, {used_y}) is too small to mint a share",
        )
    return shares


# =============================================================================
# BURN
# =============================================================================


def compute_withdrawal(
    shares: int,
    reserve_x: int,
    reserve_y: int,
    total_shares: int,
) -> Tuple[int, int]:
    """
    Pro-rata вывод по сжигаемым shares.

    amount_x = shares * reserve_x // total_shares
    amount_y = shares * reserve_y // total_shares

    Raises:
        AMMError(INSUFFICIENT_LIQUIDITY): total_shares == 0
    """
    if total_shares == 0:
        raise AMMError(AMMErrorKind.INSUFFICIENT_LIQUIDITY, "Pool has no outstanding shares")

    return (
        mul_div_floor(shares, reserve_x, total_shares),
        mul_div_floor(shares, reserve_y, total_shares),
    )
