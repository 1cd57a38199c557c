"""
Numerical Safeguards - Integer Math Primitives

Модуль обеспечивает корректность целочисленной арифметики пула:
- Валидация количеств (int, неотрицательность, положительность)
- Точное деление с округлением вниз (floor) без float
- Целочисленный квадратный корень
- Проверка constant product

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. float никогда не участвует в расчётах количеств
2. Все округления - вниз (в пользу пула)
3. bool не принимается как количество
4. Все операции детерминированы и воспроизводимы
"""

import math

from src.core.domain.errors import AMMError, AMMErrorKind


# =============================================================================
# ВАЛИДАЦИЯ КОЛИЧЕСТВ
# =============================================================================


def is_valid_amount(value: object) -> bool:
    """
    Проверка, что значение - целое неотрицательное количество.

    bool исключён явно (bool - подкласс int).

    Args:
        value: Проверяемое значение

    Returns:
        True для int >= 0 (не bool)
    """
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def validate_amount(name: str, value: object, allow_zero: bool = True) -> int:
    """
    Валидация количества актива или shares.

    Args:
        name: Имя параметра (для сообщения)
        value: Проверяемое значение
        allow_zero: Допускается ли ноль (default: True)

    Returns:
        value как int

    Raises:
        AMMError(INVALID_AMOUNT): не int, bool, отрицательное, или ноль при allow_zero=False

    Examples:
        >>> validate_amount("amount_in", 100)
        100
        >>> validate_amount("amount_in", 0)
        0
    """
    if not is_valid_amount(value):
        raise AMMError(
            AMMErrorKind.INVALID_AMOUNT,
            f"{name} must be a non-negative integer, got {value!r}",
        )

    if not allow_zero and value == 0:
        raise AMMError(AMMErrorKind.INVALID_AMOUNT, f"{name} must be positive, got 0")

    return value  # type: ignore[return-value]


# =============================================================================
# ЦЕЛОЧИСЛЕННОЕ ДЕЛЕНИЕ
# =============================================================================


def mul_div_floor(a: int, b: int, denominator: int) -> int:
    """
    Точное floor(a * b / denominator) в целых числах.

    Python int не переполняется, поэтому промежуточное произведение точное.

    Args:
        a: Первый множитель (>= 0)
        b: Второй множитель (>= 0)
        denominator: Делитель (> 0)

    Returns:
        floor(a * b / denominator)

    Raises:
        ValueError: Если denominator <= 0 или множители отрицательны

    Examples:
        >>> mul_div_floor(100, 1000, 1000)
        100
        >>> mul_div_floor(7, 3, 2)
        10
    """
    if denominator <= 0:
        raise ValueError(f"denominator must be positive, got {denominator}")
    if a < 0 or b < 0:
        raise ValueError(f"factors must be non-negative, got {a}, {b}")
    return (a * b) // denominator


def isqrt_floor(value: int) -> int:
    """
    Целочисленный квадратный корень floor(sqrt(value)).

    Args:
        value: Неотрицательное целое

    Returns:
        Наибольшее r такое, что r * r <= value

    Raises:
        ValueError: Если value < 0

    Examples:
        >>> isqrt_floor(1_000_000_000_000)
        1000000
        >>> isqrt_floor(99)
        9
    """
    if value < 0:
        raise ValueError(f"value must be non-negative, got {value}")
    return math.isqrt(value)


# =============================================================================
# CONSTANT PRODUCT
# =============================================================================


def product_non_decreasing(
    reserve_x_before: int,
    reserve_y_before: int,
    reserve_x_after: int,
    reserve_y_after: int,
) -> bool:
    """
    Проверка, что constant product не уменьшился.

    Args:
        reserve_x_before: Резерв X до операции
        reserve_y_before: Резерв Y до операции
        reserve_x_after: Резерв X после операции
        reserve_y_after: Резерв Y после операции

    Returns:
        True если x' * y' >= x * y
    """
    return reserve_x_after * reserve_y_after >= reserve_x_before * reserve_y_before
