"""
Pool Units - константы и идентичности движка AMM

Единственный источник для:
- MINIMUM_LIQUIDITY (перманентно заблокированные shares)
- fee-кривой 997/1000 (фиксированная комиссия 0.3%)
- PRICE_SCALE (масштаб спот-цены 10^18)
- sentinel-адресов (ZERO_ADDRESS, DEAD_ADDRESS)

Все количества - целые неотрицательные единицы актива (без float).
"""

from typing import Final, Optional

from src.core.domain.errors import AMMError, AMMErrorKind


# =============================================================================
# ТИПЫ
# =============================================================================

# Идентичность участника или актива. Сравнение - точное равенство строк.
Address = str


# =============================================================================
# КОНСТАНТЫ ПУЛА
# =============================================================================

# Shares, которые минтятся в lock sink при первом фондировании и никогда не выкупаются
MINIMUM_LIQUIDITY: Final[int] = 1000

# Fee-кривая: эффективный вход = amount_in * 997 / 1000
FEE_NUMERATOR: Final[int] = 997
FEE_DENOMINATOR: Final[int] = 1000

# Масштаб спот-цены (18 знаков)
PRICE_SCALE: Final[int] = 10**18


# =============================================================================
# SENTINEL-АДРЕСА
# =============================================================================

ZERO_ADDRESS: Final[str] = "0x0000000000000000000000000000000000000000"

# Идентичность lock sink в логах; locked shares учитываются отдельно и не являются балансом держателя
DEAD_ADDRESS: Final[str] = "0x000000000000000000000000000000000000dEaD"


# =============================================================================
# ВАЛИДАЦИЯ ИДЕНТИЧНОСТЕЙ
# =============================================================================


def is_null_address(address: Optional[Address]) -> bool:
    """
    Проверка null-идентичности.

    Args:
        address: Проверяемый адрес

    Returns:
        True для None, пустой строки или ZERO_ADDRESS
    """
    return address is None or address == "" or address == ZERO_ADDRESS


def validate_recipient(address: Optional[Address], pool_address: Address) -> Address:
    """
    Проверка получателя операции.

    Получатель должен быть внешней идентичностью: не null и не сам пул.

    Args:
        address: Адрес получателя
        pool_address: Собственная идентичность пула

    Returns:
        address без изменений

    Raises:
        AMMError(INVALID_ADDRESS): null-адрес или адрес пула
    """
    if not isinstance(address, str) or is_null_address(address):
        raise AMMError(AMMErrorKind.INVALID_ADDRESS, f"Recipient is null: {address!r}")

    if address == pool_address:
        raise AMMError(
            AMMErrorKind.INVALID_ADDRESS, f"Recipient cannot be the pool itself: {address}"
        )

    return address
