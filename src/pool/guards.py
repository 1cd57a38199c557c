"""Guards - входные проверки операций пула.

Все проверки выполняются до чтения резервов; сбой любой из них
терминален для операции.
"""

from typing import Optional

from src.core.domain.errors import AMMError, AMMErrorKind
from src.core.domain.units import Address, is_null_address, validate_recipient
from src.pool.clock import Clock
from src.pool.reserve_pool import ReservePool


def check_deadline(clock: Clock, deadline: int) -> int:
    """
    now <= deadline.

    Raises:
        AMMError(DEADLINE_EXPIRED): deadline в прошлом
    """
    now = clock.now()
    if isinstance(deadline, bool) or not isinstance(deadline, int) or now > deadline:
        raise AMMError(
            AMMErrorKind.DEADLINE_EXPIRED, f"Deadline {deadline!r} expired at {now}"
        )
    return now


def check_sender(sender: Optional[Address]) -> Address:
    """
    Инициатор - не null-идентичность.

    Raises:
        AMMError(INVALID_ADDRESS)
    """
    if not isinstance(sender, str) or is_null_address(sender):
        raise AMMError(AMMErrorKind.INVALID_ADDRESS, f"Sender is null: {sender!r}")
    return sender


def check_recipient(recipient: Optional[Address], pool_address: Address) -> Address:
    """Получатель - внешняя идентичность (не null, не пул)."""
    return validate_recipient(recipient, pool_address)


def check_pair(token_a: Address, token_b: Address, reserves: ReservePool) -> None:
    """
    (token_a, token_b) - ровно два актива пула в любом порядке.

    Raises:
        AMMError(INVALID_TOKEN)
    """
    if not reserves.assets_match(token_a, token_b):
        raise AMMError(
            AMMErrorKind.INVALID_TOKEN,
            f"Pair ({token_a}, {token_b}) does not match pool assets",
        )
