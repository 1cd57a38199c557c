"""
AMM Errors - виды ошибок движка пула

Каждая ошибка терминальна для вызвавшей её операции: весь цикл
read → compute → mutate → transfer откатывается без наблюдаемых изменений.
Внутренние слои (math, ledger, gateway) бросают AMMError; фасад движка
конвертирует её в tagged result с полем error.
"""

from enum import Enum


class AMMErrorKind(str, Enum):
    """Вид ошибки операции пула."""

    DEADLINE_EXPIRED = "DeadlineExpired"
    INVALID_ADDRESS = "InvalidAddress"
    INVALID_TOKEN = "InvalidToken"
    INVALID_SWAP_ROUTE = "InvalidSwapRoute"
    INSUFFICIENT_LIQUIDITY = "InsufficientLiquidity"
    INSUFFICIENT_OUTPUT_AMOUNT = "InsufficientOutputAmount"
    INSUFFICIENT_LIQUIDITY_MINTED = "InsufficientLiquidityMinted"
    INSUFFICIENT_A_AMOUNT = "InsufficientAAmount"
    INSUFFICIENT_B_AMOUNT = "InsufficientBAmount"
    TRANSFER_FAILED = "TransferFailed"
    TRANSFER_FROM_FAILED = "TransferFromFailed"
    INVALID_CONSTRUCTOR_ARGUMENTS = "InvalidConstructorArguments"

    # Нарушения предусловий и инвариантов движка
    INVALID_AMOUNT = "InvalidAmount"
    INSUFFICIENT_SHARES = "InsufficientShares"
    INVARIANT_VIOLATION = "InvariantViolation"


class AMMError(Exception):
    """
    Ошибка операции пула с тегом вида.

    Attributes:
        kind: вид ошибки (AMMErrorKind)
        message: человекочитаемое описание
    """

    def __init__(self, kind: AMMErrorKind, message: str = ""):
        self.kind = kind
        self.message = message or kind.value
        super().__init__(f"{kind.value}: {self.message}")
