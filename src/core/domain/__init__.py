"""
Domain models and value objects.

Contains pool constants and identities, error kinds, pool snapshot
and notification events.
"""

from src.core.domain.errors import AMMError, AMMErrorKind
from src.core.domain.events import (
    AnyPoolEvent,
    LiquidityAdded,
    LiquidityRemoved,
    PoolEvent,
    Swapped,
)
from src.core.domain.pool_state import PoolSnapshot, PoolStatus, Reserves
from src.core.domain.units import (
    DEAD_ADDRESS,
    FEE_DENOMINATOR,
    FEE_NUMERATOR,
    MINIMUM_LIQUIDITY,
    PRICE_SCALE,
    ZERO_ADDRESS,
    Address,
    is_null_address,
    validate_recipient,
)

__all__ = [
    # Units module
    "Address",
    "MINIMUM_LIQUIDITY",
    "FEE_NUMERATOR",
    "FEE_DENOMINATOR",
    "PRICE_SCALE",
    "ZERO_ADDRESS",
    "DEAD_ADDRESS",
    "is_null_address",
    "validate_recipient",
    # Errors
    "AMMError",
    "AMMErrorKind",
    # Pool state
    "PoolSnapshot",
    "PoolStatus",
    "Reserves",
    # Events
    "PoolEvent",
    "LiquidityAdded",
    "LiquidityRemoved",
    "Swapped",
    "AnyPoolEvent",
]
