"""
Core math modules для AMM

Целочисленные примитивы и чистые формулы ликвидности и обмена.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    is_valid_amount,
    isqrt_floor,
    mul_div_floor,
    product_non_decreasing,
    validate_amount,
)

# Liquidity
from src.core.math.liquidity_math import (
    compute_initial_shares,
    compute_optimal_amounts,
    compute_shares_to_mint,
    compute_withdrawal,
    quote,
)

# Swap
from src.core.math.swap_math import (
    apply_swap,
    get_amount_out,
    get_spot_price,
)

__all__ = [
    # Numerical Safeguards
    "is_valid_amount",
    "isqrt_floor",
    "mul_div_floor",
    "product_non_decreasing",
    "validate_amount",
    # Liquidity
    "compute_initial_shares",
    "compute_optimal_amounts",
    "compute_shares_to_mint",
    "compute_withdrawal",
    "quote",
    # Swap
    "apply_swap",
    "get_amount_out",
    "get_spot_price",
]
