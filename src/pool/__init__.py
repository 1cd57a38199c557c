"""Pool - движок двухактивного constant-product AMM.

- PoolEngine: add_liquidity / remove_liquidity / swap / get_price / get_amount_out
- ReservePool, LiquidityLedger, SwapEngine, TransferGateway - компоненты движка
- AtomicSection - all-or-nothing граница мутирующих операций
"""

from .clock import Clock, ManualClock, SystemClock
from .config import ConfigError, EngineConfig, load_engine_config
from .deployment import Deployment, deploy_simple_swap
from .engine import PoolEngine, derive_pool_address
from .liquidity_ledger import LiquidityLedger
from .reserve_pool import ReservePool
from .results import (
    AddLiquidityResult,
    OperationResult,
    PriceResult,
    QuoteResult,
    RemoveLiquidityResult,
    SwapResult,
)
from .swap_engine import SwapEngine
from .token import MockToken, NoReturnToken, TokenError, mock_token_a, mock_token_b
from .transaction import AtomicSection
from .transfer_gateway import AssetTransferProvider, TransferGateway

__all__ = [
    "PoolEngine",
    "derive_pool_address",
    "ReservePool",
    "LiquidityLedger",
    "SwapEngine",
    "TransferGateway",
    "AssetTransferProvider",
    "AtomicSection",
    "Clock",
    "SystemClock",
    "ManualClock",
    "EngineConfig",
    "ConfigError",
    "load_engine_config",
    "OperationResult",
    "AddLiquidityResult",
    "RemoveLiquidityResult",
    "SwapResult",
    "PriceResult",
    "QuoteResult",
    "MockToken",
    "NoReturnToken",
    "TokenError",
    "mock_token_a",
    "mock_token_b",
    "Deployment",
    "deploy_simple_swap",
]
