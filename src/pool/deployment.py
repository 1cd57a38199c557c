"""Deployment - развёртывание пары mock-токенов и пула над ними.

deployer получает initial_supply каждого токена.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.core.domain.units import Address
from src.pool.clock import Clock
from src.pool.config import EngineConfig
from src.pool.engine import PoolEngine
from src.pool.token import MockToken, mock_token_a, mock_token_b

logger = logging.getLogger(__name__)

DEFAULT_INITIAL_SUPPLY = 1_000_000 * 10**18


@dataclass(frozen=True)
class Deployment:
    """Развёрнутые контракты."""

    deployer: Address
    token_a: MockToken
    token_b: MockToken
    pool: PoolEngine


def deploy_simple_swap(
    deployer: Address,
    initial_supply: int = DEFAULT_INITIAL_SUPPLY,
    clock: Optional[Clock] = None,
    config: Optional[EngineConfig] = None,
) -> Deployment:
    """
    Развёртывание MockTokenA, MockTokenB и пула над ними.

    Args:
        deployer: получатель начальной эмиссии
        initial_supply: эмиссия каждого токена
        clock: часы пула
        config: конфигурация пула

    Returns:
        Deployment
    """
    token_a = mock_token_a()
    token_b = mock_token_b()
    token_a.mint(deployer, initial_supply)
    token_b.mint(deployer, initial_supply)

    pool = PoolEngine(token_a, token_b, clock=clock, config=config)

    logger.info(
        f"[DEPLOY] {token_a.symbol}={token_a.address} {token_b.symbol}={token_b.address} "
        f"pool={pool.address} deployer={deployer}"
    )
    return Deployment(deployer=deployer, token_a=token_a, token_b=token_b, pool=pool)
