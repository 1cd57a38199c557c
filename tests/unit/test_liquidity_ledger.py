"""
Тесты для LiquidityLedger

Проверяемые инварианты:
1. total_shares == sum(balances) + locked_shares
2. MINIMUM_LIQUIDITY блокируется один раз и не является держателем
3. burn не опускает total_shares ниже lock floor и до нуля
4. Нулевые балансы удаляются из holders()
"""

import pytest

from src.core.domain.errors import AMMError, AMMErrorKind
from src.core.domain.pool_state import Reserves
from src.core.domain.units import DEAD_ADDRESS, MINIMUM_LIQUIDITY
from src.pool.liquidity_ledger import LiquidityLedger

ALICE = "0x" + "a" * 40
BOB = "0x" + "b" * 40


@pytest.fixture
def funded_ledger():
    """Ledger после первого фондирования 1e6/1e6."""
    ledger = LiquidityLedger()
    ledger.lock_minimum_liquidity()
    ledger.mint(ALICE, 999_000)
    return ledger


class TestPlanning:
    """Тесты plan_add / plan_remove."""

    def test_plan_first_deposit(self) -> None:
        ledger = LiquidityLedger()
        assert ledger.plan_add(1_000_000, 1_000_000, 0, 0, Reserves(0, 0)) == (
            1_000_000,
            1_000_000,
            999_000,
        )

    def test_plan_first_deposit_ignores_minimums(self) -> None:
        """Минимумы не применяются к bootstrap-депозиту"""
        ledger = LiquidityLedger()
        used_x, used_y, _ = ledger.plan_add(
            1_000_000, 1_000_000, 2_000_000, 2_000_000, Reserves(0, 0)
        )
        assert (used_x, used_y) == (1_000_000, 1_000_000)

    def test_plan_proportional_deposit(self, funded_ledger) -> None:
        reserves = Reserves(1_000_000, 1_000_000)
        assert funded_ledger.plan_add(500, 800, 0, 0, reserves) == (500, 500, 500)

    def test_plan_does_not_mutate(self, funded_ledger) -> None:
        funded_ledger.plan_add(500, 500, 0, 0, Reserves(1_000_000, 1_000_000))
        funded_ledger.plan_remove(ALICE, 100, Reserves(1_000_000, 1_000_000))
        assert funded_ledger.total_shares == 1_000_000
        assert funded_ledger.balance_of(ALICE) == 999_000

    def test_plan_remove(self, funded_ledger) -> None:
        reserves = Reserves(1_000_000, 4_000_000)
        assert funded_ledger.plan_remove(ALICE, 100_000, reserves) == (100_000, 400_000)

    def test_plan_remove_insufficient_shares(self, funded_ledger) -> None:
        with pytest.raises(AMMError) as exc_info:
            funded_ledger.plan_remove(BOB, 1, Reserves(1_000_000, 1_000_000))
        assert exc_info.value.kind == AMMErrorKind.INSUFFICIENT_SHARES


class TestLock:
    """Тесты lock_minimum_liquidity."""

    def test_lock_on_first_funding(self) -> None:
        ledger = LiquidityLedger()
        assert ledger.lock_minimum_liquidity() == MINIMUM_LIQUIDITY
        assert ledger.total_shares == MINIMUM_LIQUIDITY
        assert ledger.holders() == []
        assert ledger.is_conserved()
        assert ledger.balance_of(DEAD_ADDRESS) == 0

    def test_lock_only_once(self, funded_ledger) -> None:
        with pytest.raises(AMMError) as exc_info:
            funded_ledger.lock_minimum_liquidity()
        assert exc_info.value.kind == AMMErrorKind.INVARIANT_VIOLATION


class TestMintBurn:
    """Тесты mint / burn."""

    def test_mint_accumulates(self, funded_ledger) -> None:
        funded_ledger.mint(BOB, 10)
        funded_ledger.mint(BOB, 5)
        assert funded_ledger.balance_of(BOB) == 15
        assert funded_ledger.total_shares == 1_000_015
        assert funded_ledger.is_conserved()

    def test_mint_zero_rejected(self, funded_ledger) -> None:
        with pytest.raises(AMMError) as exc_info:
            funded_ledger.mint(BOB, 0)
        assert exc_info.value.kind == AMMErrorKind.INSUFFICIENT_LIQUIDITY_MINTED

    def test_burn_partial(self, funded_ledger) -> None:
        assert funded_ledger.burn(ALICE, 1_000) == 998_000
        assert funded_ledger.total_shares == 999_000
        assert funded_ledger.is_conserved()

    def test_burn_all_holder_shares_keeps_lock(self, funded_ledger) -> None:
        """Полный вывод держателя оставляет только locked shares"""
        assert funded_ledger.burn(ALICE, 999_000) == 0
        assert funded_ledger.total_shares == MINIMUM_LIQUIDITY
        assert funded_ledger.holders() == []
        assert ALICE not in funded_ledger.balances

    def test_burn_more_than_held(self, funded_ledger) -> None:
        with pytest.raises(AMMError) as exc_info:
            funded_ledger.burn(ALICE, 999_001)
        assert exc_info.value.kind == AMMErrorKind.INSUFFICIENT_SHARES

    def test_burn_below_lock_floor_rejected(self) -> None:
        """Без lock sink burn всех shares обнулил бы пул"""
        ledger = LiquidityLedger()
        ledger.mint(ALICE, 500)
        with pytest.raises(AMMError) as exc_info:
            ledger.burn(ALICE, 500)
        assert exc_info.value.kind == AMMErrorKind.INSUFFICIENT_LIQUIDITY
        assert ledger.balance_of(ALICE) == 500

    def test_holders_sorted(self, funded_ledger) -> None:
        funded_ledger.mint(BOB, 1)
        assert funded_ledger.holders() == sorted([ALICE, BOB])
