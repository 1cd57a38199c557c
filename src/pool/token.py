"""Mock Tokens - in-memory mintable активы для симуляций и тестов.

MockToken возвращает явный bool из transfer/transfer_from.
NoReturnToken возвращает None при успехе и бросает TokenError при сбое
(актив без возвращаемого значения).
"""

import hashlib
from typing import Dict, Optional

from src.core.domain.units import Address, is_null_address


class TokenError(Exception):
    """Отказ актива (revert)."""


def derive_token_address(name: str, symbol: str) -> Address:
    """Детерминированный адрес токена из name/symbol."""
    digest = hashlib.sha256(f"token:{name}:{symbol}".encode("utf-8")).hexdigest()
    return "0x" + digest[:40]


class MockToken:
    """Mintable ledger балансов с allowance."""

    def __init__(
        self,
        name: str,
        symbol: str,
        decimals: int = 18,
        address: Optional[Address] = None,
    ):
        self.name = name
        self.symbol = symbol
        self.decimals = decimals
        self.address = address or derive_token_address(name, symbol)
        self.total_supply = 0
        self.balances: Dict[Address, int] = {}
        self.allowances: Dict[tuple, int] = {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.symbol}, {self.address})"

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def balance_of(self, holder: Address) -> int:
        return self.balances.get(holder, 0)

    def allowance(self, owner: Address, spender: Address) -> int:
        return self.allowances.get((owner, spender), 0)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def mint(self, to: Address, amount: int) -> None:
        if is_null_address(to):
            raise TokenError("Cannot mint to the null address")
        if amount < 0:
            raise TokenError(f"Cannot mint a negative amount: {amount}")
        self.balances[to] = self.balance_of(to) + amount
        self.total_supply += amount

    def approve(self, owner: Address, spender: Address, amount: int) -> bool:
        if amount < 0:
            raise TokenError(f"Allowance cannot be negative: {amount}")
        self.allowances[(owner, spender)] = amount
        return True

    def transfer(self, sender: Address, to: Address, amount: int) -> Optional[bool]:
        if not self._can_move(sender, to, amount):
            return False
        self._move(sender, to, amount)
        return True

    def transfer_from(
        self, spender: Address, owner: Address, to: Address, amount: int
    ) -> Optional[bool]:
        allowed = self.allowance(owner, spender)
        if allowed < amount or not self._can_move(owner, to, amount):
            return False
        self.allowances[(owner, spender)] = allowed - amount
        self._move(owner, to, amount)
        return True

    def _can_move(self, sender: Address, to: Address, amount: int) -> bool:
        if is_null_address(to) or amount < 0:
            return False
        return self.balance_of(sender) >= amount

    def _move(self, sender: Address, to: Address, amount: int) -> None:
        self.balances[sender] = self.balance_of(sender) - amount
        self.balances[to] = self.balance_of(to) + amount


class NoReturnToken(MockToken):
    """Актив без возвращаемого значения: None при успехе, TokenError при отказе."""

    def transfer(self, sender: Address, to: Address, amount: int) -> Optional[bool]:
        if super().transfer(sender, to, amount) is False:
            raise TokenError(f"transfer of {amount} from {sender} reverted")
        return None

    def transfer_from(
        self, spender: Address, owner: Address, to: Address, amount: int
    ) -> Optional[bool]:
        if super().transfer_from(spender, owner, to, amount) is False:
            raise TokenError(f"transfer_from of {amount} from {owner} reverted")
        return None


def mock_token_a(address: Optional[Address] = None) -> MockToken:
    """MockTokenA (MTA)."""
    return MockToken("MockTokenA", "MTA", address=address)


def mock_token_b(address: Optional[Address] = None) -> MockToken:
    """MockTokenB (MTB)."""
    return MockToken("MockTokenB", "MTB", address=address)
