"""PoolEngine - фасад двухактивного constant-product AMM.

Публичные операции:
- add_liquidity: депозит пары активов, mint shares
- remove_liquidity: burn shares, pro-rata вывод
- swap: exact-input обмен с комиссией 0.3%
- get_price: спот-цена (масштаб 10^18)
- get_amount_out: чистый quote

Последовательность мутирующей операции:
lock → deadline → адреса → количества → свежий снапшот резервов → расчёт →
AtomicSection { transfers in, ledger/reserves, transfers out, инварианты } →
commit → событие → лог.

Любая AMMError даёт неуспешный tagged result без наблюдаемых изменений.
"""

import hashlib
import logging
import threading
from collections import deque
from typing import Callable, Deque, List, Optional, Sequence, Type, TypeVar

from src.core.contracts.validators import validate_event
from src.core.domain.errors import AMMError, AMMErrorKind
from src.core.domain.events import LiquidityAdded, LiquidityRemoved, PoolEvent, Swapped
from src.core.domain.pool_state import PoolSnapshot, PoolStatus, Reserves
from src.core.domain.units import DEAD_ADDRESS, Address, is_null_address
from src.core.math.numerical_safeguards import product_non_decreasing, validate_amount
from src.core.math.swap_math import apply_swap, get_spot_price
from src.pool.clock import Clock, SystemClock
from src.pool.config import EngineConfig
from src.pool.guards import check_deadline, check_pair, check_recipient, check_sender
from src.pool.liquidity_ledger import LiquidityLedger
from src.pool.reserve_pool import ReservePool
from src.pool.results import (
    AddLiquidityResult,
    OperationResult,
    PriceResult,
    QuoteResult,
    RemoveLiquidityResult,
    SwapResult,
)
from src.pool.swap_engine import SwapEngine
from src.pool.transaction import AtomicSection
from src.pool.transfer_gateway import AssetTransferProvider, TransferGateway

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=OperationResult)

EventCallback = Callable[[PoolEvent], None]


def derive_pool_address(asset_x: Address, asset_y: Address) -> Address:
    """Детерминированная идентичность пула из упорядоченной пары активов."""
    digest = hashlib.sha256(f"pool:{asset_x}:{asset_y}".encode("utf-8")).hexdigest()
    return "0x" + digest[:40]


class PoolEngine:
    """Двухактивный AMM: резервы, shares и обмен.

    Все операции (включая чтения) сериализуются через per-pool RLock,
    поэтому снапшот резервов внутри операции не может устареть.
    """

    def __init__(
        self,
        asset_x: AssetTransferProvider,
        asset_y: AssetTransferProvider,
        clock: Optional[Clock] = None,
        config: Optional[EngineConfig] = None,
    ):
        """
        Args:
            asset_x: актив X
            asset_y: актив Y
            clock: источник логического времени (default SystemClock)
            config: конфигурация движка (default EngineConfig())

        Raises:
            AMMError(INVALID_CONSTRUCTOR_ARGUMENTS): null или одинаковые активы
        """
        id_x = getattr(asset_x, "address", None)
        id_y = getattr(asset_y, "address", None)
        if is_null_address(id_x) or is_null_address(id_y) or id_x == id_y:
            raise AMMError(
                AMMErrorKind.INVALID_CONSTRUCTOR_ARGUMENTS,
                f"Pool requires two distinct non-null assets, got ({id_x!r}, {id_y!r})",
            )

        self.config = config or EngineConfig()
        self.address = self.config.pool_address or derive_pool_address(id_x, id_y)
        if self.address in (id_x, id_y):
            raise AMMError(
                AMMErrorKind.INVALID_CONSTRUCTOR_ARGUMENTS,
                f"Pool address {self.address} collides with an asset address",
            )

        self.asset_x = asset_x
        self.asset_y = asset_y
        self.clock = clock or SystemClock()

        self.gateway = TransferGateway(self.address)
        self.reserves = ReservePool(id_x, id_y)
        self.ledger = LiquidityLedger()
        self.swap_engine = SwapEngine()

        self._lock = threading.RLock()
        self._subscribers: List[EventCallback] = []
        self._events: Deque[PoolEvent] = deque(maxlen=self.config.event_log_limit)

        logger.info(f"[POOL] Created pool {self.address} for ({id_x}, {id_y})")

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def asset_x_address(self) -> Address:
        return self.reserves.asset_x

    @property
    def asset_y_address(self) -> Address:
        return self.reserves.asset_y

    @property
    def events(self) -> List[PoolEvent]:
        """Журнал доставленных событий (ограничен event_log_limit)."""
        with self._lock:
            return list(self._events)

    # =========================================================================
    # MUTATING OPERATIONS
    # =========================================================================

    def add_liquidity(
        self,
        sender: Address,
        desired_x: int,
        desired_y: int,
        min_x: int,
        min_y: int,
        recipient: Address,
        deadline: int,
    ) -> AddLiquidityResult:
        """Добавление ликвидности.

        Args:
            sender: инициатор, с которого списываются активы
            desired_x: желаемый депозит X (> 0)
            desired_y: желаемый депозит Y (> 0)
            min_x: минимально допустимый депозит X
            min_y: минимально допустимый депозит Y
            recipient: получатель shares
            deadline: последнее допустимое логическое время

        Returns:
            AddLiquidityResult(amount_x, amount_y, shares)
        """
        with self._lock:
            try:
                check_deadline(self.clock, deadline)
                check_sender(sender)
                check_recipient(recipient, self.address)
                validate_amount("desired_x", desired_x, allow_zero=False)
                validate_amount("desired_y", desired_y, allow_zero=False)
                validate_amount("min_x", min_x)
                validate_amount("min_y", min_y)

                before = self.reserves.current_reserves()
                first_funding = self.ledger.total_shares == 0
                used_x, used_y, shares = self.ledger.plan_add(
                    desired_x, desired_y, min_x, min_y, before
                )

                with AtomicSection(self._participants(), name="add_liquidity") as tx:
                    self.gateway.move_in(self.asset_x, sender, used_x, tx)
                    self.gateway.move_in(self.asset_y, sender, used_y, tx)
                    if first_funding:
                        self.ledger.lock_minimum_liquidity()
                    self.ledger.mint(recipient, shares)
                    self.reserves.credit(used_x, used_y)
                    self._check_invariants("add_liquidity")
                    event = self._prepare_event(
                        LiquidityAdded(sender=sender, amount_x=used_x, amount_y=used_y)
                    )
            except AMMError as e:
                return self._rejected(AddLiquidityResult, "add_liquidity", e)

            self._emit(event)
            logger.info(
                f"[POOL] add_liquidity committed: sender={sender} used=({used_x}, {used_y}) "
                f"shares={shares} recipient={recipient}"
                + (f" locked={self.ledger.locked_shares} to {DEAD_ADDRESS}" if first_funding else "")
            )
            return AddLiquidityResult(ok=True, amount_x=used_x, amount_y=used_y, shares=shares)

    def remove_liquidity(
        self,
        sender: Address,
        shares: int,
        min_x: int,
        min_y: int,
        recipient: Address,
        deadline: int,
    ) -> RemoveLiquidityResult:
        """Вывод ликвидности.

        Burn shares выполняется до transfer-out; сбой перевода откатывает всё.

        Returns:
            RemoveLiquidityResult(amount_x, amount_y)
        """
        with self._lock:
            try:
                check_deadline(self.clock, deadline)
                check_sender(sender)
                check_recipient(recipient, self.address)
                validate_amount("shares", shares, allow_zero=False)
                validate_amount("min_x", min_x)
                validate_amount("min_y", min_y)

                before = self.reserves.current_reserves()
                amount_x, amount_y = self.ledger.plan_remove(sender, shares, before)
                if amount_x < min_x or amount_y < min_y:
                    raise AMMError(
                        AMMErrorKind.INSUFFICIENT_OUTPUT_AMOUNT,
                        f"Withdrawal ({amount_x}, {amount_y}) below minimum ({min_x}, {min_y})",
                    )

                with AtomicSection(self._participants(), name="remove_liquidity") as tx:
                    self.ledger.burn(sender, shares)
                    self.reserves.debit(amount_x, amount_y)
                    self.gateway.move_out(self.asset_x, recipient, amount_x, tx)
                    self.gateway.move_out(self.asset_y, recipient, amount_y, tx)
                    self._check_invariants("remove_liquidity")
                    event = self._prepare_event(
                        LiquidityRemoved(
                            sender=sender, amount_x=amount_x, amount_y=amount_y, to=recipient
                        )
                    )
            except AMMError as e:
                return self._rejected(RemoveLiquidityResult, "remove_liquidity", e)

            self._emit(event)
            logger.info(
                f"[POOL] remove_liquidity committed: sender={sender} shares={shares} "
                f"out=({amount_x}, {amount_y}) recipient={recipient}"
            )
            return RemoveLiquidityResult(ok=True, amount_x=amount_x, amount_y=amount_y)

    def swap(
        self,
        sender: Address,
        amount_in: int,
        min_amount_out: int,
        path: Sequence[Address],
        recipient: Address,
        deadline: int,
    ) -> SwapResult:
        """Exact-input обмен path[0] → path[1].

        Transfer-in выполняется до transfer-out.

        Returns:
            SwapResult(amount_in, amount_out)
        """
        with self._lock:
            try:
                check_deadline(self.clock, deadline)
                check_sender(sender)
                check_recipient(recipient, self.address)
                validate_amount("amount_in", amount_in)
                validate_amount("min_amount_out", min_amount_out)

                token_in, token_out = self.swap_engine.resolve_route(
                    path, self.asset_x_address, self.asset_y_address
                )
                reserve_in, reserve_out = self.reserves.ordered(token_in)
                amount_out = self.swap_engine.plan_swap(
                    amount_in, min_amount_out, reserve_in, reserve_out
                )
                asset_in, asset_out = self._assets_for(token_in)

                with AtomicSection(self._participants(), name="swap") as tx:
                    self.gateway.move_in(asset_in, sender, amount_in, tx)
                    new_in, new_out = apply_swap(amount_in, amount_out, reserve_in, reserve_out)
                    self.reserves.apply_swap_reserves(token_in, new_in, new_out)
                    self.gateway.move_out(asset_out, recipient, amount_out, tx)
                    self._check_invariants("swap", before=Reserves(reserve_in, reserve_out))
                    event = self._prepare_event(
                        Swapped(
                            sender=sender,
                            amount_in=amount_in,
                            amount_out=amount_out,
                            to=recipient,
                        )
                    )
            except AMMError as e:
                return self._rejected(SwapResult, "swap", e)

            self._emit(event)
            logger.info(
                f"[SWAP] committed: sender={sender} {amount_in} {token_in} -> "
                f"{amount_out} {token_out} recipient={recipient}"
            )
            return SwapResult(ok=True, amount_in=amount_in, amount_out=amount_out)

    # =========================================================================
    # READ-ONLY OPERATIONS
    # =========================================================================

    def get_price(self, token_a: Address, token_b: Address) -> PriceResult:
        """Спот-цена token_a в token_b, масштаб 10^18.

        price = reserve_of(token_b) * 10^18 // reserve_of(token_a)
        """
        with self._lock:
            try:
                check_pair(token_a, token_b, self.reserves)
                price = get_spot_price(
                    self.reserves.reserve_of(token_a), self.reserves.reserve_of(token_b)
                )
            except AMMError as e:
                return self._rejected(PriceResult, "get_price", e)
            return PriceResult(ok=True, price=price)

    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> QuoteResult:
        """Чистый quote exact-input обмена для произвольных резервов."""
        try:
            validate_amount("amount_in", amount_in)
            validate_amount("reserve_in", reserve_in)
            validate_amount("reserve_out", reserve_out)
            amount_out = self.swap_engine.quote(amount_in, reserve_in, reserve_out)
        except AMMError as e:
            return self._rejected(QuoteResult, "get_amount_out", e)
        return QuoteResult(ok=True, amount_out=amount_out)

    def current_reserves(self) -> Reserves:
        with self._lock:
            return self.reserves.current_reserves()

    def balance_of(self, holder: Address) -> int:
        """Shares держателя (lock sink не является держателем)."""
        with self._lock:
            return self.ledger.balance_of(holder)

    def holders(self) -> List[Address]:
        with self._lock:
            return self.ledger.holders()

    @property
    def total_shares(self) -> int:
        with self._lock:
            return self.ledger.total_shares

    def snapshot(self) -> PoolSnapshot:
        """Снапшот состояния пула."""
        with self._lock:
            reserves = self.reserves.current_reserves()
            return PoolSnapshot(
                asset_x=self.asset_x_address,
                asset_y=self.asset_y_address,
                reserve_x=reserves.reserve_x,
                reserve_y=reserves.reserve_y,
                total_shares=self.ledger.total_shares,
                locked_shares=self.ledger.locked_shares,
                status=PoolStatus.ACTIVE if self.ledger.total_shares else PoolStatus.EMPTY,
            )

    # =========================================================================
    # EVENTS
    # =========================================================================

    def subscribe(self, callback: EventCallback) -> Callable[[], None]:
        """Подписка на события. Возвращает функцию отписки."""
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def _prepare_event(self, event: PoolEvent) -> PoolEvent:
        # Валидация внутри AtomicSection: невалидный payload откатывает операцию
        if self.config.validate_event_contracts:
            validate_event(event)
        return event

    def _emit(self, event: PoolEvent) -> None:
        self._events.append(event)
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                # Доставка подписчикам не влияет на committed состояние
                logger.exception(f"[POOL] Event subscriber failed on {event.event_name}")

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _participants(self) -> list:
        # Только состояние пула; активы откатываются компенсирующими переводами
        return [self.reserves, self.ledger]

    def _assets_for(self, token_in: Address):
        if token_in == self.asset_x_address:
            return self.asset_x, self.asset_y
        return self.asset_y, self.asset_x

    def _check_invariants(self, operation: str, before: Optional[Reserves] = None) -> None:
        """
        Инварианты после мутации (внутри AtomicSection).

        - сохранение shares: total == sum(balances) + locked
        - покой: reserve_x == 0 <=> reserve_y == 0 <=> total_shares == 0
        - custody: резерв не превышает баланс пула у актива
        - swap: reserve_in * reserve_out не уменьшился

        Raises:
            AMMError(INVARIANT_VIOLATION)
        """
        if not self.config.enforce_invariants:
            return

        reserves = self.reserves.current_reserves()
        total = self.ledger.total_shares

        if not self.ledger.is_conserved():
            raise AMMError(
                AMMErrorKind.INVARIANT_VIOLATION, f"{operation}: share balances do not sum to total"
            )

        empties = {reserves.reserve_x == 0, reserves.reserve_y == 0, total == 0}
        if len(empties) != 1:
            raise AMMError(
                AMMErrorKind.INVARIANT_VIOLATION,
                f"{operation}: partially funded pool reserves={tuple(reserves)} shares={total}",
            )

        if reserves.reserve_x > self.gateway.custodied_balance(self.asset_x) or (
            reserves.reserve_y > self.gateway.custodied_balance(self.asset_y)
        ):
            raise AMMError(
                AMMErrorKind.INVARIANT_VIOLATION,
                f"{operation}: reserves {tuple(reserves)} exceed custodied balances",
            )

        if before is not None:
            # before упорядочен как (reserve_in, reserve_out); произведение симметрично
            if not product_non_decreasing(
                before.reserve_x, before.reserve_y, reserves.reserve_x, reserves.reserve_y
            ):
                raise AMMError(
                    AMMErrorKind.INVARIANT_VIOLATION,
                    f"{operation}: constant product decreased",
                )

    def _rejected(self, result_cls: Type[R], operation: str, error: AMMError) -> R:
        logger.warning(f"[POOL] {operation} rejected: {error.kind.value}: {error.message}")
        return result_cls(ok=False, error=error.kind, details=error.message)
