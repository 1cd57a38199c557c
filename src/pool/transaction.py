"""AtomicSection - транзакционная граница для операций пула.

Два механизма отката:
- снапшот __dict__ объектов, которыми владеет пул (ReservePool,
  LiquidityLedger), восстанавливается целиком;
- завершённые transfer-leg'и внешних активов отменяются компенсирующими
  переводами, зарегистрированными через on_rollback по мере успеха leg'а.

Состояние внешних активов никогда не перезаписывается: активы используются
другими участниками вне lock'а пула, и их переводы должны сохраниться.
"""

import logging
from copy import deepcopy
from typing import Callable, Iterable, List, Optional

logger = logging.getLogger(__name__)

Compensation = Callable[[], None]


class AtomicSection:
    """Контекст all-or-nothing для read → compute → mutate → transfer."""

    def __init__(self, objects: Iterable[object], name: Optional[str] = None):
        self.objects = list(objects)
        self.name = name or "tx"
        self._snapshots: dict = {}
        self._compensations: List[tuple] = []
        self.rolled_back = False
        self.failed_compensations: List[str] = []

    def __enter__(self):
        self._snapshots = {id(obj): deepcopy(obj.__dict__) for obj in self.objects}
        self._compensations = []
        self.rolled_back = False
        self.failed_compensations = []
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is not None:
            self._rollback()
            logger.debug(f"[TX] {self.name} rolled back: {exc_type.__name__}: {exc}")
        self._snapshots = {}
        self._compensations = []
        return False  # re-raise

    def on_rollback(self, undo: Compensation, description: str = "") -> None:
        """Регистрация компенсации для уже выполненного внешнего эффекта."""
        self._compensations.append((undo, description))

    def _rollback(self):
        # LIFO: последний leg отменяется первым
        for undo, description in reversed(self._compensations):
            try:
                undo()
            except Exception:
                self.failed_compensations.append(description)
                logger.exception(f"[TX] {self.name} compensation failed: {description}")

        for obj in self.objects:
            snap = self._snapshots.get(id(obj))
            if snap is not None:
                obj.__dict__.clear()
                obj.__dict__.update(snap)
        self.rolled_back = True
