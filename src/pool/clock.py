"""Clock - логическое время для проверки deadline.

Время монотонно неубывающее. Deadline проверяется один раз на входе
операции: now <= deadline.
"""

import time
from typing import Protocol


class Clock(Protocol):
    """Источник текущего логического времени."""

    def now(self) -> int:
        ...


class SystemClock:
    """Системное время (UNIX seconds)."""

    def now(self) -> int:
        return int(time.time())


class ManualClock:
    """Управляемое логическое время (симуляции и тесты).

    Не может идти назад: set() с меньшим значением отклоняется.
    """

    def __init__(self, start: int = 0):
        if start < 0:
            raise ValueError(f"start must be non-negative, got {start}")
        self._now = start

    def now(self) -> int:
        return self._now

    def advance(self, delta: int = 1) -> int:
        """Сдвиг времени вперёд на delta."""
        if delta < 0:
            raise ValueError(f"Clock cannot move backwards: delta={delta}")
        self._now += delta
        return self._now

    def set(self, timestamp: int) -> int:
        """Установка времени (не меньше текущего)."""
        if timestamp < self._now:
            raise ValueError(f"Clock cannot move backwards: {self._now} -> {timestamp}")
        self._now = timestamp
        return self._now
