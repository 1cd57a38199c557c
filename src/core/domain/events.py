"""
Pool Events - уведомления для внешней индексации

Immutable Pydantic модели. События доставляются только после commit
операции: откаченная операция событий не производит.
Payload каждого события соответствует JSON Schema из
src/core/contracts/schema/.
"""

from typing import Any, ClassVar, Dict, Union

from pydantic import BaseModel, Field


class PoolEvent(BaseModel):
    """Базовое событие пула."""

    event_name: ClassVar[str] = ""

    sender: str = Field(..., min_length=1, description="Инициатор операции")

    model_config = {"frozen": True}

    def to_payload(self) -> Dict[str, Any]:
        """Payload для индексации: поля модели + event."""
        payload = self.model_dump()
        payload["event"] = self.event_name
        return payload


class LiquidityAdded(PoolEvent):
    """Ликвидность добавлена."""

    event_name: ClassVar[str] = "liquidity_added"

    amount_x: int = Field(..., ge=0, description="Внесено актива X")
    amount_y: int = Field(..., ge=0, description="Внесено актива Y")


class LiquidityRemoved(PoolEvent):
    """Ликвидность выведена."""

    event_name: ClassVar[str] = "liquidity_removed"

    amount_x: int = Field(..., ge=0, description="Выведено актива X")
    amount_y: int = Field(..., ge=0, description="Выведено актива Y")
    to: str = Field(..., min_length=1, description="Получатель")


class Swapped(PoolEvent):
    """Обмен выполнен."""

    event_name: ClassVar[str] = "swap"

    amount_in: int = Field(..., gt=0, description="Вход (exact input)")
    amount_out: int = Field(..., ge=0, description="Выход")
    to: str = Field(..., min_length=1, description="Получатель")


AnyPoolEvent = Union[LiquidityAdded, LiquidityRemoved, Swapped]
