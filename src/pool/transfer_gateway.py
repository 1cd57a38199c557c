"""TransferGateway - перемещение активов в custody пула и из неё.

Контракт актива (AssetTransferProvider):
- transfer(sender, to, amount) -> bool | None
- transfer_from(spender, owner, to, amount) -> bool | None
- balance_of(holder) -> int

Отсутствующее подтверждение (None) трактуется как успех - совместимость с
активами без возвращаемого значения. Явный False или исключение актива -
сбой, с раздельными видами для входящего и исходящего leg'а.

Внутри AtomicSection каждый успешный leg регистрирует обратный перевод:
- in-leg отменяется переводом из custody обратно отправителю;
- out-leg отменяется transfer_from получателя обратно в custody
  (требует allowance получателя для пула).
"""

import logging
from typing import Optional, Protocol

from src.core.domain.errors import AMMError, AMMErrorKind
from src.core.domain.units import Address
from src.pool.transaction import AtomicSection

logger = logging.getLogger(__name__)


class AssetTransferProvider(Protocol):
    """Внешний актив: mintable ledger балансов с transfer-контрактом."""

    address: Address

    def transfer(self, sender: Address, to: Address, amount: int) -> Optional[bool]:
        ...

    def transfer_from(
        self, spender: Address, owner: Address, to: Address, amount: int
    ) -> Optional[bool]:
        ...

    def balance_of(self, holder: Address) -> int:
        ...


def _acknowledged(result: Optional[bool]) -> bool:
    # None - актив без возвращаемого значения
    return result is None or result is True


class TransferGateway:
    """Перемещение активов между внешними идентичностями и пулом."""

    def __init__(self, pool_address: Address):
        self.pool_address = pool_address

    def move_in(
        self,
        asset: AssetTransferProvider,
        sender: Address,
        amount: int,
        section: Optional[AtomicSection] = None,
    ) -> None:
        """
        Перевод amount актива от sender в custody пула.

        Raises:
            AMMError(TRANSFER_FROM_FAILED): актив отклонил перевод
        """
        try:
            result = asset.transfer_from(self.pool_address, sender, self.pool_address, amount)
        except Exception as e:
            raise AMMError(
                AMMErrorKind.TRANSFER_FROM_FAILED,
                f"transfer_from of {amount} {asset.address} from {sender} raised: {e}",
            ) from e

        if not _acknowledged(result):
            raise AMMError(
                AMMErrorKind.TRANSFER_FROM_FAILED,
                f"transfer_from of {amount} {asset.address} from {sender} returned {result!r}",
            )
        logger.debug(f"[GATEWAY] in: {amount} {asset.address} from {sender}")

        if section is not None:
            section.on_rollback(
                lambda: self.move_out(asset, sender, amount),
                f"refund {amount} {asset.address} to {sender}",
            )

    def move_out(
        self,
        asset: AssetTransferProvider,
        to: Address,
        amount: int,
        section: Optional[AtomicSection] = None,
    ) -> None:
        """
        Перевод amount актива из custody пула получателю to.

        Raises:
            AMMError(TRANSFER_FAILED): актив отклонил перевод
        """
        try:
            result = asset.transfer(self.pool_address, to, amount)
        except Exception as e:
            raise AMMError(
                AMMErrorKind.TRANSFER_FAILED,
                f"transfer of {amount} {asset.address} to {to} raised: {e}",
            ) from e

        if not _acknowledged(result):
            raise AMMError(
                AMMErrorKind.TRANSFER_FAILED,
                f"transfer of {amount} {asset.address} to {to} returned {result!r}",
            )
        logger.debug(f"[GATEWAY] out: {amount} {asset.address} to {to}")

        if section is not None:
            section.on_rollback(
                lambda: self.move_in(asset, to, amount),
                f"reclaim {amount} {asset.address} from {to}",
            )

    def custodied_balance(self, asset: AssetTransferProvider) -> int:
        """Баланс пула, сообщаемый самим активом."""
        return asset.balance_of(self.pool_address)
