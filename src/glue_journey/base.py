"""Capability interfaces consumed by the Glue journey."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from .types import Address, Receipt, TxHash, WalletState, Wei


class ChainCapability(ABC):
    """Chain read/write capability: contract reads, submissions and receipts."""

    @abstractmethod
    async def get_chain_id(self) -> int:
        pass

    @abstractmethod
    async def read_scalar(
        self, contract: Address, function: str, args: Sequence[Any] = ()
    ) -> Any:
        pass

    @abstractmethod
    async def read_array(
        self, contract: Address, function: str, args: Sequence[Any] = ()
    ) -> list[Any]:
        pass

    @abstractmethod
    async def get_native_balance(self, address: Address) -> Wei:
        pass

    @abstractmethod
    async def submit(self, contract: Address, function: str, args: Sequence[Any] = ()) -> TxHash:
        pass

    @abstractmethod
    async def submit_native_transfer(self, to: Address, amount: Wei) -> TxHash:
        pass

    @abstractmethod
    async def await_confirmation(self, tx_hash: TxHash) -> Receipt:
        """Wait for inclusion; raise RevertError on a failed status, NetworkError otherwise."""


class WalletConnector(ABC):
    """Wallet connection capability supplying the connected address and chain."""

    @abstractmethod
    async def connect(self) -> WalletState:
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        pass
