"""Chain capability backed by web3.py and a local signing account."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from web3 import Web3

from ..base import ChainCapability, WalletConnector
from ..config import GlueConfig
from ..exceptions import NetworkError
from ..types import Address, Receipt, TxHash, WalletState, Wei
from .connections import Web3Connections
from .transactions import TransactionDispatcher

logger = logging.getLogger(__name__)


class Web3ChainClient(ChainCapability, WalletConnector):
    """Read and write the token and vault through a synchronous Web3 provider.

    Blocking web3 calls run in a worker thread so the journey's event loop
    stays responsive while a receipt is being polled.
    """

    def __init__(
        self,
        config: GlueConfig,
        private_key: str,
        *,
        connections: Web3Connections | None = None,
        poll_latency: float = 0.5,
    ) -> None:
        self._config = config
        self._connections = connections or Web3Connections(config, private_key)
        self._dispatcher = TransactionDispatcher(
            self._connections,
            receipt_timeout=config.receipt_timeout,
            poll_latency=poll_latency,
        )

    # ------------------------------------------------------------------
    # Wallet connection
    # ------------------------------------------------------------------
    async def connect(self) -> WalletState:
        await asyncio.to_thread(self._connections.connect)
        chain_id = await self.get_chain_id()
        return WalletState(address=self._connections.account.address, chain_id=chain_id)

    async def disconnect(self) -> None:
        self._connections.disconnect()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    async def get_chain_id(self) -> int:
        self._connections.ensure_connected()
        return await asyncio.to_thread(lambda: int(self._connections.web3.eth.chain_id))

    async def read_scalar(
        self, contract: Address, function: str, args: Sequence[Any] = ()
    ) -> Any:
        return await asyncio.to_thread(self._call, contract, function, args)

    async def read_array(
        self, contract: Address, function: str, args: Sequence[Any] = ()
    ) -> list[Any]:
        result = await asyncio.to_thread(self._call, contract, function, args)
        if isinstance(result, list | tuple):
            return list(result)
        return [result]

    async def get_native_balance(self, address: Address) -> Wei:
        self._connections.ensure_connected()
        web3 = self._connections.web3
        checksum = Web3.to_checksum_address(address)

        try:
            return int(await asyncio.to_thread(web3.eth.get_balance, checksum))
        except Exception as exc:
            raise NetworkError(
                "Failed to read native balance",
                endpoint=self._config.rpc_url,
                details={"address": checksum, "error": str(exc)},
            ) from exc

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    async def submit(self, contract: Address, function: str, args: Sequence[Any] = ()) -> TxHash:
        return await asyncio.to_thread(self._dispatcher.send, contract, function, args)

    async def submit_native_transfer(self, to: Address, amount: Wei) -> TxHash:
        return await asyncio.to_thread(self._dispatcher.send_value, to, amount)

    async def await_confirmation(self, tx_hash: TxHash) -> Receipt:
        return await asyncio.to_thread(self._dispatcher.wait, tx_hash)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _call(self, contract: Address, function: str, args: Sequence[Any]) -> Any:
        self._connections.ensure_connected()
        handle = self._connections.contract(contract)

        try:
            return getattr(handle.functions, function)(*args).call()
        except Exception as exc:
            raise NetworkError(
                f"Failed to read {function}",
                endpoint=self._config.rpc_url,
                details={"contract": contract, "args": list(args), "error": str(exc)},
            ) from exc
