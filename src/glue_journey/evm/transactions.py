"""Transaction dispatch helpers for the web3-backed chain client."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from hexbytes import HexBytes
from web3 import Web3
from web3.exceptions import ContractLogicError, TimeExhausted

from ..exceptions import NetworkError, RevertError
from ..types import Receipt, TxHash
from ..utils import serialise_receipt
from .connections import Web3Connections

logger = logging.getLogger(__name__)


def _revert_text(exc: ContractLogicError) -> str:
    data = getattr(exc, "data", None)
    if data:
        return f"{exc} {data}"
    return str(exc)


class TransactionDispatcher:
    """Encapsulate transaction submission and receipt handling."""

    def __init__(
        self,
        connections: Web3Connections,
        *,
        receipt_timeout: float,
        poll_latency: float = 0.5,
    ) -> None:
        self._connections = connections
        self._receipt_timeout = receipt_timeout
        self._poll_latency = poll_latency

    def send(self, contract_address: str, function_name: str, args: Sequence[Any]) -> TxHash:
        self._connections.ensure_connected()
        contract = self._connections.contract(contract_address)
        sender = self._connections.account.address

        contract_function = getattr(contract.functions, function_name)(*args)
        logger.info("Dispatching %s on %s", function_name, contract_address)

        try:
            tx_hash = contract_function.transact({"from": sender})
        except ContractLogicError as exc:
            raise RevertError(
                f"Transaction for {function_name} would revert",
                details={"args": list(args), "error": _revert_text(exc)},
            ) from exc
        except Exception as exc:
            raise NetworkError(
                f"Failed to submit transaction for {function_name}",
                endpoint=function_name,
                details={"args": list(args), "error": str(exc)},
            ) from exc

        return HexBytes(tx_hash).to_0x_hex()

    def send_value(self, to: str, amount: int) -> TxHash:
        self._connections.ensure_connected()
        web3 = self._connections.web3
        sender = self._connections.account.address
        logger.info("Dispatching native transfer of %s wei to %s", amount, to)

        try:
            tx_hash = web3.eth.send_transaction(
                {"from": sender, "to": Web3.to_checksum_address(to), "value": amount}
            )
        except ContractLogicError as exc:
            raise RevertError(
                "Native transfer would revert",
                details={"to": to, "value": amount, "error": _revert_text(exc)},
            ) from exc
        except Exception as exc:
            raise NetworkError(
                "Failed to submit native transfer",
                endpoint=to,
                details={"value": amount, "error": str(exc)},
            ) from exc

        return HexBytes(tx_hash).to_0x_hex()

    def wait(self, tx_hash: TxHash) -> Receipt:
        self._connections.ensure_connected()
        web3 = self._connections.web3

        try:
            receipt = web3.eth.wait_for_transaction_receipt(
                HexBytes(tx_hash), timeout=self._receipt_timeout, poll_latency=self._poll_latency
            )
        except TimeExhausted as exc:
            raise NetworkError(
                "Timed out waiting for transaction receipt",
                endpoint=tx_hash,
                details={"error": str(exc)},
            ) from exc
        except Exception as exc:
            raise NetworkError(
                "Failed to fetch transaction receipt",
                endpoint=tx_hash,
                details={"error": str(exc)},
            ) from exc

        serialised = serialise_receipt(receipt)
        block_number = serialised.get("blockNumber")
        if serialised.get("status", 0) != 1:
            raise RevertError(
                "Transaction reverted on chain",
                tx_hash=tx_hash,
                details={"block_number": block_number},
            )

        logger.info("Transaction confirmed hash=%s block=%s", tx_hash, block_number)
        return Receipt(tx_hash=tx_hash, success=True, block_number=block_number, raw=serialised)
