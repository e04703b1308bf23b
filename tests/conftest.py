from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any, cast

import pytest
from web3.types import ChecksumAddress

from glue_journey.base import ChainCapability, WalletConnector
from glue_journey.config import GlueConfig
from glue_journey.types import Receipt, WalletState

CHAIN_ID = 84532
OWNER = "0x00000000000000000000000000000000000000aA"
TOKEN = "0x0000000000000000000000000000000000000001"
VAULT = "0x0000000000000000000000000000000000000002"
ONE = 10**18


class FakeChain(ChainCapability, WalletConnector):
    """Scripted in-memory token and vault.

    Effects of a submission are applied when it is confirmed. ``gate`` holds
    every submission until it is set, ``confirm_gate`` does the same for
    confirmations, and ``submit_errors`` / ``confirm_errors``
    make the named function fail at that phase.
    """

    def __init__(self) -> None:
        self.chain_id = CHAIN_ID
        self.address: str | None = OWNER
        self.total_supply = 1000 * ONE
        self.balances: dict[str, int] = {}
        self.decimals = 18
        self.vault_balance = 0
        self.allowance = 0
        self.claim_amount = 100 * ONE
        self.gate: asyncio.Event | None = None
        self.confirm_gate: asyncio.Event | None = None
        self.submit_errors: dict[str, Exception] = {}
        self.confirm_errors: dict[str, Exception] = {}
        self.read_errors: dict[str, Exception] = {}
        self.submitted: list[tuple[str, list[Any]]] = []
        self.reads: list[str] = []
        self.events: list[str] = []
        self._pending: dict[str, tuple[str, list[Any]]] = {}

    # Wallet --------------------------------------------------------------
    async def connect(self) -> WalletState:
        return WalletState(address=self.address, chain_id=self.chain_id)

    async def disconnect(self) -> None:
        pass

    # Reads ---------------------------------------------------------------
    async def get_chain_id(self) -> int:
        return self.chain_id

    async def read_scalar(self, contract: str, function: str, args: Sequence[Any] = ()) -> Any:
        self.reads.append(function)
        if function in self.read_errors:
            raise self.read_errors[function]
        if function == "totalSupply":
            return self.total_supply
        if function == "balanceOf":
            return self.balances.get(args[0], 0)
        if function == "decimals":
            return self.decimals
        if function == "allowance":
            return self.allowance
        raise AssertionError(f"unexpected read {function}")

    async def read_array(self, contract: str, function: str, args: Sequence[Any] = ()) -> list[Any]:
        return [await self.read_scalar(contract, function, args)]

    async def get_native_balance(self, address: str) -> int:
        self.reads.append("getBalance")
        return self.vault_balance

    # Writes --------------------------------------------------------------
    async def submit(self, contract: str, function: str, args: Sequence[Any] = ()) -> str:
        return await self._record(function, list(args))

    async def submit_native_transfer(self, to: str, amount: int) -> str:
        return await self._record("transfer", [to, amount])

    async def await_confirmation(self, tx_hash: str) -> Receipt:
        await asyncio.sleep(0)
        if self.confirm_gate is not None:
            await self.confirm_gate.wait()
        function, args = self._pending.pop(tx_hash)
        self.events.append(f"confirm:{function}")
        if function in self.confirm_errors:
            raise self.confirm_errors[function]
        self._apply(function, args)
        return Receipt(tx_hash=tx_hash, success=True, block_number=len(self.submitted))

    async def _record(self, function: str, args: list[Any]) -> str:
        if self.gate is not None:
            await self.gate.wait()
        if function in self.submit_errors:
            raise self.submit_errors[function]
        self.submitted.append((function, args))
        self.events.append(f"submit:{function}")
        tx_hash = f"0x{len(self.submitted):064x}"
        self._pending[tx_hash] = (function, args)
        return tx_hash

    def _apply(self, function: str, args: list[Any]) -> None:
        owner = cast(str, self.address)
        if function == "claimDemoTokens":
            self.balances[owner] = self.balances.get(owner, 0) + self.claim_amount
        elif function == "approve":
            self.allowance = args[1]
        elif function == "transfer":
            self.vault_balance += args[1]
        elif function == "unglue":
            amount = args[1]
            share = self.vault_balance * amount // self.total_supply
            self.vault_balance -= share
            self.total_supply -= amount
            self.balances[owner] = self.balances.get(owner, 0) - amount
            if self.allowance != 2**256 - 1:
                self.allowance -= amount


def make_config(**overrides: Any) -> GlueConfig:
    values: dict[str, Any] = {
        "chain_id": CHAIN_ID,
        "token_address": cast(ChecksumAddress, TOKEN),
        "vault_address": cast(ChecksumAddress, VAULT),
    }
    values.update(overrides)
    return GlueConfig(**values)


@pytest.fixture
def chain() -> FakeChain:
    return FakeChain()


@pytest.fixture
def config() -> GlueConfig:
    return make_config()

