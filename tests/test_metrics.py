"""Tests for the metrics mapper and repository."""

from __future__ import annotations

import asyncio

import pytest

from conftest import ONE, OWNER, FakeChain
from glue_journey.config import GlueConfig
from glue_journey.exceptions import NetworkError, ValidationError
from glue_journey.metrics import MetricsRepository, map_snapshot, read_snapshot
from glue_journey.types import Snapshot


def _snapshot(**overrides) -> Snapshot:
    values = {
        "total_supply": 1000 * ONE,
        "user_balance": 10 * ONE,
        "decimals": 18,
        "vault_native_balance": ONE,
    }
    values.update(overrides)
    return Snapshot(**values)


def test_map_snapshot_computes_backing() -> None:
    metrics = map_snapshot(_snapshot())
    assert metrics.estimated_backing_per_token == "0.001000000000"
    assert metrics.total_supply == 1000 * ONE
    assert metrics.user_balance == 10 * ONE
    assert metrics.has_tokens


def test_map_snapshot_zero_supply() -> None:
    metrics = map_snapshot(_snapshot(total_supply=0, user_balance=0, vault_native_balance=7 * ONE))
    assert metrics.estimated_backing_per_token == "0"
    assert not metrics.has_tokens


@pytest.mark.parametrize("decimals", [-1, 37, 255])
def test_map_snapshot_rejects_decimals_out_of_range(decimals: int) -> None:
    with pytest.raises(ValidationError) as excinfo:
        map_snapshot(_snapshot(decimals=decimals))
    assert excinfo.value.field == "decimals"


@pytest.mark.parametrize("decimals", [0, 36])
def test_map_snapshot_accepts_decimal_bounds(decimals: int) -> None:
    assert map_snapshot(_snapshot(decimals=decimals)).decimals == decimals


def test_map_snapshot_rejects_negative_balance() -> None:
    with pytest.raises(ValidationError) as excinfo:
        map_snapshot(_snapshot(user_balance=-1))
    assert excinfo.value.field == "user_balance"


def test_map_snapshot_rejects_non_integer_amount() -> None:
    with pytest.raises(ValidationError):
        map_snapshot(_snapshot(vault_native_balance=1.5))


def test_read_snapshot(chain: FakeChain, config: GlueConfig) -> None:
    chain.balances[OWNER] = 5 * ONE
    chain.vault_balance = 3 * ONE

    snapshot = asyncio.run(read_snapshot(chain, config, OWNER))

    assert snapshot == Snapshot(
        total_supply=1000 * ONE, user_balance=5 * ONE, decimals=18, vault_native_balance=3 * ONE
    )
    assert sorted(chain.reads) == ["balanceOf", "decimals", "getBalance", "totalSupply"]


def test_refresh_stores_latest(chain: FakeChain, config: GlueConfig) -> None:
    repo = MetricsRepository(chain, config)
    assert repo.latest is None

    chain.vault_balance = ONE
    metrics = asyncio.run(repo.refresh(OWNER))

    assert metrics is not None
    assert repo.latest == metrics
    assert metrics.estimated_backing_per_token == "0.001000000000"


def test_refresh_propagates_validation_error(chain: FakeChain, config: GlueConfig) -> None:
    chain.decimals = 40
    repo = MetricsRepository(chain, config)

    with pytest.raises(ValidationError):
        asyncio.run(repo.refresh(OWNER))
    assert repo.latest is None


class SlowFirstChain(FakeChain):
    """Holds the first totalSupply read until released."""

    def __init__(self) -> None:
        super().__init__()
        self.release = asyncio.Event()
        self._calls = 0

    async def read_scalar(self, contract, function, args=()):
        if function == "totalSupply":
            self._calls += 1
            if self._calls == 1:
                await self.release.wait()
                return 2000 * ONE
        return await super().read_scalar(contract, function, args)


def test_stale_refresh_does_not_overwrite_newer(config: GlueConfig) -> None:
    chain = SlowFirstChain()
    repo = MetricsRepository(chain, config)

    async def scenario() -> None:
        slow = asyncio.create_task(repo.refresh(OWNER))
        await asyncio.sleep(0)
        await repo.refresh(OWNER)
        chain.release.set()
        await slow

    asyncio.run(scenario())

    assert repo.latest is not None
    assert repo.latest.total_supply == 1000 * ONE


def test_poll_tolerates_network_errors(chain: FakeChain, config: GlueConfig) -> None:
    repo = MetricsRepository(chain, config)
    chain.read_errors["totalSupply"] = NetworkError("timeout")

    async def scenario() -> None:
        task = asyncio.create_task(repo.poll(OWNER, interval=0))
        for _ in range(5):
            await asyncio.sleep(0)
        assert repo.latest is None
        chain.read_errors.clear()
        for _ in range(50):
            await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(scenario())

    assert repo.latest is not None
    assert chain.reads.count("totalSupply") >= 2
