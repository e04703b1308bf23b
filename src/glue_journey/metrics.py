"""Snapshot reads and the metrics mapper."""

from __future__ import annotations

import asyncio
import logging

from .base import ChainCapability
from .config import GlueConfig
from .constants import MAX_TOKEN_DECIMALS, TokenFunction
from .exceptions import NetworkError, ValidationError
from .types import Address, Metrics, Snapshot
from .utils import calculate_backing_per_token

logger = logging.getLogger(__name__)


def _require_base_units(value: object, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("Expected an integer amount", field=field, value=value)
    if value < 0:
        raise ValidationError("Amount cannot be negative", field=field, value=value)
    return value


def map_snapshot(snapshot: Snapshot) -> Metrics:
    """Validate a raw snapshot and derive the backing-per-token ratio."""
    decimals = snapshot.decimals
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        raise ValidationError("Token decimals must be an integer", field="decimals", value=decimals)
    if not 0 <= decimals <= MAX_TOKEN_DECIMALS:
        raise ValidationError(
            f"Token decimals must lie in [0, {MAX_TOKEN_DECIMALS}]",
            field="decimals",
            value=decimals,
        )

    total_supply = _require_base_units(snapshot.total_supply, "total_supply")
    user_balance = _require_base_units(snapshot.user_balance, "user_balance")
    vault_balance = _require_base_units(snapshot.vault_native_balance, "vault_native_balance")

    return Metrics(
        total_supply=total_supply,
        user_balance=user_balance,
        decimals=decimals,
        vault_native_balance=vault_balance,
        estimated_backing_per_token=calculate_backing_per_token(
            vault_balance, total_supply, decimals
        ),
    )


async def read_snapshot(chain: ChainCapability, config: GlueConfig, owner: Address) -> Snapshot:
    """Read supply, balance, decimals and vault balance concurrently."""
    total_supply, user_balance, decimals, vault_balance = await asyncio.gather(
        chain.read_scalar(config.token_address, TokenFunction.TOTAL_SUPPLY.value),
        chain.read_scalar(config.token_address, TokenFunction.BALANCE_OF.value, [owner]),
        chain.read_scalar(config.token_address, TokenFunction.DECIMALS.value),
        chain.get_native_balance(config.vault_address),
    )
    return Snapshot(
        total_supply=total_supply,
        user_balance=user_balance,
        decimals=int(decimals),
        vault_native_balance=vault_balance,
    )


class MetricsRepository:
    """Hold the latest metrics; a refresh that finishes late never overwrites a newer one."""

    def __init__(self, chain: ChainCapability, config: GlueConfig) -> None:
        self._chain = chain
        self._config = config
        self._latest: Metrics | None = None
        self._issued = 0
        self._applied = 0

    @property
    def latest(self) -> Metrics | None:
        return self._latest

    def clear(self) -> None:
        self._issued += 1
        self._applied = self._issued
        self._latest = None

    async def refresh(self, owner: Address) -> Metrics | None:
        self._issued += 1
        sequence = self._issued

        snapshot = await read_snapshot(self._chain, self._config, owner)
        metrics = map_snapshot(snapshot)

        if sequence < self._applied:
            logger.debug("Discarding stale metrics refresh #%s", sequence)
            return self._latest

        self._applied = sequence
        self._latest = metrics
        logger.info(
            "Metrics refreshed: supply=%s balance=%s vault=%s backing=%s",
            metrics.total_supply,
            metrics.user_balance,
            metrics.vault_native_balance,
            metrics.estimated_backing_per_token,
        )
        return metrics

    async def poll(self, owner: Address, interval: float | None = None) -> None:
        """Refresh forever on a fixed interval, tolerating transient RPC faults."""

        delay = self._config.refresh_interval if interval is None else interval
        while True:
            try:
                await self.refresh(owner)
            except NetworkError as exc:
                logger.warning("Metrics refresh failed: %s", exc)
            await asyncio.sleep(delay)
