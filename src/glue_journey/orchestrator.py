"""Sequence claim, deposit and unglue transactions through the chain capability."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType

from .base import ChainCapability
from .classifier import classify_exception
from .config import GlueConfig
from .constants import DEFAULT_TOKEN_DECIMALS, MAX_UINT256, NATIVE_SENTINEL, TokenFunction
from .exceptions import NetworkError, ValidationError
from .metrics import MetricsRepository
from .types import (
    IDLE,
    ActionFailure,
    ActionKind,
    ActionState,
    Address,
    Receipt,
    TxHash,
    WalletState,
)
from .utils import parse_ether, parse_units

logger = logging.getLogger(__name__)


class TransactionOrchestrator:
    """Drive the journey's actions and track one tagged state per action.

    Failures never escape an action: they are classified and stored on the
    action's state. Invoking an action that is wallet-pending or confirming is
    a no-op. Different actions are not serialised against each other.
    """

    def __init__(
        self,
        chain: ChainCapability,
        config: GlueConfig,
        metrics: MetricsRepository,
        wallet_state: Callable[[], WalletState],
    ) -> None:
        self._chain = chain
        self._config = config
        self._metrics = metrics
        self._wallet_state = wallet_state
        self._states: dict[ActionKind, ActionState] = {kind: IDLE for kind in ActionKind}
        self._failed_order: list[ActionKind] = []

    # ------------------------------------------------------------------
    # Observables
    # ------------------------------------------------------------------
    @property
    def states(self) -> Mapping[ActionKind, ActionState]:
        return MappingProxyType(dict(self._states))

    def state(self, kind: ActionKind) -> ActionState:
        return self._states[kind]

    @property
    def is_approving(self) -> bool:
        return self._states[ActionKind.APPROVE].is_busy

    @property
    def failure(self) -> ActionFailure | None:
        """Most recent failure that has not been retried yet."""

        if not self._failed_order:
            return None
        return self._states[self._failed_order[-1]].error

    def reset(self) -> None:
        self._states = {kind: IDLE for kind in ActionKind}
        self._failed_order.clear()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    async def claim(self) -> ActionState:
        kind = ActionKind.CLAIM
        if not self._config.claim_enabled:
            logger.debug("Claim is not available for this deployment")
            return self._states[kind]

        owner = self._ready_owner()
        if owner is None or not self._begin(kind):
            return self._states[kind]

        try:
            tx_hash = await self._chain.submit(
                self._config.token_address, TokenFunction.CLAIM.value, []
            )
            await self._confirm(kind, tx_hash)
            await self._refresh(owner)
            self._set(kind, self._states[kind].succeeded())
        except Exception as exc:
            self._fail(kind, exc)

        return self._states[kind]

    async def deposit(self, amount: str) -> ActionState:
        kind = ActionKind.DEPOSIT
        owner = self._ready_owner()
        if owner is None or not amount or not amount.strip():
            return self._states[kind]
        if not self._begin(kind):
            return self._states[kind]

        try:
            value = parse_ether(amount)
            if value == 0:
                raise ValidationError("Deposit amount must be positive", field="amount", value=amount)

            tx_hash = await self._chain.submit_native_transfer(self._config.vault_address, value)
            await self._confirm(kind, tx_hash)
            await self._refresh(owner)
            self._set(kind, self._states[kind].succeeded())
        except Exception as exc:
            self._fail(kind, exc)

        return self._states[kind]

    async def unglue(self, amount: str) -> ActionState:
        """Burn ``amount`` tokens for a share of the vault, approving first if needed.

        The allowance is read first. If it is below the burn amount, an approval
        for the maximum allowance is submitted and confirmed before the unglue
        call is sent, so the two are never in flight together.
        """

        kind = ActionKind.UNGLUE
        owner = self._ready_owner()
        if owner is None or not amount or not amount.strip():
            return self._states[kind]
        if not self._begin(kind):
            return self._states[kind]
        self._set(ActionKind.APPROVE, IDLE)

        try:
            metrics = self._metrics.latest
            decimals = metrics.decimals if metrics is not None else DEFAULT_TOKEN_DECIMALS
            burn_amount = parse_units(amount, decimals)
            if burn_amount == 0:
                raise ValidationError("Burn amount must be positive", field="amount", value=amount)

            token = self._config.token_address
            allowance = await self._chain.read_scalar(
                token, TokenFunction.ALLOWANCE.value, [owner, self._config.spender]
            )
            if allowance < burn_amount:
                await self._approve()

            tx_hash = await self._chain.submit(
                token,
                TokenFunction.UNGLUE.value,
                [[NATIVE_SENTINEL], burn_amount, [], owner],
            )
            await self._confirm(kind, tx_hash)
            await self._refresh(owner)
            self._set(kind, self._states[kind].succeeded())
        except Exception as exc:
            self._set(ActionKind.APPROVE, IDLE)
            self._fail(kind, exc)

        return self._states[kind]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _ready_owner(self) -> Address | None:
        wallet = self._wallet_state()
        if not wallet.connected:
            return None
        if wallet.chain_id != self._config.chain_id:
            logger.debug(
                "Ignoring action on chain %s; expected %s", wallet.chain_id, self._config.chain_id
            )
            return None
        return wallet.address

    def _begin(self, kind: ActionKind) -> bool:
        current = self._states[kind]
        if current.is_busy:
            logger.debug("Ignoring %s while %s", kind.value, current.status.value)
            return False
        if kind in self._failed_order:
            self._failed_order.remove(kind)
        self._set(kind, current.pending())
        return True

    def _set(self, kind: ActionKind, state: ActionState) -> None:
        self._states[kind] = state

    async def _approve(self) -> None:
        kind = ActionKind.APPROVE
        self._set(kind, self._states[kind].pending())
        tx_hash = await self._chain.submit(
            self._config.token_address,
            TokenFunction.APPROVE.value,
            [self._config.spender, MAX_UINT256],
        )
        await self._confirm(kind, tx_hash)
        self._set(kind, self._states[kind].succeeded())

    async def _confirm(self, kind: ActionKind, tx_hash: TxHash) -> Receipt:
        self._set(kind, self._states[kind].confirming(tx_hash))
        logger.info("Submitted %s tx=%s", kind.value, tx_hash)
        receipt = await self._chain.await_confirmation(tx_hash)
        logger.info("Confirmed %s tx=%s block=%s", kind.value, tx_hash, receipt.block_number)
        return receipt

    async def _refresh(self, owner: Address) -> None:
        try:
            await self._metrics.refresh(owner)
        except NetworkError as exc:
            logger.warning("Metrics refresh after confirmation failed: %s", exc)
        except ValidationError as exc:
            logger.error("Metrics snapshot rejected after confirmation: %s", exc)

    def _fail(self, kind: ActionKind, exc: Exception) -> None:
        failure = classify_exception(exc)
        logger.warning("%s failed (%s): %s", kind.value, failure.category.value, exc)
        self._set(kind, self._states[kind].failed(failure))
        self._failed_order.append(kind)
