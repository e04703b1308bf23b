"""Session wiring the wallet, orchestrator, metrics and journey deriver."""

from __future__ import annotations

import logging

from .base import ChainCapability, WalletConnector
from .config import GlueConfig
from .journey import JourneyInputs, JourneyView, derive_journey
from .metrics import MetricsRepository
from .orchestrator import TransactionOrchestrator
from .types import ActionKind, ActionState, Metrics, WalletState

logger = logging.getLogger(__name__)


class GlueJourneySession:
    """One connected wallet walking through claim, deposit and unglue.

    All state is session scoped and rebuilt from chain reads; nothing is
    persisted.
    """

    def __init__(
        self,
        config: GlueConfig,
        chain: ChainCapability,
        wallet: WalletConnector,
    ) -> None:
        config.ensure_configured()
        self._config = config
        self._chain = chain
        self._wallet = wallet
        self._wallet_state = WalletState()
        self.metrics = MetricsRepository(chain, config)
        self.orchestrator = TransactionOrchestrator(
            chain, config, self.metrics, wallet_state=lambda: self._wallet_state
        )

    @property
    def wallet_state(self) -> WalletState:
        return self._wallet_state

    async def connect(self) -> WalletState:
        self._wallet_state = await self._wallet.connect()
        logger.info(
            "Wallet %s connected on chain %s",
            self._wallet_state.address,
            self._wallet_state.chain_id,
        )
        if self.chain_matches:
            await self.refresh_metrics()
        return self._wallet_state

    async def disconnect(self) -> None:
        await self._wallet.disconnect()
        self._wallet_state = WalletState()
        self.orchestrator.reset()
        self.metrics.clear()

    async def sync_chain(self) -> WalletState:
        """Re-read the active chain id, e.g. after the user switches networks.

        Switching onto the configured chain reloads metrics, since they are
        only read while the chains match.
        """

        if not self._wallet_state.connected:
            return self._wallet_state
        was_matching = self.chain_matches
        chain_id = await self._chain.get_chain_id()
        self._wallet_state = WalletState(address=self._wallet_state.address, chain_id=chain_id)
        if self.chain_matches and not was_matching:
            logger.info("Wallet switched to chain %s; reloading metrics", chain_id)
            await self.refresh_metrics()
        return self._wallet_state

    @property
    def chain_matches(self) -> bool:
        return self._wallet_state.chain_id == self._config.chain_id

    async def refresh_metrics(self) -> Metrics | None:
        address = self._wallet_state.address
        if address is None:
            return None
        return await self.metrics.refresh(address)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    async def claim(self) -> ActionState:
        return await self.orchestrator.claim()

    async def deposit(self, amount: str) -> ActionState:
        return await self.orchestrator.deposit(amount)

    async def unglue(self, amount: str) -> ActionState:
        return await self.orchestrator.unglue(amount)

    # ------------------------------------------------------------------
    # Journey
    # ------------------------------------------------------------------
    def inputs(self) -> JourneyInputs:
        states = self.orchestrator.states
        metrics = self.metrics.latest
        return JourneyInputs(
            connected=self._wallet_state.connected,
            chain_matches=self.chain_matches,
            has_tokens=metrics.has_tokens if metrics is not None else False,
            claim_succeeded=states[ActionKind.CLAIM].is_success,
            deposit_succeeded=states[ActionKind.DEPOSIT].is_success,
            unglue_succeeded=states[ActionKind.UNGLUE].is_success,
            claim_available=self._config.claim_enabled,
            failure=self.orchestrator.failure,
            claim_busy=states[ActionKind.CLAIM].is_busy,
            deposit_busy=states[ActionKind.DEPOSIT].is_busy,
            unglue_busy=states[ActionKind.UNGLUE].is_busy,
            approving=self.orchestrator.is_approving,
        )

    def view(self) -> JourneyView:
        return derive_journey(self.inputs())
