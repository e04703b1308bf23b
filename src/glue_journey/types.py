"""Type definitions and data models for the Glue journey."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

Address = str  # Ethereum address
Wei = int  # Base-unit amount
TxHash = str  # 0x-prefixed transaction hash


class JourneyStep(str, Enum):
    """The single active stage of the guided flow."""

    CONNECT = "connect"
    CLAIM = "claim"
    DEPOSIT = "deposit"
    UNGLUE = "unglue"
    DONE = "done"
    WARNING = "warning"


class ActionKind(str, Enum):
    """Actions tracked by the orchestrator."""

    CLAIM = "claim"
    DEPOSIT = "deposit"
    APPROVE = "approve"
    UNGLUE = "unglue"


class ActionStatus(str, Enum):
    """Lifecycle tag of a tracked action."""

    IDLE = "idle"
    WALLET_PENDING = "wallet_pending"
    CONFIRMING = "confirming"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ErrorCategory(str, Enum):
    """User-facing failure categories."""

    USER_REJECTED = "user_rejected"
    NEEDS_APPROVAL = "needs_approval"
    INSUFFICIENT_BALANCE = "insufficient_balance"
    ALREADY_CLAIMED = "already_claimed"
    VALIDATION = "validation"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ActionFailure:
    """Classified failure attached to an action; the raw cause is not kept."""

    category: ErrorCategory
    message: str


@dataclass(frozen=True)
class ActionState:
    """Tagged state of one action: Idle | WalletPending | Confirming | Succeeded | Failed."""

    status: ActionStatus = ActionStatus.IDLE
    tx_hash: TxHash | None = None
    error: ActionFailure | None = None

    @property
    def is_wallet_pending(self) -> bool:
        return self.status is ActionStatus.WALLET_PENDING

    @property
    def is_confirming(self) -> bool:
        return self.status is ActionStatus.CONFIRMING

    @property
    def is_success(self) -> bool:
        return self.status is ActionStatus.SUCCEEDED

    @property
    def is_failed(self) -> bool:
        return self.status is ActionStatus.FAILED

    @property
    def is_busy(self) -> bool:
        return self.status in (ActionStatus.WALLET_PENDING, ActionStatus.CONFIRMING)

    def pending(self) -> ActionState:
        return ActionState(status=ActionStatus.WALLET_PENDING)

    def confirming(self, tx_hash: TxHash) -> ActionState:
        return replace(self, status=ActionStatus.CONFIRMING, tx_hash=tx_hash)

    def succeeded(self) -> ActionState:
        return replace(self, status=ActionStatus.SUCCEEDED, error=None)

    def failed(self, failure: ActionFailure) -> ActionState:
        return replace(self, status=ActionStatus.FAILED, error=failure)


IDLE = ActionState()


@dataclass(frozen=True)
class Snapshot:
    """Raw on-chain read of the token and vault."""

    total_supply: Wei
    user_balance: Wei
    decimals: int
    vault_native_balance: Wei


@dataclass(frozen=True)
class Metrics:
    """Validated view of a snapshot with the derived backing ratio."""

    total_supply: Wei
    user_balance: Wei
    decimals: int
    vault_native_balance: Wei
    estimated_backing_per_token: str

    @property
    def has_tokens(self) -> bool:
        return self.user_balance > 0


@dataclass(frozen=True)
class Receipt:
    """Outcome of a confirmed transaction."""

    tx_hash: TxHash
    success: bool
    block_number: int | None = None
    raw: dict[str, Any] | None = field(default=None, compare=False)


@dataclass(frozen=True)
class WalletState:
    """Connection observables supplied by the wallet connector."""

    address: Address | None = None
    chain_id: int | None = None

    @property
    def connected(self) -> bool:
        return self.address is not None
