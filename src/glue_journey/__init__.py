"""Glue journey - guided claim, deposit and unglue flow for a vault-backed token.

The package derives which step a wallet is on from chain observables,
sequences the transactions for each step, maps raw snapshots to metrics and
classifies failures into actionable messages.
"""

from .base import ChainCapability, WalletConnector
from .classifier import classify, classify_exception, message_for
from .config import GlueConfig
from .exceptions import (
    ConfigurationError,
    GlueJourneyError,
    NetworkError,
    RevertError,
    ValidationError,
)
from .journey import JourneyInputs, JourneyView, derive_journey, derive_step
from .metrics import MetricsRepository, map_snapshot, read_snapshot
from .orchestrator import TransactionOrchestrator
from .session import GlueJourneySession
from .types import (
    ActionFailure,
    ActionKind,
    ActionState,
    ActionStatus,
    Address,
    ErrorCategory,
    JourneyStep,
    Metrics,
    Receipt,
    Snapshot,
    TxHash,
    WalletState,
    Wei,
)
from .utils import (
    calculate_backing_per_token,
    format_token_amount,
    format_units,
    parse_ether,
    parse_units,
)

__version__ = "0.1.0"

__all__ = [
    # Capabilities
    "ChainCapability",
    "WalletConnector",
    # Core components
    "GlueJourneySession",
    "TransactionOrchestrator",
    "MetricsRepository",
    "GlueConfig",
    # Pure functions
    "derive_step",
    "derive_journey",
    "map_snapshot",
    "read_snapshot",
    "classify",
    "classify_exception",
    "message_for",
    # Types and enums
    "JourneyStep",
    "JourneyInputs",
    "JourneyView",
    "ActionKind",
    "ActionStatus",
    "ActionState",
    "ActionFailure",
    "ErrorCategory",
    "Snapshot",
    "Metrics",
    "Receipt",
    "WalletState",
    "Address",
    "TxHash",
    "Wei",
    # Exceptions
    "GlueJourneyError",
    "ValidationError",
    "ConfigurationError",
    "NetworkError",
    "RevertError",
    # Utility functions
    "parse_units",
    "parse_ether",
    "format_units",
    "format_token_amount",
    "calculate_backing_per_token",
]
