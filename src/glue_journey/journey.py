"""Derive the current journey step from external observables.

Nothing here remembers a previous step. Every call recomputes the whole
journey from a :class:`JourneyInputs` snapshot, so the result stays consistent
after external races such as a network switch mid-flow. The only memory is
``JourneyInputs.failure``: the most recent failed action. It keeps the journey
on ``warning`` until that action is started again.
"""

from __future__ import annotations

from dataclasses import dataclass

from .types import ActionFailure, JourneyStep

STEP_MESSAGES: dict[JourneyStep, str] = {
    JourneyStep.CONNECT: "Connect your wallet to see the vault.",
    JourneyStep.CLAIM: "Claim your demo tokens so you have something to redeem.",
    JourneyStep.DEPOSIT: "Deposit into the vault. A bigger vault means a bigger share per token.",
    JourneyStep.UNGLUE: "Burn tokens to withdraw your proportional share of the vault.",
    JourneyStep.DONE: "You finished the full journey.",
    JourneyStep.WARNING: "Something went wrong. Read the note below.",
}

WRONG_NETWORK_MESSAGE = "Please switch your wallet to the configured network first."
APPROVING_MESSAGE = "First unlock your tokens for unglue. Approve in your wallet."


def derive_step(
    connected: bool,
    chain_matches: bool,
    has_tokens: bool,
    claim_succeeded: bool,
    deposit_succeeded: bool,
    unglue_succeeded: bool,
    *,
    claim_available: bool = True,
) -> JourneyStep:
    """Return the active step; the first matching rule wins."""
    if not connected:
        return JourneyStep.CONNECT
    if not chain_matches:
        return JourneyStep.WARNING
    if unglue_succeeded:
        return JourneyStep.DONE
    if claim_available and not has_tokens and not claim_succeeded:
        return JourneyStep.CLAIM
    if deposit_succeeded:
        return JourneyStep.UNGLUE
    return JourneyStep.DEPOSIT


@dataclass(frozen=True)
class JourneyInputs:
    """Immutable snapshot of everything the deriver reads."""

    connected: bool = False
    chain_matches: bool = True
    has_tokens: bool = False
    claim_succeeded: bool = False
    deposit_succeeded: bool = False
    unglue_succeeded: bool = False
    claim_available: bool = True
    failure: ActionFailure | None = None
    claim_busy: bool = False
    deposit_busy: bool = False
    unglue_busy: bool = False
    approving: bool = False


@dataclass(frozen=True)
class JourneyView:
    step: JourneyStep
    message: str
    is_claim_busy: bool = False
    is_deposit_busy: bool = False
    is_unglue_busy: bool = False
    is_approving: bool = False


def derive_journey(inputs: JourneyInputs) -> JourneyView:
    """Derive step, message and busy flags, applying the sticky failure overlay."""
    step = derive_step(
        inputs.connected,
        inputs.chain_matches,
        inputs.has_tokens,
        inputs.claim_succeeded,
        inputs.deposit_succeeded,
        inputs.unglue_succeeded,
        claim_available=inputs.claim_available,
    )

    if inputs.failure is not None:
        step = JourneyStep.WARNING
        message = inputs.failure.message
    elif step is JourneyStep.WARNING:
        message = WRONG_NETWORK_MESSAGE
    elif inputs.approving:
        message = APPROVING_MESSAGE
    else:
        message = STEP_MESSAGES[step]

    return JourneyView(
        step=step,
        message=message,
        is_claim_busy=inputs.claim_busy,
        is_deposit_busy=inputs.deposit_busy,
        is_unglue_busy=inputs.approving or inputs.unglue_busy,
        is_approving=inputs.approving,
    )
