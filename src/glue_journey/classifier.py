"""Map raw failure causes onto a small set of user-facing categories."""

from __future__ import annotations

from .constants import NO_ASSETS_TRANSFERRED_SELECTOR
from .exceptions import GlueJourneyError, ValidationError
from .types import ActionFailure, ErrorCategory

# Checked in order: the first rule with a matching needle wins, even when a
# later rule would also match.
_RULES: tuple[tuple[ErrorCategory, tuple[str, ...]], ...] = (
    (ErrorCategory.USER_REJECTED, ("rejected",)),
    (
        ErrorCategory.NEEDS_APPROVAL,
        ("allowance", "noassetstransferred", NO_ASSETS_TRANSFERRED_SELECTOR),
    ),
    (ErrorCategory.INSUFFICIENT_BALANCE, ("insufficient",)),
    (ErrorCategory.ALREADY_CLAIMED, ("already claimed",)),
)

_MESSAGES: dict[ErrorCategory, str] = {
    ErrorCategory.USER_REJECTED: "You canceled in your wallet. Try again when ready.",
    ErrorCategory.NEEDS_APPROVAL: "Approve the token for unglue first, then try again.",
    ErrorCategory.INSUFFICIENT_BALANCE: "Not enough balance yet. Add funds or use a smaller amount.",
    ErrorCategory.ALREADY_CLAIMED: "This wallet already claimed its tokens. Continue to the next step.",
    ErrorCategory.VALIDATION: "Enter a positive amount.",
    ErrorCategory.UNKNOWN: "Transaction failed. Try once more with a smaller amount.",
}


def classify(raw_message: str | None) -> ErrorCategory:
    """Classify a raw failure message by ordered substring match."""
    normalized = (raw_message or "").lower()
    for category, needles in _RULES:
        if any(needle in normalized for needle in needles):
            return category
    return ErrorCategory.UNKNOWN


def message_for(category: ErrorCategory) -> str:
    """Return the static user-facing message for a category."""
    return _MESSAGES[category]


def classify_exception(exc: BaseException) -> ActionFailure:
    """Classify an exception raised during an action."""
    if isinstance(exc, ValidationError):
        category = ErrorCategory.VALIDATION
    else:
        raw = str(exc)
        if isinstance(exc, GlueJourneyError) and exc.details.get("error"):
            raw = f"{raw} {exc.details['error']}"
        category = classify(raw)
    return ActionFailure(category=category, message=message_for(category))
