"""Tests for failure classification."""

import pytest

from glue_journey.classifier import classify, classify_exception, message_for
from glue_journey.exceptions import NetworkError, RevertError, ValidationError
from glue_journey.types import ErrorCategory


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("User rejected the request.", ErrorCategory.USER_REJECTED),
        ("ERC20: insufficient allowance", ErrorCategory.NEEDS_APPROVAL),
        ("execution reverted: NoAssetsTransferred()", ErrorCategory.NEEDS_APPROVAL),
        ("execution reverted 0x2e659379", ErrorCategory.NEEDS_APPROVAL),
        ("insufficient funds for gas * price + value", ErrorCategory.INSUFFICIENT_BALANCE),
        ("execution reverted: Demo tokens already claimed", ErrorCategory.ALREADY_CLAIMED),
        ("nonce too low", ErrorCategory.UNKNOWN),
        ("", ErrorCategory.UNKNOWN),
    ],
)
def test_classify_categories(raw: str, expected: ErrorCategory) -> None:
    assert classify(raw) is expected


def test_classify_none_is_unknown() -> None:
    assert classify(None) is ErrorCategory.UNKNOWN


def test_rejected_wins_over_insufficient() -> None:
    assert classify("Rejected: insufficient balance") is ErrorCategory.USER_REJECTED


def test_allowance_wins_over_insufficient() -> None:
    # The earliest rule wins even though "insufficient" also matches
    assert classify("ERC20: insufficient allowance") is ErrorCategory.NEEDS_APPROVAL


def test_every_category_has_a_static_message() -> None:
    for category in ErrorCategory:
        assert message_for(category)


def test_classify_exception_uses_details() -> None:
    exc = RevertError(
        "Transaction for unglue would revert",
        details={"error": "execution reverted 0x2E659379"},
    )
    failure = classify_exception(exc)
    assert failure.category is ErrorCategory.NEEDS_APPROVAL
    assert failure.message == message_for(ErrorCategory.NEEDS_APPROVAL)


def test_classify_exception_validation() -> None:
    failure = classify_exception(ValidationError("Burn amount must be positive", field="amount"))
    assert failure.category is ErrorCategory.VALIDATION


def test_classify_exception_drops_raw_text() -> None:
    failure = classify_exception(NetworkError("socket closed: secret-host:8545"))
    assert failure.category is ErrorCategory.UNKNOWN
    assert "secret-host" not in failure.message


def test_classify_plain_exception() -> None:
    failure = classify_exception(RuntimeError("MetaMask Tx Signature: User denied... rejected"))
    assert failure.category is ErrorCategory.USER_REJECTED
