"""Unit conversion and formatting helpers for the Glue journey."""

from collections.abc import Mapping, Sequence
from decimal import ROUND_DOWN, Decimal, InvalidOperation, localcontext
from typing import Any

from hexbytes import HexBytes

from .constants import BACKING_DISPLAY_PLACES, MAX_UINT256, NATIVE_DECIMALS
from .exceptions import ValidationError


def parse_units(value: str, decimals: int) -> int:
    """Parse a human decimal string into base units without floating point."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Amount must be a non-empty string", field="amount", value=value)

    try:
        amount = Decimal(value.strip())
    except InvalidOperation:
        raise ValidationError("Amount is not a decimal number", field="amount", value=value)

    if not amount.is_finite():
        raise ValidationError("Amount must be finite", field="amount", value=value)

    if amount < 0:
        raise ValidationError("Amount cannot be negative", field="amount", value=value)

    with localcontext() as ctx:
        ctx.prec = max(78, len(value) + decimals + 2)
        scaled = amount.scaleb(decimals)
        if scaled != scaled.to_integral_value():
            raise ValidationError(
                f"Amount has more than {decimals} fractional digits",
                field="amount",
                value=value,
            )
        if scaled > MAX_UINT256:
            raise ValidationError("Amount exceeds the uint256 range", field="amount", value=value)
        return int(scaled)


def parse_ether(value: str) -> int:
    """Parse a native-asset amount (18 decimals) into wei."""
    return parse_units(value, NATIVE_DECIMALS)


def format_units(value: int, decimals: int) -> Decimal:
    """Convert base units back to a Decimal of whole units."""
    with localcontext() as ctx:
        ctx.prec = max(78, len(str(abs(value))) + decimals)
        return Decimal(value).scaleb(-decimals)


def format_token_amount(value: int, decimals: int, max_fraction_digits: int = 4) -> str:
    """Render a base-unit amount for display, truncated to a few decimals."""
    whole = format_units(value, decimals)
    with localcontext() as ctx:
        ctx.prec = max(78, len(str(abs(value))) + decimals)
        quantized = whole.quantize(Decimal(1).scaleb(-max_fraction_digits), rounding=ROUND_DOWN)
    text = f"{quantized:,f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def calculate_backing_per_token(
    vault_native_balance: int,
    total_supply: int,
    token_decimals: int,
    places: int = BACKING_DISPLAY_PLACES,
) -> str:
    """Native units backing one whole token, truncated to ``places`` decimals."""
    if total_supply == 0:
        return "0"

    # Multiply before dividing so no precision is lost before the final conversion
    precision = 10**token_decimals
    wei_per_token = (vault_native_balance * precision) // total_supply

    per_token = format_units(wei_per_token, NATIVE_DECIMALS)
    with localcontext() as ctx:
        ctx.prec = max(78, len(str(wei_per_token)) + places)
        truncated = per_token.quantize(Decimal(1).scaleb(-places), rounding=ROUND_DOWN)
    return f"{truncated:f}"


def serialise_receipt(receipt: Any) -> Any:
    """Serialise web3 receipt objects into JSON-friendly structures."""
    if receipt is None:
        return None
    if isinstance(receipt, Mapping):
        return {key: serialise_receipt(value) for key, value in receipt.items()}
    if isinstance(receipt, Sequence) and not isinstance(
        receipt, str | bytes | bytearray | HexBytes
    ):
        return [serialise_receipt(item) for item in receipt]
    if isinstance(receipt, bytes | bytearray | HexBytes):
        return HexBytes(receipt).to_0x_hex()
    return receipt
