"""Conversions between human-readable token amounts and smallest units."""

from decimal import ROUND_DOWN, Context, Decimal, InvalidOperation
from typing import Union

Amount = Union[str, int, Decimal]

# uint256 values need more than the default 28 digits
_CONTEXT = Context(prec=100)


def to_smallest_unit(amount: Amount, decimals: int) -> int:
    """Convert a human amount (e.g. "1.5") to integer smallest units.

    Digits beyond `decimals` precision are truncated.

    Raises:
        ValueError: If amount is not a non-negative number
    """
    try:
        value = Decimal(str(amount).strip())
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {amount!r}") from e

    if not value.is_finite() or value < 0:
        raise ValueError(f"Invalid amount: {amount!r}")

    scaled = value.scaleb(decimals, _CONTEXT).quantize(
        Decimal(1), rounding=ROUND_DOWN, context=_CONTEXT
    )
    return int(scaled)


def from_smallest_unit(raw: int, decimals: int) -> Decimal:
    """Convert integer smallest units to a Decimal amount."""
    return Decimal(int(raw)).scaleb(-decimals, _CONTEXT)


def format_units(raw: int, decimals: int) -> str:
    """Render smallest units as a plain decimal string ("1.5", "0.000001", "0")."""
    value = from_smallest_unit(raw, decimals)
    if value == 0:
        return "0"
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
