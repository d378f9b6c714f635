"""
Native asset amount conversion.

The ledger's smallest unit (stroop) is 1/10,000,000 of the human-facing unit.
"""

from decimal import Decimal, InvalidOperation
from typing import Union

from consigne.domain.exceptions import ValidationError

STROOPS_PER_UNIT = 10_000_000
DECIMAL_PLACES = 7

_QUANTUM = Decimal(1).scaleb(-DECIMAL_PLACES)


def to_stroops(amount: Union[Decimal, str, int]) -> int:
    """
    Convert a human-facing amount to smallest-unit integer.

    Args:
        amount: Amount as Decimal, decimal string or int. Floats are
            rejected because they cannot represent most amounts exactly.

    Returns:
        Amount in stroops

    Raises:
        ValidationError: If amount is not a number or has more than
            7 decimal places
    """
    if isinstance(amount, float):
        raise ValidationError("amount", "pass Decimal or str, not float")

    try:
        value = Decimal(amount)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError("amount", f"not a number: {amount!r}")

    if not value.is_finite():
        raise ValidationError("amount", f"not a finite number: {amount!r}")

    try:
        exact = value == value.quantize(_QUANTUM)
    except InvalidOperation:
        raise ValidationError("amount", f"out of range: {amount}")

    if not exact:
        raise ValidationError(
            "amount", f"more than {DECIMAL_PLACES} decimal places: {amount}"
        )

    return int(value * STROOPS_PER_UNIT)


def from_stroops(stroops: int) -> Decimal:
    """
    Convert smallest-unit integer to human-facing Decimal.

    Args:
        stroops: Amount in stroops

    Returns:
        Amount as Decimal
    """
    return Decimal(stroops) / STROOPS_PER_UNIT
