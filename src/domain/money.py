from decimal import Decimal, ROUND_HALF_UP
from typing import Union


def to_minor_units(amount: Union[Decimal, float, int, str]) -> int:
    """Convert a major-unit amount to the integer minor units Paystack expects (x100)"""
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
