"""
Unit Helpers
Convert human amounts to integer token units
"""

from decimal import Decimal
from typing import Union

Number = Union[int, float, str, Decimal]


def units(amount: Number, decimals: int) -> int:
    """
    Scale a human amount to token base units

    Args:
        amount: Amount, e.g. 1.5
        decimals: Token decimals

    Returns:
        Integer amount in base units
    """
    return int(Decimal(str(amount)) * (Decimal(10) ** decimals))


def ether(amount: Number) -> int:
    return units(amount, 18)


def gwei(amount: Number) -> int:
    return units(amount, 9)


def usdc(amount: Number) -> int:
    return units(amount, 6)


def bitcoin(amount: Number) -> int:
    return units(amount, 8)
