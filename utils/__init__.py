"""
Utilities Package
Units, constants and test node helpers
"""

from .constants import ADDRESS_ZERO, EMPTY_BYTES, MAX_UINT_256, PRECISE_UNIT, ZERO, ZERO_BYTES
from .units import bitcoin, ether, gwei, usdc

__all__ = [
    'ADDRESS_ZERO',
    'EMPTY_BYTES',
    'MAX_UINT_256',
    'PRECISE_UNIT',
    'ZERO',
    'ZERO_BYTES',
    'bitcoin',
    'ether',
    'gwei',
    'usdc',
]
