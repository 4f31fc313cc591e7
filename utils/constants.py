"""
Protocol Constants
"""

ZERO = 0

ADDRESS_ZERO = "0x0000000000000000000000000000000000000000"

EMPTY_BYTES = b''
ZERO_BYTES = bytes(32)

MAX_UINT_256 = 2**256 - 1
PRECISE_UNIT = 10**18
