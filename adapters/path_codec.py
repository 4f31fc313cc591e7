"""
Swap Path Codec
Reads packed DEX paths (token, fee/tick spacing, token, ...) the way the
on-chain BytesLib helpers do
"""

from typing import List, Tuple, Union
from web3 import Web3

from blockchain.calldata import to_bytes_data
from blockchain.exceptions import ContractRevertError

ADDRESS_SIZE = 20
FEE_SIZE = 3
# token + fee/tick spacing, repeated once per hop
HOP_SIZE = ADDRESS_SIZE + FEE_SIZE


def to_address(data: bytes, start: int) -> str:
    """
    Read a 20 byte address at `start`

    Args:
        data: Packed bytes
        start: Byte offset

    Returns:
        Checksummed address
    """
    if start < 0 or len(data) < start + ADDRESS_SIZE:
        raise ContractRevertError("toAddress_outOfBounds")
    return Web3.to_checksum_address('0x' + bytes(data[start:start + ADDRESS_SIZE]).hex())


def to_uint24(data: bytes, start: int) -> int:
    """Read a big-endian uint24 at `start`"""
    if start < 0 or len(data) < start + FEE_SIZE:
        raise ContractRevertError("toUint24_outOfBounds")
    return int.from_bytes(data[start:start + FEE_SIZE], 'big')


def to_int24(data: bytes, start: int) -> int:
    """Read a big-endian two's complement int24 at `start`"""
    if start < 0 or len(data) < start + FEE_SIZE:
        raise ContractRevertError("toInt24_outOfBounds")
    return int.from_bytes(data[start:start + FEE_SIZE], 'big', signed=True)


def to_bool(data: bytes, start: int) -> bool:
    """
    Read a single byte bool at `start`

    Only 0 and 1 are accepted.
    """
    if start < 0 or len(data) < start + 1:
        raise ContractRevertError("toBool_outOfBounds")

    value = data[start]
    if value > 1:
        raise ContractRevertError("Invalid bool data")

    return value == 1


def is_valid_path_length(length: int) -> bool:
    """True if `length` bytes fit `address (fee address)+` exactly"""
    return length >= ADDRESS_SIZE + HOP_SIZE and (length - ADDRESS_SIZE) % HOP_SIZE == 0


def decode_path(
    data: Union[bytes, str],
    signed_fees: bool = False,
    error: str = "Invalid data"
) -> Tuple[List[str], List[int]]:
    """
    Split a packed path into tokens and per-hop fees

    Args:
        data: Packed path without any trailing flags
        signed_fees: Read fees as int24 (tick spacings) instead of uint24
        error: Revert message when the blob is malformed

    Returns:
        (tokens, fees) with len(fees) == len(tokens) - 1
    """
    path = to_bytes_data(data)

    if not is_valid_path_length(len(path)):
        raise ContractRevertError(error)

    read_fee = to_int24 if signed_fees else to_uint24

    tokens = [to_address(path, 0)]
    fees = []
    offset = ADDRESS_SIZE
    while offset < len(path):
        fees.append(read_fee(path, offset))
        tokens.append(to_address(path, offset + FEE_SIZE))
        offset += HOP_SIZE

    return tokens, fees
