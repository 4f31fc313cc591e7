"""
Call Data Encoding
Selector and ABI encoding helpers shared by all adapters
"""

from typing import Any, List, NamedTuple, Union
from eth_abi import encode
from eth_abi.packed import encode_packed as _encode_packed
from hexbytes import HexBytes
from web3 import Web3


class CallData(NamedTuple):
    """Target, ETH value and call data for an external call"""
    target: str
    value: int
    data: HexBytes


def to_bytes_data(data: Union[bytes, str]) -> HexBytes:
    """
    Normalise call data / path input

    Args:
        data: Raw bytes or a 0x-prefixed hex string

    Returns:
        HexBytes view of the data
    """
    if isinstance(data, str) and data in ('', '0x'):
        return HexBytes(b'')
    return HexBytes(data)


def function_selector(signature: str) -> bytes:
    """
    Get the 4 byte selector of a canonical function signature

    Args:
        signature: e.g. "depositFor(address,uint256)"

    Returns:
        First 4 bytes of keccak256(signature)
    """
    return bytes(Web3.keccak(text=signature)[:4])


def encode_function_call(signature: str, types: List[str], args: List[Any]) -> HexBytes:
    """
    Encode a function call: selector followed by ABI encoded arguments

    Args:
        signature: Canonical signature used for the selector
        types: ABI types of the arguments (tuples written as "(bytes,address)")
        args: Argument values

    Returns:
        Encoded call data
    """
    return HexBytes(function_selector(signature) + encode(types, args))


def encode_packed(types: List[str], values: List[Any]) -> HexBytes:
    """Non-standard packed encoding (abi.encodePacked)"""
    return HexBytes(_encode_packed(types, values))


def checksum(address: str) -> str:
    return Web3.to_checksum_address(address)
