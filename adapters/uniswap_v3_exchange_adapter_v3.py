"""
Uniswap V3 Exchange Adapter V3
Builds SwapRouter02 exactInput / exactOutput calls from a packed path
"""

from typing import List, Union
from loguru import logger

from blockchain.calldata import CallData, checksum, encode_function_call, encode_packed, to_bytes_data
from blockchain.exceptions import ContractRevertError
from .path_codec import ADDRESS_SIZE, HOP_SIZE, to_address, to_bool

EXACT_INPUT_SIGNATURE = "exactInput((bytes,address,uint256,uint256))"
EXACT_OUTPUT_SIGNATURE = "exactOutput((bytes,address,uint256,uint256))"

# address + uint24 fee + address + bool fixIn
MIN_DATA_LENGTH = ADDRESS_SIZE + HOP_SIZE + 1


class UniswapV3ExchangeAdapterV3:
    """
    Exchange adapter for Uniswap V3 SwapRouter02

    The trade `data` is a packed Uniswap V3 path with a trailing bool:
    true trades a fixed input amount (exactInput), false a fixed output
    amount (exactOutput). exactOutput paths are reversed, so the first
    token in the path is the destination token.
    """

    def __init__(self, swap_router: str):
        """
        Initialize adapter

        Args:
            swap_router: SwapRouter02 address
        """
        self.swap_router = checksum(swap_router)

    def get_spender(self) -> str:
        """Address to approve source tokens to"""
        return self.swap_router

    def get_trade_calldata(
        self,
        source_token: str,
        destination_token: str,
        destination_address: str,
        source_quantity: int,
        min_destination_quantity: int,
        data: Union[bytes, str]
    ) -> CallData:
        """
        Get trade call data

        Args:
            source_token: Token sold
            destination_token: Token bought
            destination_address: Recipient of the bought tokens (the SetToken)
            source_quantity: Amount sold (max amount sold when fixIn is false)
            min_destination_quantity: Min amount bought (exact amount bought when fixIn is false)
            data: Packed path followed by the fixIn bool

        Returns:
            CallData for the swap router
        """
        data = to_bytes_data(data)

        if len(data) < MIN_DATA_LENGTH or (len(data) - 1 - ADDRESS_SIZE) % HOP_SIZE != 0:
            raise ContractRevertError("Invalid data")

        fix_input = to_bool(data, len(data) - 1)

        first_token = to_address(data, 0)
        last_token = to_address(data, len(data) - 1 - ADDRESS_SIZE)

        if fix_input:
            source_from_path, destination_from_path = first_token, last_token
        else:
            source_from_path, destination_from_path = last_token, first_token

        if checksum(source_token) != source_from_path:
            raise ContractRevertError("Source token path mismatch")

        if checksum(destination_token) != destination_from_path:
            raise ContractRevertError("Destination token path mismatch")

        path = bytes(data[:-1])
        recipient = checksum(destination_address)

        if fix_input:
            call_data = encode_function_call(
                EXACT_INPUT_SIGNATURE,
                ['(bytes,address,uint256,uint256)'],
                [(path, recipient, source_quantity, min_destination_quantity)]
            )
        else:
            call_data = encode_function_call(
                EXACT_OUTPUT_SIGNATURE,
                ['(bytes,address,uint256,uint256)'],
                [(path, recipient, min_destination_quantity, source_quantity)]
            )

        logger.debug(
            f"Uniswap V3 {'exactInput' if fix_input else 'exactOutput'} "
            f"{source_from_path} -> {destination_from_path}"
        )

        return CallData(self.swap_router, 0, call_data)

    def generate_data_param(self, path: List[str], fees: List[int], fix_in: bool) -> bytes:
        """
        Encode trade data for get_trade_calldata

        Args:
            path: Token addresses in swap order (reversed for exactOutput)
            fees: Pool fee of each hop, len(path) - 1 entries
            fix_in: True for exactInput, False for exactOutput

        Returns:
            Packed path with trailing fixIn bool
        """
        if len(path) < 2 or len(fees) != len(path) - 1:
            raise ContractRevertError("Invalid path length")

        types = []
        values = []
        for token, fee in zip(path[:-1], fees):
            types += ['address', 'uint24']
            values += [checksum(token), fee]

        types += ['address', 'bool']
        values += [checksum(path[-1]), fix_in]

        return encode_packed(types, values)
