"""
Aerodrome Slipstream Exchange Adapter
Builds Slipstream router exactInput calls from a tick-spacing path
"""

from typing import List, Optional, Union
from web3 import Web3
from loguru import logger

from blockchain.calldata import CallData, checksum, encode_function_call, encode_packed, to_bytes_data
from blockchain.exceptions import ContractRevertError
from .path_codec import ADDRESS_SIZE, is_valid_path_length, to_address

EXACT_INPUT_SIGNATURE = "exactInput((bytes,address,uint256,uint256,uint256))"

ERROR_PREFIX = "AerodromeSlipstreamExchangeAdapter"


class AerodromeSlipstreamExchangeAdapter:
    """
    Exchange adapter for the Aerodrome Slipstream (concentrated liquidity) router

    Paths are packed `address int24 address ...` where the int24 is the pool
    tick spacing. Only fixed input trades are supported.
    """

    def __init__(self, swap_router: str, w3: Optional[Web3] = None):
        """
        Initialize adapter

        Args:
            swap_router: Slipstream swap router address
            w3: Web3 instance used to read the block timestamp for deadlines
        """
        self.swap_router = checksum(swap_router)
        self.w3 = w3

    def get_spender(self) -> str:
        return self.swap_router

    def _current_timestamp(self) -> int:
        if self.w3 is None:
            raise ValueError("deadline required when no Web3 instance is configured")
        return int(self.w3.eth.get_block('latest')['timestamp'])

    def get_trade_calldata(
        self,
        source_token: str,
        destination_token: str,
        destination_address: str,
        source_quantity: int,
        min_destination_quantity: int,
        data: Union[bytes, str],
        deadline: Optional[int] = None
    ) -> CallData:
        """
        Get trade call data

        Args:
            source_token: Token sold, must be the first token of the path
            destination_token: Token bought, must be the last token of the path
            destination_address: Recipient of the bought tokens
            source_quantity: Exact amount sold
            min_destination_quantity: Minimum amount bought
            data: Packed tick-spacing path
            deadline: Swap deadline, defaults to the latest block timestamp

        Returns:
            CallData for the swap router
        """
        path = to_bytes_data(data)

        if not is_valid_path_length(len(path)):
            raise ContractRevertError(f"{ERROR_PREFIX}: invalid path data")

        if checksum(source_token) != to_address(path, 0):
            raise ContractRevertError(f"{ERROR_PREFIX}: source token path mismatch")

        if checksum(destination_token) != to_address(path, len(path) - ADDRESS_SIZE):
            raise ContractRevertError(f"{ERROR_PREFIX}: destination token path mismatch")

        if deadline is None:
            deadline = self._current_timestamp()

        call_data = encode_function_call(
            EXACT_INPUT_SIGNATURE,
            ['(bytes,address,uint256,uint256,uint256)'],
            [(
                bytes(path),
                checksum(destination_address),
                deadline,
                source_quantity,
                min_destination_quantity
            )]
        )

        logger.debug(f"Slipstream exactInput {source_token} -> {destination_token}, deadline {deadline}")

        return CallData(self.swap_router, 0, call_data)

    def generate_data_param(self, tokens: List[str], tick_spacings: List[int]) -> bytes:
        """
        Encode a tick-spacing path

        Args:
            tokens: Token addresses in swap order
            tick_spacings: Tick spacing of each hop, len(tokens) - 1 entries

        Returns:
            Packed path
        """
        if len(tokens) < 2 or len(tick_spacings) != len(tokens) - 1:
            raise ContractRevertError(f"{ERROR_PREFIX}: invalid input lengths")

        types = ['address']
        values = [checksum(tokens[0])]
        for tick_spacing, token in zip(tick_spacings, tokens[1:]):
            types += ['int24', 'address']
            values += [tick_spacing, checksum(token)]

        return encode_packed(types, values)
