"""
Morpho Migration Wrap V2 Adapter
Migrates legacy MORPHO into the new MORPHO token through the wrapper contract
"""

from typing import Union

from blockchain.calldata import CallData, checksum, encode_function_call
from blockchain.exceptions import ContractRevertError

DEPOSIT_FOR_SIGNATURE = "depositFor(address,uint256)"


class MorphoMigrationWrapV2Adapter:
    """
    Wrap adapter that calls `depositFor` on the Morpho wrapper

    Only the legacy -> new direction exists.
    """

    def __init__(self, morpho_wrapper: str, legacy_morpho_token: str, new_morpho_token: str):
        """
        Initialize adapter

        Args:
            morpho_wrapper: Wrapper contract performing the migration
            legacy_morpho_token: Token accepted as underlying
            new_morpho_token: Token received as wrapped
        """
        self.morpho_wrapper = checksum(morpho_wrapper)
        self.legacy_morpho_token = checksum(legacy_morpho_token)
        self.new_morpho_token = checksum(new_morpho_token)

    def _validate_pair(self, underlying_token: str, wrapped_token: str):
        if checksum(underlying_token) != self.legacy_morpho_token:
            raise ContractRevertError("Must be a valid legacy Morpho token")
        if checksum(wrapped_token) != self.new_morpho_token:
            raise ContractRevertError("Must be a valid new Morpho token")

    def get_wrap_call_data(
        self,
        underlying_token: str,
        wrapped_token: str,
        underlying_units: int,
        to: str,
        wrap_data: Union[bytes, str]
    ) -> CallData:
        """
        Get wrap call data

        Args:
            underlying_token: Legacy MORPHO address
            wrapped_token: New MORPHO address
            underlying_units: Amount of legacy tokens migrated
            to: Receiver of the new tokens
            wrap_data: Unused

        Returns:
            CallData for the wrapper
        """
        self._validate_pair(underlying_token, wrapped_token)

        call_data = encode_function_call(
            DEPOSIT_FOR_SIGNATURE,
            ['address', 'uint256'],
            [checksum(to), underlying_units]
        )

        return CallData(self.morpho_wrapper, 0, call_data)

    def get_unwrap_call_data(
        self,
        underlying_token: str,
        wrapped_token: str,
        wrapped_units: int,
        to: str,
        unwrap_data: Union[bytes, str]
    ) -> CallData:
        raise ContractRevertError("Morpho migration is not reversible")

    def get_spender_address(self, underlying_token: str, wrapped_token: str) -> str:
        return self.morpho_wrapper
