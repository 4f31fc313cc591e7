"""
Morpho Claim V2 Adapter
Claims Morpho rewards from the Universal Rewards Distributor with a merkle proof
"""

from typing import Union
from eth_abi import decode
from eth_abi.exceptions import DecodingError

from blockchain.calldata import CallData, checksum, encode_function_call, to_bytes_data
from blockchain.exceptions import ContractRevertError

CLAIM_SIGNATURE = "claim(address,address,uint256,bytes32[])"


class MorphoClaimV2Adapter:
    """
    Claim adapter for Morpho's Universal Rewards Distributor

    Claimable amounts and proofs come from the Morpho rewards API, so the
    adapter cannot report pending rewards on its own.
    """

    def __init__(self, distributor: str):
        self.distributor = checksum(distributor)

    def get_claim_call_data(
        self,
        set_token: str,
        reward_pool: str,
        claim_data: Union[bytes, str]
    ) -> CallData:
        """
        Get claim call data

        Args:
            set_token: Account the rewards are claimed for
            reward_pool: Reward token distributed
            claim_data: abi.encode(uint256 claimable, bytes32[] proof)

        Returns:
            CallData for the distributor
        """
        try:
            claimable, proof = decode(['uint256', 'bytes32[]'], bytes(to_bytes_data(claim_data)))
        except DecodingError as e:
            raise ContractRevertError("Invalid claim data") from e

        call_data = encode_function_call(
            CLAIM_SIGNATURE,
            ['address', 'address', 'uint256', 'bytes32[]'],
            [checksum(set_token), checksum(reward_pool), claimable, list(proof)]
        )

        return CallData(self.distributor, 0, call_data)

    def get_rewards_amount(self, set_token: str, reward_pool: str) -> int:
        """Pending rewards are only known off-chain"""
        return 0

    def get_token_address(self, reward_pool: str) -> str:
        """The reward pool is the reward token itself"""
        return checksum(reward_pool)
