"""
Mock Contracts
In-memory ERC20 and claim adapter mocks for module tests
"""

from typing import Dict, Union

from blockchain.calldata import CallData, checksum, encode_function_call
from blockchain.exceptions import ContractRevertError
from .protocol import LocalChain, LocalContract


class StandardTokenMock(LocalContract):
    """Minimal ERC20 with open minting"""

    CALLS = {
        'transfer(address,uint256)': '_transfer',
        'mint(address,uint256)': '_mint',
    }

    def __init__(self, chain: LocalChain, name: str = "Token", symbol: str = "TKN", decimals: int = 18):
        super().__init__(chain)
        self.name = name
        self.symbol = symbol
        self.decimals = decimals
        self.total_supply = 0
        self.balances: Dict[str, int] = {}

    def balance_of(self, holder: str) -> int:
        return self.balances.get(checksum(holder), 0)

    def mint(self, to: str, amount: int):
        to = checksum(to)
        self.balances[to] = self.balances.get(to, 0) + amount
        self.total_supply += amount

    def transfer(self, sender: str, to: str, amount: int):
        sender = checksum(sender)
        if self.balance_of(sender) < amount:
            raise ContractRevertError("ERC20: transfer amount exceeds balance")
        to = checksum(to)
        self.balances[sender] -= amount
        self.balances[to] = self.balances.get(to, 0) + amount

    def _transfer(self, sender: str, to: str, amount: int) -> bool:
        self.transfer(sender, to, amount)
        return True

    def _mint(self, sender: str, to: str, amount: int):
        self.mint(to, amount)


class ClaimAdapterMockV2(StandardTokenMock):
    """
    Claim adapter that is also its own reward token

    Claiming mints the configured reward amount to the holder.
    """

    CALLS = dict(StandardTokenMock.CALLS, **{
        'claimRewards(address)': '_claim_rewards',
    })

    def __init__(self, chain: LocalChain):
        super().__init__(chain, name="ClaimAdapter", symbol="CLAIM")
        self.rewards = 0

    def set_rewards(self, rewards: int):
        self.rewards = rewards

    def _claim_rewards(self, sender: str, holder: str):
        self.mint(holder, self.rewards)

    def get_claim_call_data(self, set_token: str, reward_pool: str, claim_data: Union[bytes, str]) -> CallData:
        call_data = encode_function_call('claimRewards(address)', ['address'], [checksum(set_token)])
        return CallData(self.address, 0, call_data)

    def get_rewards_amount(self, set_token: str, reward_pool: str) -> int:
        return self.rewards

    def get_token_address(self, reward_pool: str) -> str:
        return self.address
