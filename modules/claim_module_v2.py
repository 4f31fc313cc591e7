"""
Claim Module V2
In-memory model of the claim-settings registry module: which adapters may
claim from which reward pools of a SetToken, and who may trigger claims
"""

from typing import Dict, List, NamedTuple, Union
from hexbytes import HexBytes
from loguru import logger

from blockchain.calldata import checksum, to_bytes_data
from blockchain.exceptions import ContractRevertError
from utils.constants import ADDRESS_ZERO
from .protocol import Controller, LocalChain, SetToken, atomic

SetTokenLike = Union[SetToken, str]


class RewardClaimed(NamedTuple):
    set_token: str
    reward_pool: str
    adapter: str
    amount: int
    claim_data: HexBytes


class ClaimModuleV2:
    """
    Claim settings registry

    For every SetToken the module keeps
    - reward_pool_list: pools with at least one claim adapter
    - claim_settings: adapters registered per pool, in insertion order
    - anyone_claim: whether non-managers may trigger claims

    Every mutating call takes the caller address first and raises
    ContractRevertError with the module's revert strings.
    """

    def __init__(self, chain: LocalChain, controller: Controller):
        """
        Initialize Claim Module

        Args:
            chain: Address space the module, SetTokens and adapters live in
            controller: Protocol controller
        """
        self.chain = chain
        self.controller = controller
        self.address = chain.new_address()
        chain.register(self)

        self._reward_pool_list: Dict[str, List[str]] = {}
        self._reward_pool_status: Dict[str, Dict[str, bool]] = {}
        self._claim_settings: Dict[str, Dict[str, List[str]]] = {}
        self._claim_settings_status: Dict[str, Dict[str, Dict[str, bool]]] = {}
        self._anyone_claim: Dict[str, bool] = {}

        self.events: List[RewardClaimed] = []

    def _resolve(self, set_token: SetTokenLike) -> SetToken:
        if isinstance(set_token, SetToken):
            return set_token
        resolved = self.chain.get(set_token)
        if not isinstance(resolved, SetToken):
            raise ContractRevertError("Must be a valid and initialized SetToken")
        return resolved

    def _only_set_manager(self, set_token: SetToken, caller: str):
        if checksum(caller) != set_token.manager:
            raise ContractRevertError("Must be the SetToken manager")

    def _only_valid_and_initialized_set(self, set_token: SetToken):
        if not (self.controller.is_set(set_token.address) and set_token.is_initialized_module(self.address)):
            raise ContractRevertError("Must be a valid and initialized SetToken")

    def _only_valid_and_pending_set(self, set_token: SetToken):
        if not self.controller.is_set(set_token.address):
            raise ContractRevertError("Must be controller-enabled SetToken")
        if not set_token.is_pending_module(self.address):
            raise ContractRevertError("Must be pending initialization")

    def _only_valid_caller(self, set_token: SetToken, caller: str):
        if not (self.anyone_claim(set_token) or checksum(caller) == set_token.manager):
            raise ContractRevertError("Must be valid caller")

    def _get_and_validate_adapter(self, integration_name: str) -> str:
        registry = self.controller.get_integration_registry()
        adapter = registry.get_integration_adapter(self.address, integration_name)
        if adapter == ADDRESS_ZERO:
            raise ContractRevertError("Must be valid adapter")
        return adapter

    def _get_and_validate_integration_adapter(
        self,
        set_token: SetToken,
        reward_pool: str,
        integration_name: str
    ) -> str:
        adapter = self._get_and_validate_adapter(integration_name)
        if not self.claim_settings_status(set_token, reward_pool, adapter):
            raise ContractRevertError("Adapter integration not present")
        return adapter

    @staticmethod
    def _validate_batch_arrays(reward_pools: List[str], other: List) -> int:
        if len(reward_pools) != len(other):
            raise ContractRevertError("Array length mismatch")
        if len(reward_pools) == 0:
            raise ContractRevertError("Arrays must not be empty")
        return len(reward_pools)

    @atomic
    def initialize(
        self,
        caller: str,
        set_token: SetTokenLike,
        anyone_claim: bool,
        reward_pools: List[str],
        integration_names: List[str]
    ):
        """
        Initialize the module on a SetToken with its first claim settings

        Args:
            caller: Must be the SetToken manager
            set_token: SetToken with the module pending
            anyone_claim: Let any address trigger claims
            reward_pools: Reward pools, one per integration name
            integration_names: Claim adapter integration names
        """
        set_token = self._resolve(set_token)
        self._only_set_manager(set_token, caller)
        self._only_valid_and_pending_set(set_token)

        self._batch_add_claim(set_token, reward_pools, integration_names)
        self._anyone_claim[set_token.address] = anyone_claim
        set_token.initialize_module(self.address)

        logger.info(f"ClaimModuleV2 initialized on {set_token.address} with {len(reward_pools)} claims")

    @atomic
    def update_anyone_claim(self, caller: str, set_token: SetTokenLike, anyone_claim: bool):
        set_token = self._resolve(set_token)
        self._only_set_manager(set_token, caller)
        self._only_valid_and_initialized_set(set_token)

        self._anyone_claim[set_token.address] = anyone_claim

    @atomic
    def add_claim(self, caller: str, set_token: SetTokenLike, reward_pool: str, integration_name: str):
        set_token = self._resolve(set_token)
        self._only_set_manager(set_token, caller)
        self._only_valid_and_initialized_set(set_token)

        self._add_claim(set_token, reward_pool, integration_name)

    @atomic
    def batch_add_claim(
        self,
        caller: str,
        set_token: SetTokenLike,
        reward_pools: List[str],
        integration_names: List[str]
    ):
        set_token = self._resolve(set_token)
        self._only_set_manager(set_token, caller)
        self._only_valid_and_initialized_set(set_token)

        self._batch_add_claim(set_token, reward_pools, integration_names)

    @atomic
    def remove_claim(self, caller: str, set_token: SetTokenLike, reward_pool: str, integration_name: str):
        set_token = self._resolve(set_token)
        self._only_set_manager(set_token, caller)
        self._only_valid_and_initialized_set(set_token)

        self._remove_claim(set_token, reward_pool, integration_name)

    @atomic
    def batch_remove_claim(
        self,
        caller: str,
        set_token: SetTokenLike,
        reward_pools: List[str],
        integration_names: List[str]
    ):
        set_token = self._resolve(set_token)
        self._only_set_manager(set_token, caller)
        self._only_valid_and_initialized_set(set_token)

        self._validate_batch_arrays(reward_pools, integration_names)
        for reward_pool, integration_name in zip(reward_pools, integration_names):
            self._remove_claim(set_token, reward_pool, integration_name)

    @atomic
    def remove_module(self, set_token: SetTokenLike):
        """
        Clear every claim setting of the SetToken

        Called by the SetToken while it removes the module.
        """
        set_token = self._resolve(set_token)
        address = set_token.address

        for reward_pool in self._reward_pool_list.get(address, []):
            for adapter in self._claim_settings.get(address, {}).get(reward_pool, []):
                self._claim_settings_status[address][reward_pool][adapter] = False
            self._claim_settings.get(address, {}).pop(reward_pool, None)
            self._reward_pool_status[address][reward_pool] = False

        self._reward_pool_list.pop(address, None)
        self._anyone_claim.pop(address, None)

        logger.info(f"ClaimModuleV2 removed from {address}")

    @atomic
    def claim(
        self,
        caller: str,
        set_token: SetTokenLike,
        reward_pool: str,
        integration_name: str,
        claim_data: Union[bytes, str] = b''
    ) -> RewardClaimed:
        """
        Claim rewards from a reward pool through its adapter

        Args:
            caller: Manager, or anyone when anyone_claim is set
            set_token: SetToken receiving the rewards
            reward_pool: Reward pool claimed from
            integration_name: Claim adapter integration name
            claim_data: Adapter specific data (e.g. merkle proof)

        Returns:
            The RewardClaimed event
        """
        set_token = self._resolve(set_token)
        self._only_valid_caller(set_token, caller)
        self._only_valid_and_initialized_set(set_token)

        return self._claim(set_token, reward_pool, integration_name, claim_data)

    @atomic
    def batch_claim(
        self,
        caller: str,
        set_token: SetTokenLike,
        reward_pools: List[str],
        integration_names: List[str],
        claim_data: List[Union[bytes, str]]
    ) -> List[RewardClaimed]:
        set_token = self._resolve(set_token)
        self._only_valid_caller(set_token, caller)
        self._only_valid_and_initialized_set(set_token)

        self._validate_batch_arrays(reward_pools, integration_names)
        if len(claim_data) != len(reward_pools):
            raise ContractRevertError("Array length mismatch")

        return [
            self._claim(set_token, reward_pool, integration_name, data)
            for reward_pool, integration_name, data in zip(reward_pools, integration_names, claim_data)
        ]

    def _claim(
        self,
        set_token: SetToken,
        reward_pool: str,
        integration_name: str,
        claim_data: Union[bytes, str]
    ) -> RewardClaimed:
        if not self.is_reward_pool(set_token, reward_pool):
            raise ContractRevertError("RewardPool not present")

        adapter_address = self._get_and_validate_integration_adapter(set_token, reward_pool, integration_name)
        adapter = self.chain.get(adapter_address)

        reward_token = adapter.get_token_address(reward_pool)
        initial_balance = self.chain.balance_of(reward_token, set_token.address)

        target, value, data = adapter.get_claim_call_data(set_token.address, reward_pool, claim_data)
        set_token.invoke(self.address, target, value, data)

        final_balance = self.chain.balance_of(reward_token, set_token.address)
        set_token.calculate_and_edit_default_position(self.address, reward_token, initial_balance)

        event = RewardClaimed(
            set_token.address,
            checksum(reward_pool),
            adapter_address,
            final_balance - initial_balance,
            to_bytes_data(claim_data)
        )
        self.events.append(event)

        logger.info(f"Claimed {event.amount} of {reward_token} for {set_token.address} via {integration_name}")
        return event

    def _batch_add_claim(self, set_token: SetToken, reward_pools: List[str], integration_names: List[str]):
        self._validate_batch_arrays(reward_pools, integration_names)
        for reward_pool, integration_name in zip(reward_pools, integration_names):
            self._add_claim(set_token, reward_pool, integration_name)

    def _add_claim(self, set_token: SetToken, reward_pool: str, integration_name: str):
        adapter = self._get_and_validate_adapter(integration_name)
        address = set_token.address
        reward_pool = checksum(reward_pool)

        if self.claim_settings_status(set_token, reward_pool, adapter):
            raise ContractRevertError("Integration names must be unique")

        if not self.is_reward_pool(set_token, reward_pool):
            self._reward_pool_list.setdefault(address, []).append(reward_pool)
            self._reward_pool_status.setdefault(address, {})[reward_pool] = True

        self._claim_settings.setdefault(address, {}).setdefault(reward_pool, []).append(adapter)
        self._claim_settings_status.setdefault(address, {}).setdefault(reward_pool, {})[adapter] = True

    def _remove_claim(self, set_token: SetToken, reward_pool: str, integration_name: str):
        adapter = self._get_and_validate_adapter(integration_name)
        address = set_token.address
        reward_pool = checksum(reward_pool)

        if not self.claim_settings_status(set_token, reward_pool, adapter):
            raise ContractRevertError("Integration must be added")

        adapters = self._claim_settings[address][reward_pool]
        adapters.remove(adapter)
        self._claim_settings_status[address][reward_pool][adapter] = False

        if not adapters:
            self._reward_pool_list[address].remove(reward_pool)
            self._reward_pool_status[address][reward_pool] = False

    def anyone_claim(self, set_token: SetTokenLike) -> bool:
        return self._anyone_claim.get(self._address_of(set_token), False)

    def get_reward_pools(self, set_token: SetTokenLike) -> List[str]:
        return list(self._reward_pool_list.get(self._address_of(set_token), []))

    def reward_pool_list(self, set_token: SetTokenLike, index: int) -> str:
        pools = self._reward_pool_list.get(self._address_of(set_token), [])
        if not 0 <= index < len(pools):
            raise ContractRevertError("Index out of bounds")
        return pools[index]

    def is_reward_pool(self, set_token: SetTokenLike, reward_pool: str) -> bool:
        return self._reward_pool_status.get(self._address_of(set_token), {}).get(checksum(reward_pool), False)

    # Public mapping getter name
    reward_pool_status = is_reward_pool

    def get_reward_pool_claims(self, set_token: SetTokenLike, reward_pool: str) -> List[str]:
        return list(self._claim_settings.get(self._address_of(set_token), {}).get(checksum(reward_pool), []))

    def claim_settings_status(self, set_token: SetTokenLike, reward_pool: str, adapter: str) -> bool:
        return (
            self._claim_settings_status
            .get(self._address_of(set_token), {})
            .get(checksum(reward_pool), {})
            .get(checksum(adapter), False)
        )

    def is_reward_pool_claim(self, set_token: SetTokenLike, reward_pool: str, integration_name: str) -> bool:
        adapter = self._get_and_validate_adapter(integration_name)
        return self.claim_settings_status(set_token, reward_pool, adapter)

    def get_rewards(self, set_token: SetTokenLike, reward_pool: str, integration_name: str) -> int:
        """
        Pending rewards reported by the adapter for a registered claim

        Args:
            set_token: SetToken
            reward_pool: Reward pool
            integration_name: Claim adapter integration name

        Returns:
            Reward amount
        """
        set_token = self._resolve(set_token)
        adapter_address = self._get_and_validate_integration_adapter(set_token, reward_pool, integration_name)
        return self.chain.get(adapter_address).get_rewards_amount(set_token.address, checksum(reward_pool))

    @staticmethod
    def _address_of(set_token: SetTokenLike) -> str:
        if isinstance(set_token, SetToken):
            return set_token.address
        return checksum(set_token)

