"""
Protocol Model
In-memory Controller, IntegrationRegistry and SetToken used to exercise
module logic without a node
"""

import copy
import functools
from contextlib import contextmanager
from enum import IntEnum
from typing import Any, Dict, Iterator, List, Optional, Union
from eth_abi import decode
from eth_account import Account
from hexbytes import HexBytes
from loguru import logger

from blockchain.calldata import checksum, function_selector
from blockchain.exceptions import ContractRevertError
from utils.constants import ADDRESS_ZERO, PRECISE_UNIT


class ModuleState(IntEnum):
    NONE = 0
    PENDING = 1
    INITIALIZED = 2


def precise_mul(a: int, b: int) -> int:
    return a * b // PRECISE_UNIT


def precise_div(a: int, b: int) -> int:
    return a * PRECISE_UNIT // b


class LocalChain:
    """
    Address space for in-memory contracts

    Calls are dispatched synchronously to the object registered at the
    target address. Calls to unknown addresses succeed without effect, as
    calls to an EOA do.

    snapshot() / revert() capture and restore the state of every registered
    contract, like evm_snapshot / evm_revert on a test node.
    """

    def __init__(self):
        self.contracts: Dict[str, Any] = {}
        self._snapshots: List[tuple] = []

    def snapshot(self) -> int:
        """
        Capture the state of every registered contract

        References between contracts (and to the chain) are kept as is,
        only the contracts' own state is copied.

        Returns:
            Snapshot id to pass to revert()
        """
        memo = {id(self): self}
        for contract in self.contracts.values():
            memo[id(contract)] = contract

        states = {
            address: copy.deepcopy(vars(contract), memo)
            for address, contract in self.contracts.items()
        }
        self._snapshots.append((dict(self.contracts), states))
        return len(self._snapshots) - 1

    def revert(self, snapshot_id: int):
        """
        Restore a snapshot, dropping it and every later one

        Args:
            snapshot_id: Id returned by snapshot()
        """
        if not 0 <= snapshot_id < len(self._snapshots):
            raise ValueError(f"Unknown snapshot: {snapshot_id}")

        contracts, states = self._snapshots[snapshot_id]
        del self._snapshots[snapshot_id:]

        self.contracts = dict(contracts)
        for address, state in states.items():
            contract = contracts[address]
            vars(contract).clear()
            vars(contract).update(state)

    def release(self, snapshot_id: int):
        """Discard a snapshot (and later ones) without restoring it"""
        del self._snapshots[snapshot_id:]

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """
        Run a block atomically: a ContractRevertError restores the state
        from before the block and is re-raised
        """
        snapshot_id = self.snapshot()
        try:
            yield
        except ContractRevertError:
            self.revert(snapshot_id)
            raise
        self.release(snapshot_id)

    @staticmethod
    def new_address() -> str:
        return Account.create().address

    def register(self, contract: Any, address: Optional[str] = None) -> str:
        """
        Register an object at an address

        Args:
            contract: Object to register
            address: Address to use (defaults to contract.address)

        Returns:
            Checksummed address
        """
        address = checksum(address or contract.address)
        self.contracts[address] = contract
        return address

    def get(self, address: str) -> Any:
        return self.contracts.get(checksum(address))

    def call(self, sender: str, target: str, value: int, data: Union[bytes, str]) -> bytes:
        contract = self.get(target)
        if contract is None or not hasattr(contract, 'handle_call'):
            return b''
        return contract.handle_call(checksum(sender), value, HexBytes(data))

    def balance_of(self, token: str, holder: str) -> int:
        contract = self.get(token)
        if contract is None:
            raise ContractRevertError("Call to non-contract")
        return contract.balance_of(holder)


def atomic(method):
    """Run a contract method inside a chain transaction"""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self.chain.transaction():
            return method(self, *args, **kwargs)

    return wrapper


class LocalContract:
    """
    Base for in-memory contracts that accept encoded calls

    Subclasses map canonical signatures of simple (non-tuple) functions
    to method names in CALLS. Methods receive the sender first.
    """

    CALLS: Dict[str, str] = {}

    def __init__(self, chain: LocalChain):
        self.chain = chain
        self.address = chain.new_address()
        chain.register(self)

    def handle_call(self, sender: str, value: int, data: HexBytes) -> Any:
        selector = bytes(data[:4])

        for signature, method in self.CALLS.items():
            if function_selector(signature) != selector:
                continue
            arg_types = signature[signature.index('(') + 1:-1]
            types = arg_types.split(',') if arg_types else []
            args = decode(types, bytes(data[4:]))
            return getattr(self, method)(sender, *args)

        raise ContractRevertError("Function selector was not recognized")


class IntegrationRegistry:
    """
    Registry of adapter addresses per module and integration name
    """

    def __init__(self, chain: LocalChain):
        self.chain = chain
        self.address = chain.new_address()
        chain.register(self)
        self.integrations: Dict[tuple, str] = {}

    def add_integration(self, module: str, name: str, adapter: str):
        key = (checksum(module), name)
        if key in self.integrations:
            raise ContractRevertError("Integration exists already.")
        if checksum(adapter) == ADDRESS_ZERO:
            raise ContractRevertError("Adapter address must exist.")

        self.integrations[key] = checksum(adapter)
        logger.debug(f"Integration {name} added for module {module}: {adapter}")

    def edit_integration(self, module: str, name: str, adapter: str):
        key = (checksum(module), name)
        if key not in self.integrations:
            raise ContractRevertError("Integration does not exist.")
        if checksum(adapter) == ADDRESS_ZERO:
            raise ContractRevertError("Adapter address must exist.")

        self.integrations[key] = checksum(adapter)

    def remove_integration(self, module: str, name: str):
        key = (checksum(module), name)
        if key not in self.integrations:
            raise ContractRevertError("Integration does not exist.")

        del self.integrations[key]

    def get_integration_adapter(self, module: str, name: str) -> str:
        return self.integrations.get((checksum(module), name), ADDRESS_ZERO)

    def is_valid_integration(self, module: str, name: str) -> bool:
        return self.get_integration_adapter(module, name) != ADDRESS_ZERO


class Controller:
    """
    Tracks enabled SetTokens, modules and protocol resources
    """

    INTEGRATION_REGISTRY_RESOURCE_ID = 0

    def __init__(self, chain: LocalChain, integration_registry: IntegrationRegistry):
        self.chain = chain
        self.address = chain.new_address()
        chain.register(self)

        self.sets: List[str] = []
        self.modules: List[str] = []
        self.resources: Dict[int, str] = {
            self.INTEGRATION_REGISTRY_RESOURCE_ID: integration_registry.address
        }

    def add_set(self, set_token: str):
        if self.is_set(set_token):
            raise ContractRevertError("Set already exists")
        self.sets.append(checksum(set_token))

    def remove_set(self, set_token: str):
        if not self.is_set(set_token):
            raise ContractRevertError("Set does not exist")
        self.sets.remove(checksum(set_token))

    def add_module(self, module: str):
        if self.is_module(module):
            raise ContractRevertError("Module already exists")
        self.modules.append(checksum(module))

    def is_set(self, set_token: str) -> bool:
        return checksum(set_token) in self.sets

    def is_module(self, module: str) -> bool:
        return checksum(module) in self.modules

    def get_integration_registry(self) -> IntegrationRegistry:
        return self.chain.get(self.resources[self.INTEGRATION_REGISTRY_RESOURCE_ID])


class SetToken:
    """
    Basket token holding components at default position units

    Modules are added by the manager (PENDING), initialize themselves
    (INITIALIZED) and are notified on removal.
    """

    def __init__(
        self,
        chain: LocalChain,
        controller: Controller,
        components: List[str],
        units: List[int],
        modules: List[str],
        manager: str,
        total_supply: int = PRECISE_UNIT,
        name: str = "SetToken",
        symbol: str = "SET"
    ):
        if len(components) != len(units):
            raise ContractRevertError("Component and unit lengths must be the same")

        self.chain = chain
        self.address = chain.new_address()
        chain.register(self)

        self.controller = controller
        self.manager = checksum(manager)
        self.name = name
        self.symbol = symbol
        self.total_supply = total_supply

        self.components: List[str] = [checksum(c) for c in components]
        self.position_units: Dict[str, int] = dict(zip(self.components, units))
        self.module_states: Dict[str, ModuleState] = {}
        for module in modules:
            self.module_states[checksum(module)] = ModuleState.PENDING

    def _only_manager(self, caller: str):
        if checksum(caller) != self.manager:
            raise ContractRevertError("Only manager can call")

    def _only_module(self, caller: str):
        if self.module_states.get(checksum(caller)) != ModuleState.INITIALIZED:
            raise ContractRevertError("Only the module can call")

    def get_module_state(self, module: str) -> ModuleState:
        return self.module_states.get(checksum(module), ModuleState.NONE)

    def is_initialized_module(self, module: str) -> bool:
        return self.get_module_state(module) == ModuleState.INITIALIZED

    def is_pending_module(self, module: str) -> bool:
        return self.get_module_state(module) == ModuleState.PENDING

    def get_modules(self) -> List[str]:
        return [m for m, state in self.module_states.items() if state == ModuleState.INITIALIZED]

    def add_module(self, caller: str, module: str):
        self._only_manager(caller)
        if self.get_module_state(module) != ModuleState.NONE:
            raise ContractRevertError("Module must not be added")
        if not self.controller.is_module(module):
            raise ContractRevertError("Must be enabled on Controller")

        self.module_states[checksum(module)] = ModuleState.PENDING

    def initialize_module(self, caller: str):
        """Called by a pending module to finish its initialization"""
        if not self.is_pending_module(caller):
            raise ContractRevertError("Module must be pending")
        self.module_states[checksum(caller)] = ModuleState.INITIALIZED

    def remove_module(self, caller: str, module: str):
        self._only_manager(caller)
        if not self.is_initialized_module(module):
            raise ContractRevertError("Module must be added")

        self.chain.get(module).remove_module(self)
        self.module_states[checksum(module)] = ModuleState.NONE

    def set_manager(self, caller: str, manager: str):
        self._only_manager(caller)
        self.manager = checksum(manager)

    def invoke(self, caller: str, target: str, value: int, data: Union[bytes, str]) -> bytes:
        """Perform an arbitrary call on behalf of the SetToken"""
        self._only_module(caller)
        return self.chain.call(self.address, target, value, data)

    def get_components(self) -> List[str]:
        return list(self.components)

    def is_component(self, component: str) -> bool:
        return checksum(component) in self.components

    def get_default_position_real_unit(self, component: str) -> int:
        return self.position_units.get(checksum(component), 0)

    def add_component(self, caller: str, component: str):
        self._only_module(caller)
        if self.is_component(component):
            raise ContractRevertError("Must not be component")
        self.components.append(checksum(component))

    def remove_component(self, caller: str, component: str):
        self._only_module(caller)
        self.components.remove(checksum(component))
        self.position_units.pop(checksum(component), None)

    def edit_default_position_unit(self, caller: str, component: str, unit: int):
        self._only_module(caller)
        self.position_units[checksum(component)] = unit

    def calculate_and_edit_default_position(
        self,
        caller: str,
        component: str,
        previous_balance: int
    ) -> int:
        """
        Re-derive a component's default unit after its balance changed

        Args:
            caller: Module performing the edit
            component: Component whose balance changed
            previous_balance: SetToken balance before the change

        Returns:
            New default position unit
        """
        current_balance = self.chain.balance_of(component, self.address)
        previous_unit = self.get_default_position_real_unit(component)

        if current_balance > 0:
            # Balance above the tracked position is treated as airdropped and ignored
            airdropped = previous_balance - precise_mul(previous_unit, self.total_supply)
            if airdropped < 0 or current_balance < airdropped:
                raise ContractRevertError("SafeMath: subtraction overflow")
            new_unit = precise_div(current_balance - airdropped, self.total_supply)
        else:
            new_unit = 0

        if new_unit > 0 and not self.is_component(component):
            self.add_component(caller, component)
        elif new_unit == 0 and self.is_component(component):
            self.remove_component(caller, component)

        if new_unit > 0:
            self.edit_default_position_unit(caller, component, new_unit)

        return new_unit
