"""
RPC Manager
Drives the local Hardhat / Anvil test node: forking, snapshots,
account impersonation and block time control
"""

import os
import json
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional
from web3 import Web3
from loguru import logger
from dotenv import load_dotenv

from blockchain.exceptions import RPCError
from .units import ether

load_dotenv()

DEFAULT_CONFIG_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
    'config',
    'network_config.json'
)


class RPCManager:
    """
    Local test node manager

    Node specific methods are namespaced ("hardhat_reset" or "anvil_reset")
    according to `rpc_namespace` in the network config.
    """

    def __init__(self, config_path: Optional[str] = None, w3: Optional[Web3] = None):
        """
        Initialize RPC Manager

        Args:
            config_path: Network config JSON (defaults to config/network_config.json)
            w3: Existing Web3 instance to drive instead of connecting
        """
        with open(config_path or DEFAULT_CONFIG_PATH, 'r') as f:
            self.config = json.load(f)

        local_node = self.config['local_node']
        self.http_url = os.getenv(local_node['http_url_env']) or local_node['default_http_url']
        self.namespace = os.getenv('RPC_NAMESPACE', local_node['rpc_namespace'])

        self.max_retries = self.config['retry']['max_retries']
        self.backoff_seconds = self.config['retry']['backoff_seconds']

        self.w3 = w3 or Web3(Web3.HTTPProvider(
            self.http_url,
            request_kwargs={'timeout': local_node['request_timeout']}
        ))

        self.usage_stats = {'requests': 0, 'failures': 0}

        logger.info(f"RPC Manager initialized for {self.http_url} ({self.namespace} namespace)")

    def _node_method(self, name: str) -> str:
        return f"{self.namespace}_{name}"

    def make_call(self, method: str, params: List) -> Any:
        """
        Make a raw RPC call, retrying transport failures

        Args:
            method: RPC method
            params: Method parameters

        Returns:
            The `result` field of the response
        """
        for attempt in range(self.max_retries):
            try:
                response = self.w3.provider.make_request(method, params)
                self.usage_stats['requests'] += 1
                break
            except OSError as e:
                self.usage_stats['failures'] += 1
                if attempt < self.max_retries - 1:
                    logger.debug(f"RPC error on {method}, retrying: {e}")
                    time.sleep(self.backoff_seconds)
                else:
                    logger.error(f"RPC {method} failed after {self.max_retries} attempts: {e}")
                    raise

        if 'error' in response:
            raise RPCError(method, response['error'])

        return response.get('result')

    def is_healthy(self) -> bool:
        try:
            return self.w3.is_connected()
        except Exception:
            return False

    def get_accounts(self) -> List[str]:
        return list(self.w3.eth.accounts)

    def get_fork_config(self, network: str, block_number: Optional[int] = None) -> Dict:
        """
        Build the `forking` parameter for a reset

        Args:
            network: Network key in the config ("mainnet", "base")
            block_number: Block to fork at (defaults to the configured block, or latest)

        Returns:
            Forking config dict
        """
        if network not in self.config['forks']:
            raise ValueError(f"Unknown fork network: {network}")

        fork = self.config['forks'][network]
        url = os.getenv(fork['rpc_url_env'])
        if not url:
            raise ValueError(f"{fork['rpc_url_env']} must be set to fork {fork['name']}")

        forking = {'jsonRpcUrl': url}
        if block_number is None:
            block_number = fork.get('default_block_number')
        if block_number is not None:
            forking['blockNumber'] = block_number

        return forking

    def reset_fork(self, network: str, block_number: Optional[int] = None):
        """Reset the node to a fork of `network`"""
        forking = self.get_fork_config(network, block_number)
        self.make_call(self._node_method('reset'), [{'forking': forking}])
        logger.info(f"Node forked from {network} at block {forking.get('blockNumber', 'latest')}")

    def reset(self):
        """Reset the node to a fresh, non-forked chain"""
        self.make_call(self._node_method('reset'), [])
        logger.info("Node reset")

    def snapshot(self) -> str:
        return self.make_call('evm_snapshot', [])

    def revert(self, snapshot_id: str) -> bool:
        reverted = self.make_call('evm_revert', [snapshot_id])
        if not reverted:
            logger.warning(f"Snapshot {snapshot_id} could not be reverted")
        return reverted

    @contextmanager
    def snapshot_context(self) -> Iterator[str]:
        """Snapshot before the block, restore after it"""
        snapshot_id = self.snapshot()
        try:
            yield snapshot_id
        finally:
            self.revert(snapshot_id)

    def set_balance(self, address: str, balance: int):
        self.make_call(self._node_method('setBalance'), [Web3.to_checksum_address(address), hex(balance)])

    def impersonate_account(self, address: str, balance: Optional[int] = None) -> str:
        """
        Unlock an account on the node and fund it for gas

        Args:
            address: Account to impersonate
            balance: ETH balance to set (defaults to 10 ether)

        Returns:
            Checksummed address usable as `from`
        """
        address = Web3.to_checksum_address(address)
        self.make_call(self._node_method('impersonateAccount'), [address])
        self.set_balance(address, balance if balance is not None else ether(10))

        logger.debug(f"Impersonating {address}")
        return address

    def stop_impersonating_account(self, address: str):
        self.make_call(self._node_method('stopImpersonatingAccount'), [Web3.to_checksum_address(address)])

    def get_last_block_timestamp(self) -> int:
        return int(self.w3.eth.get_block('latest')['timestamp'])

    def set_next_block_timestamp(self, timestamp: int):
        self.make_call('evm_setNextBlockTimestamp', [timestamp])

    def increase_time(self, seconds: int):
        self.make_call('evm_increaseTime', [seconds])

    def mine(self, blocks: int = 1):
        self.make_call(self._node_method('mine'), [hex(blocks)])
