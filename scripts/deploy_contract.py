"""
Contract Deployment Script
Deploys one protocol contract through the deployment helpers

Usage:
    python scripts/deploy_contract.py modules deploy_claim_module_v2 <controller>
    python scripts/deploy_contract.py modules deploy_compound_leverage_module \
        <controller> <comp> <comptroller> <cEth> <weth> Compound <library>
"""

import os
import sys
import argparse
from web3 import Web3
from eth_account import Account
from loguru import logger
from dotenv import load_dotenv

from deploys import DeployHelper
from utils.log_config import configure_logging
from utils.rpc_manager import RPCManager

load_dotenv()

GROUPS = ('libraries', 'modules', 'adapters', 'mocks')


def parse_value(value: str):
    """Constructor arguments are passed through as int when numeric"""
    if value.isdigit():
        return int(value)
    return value


def get_deployer(w3: Web3):
    """
    Signing account from DEPLOYER_PRIVATE_KEY, else the node's first account
    """
    private_key = os.getenv('DEPLOYER_PRIVATE_KEY')
    if private_key:
        return Account.from_key(private_key)

    accounts = w3.eth.accounts
    if not accounts:
        raise RuntimeError("DEPLOYER_PRIVATE_KEY not set and node has no unlocked accounts")
    return accounts[0]


def deploy_contract(group: str, method: str, args: list, artifacts_dir: str = None) -> str:
    """
    Deploy a contract by helper method name

    Args:
        group: Helper group (libraries, modules, adapters, mocks)
        method: Helper method, e.g. deploy_claim_module_v2
        args: Constructor arguments, forwarded unchanged
        artifacts_dir: Hardhat artifacts root

    Returns:
        Deployed contract address
    """
    rpc = RPCManager()

    if not rpc.is_healthy():
        raise ConnectionError(f"Failed to connect to node at {rpc.http_url}")

    deployer = get_deployer(rpc.w3)
    deployer_address = deployer if isinstance(deployer, str) else deployer.address
    logger.info(f"Deploying from: {deployer_address}")

    balance = rpc.w3.from_wei(rpc.w3.eth.get_balance(deployer_address), 'ether')
    logger.info(f"Account balance: {balance} ETH")

    helper = DeployHelper(rpc.w3, deployer, artifacts_dir)
    deploy_fn = getattr(getattr(helper, group), method, None)
    if deploy_fn is None:
        raise ValueError(f"Unknown deployment: {group}.{method}")

    contract = deploy_fn(*args)

    logger.success(f"{group}.{method} deployed at {contract.address}")
    return contract.address


def main():
    parser = argparse.ArgumentParser(description="Deploy a protocol contract")
    parser.add_argument('group', choices=GROUPS)
    parser.add_argument('method')
    parser.add_argument('args', nargs='*')
    parser.add_argument('--artifacts-dir', default=None)
    options = parser.parse_args()

    configure_logging()

    try:
        deploy_contract(
            options.group,
            options.method,
            [parse_value(a) for a in options.args],
            options.artifacts_dir
        )
    except Exception as e:
        logger.error(f"Deployment failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
