"""
System Check Script
Verifies configuration, node connectivity and compiled artifacts before
running deployments or forked tests
"""

import os
import sys
import json
from web3 import Web3
from loguru import logger
from dotenv import load_dotenv

from blockchain import ArtifactNotFoundError, ContractManager
from utils.log_config import configure_logging
from utils.rpc_manager import DEFAULT_CONFIG_PATH, RPCManager

load_dotenv()

REQUIRED_ARTIFACTS = [
    'ClaimModuleV2',
    'MorphoClaimV2Adapter',
    'MorphoMigrationWrapV2Adapter',
    'UniswapV3ExchangeAdapterV3',
    'AerodromeSlipstreamExchangeAdapter',
]


def check_configuration_files():
    """Check the network config loads"""
    logger.info("Checking configuration files...")

    try:
        with open(DEFAULT_CONFIG_PATH, 'r') as f:
            config = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"  {DEFAULT_CONFIG_PATH}: {e}")
        return False

    for key in ('local_node', 'forks', 'retry'):
        if key not in config:
            logger.error(f"  Missing section '{key}' in {DEFAULT_CONFIG_PATH}")
            return False

    logger.success(f"  ✓ {DEFAULT_CONFIG_PATH}")
    return True


def check_environment_variables():
    """Fork URLs are optional, forked tests skip without them"""
    logger.info("Checking environment variables...")

    for var in ('MAINNET_RPC_URL', 'BASE_RPC_URL'):
        if os.getenv(var):
            logger.success(f"  ✓ {var}")
        else:
            logger.warning(f"  {var} not set - forked tests will be skipped")

    if not os.getenv('DEPLOYER_PRIVATE_KEY'):
        logger.info("  DEPLOYER_PRIVATE_KEY not set - node accounts will deploy")

    return True


def check_local_node():
    """Check the local test node answers"""
    logger.info("Checking local node...")

    rpc = RPCManager()

    if not rpc.is_healthy():
        logger.error(f"  ✗ No node at {rpc.http_url}")
        logger.info("  Run: npx hardhat node")
        return False

    logger.success(f"  ✓ Connected to {rpc.http_url} (Block: {rpc.w3.eth.block_number})")

    accounts = rpc.get_accounts()
    if accounts:
        balance = rpc.w3.from_wei(rpc.w3.eth.get_balance(accounts[0]), 'ether')
        logger.info(f"  Account 0: {accounts[0]} ({balance:.4f} ETH)")

    return True


def check_artifacts():
    """Check compiled artifacts are present"""
    logger.info("Checking compiled artifacts...")

    manager = ContractManager(Web3(), Web3.to_checksum_address('0x' + '00' * 20))

    missing = []
    for name in REQUIRED_ARTIFACTS:
        try:
            manager.load_artifact(name)
            logger.success(f"  ✓ {name}")
        except ArtifactNotFoundError:
            missing.append(name)

    if missing:
        logger.error(f"Missing artifacts under {manager.artifacts_dir}: {', '.join(missing)}")
        logger.info("  Run: npx hardhat compile")
        return False

    return True


def main():
    """Run all system checks"""
    configure_logging()

    logger.info("=" * 70)
    logger.info("System Check")
    logger.info("=" * 70)

    checks = [
        ("Configuration Files", check_configuration_files),
        ("Environment Variables", check_environment_variables),
        ("Local Node", check_local_node),
        ("Artifacts", check_artifacts),
    ]

    results = []

    for name, check_func in checks:
        logger.info("")
        try:
            results.append((name, check_func()))
        except Exception as e:
            logger.error(f"Error in {name}: {e}")
            results.append((name, False))

    logger.info("")
    logger.info("=" * 70)
    logger.info("Summary")
    logger.info("=" * 70)

    for name, result in results:
        status = "✓ PASS" if result else "✗ FAIL"
        logger.info(f"  {status}: {name}")

    passed = sum(1 for _, result in results if result)
    logger.info(f"Total: {passed}/{len(results)} checks passed")

    return 0 if passed == len(results) else 1


if __name__ == "__main__":
    sys.exit(main())
