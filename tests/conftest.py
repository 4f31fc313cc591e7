"""
Shared Test Fixtures
"""

import os
import pytest
from unittest.mock import Mock
from web3 import Web3

from modules import ClaimAdapterMockV2, ClaimModuleV2
from utils.fixtures import MOCK2_CLAIM, MOCK_CLAIM, SystemFixture
from utils.rpc_manager import RPCManager
from utils.testing_utils import get_random_address


@pytest.fixture
def owner():
    """Protocol owner and SetToken manager"""
    return get_random_address()


@pytest.fixture
def setup(owner):
    """Initialized in-memory protocol"""
    return SystemFixture(owner).initialize()


@pytest.fixture
def claim_module(setup):
    """ClaimModuleV2 enabled on the controller"""
    module = ClaimModuleV2(setup.chain, setup.controller)
    setup.controller.add_module(module.address)
    return module


@pytest.fixture
def claim_adapter(setup, claim_module):
    """Mock claim adapter registered as MOCK_CLAIM"""
    adapter = ClaimAdapterMockV2(setup.chain)
    setup.integration_registry.add_integration(claim_module.address, MOCK_CLAIM, adapter.address)
    return adapter


@pytest.fixture
def claim_adapter2(setup, claim_module):
    """Mock claim adapter registered as MOCK2_CLAIM"""
    adapter = ClaimAdapterMockV2(setup.chain)
    setup.integration_registry.add_integration(claim_module.address, MOCK2_CLAIM, adapter.address)
    return adapter


@pytest.fixture
def mock_w3():
    """Mock Web3 instance"""
    return Mock(spec=Web3)


@pytest.fixture(scope="module")
def node_w3():
    """Web3 connected to the local test node, skipped when none is running"""
    url = os.getenv('LOCAL_RPC_URL', 'http://127.0.0.1:8545')
    w3 = Web3(Web3.HTTPProvider(url, request_kwargs={"timeout": 120}))

    try:
        connected = w3.is_connected()
    except Exception:
        connected = False

    if not connected:
        pytest.skip(f"No test node at {url}")

    return w3


@pytest.fixture(scope="module")
def rpc(node_w3):
    """RPC manager driving the local test node"""
    return RPCManager(w3=node_w3)


@pytest.fixture
def snapshot(rpc):
    """Restore node state after each test"""
    with rpc.snapshot_context() as snapshot_id:
        yield snapshot_id
