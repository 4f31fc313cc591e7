"""
Unit Tests for Command Line Scripts
"""

import pytest
from unittest.mock import Mock, patch
from eth_account.signers.local import LocalAccount
from loguru import logger

from scripts import deploy_contract
from utils.log_config import configure_logging
from utils.testing_utils import get_random_account, get_random_address


class TestDeployContract:

    def test_parse_value(self):
        assert deploy_contract.parse_value("100") == 100
        assert deploy_contract.parse_value("0xabc") == "0xabc"

    def test_deployer_from_private_key(self, monkeypatch):
        account = get_random_account()
        monkeypatch.setenv('DEPLOYER_PRIVATE_KEY', account.key.hex())

        deployer = deploy_contract.get_deployer(Mock())

        assert isinstance(deployer, LocalAccount)
        assert deployer.address == account.address

    def test_deployer_falls_back_to_node_account(self, monkeypatch):
        monkeypatch.delenv('DEPLOYER_PRIVATE_KEY', raising=False)
        w3 = Mock()
        w3.eth.accounts = [get_random_address()]

        assert deploy_contract.get_deployer(w3) == w3.eth.accounts[0]

    def test_deployer_requires_account(self, monkeypatch):
        monkeypatch.delenv('DEPLOYER_PRIVATE_KEY', raising=False)
        w3 = Mock()
        w3.eth.accounts = []

        with pytest.raises(RuntimeError):
            deploy_contract.get_deployer(w3)

    def test_deploys_through_helper(self, monkeypatch):
        monkeypatch.delenv('DEPLOYER_PRIVATE_KEY', raising=False)
        controller = get_random_address()

        with patch.object(deploy_contract, 'RPCManager') as rpc_cls, \
                patch.object(deploy_contract, 'DeployHelper') as helper_cls:
            rpc = rpc_cls.return_value
            rpc.w3.eth.accounts = [get_random_address()]
            rpc.w3.from_wei.return_value = 10
            deploy_fn = helper_cls.return_value.modules.deploy_claim_module_v2

            address = deploy_contract.deploy_contract('modules', 'deploy_claim_module_v2', [controller])

        deploy_fn.assert_called_once_with(controller)
        assert address == deploy_fn.return_value.address

    def test_unhealthy_node_raises(self):
        with patch.object(deploy_contract, 'RPCManager') as rpc_cls:
            rpc_cls.return_value.is_healthy.return_value = False

            with pytest.raises(ConnectionError):
                deploy_contract.deploy_contract('modules', 'deploy_claim_module_v2', [])


def test_configure_logging_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "deploy.log"

    configure_logging("WARNING", str(log_file))
    logger.debug("debug line")
    logger.complete()

    assert log_file.exists()
    assert "debug line" in log_file.read_text()

    configure_logging("INFO")
