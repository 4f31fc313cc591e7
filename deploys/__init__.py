"""
Deployment Helpers Package
Typed wrappers over compiled contract factories
"""

from typing import Optional
from web3 import Web3

from blockchain.contract_manager import ContractManager, Deployer
from .deploy_adapters import DeployAdapters
from .deploy_libraries import DeployLibraries
from .deploy_mocks import DeployMocks
from .deploy_modules import DeployModules


class DeployHelper:
    """
    Groups every deployment helper around one deployer

    Example:
        deployer = DeployHelper(w3, owner)
        claim_module = deployer.modules.deploy_claim_module_v2(controller)
    """

    def __init__(self, w3: Web3, deployer: Deployer, artifacts_dir: Optional[str] = None):
        self.contract_manager = ContractManager(w3, deployer, artifacts_dir)

        self.libraries = DeployLibraries(self.contract_manager)
        self.modules = DeployModules(self.contract_manager)
        self.adapters = DeployAdapters(self.contract_manager)
        self.mocks = DeployMocks(self.contract_manager)


__all__ = ['DeployHelper', 'DeployAdapters', 'DeployLibraries', 'DeployMocks', 'DeployModules']
