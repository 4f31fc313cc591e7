"""
Library Deployments
Linked libraries used by leverage and perpetual modules
"""

from web3.contract import Contract

from blockchain.contract_manager import ContractManager


class DeployLibraries:
    """Deploys protocol libraries"""

    def __init__(self, contract_manager: ContractManager):
        self.contract_manager = contract_manager

    def deploy_compound(self) -> Contract:
        return self.contract_manager.deploy("Compound")

    def deploy_aave_v2(self) -> Contract:
        return self.contract_manager.deploy("AaveV2")

    def deploy_aave_v3(self) -> Contract:
        return self.contract_manager.deploy("AaveV3")

    def deploy_morpho(self) -> Contract:
        return self.contract_manager.deploy("Morpho")

    def deploy_perp_v2(self) -> Contract:
        return self.contract_manager.deploy("PerpV2")

    def deploy_position_v2(self) -> Contract:
        return self.contract_manager.deploy("PositionV2")

    def deploy_perp_v2_library_v2(self) -> Contract:
        return self.contract_manager.deploy("PerpV2LibraryV2")

    def deploy_perp_v2_positions(self) -> Contract:
        return self.contract_manager.deploy("PerpV2Positions")
