"""
Mock Deployments
"""

from web3.contract import Contract

from blockchain.contract_manager import ContractManager


class DeployMocks:
    """Deploys test mocks"""

    def __init__(self, contract_manager: ContractManager):
        self.contract_manager = contract_manager

    def deploy_claim_adapter_mock_v2(self) -> Contract:
        return self.contract_manager.deploy("ClaimAdapterMockV2")

    def deploy_token_mock(
        self,
        initial_account: str,
        initial_balance: int,
        decimals: int = 18,
        name: str = "Token",
        symbol: str = "TKN"
    ) -> Contract:
        return self.contract_manager.deploy(
            "StandardTokenMock",
            initial_account,
            initial_balance,
            name,
            symbol,
            decimals
        )
