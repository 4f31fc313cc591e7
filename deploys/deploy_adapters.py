"""
Adapter Deployments
Claim, wrap and exchange adapter contracts
"""

from web3.contract import Contract

from blockchain.contract_manager import ContractManager


class DeployAdapters:
    """Deploys integration adapters"""

    def __init__(self, contract_manager: ContractManager):
        self.contract_manager = contract_manager

    def deploy_uniswap_v3_exchange_adapter_v3(self, swap_router: str) -> Contract:
        return self.contract_manager.deploy("UniswapV3ExchangeAdapterV3", swap_router)

    def deploy_aerodrome_slipstream_exchange_adapter(self, swap_router: str) -> Contract:
        return self.contract_manager.deploy("AerodromeSlipstreamExchangeAdapter", swap_router)

    def deploy_morpho_claim_v2_adapter(self, distributor: str) -> Contract:
        return self.contract_manager.deploy("MorphoClaimV2Adapter", distributor)

    def deploy_morpho_migration_wrap_v2_adapter(
        self,
        morpho_wrapper: str,
        legacy_morpho_token: str,
        new_morpho_token: str
    ) -> Contract:
        return self.contract_manager.deploy(
            "MorphoMigrationWrapV2Adapter",
            morpho_wrapper,
            legacy_morpho_token,
            new_morpho_token
        )
