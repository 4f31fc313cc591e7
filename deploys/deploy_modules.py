"""
Module Deployments
Constructors of every protocol module, arguments forwarded unchanged
"""

from web3.contract import Contract

from blockchain.contract_manager import ContractManager


class DeployModules:
    """
    Deploys protocol modules

    Modules that delegate to external libraries take the library name
    (plain or fully qualified) and its deployed address for linking.
    """

    def __init__(self, contract_manager: ContractManager):
        self.contract_manager = contract_manager

    def deploy_basic_issuance_module(self, controller: str) -> Contract:
        return self.contract_manager.deploy("BasicIssuanceModule", controller)

    def deploy_issuance_module(self, controller: str) -> Contract:
        return self.contract_manager.deploy("IssuanceModule", controller)

    def deploy_debt_issuance_module(self, controller: str) -> Contract:
        return self.contract_manager.deploy("DebtIssuanceModule", controller)

    def deploy_debt_issuance_module_v2(self, controller: str) -> Contract:
        return self.contract_manager.deploy("DebtIssuanceModuleV2", controller)

    def deploy_debt_issuance_module_v3(self, controller: str, token_transfer_buffer: int) -> Contract:
        return self.contract_manager.deploy("DebtIssuanceModuleV3", controller, token_transfer_buffer)

    def deploy_slippage_issuance_module(self, controller: str) -> Contract:
        return self.contract_manager.deploy("SlippageIssuanceModule", controller)

    def deploy_amm_module(self, controller: str) -> Contract:
        return self.contract_manager.deploy("AmmModule", controller)

    def get_basic_issuance_module(self, basic_issuance_module: str) -> Contract:
        return self.contract_manager.attach("BasicIssuanceModule", basic_issuance_module)

    def deploy_streaming_fee_module(self, controller: str) -> Contract:
        return self.contract_manager.deploy("StreamingFeeModule", controller)

    def get_streaming_fee_module(self, streaming_fee_module: str) -> Contract:
        return self.contract_manager.attach("StreamingFeeModule", streaming_fee_module)

    def deploy_airdrop_module(self, controller: str) -> Contract:
        return self.contract_manager.deploy("AirdropModule", controller)

    def deploy_trade_module(self, controller: str) -> Contract:
        return self.contract_manager.deploy("TradeModule", controller)

    def deploy_wrap_module(self, controller: str, weth: str) -> Contract:
        return self.contract_manager.deploy("WrapModule", controller, weth)

    def deploy_claim_module(self, controller: str) -> Contract:
        return self.contract_manager.deploy("ClaimModule", controller)

    def deploy_staking_module(self, controller: str) -> Contract:
        return self.contract_manager.deploy("StakingModule", controller)

    def deploy_rebasing_component_module(self, controller: str) -> Contract:
        return self.contract_manager.deploy("RebasingComponentModule", controller)

    def deploy_custom_oracle_nav_issuance_module(self, controller: str, weth: str) -> Contract:
        return self.contract_manager.deploy("CustomOracleNavIssuanceModule", controller, weth)

    def deploy_single_index_module(
        self,
        controller: str,
        weth: str,
        uniswap_router: str,
        sushiswap_router: str,
        balancer_proxy: str
    ) -> Contract:
        return self.contract_manager.deploy(
            "SingleIndexModule",
            controller,
            weth,
            uniswap_router,
            sushiswap_router,
            balancer_proxy
        )

    def deploy_general_index_module(self, controller: str, weth: str) -> Contract:
        return self.contract_manager.deploy("GeneralIndexModule", controller, weth)

    def deploy_governance_module(self, controller: str) -> Contract:
        return self.contract_manager.deploy("GovernanceModule", controller)

    def deploy_compound_leverage_module(
        self,
        controller: str,
        comp_token: str,
        comptroller: str,
        c_eth: str,
        weth: str,
        library_name: str,
        library_address: str
    ) -> Contract:
        return self.contract_manager.deploy(
            "CompoundLeverageModule",
            controller,
            comp_token,
            comptroller,
            c_eth,
            weth,
            libraries={library_name: library_address}
        )

    def deploy_aave_leverage_module(
        self,
        controller: str,
        lending_pool_addresses_provider: str,
        library_name: str,
        library_address: str
    ) -> Contract:
        return self.contract_manager.deploy(
            "AaveLeverageModule",
            controller,
            lending_pool_addresses_provider,
            libraries={library_name: library_address}
        )

    def deploy_aave_v3_leverage_module(
        self,
        controller: str,
        lending_pool_addresses_provider: str,
        library_name: str,
        library_address: str
    ) -> Contract:
        return self.contract_manager.deploy(
            "AaveV3LeverageModule",
            controller,
            lending_pool_addresses_provider,
            libraries={library_name: library_address}
        )

    def deploy_morpho_leverage_module(
        self,
        controller: str,
        morpho_address: str,
        library_name: str,
        library_address: str
    ) -> Contract:
        return self.contract_manager.deploy(
            "MorphoLeverageModule",
            controller,
            morpho_address,
            libraries={library_name: library_address}
        )

    def deploy_notional_trade_module(
        self,
        controller: str,
        wrapped_fcash_factory: str,
        weth: str,
        notional_v2: str,
        decoded_id_gas_limit: int
    ) -> Contract:
        return self.contract_manager.deploy(
            "NotionalTradeModule",
            controller,
            wrapped_fcash_factory,
            weth,
            notional_v2,
            decoded_id_gas_limit
        )

    def deploy_wrap_module_v2(self, controller: str, weth: str) -> Contract:
        return self.contract_manager.deploy("WrapModuleV2", controller, weth)

    def _deploy_perp_module(
        self,
        contract_name: str,
        controller: str,
        perp_vault: str,
        perp_quoter: str,
        perp_market_registry: str,
        max_perp_positions_per_set: int,
        position_v2_library_name: str,
        position_v2_library_address: str,
        perp_v2_library_name: str,
        perp_v2_library_address: str,
        perp_v2_positions_library_name: str,
        perp_v2_positions_library_address: str
    ) -> Contract:
        return self.contract_manager.deploy(
            contract_name,
            controller,
            perp_vault,
            perp_quoter,
            perp_market_registry,
            max_perp_positions_per_set,
            libraries={
                position_v2_library_name: position_v2_library_address,
                perp_v2_library_name: perp_v2_library_address,
                perp_v2_positions_library_name: perp_v2_positions_library_address,
            }
        )

    def deploy_perp_v2_leverage_module_v2(
        self,
        controller: str,
        perp_vault: str,
        perp_quoter: str,
        perp_market_registry: str,
        max_perp_positions_per_set: int,
        position_v2_library_name: str,
        position_v2_library_address: str,
        perp_v2_library_name: str,
        perp_v2_library_address: str,
        perp_v2_positions_library_name: str,
        perp_v2_positions_library_address: str
    ) -> Contract:
        return self._deploy_perp_module(
            "PerpV2LeverageModuleV2",
            controller,
            perp_vault,
            perp_quoter,
            perp_market_registry,
            max_perp_positions_per_set,
            position_v2_library_name,
            position_v2_library_address,
            perp_v2_library_name,
            perp_v2_library_address,
            perp_v2_positions_library_name,
            perp_v2_positions_library_address
        )

    def deploy_perp_v2_basis_trading_module(
        self,
        controller: str,
        perp_vault: str,
        perp_quoter: str,
        perp_market_registry: str,
        max_perp_positions_per_set: int,
        position_v2_library_name: str,
        position_v2_library_address: str,
        perp_v2_library_name: str,
        perp_v2_library_address: str,
        perp_v2_positions_library_name: str,
        perp_v2_positions_library_address: str
    ) -> Contract:
        return self._deploy_perp_module(
            "PerpV2BasisTradingModule",
            controller,
            perp_vault,
            perp_quoter,
            perp_market_registry,
            max_perp_positions_per_set,
            position_v2_library_name,
            position_v2_library_address,
            perp_v2_library_name,
            perp_v2_library_address,
            perp_v2_positions_library_name,
            perp_v2_positions_library_address
        )

    def deploy_auction_rebalance_module_v1(self, controller: str) -> Contract:
        return self.contract_manager.deploy("AuctionRebalanceModuleV1", controller)

    def deploy_claim_module_v2(self, controller: str) -> Contract:
        return self.contract_manager.deploy("ClaimModuleV2", controller)
