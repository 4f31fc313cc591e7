"""
Integration Adapters Package
Off-chain mirrors of the claim, wrap and exchange adapter contracts
"""

from .aerodrome_slipstream_exchange_adapter import AerodromeSlipstreamExchangeAdapter
from .morpho_claim_v2_adapter import MorphoClaimV2Adapter
from .morpho_migration_wrap_v2_adapter import MorphoMigrationWrapV2Adapter
from .uniswap_v3_exchange_adapter_v3 import UniswapV3ExchangeAdapterV3

__all__ = [
    'AerodromeSlipstreamExchangeAdapter',
    'MorphoClaimV2Adapter',
    'MorphoMigrationWrapV2Adapter',
    'UniswapV3ExchangeAdapterV3',
]
