"""
Protocol Modules Package
In-memory protocol model and the claim-settings registry module
"""

from .claim_module_v2 import ClaimModuleV2, RewardClaimed
from .mocks import ClaimAdapterMockV2, StandardTokenMock
from .protocol import Controller, IntegrationRegistry, LocalChain, ModuleState, SetToken

__all__ = [
    'ClaimModuleV2',
    'RewardClaimed',
    'ClaimAdapterMockV2',
    'StandardTokenMock',
    'Controller',
    'IntegrationRegistry',
    'LocalChain',
    'ModuleState',
    'SetToken',
]
