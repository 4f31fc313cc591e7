"""
Blockchain Interaction Package
Handles call data encoding, compiled artifacts and contract deployment
"""

from .calldata import CallData, encode_function_call, encode_packed, function_selector
from .contract_manager import ContractFactory, ContractManager, link_bytecode
from .exceptions import (
    ArtifactNotFoundError,
    ContractRevertError,
    DeploymentError,
    LibraryLinkError,
    RPCError,
)

__all__ = [
    'CallData',
    'encode_function_call',
    'encode_packed',
    'function_selector',
    'ContractFactory',
    'ContractManager',
    'link_bytecode',
    'ArtifactNotFoundError',
    'ContractRevertError',
    'DeploymentError',
    'LibraryLinkError',
    'RPCError',
]
