"""
Contract Manager
Loads compiled Hardhat artifacts and deploys or attaches contract instances
"""

import os
import json
from typing import Dict, Optional, Union
from web3 import Web3
from web3.contract import Contract
from eth_account.signers.local import LocalAccount
from loguru import logger
from dotenv import load_dotenv

from .exceptions import ArtifactNotFoundError, DeploymentError, LibraryLinkError

load_dotenv()

Deployer = Union[str, LocalAccount]


def link_bytecode(
    bytecode: str,
    link_references: Dict,
    libraries: Dict[str, str]
) -> str:
    """
    Splice library addresses into unlinked bytecode

    Args:
        bytecode: Hex bytecode (with or without 0x prefix)
        link_references: Hardhat `linkReferences` ({source: {name: [{start, length}]}})
        libraries: Library addresses keyed by plain name ("Compound") or
            fully qualified name ("contracts/lib/Compound.sol:Compound")

    Returns:
        Linked bytecode with 0x prefix
    """
    code = bytecode[2:] if bytecode.startswith('0x') else bytecode

    for source, names in (link_references or {}).items():
        for name, offsets in names.items():
            address = libraries.get(f"{source}:{name}", libraries.get(name))
            if address is None:
                raise LibraryLinkError(f"Missing address for library {source}:{name}")

            address_hex = Web3.to_checksum_address(address)[2:].lower()
            for offset in offsets:
                start = offset['start'] * 2
                end = start + offset['length'] * 2
                code = code[:start] + address_hex + code[end:]

    if '__$' in code:
        raise LibraryLinkError("Bytecode has unresolved library placeholders")

    return '0x' + code


class ContractFactory:
    """
    Deploys and attaches instances of a single compiled contract
    """

    def __init__(
        self,
        w3: Web3,
        artifact: Dict,
        deployer: Deployer,
        libraries: Optional[Dict[str, str]] = None
    ):
        self.w3 = w3
        self.contract_name = artifact.get('contractName', 'Unknown')
        self.abi = artifact['abi']
        self.deployer = deployer
        self.libraries = libraries or {}

        self._bytecode = artifact['bytecode']
        self._link_references = artifact.get('linkReferences') or {}

    @property
    def bytecode(self) -> str:
        """Creation bytecode with libraries linked"""
        if not self._link_references:
            return self._bytecode
        return link_bytecode(self._bytecode, self._link_references, self.libraries)

    @property
    def deployer_address(self) -> str:
        if isinstance(self.deployer, LocalAccount):
            return self.deployer.address
        return Web3.to_checksum_address(self.deployer)

    def deploy(self, *args) -> Contract:
        """
        Deploy the contract, forwarding constructor arguments unchanged

        Returns:
            Contract instance bound to the deployed address
        """
        constructor = self.w3.eth.contract(abi=self.abi, bytecode=self.bytecode).constructor(*args)

        if isinstance(self.deployer, LocalAccount):
            tx = constructor.build_transaction({
                'from': self.deployer.address,
                'nonce': self.w3.eth.get_transaction_count(self.deployer.address)
            })
            signed_tx = self.deployer.sign_transaction(tx)
            tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
        else:
            tx_hash = constructor.transact({'from': self.deployer_address})

        receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash)

        if receipt['status'] != 1:
            logger.error(f"{self.contract_name} deployment failed: {tx_hash.hex()}")
            raise DeploymentError(f"{self.contract_name} deployment reverted ({tx_hash.hex()})")

        address = receipt['contractAddress']
        logger.debug(f"{self.contract_name} deployed at {address} (gas used: {receipt['gasUsed']})")

        return self.attach(address)

    def attach(self, address: str) -> Contract:
        """Bind the contract ABI to an existing address"""
        return self.w3.eth.contract(
            address=Web3.to_checksum_address(address),
            abi=self.abi
        )


class ContractManager:
    """
    Manages compiled artifacts and contract factories for one deployer
    """

    def __init__(self, w3: Web3, deployer: Deployer, artifacts_dir: Optional[str] = None):
        """
        Initialize Contract Manager

        Args:
            w3: Web3 instance
            deployer: Unlocked node account address or local signing account
            artifacts_dir: Hardhat artifacts root (defaults to $ARTIFACTS_DIR or ./artifacts)
        """
        self.w3 = w3
        self.deployer = deployer
        self.artifacts_dir = artifacts_dir or os.getenv('ARTIFACTS_DIR', 'artifacts')

        self._artifacts: Dict[str, Dict] = {}
        self._index: Optional[Dict[str, str]] = None

    def _build_index(self) -> Dict[str, str]:
        """Map contract names to artifact paths"""
        index = {}

        for root, _, files in os.walk(self.artifacts_dir):
            # build-info holds compiler input/output, not artifacts
            if 'build-info' in root:
                continue
            for filename in files:
                if not filename.endswith('.json') or filename.endswith('.dbg.json'):
                    continue
                name = filename[:-len('.json')]
                if name in index:
                    logger.warning(f"Duplicate artifact for {name}, keeping {index[name]}")
                    continue
                index[name] = os.path.join(root, filename)

        logger.debug(f"Indexed {len(index)} artifacts under {self.artifacts_dir}")
        return index

    def load_artifact(self, contract_name: str) -> Dict:
        """
        Load a compiled artifact by contract name

        Args:
            contract_name: Contract name, e.g. "ClaimModuleV2"

        Returns:
            Artifact dict with abi, bytecode and linkReferences
        """
        if contract_name in self._artifacts:
            return self._artifacts[contract_name]

        if self._index is None:
            self._index = self._build_index()

        path = self._index.get(contract_name)
        if path is None:
            raise ArtifactNotFoundError(
                f"Artifact for {contract_name} not found under {self.artifacts_dir}"
            )

        with open(path, 'r') as f:
            artifact = json.load(f)

        self._artifacts[contract_name] = artifact
        return artifact

    def get_factory(
        self,
        contract_name: str,
        libraries: Optional[Dict[str, str]] = None
    ) -> ContractFactory:
        """
        Get a factory for a compiled contract

        Args:
            contract_name: Contract name
            libraries: Library addresses to link

        Returns:
            ContractFactory
        """
        return ContractFactory(self.w3, self.load_artifact(contract_name), self.deployer, libraries)

    def deploy(self, contract_name: str, *args, libraries: Optional[Dict[str, str]] = None) -> Contract:
        try:
            contract = self.get_factory(contract_name, libraries).deploy(*args)
        except Exception as e:
            logger.error(f"Error deploying {contract_name}: {e}")
            raise

        logger.info(f"{contract_name} deployed at {contract.address}")
        return contract

    def attach(self, contract_name: str, address: str) -> Contract:
        return self.get_factory(contract_name).attach(address)
