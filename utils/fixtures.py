"""
System Fixture
Wires an in-memory protocol deployment: controller, integration registry,
standard tokens and SetTokens
"""

from typing import List, Optional
from eth_account import Account
from loguru import logger

from modules.mocks import StandardTokenMock
from modules.protocol import Controller, IntegrationRegistry, LocalChain, SetToken
from .units import ether

MOCK_CLAIM = "MOCK_CLAIM"
MOCK2_CLAIM = "MOCK2_CLAIM"


class SystemFixture:
    """
    Local protocol deployment owned by a single address
    """

    def __init__(self, owner: Optional[str] = None):
        """
        Initialize fixture

        Args:
            owner: Protocol owner and default SetToken manager
        """
        self.owner = owner or Account.create().address
        self.chain = LocalChain()

        self.integration_registry: Optional[IntegrationRegistry] = None
        self.controller: Optional[Controller] = None
        self.weth: Optional[StandardTokenMock] = None
        self.usdc: Optional[StandardTokenMock] = None
        self.wbtc: Optional[StandardTokenMock] = None
        self.dai: Optional[StandardTokenMock] = None

    def initialize(self):
        """Deploy core contracts and tokens"""
        self.integration_registry = IntegrationRegistry(self.chain)
        self.controller = Controller(self.chain, self.integration_registry)

        self.weth = StandardTokenMock(self.chain, "Wrapped Ether", "WETH", 18)
        self.usdc = StandardTokenMock(self.chain, "USD Coin", "USDC", 6)
        self.wbtc = StandardTokenMock(self.chain, "Wrapped Bitcoin", "WBTC", 8)
        self.dai = StandardTokenMock(self.chain, "Dai Stablecoin", "DAI", 18)

        for token in (self.weth, self.usdc, self.wbtc, self.dai):
            token.mint(self.owner, ether(1000000))

        logger.debug(f"System fixture initialized, controller at {self.controller.address}")
        return self

    def create_non_controller_enabled_set_token(
        self,
        components: List[str],
        units: List[int],
        modules: List[str],
        manager: Optional[str] = None,
        name: str = "SetToken",
        symbol: str = "SET"
    ) -> SetToken:
        """SetToken the controller does not know about"""
        return SetToken(
            self.chain,
            self.controller,
            components,
            units,
            modules,
            manager or self.owner,
            name=name,
            symbol=symbol
        )

    def create_set_token(
        self,
        components: List[str],
        units: List[int],
        modules: List[str],
        manager: Optional[str] = None,
        name: str = "SetToken",
        symbol: str = "SET"
    ) -> SetToken:
        """
        Create a controller-enabled SetToken with modules pending

        Args:
            components: Component addresses
            units: Default position units, one per component
            modules: Modules added in PENDING state
            manager: SetToken manager (defaults to the owner)

        Returns:
            SetToken
        """
        set_token = self.create_non_controller_enabled_set_token(
            components, units, modules, manager, name, symbol
        )
        self.controller.add_set(set_token.address)
        return set_token
