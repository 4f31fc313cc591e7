"""
Unit Tests for AerodromeSlipstreamExchangeAdapter
"""

import pytest
from unittest.mock import Mock
from eth_abi import encode
from eth_abi.packed import encode_packed
from web3 import Web3

from adapters import AerodromeSlipstreamExchangeAdapter
from utils.testing_utils import get_random_address, reverts
from utils.units import ether


SWAP_ROUTER = Web3.to_checksum_address("0xBE6D8f0d05cC4be24d5167a3eF062215bE6D18a5")
WETH = Web3.to_checksum_address("0x4200000000000000000000000000000000000006")
USDC = Web3.to_checksum_address("0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913")
CBBTC = Web3.to_checksum_address("0xcbB7C0000aB88B473b1f5aFd9ef808440eed33Bf")

EXACT_INPUT = "exactInput((bytes,address,uint256,uint256,uint256))"


@pytest.fixture
def adapter():
    return AerodromeSlipstreamExchangeAdapter(SWAP_ROUTER)


@pytest.fixture
def set_token():
    return get_random_address()


def test_spender(adapter):
    assert adapter.swap_router == SWAP_ROUTER
    assert adapter.get_spender() == SWAP_ROUTER


class TestGetTradeCalldata:

    @pytest.fixture
    def path(self):
        return encode_packed(["address", "int24", "address"], [WETH, 100, USDC])

    def test_exact_input(self, adapter, set_token, path):
        target, value, call_data = adapter.get_trade_calldata(
            WETH, USDC, set_token, ether(1), 1000, path, deadline=1700000000
        )

        expected = bytes(Web3.keccak(text=EXACT_INPUT)[:4]) + encode(
            ["(bytes,address,uint256,uint256,uint256)"],
            [(path, set_token, 1700000000, ether(1), 1000)]
        )
        assert target == SWAP_ROUTER
        assert value == 0
        assert bytes(call_data) == expected

    def test_deadline_defaults_to_latest_block(self, set_token, path):
        w3 = Mock()
        w3.eth.get_block.return_value = {'timestamp': 1234}
        adapter = AerodromeSlipstreamExchangeAdapter(SWAP_ROUTER, w3)

        _, _, call_data = adapter.get_trade_calldata(WETH, USDC, set_token, 1, 1, path)

        w3.eth.get_block.assert_called_once_with('latest')
        assert bytes(call_data) == bytes(Web3.keccak(text=EXACT_INPUT)[:4]) + encode(
            ["(bytes,address,uint256,uint256,uint256)"],
            [(path, set_token, 1234, 1, 1)]
        )

    def test_deadline_required_without_web3(self, adapter, set_token, path):
        with pytest.raises(ValueError):
            adapter.get_trade_calldata(WETH, USDC, set_token, 1, 1, path)

    def test_negative_tick_spacing_path(self, adapter, set_token):
        path = encode_packed(["address", "int24", "address", "int24", "address"], [WETH, -1, USDC, 200, CBBTC])

        target, _, _ = adapter.get_trade_calldata(WETH, CBBTC, set_token, 1, 1, path, deadline=1)

        assert target == SWAP_ROUTER

    def test_reverts_on_source_mismatch(self, adapter, set_token, path):
        with reverts("AerodromeSlipstreamExchangeAdapter: source token path mismatch"):
            adapter.get_trade_calldata(CBBTC, USDC, set_token, 1, 1, path, deadline=1)

    def test_reverts_on_destination_mismatch(self, adapter, set_token, path):
        with reverts("AerodromeSlipstreamExchangeAdapter: destination token path mismatch"):
            adapter.get_trade_calldata(WETH, CBBTC, set_token, 1, 1, path, deadline=1)

    def test_reverts_on_malformed_path(self, adapter, set_token, path):
        with reverts("AerodromeSlipstreamExchangeAdapter: invalid path data"):
            adapter.get_trade_calldata(WETH, USDC, set_token, 1, 1, bytes(path) + b'\x01', deadline=1)


class TestGenerateDataParam:

    def test_packs_tokens_and_tick_spacings(self, adapter):
        data = adapter.generate_data_param([WETH, USDC, CBBTC], [100, -50])

        assert data == encode_packed(
            ["address", "int24", "address", "int24", "address"],
            [WETH, 100, USDC, -50, CBBTC]
        )

    @pytest.mark.parametrize("tokens,tick_spacings", [
        ([WETH], []),
        ([WETH, USDC], []),
        ([WETH, USDC], [1, 2]),
    ])
    def test_reverts_on_invalid_lengths(self, adapter, tokens, tick_spacings):
        with reverts("AerodromeSlipstreamExchangeAdapter: invalid input lengths"):
            adapter.generate_data_param(tokens, tick_spacings)
