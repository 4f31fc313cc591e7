"""
Unit Tests for UniswapV3ExchangeAdapterV3
"""

import pytest
from eth_abi import encode
from eth_abi.packed import encode_packed
from web3 import Web3

from adapters import UniswapV3ExchangeAdapterV3
from utils.testing_utils import get_random_address, reverts
from utils.units import ether


SWAP_ROUTER = Web3.to_checksum_address("0x68b3465833fb72A70ecDF485E0e4C7bD8665Fc45")
WETH = Web3.to_checksum_address("0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2")
WBTC = Web3.to_checksum_address("0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599")
DAI = Web3.to_checksum_address("0x6B175474E89094C44Da98b954EedeAC495271d0F")


def selector(signature):
    return bytes(Web3.keccak(text=signature)[:4])


@pytest.fixture
def adapter():
    return UniswapV3ExchangeAdapterV3(SWAP_ROUTER)


@pytest.fixture
def set_token():
    return get_random_address()


class TestConstructorAndSpender:

    def test_swap_router(self, adapter):
        assert adapter.swap_router == SWAP_ROUTER

    def test_spender(self, adapter):
        assert adapter.get_spender() == SWAP_ROUTER

    def test_checksums_lowercase_router(self):
        assert UniswapV3ExchangeAdapterV3(SWAP_ROUTER.lower()).swap_router == SWAP_ROUTER


class TestGetTradeCalldata:

    def test_exact_input(self, adapter, set_token):
        data = encode_packed(["address", "uint24", "address", "bool"], [WETH, 3000, WBTC, True])

        target, value, call_data = adapter.get_trade_calldata(WETH, WBTC, set_token, ether(1), 10**6, data)

        path = encode_packed(["address", "uint24", "address"], [WETH, 3000, WBTC])
        expected = selector("exactInput((bytes,address,uint256,uint256))") + encode(
            ["(bytes,address,uint256,uint256)"],
            [(path, set_token, ether(1), 10**6)]
        )
        assert target == SWAP_ROUTER
        assert value == 0
        assert bytes(call_data) == expected

    def test_exact_output_uses_reversed_path(self, adapter, set_token):
        data = encode_packed(["address", "uint24", "address", "bool"], [WBTC, 3000, WETH, False])

        target, value, call_data = adapter.get_trade_calldata(WETH, WBTC, set_token, ether(1), 10**6, data)

        path = encode_packed(["address", "uint24", "address"], [WBTC, 3000, WETH])
        expected = selector("exactOutput((bytes,address,uint256,uint256))") + encode(
            ["(bytes,address,uint256,uint256)"],
            [(path, set_token, 10**6, ether(1))]
        )
        assert target == SWAP_ROUTER
        assert value == 0
        assert bytes(call_data) == expected

    def test_multi_hop_exact_input(self, adapter, set_token):
        data = encode_packed(
            ["address", "uint24", "address", "uint24", "address", "bool"],
            [WETH, 500, DAI, 3000, WBTC, True]
        )

        _, _, call_data = adapter.get_trade_calldata(WETH, WBTC, set_token, ether(1), 1, data)

        assert bytes(call_data[:4]) == selector("exactInput((bytes,address,uint256,uint256))")
        assert bytes(data[:-1]) in bytes(call_data)

    def test_accepts_hex_string_data(self, adapter, set_token):
        data = encode_packed(["address", "uint24", "address", "bool"], [WETH, 3000, WBTC, True])

        from_bytes = adapter.get_trade_calldata(WETH, WBTC, set_token, 1, 1, data)
        from_hex = adapter.get_trade_calldata(WETH, WBTC, set_token, 1, 1, "0x" + data.hex())

        assert from_bytes == from_hex

    def test_reverts_without_fix_in_flag(self, adapter, set_token):
        data = encode_packed(["address", "uint24", "address"], [WETH, 3000, WBTC])

        with reverts("Invalid data"):
            adapter.get_trade_calldata(WETH, WBTC, set_token, 1, 1, data)

    def test_reverts_on_empty_data(self, adapter, set_token):
        with reverts("Invalid data"):
            adapter.get_trade_calldata(WETH, WBTC, set_token, 1, 1, b'')

    def test_reverts_on_source_mismatch(self, adapter, set_token):
        data = encode_packed(["address", "uint24", "address", "bool"], [DAI, 3000, WBTC, True])

        with reverts("Source token path mismatch"):
            adapter.get_trade_calldata(WETH, WBTC, set_token, 1, 1, data)

    def test_reverts_on_destination_mismatch(self, adapter, set_token):
        data = encode_packed(["address", "uint24", "address", "bool"], [WETH, 3000, DAI, True])

        with reverts("Destination token path mismatch"):
            adapter.get_trade_calldata(WETH, WBTC, set_token, 1, 1, data)

    def test_reverts_on_source_mismatch_exact_output(self, adapter, set_token):
        # exactOutput paths start at the destination token
        data = encode_packed(["address", "uint24", "address", "bool"], [WETH, 3000, WBTC, False])

        with reverts("Source token path mismatch"):
            adapter.get_trade_calldata(WETH, WBTC, set_token, 1, 1, data)

    def test_reverts_on_invalid_bool(self, adapter, set_token):
        data = encode_packed(["address", "uint24", "address", "uint8"], [WETH, 3000, WBTC, 2])

        with reverts("Invalid bool data"):
            adapter.get_trade_calldata(WETH, WBTC, set_token, 1, 1, data)


class TestGenerateDataParam:

    def test_fix_in_true(self, adapter):
        data = adapter.generate_data_param([WETH, DAI, WBTC], [500, 3000], True)

        assert data == encode_packed(
            ["address", "uint24", "address", "uint24", "address", "bool"],
            [WETH, 500, DAI, 3000, WBTC, True]
        )

    def test_fix_in_false(self, adapter):
        data = adapter.generate_data_param([WBTC, DAI, WETH], [3000, 500], False)

        assert data == encode_packed(
            ["address", "uint24", "address", "uint24", "address", "bool"],
            [WBTC, 3000, DAI, 500, WETH, False]
        )

    def test_output_feeds_get_trade_calldata(self, adapter, set_token):
        data = adapter.generate_data_param([WETH, WBTC], [3000], True)

        target, _, _ = adapter.get_trade_calldata(WETH, WBTC, set_token, 1, 1, data)

        assert target == SWAP_ROUTER

    @pytest.mark.parametrize("path,fees", [
        ([WETH], []),
        ([WETH, WBTC], []),
        ([WETH, WBTC], [500, 3000]),
    ])
    def test_reverts_on_invalid_lengths(self, adapter, path, fees):
        with reverts("Invalid path length"):
            adapter.generate_data_param(path, fees, True)
