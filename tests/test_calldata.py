"""
Unit Tests for Call Data Encoding and Path Decoding
"""

import pytest
from eth_abi import encode
from eth_abi.packed import encode_packed as packed
from hexbytes import HexBytes
from web3 import Web3

from adapters.path_codec import decode_path, is_valid_path_length, to_address, to_bool, to_int24, to_uint24
from blockchain import CallData, encode_function_call, encode_packed, function_selector
from blockchain.calldata import to_bytes_data
from utils.testing_utils import reverts


TOKEN_A = Web3.to_checksum_address("0x" + "11" * 20)
TOKEN_B = Web3.to_checksum_address("0x" + "22" * 20)
TOKEN_C = Web3.to_checksum_address("0x" + "33" * 20)


class TestCallData:

    def test_function_selector(self):
        # ERC20 transfer
        assert function_selector("transfer(address,uint256)") == bytes.fromhex("a9059cbb")

    def test_encode_function_call(self):
        call_data = encode_function_call("transfer(address,uint256)", ["address", "uint256"], [TOKEN_A, 5])

        assert isinstance(call_data, HexBytes)
        assert bytes(call_data) == bytes.fromhex("a9059cbb") + encode(["address", "uint256"], [TOKEN_A, 5])

    def test_encode_packed(self):
        assert encode_packed(["address", "uint24"], [TOKEN_A, 3000]) == packed(["address", "uint24"], [TOKEN_A, 3000])

    @pytest.mark.parametrize("data", ["", "0x", b""])
    def test_empty_data(self, data):
        assert to_bytes_data(data) == b""

    def test_hex_string_data(self):
        assert to_bytes_data("0x0102") == b"\x01\x02"

    def test_call_data_unpacks(self):
        target, value, data = CallData(TOKEN_A, 0, HexBytes("0x01"))
        assert (target, value, data) == (TOKEN_A, 0, b"\x01")


class TestPathCodec:

    def test_to_address(self):
        data = packed(["address", "uint24", "address"], [TOKEN_A, 500, TOKEN_B])

        assert to_address(data, 0) == TOKEN_A
        assert to_address(data, 23) == TOKEN_B

    def test_to_address_out_of_bounds(self):
        with reverts("toAddress_outOfBounds"):
            to_address(b"\x00" * 19, 0)

    def test_to_uint24_and_int24(self):
        data = bytes.fromhex("fffffe")

        assert to_uint24(data, 0) == 2**24 - 2
        assert to_int24(data, 0) == -2

    def test_to_bool(self):
        assert to_bool(b"\x00\x01", 1) is True
        assert to_bool(b"\x00\x01", 0) is False

        with reverts("Invalid bool data"):
            to_bool(b"\x02", 0)

        with reverts("toBool_outOfBounds"):
            to_bool(b"", 0)

    @pytest.mark.parametrize("length,valid", [
        (0, False),
        (20, False),
        (43, True),
        (44, False),
        (66, True),
    ])
    def test_is_valid_path_length(self, length, valid):
        assert is_valid_path_length(length) is valid

    def test_decode_path(self):
        data = packed(["address", "uint24", "address", "uint24", "address"], [TOKEN_A, 500, TOKEN_B, 3000, TOKEN_C])

        assert decode_path(data) == ([TOKEN_A, TOKEN_B, TOKEN_C], [500, 3000])

    def test_decode_signed_path(self):
        data = packed(["address", "int24", "address"], [TOKEN_A, -60, TOKEN_B])

        assert decode_path(data, signed_fees=True) == ([TOKEN_A, TOKEN_B], [-60])

    def test_decode_path_rejects_malformed(self):
        with reverts("bad path"):
            decode_path(b"\x00" * 44, error="bad path")
