"""
Unit tests for the tagged-value decoder.

Tests scalar decoding, address unwrapping depth, integer range checks
and rejection of unknown shapes.

Usage:
    pytest tests/unit/infrastructure/test_decoder.py
"""

import pytest

from consigne.domain.exceptions import UnsupportedValueShape, ValueOutOfRange
from consigne.infrastructure.contract import ABSENT, DecodedKind, decode
from helpers.fakes import ALICE, TOKEN

ALICE_HEX = (bytes([1]) * 32).hex()
TOKEN_HEX = (bytes([9]) * 32).hex()
CORRUPTED_ALICE = ALICE[:-1] + ("B" if ALICE[-1] != "B" else "C")


def account_node(identity_hex: str = ALICE_HEX) -> dict:
    return {
        "tag": "address",
        "value": {
            "tag": "account",
            "value": {"tag": "ed25519", "value": identity_hex},
        },
    }


def contract_node(identity_hex: str = TOKEN_HEX) -> dict:
    return {"tag": "address", "value": {"tag": "contract", "value": identity_hex}}


def entry(name: str, val: dict) -> dict:
    return {"key": {"tag": "symbol", "value": name}, "val": val}


class TestScalars:
    """Tests for scalar tags."""

    def test_void_is_absent(self):
        assert decode({"tag": "void"}) == ABSENT
        assert decode({"tag": "void"}).is_absent

    def test_string_and_symbol(self):
        assert decode({"tag": "string", "value": "alice"}).value == "alice"
        symbol = decode({"tag": "symbol", "value": "username"})
        assert symbol.kind is DecodedKind.STRING
        assert symbol.value == "username"

    def test_empty_string_is_not_absent(self):
        decoded = decode({"tag": "string", "value": ""})
        assert decoded.kind is DecodedKind.STRING
        assert not decoded.is_absent

    def test_bool(self):
        assert decode({"tag": "bool", "value": True}).value is True
        assert decode({"tag": "bool", "value": False}).kind is DecodedKind.BOOLEAN

    def test_bool_rejects_non_boolean(self):
        with pytest.raises(UnsupportedValueShape):
            decode({"tag": "bool", "value": "true"})

    @pytest.mark.parametrize("raw", [0, 7, "18446744073709551615", " 42 "])
    def test_u64_accepts_numbers_and_decimal_strings(self, raw):
        decoded = decode({"tag": "u64", "value": raw})
        assert decoded.kind is DecodedKind.U64
        assert decoded.value == int(str(raw).strip())

    @pytest.mark.parametrize("raw", [-1, "18446744073709551616", 2**64])
    def test_u64_out_of_range(self, raw):
        with pytest.raises(ValueOutOfRange):
            decode({"tag": "u64", "value": raw})

    @pytest.mark.parametrize("raw", ["12a", 1.5, None, True, "١٢"])
    def test_u64_rejects_non_integers(self, raw):
        with pytest.raises(UnsupportedValueShape):
            decode({"tag": "u64", "value": raw})


class TestI128:
    """Tests for hi/lo integer decoding."""

    def test_low_word_only(self):
        decoded = decode({"tag": "i128", "value": {"hi": 0, "lo": "5000000000"}})
        assert decoded.kind is DecodedKind.I128
        assert decoded.value == 5_000_000_000

    def test_max_low_word(self):
        decoded = decode({"tag": "i128", "value": {"hi": "0", "lo": str(2**64 - 1)}})
        assert decoded.value == 2**64 - 1

    @pytest.mark.parametrize("hi", [1, -1])
    def test_nonzero_high_word_is_out_of_range(self, hi):
        with pytest.raises(ValueOutOfRange):
            decode({"tag": "i128", "value": {"hi": hi, "lo": 0}})

    def test_low_word_beyond_u64(self):
        with pytest.raises(ValueOutOfRange):
            decode({"tag": "i128", "value": {"hi": 0, "lo": 2**64}})

    def test_missing_parts(self):
        with pytest.raises(UnsupportedValueShape):
            decode({"tag": "i128", "value": {"lo": 5}})


class TestAddress:
    """Tests for address unwrapping."""

    def test_account_unwraps_two_levels(self):
        decoded = decode(account_node())
        assert decoded.kind is DecodedKind.ADDRESS
        assert decoded.value == ALICE

    def test_contract_unwraps_one_level(self):
        assert decode(contract_node()).value == TOKEN

    def test_same_identity_differs_by_kind(self):
        account = decode(account_node(TOKEN_HEX)).value
        contract = decode(contract_node(TOKEN_HEX)).value

        assert account != contract
        assert account.startswith("G")
        assert contract.startswith("C")

    def test_account_identity_as_bytes(self):
        node = account_node()
        node["value"]["value"]["value"] = bytes([1]) * 32
        assert decode(node).value == ALICE

    def test_unknown_address_subtag(self):
        node = {"tag": "address", "value": {"tag": "muxed", "value": ALICE_HEX}}
        with pytest.raises(UnsupportedValueShape):
            decode(node)

    def test_unknown_key_type_under_account(self):
        node = account_node()
        node["value"]["value"]["tag"] = "secp256k1"
        with pytest.raises(UnsupportedValueShape):
            decode(node)

    def test_account_at_contract_depth_is_rejected(self):
        node = {"tag": "address", "value": {"tag": "account", "value": ALICE_HEX}}
        with pytest.raises(UnsupportedValueShape):
            decode(node)

    @pytest.mark.parametrize("identity", ["01" * 31, "01" * 33, "zz" * 32])
    def test_identity_must_be_32_hex_bytes(self, identity):
        with pytest.raises(UnsupportedValueShape):
            decode(contract_node(identity))

    @pytest.mark.parametrize("address", [ALICE, TOKEN])
    def test_inline_strkey(self, address):
        decoded = decode({"tag": "address", "value": address})

        assert decoded.kind is DecodedKind.ADDRESS
        assert decoded.value == address

    @pytest.mark.parametrize(
        "address", ["", "GABC", CORRUPTED_ALICE, "M" + ALICE[1:], ALICE_HEX]
    )
    def test_inline_strkey_must_be_valid(self, address):
        with pytest.raises(UnsupportedValueShape):
            decode({"tag": "address", "value": address})

    def test_inline_strkey_in_profile_map(self):
        decoded = decode(
            {
                "tag": "map",
                "value": [
                    entry("address", {"tag": "address", "value": ALICE}),
                    entry("username", {"tag": "string", "value": "alice"}),
                ],
            }
        )

        assert decoded.value[0] == ("address", decode(account_node()))


class TestMap:
    """Tests for map decoding."""

    def test_preserves_wire_order(self):
        decoded = decode(
            {
                "tag": "map",
                "value": [
                    entry("b", {"tag": "u64", "value": 2}),
                    entry("a", {"tag": "void"}),
                ],
            }
        )

        assert decoded.kind is DecodedKind.MAP
        assert [name for name, _ in decoded.value] == ["b", "a"]
        assert decoded.value[0][1].value == 2
        assert decoded.value[1][1].is_absent

    def test_non_string_key(self):
        node = {
            "tag": "map",
            "value": [{"key": {"tag": "u64", "value": 1}, "val": {"tag": "void"}}],
        }
        with pytest.raises(UnsupportedValueShape):
            decode(node)

    def test_malformed_entry(self):
        with pytest.raises(UnsupportedValueShape):
            decode({"tag": "map", "value": [{"key": {"tag": "symbol", "value": "a"}}]})

    def test_nested_error_propagates(self):
        node = {"tag": "map", "value": [entry("a", {"tag": "vec", "value": []})]}
        with pytest.raises(UnsupportedValueShape):
            decode(node)


class TestUnknownShapes:
    """Tests for unrecognized input."""

    @pytest.mark.parametrize(
        "raw",
        [
            {"tag": "vec", "value": []},
            {"tag": "bytes", "value": "00"},
            {"value": "alice"},
            "alice",
            None,
            {"tag": "string"},
        ],
    )
    def test_rejected_not_absent(self, raw):
        with pytest.raises(UnsupportedValueShape):
            decode(raw)
