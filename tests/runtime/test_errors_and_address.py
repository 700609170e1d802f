"""
Runtime error model and address type tests.
"""

import pytest
from pydantic import BaseModel, ValidationError

from sui_keystore.enums import SignatureScheme
from sui_keystore.runtime.address import SuiAddress
from sui_keystore.runtime.errors import (
    ErrorCode,
    KeyNotFoundError,
    KeystoreError,
    StorageCorruptError,
    StorageIOError,
)


class TestErrors:
    """Test error formatting."""

    def test_str_includes_code_details_and_cause(self):
        cause = OSError("disk full")
        error = StorageIOError("Cannot write keystore file /x", "/x", cause)

        text = str(error)

        assert text.startswith("[STORAGE_IO] Cannot write keystore file /x")
        assert "'path': '/x'" in text
        assert "Caused by: disk full" in text

    def test_to_dict(self):
        error = StorageCorruptError("Invalid Keypair file /k", "/k")

        assert error.to_dict() == {
            "code": ErrorCode.STORAGE_CORRUPT.value,
            "message": "Invalid Keypair file /k",
            "details": {"path": "/k"},
        }

    def test_hierarchy(self):
        address = SuiAddress(b"\x00" * 20)
        error = KeyNotFoundError(address)

        assert isinstance(error, KeystoreError)
        assert error.address == address
        assert error.details == {"address": str(address)}


class TestSuiAddress:
    """Test address parsing and comparison."""

    def test_hex_round_trip(self):
        address = SuiAddress(bytes(range(20)))

        assert SuiAddress.from_hex(address.to_hex()) == address
        assert SuiAddress.from_hex(address.to_hex()[2:]) == address
        assert address.to_hex() == "0x" + bytes(range(20)).hex()

    def test_equals_hex_string(self):
        address = SuiAddress(b"\x11" * 20)

        assert address == "0x" + "11" * 20
        assert address != "0x1234"

    def test_hex_string_lookup_in_mapping(self):
        address = SuiAddress(b"\x11" * 20)
        balances = {address: 7}

        assert hash(address) == hash("0x" + "11" * 20)
        assert balances["0x" + "11" * 20] == 7

    def test_only_canonical_hex_compares_equal(self):
        address = SuiAddress(b"\xab" * 20)

        assert address != "AB" * 20
        assert address != "0x" + "AB" * 20
        assert address == SuiAddress.from_hex("AB" * 20)

    @pytest.mark.parametrize("value", ["0x1234", "zz" * 20, ""])
    def test_bad_hex(self, value):
        with pytest.raises(ValueError):
            SuiAddress.from_hex(value)

    def test_wrong_length_bytes(self):
        with pytest.raises(ValueError):
            SuiAddress(b"\x00" * 32)

    def test_ordering_by_bytes(self):
        low, high = SuiAddress(b"\x00" * 20), SuiAddress(b"\xff" * 20)

        assert sorted([high, low]) == [low, high]

    def test_from_public_key_uses_sha3(self):
        import hashlib

        pub = b"\x02" * 32
        expected = hashlib.sha3_256(bytes([SignatureScheme.ED25519.flag]) + pub).digest()[:20]

        assert SuiAddress.from_public_key_bytes(SignatureScheme.ED25519.flag, pub).to_bytes() == expected

    def test_pydantic_field(self):
        class Holder(BaseModel):
            address: SuiAddress

        holder = Holder(address="0x" + "ab" * 20)

        assert holder.address == SuiAddress(b"\xab" * 20)
        assert holder.model_dump(mode="json") == {"address": "0x" + "ab" * 20}
        with pytest.raises(ValidationError):
            Holder(address="0x12")


class TestSignatureScheme:
    """Test scheme parsing."""

    @pytest.mark.parametrize("value,expected", [
        ("ed25519", SignatureScheme.ED25519),
        ("Secp256k1", SignatureScheme.SECP256K1),
        (0, SignatureScheme.ED25519),
        (SignatureScheme.SECP256K1, SignatureScheme.SECP256K1),
    ])
    def test_parse(self, value, expected):
        assert SignatureScheme.parse(value) is expected

    @pytest.mark.parametrize("value", ["bls", 9, None])
    def test_parse_rejects(self, value):
        with pytest.raises(ValueError):
            SignatureScheme.parse(value)

    def test_str(self):
        assert str(SignatureScheme.ED25519) == "ed25519"
        assert f"{SignatureScheme.SECP256K1}" == "secp256k1"
