"""
SuiAddress Pydantic custom type.

An address is the first 20 bytes of SHA3-256(scheme_flag || public_key).
It is only ever computed from a public key; parsing exists so callers can
name an address they already know.
"""

from __future__ import annotations
import hashlib
from typing import Any, Union
from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

ADDRESS_LENGTH = 20


class SuiAddress:
    """Fixed-size account address derived from a public key."""

    __slots__ = ("_bytes",)

    def __init__(self, address_bytes: bytes):
        if not isinstance(address_bytes, (bytes, bytearray)):
            raise ValueError("SuiAddress must be built from bytes")
        if len(address_bytes) != ADDRESS_LENGTH:
            raise ValueError(f"SuiAddress must be {ADDRESS_LENGTH} bytes, got {len(address_bytes)}")
        self._bytes = bytes(address_bytes)

    @classmethod
    def from_public_key_bytes(cls, flag: int, public_key_bytes: bytes) -> SuiAddress:
        """Hash a flagged public key into an address."""
        digest = hashlib.sha3_256(bytes([flag]) + public_key_bytes).digest()
        return cls(digest[:ADDRESS_LENGTH])

    @classmethod
    def from_hex(cls, hex_string: str) -> SuiAddress:
        """Parse an address from hex, with or without the 0x prefix."""
        if not isinstance(hex_string, str):
            raise ValueError("SuiAddress hex must be a string")
        value = hex_string[2:] if hex_string.lower().startswith("0x") else hex_string
        if len(value) != ADDRESS_LENGTH * 2:
            raise ValueError(f"SuiAddress must be {ADDRESS_LENGTH * 2} hex characters: {hex_string}")
        try:
            return cls(bytes.fromhex(value))
        except ValueError as e:
            raise ValueError(f"Invalid SuiAddress hex: {e}")

    def to_bytes(self) -> bytes:
        return self._bytes

    def to_hex(self) -> str:
        return "0x" + self._bytes.hex()

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        return f"SuiAddress('{self.to_hex()}')"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, SuiAddress):
            return self._bytes == other._bytes
        elif isinstance(other, str):
            # canonical text form only, so equal values share a hash
            return self.to_hex() == other
        return False

    def __lt__(self, other: SuiAddress) -> bool:
        if not isinstance(other, SuiAddress):
            return NotImplemented
        return self._bytes < other._bytes

    def __hash__(self) -> int:
        return hash(self.to_hex())

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        """Return a Pydantic CoreSchema that validates the SuiAddress."""
        return core_schema.no_info_before_validator_function(
            cls._validate,
            core_schema.is_instance_schema(cls),
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )

    @classmethod
    def _validate(cls, value: Any, _info=None) -> SuiAddress:
        """Validate and convert the input to a SuiAddress."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.from_hex(value)
        if isinstance(value, (bytes, bytearray)):
            return cls(bytes(value))
        raise ValueError(f"Invalid SuiAddress: {value!r}")


AddressLike = Union[SuiAddress, str]


def to_address(value: AddressLike) -> SuiAddress:
    """Coerce an address or its hex form into a SuiAddress."""
    return SuiAddress._validate(value)


__all__ = ["SuiAddress", "AddressLike", "ADDRESS_LENGTH", "to_address"]
