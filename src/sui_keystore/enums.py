"""
Enumerations shared across the keystore.
"""

from __future__ import annotations
from enum import IntEnum
from typing import Union


class SignatureScheme(IntEnum):
    """Signature schemes a keypair can be tagged with; the value is the wire flag byte."""

    ED25519 = 0x00
    SECP256K1 = 0x01

    @property
    def flag(self) -> int:
        return int(self)

    @classmethod
    def from_flag(cls, flag: int) -> SignatureScheme:
        """Resolve a scheme from its flag byte."""
        try:
            return cls(flag)
        except ValueError:
            raise ValueError(f"Unknown signature scheme flag: {flag:#04x}")

    @classmethod
    def parse(cls, value: Union[str, int, SignatureScheme]) -> SignatureScheme:
        """
        Resolve a scheme from a name, flag or enum member.

        Names are matched case-insensitively ("ed25519", "Secp256k1").
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls.from_flag(value)
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown signature scheme: {value}")
        raise ValueError(f"Invalid signature scheme: {value!r}")

    def __str__(self) -> str:
        return _SCHEME_NAMES[self]

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)


_SCHEME_NAMES = {
    SignatureScheme.ED25519: "ed25519",
    SignatureScheme.SECP256K1: "secp256k1",
}


__all__ = ["SignatureScheme"]
