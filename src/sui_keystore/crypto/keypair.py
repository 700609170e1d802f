"""
Scheme-tagged keys and signatures.

`SuiKeyPair`, `PublicKey` and `Signature` wrap the per-curve key classes
behind one type each, and carry the scheme flag through their base64 text
forms:

- keypair:    base64(flag || 32-byte secret)
- public key: base64(flag || public key bytes)
- signature:  base64(flag || raw signature || public key bytes)
"""

from __future__ import annotations
import base64
import binascii
from typing import Union

from ..enums import SignatureScheme
from ..runtime.address import SuiAddress
from ..runtime.errors import KeyEncodingError
from . import ed25519, secp256k1
from .ed25519 import Ed25519PrivateKey, Ed25519PublicKey
from .secp256k1 import Secp256k1PrivateKey, Secp256k1PublicKey

PrivateKeyType = Union[Ed25519PrivateKey, Secp256k1PrivateKey]
PublicKeyType = Union[Ed25519PublicKey, Secp256k1PublicKey]

_PRIVATE_KEY_CLASSES = {
    SignatureScheme.ED25519: Ed25519PrivateKey,
    SignatureScheme.SECP256K1: Secp256k1PrivateKey,
}

_PUBLIC_KEY_CLASSES = {
    SignatureScheme.ED25519: Ed25519PublicKey,
    SignatureScheme.SECP256K1: Secp256k1PublicKey,
}

_PUBLIC_KEY_LENGTHS = {
    SignatureScheme.ED25519: ed25519.PUBLIC_KEY_LENGTH,
    SignatureScheme.SECP256K1: secp256k1.PUBLIC_KEY_LENGTH,
}

_SIGNATURE_LENGTHS = {
    SignatureScheme.ED25519: ed25519.SIGNATURE_LENGTH,
    SignatureScheme.SECP256K1: secp256k1.SIGNATURE_LENGTH,
}


def _b64decode(value: str, what: str) -> bytes:
    if not isinstance(value, str):
        raise KeyEncodingError(f"Encoded {what} must be a string, got {type(value).__name__}")
    try:
        return base64.b64decode(value.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as e:
        raise KeyEncodingError(f"Invalid base64 {what}: {e}", cause=e)


def _split_flag(raw: bytes, what: str) -> tuple:
    if not raw:
        raise KeyEncodingError(f"Empty {what}")
    try:
        scheme = SignatureScheme.from_flag(raw[0])
    except ValueError as e:
        raise KeyEncodingError(f"Invalid {what}: {e}", cause=e)
    return scheme, raw[1:]


class PublicKey:
    """Public key tagged with its signature scheme."""

    def __init__(self, scheme: SignatureScheme, key: PublicKeyType):
        self.scheme = scheme
        self._key = key

    @classmethod
    def from_bytes(cls, scheme: SignatureScheme, key_bytes: bytes) -> PublicKey:
        scheme = SignatureScheme.parse(scheme)
        return cls(scheme, _PUBLIC_KEY_CLASSES[scheme](key_bytes))

    @classmethod
    def decode_base64(cls, value: str) -> PublicKey:
        scheme, key_bytes = _split_flag(_b64decode(value, "public key"), "public key")
        return cls.from_bytes(scheme, key_bytes)

    def encode_base64(self) -> str:
        return base64.b64encode(bytes([self.scheme.flag]) + self.to_bytes()).decode("ascii")

    def to_bytes(self) -> bytes:
        return self._key.to_bytes()

    def to_address(self) -> SuiAddress:
        """Compute the address this public key controls."""
        return SuiAddress.from_public_key_bytes(self.scheme.flag, self.to_bytes())

    def verify(self, message: bytes, signature: Signature) -> bool:
        """Check that `signature` was made over `message` by this key."""
        if signature.scheme != self.scheme or signature.public_key_bytes != self.to_bytes():
            return False
        return self._key.verify(signature.signature_bytes, message)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PublicKey):
            return False
        return self.scheme == other.scheme and self.to_bytes() == other.to_bytes()

    def __hash__(self) -> int:
        return hash((self.scheme, self.to_bytes()))

    def __str__(self) -> str:
        return self.encode_base64()

    def __repr__(self) -> str:
        return f"PublicKey({self.scheme}, '{self.to_bytes().hex()}')"


class Signature:
    """Signature tagged with its scheme and the signer's public key."""

    def __init__(self, scheme: SignatureScheme, signature_bytes: bytes, public_key_bytes: bytes):
        scheme = SignatureScheme.parse(scheme)
        if len(signature_bytes) != _SIGNATURE_LENGTHS[scheme]:
            raise KeyEncodingError(
                f"{scheme} signature must be {_SIGNATURE_LENGTHS[scheme]} bytes, got {len(signature_bytes)}"
            )
        if len(public_key_bytes) != _PUBLIC_KEY_LENGTHS[scheme]:
            raise KeyEncodingError(
                f"{scheme} public key must be {_PUBLIC_KEY_LENGTHS[scheme]} bytes, got {len(public_key_bytes)}"
            )
        self.scheme = scheme
        self.signature_bytes = bytes(signature_bytes)
        self.public_key_bytes = bytes(public_key_bytes)

    @classmethod
    def from_bytes(cls, raw: bytes) -> Signature:
        """Parse the flag || signature || public key form."""
        scheme, rest = _split_flag(raw, "signature")
        sig_len = _SIGNATURE_LENGTHS[scheme]
        return cls(scheme, rest[:sig_len], rest[sig_len:])

    @classmethod
    def decode_base64(cls, value: str) -> Signature:
        return cls.from_bytes(_b64decode(value, "signature"))

    def to_bytes(self) -> bytes:
        return bytes([self.scheme.flag]) + self.signature_bytes + self.public_key_bytes

    def encode_base64(self) -> str:
        return base64.b64encode(self.to_bytes()).decode("ascii")

    def public_key(self) -> PublicKey:
        return PublicKey.from_bytes(self.scheme, self.public_key_bytes)

    def verify(self, message: bytes) -> bool:
        """Verify against the embedded public key."""
        return self.public_key().verify(message, self)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Signature):
            return False
        return self.to_bytes() == other.to_bytes()

    def __hash__(self) -> int:
        return hash(self.to_bytes())

    def __str__(self) -> str:
        return self.encode_base64()

    def __repr__(self) -> str:
        return f"Signature({self.scheme}, '{self.signature_bytes.hex()[:16]}...')"


class SuiKeyPair:
    """
    Secret and public key bundle tagged with a signature scheme.

    The secret half only leaves this object through `encode_base64`, which
    exists for the keystore file.
    """

    def __init__(self, scheme: SignatureScheme, private_key: PrivateKeyType):
        self.scheme = SignatureScheme.parse(scheme)
        if not isinstance(private_key, _PRIVATE_KEY_CLASSES[self.scheme]):
            raise KeyEncodingError(
                f"{type(private_key).__name__} cannot back a {self.scheme} keypair"
            )
        self._private_key = private_key
        self._public = PublicKey(self.scheme, private_key.public_key())

    @classmethod
    def from_private_bytes(cls, scheme: Union[SignatureScheme, str], private_key_bytes: bytes) -> SuiKeyPair:
        scheme = SignatureScheme.parse(scheme)
        return cls(scheme, _PRIVATE_KEY_CLASSES[scheme](private_key_bytes))

    @classmethod
    def generate(cls, scheme: Union[SignatureScheme, str] = SignatureScheme.ED25519) -> SuiKeyPair:
        """Generate a random keypair for `scheme`."""
        scheme = SignatureScheme.parse(scheme)
        return cls(scheme, _PRIVATE_KEY_CLASSES[scheme].generate())

    @classmethod
    def decode_base64(cls, value: str) -> SuiKeyPair:
        """
        Decode the keystore text form.

        Raises:
            KeyEncodingError: On bad base64, unknown flag or wrong key length
        """
        scheme, key_bytes = _split_flag(_b64decode(value, "keypair"), "keypair")
        return cls.from_private_bytes(scheme, key_bytes)

    def encode_base64(self) -> str:
        return base64.b64encode(bytes([self.scheme.flag]) + self._private_key.to_bytes()).decode("ascii")

    def public(self) -> PublicKey:
        return self._public

    def address(self) -> SuiAddress:
        return self._public.to_address()

    def sign(self, message: bytes) -> Signature:
        """Sign `message`, returning a scheme-tagged signature."""
        return Signature(self.scheme, self._private_key.sign(message), self._public.to_bytes())

    def __eq__(self, other) -> bool:
        if not isinstance(other, SuiKeyPair):
            return False
        return self.scheme == other.scheme and self._private_key == other._private_key

    def __hash__(self) -> int:
        return hash((self.scheme, self._public.to_bytes()))

    def __repr__(self) -> str:
        return f"SuiKeyPair({self.scheme}, public='{self._public.to_bytes().hex()}')"


__all__ = [
    "SuiKeyPair",
    "PublicKey",
    "Signature",
]
