"""
SECP256K1 key operations.

ECDSA over secp256k1 via the `ecdsa` library. Messages are hashed with
SHA-256, nonces follow RFC 6979 and signatures are the 64-byte r || s form
normalized to low-S.
"""

from __future__ import annotations
import hashlib
import os

from ecdsa import SigningKey, VerifyingKey, SECP256k1, BadSignatureError, MalformedPointError
from ecdsa.util import sigdecode_string, sigencode_string_canonize

from ..runtime.errors import KeyEncodingError

PUBLIC_KEY_LENGTH = 33
PRIVATE_KEY_LENGTH = 32
SIGNATURE_LENGTH = 64


class Secp256k1Error(KeyEncodingError):
    """secp256k1 key material is malformed."""
    pass


class Secp256k1PublicKey:
    """SECP256K1 public key in 33-byte compressed SEC1 form."""

    def __init__(self, public_key_bytes: bytes):
        """
        Initialize public key.

        Args:
            public_key_bytes: 33-byte compressed public key
        """
        if len(public_key_bytes) != PUBLIC_KEY_LENGTH:
            raise Secp256k1Error(f"secp256k1 public key must be 33 bytes, got {len(public_key_bytes)}")
        try:
            self._verifying_key = VerifyingKey.from_string(bytes(public_key_bytes), curve=SECP256k1)
        except MalformedPointError as e:
            raise Secp256k1Error(f"Invalid secp256k1 public key: {e}", cause=e)
        self.public_key_bytes = bytes(public_key_bytes)

    def to_bytes(self) -> bytes:
        return self.public_key_bytes

    def to_hex(self) -> str:
        return self.public_key_bytes.hex()

    def verify(self, signature: bytes, message: bytes) -> bool:
        """
        Verify signature against message.

        Args:
            signature: 64-byte r || s signature
            message: Message bytes (hashed with SHA-256 here)

        Returns:
            True if signature is valid
        """
        if len(signature) != SIGNATURE_LENGTH:
            return False
        try:
            return self._verifying_key.verify(
                signature, message, hashfunc=hashlib.sha256, sigdecode=sigdecode_string
            )
        except BadSignatureError:
            return False

    def __eq__(self, other) -> bool:
        if not isinstance(other, Secp256k1PublicKey):
            return False
        return self.public_key_bytes == other.public_key_bytes

    def __hash__(self) -> int:
        return hash(self.public_key_bytes)

    def __repr__(self) -> str:
        return f"Secp256k1PublicKey('{self.to_hex()}')"


class Secp256k1PrivateKey:
    """
    SECP256K1 private key.

    Holds the 32-byte scalar; never prints it.
    """

    def __init__(self, private_key_bytes: bytes):
        """
        Initialize private key.

        Args:
            private_key_bytes: 32-byte private scalar
        """
        if len(private_key_bytes) != PRIVATE_KEY_LENGTH:
            raise Secp256k1Error(f"Private key must be 32 bytes, got {len(private_key_bytes)}")
        try:
            self._signing_key = SigningKey.from_string(bytes(private_key_bytes), curve=SECP256k1)
        except MalformedPointError as e:
            raise Secp256k1Error(f"Invalid secp256k1 private key: {e}", cause=e)
        self._private_key_bytes = bytes(private_key_bytes)
        self._public_key = Secp256k1PublicKey(
            self._signing_key.get_verifying_key().to_string("compressed")
        )

    @classmethod
    def generate(cls) -> Secp256k1PrivateKey:
        """Generate a new random key."""
        return cls(SigningKey.generate(curve=SECP256k1, entropy=os.urandom).to_string())

    def to_bytes(self) -> bytes:
        return self._private_key_bytes

    def public_key(self) -> Secp256k1PublicKey:
        return self._public_key

    def sign(self, message: bytes) -> bytes:
        """
        Sign a message.

        Args:
            message: Message to sign

        Returns:
            64-byte low-S r || s signature
        """
        return self._signing_key.sign_deterministic(
            message, hashfunc=hashlib.sha256, sigencode=sigencode_string_canonize
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Secp256k1PrivateKey):
            return False
        return self._private_key_bytes == other._private_key_bytes

    def __hash__(self) -> int:
        return hash(self._private_key_bytes)

    def __repr__(self) -> str:
        return f"Secp256k1PrivateKey(public={self._public_key.to_hex()})"


__all__ = [
    "Secp256k1PublicKey",
    "Secp256k1PrivateKey",
    "Secp256k1Error",
    "PUBLIC_KEY_LENGTH",
    "PRIVATE_KEY_LENGTH",
    "SIGNATURE_LENGTH",
]
