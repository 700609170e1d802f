"""
Cryptographic key types for the keystore.

Ed25519 and secp256k1 keys, unified behind scheme-tagged keypair, public key
and signature types.
"""

from .ed25519 import Ed25519PrivateKey, Ed25519PublicKey, Ed25519Error
from .secp256k1 import Secp256k1PrivateKey, Secp256k1PublicKey, Secp256k1Error
from .keypair import SuiKeyPair, PublicKey, Signature

__all__ = [
    "Ed25519PrivateKey",
    "Ed25519PublicKey",
    "Ed25519Error",
    "Secp256k1PrivateKey",
    "Secp256k1PublicKey",
    "Secp256k1Error",
    "SuiKeyPair",
    "PublicKey",
    "Signature",
]
