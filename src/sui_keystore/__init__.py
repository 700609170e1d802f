"""
Sui Keystore - local key custody

Manages signing keys for a set of addresses: derives them from BIP39
mnemonics, keeps them in a file-backed or in-memory store and signs on the
caller's behalf without handing out secret key bytes.
"""

from .enums import SignatureScheme
from .runtime import *
from .crypto import SuiKeyPair, PublicKey, Signature
from .keys import *

__version__ = "0.1.0"
__all__ = [
    "SignatureScheme",

    # Runtime
    "SuiAddress",
    "ErrorCode",
    "KeystoreError",
    "KeyNotFoundError",
    "KeyEncodingError",
    "InvalidMnemonicError",
    "DerivationError",
    "StorageError",
    "StorageCorruptError",
    "StorageIOError",
    "KeystoreConfigError",

    # Keys and signatures
    "SuiKeyPair",
    "PublicKey",
    "Signature",

    # Keystore
    "KeyRecord",
    "AccountKeystore",
    "FileBasedKeystore",
    "InMemKeystore",
    "SuiKeystore",
    "KeystoreType",
    "KeystoreConfig",
    "FileKeystoreConfig",
    "InMemKeystoreConfig",

    # Derivation
    "DerivationPath",
    "DEFAULT_ED25519_PATH",
    "DEFAULT_SECP256K1_PATH",
    "derive_key_pair_from_path",
    "generate_mnemonic",
    "validate_mnemonic",
    "mnemonic_to_seed",
]
