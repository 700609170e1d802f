"""
Key management for the keystore.

Provides storage backends, the caller-facing facade, backend selection and
mnemonic-based derivation.
"""

from .record import KeyRecord
from .keystore import AccountKeystore, FileBasedKeystore, InMemKeystore
from .wallet import SuiKeystore
from .config import KeystoreType, KeystoreConfig, FileKeystoreConfig, InMemKeystoreConfig
from .derivation import (
    DerivationPath,
    DEFAULT_ED25519_PATH,
    DEFAULT_SECP256K1_PATH,
    derive_key_pair_from_path,
    generate_mnemonic,
    validate_mnemonic,
    mnemonic_to_seed,
)

__all__ = [
    "KeyRecord",
    "AccountKeystore",
    "FileBasedKeystore",
    "InMemKeystore",
    "SuiKeystore",
    "KeystoreType",
    "KeystoreConfig",
    "FileKeystoreConfig",
    "InMemKeystoreConfig",
    "DerivationPath",
    "DEFAULT_ED25519_PATH",
    "DEFAULT_SECP256K1_PATH",
    "derive_key_pair_from_path",
    "generate_mnemonic",
    "validate_mnemonic",
    "mnemonic_to_seed",
]
