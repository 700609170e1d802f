"""Runtime helpers for the keystore"""

from .address import SuiAddress, to_address
from .errors import (
    ErrorCode,
    KeystoreError,
    KeyNotFoundError,
    KeyEncodingError,
    InvalidMnemonicError,
    DerivationError,
    StorageError,
    StorageCorruptError,
    StorageIOError,
    KeystoreConfigError,
)

__all__ = [
    "SuiAddress",
    "to_address",
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
]
