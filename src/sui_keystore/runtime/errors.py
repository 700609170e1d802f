"""
Keystore Error Model

This module provides the error handling framework for the keystore: a numeric
error code per failure class and one exception type per recoverable or fatal
condition a caller may need to tell apart.
"""

from __future__ import annotations
from typing import Optional, Dict, Any, Union
from enum import IntEnum
from pathlib import Path


class ErrorCode(IntEnum):
    """Keystore error codes."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2
    INVALID_CONFIG = 3

    # Key errors (100-199)
    INVALID_KEY = 100
    KEY_NOT_FOUND = 101
    INVALID_SIGNATURE = 102

    # Derivation errors (200-299)
    INVALID_MNEMONIC = 200
    DERIVATION_FAILED = 201

    # Storage errors (300-399)
    STORAGE_CORRUPT = 300
    STORAGE_IO = 301


class KeystoreError(Exception):
    """
    Base class for all keystore errors.

    Carries a structured code, optional details and the underlying cause.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a keystore error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class KeyNotFoundError(KeystoreError):
    """No key is stored for the requested address."""

    def __init__(self, address: Any):
        super().__init__(
            f"Cannot find key for address: [{address}]",
            ErrorCode.KEY_NOT_FOUND,
            {"address": str(address)},
        )
        self.address = address


class KeyEncodingError(KeystoreError):
    """Key, public key or signature bytes could not be decoded."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_KEY, details, cause)


class InvalidMnemonicError(KeystoreError):
    """Mnemonic phrase failed wordlist or checksum validation."""

    def __init__(self, message: str = "Invalid mnemonic phrase", cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_MNEMONIC, cause=cause)


class DerivationError(KeystoreError):
    """Key derivation rejected the seed, path or scheme."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.DERIVATION_FAILED, details, cause)


class StorageError(KeystoreError):
    """Base for errors tied to a keystore file."""

    def __init__(self, message: str, path: Optional[Union[str, Path]], code: ErrorCode,
                 cause: Optional[Exception] = None):
        super().__init__(message, code, {"path": str(path)} if path is not None else None, cause)
        self.path = path


class StorageCorruptError(StorageError):
    """Persisted keystore file exists but cannot be decoded."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None, cause: Optional[Exception] = None):
        super().__init__(message, path, ErrorCode.STORAGE_CORRUPT, cause)


class StorageIOError(StorageError):
    """Reading or writing the keystore file failed."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None, cause: Optional[Exception] = None):
        super().__init__(message, path, ErrorCode.STORAGE_IO, cause)


class KeystoreConfigError(KeystoreError):
    """Keystore selector configuration is malformed."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_CONFIG, details, cause)


__all__ = [
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
