r"""
Keystore facade.

`SuiKeystore` is the single entry point callers use: it binds one storage
backend for its lifetime and adds the mnemonic workflows on top of the
backend contract. Mnemonic phrases are handed back to the caller and never
stored.
"""

from __future__ import annotations
from typing import List, Optional, Tuple, Union
import logging

from ..crypto.keypair import PublicKey, Signature, SuiKeyPair
from ..enums import SignatureScheme
from ..runtime.address import AddressLike, SuiAddress
from ..runtime.errors import DerivationError
from .derivation import (
    PathLike,
    derive_key_pair_from_path,
    generate_mnemonic,
    mnemonic_to_seed,
    validate_mnemonic,
)
from .keystore import AccountKeystore

logger = logging.getLogger(__name__)


class SuiKeystore:
    """
    Caller-facing keystore.

    Stateless apart from the bound backend; all keys live in the backend.
    """

    def __init__(self, backend: AccountKeystore):
        """
        Initialize the facade.

        Args:
            backend: Storage backend to bind
        """
        if not isinstance(backend, AccountKeystore):
            raise TypeError(f"Expected an AccountKeystore, got {type(backend).__name__}")
        self._backend = backend

    @property
    def backend(self) -> AccountKeystore:
        return self._backend

    def add_key(self, keypair: SuiKeyPair) -> None:
        """Store an externally built keypair under its address."""
        self._backend.add_key(keypair)

    def generate_new_key(
        self,
        key_scheme: Union[SignatureScheme, str],
        derivation_path: Optional[PathLike] = None,
    ) -> Tuple[SuiAddress, str, SignatureScheme]:
        """
        Create a key from a fresh 12-word mnemonic and store it.

        Args:
            key_scheme: Signature scheme of the new key
            derivation_path: Path to derive; scheme default when None

        Returns:
            (address, mnemonic phrase, scheme); the phrase is the only backup

        Raises:
            DerivationError: If derivation fails; nothing is stored
            StorageIOError: If the backend cannot persist the key
        """
        scheme = self._parse_scheme(key_scheme)
        phrase = generate_mnemonic()
        record = derive_key_pair_from_path(mnemonic_to_seed(phrase), derivation_path, scheme)
        self._backend.add_key(record.keypair)
        logger.debug(f"Generated {scheme} key {record.address}")
        return record.address, phrase, scheme

    def import_from_mnemonic(
        self,
        phrase: str,
        key_scheme: Union[SignatureScheme, str],
        derivation_path: Optional[PathLike] = None,
    ) -> SuiAddress:
        """
        Re-derive a key from an existing mnemonic and store it.

        Importing the same phrase, scheme and path again yields the same
        address and stores an equal keypair.

        Raises:
            InvalidMnemonicError: If the phrase fails wordlist or checksum checks
            DerivationError: If derivation fails; nothing is stored
            StorageIOError: If the backend cannot persist the key
        """
        normalized = validate_mnemonic(phrase)
        scheme = self._parse_scheme(key_scheme)
        record = derive_key_pair_from_path(mnemonic_to_seed(normalized), derivation_path, scheme)
        self._backend.add_key(record.keypair)
        logger.debug(f"Imported {scheme} key {record.address}")
        return record.address

    def keys(self) -> List[PublicKey]:
        return self._backend.keys()

    def addresses(self) -> List[SuiAddress]:
        return [key.to_address() for key in self.keys()]

    def sign(self, address: AddressLike, message: bytes) -> Signature:
        """
        Sign with the key stored for `address`.

        Raises:
            KeyNotFoundError: If no key is stored for the address
        """
        return self._backend.sign(address, message)

    @staticmethod
    def _parse_scheme(key_scheme: Union[SignatureScheme, str]) -> SignatureScheme:
        try:
            return SignatureScheme.parse(key_scheme)
        except ValueError as e:
            raise DerivationError(str(e), cause=e) from e

    def __len__(self) -> int:
        return len(self._backend)

    def __repr__(self) -> str:
        return f"SuiKeystore({self._backend!r})"


__all__ = ["SuiKeystore"]
