r"""
Key storage backends.

`AccountKeystore` is the storage contract every backend fulfils: sign with a
stored key, add a key, enumerate public keys. Two implementations:

- `FileBasedKeystore`: mirrors its keys to a JSON array of base64 keypairs.
- `InMemKeystore`: process-local, pre-seeded with reproducible keys.

Backends may be handed to other threads but do no locking of their own;
concurrent writers must be serialized by the caller.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Union
import json
import logging
import os
import random
import tempfile
from pathlib import Path

from ..crypto.keypair import PublicKey, Signature, SuiKeyPair
from ..enums import SignatureScheme
from ..runtime.address import AddressLike, SuiAddress, to_address
from ..runtime.errors import (
    KeyEncodingError,
    KeyNotFoundError,
    StorageCorruptError,
    StorageIOError,
)

logger = logging.getLogger(__name__)

DEFAULT_INMEM_SEED = 0


class AccountKeystore(ABC):
    """
    Abstract keystore backend.

    Keys are indexed by the address computed from their public key; a caller
    never supplies the address of a key it adds.
    """

    @abstractmethod
    def sign(self, address: AddressLike, message: bytes) -> Signature:
        """
        Sign a message with the key stored for an address.

        Args:
            address: Address whose key signs
            message: Message bytes

        Returns:
            Scheme-tagged signature

        Raises:
            KeyNotFoundError: If no key is stored for the address
        """
        pass

    @abstractmethod
    def add_key(self, keypair: SuiKeyPair) -> None:
        """
        Store a keypair under its derived address, replacing any previous one.

        Raises:
            StorageIOError: If a persistent backend fails to write
        """
        pass

    @abstractmethod
    def keys(self) -> List[PublicKey]:
        """
        List the public key of every stored keypair.

        Order is backend-defined; pair each key with its address when
        identity matters.
        """
        pass

    def addresses(self) -> List[SuiAddress]:
        return [key.to_address() for key in self.keys()]

    def has_address(self, address: AddressLike) -> bool:
        return to_address(address) in self.addresses()

    def __len__(self) -> int:
        return len(self.keys())


class _MappingKeystore(AccountKeystore):
    """Address -> keypair mapping shared by the concrete backends."""

    def __init__(self, keys: Optional[Dict[SuiAddress, SuiKeyPair]] = None):
        self._keys: Dict[SuiAddress, SuiKeyPair] = dict(keys or {})

    def sign(self, address: AddressLike, message: bytes) -> Signature:
        address = to_address(address)
        keypair = self._keys.get(address)
        if keypair is None:
            raise KeyNotFoundError(address)
        return keypair.sign(message)

    def keys(self) -> List[PublicKey]:
        return [self._keys[address].public() for address in sorted(self._keys)]

    def addresses(self) -> List[SuiAddress]:
        return sorted(self._keys)

    def has_address(self, address: AddressLike) -> bool:
        return to_address(address) in self._keys

    def __len__(self) -> int:
        return len(self._keys)


class FileBasedKeystore(_MappingKeystore):
    """
    File-backed keystore.

    The file is a JSON array of base64 keypair strings and always reflects
    the full key set: every `add_key` rewrites it. A keystore without a path
    keeps keys in memory only and `save()` does nothing.
    """

    def __init__(self, keys: Optional[Dict[SuiAddress, SuiKeyPair]] = None,
                 path: Optional[Union[str, Path]] = None):
        """
        Initialize file keystore.

        Args:
            keys: Initial address -> keypair mapping
            path: File to mirror keys to (None for no persistence)
        """
        super().__init__(keys)
        self._path = Path(path) if path is not None else None

    @classmethod
    def load_or_create(cls, path: Union[str, Path]) -> FileBasedKeystore:
        """
        Open the keystore at `path`, starting empty if the file is absent.

        Raises:
            StorageCorruptError: If the file is not a JSON array of valid keypairs
            StorageIOError: If the file cannot be read
        """
        path = Path(path)
        keys: Dict[SuiAddress, SuiKeyPair] = {}

        if path.exists():
            try:
                with open(path, "r", encoding="utf-8") as f:
                    kp_strings = json.load(f)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                logger.warning(f"Rejected keystore file {path}: {e}")
                raise StorageCorruptError(f"Invalid Keypair file {path}", path, e) from e
            except OSError as e:
                raise StorageIOError(f"Cannot read keystore file {path}", path, e) from e

            if not isinstance(kp_strings, list):
                logger.warning(f"Rejected keystore file {path}: not a JSON array")
                raise StorageCorruptError(f"Invalid Keypair file {path}: expected a JSON array", path)

            for position, kp_string in enumerate(kp_strings):
                try:
                    keypair = SuiKeyPair.decode_base64(kp_string)
                except KeyEncodingError as e:
                    logger.warning(f"Rejected keystore file {path}: entry {position} is not a keypair")
                    raise StorageCorruptError(f"Invalid Keypair file {path}: entry {position}", path, e) from e
                keys[keypair.public().to_address()] = keypair

            logger.debug(f"Loaded {len(keys)} keys from {path}")

        return cls(keys, path)

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def set_path(self, path: Union[str, Path]) -> None:
        """Bind the keystore to a file; takes effect on the next save."""
        self._path = Path(path)

    def save(self) -> None:
        """
        Write the full key set to the keystore file.

        Raises:
            StorageIOError: If the file cannot be written
        """
        self._write(self._keys)

    def add_key(self, keypair: SuiKeyPair) -> None:
        address = keypair.public().to_address()
        updated = dict(self._keys)
        updated[address] = keypair
        # the mapping is only replaced once the file holds the new key set
        self._write(updated)
        self._keys = updated
        logger.debug(f"Stored {keypair.scheme} key {address}")

    def _write(self, keys: Dict[SuiAddress, SuiKeyPair]) -> None:
        if self._path is None:
            return
        store = [keys[address].encode_base64() for address in sorted(keys)]
        # the old file is replaced only by a fully written copy
        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile("w", encoding="utf-8", dir=self._path.parent,
                                             prefix=f".{self._path.name}.", suffix=".tmp",
                                             delete=False) as f:
                tmp_name = f.name
                json.dump(store, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self._path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageIOError(f"Cannot write keystore file {self._path}", self._path, e) from e
        logger.debug(f"Saved {len(store)} keys to {self._path}")

    def __repr__(self) -> str:
        return f"FileBasedKeystore(path='{self._path}', count={len(self._keys)})"


class InMemKeystore(_MappingKeystore):
    """
    In-memory keystore for tests and local development.

    Pre-populated with `initial_key_number` Ed25519 keys drawn from a
    PRNG seeded with `seed`, so the same arguments always produce the same
    keys. Not for custody of real funds.
    """

    def __init__(self, initial_key_number: int = 0, seed: int = DEFAULT_INMEM_SEED):
        """
        Initialize memory keystore.

        Args:
            initial_key_number: Number of keys to create up front
            seed: PRNG seed for the initial keys
        """
        if initial_key_number < 0:
            raise ValueError(f"initial_key_number must be >= 0, got {initial_key_number}")
        rng = random.Random(seed)
        keys: Dict[SuiAddress, SuiKeyPair] = {}
        for _ in range(initial_key_number):
            keypair = SuiKeyPair.from_private_bytes(SignatureScheme.ED25519, rng.randbytes(32))
            keys[keypair.public().to_address()] = keypair
        super().__init__(keys)

    def add_key(self, keypair: SuiKeyPair) -> None:
        address = keypair.public().to_address()
        self._keys[address] = keypair
        logger.debug(f"Stored {keypair.scheme} key {address} in memory")

    def __repr__(self) -> str:
        return f"InMemKeystore(count={len(self._keys)})"


__all__ = [
    "AccountKeystore",
    "FileBasedKeystore",
    "InMemKeystore",
]
