"""
Mnemonic and hierarchical key derivation.

BIP39 phrases are handled by `mnemonic`; child key arithmetic (SLIP-0010 for
Ed25519, BIP32 for secp256k1) is done by `bip_utils`. This module only picks
the path and the curve and checks the path is one the scheme allows:

- Ed25519:   m/44'/784'/{account}'/{change}'/{address}'  (all hardened)
- secp256k1: m/54'/784'/{account}'/{change}/{address}   (last two unhardened)
"""

from __future__ import annotations
import logging
from typing import Optional, Tuple, Union

from bip_utils import Bip32KeyError, Bip32PathError, Bip32Slip10Ed25519, Bip32Slip10Secp256k1
from mnemonic import Mnemonic

from ..crypto.keypair import SuiKeyPair
from ..enums import SignatureScheme
from ..runtime.errors import DerivationError, InvalidMnemonicError, KeyEncodingError
from .record import KeyRecord

logger = logging.getLogger(__name__)

HARDENED_OFFSET = 0x80000000
MNEMONIC_LANGUAGE = "english"
MNEMONIC_STRENGTH = 128  # 12 words

SUI_COIN_TYPE = 784
ED25519_PURPOSE = 44
SECP256K1_PURPOSE = 54
PATH_DEPTH = 5


class DerivationPath:
    """
    Parsed BIP32 path such as m/44'/784'/0'/0'/0'.

    Components are (index, hardened) pairs; `'`, `h` or `H` mark hardening.
    """

    __slots__ = ("_components",)

    def __init__(self, components: Tuple[Tuple[int, bool], ...]):
        for index, _ in components:
            if not 0 <= index < HARDENED_OFFSET:
                raise DerivationError(f"Derivation index out of range: {index}")
        self._components = tuple(components)

    @classmethod
    def parse(cls, path: str) -> DerivationPath:
        """
        Parse a textual path.

        Raises:
            DerivationError: If the path is malformed
        """
        if not isinstance(path, str):
            raise DerivationError(f"Derivation path must be a string, got {type(path).__name__}")
        parts = path.strip().split("/")
        if parts[0] != "m":
            raise DerivationError(f"Derivation path must start with 'm': {path}")

        components = []
        for part in parts[1:]:
            hardened = part.endswith(("'", "h", "H"))
            digits = part[:-1] if hardened else part
            if not (digits.isascii() and digits.isdigit()):
                raise DerivationError(f"Invalid derivation path component '{part}' in {path}")
            components.append((int(digits), hardened))
        return cls(tuple(components))

    @property
    def components(self) -> Tuple[Tuple[int, bool], ...]:
        return self._components

    def child_indexes(self) -> Tuple[int, ...]:
        """Indexes with the hardened bit applied, ready for child derivation."""
        return tuple(index + HARDENED_OFFSET if hardened else index
                     for index, hardened in self._components)

    def __len__(self) -> int:
        return len(self._components)

    def __eq__(self, other) -> bool:
        if isinstance(other, DerivationPath):
            return self._components == other._components
        elif isinstance(other, str):
            return str(self) == other
        return False

    def __hash__(self) -> int:
        return hash(str(self))

    def __str__(self) -> str:
        return "/".join(["m"] + [f"{index}'" if hardened else str(index)
                                 for index, hardened in self._components])

    def __repr__(self) -> str:
        return f"DerivationPath('{self}')"


PathLike = Union[DerivationPath, str]

DEFAULT_ED25519_PATH = DerivationPath.parse("m/44'/784'/0'/0'/0'")
DEFAULT_SECP256K1_PATH = DerivationPath.parse("m/54'/784'/0'/0/0")


def default_derivation_path(scheme: SignatureScheme) -> DerivationPath:
    if scheme == SignatureScheme.SECP256K1:
        return DEFAULT_SECP256K1_PATH
    return DEFAULT_ED25519_PATH


def validate_derivation_path(path: Optional[PathLike], scheme: SignatureScheme) -> DerivationPath:
    """
    Resolve `path` (or the scheme default) and check it suits `scheme`.

    Raises:
        DerivationError: If the path is malformed or not allowed for the scheme
    """
    if path is None:
        return default_derivation_path(scheme)
    if not isinstance(path, DerivationPath):
        path = DerivationPath.parse(path)

    if len(path) != PATH_DEPTH:
        raise DerivationError(f"Invalid derivation path {path}: expected {PATH_DEPTH} levels",
                              {"path": str(path), "scheme": str(scheme)})

    (purpose, purpose_h), (coin, coin_h), (_, account_h), (_, change_h), (_, address_h) = path.components
    if scheme == SignatureScheme.ED25519:
        expected_purpose = ED25519_PURPOSE
        hardening_ok = all(h for _, h in path.components)
    else:
        expected_purpose = SECP256K1_PURPOSE
        hardening_ok = purpose_h and coin_h and account_h and not change_h and not address_h

    if purpose != expected_purpose or coin != SUI_COIN_TYPE or not hardening_ok:
        raise DerivationError(f"Invalid derivation path {path} for {scheme}",
                              {"path": str(path), "scheme": str(scheme)})
    return path


def derive_private_key(seed: bytes, path: DerivationPath, scheme: SignatureScheme) -> bytes:
    """
    Walk `path` from the master key of `seed` and return the raw 32-byte secret.

    Ed25519 uses SLIP-0010, secp256k1 uses BIP32. No Sui path rules apply here.

    Raises:
        DerivationError: If the library rejects the seed or a child index
    """
    bip32_cls = Bip32Slip10Ed25519 if scheme == SignatureScheme.ED25519 else Bip32Slip10Secp256k1
    try:
        ctx = bip32_cls.FromSeed(seed)
        for index in path.child_indexes():
            ctx = ctx.ChildKey(index)
        return ctx.PrivateKey().Raw().ToBytes()
    except (Bip32KeyError, Bip32PathError, ValueError) as e:
        raise DerivationError(f"Key derivation failed for {path}", {"path": str(path)}, cause=e) from e


def derive_key_pair_from_path(
    seed: bytes,
    derivation_path: Optional[PathLike],
    scheme: Union[SignatureScheme, str],
) -> KeyRecord:
    """
    Derive a keypair from a BIP39 seed.

    Args:
        seed: Seed bytes (typically 64 bytes from a mnemonic)
        derivation_path: Path to derive; scheme default when None
        scheme: Signature scheme of the derived key

    Returns:
        Key record with the derived keypair and its address

    Raises:
        DerivationError: If the path, scheme or seed is rejected
    """
    try:
        scheme = SignatureScheme.parse(scheme)
    except ValueError as e:
        raise DerivationError(str(e), cause=e) from e
    path = validate_derivation_path(derivation_path, scheme)

    private_key_bytes = derive_private_key(seed, path, scheme)
    try:
        keypair = SuiKeyPair.from_private_bytes(scheme, private_key_bytes)
    except KeyEncodingError as e:
        raise DerivationError(f"Derived key for {path} is unusable", {"path": str(path)}, cause=e) from e

    record = KeyRecord.from_keypair(keypair)
    logger.debug(f"Derived {scheme} key {record.address} at {path}")
    return record


# --------- BIP39 ----------

def _mnemo() -> Mnemonic:
    return Mnemonic(MNEMONIC_LANGUAGE)


def normalize_phrase(phrase: str) -> str:
    return " ".join(phrase.split())


def generate_mnemonic() -> str:
    """Generate a fresh 12-word English phrase."""
    return _mnemo().generate(strength=MNEMONIC_STRENGTH)


def validate_mnemonic(phrase: str) -> str:
    """
    Check a phrase against the wordlist and its checksum.

    Returns:
        The whitespace-normalized phrase

    Raises:
        InvalidMnemonicError: If the phrase is empty or fails validation
    """
    if not isinstance(phrase, str) or not phrase.strip():
        raise InvalidMnemonicError("Invalid mnemonic phrase: empty")
    normalized = normalize_phrase(phrase)
    if not _mnemo().check(normalized):
        raise InvalidMnemonicError("Invalid mnemonic phrase: unknown word or bad checksum")
    return normalized


def mnemonic_to_seed(phrase: str, passphrase: str = "") -> bytes:
    """Stretch a phrase into a 64-byte BIP39 seed."""
    return Mnemonic.to_seed(normalize_phrase(phrase), passphrase)


__all__ = [
    "DerivationPath",
    "PathLike",
    "DEFAULT_ED25519_PATH",
    "DEFAULT_SECP256K1_PATH",
    "default_derivation_path",
    "validate_derivation_path",
    "derive_private_key",
    "derive_key_pair_from_path",
    "generate_mnemonic",
    "validate_mnemonic",
    "mnemonic_to_seed",
    "normalize_phrase",
]
