"""
Shared fixtures:
- deterministic keypairs for both schemes
- a valid BIP39 phrase with a known checksum
- a keystore file location under pytest's tmp_path
"""
import hashlib

import pytest

from sui_keystore.crypto.keypair import SuiKeyPair
from sui_keystore.enums import SignatureScheme

# BIP39 reference vector: 128 bits of zero entropy
TEST_MNEMONIC = (
    "abandon abandon abandon abandon abandon abandon "
    "abandon abandon abandon abandon abandon about"
)


@pytest.fixture
def test_mnemonic():
    """Provide a checksum-valid 12-word phrase."""
    return TEST_MNEMONIC


@pytest.fixture
def ed25519_keypair():
    """Provide a deterministic Ed25519 keypair."""
    seed = hashlib.sha256(b"test_seed_for_deterministic_key_pair").digest()
    return SuiKeyPair.from_private_bytes(SignatureScheme.ED25519, seed)


@pytest.fixture
def secp256k1_keypair():
    """Provide a deterministic secp256k1 keypair."""
    seed = hashlib.sha256(b"test_seed_for_deterministic_secp256k1").digest()
    return SuiKeyPair.from_private_bytes(SignatureScheme.SECP256K1, seed)


@pytest.fixture(params=[SignatureScheme.ED25519, SignatureScheme.SECP256K1], ids=str)
def any_keypair(request, ed25519_keypair, secp256k1_keypair):
    """Provide one keypair per supported scheme."""
    if request.param == SignatureScheme.ED25519:
        return ed25519_keypair
    return secp256k1_keypair


@pytest.fixture
def keystore_path(tmp_path):
    """Provide a fresh, not yet existing keystore file path."""
    return tmp_path / "sui.keystore"
