"""
Test the SuiKeystore facade.

End-to-end flows: generate, import, reload and sign through one facade over
either backend.
"""

import pytest

from sui_keystore.crypto.keypair import SuiKeyPair
from sui_keystore.enums import SignatureScheme
from sui_keystore.keys.derivation import derive_key_pair_from_path, mnemonic_to_seed
from sui_keystore.keys.keystore import FileBasedKeystore, InMemKeystore
from sui_keystore.keys.wallet import SuiKeystore
from sui_keystore.runtime.address import SuiAddress
from sui_keystore.runtime.errors import DerivationError, InvalidMnemonicError, KeyNotFoundError


@pytest.fixture
def file_keystore(keystore_path):
    return SuiKeystore(FileBasedKeystore.load_or_create(keystore_path))


@pytest.fixture
def mem_keystore():
    return SuiKeystore(InMemKeystore())


class TestGenerateNewKey:
    """Test fresh key generation."""

    def test_generated_key_is_listed_and_signs(self, file_keystore):
        address, phrase, scheme = file_keystore.generate_new_key(SignatureScheme.ED25519, None)

        assert scheme == SignatureScheme.ED25519
        assert address in file_keystore.addresses()
        assert file_keystore.sign(address, b"hello").verify(b"hello")
        assert len(phrase.split()) == 12

    def test_phrase_reproduces_address(self, mem_keystore):
        """The returned phrase is a full backup of the key."""
        address, phrase, scheme = mem_keystore.generate_new_key(SignatureScheme.SECP256K1)

        other = SuiKeystore(InMemKeystore())

        assert other.import_from_mnemonic(phrase, scheme) == address

    def test_scheme_name_accepted(self, mem_keystore):
        _, _, scheme = mem_keystore.generate_new_key("secp256k1")

        assert scheme == SignatureScheme.SECP256K1
        assert mem_keystore.keys()[0].scheme == SignatureScheme.SECP256K1

    def test_custom_path(self, mem_keystore):
        address, phrase, _ = mem_keystore.generate_new_key(SignatureScheme.ED25519, "m/44'/784'/2'/0'/0'")

        record = derive_key_pair_from_path(mnemonic_to_seed(phrase), "m/44'/784'/2'/0'/0'",
                                           SignatureScheme.ED25519)
        assert record.address == address

    def test_bad_path_stores_nothing(self, file_keystore, keystore_path):
        with pytest.raises(DerivationError):
            file_keystore.generate_new_key(SignatureScheme.ED25519, "m/44'/784'/0'/0/0")

        assert file_keystore.keys() == []
        assert not keystore_path.exists()

    def test_unknown_scheme(self, mem_keystore):
        with pytest.raises(DerivationError):
            mem_keystore.generate_new_key("rsa")

        assert len(mem_keystore) == 0


class TestImportFromMnemonic:
    """Test mnemonic import."""

    def test_import_is_idempotent(self, file_keystore, test_mnemonic):
        first = file_keystore.import_from_mnemonic(test_mnemonic, SignatureScheme.ED25519)
        second = file_keystore.import_from_mnemonic(test_mnemonic, SignatureScheme.ED25519)

        assert first == second
        assert file_keystore.addresses() == [first]

    def test_import_matches_derivation(self, mem_keystore, test_mnemonic):
        address = mem_keystore.import_from_mnemonic(test_mnemonic, SignatureScheme.ED25519, None)
        record = derive_key_pair_from_path(mnemonic_to_seed(test_mnemonic), None, SignatureScheme.ED25519)

        assert address == record.address
        assert mem_keystore.keys() == [record.keypair.public()]

    def test_empty_phrase_stores_nothing(self, file_keystore, keystore_path):
        with pytest.raises(InvalidMnemonicError):
            file_keystore.import_from_mnemonic("", SignatureScheme.ED25519, None)

        assert file_keystore.keys() == []
        assert not keystore_path.exists()

    def test_bad_checksum(self, mem_keystore):
        with pytest.raises(InvalidMnemonicError):
            mem_keystore.import_from_mnemonic("abandon " * 12, SignatureScheme.ED25519)

    def test_invalid_path(self, mem_keystore, test_mnemonic):
        with pytest.raises(DerivationError):
            mem_keystore.import_from_mnemonic(test_mnemonic, SignatureScheme.SECP256K1, "m/54'/784'/0'/0'/0'")

        assert mem_keystore.keys() == []

    def test_both_schemes_side_by_side(self, mem_keystore, test_mnemonic):
        ed = mem_keystore.import_from_mnemonic(test_mnemonic, SignatureScheme.ED25519)
        secp = mem_keystore.import_from_mnemonic(test_mnemonic, SignatureScheme.SECP256K1)

        assert ed != secp
        assert set(mem_keystore.addresses()) == {ed, secp}


class TestFacadeDelegation:
    """Test pass-through operations."""

    def test_add_key_and_sign(self, mem_keystore, ed25519_keypair):
        mem_keystore.add_key(ed25519_keypair)

        signature = mem_keystore.sign(ed25519_keypair.address(), b"hello")

        assert ed25519_keypair.public().verify(b"hello", signature)

    def test_addresses_follow_keys(self):
        keystore = SuiKeystore(InMemKeystore(4))

        assert keystore.addresses() == [key.to_address() for key in keystore.keys()]

    def test_sign_unknown_address(self, mem_keystore):
        with pytest.raises(KeyNotFoundError):
            mem_keystore.sign(SuiAddress(b"\x01" * 20), b"hello")

    def test_backend_must_be_account_keystore(self):
        with pytest.raises(TypeError):
            SuiKeystore(object())

    def test_backend_property(self):
        backend = InMemKeystore(1)

        assert SuiKeystore(backend).backend is backend


class TestScenarios:
    """Whole lifecycles across facade instances."""

    def test_reload_from_same_path(self, keystore_path):
        first = SuiKeystore(FileBasedKeystore.load_or_create(keystore_path))
        address, _, _ = first.generate_new_key(SignatureScheme.ED25519, None)
        keys_before = first.keys()

        second = SuiKeystore(FileBasedKeystore.load_or_create(keystore_path))

        assert second.keys() == keys_before
        assert second.sign(address, b"hello").verify(b"hello")

    def test_inmem_three_keys_reproducible(self):
        first = SuiKeystore(InMemKeystore(3))
        second = SuiKeystore(InMemKeystore(3))

        assert len(set(first.addresses())) == 3
        assert first.addresses() == second.addresses()

    def test_external_keypair_persists(self, keystore_path):
        keypair = SuiKeyPair.generate(SignatureScheme.SECP256K1)
        SuiKeystore(FileBasedKeystore.load_or_create(keystore_path)).add_key(keypair)

        reloaded = SuiKeystore(FileBasedKeystore.load_or_create(keystore_path))

        assert reloaded.addresses() == [keypair.address()]
