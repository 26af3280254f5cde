"""
SLIP-0010 derivation and path template tests.
"""

import pytest

from solana_keyring.crypto.derivation import (
    DerivationPath,
    derive_keypair,
    derive_keypairs,
    derive_path_seed,
    master_key,
    parse_path,
    HARDENED_OFFSET,
)
from solana_keyring.crypto.ed25519 import KeyPair
from solana_keyring.crypto.mnemonic import mnemonic_to_seed
from solana_keyring.runtime.errors import DecodeError, InvalidAccountIndexError

# SLIP-0010 test vector 1 for ed25519
SLIP10_SEED = bytes.fromhex("000102030405060708090a0b0c0d0e0f")


class TestSlip10Vectors:

    def test_master_key(self):
        key, chain_code = master_key(SLIP10_SEED)
        assert bytes(key).hex() == "2b4be7f19ee27bbf30c667b642d5f4aa69fd169872f8fc3059c08ebae2eb19e7"
        assert bytes(chain_code).hex() == "90046a93de5380a72b5e45010748567d5ea02bbf6522f979e05c0d8d8ca9fffb"

    def test_master_public_key(self):
        key, _ = master_key(SLIP10_SEED)
        keypair = KeyPair.from_seed(key)
        assert keypair.public_key_bytes().hex() == (
            "a4b2856bfec510abab89753fac1ac0e1112364e7d250545963f135f2a33188ed"
        )

    def test_first_hardened_child(self):
        child = derive_path_seed(SLIP10_SEED, "m/0'")
        assert bytes(child).hex() == "68e0fe46dfb67e368c75379acec591dad19df3cde26e63b93a8e704f1dade7a3"


class TestPathTemplates:

    def test_default_is_bip44_change(self):
        assert DerivationPath.DEFAULT is DerivationPath.BIP44_CHANGE
        assert DerivationPath.DEFAULT.value == "bip44-change"

    def test_bip44_path(self):
        assert DerivationPath.BIP44.path_for(3) == "m/44'/501'/3'"

    def test_bip44_change_path(self):
        assert DerivationPath.BIP44_CHANGE.path_for(3) == "m/44'/501'/3'/0'"

    def test_parse_known_names(self):
        assert DerivationPath.parse("bip44") is DerivationPath.BIP44
        assert DerivationPath.parse("bip44-change") is DerivationPath.BIP44_CHANGE

    def test_parse_unknown_name(self):
        with pytest.raises(DecodeError):
            DerivationPath.parse("bip84")

    @pytest.mark.parametrize("index", [-1, HARDENED_OFFSET, True, "0", 1.5])
    def test_invalid_index(self, index):
        with pytest.raises(InvalidAccountIndexError):
            DerivationPath.DEFAULT.path_for(index)


class TestParsePath:

    def test_hardened_components(self):
        assert parse_path("m/44'/501'") == [44 + HARDENED_OFFSET, 501 + HARDENED_OFFSET]

    def test_h_suffix(self):
        assert parse_path("m/44h/501h") == parse_path("m/44'/501'")

    def test_rejects_unhardened(self):
        with pytest.raises(DecodeError):
            parse_path("m/44'/501'/0")

    def test_rejects_missing_root(self):
        with pytest.raises(DecodeError):
            parse_path("44'/501'")


class TestDeriveKeypair:

    def test_same_inputs_same_key(self, abandon_mnemonic):
        seed = mnemonic_to_seed(abandon_mnemonic)
        first = derive_keypair(seed, 7, DerivationPath.DEFAULT)
        second = derive_keypair(bytes(seed), 7, DerivationPath.DEFAULT)
        assert first.address == second.address

    def test_index_and_template_change_key(self, abandon_mnemonic):
        seed = mnemonic_to_seed(abandon_mnemonic)
        addresses = {
            derive_keypair(seed, 0, DerivationPath.BIP44).address,
            derive_keypair(seed, 0, DerivationPath.BIP44_CHANGE).address,
            derive_keypair(seed, 1, DerivationPath.BIP44_CHANGE).address,
        }
        assert len(addresses) == 3

    def test_matches_explicit_path(self, abandon_mnemonic):
        seed = mnemonic_to_seed(abandon_mnemonic)
        expected = KeyPair.from_seed(derive_path_seed(seed, "m/44'/501'/2'/0'"))
        assert derive_keypair(seed, 2).address == expected.address

    def test_derive_keypairs_preserves_order(self, abandon_mnemonic):
        seed = mnemonic_to_seed(abandon_mnemonic)
        keypairs = derive_keypairs(seed, DerivationPath.DEFAULT, [5, 0, 3])
        assert [kp.address for kp in keypairs] == [
            derive_keypair(seed, 5).address,
            derive_keypair(seed, 0).address,
            derive_keypair(seed, 3).address,
        ]
