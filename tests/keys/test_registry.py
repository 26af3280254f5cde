"""
Keyring kind registry tests.
"""

import pytest

from solana_keyring.config import KeyringConfig
from solana_keyring.crypto.derivation import DerivationPath
from solana_keyring.keys.base import KeyringKind
from solana_keyring.keys.hd import HdKeyring, HdKeyringFactory
from solana_keyring.keys.ledger import LedgerKeyring, LedgerKeyringFactory
from solana_keyring.keys.registry import KeyringRegistry, get_factory, keyring_from_json
from solana_keyring.keys.simple import SimpleKeyring, SimpleKeyringFactory
from solana_keyring.runtime.errors import DecodeError, UnsupportedOperationError

from helpers import ABANDON_SEED_HEX, mk_derivation_record, mk_keypair, mk_secret_hex


@pytest.mark.unit
@pytest.mark.parametrize("kind,factory_class", [
    ("simple", SimpleKeyringFactory),
    ("hd", HdKeyringFactory),
    ("ledger", LedgerKeyringFactory),
    ("HD", HdKeyringFactory),
    (KeyringKind.SIMPLE, SimpleKeyringFactory),
])
def test_get_factory(kind, factory_class):
    assert isinstance(get_factory(kind), factory_class)


@pytest.mark.unit
def test_unknown_kind():
    assert not KeyringRegistry.is_supported("trezor")
    with pytest.raises(UnsupportedOperationError):
        get_factory("trezor")


@pytest.mark.unit
def test_config_reaches_software_factories():
    config = KeyringConfig(default_derivation_path=DerivationPath.BIP44)
    factory = KeyringRegistry.get_factory("hd", config=config)
    assert factory.config is config


@pytest.mark.unit
def test_transport_reaches_ledger_factory(device_transport):
    factory = KeyringRegistry.get_factory("ledger", transport=device_transport)
    assert factory.transport is device_transport


@pytest.mark.unit
def test_keyring_from_json_simple():
    keyring = keyring_from_json("simple", {"secretKeys": [mk_secret_hex(1)]})
    assert isinstance(keyring, SimpleKeyring)
    assert keyring.public_keys() == [mk_keypair(1).address]


@pytest.mark.unit
def test_keyring_from_json_hd():
    record = {
        "mnemonic": "",
        "seed": ABANDON_SEED_HEX,
        "accountIndices": [0, 1],
        "derivationPath": "bip44-change",
    }
    keyring = keyring_from_json("hd", record)
    assert isinstance(keyring, HdKeyring)
    assert keyring.account_indices == [0, 1]


@pytest.mark.unit
def test_keyring_from_json_ledger(device_transport):
    record = {"derivationPaths": [mk_derivation_record()]}
    keyring = keyring_from_json("ledger", record, transport=device_transport)
    assert isinstance(keyring, LedgerKeyring)
    assert keyring.to_json() == record


@pytest.mark.unit
def test_keyring_from_json_malformed():
    with pytest.raises(DecodeError):
        keyring_from_json("simple", {"secrets": []})
