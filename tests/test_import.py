"""Test basic imports from the package."""

import pytest


def test_main_import():
    """Test that the main package imports successfully."""
    import solana_keyring
    assert solana_keyring.__version__ == "0.1.0"
    assert hasattr(solana_keyring, 'SimpleKeyring')
    assert hasattr(solana_keyring, 'HdKeyring')
    assert hasattr(solana_keyring, 'LedgerKeyring')


def test_crypto_import():
    """Test crypto module imports."""
    import solana_keyring.crypto as crypto
    assert hasattr(crypto, 'KeyPair')
    assert hasattr(crypto, 'DerivationPath')


def test_signers_import():
    """Test signers module imports."""
    import solana_keyring.signers as signers
    assert hasattr(signers, 'SignerTransport')
    assert hasattr(signers, 'CallbackSignerTransport')


def test_keys_import():
    """Test keys module imports."""
    import solana_keyring.keys as keys
    assert hasattr(keys, 'KeyringRegistry')
    assert hasattr(keys, 'keyring_from_json')


def test_runtime_import():
    """Test runtime module imports."""
    import solana_keyring.runtime as runtime
    assert hasattr(runtime, 'KeyringError')
    assert hasattr(runtime, 'encode_address')
