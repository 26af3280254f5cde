"""
Shared fixtures for keyring tests.
"""
import sys
import pathlib
import pytest

# Ensure tests/helpers is importable from nested test packages
TESTS_DIR = pathlib.Path(__file__).parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

from helpers import ABANDON_MNEMONIC, SoftwareDevice, mk_keypair


@pytest.fixture
def fake_keypair():
    """Provide a deterministic key pair for testing."""
    return mk_keypair(b"test_seed_for_deterministic_key_pair")


@pytest.fixture
def abandon_mnemonic():
    """BIP-39 test phrase with a well-known seed."""
    return ABANDON_MNEMONIC


@pytest.fixture
def simple_factory():
    from solana_keyring.keys.simple import SimpleKeyringFactory
    return SimpleKeyringFactory()


@pytest.fixture
def hd_factory():
    from solana_keyring.keys.hd import HdKeyringFactory
    return HdKeyringFactory()


@pytest.fixture
def software_device():
    """Emulated hardware signer holding one account at 44'/501'/0'/0'."""
    device = SoftwareDevice()
    device.add_account("44'/501'/0'/0'", mk_keypair(1))
    return device


@pytest.fixture
def device_transport(software_device):
    from solana_keyring.signers.transport import CallbackSignerTransport
    return CallbackSignerTransport(software_device)
