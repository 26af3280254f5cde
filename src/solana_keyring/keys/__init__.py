"""
Keyring implementations.

Provides simple, HD and hardware-delegated keyrings with their factories.
"""

from .base import Keyring, KeyringFactory, KeyringKind
from .records import SimpleKeyringJson, HdKeyringJson, LedgerKeyringJson, DerivationRecord
from .simple import SimpleKeyring, SimpleKeyringFactory
from .hd import DerivedAccount, HdKeyring, HdKeyringFactory
from .ledger import LedgerKeyring, LedgerKeyringFactory
from .registry import KeyringRegistry, get_factory, keyring_from_json

__all__ = [
    "Keyring",
    "KeyringFactory",
    "KeyringKind",
    "SimpleKeyringJson",
    "HdKeyringJson",
    "LedgerKeyringJson",
    "DerivationRecord",
    "SimpleKeyring",
    "SimpleKeyringFactory",
    "DerivedAccount",
    "HdKeyring",
    "HdKeyringFactory",
    "LedgerKeyring",
    "LedgerKeyringFactory",
    "KeyringRegistry",
    "get_factory",
    "keyring_from_json",
]
