"""
Cryptographic primitives for the keyring family.

Provides Ed25519 key pairs, BIP-39 mnemonics and SLIP-0010 derivation.
"""

from .ed25519 import Ed25519PublicKey, KeyPair
from .mnemonic import validate_mnemonic, mnemonic_to_seed, generate_mnemonic
from .derivation import DerivationPath, derive_keypair, derive_keypairs, validate_account_index

__all__ = [
    "Ed25519PublicKey",
    "KeyPair",
    "validate_mnemonic",
    "mnemonic_to_seed",
    "generate_mnemonic",
    "DerivationPath",
    "derive_keypair",
    "derive_keypairs",
    "validate_account_index",
]
