"""
Solana Keyring

Key custody for a Solana wallet: simple secret-key keyrings, HD keyrings
derived from BIP-39 seed words, and hardware-delegated keyrings.
"""

from .config import KeyringConfig, OFFCHAIN_MESSAGE_PREFIX
from .runtime.errors import *
from .crypto import *
from .signers import *
from .keys import *

__version__ = "0.1.0"
