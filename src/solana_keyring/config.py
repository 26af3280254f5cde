"""
Keyring configuration.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from .crypto.derivation import DerivationPath
from .crypto.mnemonic import DEFAULT_LANGUAGE

# Prefix used by Solana off-chain message signing; no valid transaction
# message starts with 0xff.
OFFCHAIN_MESSAGE_PREFIX = b"\xffsolana offchain"


@dataclass
class KeyringConfig:
    """Configuration shared by keyring factories."""
    default_derivation_path: DerivationPath = DerivationPath.DEFAULT
    mnemonic_language: str = DEFAULT_LANGUAGE
    mnemonic_strength: int = 128
    # None signs messages exactly like transactions
    message_prefix: Optional[bytes] = None
    # Seconds; None leaves the device wait unbounded
    signer_timeout: Optional[float] = None

    def message_bytes(self, payload: bytes) -> bytes:
        """Bytes actually signed by ``sign_message``."""
        if self.message_prefix:
            return bytes(self.message_prefix) + bytes(payload)
        return bytes(payload)


DEFAULT_CONFIG = KeyringConfig()
