r"""
Simple keyring: custody and signing over an explicit, flat set of key pairs.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional
import logging
import threading

from ..config import KeyringConfig, DEFAULT_CONFIG
from ..crypto.ed25519 import KeyPair
from ..runtime.encoding import encode_signature
from ..runtime.errors import KeyNotFoundError, KeyringWipedError
from .base import Keyring, KeyringFactory, KeyringKind
from .records import SimpleKeyringJson, parse_record

logger = logging.getLogger(__name__)


class SimpleKeyring(Keyring):
    """
    Ordered collection of independently supplied key pairs.

    Order is insertion order and survives serialization. Duplicate public keys
    are not rejected on import; lookups return the first match.
    """

    kind = KeyringKind.SIMPLE

    def __init__(self, keypairs: Optional[Iterable[KeyPair]] = None,
                 config: Optional[KeyringConfig] = None):
        """
        Initialize keyring.

        Args:
            keypairs: Key pairs now exclusively owned by this keyring
            config: Keyring configuration
        """
        self.config = config or DEFAULT_CONFIG
        self._keypairs: List[KeyPair] = list(keypairs or [])
        self._lock = threading.RLock()
        self._wiped = False

    @property
    def keypairs(self) -> List[KeyPair]:
        """Snapshot of the stored key pairs."""
        return list(self._keypairs)

    def public_keys(self) -> List[str]:
        return [kp.address for kp in self._keypairs]

    def find_keypair(self, address: str) -> Optional[KeyPair]:
        """Linear scan for the first key pair with ``address``."""
        for kp in self._keypairs:
            if kp.address == address:
                return kp
        return None

    @property
    def wiped(self) -> bool:
        return self._wiped

    def _require_live(self, operation: str) -> None:
        if self._wiped:
            raise KeyringWipedError(details={"operation": operation})

    def _require_keypair(self, address: str, operation: str) -> KeyPair:
        kp = self.find_keypair(address)
        if kp is None:
            raise KeyNotFoundError(
                f"unable to find {address}",
                details={"address": address, "operation": operation}
            )
        return kp

    def delete_public_key(self, address: str) -> None:
        with self._lock:
            for position, kp in enumerate(self._keypairs):
                if kp.address == address:
                    self._keypairs = self._keypairs[:position] + self._keypairs[position + 1:]
                    kp.wipe()
                    logger.debug(f"Deleted key {address}")
                    return

    def import_secret_key(self, secret_key: str) -> str:
        self._require_live("import_secret_key")
        kp = KeyPair.from_secret_hex(secret_key)
        self.add_keypair(kp)
        logger.debug(f"Imported key {kp.address}")
        return kp.address

    def add_keypair(self, keypair: KeyPair) -> str:
        """Append an already-decoded key pair; ownership moves to this keyring."""
        with self._lock:
            self._require_live("add_keypair")
            self._keypairs = self._keypairs + [keypair]
        return keypair.address

    def export_secret_key(self, address: str) -> Optional[str]:
        kp = self.find_keypair(address)
        if kp is None:
            return None
        return kp.secret_hex()

    def sign_transaction(self, payload: bytes, address: str) -> str:
        """
        Sign a transaction with a detached Ed25519 signature.

        Args:
            payload: Serialized transaction message
            address: Address of the signing key

        Returns:
            Base-58 signature

        Raises:
            KeyNotFoundError: If the address is unknown
        """
        kp = self._require_keypair(address, "sign_transaction")
        return encode_signature(kp.sign(payload))

    def sign_message(self, payload: bytes, address: str) -> str:
        """
        Sign an arbitrary message.

        Without a configured ``message_prefix`` this is byte-for-byte the same
        signature ``sign_transaction`` produces, so a signed message can be
        replayed as a transaction signature.
        """
        kp = self._require_keypair(address, "sign_message")
        return encode_signature(kp.sign(self.config.message_bytes(payload)))

    def to_json(self) -> Dict[str, Any]:
        self._require_live("to_json")
        return {"secretKeys": [kp.secret_hex() for kp in self._keypairs]}

    def wipe(self) -> None:
        """
        Zero every secret and empty the keyring.

        Import and serialization fail afterwards, so an emptied keyring cannot
        be persisted over its stored record.
        """
        with self._lock:
            for kp in self._keypairs:
                kp.wipe()
            self._keypairs = []
            self._wiped = True

    def __enter__(self) -> SimpleKeyring:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.wipe()

    def __str__(self) -> str:
        return f"SimpleKeyring({len(self._keypairs)} keys)"

    def __repr__(self) -> str:
        return f"SimpleKeyring(keys={len(self._keypairs)})"


def _decode_secrets(secret_keys: Iterable[str]) -> List[KeyPair]:
    keypairs = []
    try:
        for secret in secret_keys:
            keypairs.append(KeyPair.from_secret_hex(secret))
    except Exception:
        for kp in keypairs:
            kp.wipe()
        raise
    return keypairs


class SimpleKeyringFactory(KeyringFactory):
    """Builds simple keyrings from secrets or persisted records."""

    kind = KeyringKind.SIMPLE

    def __init__(self, config: Optional[KeyringConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def from_secret_keys(self, secret_keys: Iterable[str]) -> SimpleKeyring:
        """
        Create a keyring from hex secret keys, preserving order.

        Raises:
            DecodeError: If any secret is malformed
        """
        keyring = SimpleKeyring(_decode_secrets(secret_keys), self.config)
        logger.debug(f"Created simple keyring with {len(keyring)} keys")
        return keyring

    def from_json(self, record: Any, **kwargs) -> SimpleKeyring:
        """
        Create a keyring from a ``{"secretKeys": [...]}`` record.

        Raises:
            DecodeError: If the record or any secret is malformed
        """
        parsed = parse_record(SimpleKeyringJson, record)
        return self.from_secret_keys(parsed.secret_keys)

    def generate(self, count: int = 1) -> SimpleKeyring:
        """Create a keyring holding ``count`` fresh random keys."""
        if count < 0:
            raise ValueError("count must be non-negative")
        return SimpleKeyring([KeyPair.generate() for _ in range(count)], self.config)


__all__ = [
    "SimpleKeyring",
    "SimpleKeyringFactory",
]
