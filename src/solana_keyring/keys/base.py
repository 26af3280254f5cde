r"""
Base keyring interface.

Defines the capability set every keyring kind exposes. Keyrings are plain
owned values: there is no process-wide registry of live instances.

Keyrings assume a single writer. Simple and HD keyrings serialize their own
mutations with an instance lock, but callers interleaving ``derive_next`` and
``delete_public_key`` from several threads still see an unspecified order.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional


class KeyringKind(str, Enum):
    """Tag identifying a keyring implementation."""
    SIMPLE = "simple"
    HD = "hd"
    LEDGER = "ledger"


class Keyring(ABC):
    """
    Abstract keyring.

    Signing methods of hardware-delegated keyrings are coroutines; all other
    operations are synchronous.
    """

    kind: KeyringKind

    @abstractmethod
    def public_keys(self) -> List[str]:
        """
        List addresses in stored order.

        Returns:
            Base-58 addresses
        """
        pass

    @abstractmethod
    def delete_public_key(self, address: str) -> None:
        """
        Remove the entry for an address.

        Absent addresses are ignored.
        """
        pass

    @abstractmethod
    def sign_transaction(self, payload: bytes, address: str) -> Any:
        """
        Sign a serialized transaction with the key for ``address``.

        Returns:
            Base-58 signature

        Raises:
            KeyNotFoundError: If the address is unknown
        """
        pass

    @abstractmethod
    def sign_message(self, payload: bytes, address: str) -> Any:
        """
        Sign an arbitrary message with the key for ``address``.

        Raises:
            KeyNotFoundError: If the address is unknown
        """
        pass

    @abstractmethod
    def export_secret_key(self, address: str) -> Optional[str]:
        """
        Export the hex secret key for an address.

        The result is highly sensitive and must never be logged.

        Returns:
            Hex secret, or None if unknown or not held in process
        """
        pass

    @abstractmethod
    def import_secret_key(self, secret_key: str) -> str:
        """
        Add a key from its hex secret.

        Returns:
            Address of the imported key
        """
        pass

    @abstractmethod
    def to_json(self) -> Dict[str, Any]:
        """Serialize to the persisted record form."""
        pass

    def has_public_key(self, address: str) -> bool:
        """Check if the keyring holds an address."""
        return address in self.public_keys()

    def __len__(self) -> int:
        return len(self.public_keys())

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and self.has_public_key(address)


class KeyringFactory(ABC):
    """Abstract factory; ``from_json`` is the only deserialization entry point."""

    kind: KeyringKind

    @abstractmethod
    def from_json(self, record: Any, **kwargs) -> Keyring:
        """Reconstruct a keyring from its persisted record."""
        pass


__all__ = [
    "KeyringKind",
    "Keyring",
    "KeyringFactory",
]
