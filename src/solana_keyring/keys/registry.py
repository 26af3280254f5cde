r"""
Keyring kind registry.

Dispatches persisted records to the factory for their keyring kind.
"""

from __future__ import annotations
from typing import Any, Dict, Optional, Type, Union
import logging

from ..config import KeyringConfig
from ..runtime.errors import UnsupportedOperationError
from ..signers.transport import SignerTransport
from .base import Keyring, KeyringFactory, KeyringKind
from .hd import HdKeyringFactory
from .ledger import LedgerKeyringFactory
from .simple import SimpleKeyringFactory

logger = logging.getLogger(__name__)


class KeyringRegistry:
    """Registry of factory classes keyed by ``KeyringKind``."""

    _factories: Dict[KeyringKind, Type[KeyringFactory]] = {
        KeyringKind.SIMPLE: SimpleKeyringFactory,
        KeyringKind.HD: HdKeyringFactory,
        KeyringKind.LEDGER: LedgerKeyringFactory,
    }

    @classmethod
    def parse_kind(cls, kind: Union[str, KeyringKind]) -> KeyringKind:
        """
        Normalize a kind tag.

        Raises:
            UnsupportedOperationError: If the kind is unknown
        """
        if isinstance(kind, KeyringKind):
            return kind
        try:
            return KeyringKind(str(kind).lower())
        except ValueError as e:
            raise UnsupportedOperationError(f"Unknown keyring kind: {kind}", cause=e)

    @classmethod
    def register(cls, kind: KeyringKind, factory_class: Type[KeyringFactory]) -> None:
        """Register or replace the factory for a kind."""
        cls._factories[kind] = factory_class
        logger.debug(f"Registered keyring factory {factory_class.__name__} for {kind.value}")

    @classmethod
    def is_supported(cls, kind: Union[str, KeyringKind]) -> bool:
        try:
            return cls.parse_kind(kind) in cls._factories
        except UnsupportedOperationError:
            return False

    @classmethod
    def get_factory(
        cls,
        kind: Union[str, KeyringKind],
        config: Optional[KeyringConfig] = None,
        transport: Optional[SignerTransport] = None
    ) -> KeyringFactory:
        """
        Instantiate the factory for a kind.

        Args:
            kind: Keyring kind
            config: Configuration for software keyrings
            transport: Signer transport for hardware keyrings
        """
        kind = cls.parse_kind(kind)
        factory_class = cls._factories.get(kind)
        if factory_class is None:
            raise UnsupportedOperationError(f"No factory registered for {kind.value}")
        if kind is KeyringKind.LEDGER:
            return factory_class(transport)
        return factory_class(config)


def get_factory(kind: Union[str, KeyringKind], **kwargs) -> KeyringFactory:
    """Instantiate the factory for a keyring kind."""
    return KeyringRegistry.get_factory(kind, **kwargs)


def keyring_from_json(
    kind: Union[str, KeyringKind],
    record: Any,
    config: Optional[KeyringConfig] = None,
    transport: Optional[SignerTransport] = None
) -> Keyring:
    """
    Reconstruct a keyring of any kind from its persisted record.

    Raises:
        UnsupportedOperationError: If the kind is unknown
        DecodeError: If the record is malformed
    """
    factory = KeyringRegistry.get_factory(kind, config=config, transport=transport)
    return factory.from_json(record)


__all__ = [
    "KeyringRegistry",
    "get_factory",
    "keyring_from_json",
]
