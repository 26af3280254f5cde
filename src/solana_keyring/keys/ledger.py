r"""
Hardware-delegated keyring.

Holds only public keys and device routing information; every signature is
produced on the device through a ``SignerTransport``. No private key material
ever enters this process.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional, Union
import json
import logging

from ..runtime.encoding import encode_payload
from ..runtime.errors import (
    DecodeError,
    DuplicateKeyError,
    KeyNotFoundError,
    UnsupportedOperationError,
)
from ..signers.transport import SignMethod, SignRequest, SignerTransport
from .base import Keyring, KeyringFactory, KeyringKind
from .records import DerivationRecord, LedgerKeyringJson, parse_record

logger = logging.getLogger(__name__)

RecordLike = Union[DerivationRecord, Dict[str, Any]]


def _to_record(record: RecordLike) -> DerivationRecord:
    return parse_record(DerivationRecord, record)


class LedgerKeyring(Keyring):
    """
    Address book of device-held accounts.

    Signing suspends the caller until the device answers, is cancelled, or the
    transport times out. Failures are never retried here.
    """

    kind = KeyringKind.LEDGER

    def __init__(self, derivation_paths: Iterable[RecordLike], transport: SignerTransport):
        """
        Initialize keyring.

        Args:
            derivation_paths: Device routing records
            transport: Channel to the hardware signer
        """
        self._derivation_paths: List[DerivationRecord] = [_to_record(r) for r in derivation_paths]
        self.transport = transport

    @property
    def derivation_paths(self) -> List[DerivationRecord]:
        return list(self._derivation_paths)

    def public_keys(self) -> List[str]:
        return [record.public_key for record in self._derivation_paths]

    def find_record(self, address: str) -> Optional[DerivationRecord]:
        for record in self._derivation_paths:
            if record.public_key == address:
                return record
        return None

    def delete_public_key(self, address: str) -> None:
        self._derivation_paths = [r for r in self._derivation_paths if r.public_key != address]

    def ledger_import(self, path: str, account: int, public_key: str) -> DerivationRecord:
        """
        Register a device account.

        Raises:
            DuplicateKeyError: If the address is already registered
        """
        if self.find_record(public_key) is not None:
            raise DuplicateKeyError(
                "ledger account already exists",
                details={"address": public_key}
            )
        record = _to_record({"publicKey": public_key, "path": path, "account": account})
        self._derivation_paths = self._derivation_paths + [record]
        logger.debug(f"Imported ledger account {account} ({path}): {public_key}")
        return record

    async def _sign(self, method: SignMethod, payload: bytes, address: str) -> str:
        record = self.find_record(address)
        if record is None:
            raise KeyNotFoundError(
                "ledger address not found",
                details={"address": address, "operation": method.value}
            )
        request = SignRequest(
            method=method,
            encoded_payload=encode_payload(payload),
            device_path=record.path,
            account_number=record.account
        )
        response = await self.transport.request(request)
        return response.signature

    async def sign_transaction(self, payload: bytes, address: str) -> str:
        """
        Ask the device to sign a transaction.

        Returns:
            The device's signature, verbatim

        Raises:
            KeyNotFoundError: If the address is not registered
            ExternalSignerError: On rejection, disconnection or timeout
        """
        return await self._sign(SignMethod.SIGN_TRANSACTION, payload, address)

    async def sign_message(self, payload: bytes, address: str) -> str:
        """
        Ask the device to sign a message.

        The device distinguishes the two methods itself.
        """
        return await self._sign(SignMethod.SIGN_MESSAGE, payload, address)

    def export_secret_key(self, address: str) -> Optional[str]:
        """Secrets stay on the device; always None."""
        return None

    def import_secret_key(self, secret_key: str) -> str:
        raise UnsupportedOperationError(
            "ledger keyring cannot import secret keys",
            details={"operation": "import_secret_key"}
        )

    def to_json(self) -> Dict[str, Any]:
        return {"derivationPaths": [record.to_dict() for record in self._derivation_paths]}

    def to_string(self) -> str:
        """Serialize to JSON text."""
        return json.dumps(self.to_json())

    @classmethod
    def from_string(cls, serialized: str, transport: SignerTransport) -> LedgerKeyring:
        """
        Parse JSON text produced by ``to_string``.

        Raises:
            DecodeError: If the text is not a valid record
        """
        try:
            data = json.loads(serialized)
        except (TypeError, ValueError) as e:
            raise DecodeError("Invalid ledger keyring JSON", cause=e)
        parsed = parse_record(LedgerKeyringJson, data)
        return cls(parsed.derivation_paths, transport)

    def __str__(self) -> str:
        return f"LedgerKeyring({len(self._derivation_paths)} accounts)"

    def __repr__(self) -> str:
        return f"LedgerKeyring(accounts={len(self._derivation_paths)})"


class LedgerKeyringFactory(KeyringFactory):
    """Builds ledger keyrings bound to a signer transport."""

    kind = KeyringKind.LEDGER

    def __init__(self, transport: Optional[SignerTransport] = None):
        self.transport = transport

    def _transport(self, transport: Optional[SignerTransport]) -> SignerTransport:
        transport = transport or self.transport
        if transport is None:
            raise ValueError("A signer transport is required for ledger keyrings")
        return transport

    def from_accounts(self, accounts: Iterable[RecordLike],
                      transport: Optional[SignerTransport] = None) -> LedgerKeyring:
        """Create a keyring from device account records."""
        keyring = LedgerKeyring(accounts, self._transport(transport))
        logger.debug(f"Created ledger keyring with {len(keyring)} accounts")
        return keyring

    def from_json(self, record: Any, transport: Optional[SignerTransport] = None,
                  **kwargs) -> LedgerKeyring:
        """
        Create a keyring from a ``{"derivationPaths": [...]}`` record.

        Raises:
            DecodeError: If the record is malformed
        """
        parsed = parse_record(LedgerKeyringJson, record)
        return LedgerKeyring(parsed.derivation_paths, self._transport(transport))

    def from_string(self, serialized: str,
                    transport: Optional[SignerTransport] = None) -> LedgerKeyring:
        """Create a keyring from JSON text."""
        return LedgerKeyring.from_string(serialized, self._transport(transport))


__all__ = [
    "LedgerKeyring",
    "LedgerKeyringFactory",
]
