r"""
Hierarchical-deterministic keyring.

Every derived key pair is recomputed from the BIP-39 seed, a path template and
an explicit account index. Index and key live together in one
``DerivedAccount`` record, so the two can never drift apart.

Keys imported by secret have no account index. They are kept in a separate
``SimpleKeyring`` and listed after the derived accounts.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union
import logging
import threading

from ..config import KeyringConfig, DEFAULT_CONFIG
from ..crypto.derivation import DerivationPath, derive_keypair, validate_account_index
from ..crypto.ed25519 import KeyPair
from ..crypto.mnemonic import generate_mnemonic, mnemonic_to_seed
from ..runtime.encoding import bytes_to_hex, encode_signature, hex_to_bytes
from ..runtime.errors import (
    DecodeError,
    InvalidAccountIndexError,
    InvariantViolation,
    KeyNotFoundError,
    KeyringWipedError,
)
from .base import Keyring, KeyringFactory, KeyringKind
from .records import HdKeyringJson, parse_record
from .simple import SimpleKeyring, SimpleKeyringFactory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DerivedAccount:
    """A derived key pair together with the index that produced it."""
    account_index: int
    keypair: KeyPair

    @property
    def address(self) -> str:
        return self.keypair.address


class HdKeyring(Keyring):
    """
    Deterministic multi-account keyring.

    Shares the simple keyring's capabilities by delegation: signing, export and
    import reach either a derived account or the imported-key store.
    """

    kind = KeyringKind.HD

    def __init__(
        self,
        mnemonic: str,
        seed: Union[bytes, bytearray],
        derivation_path: DerivationPath,
        accounts: Iterable[DerivedAccount],
        imported: Optional[SimpleKeyring] = None,
        config: Optional[KeyringConfig] = None
    ):
        """
        Initialize keyring.

        Args:
            mnemonic: Seed words the keyring was created from
            seed: BIP-39 seed; the keyring takes ownership of the buffer
            derivation_path: Path template for every derived account
            accounts: Derived accounts in stored order
            imported: Keys imported by secret
            config: Keyring configuration
        """
        self.config = config or DEFAULT_CONFIG
        self._mnemonic = mnemonic
        self._seed = seed if isinstance(seed, bytearray) else bytearray(seed)
        self._derivation_path = DerivationPath.parse(derivation_path)
        self._accounts: List[DerivedAccount] = list(accounts)
        self._imported = imported if imported is not None else SimpleKeyring(config=self.config)
        self._lock = threading.RLock()
        self._wiped = False

    @property
    def mnemonic(self) -> str:
        return self._mnemonic

    @property
    def derivation_path(self) -> DerivationPath:
        return self._derivation_path

    @property
    def accounts(self) -> List[DerivedAccount]:
        """Snapshot of the derived accounts."""
        return list(self._accounts)

    @property
    def account_indices(self) -> List[int]:
        return [account.account_index for account in self._accounts]

    @property
    def keypairs(self) -> List[KeyPair]:
        """Derived key pairs, aligned position by position with ``account_indices``."""
        return [account.keypair for account in self._accounts]

    @property
    def imported(self) -> SimpleKeyring:
        return self._imported

    def public_keys(self) -> List[str]:
        return [account.address for account in self._accounts] + self._imported.public_keys()

    @property
    def wiped(self) -> bool:
        return self._wiped

    def _require_live(self, operation: str) -> None:
        if self._wiped:
            raise KeyringWipedError(details={"operation": operation})

    def _position_of(self, address: str) -> int:
        for position, account in enumerate(self._accounts):
            if account.address == address:
                return position
        return -1

    def _find_keypair(self, address: str) -> Optional[KeyPair]:
        position = self._position_of(address)
        if position >= 0:
            return self._accounts[position].keypair
        return self._imported.find_keypair(address)

    def _require_keypair(self, address: str, operation: str) -> KeyPair:
        kp = self._find_keypair(address)
        if kp is None:
            raise KeyNotFoundError(
                f"unable to find {address}",
                details={"address": address, "operation": operation}
            )
        return kp

    def _check_alignment(self) -> None:
        indices = self.account_indices
        keypairs = self.keypairs
        if len(indices) != len(keypairs):
            raise InvariantViolation(
                "account indices and key pairs diverged",
                details={"indices": len(indices), "keypairs": len(keypairs)}
            )
        if len(set(indices)) != len(indices):
            raise InvariantViolation("duplicate account index", details={"indices": indices})

    def next_account_index(self) -> int:
        """
        Index ``derive_next`` will use: one past the current maximum.

        Gaps left by deleted accounts are never reused.
        """
        indices = self.account_indices
        if not indices:
            return 0
        return max(indices) + 1

    def derive_next(self) -> Tuple[str, int]:
        """
        Derive and append the next account.

        Returns:
            Tuple of (address, account index)

        Raises:
            InvalidAccountIndexError: If the hardened index range is exhausted
            KeyringWipedError: If the seed has been wiped
        """
        with self._lock:
            self._require_live("derive_next")
            next_index = self.next_account_index()
            kp = derive_keypair(self._seed, next_index, self._derivation_path)
            self._accounts = self._accounts + [DerivedAccount(next_index, kp)]
        logger.debug(f"Derived account {next_index}: {kp.address}")
        return kp.address, next_index

    def get_public_key(self, account_index: int) -> str:
        """
        Look up the address derived at an account index.

        Raises:
            InvariantViolation: If index and key bookkeeping have diverged
            KeyNotFoundError: If no account has that index
            KeyringWipedError: If the keyring has been wiped
        """
        self._require_live("get_public_key")
        self._check_alignment()
        indices = self.account_indices
        if account_index not in indices:
            raise KeyNotFoundError(
                f"no account with index {account_index}",
                details={"accountIndex": account_index, "operation": "get_public_key"}
            )
        return self.keypairs[indices.index(account_index)].address

    def delete_public_key(self, address: str) -> None:
        """
        Remove a derived account (index and key together) or an imported key.

        Absent addresses are ignored.
        """
        with self._lock:
            position = self._position_of(address)
            if position >= 0:
                removed = self._accounts[position]
                self._accounts = self._accounts[:position] + self._accounts[position + 1:]
                removed.keypair.wipe()
                logger.debug(f"Deleted account {removed.account_index}: {address}")
                return
        self._imported.delete_public_key(address)

    def import_secret_key(self, secret_key: str) -> str:
        """
        Import a key that was not derived from this keyring's seed.

        The key gets no account index and is persisted separately.
        """
        self._require_live("import_secret_key")
        return self._imported.import_secret_key(secret_key)

    def export_secret_key(self, address: str) -> Optional[str]:
        kp = self._find_keypair(address)
        if kp is None:
            return None
        return kp.secret_hex()

    def sign_transaction(self, payload: bytes, address: str) -> str:
        kp = self._require_keypair(address, "sign_transaction")
        return encode_signature(kp.sign(payload))

    def sign_message(self, payload: bytes, address: str) -> str:
        kp = self._require_keypair(address, "sign_message")
        return encode_signature(kp.sign(self.config.message_bytes(payload)))

    def to_json(self) -> Dict[str, Any]:
        """
        Serialize seed material and indices; derived keys are not included.
        """
        self._require_live("to_json")
        record = {
            "mnemonic": self._mnemonic,
            "seed": bytes_to_hex(self._seed),
            "accountIndices": self.account_indices,
            "derivationPath": self._derivation_path.value,
        }
        imported = self._imported.to_json()["secretKeys"]
        if imported:
            record["importedSecretKeys"] = imported
        return record

    def wipe(self) -> None:
        """
        Zero the seed and every key, then empty the keyring.

        Derivation, import and serialization fail afterwards.
        """
        with self._lock:
            self._seed[:] = bytes(len(self._seed))
            for account in self._accounts:
                account.keypair.wipe()
            self._accounts = []
            self._mnemonic = ""
            self._wiped = True
        self._imported.wipe()

    def __enter__(self) -> HdKeyring:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.wipe()

    def __str__(self) -> str:
        return f"HdKeyring({self._derivation_path.value}, {len(self._accounts)} accounts)"

    def __repr__(self) -> str:
        return (f"HdKeyring(path='{self._derivation_path.value}', "
                f"indices={self.account_indices}, imported={len(self._imported)})")


def _validate_indices(account_indices: Sequence[int]) -> List[int]:
    indices = [validate_account_index(index) for index in account_indices]
    if len(set(indices)) != len(indices):
        raise InvalidAccountIndexError("Duplicate account index", details={"accountIndices": indices})
    return indices


def _derive_accounts(seed: bytearray, derivation_path: DerivationPath,
                     account_indices: Sequence[int]) -> List[DerivedAccount]:
    return [
        DerivedAccount(index, derive_keypair(seed, index, derivation_path))
        for index in account_indices
    ]


class HdKeyringFactory(KeyringFactory):
    """Builds HD keyrings from a mnemonic or a persisted record."""

    kind = KeyringKind.HD

    def __init__(self, config: Optional[KeyringConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def from_mnemonic(
        self,
        mnemonic: str,
        derivation_path: Optional[Union[DerivationPath, str]] = None,
        account_indices: Sequence[int] = (0,)
    ) -> HdKeyring:
        """
        Create a keyring from seed words.

        Args:
            mnemonic: BIP-39 phrase
            derivation_path: Path template (defaults to the configured default)
            account_indices: Accounts to derive, in order

        Raises:
            InvalidMnemonicError: If the checksum fails
            InvalidAccountIndexError: If any index is out of range or repeated
        """
        if derivation_path is None:
            derivation_path = self.config.default_derivation_path
        derivation_path = DerivationPath.parse(derivation_path)
        seed = mnemonic_to_seed(mnemonic, self.config.mnemonic_language)
        try:
            indices = _validate_indices(account_indices)
            accounts = _derive_accounts(seed, derivation_path, indices)
        except Exception:
            seed[:] = bytes(len(seed))
            raise
        keyring = HdKeyring(mnemonic.strip(), seed, derivation_path, accounts, config=self.config)
        logger.debug(f"Created HD keyring ({derivation_path.value}) with indices {indices}")
        return keyring

    def from_json(self, record: Any, **kwargs) -> HdKeyring:
        """
        Reconstruct a keyring by re-deriving every account from the stored seed.

        Raises:
            DecodeError: If the record is malformed
        """
        parsed = parse_record(HdKeyringJson, record)
        seed = hex_to_bytes(parsed.seed)
        if not seed:
            raise DecodeError("HD keyring seed is empty")
        try:
            indices = _validate_indices(parsed.account_indices)
            accounts = _derive_accounts(seed, parsed.derivation_path, indices)
            imported = SimpleKeyringFactory(self.config).from_secret_keys(parsed.imported_secret_keys)
        except Exception:
            seed[:] = bytes(len(seed))
            raise
        return HdKeyring(parsed.mnemonic, seed, parsed.derivation_path, accounts, imported, self.config)

    def generate(
        self,
        strength: Optional[int] = None,
        derivation_path: Optional[Union[DerivationPath, str]] = None
    ) -> HdKeyring:
        """Create a keyring from freshly generated seed words."""
        mnemonic = generate_mnemonic(strength or self.config.mnemonic_strength,
                                     self.config.mnemonic_language)
        return self.from_mnemonic(mnemonic, derivation_path)


__all__ = [
    "DerivedAccount",
    "HdKeyring",
    "HdKeyringFactory",
]
