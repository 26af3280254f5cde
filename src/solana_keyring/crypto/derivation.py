r"""
Deterministic key derivation for Solana accounts.

Implements SLIP-0010 hardened derivation over Ed25519 and the account
path templates used by wallets for coin type 501.

Reference: https://github.com/satoshilabs/slips/blob/master/slip-0010.md
"""

from __future__ import annotations
from enum import Enum
from typing import Iterable, List, Union
import hashlib
import hmac
import struct

from ..runtime.errors import DecodeError, InvalidAccountIndexError
from .ed25519 import KeyPair

HARDENED_OFFSET = 0x80000000
SOLANA_COIN_TYPE = 501

_ED25519_CURVE_KEY = b"ed25519 seed"


class DerivationPath(str, Enum):
    """
    Account path templates.

    ``DEFAULT`` is an alias of ``BIP44_CHANGE``.
    """

    BIP44 = "bip44"
    BIP44_CHANGE = "bip44-change"
    DEFAULT = "bip44-change"

    def path_for(self, account_index: int) -> str:
        """Render the full derivation path for an account index."""
        validate_account_index(account_index)
        if self is DerivationPath.BIP44:
            return f"m/44'/{SOLANA_COIN_TYPE}'/{account_index}'"
        return f"m/44'/{SOLANA_COIN_TYPE}'/{account_index}'/0'"

    @classmethod
    def parse(cls, value: Union[str, DerivationPath]) -> DerivationPath:
        """
        Parse a persisted template name.

        Raises:
            DecodeError: If the name is unknown
        """
        if isinstance(value, DerivationPath):
            return value
        try:
            return cls(value)
        except ValueError as e:
            raise DecodeError(f"Unknown derivation path: {value!r}", cause=e)


def validate_account_index(account_index: int) -> int:
    """
    Check that an index can be used as a hardened child number.

    Raises:
        InvalidAccountIndexError: If not an int in ``[0, 2**31)``
    """
    if isinstance(account_index, bool) or not isinstance(account_index, int):
        raise InvalidAccountIndexError(
            f"Account index must be an integer, got {type(account_index).__name__}"
        )
    if account_index < 0 or account_index >= HARDENED_OFFSET:
        raise InvalidAccountIndexError(
            f"Account index out of range: {account_index}",
            details={"accountIndex": account_index}
        )
    return account_index


def _hmac_sha512(key: bytes, data: bytes) -> bytes:
    return hmac.new(key, data, hashlib.sha512).digest()


def parse_path(path: str) -> List[int]:
    """
    Parse ``m/44'/501'/0'`` into hardened child numbers.

    SLIP-0010 Ed25519 supports hardened children only.

    Raises:
        DecodeError: If the path is malformed or contains a non-hardened step
    """
    parts = path.strip().split("/")
    if not parts or parts[0] != "m":
        raise DecodeError(f"Derivation path must start with m/: {path!r}")
    indices = []
    for part in parts[1:]:
        if not part.endswith("'") and not part.endswith("h"):
            raise DecodeError(f"Ed25519 derivation requires hardened steps: {path!r}")
        try:
            index = int(part[:-1])
        except ValueError as e:
            raise DecodeError(f"Invalid path component {part!r}", cause=e)
        if index < 0 or index >= HARDENED_OFFSET:
            raise DecodeError(f"Path component out of range: {part!r}")
        indices.append(index + HARDENED_OFFSET)
    return indices


def master_key(seed: Union[bytes, bytearray]) -> tuple[bytearray, bytearray]:
    """Return the SLIP-0010 master ``(key, chain_code)`` for a seed."""
    digest = _hmac_sha512(_ED25519_CURVE_KEY, bytes(seed))
    return bytearray(digest[:32]), bytearray(digest[32:])


def derive_child(key: bytearray, chain_code: bytearray, index: int) -> tuple[bytearray, bytearray]:
    """Derive one hardened child. ``index`` must already include the hardened offset."""
    data = b"\x00" + bytes(key) + struct.pack(">I", index)
    digest = _hmac_sha512(bytes(chain_code), data)
    return bytearray(digest[:32]), bytearray(digest[32:])


def derive_path_seed(seed: Union[bytes, bytearray], path: str) -> bytearray:
    """
    Derive the 32-byte Ed25519 seed at ``path``.

    Intermediate keys are zeroed as soon as they are consumed.
    """
    key, chain_code = master_key(seed)
    for index in parse_path(path):
        child_key, child_chain = derive_child(key, chain_code, index)
        key[:] = bytes(len(key))
        chain_code[:] = bytes(len(chain_code))
        key, chain_code = child_key, child_chain
    chain_code[:] = bytes(len(chain_code))
    return key


def derive_keypair(
    seed: Union[bytes, bytearray],
    account_index: int,
    derivation_path: DerivationPath = DerivationPath.DEFAULT
) -> KeyPair:
    """
    Derive the key pair for one account.

    Args:
        seed: 64-byte BIP-39 seed
        account_index: Account slot
        derivation_path: Path template

    Returns:
        Derived key pair
    """
    path = DerivationPath.parse(derivation_path).path_for(account_index)
    child_seed = derive_path_seed(seed, path)
    try:
        return KeyPair.from_seed(child_seed)
    finally:
        child_seed[:] = bytes(len(child_seed))


def derive_keypairs(
    seed: Union[bytes, bytearray],
    derivation_path: DerivationPath,
    account_indices: Iterable[int]
) -> List[KeyPair]:
    """Derive key pairs for each index, preserving input order."""
    return [derive_keypair(seed, index, derivation_path) for index in account_indices]


__all__ = [
    "HARDENED_OFFSET",
    "SOLANA_COIN_TYPE",
    "DerivationPath",
    "validate_account_index",
    "parse_path",
    "master_key",
    "derive_child",
    "derive_path_seed",
    "derive_keypair",
    "derive_keypairs",
]
