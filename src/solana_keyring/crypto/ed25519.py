r"""
Ed25519 cryptographic operations for the keyring family.

Provides key generation, detached signing and verification. Secret keys use
the 64-byte Solana layout: the 32-byte Ed25519 seed followed by the 32-byte
public key.
"""

from __future__ import annotations
import os
from typing import Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey as CryptoEd25519PrivateKey,
    Ed25519PublicKey as CryptoEd25519PublicKey
)

from ..runtime.encoding import (
    PUBLIC_KEY_LENGTH,
    SECRET_KEY_LENGTH,
    SIGNATURE_LENGTH,
    encode_address,
    hex_to_bytes,
)
from ..runtime.errors import DecodeError

SEED_LENGTH = 32


def _public_bytes_from_seed(seed: Union[bytes, bytearray]) -> bytes:
    private_key = CryptoEd25519PrivateKey.from_private_bytes(bytes(seed))
    return private_key.public_key().public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw
    )


class Ed25519PublicKey:
    """
    Ed25519 public key.

    Provides verification operations and the base-58 address form.
    """

    def __init__(self, public_key_bytes: bytes):
        """
        Initialize from 32-byte public key.

        Raises:
            DecodeError: If key is invalid
        """
        if len(public_key_bytes) != PUBLIC_KEY_LENGTH:
            raise DecodeError(f"Ed25519 public key must be 32 bytes, got {len(public_key_bytes)}")

        self._key_bytes = bytes(public_key_bytes)
        try:
            self._crypto_key = CryptoEd25519PublicKey.from_public_bytes(self._key_bytes)
        except ValueError as e:
            raise DecodeError("Invalid Ed25519 public key", cause=e)

    def to_bytes(self) -> bytes:
        """Get the 32-byte public key."""
        return self._key_bytes

    def to_address(self) -> str:
        """Get the base-58 address."""
        return encode_address(self._key_bytes)

    def verify(self, signature: bytes, message: bytes) -> bool:
        """
        Verify a detached signature against a message.

        Args:
            signature: 64-byte Ed25519 signature
            message: Message that was signed

        Returns:
            True if signature is valid
        """
        if len(signature) != SIGNATURE_LENGTH:
            return False
        try:
            self._crypto_key.verify(bytes(signature), bytes(message))
        except InvalidSignature:
            return False
        return True

    def __eq__(self, other) -> bool:
        if not isinstance(other, Ed25519PublicKey):
            return False
        return self._key_bytes == other._key_bytes

    def __hash__(self) -> int:
        return hash(self._key_bytes)

    def __str__(self) -> str:
        return self.to_address()

    def __repr__(self) -> str:
        return f"Ed25519PublicKey('{self.to_address()}')"


class KeyPair:
    """
    Ed25519 key pair, the atomic unit of custody.

    The secret key is held in a bytearray so that ``wipe`` can zero it.
    A wiped key pair refuses to sign.
    """

    def __init__(self, secret_key: Union[bytes, bytearray]):
        """
        Initialize from a 64-byte secret key (seed followed by public key).

        Raises:
            DecodeError: If the secret is not 64 bytes or its public half does
                not match the seed
        """
        if len(secret_key) != SECRET_KEY_LENGTH:
            raise DecodeError(f"Secret key must be {SECRET_KEY_LENGTH} bytes, got {len(secret_key)}")

        seed = bytes(secret_key[:SEED_LENGTH])
        derived = _public_bytes_from_seed(seed)
        if derived != bytes(secret_key[SEED_LENGTH:]):
            raise DecodeError("Secret key public half does not match its seed")

        self._secret_key = bytearray(secret_key)
        self._signing_key = CryptoEd25519PrivateKey.from_private_bytes(seed)
        self.public_key = Ed25519PublicKey(derived)

    @classmethod
    def generate(cls) -> KeyPair:
        """Generate a new random key pair."""
        return cls.from_seed(os.urandom(SEED_LENGTH))

    @classmethod
    def from_seed(cls, seed: Union[bytes, bytearray]) -> KeyPair:
        """
        Create a key pair from a 32-byte Ed25519 seed.

        Raises:
            DecodeError: If the seed is not exactly 32 bytes
        """
        if len(seed) != SEED_LENGTH:
            raise DecodeError(f"Ed25519 seed must be {SEED_LENGTH} bytes, got {len(seed)}")
        buf = bytearray(seed)
        buf.extend(_public_bytes_from_seed(seed))
        try:
            return cls(buf)
        finally:
            buf[:] = bytes(len(buf))

    @classmethod
    def from_secret_hex(cls, hex_string: str) -> KeyPair:
        """
        Create a key pair from a hex-encoded 64-byte secret key.

        Raises:
            DecodeError: If the string is malformed
        """
        raw = hex_to_bytes(hex_string, SECRET_KEY_LENGTH)
        try:
            return cls(raw)
        finally:
            raw[:] = bytes(len(raw))

    @property
    def address(self) -> str:
        """Base-58 address of the public key."""
        return self.public_key.to_address()

    @property
    def secret_key(self) -> bytes:
        """Copy of the 64-byte secret key."""
        return bytes(self._secret_key)

    def public_key_bytes(self) -> bytes:
        """Get the 32-byte public key."""
        return self.public_key.to_bytes()

    def secret_hex(self) -> str:
        """Get the secret key as lowercase hex."""
        return self._secret_key.hex()

    def sign(self, message: bytes) -> bytes:
        """
        Produce a detached signature.

        Args:
            message: Message to sign

        Returns:
            64-byte Ed25519 signature
        """
        if self._signing_key is None:
            raise ValueError("key pair has been wiped")
        return self._signing_key.sign(bytes(message))

    def verify(self, message: bytes, signature: bytes) -> bool:
        """Verify a detached signature made by this key pair."""
        return self.public_key.verify(signature, message)

    def wipe(self) -> None:
        """Zero the secret buffer and drop the signing key."""
        self._secret_key[:] = bytes(len(self._secret_key))
        self._signing_key = None

    @property
    def wiped(self) -> bool:
        return self._signing_key is None

    def __str__(self) -> str:
        return f"KeyPair(public={self.address})"

    def __repr__(self) -> str:
        return f"KeyPair(address='{self.address}')"


# Test vectors for validation
TEST_VECTORS = [
    {
        "name": "RFC 8032 Test Vector 1",
        "private_key": "9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60",
        "public_key": "d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a",
        "message": "",
        "signature": "e5564300c360ac729086e2cc806e828a84877f1eb8e5d974d873e065224901555fb8821590a33bacc61e39701cf9b46bd25bf5f0595bbe24655141438e7a100b"
    },
    {
        "name": "RFC 8032 Test Vector 2",
        "private_key": "4ccd089b28ff96da9db6c346ec114e0f5b8a319f35aba624da8cf6ed4fb8a6fb",
        "public_key": "3d4017c3e843895a92b70aa74d1b7ebc9c982ccf2ec4968cc0cd55f12af4660c",
        "message": "72",
        "signature": "92a009a9f0d4cab8720e820b5f642540a2b27b5416503f8fb3762223ebdb69da085ac1e43e15996e458f3613d0f11d8c387b2eaeb4302aeeb00d291612bb0c00"
    }
]


__all__ = [
    "Ed25519PublicKey",
    "KeyPair",
    "SEED_LENGTH",
    "TEST_VECTORS",
]
