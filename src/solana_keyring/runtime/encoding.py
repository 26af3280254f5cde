"""
Textual encodings used by the keyring family.

Addresses and signatures use base-58; secret keys use lowercase hex.
"""

from __future__ import annotations
from typing import Union
import re

import base58

from .errors import DecodeError

PUBLIC_KEY_LENGTH = 32
SECRET_KEY_LENGTH = 64
SIGNATURE_LENGTH = 64

_LOWER_HEX = re.compile(r"[0-9a-f]*")


def encode_address(public_key: bytes) -> str:
    """Encode a 32-byte public key as a base-58 address."""
    return base58.b58encode(bytes(public_key)).decode("ascii")


def decode_address(address: str) -> bytes:
    """
    Decode a base-58 address into its 32-byte public key.

    Raises:
        DecodeError: If the address is not valid base-58 or has the wrong length
    """
    try:
        raw = base58.b58decode(address)
    except ValueError as e:
        raise DecodeError("Invalid base-58 address", details={"address": address}, cause=e)
    if len(raw) != PUBLIC_KEY_LENGTH:
        raise DecodeError(
            f"Address must decode to {PUBLIC_KEY_LENGTH} bytes, got {len(raw)}",
            details={"address": address}
        )
    return raw


def encode_signature(signature: bytes) -> str:
    """Encode a detached signature in base-58."""
    return base58.b58encode(bytes(signature)).decode("ascii")


def decode_signature(signature: str) -> bytes:
    """Decode a base-58 signature into 64 raw bytes."""
    try:
        raw = base58.b58decode(signature)
    except ValueError as e:
        raise DecodeError("Invalid base-58 signature", cause=e)
    if len(raw) != SIGNATURE_LENGTH:
        raise DecodeError(f"Signature must be {SIGNATURE_LENGTH} bytes, got {len(raw)}")
    return raw


def encode_payload(payload: bytes) -> str:
    """Encode an arbitrary payload for transmission to a hardware signer."""
    return base58.b58encode(bytes(payload)).decode("ascii")


def hex_to_bytes(value: Union[str, bytes], expected_length: int = 0) -> bytearray:
    """
    Decode a lowercase hex string into a mutable buffer.

    Uppercase digits, whitespace and separators are rejected.

    The result is a bytearray so that holders of secret material can scrub it.

    Raises:
        DecodeError: If the value is not hex or not of the expected length
    """
    if isinstance(value, bytes):
        value = value.decode("ascii", errors="replace")
    if not isinstance(value, str):
        raise DecodeError(f"Expected hex string, got {type(value).__name__}")
    if not _LOWER_HEX.fullmatch(value) or len(value) % 2:
        raise DecodeError("Invalid hex string: expected an even number of lowercase hex digits")
    raw = bytearray.fromhex(value)
    if expected_length and len(raw) != expected_length:
        length = len(raw)
        raw[:] = bytes(length)
        raise DecodeError(f"Expected {expected_length} bytes, got {length}")
    return raw


def bytes_to_hex(value: Union[bytes, bytearray]) -> str:
    """Encode bytes as lowercase hex."""
    return bytes(value).hex()


__all__ = [
    "PUBLIC_KEY_LENGTH",
    "SECRET_KEY_LENGTH",
    "SIGNATURE_LENGTH",
    "encode_address",
    "decode_address",
    "encode_signature",
    "decode_signature",
    "encode_payload",
    "hex_to_bytes",
    "bytes_to_hex",
]
