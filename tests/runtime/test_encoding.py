"""
Textual encoding tests.
"""

import pytest

from solana_keyring.runtime.encoding import (
    bytes_to_hex,
    decode_address,
    decode_signature,
    encode_address,
    encode_payload,
    encode_signature,
    hex_to_bytes,
)
from solana_keyring.crypto.ed25519 import KeyPair
from solana_keyring.runtime.errors import DecodeError


def test_system_program_address():
    assert encode_address(bytes(32)) == "11111111111111111111111111111111"
    assert decode_address("11111111111111111111111111111111") == bytes(32)


def test_address_roundtrip(fake_keypair):
    raw = fake_keypair.public_key_bytes()
    assert decode_address(encode_address(raw)) == raw


@pytest.mark.parametrize("address", ["0OIl", "abc", "unknown-address"])
def test_decode_address_rejects(address):
    with pytest.raises(DecodeError):
        decode_address(address)


def test_signature_roundtrip(fake_keypair):
    signature = fake_keypair.sign(b"payload")
    assert decode_signature(encode_signature(signature)) == signature


def test_decode_signature_rejects_short():
    with pytest.raises(DecodeError):
        decode_signature(encode_signature(b"\x01" * 10))


def test_encode_payload():
    assert encode_payload(b"\x00\x01") == "12"


class TestHex:

    def test_hex_to_bytes_returns_bytearray(self):
        value = hex_to_bytes("00ff")
        assert isinstance(value, bytearray)
        assert value == bytearray(b"\x00\xff")

    def test_bytes_to_hex_lowercase(self):
        assert bytes_to_hex(b"\xab\xcd") == "abcd"

    @pytest.mark.parametrize("value", ["zz", "abc", 42, "ABCD", "ab cd", " abcd", "ab:cd", "0xab"])
    def test_rejects_invalid(self, value):
        with pytest.raises(DecodeError):
            hex_to_bytes(value)

    def test_rejects_wrong_length(self):
        with pytest.raises(DecodeError) as exc_info:
            hex_to_bytes("00" * 31, expected_length=32)
        assert "Expected 32 bytes, got 31" in str(exc_info.value)

    def test_rejects_uppercase_or_spaced_secret(self, fake_keypair):
        secret = fake_keypair.secret_hex()
        for variant in (secret.upper(), f"{secret[:64]} {secret[64:]}"):
            with pytest.raises(DecodeError):
                KeyPair.from_secret_hex(variant)
