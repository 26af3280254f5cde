"""
BIP-39 mnemonic handling.

Thin layer over the ``mnemonic`` reference implementation: checksum
validation, passphrase-less seed derivation and fresh phrase generation.
"""

from __future__ import annotations
from typing import Dict

from mnemonic import Mnemonic

from ..runtime.errors import InvalidMnemonicError

DEFAULT_LANGUAGE = "english"

_wordlists: Dict[str, Mnemonic] = {}


def _get(language: str) -> Mnemonic:
    mnemo = _wordlists.get(language)
    if mnemo is None:
        mnemo = Mnemonic(language)
        _wordlists[language] = mnemo
    return mnemo


def validate_mnemonic(phrase: str, language: str = DEFAULT_LANGUAGE) -> bool:
    """Check the word list membership and checksum of a phrase."""
    if not isinstance(phrase, str) or not phrase.strip():
        return False
    return _get(language).check(phrase.strip())


def mnemonic_to_seed(phrase: str, language: str = DEFAULT_LANGUAGE) -> bytearray:
    """
    Convert a mnemonic to its 64-byte BIP-39 seed (empty passphrase).

    Raises:
        InvalidMnemonicError: If the phrase fails validation
    """
    if not validate_mnemonic(phrase, language):
        raise InvalidMnemonicError()
    return bytearray(Mnemonic.to_seed(phrase.strip(), passphrase=""))


def generate_mnemonic(strength: int = 128, language: str = DEFAULT_LANGUAGE) -> str:
    """
    Generate a fresh mnemonic.

    Args:
        strength: Entropy bits (128 gives 12 words, 256 gives 24)
    """
    return _get(language).generate(strength=strength)


__all__ = [
    "DEFAULT_LANGUAGE",
    "validate_mnemonic",
    "mnemonic_to_seed",
    "generate_mnemonic",
]
