from .mocks import SoftwareDevice
from .factories import (
    ABANDON_MNEMONIC,
    ABANDON_SEED_HEX,
    mk_keypair,
    mk_secret_hex,
    mk_derivation_record,
)

__all__ = [
    "SoftwareDevice",
    "ABANDON_MNEMONIC",
    "ABANDON_SEED_HEX",
    "mk_keypair",
    "mk_secret_hex",
    "mk_derivation_record",
]
