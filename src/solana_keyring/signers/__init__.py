"""
External signer contract for hardware-delegated keyrings.
"""

from .transport import (
    SignMethod,
    SignRequest,
    SignResponse,
    SignerTransport,
    CallbackSignerTransport,
)

__all__ = [
    "SignMethod",
    "SignRequest",
    "SignResponse",
    "SignerTransport",
    "CallbackSignerTransport",
]
