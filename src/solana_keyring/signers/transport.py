"""
Hardware signer request/response contract.

A transport carries one ``SignRequest`` to the device and returns its
``SignResponse``. Timeouts and connection handling belong to the transport;
keyrings only await the result and surface errors unchanged.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional
import asyncio
import logging

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from ..config import KeyringConfig
from ..runtime.errors import (
    ExternalSignerError,
    KeyringError,
    SignerTimeoutError,
    error_from_response,
)

logger = logging.getLogger(__name__)


class SignMethod(str, Enum):
    """Device signing methods."""
    SIGN_TRANSACTION = "sign_transaction"
    SIGN_MESSAGE = "sign_message"


class SignRequest(BaseModel):
    """Request sent to the hardware signer."""
    method: SignMethod
    encoded_payload: str = Field(alias="encodedPayload")
    device_path: str = Field(alias="devicePath")
    account_number: int = Field(alias="accountNumber", ge=0)

    model_config = {"populate_by_name": True, "frozen": True}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire form."""
        return self.model_dump(by_alias=True, mode="json")


class SignResponse(BaseModel):
    """Successful response from the hardware signer."""
    signature: str = Field(min_length=1)


class SignerTransport(ABC):
    """
    Abstract channel to a hardware signer.

    Implementations raise ``ExternalSignerError`` subclasses for device
    rejection, disconnection and timeouts. ``asyncio.CancelledError`` is
    never converted.
    """

    @abstractmethod
    async def request(self, request: SignRequest) -> SignResponse:
        """
        Send a signing request and wait for the device.

        Args:
            request: Signing request

        Returns:
            Device response
        """
        pass


Handler = Callable[[Dict[str, Any]], Awaitable[Dict[str, Any]]]


class CallbackSignerTransport(SignerTransport):
    """
    Transport backed by an async handler exchanging plain dictionaries.

    The handler receives the request's wire form and returns either
    ``{"signature": ...}`` or ``{"error": {"code": ..., "message": ...}}``.
    Any other exception raised by the handler becomes an ``ExternalSignerError``.
    """

    def __init__(self, handler: Handler, timeout: Optional[float] = None):
        """
        Initialize transport.

        Args:
            handler: Coroutine function talking to the device
            timeout: Seconds to wait for the device, or None to wait indefinitely
        """
        self.handler = handler
        self.timeout = timeout

    @classmethod
    def from_config(cls, handler: Handler, config: KeyringConfig) -> CallbackSignerTransport:
        """Create a transport using the configured signer timeout."""
        return cls(handler, timeout=config.signer_timeout)

    async def request(self, request: SignRequest) -> SignResponse:
        logger.debug(f"Signer request {request.method.value} on {request.device_path}")
        payload = request.to_dict()
        try:
            if self.timeout is not None:
                response = await asyncio.wait_for(self.handler(payload), timeout=self.timeout)
            else:
                response = await self.handler(payload)
        except asyncio.TimeoutError as e:
            raise SignerTimeoutError(
                "Device did not respond in time",
                details={
                    "method": request.method.value,
                    "devicePath": request.device_path,
                    "timeout": self.timeout,
                },
                cause=e
            )
        except KeyringError:
            raise
        except Exception as e:
            raise ExternalSignerError(
                "Signer transport failed",
                details={"method": request.method.value, "devicePath": request.device_path},
                cause=e
            )

        if not isinstance(response, dict):
            raise ExternalSignerError(f"Malformed signer response: {type(response).__name__}")

        error = error_from_response(response)
        if error is not None:
            raise error

        try:
            return SignResponse.model_validate(response)
        except PydanticValidationError as e:
            raise ExternalSignerError("Malformed signer response", cause=e)


__all__ = [
    "SignMethod",
    "SignRequest",
    "SignResponse",
    "SignerTransport",
    "CallbackSignerTransport",
]
