"""
Keyring Error Model

This module provides the error handling framework for the keyring family.
Every error carries a stable code and optional structured details so that
callers can display a meaningful message without inspecting secret material.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Keyring error codes."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2
    UNSUPPORTED = 3

    # Encoding errors (100-199)
    DECODE_ERROR = 100
    INVALID_MNEMONIC = 101
    INVALID_ACCOUNT_INDEX = 102

    # Key errors (200-299)
    KEY_NOT_FOUND = 200
    DUPLICATE_KEY = 201

    # Internal consistency (300-399)
    INVARIANT_VIOLATION = 300
    KEYRING_WIPED = 301

    # External signer errors (400-499)
    EXTERNAL_SIGNER = 400
    DEVICE_REJECTED = 401
    DEVICE_DISCONNECTED = 402
    SIGNER_TIMEOUT = 403


class KeyringError(Exception):
    """
    Base class for all keyring errors.

    Provides structured error information. Details must never contain
    secret keys, seeds or mnemonics.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a keyring error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details (address, operation, ...)
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class DecodeError(KeyringError):
    """Malformed secret key, seed or persisted record."""

    def __init__(self, message: str = "Decode error",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.DECODE_ERROR, details, cause)


class InvalidMnemonicError(KeyringError):
    """Mnemonic failed checksum validation."""

    def __init__(self, message: str = "Invalid seed words",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_MNEMONIC, details, cause)


class InvalidAccountIndexError(KeyringError):
    """Account index outside the hardened derivation range, or repeated."""

    def __init__(self, message: str = "Invalid account index",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_ACCOUNT_INDEX, details, cause)


class KeyNotFoundError(KeyringError):
    """No key material (or device route) for the requested address."""

    def __init__(self, message: str = "Key not found",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.KEY_NOT_FOUND, details, cause)


class DuplicateKeyError(KeyringError):
    """Address already present in the keyring."""

    def __init__(self, message: str = "Key already exists",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.DUPLICATE_KEY, details, cause)


class UnsupportedOperationError(KeyringError):
    """Operation not available on this keyring kind."""

    def __init__(self, message: str = "Operation not supported",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.UNSUPPORTED, details, cause)


class InvariantViolation(KeyringError):
    """
    Internal consistency failure.

    Raised when the account index and key material of an HD keyring no
    longer line up. This is a programming error; callers must not continue
    signing with the affected keyring.
    """

    def __init__(self, message: str = "invariant violation",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVARIANT_VIOLATION, details, cause)


class KeyringWipedError(KeyringError):
    """Keyring was wiped; its key material is gone."""

    def __init__(self, message: str = "keyring has been wiped",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.KEYRING_WIPED, details, cause)


class ExternalSignerError(KeyringError):
    """Hardware signer failures, passed through to the caller."""

    def __init__(self, message: str = "External signer error", code: ErrorCode = ErrorCode.EXTERNAL_SIGNER,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class DeviceRejectedError(ExternalSignerError):
    """The user rejected the request on the device."""

    def __init__(self, message: str = "Request rejected on device",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.DEVICE_REJECTED, details, cause)


class DeviceDisconnectedError(ExternalSignerError):
    """The device went away mid-request."""

    def __init__(self, message: str = "Device disconnected",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.DEVICE_DISCONNECTED, details, cause)


class SignerTimeoutError(ExternalSignerError):
    """The device did not answer in time."""

    def __init__(self, message: str = "Signer request timed out",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.SIGNER_TIMEOUT, details, cause)


def error_from_response(response: Dict[str, Any]) -> Optional[ExternalSignerError]:
    """
    Create an appropriate error from a hardware signer response.

    Args:
        response: Signer response, possibly containing error information

    Returns:
        Appropriate error instance or None if no error
    """
    if "error" not in response:
        return None

    error_data = response["error"]
    if isinstance(error_data, str):
        return ExternalSignerError(error_data)

    if not isinstance(error_data, dict):
        return ExternalSignerError(str(error_data))

    message = error_data.get("message", "Unknown signer error")
    code_value = error_data.get("code", ErrorCode.EXTERNAL_SIGNER)
    details = error_data.get("data")

    try:
        code = ErrorCode(code_value)
    except ValueError:
        code = ErrorCode.EXTERNAL_SIGNER

    if code == ErrorCode.DEVICE_REJECTED:
        return DeviceRejectedError(message, details)
    elif code == ErrorCode.DEVICE_DISCONNECTED:
        return DeviceDisconnectedError(message, details)
    elif code == ErrorCode.SIGNER_TIMEOUT:
        return SignerTimeoutError(message, details)
    else:
        return ExternalSignerError(message, ErrorCode.EXTERNAL_SIGNER, details)


class ErrorHandler:
    """
    Utility class for categorizing errors.
    """

    @staticmethod
    def is_recoverable(error: Exception) -> bool:
        """
        Check if calling code may recover from an error.

        Args:
            error: Exception to check

        Returns:
            False for invariant violations, True for other keyring errors
        """
        if isinstance(error, InvariantViolation):
            return False
        return isinstance(error, KeyringError)

    @staticmethod
    def is_device_error(error: Exception) -> bool:
        """Check if an error originated at the external signer."""
        return isinstance(error, ExternalSignerError)


__all__ = [
    "ErrorCode",
    "KeyringError",
    "DecodeError",
    "InvalidMnemonicError",
    "InvalidAccountIndexError",
    "KeyNotFoundError",
    "DuplicateKeyError",
    "UnsupportedOperationError",
    "InvariantViolation",
    "KeyringWipedError",
    "ExternalSignerError",
    "DeviceRejectedError",
    "DeviceDisconnectedError",
    "SignerTimeoutError",
    "error_from_response",
    "ErrorHandler",
]
