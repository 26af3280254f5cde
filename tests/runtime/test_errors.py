"""
Error model tests.
"""

import pytest

from solana_keyring.runtime.errors import (
    DecodeError,
    DeviceDisconnectedError,
    DeviceRejectedError,
    ErrorCode,
    ErrorHandler,
    ExternalSignerError,
    InvariantViolation,
    KeyNotFoundError,
    KeyringError,
    KeyringWipedError,
    SignerTimeoutError,
    error_from_response,
)


class TestKeyringError:

    def test_str_includes_code_details_and_cause(self):
        cause = ValueError("odd-length string")
        error = DecodeError("Invalid hex string", details={"field": "seed"}, cause=cause)

        text = str(error)
        assert text.startswith("[DECODE_ERROR] Invalid hex string")
        assert "Details: {'field': 'seed'}" in text
        assert "Caused by: odd-length string" in text

    def test_to_dict(self):
        error = KeyNotFoundError("unable to find abc", details={"address": "abc"})
        assert error.to_dict() == {
            "code": ErrorCode.KEY_NOT_FOUND.value,
            "message": "unable to find abc",
            "details": {"address": "abc"},
        }

    def test_default_messages(self):
        assert InvariantViolation().message == "invariant violation"
        assert InvariantViolation().code is ErrorCode.INVARIANT_VIOLATION
        assert KeyringWipedError().code is ErrorCode.KEYRING_WIPED

    def test_device_errors_are_external_signer_errors(self):
        for error_class in (DeviceRejectedError, DeviceDisconnectedError, SignerTimeoutError):
            assert issubclass(error_class, ExternalSignerError)
            assert issubclass(error_class, KeyringError)


class TestErrorFromResponse:

    def test_success_response(self):
        assert error_from_response({"signature": "abc"}) is None

    @pytest.mark.parametrize("code,error_class", [
        (ErrorCode.DEVICE_REJECTED, DeviceRejectedError),
        (ErrorCode.DEVICE_DISCONNECTED, DeviceDisconnectedError),
        (ErrorCode.SIGNER_TIMEOUT, SignerTimeoutError),
    ])
    def test_known_codes(self, code, error_class):
        error = error_from_response({"error": {"code": int(code), "message": "device said no"}})
        assert type(error) is error_class
        assert error.message == "device said no"

    def test_unknown_code(self):
        error = error_from_response({"error": {"code": 9999, "message": "weird"}})
        assert type(error) is ExternalSignerError
        assert error.code is ErrorCode.EXTERNAL_SIGNER

    def test_string_error(self):
        error = error_from_response({"error": "busy"})
        assert isinstance(error, ExternalSignerError)
        assert error.message == "busy"

    def test_data_becomes_details(self):
        error = error_from_response({
            "error": {"code": int(ErrorCode.DEVICE_REJECTED), "message": "no", "data": {"app": "solana"}}
        })
        assert error.details == {"app": "solana"}


class TestErrorHandler:

    def test_invariant_violation_is_not_recoverable(self):
        assert not ErrorHandler.is_recoverable(InvariantViolation())
        assert ErrorHandler.is_recoverable(KeyNotFoundError())
        assert not ErrorHandler.is_recoverable(ValueError())

    def test_is_device_error(self):
        assert ErrorHandler.is_device_error(DeviceRejectedError())
        assert not ErrorHandler.is_device_error(DecodeError())
