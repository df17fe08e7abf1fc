"""Unit tests for custom exception classes."""

import pytest

from smartpay_deployments.exceptions import (
    AmbiguousArtifactError,
    ArtifactNotFoundError,
    ConfigurationError,
    DefectiveArtifactError,
    DeploymentError,
    DeploymentTimeoutError,
    NetworkNotFoundError,
    RpcConnectionError,
    RpcError,
    RpcResponseError,
    TransactionError,
    TransactionRejectedError,
    TransactionRevertedError,
    VerificationError,
)

ALL_EXCEPTIONS = [
    DeploymentError,
    ConfigurationError,
    NetworkNotFoundError,
    ArtifactNotFoundError,
    AmbiguousArtifactError,
    DefectiveArtifactError,
    RpcError,
    RpcConnectionError,
    RpcResponseError,
    TransactionError,
    TransactionRejectedError,
    TransactionRevertedError,
    DeploymentTimeoutError,
    VerificationError,
]


class TestExceptionCatching:
    """Test that exceptions can be caught as their base types."""

    def test_catch_artifact_not_found_as_file_not_found_error(self):
        """Test that ArtifactNotFoundError can be caught as FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            raise ArtifactNotFoundError("test")

    def test_catch_configuration_error_as_value_error(self):
        """Test that ConfigurationError can be caught as ValueError."""
        with pytest.raises(ValueError):
            raise ConfigurationError("test")

    def test_catch_rpc_connection_error_as_connection_error(self):
        """Test that RpcConnectionError can be caught as ConnectionError."""
        with pytest.raises(ConnectionError):
            raise RpcConnectionError("test")

    def test_catch_rpc_errors_as_rpc_error(self):
        """Test that both RPC failure kinds share the RpcError base."""
        for exc in (RpcConnectionError("test"), RpcResponseError("test")):
            with pytest.raises(RpcError):
                raise exc

    def test_catch_transaction_errors_as_transaction_error(self):
        """Test that rejected, reverted and timed out deployments are TransactionErrors."""
        for exc in (
            TransactionRejectedError("test"),
            TransactionRevertedError("test"),
            DeploymentTimeoutError("test"),
        ):
            with pytest.raises(TransactionError):
                raise exc

    def test_catch_timeout_as_timeout_error(self):
        """Test that DeploymentTimeoutError can be caught as TimeoutError."""
        with pytest.raises(TimeoutError):
            raise DeploymentTimeoutError("test")

    def test_catch_all_as_deployment_error(self):
        """Test that all custom exceptions can be caught as DeploymentError."""
        for exc_class in ALL_EXCEPTIONS:
            with pytest.raises(DeploymentError):
                raise exc_class("test")


class TestExceptionCreation:
    """Test creating exceptions with various message types."""

    def test_exceptions_accept_string_messages(self):
        """Test that all exceptions accept string messages."""
        for exc_class in ALL_EXCEPTIONS:
            exc = exc_class("test message")
            assert str(exc) == "test message"

    def test_rpc_response_error_keeps_code_and_data(self):
        """Test that RpcResponseError exposes the JSON-RPC error fields."""
        exc = RpcResponseError("insufficient funds", code=-32000, data="0x")

        assert exc.code == -32000
        assert exc.message == "insufficient funds"
        assert exc.data == "0x"

    def test_rpc_response_error_defaults(self):
        """Test that code and data default to None."""
        exc = RpcResponseError("boom")
        assert exc.code is None
        assert exc.data is None
