"""Custom exception classes for smartpay-deployments."""

from typing import Any, Optional


class DeploymentError(Exception):
    """Base exception for deployment-related errors."""

    pass


class ConfigurationError(DeploymentError, ValueError):
    """Raised when a network or explorer configuration is missing required values."""

    pass


class NetworkNotFoundError(DeploymentError, ValueError):
    """Raised when requested network or explorer is not configured."""

    pass


class ArtifactNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when a compiled contract artifact cannot be found."""

    pass


class AmbiguousArtifactError(DeploymentError, ValueError):
    """Raised when a contract name matches more than one artifact."""

    pass


class DefectiveArtifactError(DeploymentError, ValueError):
    """Raised when an artifact has no deployable bytecode."""

    pass


class RpcError(DeploymentError, RuntimeError):
    """Base exception for JSON-RPC failures."""

    pass


class RpcConnectionError(RpcError, ConnectionError):
    """Raised when the RPC endpoint is unreachable or returns a non-200 status."""

    pass


class RpcResponseError(RpcError):
    """Raised when the RPC endpoint answers with a JSON-RPC error object."""

    def __init__(self, message: str, code: Optional[int] = None, data: Any = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data


class TransactionError(DeploymentError, RuntimeError):
    """Base exception for deployment transaction failures."""

    pass


class TransactionRejectedError(TransactionError):
    """Raised when the network refuses to accept a deployment transaction."""

    pass


class TransactionRevertedError(TransactionError):
    """Raised when a deployment transaction is mined but fails."""

    pass


class DeploymentTimeoutError(TransactionError, TimeoutError):
    """Raised when confirmation is not reached within the requested timeout."""

    pass


class VerificationError(DeploymentError, RuntimeError):
    """Raised when the block explorer rejects or fails a verification request."""

    pass
