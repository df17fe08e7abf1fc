"""
smartpay-deployments: deploy and verify the SmartPay contract from Hardhat artifacts
"""

from importlib.metadata import PackageNotFoundError, version

from .artifacts import load_contract_artifact
from .cli import configure_logging
from .config import load_config, validate_explorer_config, validate_network_config
from .deployer import ContractFactory, PendingDeployment, deploy_contract, get_contract_factory
from .exceptions import (
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
from .types import (
    ContractArtifact,
    DeploymentResult,
    ExplorerConfig,
    NetworkConfig,
    ProjectConfig,
    VerificationResult,
)
from .verification import verify_contract

try:
    __version__ = version("smartpay-deployments")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "configure_logging",
    "load_config",
    "validate_network_config",
    "validate_explorer_config",
    "load_contract_artifact",
    "get_contract_factory",
    "deploy_contract",
    "verify_contract",
    "ContractFactory",
    "PendingDeployment",
    "NetworkConfig",
    "ExplorerConfig",
    "ProjectConfig",
    "ContractArtifact",
    "DeploymentResult",
    "VerificationResult",
    "DeploymentError",
    "ConfigurationError",
    "NetworkNotFoundError",
    "ArtifactNotFoundError",
    "AmbiguousArtifactError",
    "DefectiveArtifactError",
    "RpcError",
    "RpcConnectionError",
    "RpcResponseError",
    "TransactionError",
    "TransactionRejectedError",
    "TransactionRevertedError",
    "DeploymentTimeoutError",
    "VerificationError",
]
