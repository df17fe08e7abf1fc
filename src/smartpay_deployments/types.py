"""Data types and dataclasses for smartpay-deployments."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .exceptions import NetworkNotFoundError


@dataclass(frozen=True)
class NetworkConfig:
    """A deployable network and the credential used to sign for it."""

    name: str  # e.g., "base-goerli"
    rpc_url: str
    signing_key: Optional[str] = field(repr=False)  # None when env var is unset
    gas_price_wei: int
    chain_id: int


@dataclass(frozen=True)
class ExplorerConfig:
    """Etherscan-compatible explorer integration for one network."""

    network_name: str  # Matches NetworkConfig.name
    api_key: Optional[str] = field(repr=False)
    chain_id: int
    api_url: str
    browser_url: str

    def address_url(self, address: str) -> str:
        """Return the explorer page for an address."""
        return f"{self.browser_url.rstrip('/')}/address/{address}"


@dataclass(frozen=True)
class ProjectConfig:
    """Complete, read-only project configuration."""

    solidity_version: str
    networks: Dict[str, NetworkConfig]
    explorers: Dict[str, ExplorerConfig]

    def network(self, name: str) -> NetworkConfig:
        """
        Get a network entry by name.

        Raises:
            NetworkNotFoundError: If no network has that name
        """
        if name not in self.networks:
            raise NetworkNotFoundError(
                f"Network '{name}' is not configured "
                f"(available: {', '.join(sorted(self.networks)) or 'none'})"
            )
        return self.networks[name]

    def explorer(self, name: str) -> ExplorerConfig:
        """
        Get the explorer entry associated with a network name.

        Raises:
            NetworkNotFoundError: If no explorer is configured for that network
        """
        if name not in self.explorers:
            raise NetworkNotFoundError(f"No block explorer configured for network '{name}'")
        return self.explorers[name]


@dataclass
class ContractArtifact:
    """Compiled contract loaded from a Hardhat artifact file."""

    contract_name: str  # e.g., "SmartPay"
    source_name: str  # e.g., "contracts/SmartPay.sol"
    abi: List[Dict[str, Any]]
    bytecode: str  # 0x-prefixed creation bytecode

    deployed_bytecode: Optional[str] = None
    build_info_path: Optional[Path] = None

    @property
    def fully_qualified_name(self) -> str:
        return f"{self.source_name}:{self.contract_name}"


@dataclass
class DeploymentResult:
    """Outcome of a confirmed contract deployment."""

    contract_name: str
    network: str
    address: str  # Checksummed address
    transaction_hash: str
    block: int
    gas_used: int
    deployer: str
    url: Optional[str] = None  # Block explorer URL, when an explorer is configured


@dataclass
class VerificationResult:
    """Outcome of a source verification request."""

    address: str
    status: str  # Explorer message, e.g., "Pass - Verified"
    url: str
    guid: Optional[str] = None  # None when the contract was already verified
