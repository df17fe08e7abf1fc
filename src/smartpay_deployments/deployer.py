"""Contract deployment for smartpay-deployments."""

import time
from pathlib import Path
from typing import Any, Dict, Optional, Union

import structlog
from eth_account import Account
from eth_utils import to_checksum_address, to_hex

from .artifacts import load_contract_artifact
from .config import validate_network_config
from .constants import DEFAULT_CONTRACT_NAME, DEFAULT_NETWORK, GAS_ESTIMATE_BUFFER
from .exceptions import (
    ConfigurationError,
    DeploymentTimeoutError,
    RpcResponseError,
    TransactionRejectedError,
    TransactionRevertedError,
)
from .rpc import JsonRpcClient
from .types import ContractArtifact, DeploymentResult, NetworkConfig, ProjectConfig

logger = structlog.get_logger(__name__)


class PendingDeployment:
    """A submitted deployment transaction awaiting confirmation."""

    def __init__(
        self,
        artifact: ContractArtifact,
        network: NetworkConfig,
        client: JsonRpcClient,
        transaction_hash: str,
        deployer: str,
    ):
        self.artifact = artifact
        self.network = network
        self.client = client
        self.transaction_hash = transaction_hash
        self.deployer = deployer
        self.logger = logger.bind(
            contract=artifact.contract_name, network=network.name, tx=transaction_hash
        )

    def _confirmed_receipt(self, confirmations: int) -> Optional[Dict[str, Any]]:
        receipt = self.client.get_transaction_receipt(self.transaction_hash)
        if receipt is None:
            return None

        if confirmations > 1:
            receipt_block = int(receipt["blockNumber"], 16)
            depth = self.client.block_number() - receipt_block + 1
            if depth < confirmations:
                self.logger.debug("awaiting_confirmations", depth=depth, required=confirmations)
                return None

        return receipt

    def wait_for_deployment(
        self,
        confirmations: int = 1,
        poll_interval: float = 2.0,
        timeout: Optional[float] = None,
    ) -> DeploymentResult:
        """
        Block until the deployment transaction is confirmed.

        Args:
            confirmations: Required number of blocks including the receipt block
            poll_interval: Seconds between receipt polls
            timeout: Give up after this many seconds (None waits forever)

        Returns:
            DeploymentResult for the deployed contract

        Raises:
            TransactionRevertedError: If the transaction failed or left no code
            DeploymentTimeoutError: If timeout elapses first
            RpcError: If the endpoint fails while polling
        """
        started = time.monotonic()

        while True:
            receipt = self._confirmed_receipt(confirmations)
            if receipt is not None:
                break
            if timeout is not None and time.monotonic() - started >= timeout:
                raise DeploymentTimeoutError(
                    f"Deployment {self.transaction_hash} not confirmed after {timeout}s"
                )
            time.sleep(poll_interval)

        if receipt.get("status") == "0x0":
            raise TransactionRevertedError(
                f"Deployment transaction {self.transaction_hash} reverted "
                f"in block {int(receipt['blockNumber'], 16)}"
            )

        contract_address = receipt.get("contractAddress")
        if not contract_address:
            raise TransactionRevertedError(
                f"Receipt for {self.transaction_hash} has no contract address"
            )
        address = to_checksum_address(contract_address)

        # Same check as ethers' waitForDeployment(): code must exist at the address
        code = self.client.get_code(address)
        if not code or code == "0x":
            raise TransactionRevertedError(f"No contract code at {address} after deployment")

        result = DeploymentResult(
            contract_name=self.artifact.contract_name,
            network=self.network.name,
            address=address,
            transaction_hash=self.transaction_hash,
            block=int(receipt["blockNumber"], 16),
            gas_used=int(receipt.get("gasUsed", "0x0"), 16),
            deployer=self.deployer,
        )
        self.logger.info(
            "deployment_confirmed", address=address, block=result.block, gas_used=result.gas_used
        )
        return result


class ContractFactory:
    """Compiled contract bound to a network and its signing key."""

    def __init__(self, artifact: ContractArtifact, network: NetworkConfig, client: JsonRpcClient):
        self.artifact = artifact
        self.network = network
        self.client = client
        self._account = Account.from_key(network.signing_key.strip())
        self.logger = logger.bind(contract=artifact.contract_name, network=network.name)

    @property
    def deployer(self) -> str:
        """Checksummed address of the signing account."""
        return self._account.address

    def _estimate_gas(self, value: int) -> int:
        estimate = self.client.estimate_gas(
            {"from": self.deployer, "data": self.artifact.bytecode, "value": hex(value)}
        )
        return int(estimate * GAS_ESTIMATE_BUFFER)

    def deploy(self, *, gas_limit: Optional[int] = None, value: int = 0) -> PendingDeployment:
        """
        Sign and submit the deployment transaction.

        Args:
            gas_limit: Explicit gas limit (estimated with a buffer if None)
            value: Wei to send to the constructor

        Returns:
            PendingDeployment to wait on

        Raises:
            ConfigurationError: If the endpoint serves a different chain
            TransactionRejectedError: If estimation or submission is refused
            RpcConnectionError: If the endpoint is unreachable
        """
        chain_id = self.client.chain_id()
        if chain_id != self.network.chain_id:
            raise ConfigurationError(
                f"RPC endpoint for '{self.network.name}' reports chain id {chain_id}, "
                f"expected {self.network.chain_id}"
            )

        try:
            nonce = self.client.get_transaction_count(self.deployer)
            gas = gas_limit if gas_limit is not None else self._estimate_gas(value)

            tx = {
                "nonce": nonce,
                "gasPrice": self.network.gas_price_wei,
                "gas": gas,
                "data": self.artifact.bytecode,
                "value": value,
                "chainId": chain_id,
            }
            signed = self._account.sign_transaction(tx)
            tx_hash = self.client.send_raw_transaction(to_hex(signed.raw_transaction))
        except RpcResponseError as e:
            raise TransactionRejectedError(
                f"Deployment of {self.artifact.contract_name} rejected: {e.message}"
            ) from e

        self.logger.info(
            "deployment_submitted",
            tx=tx_hash,
            deployer=self.deployer,
            nonce=nonce,
            gas=gas,
            gas_price=self.network.gas_price_wei,
        )
        return PendingDeployment(self.artifact, self.network, self.client, tx_hash, self.deployer)


def get_contract_factory(
    contract_name: str,
    network: NetworkConfig,
    artifacts_root: Optional[Union[Path, str]] = None,
    client: Optional[JsonRpcClient] = None,
) -> ContractFactory:
    """
    Resolve a deployable contract by name.

    Validates the network configuration and loads the artifact without
    touching the network.

    Raises:
        ConfigurationError: If the network cannot be used to deploy
        ArtifactNotFoundError: If the contract was never compiled
        DefectiveArtifactError: If the artifact has no bytecode
    """
    validate_network_config(network)
    artifact = load_contract_artifact(contract_name, artifacts_root)
    if client is None:
        client = JsonRpcClient(network.rpc_url)
    return ContractFactory(artifact, network, client)


def deploy_contract(
    config: ProjectConfig,
    network_name: str = DEFAULT_NETWORK,
    contract_name: str = DEFAULT_CONTRACT_NAME,
    artifacts_root: Optional[Union[Path, str]] = None,
    confirmations: int = 1,
    timeout: Optional[float] = None,
    poll_interval: float = 2.0,
    client: Optional[JsonRpcClient] = None,
) -> DeploymentResult:
    """
    Deploy a compiled contract and wait for confirmation.

    All-or-nothing: returns a confirmed DeploymentResult or raises.

    Args:
        config: Project configuration
        network_name: Configured network to deploy to
        contract_name: Contract to deploy
        artifacts_root: Hardhat artifacts directory (defaults to ./artifacts)
        confirmations: Blocks to wait for, including the inclusion block
        timeout: Seconds to wait for confirmation (None waits forever)
        poll_interval: Seconds between receipt polls
        client: RPC client (built from the network's rpc_url if None)

    Returns:
        DeploymentResult

    Raises:
        DeploymentError: Subclass describing the failure kind
    """
    network = config.network(network_name)
    factory = get_contract_factory(contract_name, network, artifacts_root, client)
    pending = factory.deploy()
    result = pending.wait_for_deployment(
        confirmations=confirmations, poll_interval=poll_interval, timeout=timeout
    )

    if network_name in config.explorers:
        result.url = config.explorer(network_name).address_url(result.address)

    return result
