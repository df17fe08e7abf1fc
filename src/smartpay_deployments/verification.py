"""Source verification against Etherscan-compatible explorers."""

import json
import time
from typing import Any, Dict, Optional, Union

import requests
import structlog
from eth_utils import to_checksum_address

from .artifacts import load_build_info
from .config import validate_explorer_config
from .constants import RPC_TIMEOUT
from .exceptions import VerificationError
from .types import ContractArtifact, DeploymentResult, ExplorerConfig, VerificationResult

logger = structlog.get_logger(__name__)

PENDING_RESULT = "Pending in queue"


def _is_already_verified(message: str) -> bool:
    return "already verified" in message.lower()


def _explorer_request(
    session: requests.Session, method: str, explorer: ExplorerConfig, **kwargs: Any
) -> Dict[str, Any]:
    """Send a request to the explorer API and decode its JSON envelope."""
    try:
        response = session.request(method, explorer.api_url, timeout=RPC_TIMEOUT, **kwargs)
    except requests.RequestException as e:
        raise VerificationError(f"Network error talking to {explorer.api_url}: {e}") from e

    if response.status_code != 200:
        raise VerificationError(
            f"Explorer request failed with status {response.status_code}"
        )

    try:
        body = response.json()
    except ValueError as e:
        raise VerificationError("Explorer returned a non-JSON response") from e

    if "status" not in body or "result" not in body:
        raise VerificationError(f"Unexpected explorer response: {body}")
    return body


def submit_verification(
    address: str,
    artifact: ContractArtifact,
    explorer: ExplorerConfig,
    constructor_args: str = "",
    session: Optional[requests.Session] = None,
) -> Optional[str]:
    """
    Submit standard-JSON source for verification.

    Args:
        address: Deployed contract address
        artifact: Artifact with a build-info file
        explorer: Explorer to submit to
        constructor_args: ABI-encoded constructor arguments (hex, no 0x)
        session: requests session (new one if None)

    Returns:
        Verification GUID, or None if the contract is already verified

    Raises:
        ConfigurationError: If the explorer has no API key
        ArtifactNotFoundError: If the build-info file is missing
        VerificationError: If the explorer refuses the submission
    """
    validate_explorer_config(explorer)
    build_info = load_build_info(artifact)
    session = session or requests.Session()

    data = {
        "apikey": explorer.api_key,
        "module": "contract",
        "action": "verifysourcecode",
        "contractaddress": to_checksum_address(address),
        "sourceCode": json.dumps(build_info["input"]),
        "codeformat": "solidity-standard-json-input",
        "contractname": artifact.fully_qualified_name,
        "compilerversion": f"v{build_info['solcLongVersion']}",
        # Field name is misspelled in the Etherscan API
        "constructorArguements": constructor_args.removeprefix("0x"),
    }
    body = _explorer_request(session, "POST", explorer, data=data)

    if body["status"] == "1":
        logger.info("verification_submitted", address=address, guid=body["result"])
        return body["result"]

    if _is_already_verified(str(body["result"])):
        logger.info("verification_skipped", address=address, reason=body["result"])
        return None

    raise VerificationError(f"Verification request rejected: {body['result']}")


def check_verification_status(
    guid: str, explorer: ExplorerConfig, session: Optional[requests.Session] = None
) -> Dict[str, Any]:
    """Query the status of a verification request (raw explorer envelope)."""
    session = session or requests.Session()
    params = {
        "apikey": explorer.api_key,
        "module": "contract",
        "action": "checkverifystatus",
        "guid": guid,
    }
    return _explorer_request(session, "GET", explorer, params=params)


def verify_contract(
    result_or_address: Union[DeploymentResult, str],
    artifact: ContractArtifact,
    explorer: ExplorerConfig,
    constructor_args: str = "",
    poll_interval: float = 5.0,
    max_attempts: int = 10,
    session: Optional[requests.Session] = None,
) -> VerificationResult:
    """
    Verify a deployed contract's source on the explorer.

    Submits the request and polls until the explorer reports a final status.

    Args:
        result_or_address: DeploymentResult from deploy_contract, or a plain address

    Raises:
        ConfigurationError: If the explorer has no API key
        ArtifactNotFoundError: If the build-info file is missing
        VerificationError: If verification fails or polling runs out of attempts
    """
    if isinstance(result_or_address, DeploymentResult):
        address = result_or_address.address
    else:
        address = result_or_address

    session = session or requests.Session()
    address = to_checksum_address(address)
    url = explorer.address_url(address) + "#code"

    guid = submit_verification(address, artifact, explorer, constructor_args, session)
    if guid is None:
        return VerificationResult(address=address, status="Already Verified", url=url)

    for attempt in range(1, max_attempts + 1):
        time.sleep(poll_interval)
        body = check_verification_status(guid, explorer, session)
        result = str(body["result"])
        logger.debug("verification_status", guid=guid, attempt=attempt, result=result)

        if result == PENDING_RESULT:
            continue
        if body["status"] == "1" or _is_already_verified(result):
            logger.info("verification_succeeded", address=address, guid=guid)
            return VerificationResult(address=address, status=result, url=url, guid=guid)
        raise VerificationError(f"Verification of {address} failed: {result}")

    raise VerificationError(
        f"Verification of {address} still pending after {max_attempts} attempts (guid {guid})"
    )
