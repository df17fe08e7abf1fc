"""Hardhat artifact parsers for smartpay-deployments."""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

import structlog

from .exceptions import ArtifactNotFoundError, DefectiveArtifactError
from .paths import get_artifact_path
from .types import ContractArtifact

logger = structlog.get_logger(__name__)


def _resolve_build_info(artifact_path: Path) -> Optional[Path]:
    """Follow the neighbouring .dbg.json file to the solc build-info file."""
    dbg_path = artifact_path.with_name(f"{artifact_path.stem}.dbg.json")
    if not dbg_path.exists():
        return None

    with open(dbg_path) as f:
        dbg = json.load(f)

    if "buildInfo" not in dbg:
        return None

    # buildInfo is relative to the directory holding the .dbg.json file
    return (dbg_path.parent / dbg["buildInfo"]).resolve()


def parse_hardhat_artifact(file_path: Path) -> ContractArtifact:
    """
    Parse a Hardhat artifact JSON file (format hh-sol-artifact-1).

    Args:
        file_path: Path to <ContractName>.json artifact

    Returns:
        ContractArtifact with abi, creation bytecode and (if present)
        deployed bytecode and build-info location

    Raises:
        ArtifactNotFoundError: If the file does not exist
        DefectiveArtifactError: If the artifact is malformed or has no bytecode
            (interfaces and abstract contracts)
    """
    if not file_path.exists():
        raise ArtifactNotFoundError(f"Artifact file not found: {file_path}")

    with open(file_path) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise DefectiveArtifactError(f"Artifact is not valid JSON: {file_path}") from e

    missing = [k for k in ("contractName", "abi", "bytecode") if k not in data]
    if missing:
        raise DefectiveArtifactError(
            f"Artifact {file_path} is missing fields: {', '.join(missing)}"
        )

    bytecode = data["bytecode"]
    if not bytecode or bytecode == "0x":
        raise DefectiveArtifactError(
            f"Contract '{data['contractName']}' has no bytecode "
            "(is it abstract or an interface?)"
        )
    if not bytecode.startswith("0x"):
        bytecode = "0x" + bytecode

    return ContractArtifact(
        contract_name=data["contractName"],
        source_name=data.get("sourceName", ""),
        abi=data["abi"],
        bytecode=bytecode,
        deployed_bytecode=data.get("deployedBytecode"),
        build_info_path=_resolve_build_info(file_path),
    )


def load_contract_artifact(
    contract_name: str, artifacts_root: Optional[Union[Path, str]] = None
) -> ContractArtifact:
    """
    Resolve and parse the artifact for a contract by name.

    Works entirely offline, so a missing artifact is reported before
    any network activity.

    Raises:
        ArtifactNotFoundError: If the contract was never compiled
        AmbiguousArtifactError: If the name is defined in several sources
        DefectiveArtifactError: If the artifact cannot be deployed
    """
    artifact_path = get_artifact_path(contract_name, artifacts_root)
    artifact = parse_hardhat_artifact(artifact_path)
    logger.debug(
        "artifact_loaded",
        contract=artifact.fully_qualified_name,
        path=str(artifact_path),
        build_info=str(artifact.build_info_path) if artifact.build_info_path else None,
    )
    return artifact


def load_build_info(artifact: ContractArtifact) -> Dict[str, Any]:
    """
    Load the solc build-info file backing an artifact.

    Returns:
        Dict with at least "solcLongVersion" and "input" (standard JSON input)

    Raises:
        ArtifactNotFoundError: If the artifact has no build-info file on disk
        DefectiveArtifactError: If the build-info lacks compiler input or version
    """
    path = artifact.build_info_path
    if path is None or not path.exists():
        raise ArtifactNotFoundError(
            f"Build info for '{artifact.contract_name}' not found; "
            "recompile with hardhat to regenerate artifacts/build-info"
        )

    with open(path) as f:
        build_info = json.load(f)

    for key in ("solcLongVersion", "input"):
        if key not in build_info:
            raise DefectiveArtifactError(f"Build info {path} is missing '{key}'")

    return build_info
