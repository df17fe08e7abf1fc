"""Path management utilities for smartpay-deployments."""

from pathlib import Path
from typing import List, Optional, Union

from .exceptions import AmbiguousArtifactError, ArtifactNotFoundError


def get_default_artifacts_dir() -> Path:
    """
    Get default Hardhat artifacts directory.

    Returns:
        Path to ./artifacts
    """
    return Path.cwd() / "artifacts"


def get_default_env_path() -> Path:
    """Get default dotenv file path (./.env)."""
    return Path.cwd() / ".env"


def _is_contract_artifact(path: Path, artifacts_root: Path) -> bool:
    # Skip debug files and solc build-info dumps
    if path.name.endswith(".dbg.json"):
        return False
    return "build-info" not in path.relative_to(artifacts_root).parts


def get_artifact_path(
    contract_name: str, artifacts_root: Optional[Union[Path, str]] = None
) -> Path:
    """
    Locate the artifact JSON file for a contract.

    Hardhat writes artifacts to artifacts/<sourceName>/<ContractName>.json,
    e.g. artifacts/contracts/SmartPay.sol/SmartPay.json.

    Args:
        contract_name: Bare contract name, or a fully qualified name
            such as "contracts/SmartPay.sol:SmartPay" to pick one source
        artifacts_root: Custom artifacts directory (defaults to ./artifacts)

    Returns:
        Path to the artifact file

    Raises:
        ArtifactNotFoundError: If no artifact exists for the contract
        AmbiguousArtifactError: If several sources define the same contract name
    """
    if artifacts_root is None:
        artifacts_root = get_default_artifacts_dir()
    else:
        artifacts_root = Path(artifacts_root).absolute()

    if not artifacts_root.is_dir():
        raise ArtifactNotFoundError(
            f"Artifacts directory not found at {artifacts_root}. "
            "Compile the contracts first (npx hardhat compile)."
        )

    if ":" in contract_name:
        source_name, _, name = contract_name.rpartition(":")
        path = artifacts_root / source_name / f"{name}.json"
        if not path.is_file():
            raise ArtifactNotFoundError(
                f"Artifact for contract '{contract_name}' not found at {path}"
            )
        return path

    matches: List[Path] = sorted(
        p
        for p in artifacts_root.rglob(f"{contract_name}.json")
        if _is_contract_artifact(p, artifacts_root)
    )

    if not matches:
        raise ArtifactNotFoundError(
            f"Artifact for contract '{contract_name}' not found under {artifacts_root}"
        )
    if len(matches) > 1:
        found = ", ".join(str(p.relative_to(artifacts_root)) for p in matches)
        raise AmbiguousArtifactError(
            f"Multiple artifacts found for contract '{contract_name}': {found}. "
            "Use a fully qualified name such as 'contracts/X.sol:Name'."
        )

    return matches[0]
