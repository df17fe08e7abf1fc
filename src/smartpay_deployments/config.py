"""Configuration loading for smartpay-deployments."""

import os
import re
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from dotenv import dotenv_values

from .constants import (
    EXPLORER_API_KEY_ENV,
    EXPLORER_CONFIG,
    NETWORK_CONFIG,
    SIGNING_KEY_ENV,
    SOLIDITY_VERSION,
)
from .exceptions import ConfigurationError
from .paths import get_default_env_path
from .types import ExplorerConfig, NetworkConfig, ProjectConfig

_PRIVATE_KEY_RE = re.compile(r"^(0x)?[0-9a-fA-F]{64}$")


def read_environment(dotenv_path: Optional[Union[Path, str]] = None) -> Dict[str, str]:
    """
    Merge a dotenv file with the process environment.

    Variables already set in the process environment take precedence
    over the file. A missing file contributes nothing.

    Args:
        dotenv_path: Path to .env file (defaults to ./.env)
    """
    if dotenv_path is None:
        dotenv_path = get_default_env_path()

    merged: Dict[str, str] = {}
    if Path(dotenv_path).exists():
        merged.update({k: v for k, v in dotenv_values(dotenv_path).items() if v is not None})
    merged.update(os.environ)
    return merged


def load_config(
    environ: Optional[Mapping[str, str]] = None,
    dotenv_path: Optional[Union[Path, str]] = None,
) -> ProjectConfig:
    """
    Build the project configuration from the environment and static constants.

    No validation happens here: unset credentials come back as None and are
    checked by validate_network_config() / validate_explorer_config() right
    before they are needed.

    Args:
        environ: Environment mapping (defaults to .env merged with os.environ)
        dotenv_path: Path to .env file, only used when environ is None

    Returns:
        ProjectConfig
    """
    if environ is None:
        environ = read_environment(dotenv_path)

    signing_key = environ.get(SIGNING_KEY_ENV) or None
    api_key = environ.get(EXPLORER_API_KEY_ENV) or None

    networks = {
        name: NetworkConfig(
            name=name,
            rpc_url=entry["rpc_url"],
            signing_key=signing_key,
            gas_price_wei=entry["gas_price_wei"],
            chain_id=entry["chain_id"],
        )
        for name, entry in NETWORK_CONFIG.items()
    }

    explorers = {
        name: ExplorerConfig(
            network_name=name,
            api_key=api_key,
            chain_id=entry["chain_id"],
            api_url=entry["api_url"],
            browser_url=entry["browser_url"],
        )
        for name, entry in EXPLORER_CONFIG.items()
    }

    return ProjectConfig(
        solidity_version=SOLIDITY_VERSION,
        networks=networks,
        explorers=explorers,
    )


def validate_network_config(network: NetworkConfig) -> None:
    """
    Check that a network entry can be used to deploy.

    Raises:
        ConfigurationError: If the signing key is missing or malformed,
            the RPC URL is empty, or the gas price is not positive
    """
    if not network.signing_key:
        raise ConfigurationError(
            f"No signing key for network '{network.name}': "
            f"set ${SIGNING_KEY_ENV} in the environment or .env file"
        )
    if not _PRIVATE_KEY_RE.match(network.signing_key.strip()):
        # Never echo the key itself
        raise ConfigurationError(
            f"${SIGNING_KEY_ENV} for network '{network.name}' is not a 32-byte hex private key"
        )
    if not network.rpc_url:
        raise ConfigurationError(f"No RPC URL configured for network '{network.name}'")
    if network.gas_price_wei <= 0:
        raise ConfigurationError(
            f"Gas price for network '{network.name}' must be positive, "
            f"got {network.gas_price_wei}"
        )


def validate_explorer_config(explorer: ExplorerConfig) -> None:
    """
    Check that an explorer entry can be used to verify contracts.

    Raises:
        ConfigurationError: If the API key or URLs are missing
    """
    if not explorer.api_key:
        raise ConfigurationError(
            f"No block explorer API key for network '{explorer.network_name}': "
            f"set ${EXPLORER_API_KEY_ENV} in the environment or .env file"
        )
    if not explorer.api_url or not explorer.browser_url:
        raise ConfigurationError(
            f"Explorer URLs for network '{explorer.network_name}' are incomplete"
        )


def masked_summary(config: ProjectConfig) -> Dict[str, object]:
    """Return a printable view of the configuration with secrets masked."""

    def mask(secret: Optional[str]) -> Optional[str]:
        if not secret:
            return None
        return "****" + secret[-4:] if len(secret) > 8 else "****"

    return {
        "solidity": config.solidity_version,
        "networks": {
            name: {
                "url": n.rpc_url,
                "accounts": [mask(n.signing_key)],
                "gasPrice": n.gas_price_wei,
                "chainId": n.chain_id,
            }
            for name, n in config.networks.items()
        },
        "etherscan": {
            "apiKey": {name: mask(e.api_key) for name, e in config.explorers.items()},
            "customChains": [
                {
                    "network": name,
                    "chainId": e.chain_id,
                    "urls": {"apiURL": e.api_url, "browserURL": e.browser_url},
                }
                for name, e in config.explorers.items()
            ],
        },
    }
