"""Command-line entry point for smartpay-deployments."""

import json
import logging
import sys
from typing import List, Optional

import click
import structlog

from .artifacts import load_contract_artifact
from .config import load_config, masked_summary
from .constants import DEFAULT_CONTRACT_NAME, DEFAULT_NETWORK
from .deployer import deploy_contract
from .exceptions import DeploymentError
from .verification import verify_contract

logger = structlog.get_logger(__name__)


def configure_logging(verbose: bool = False) -> None:
    """Send structured logs to stderr, keeping stdout for results."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if verbose else logging.INFO
        ),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=False,
    )


env_file_option = click.option(
    "--env-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="dotenv file with PRIVATE_KEY / BASE_API_KEY (default: ./.env)",
)
network_option = click.option(
    "--network", default=DEFAULT_NETWORK, show_default=True, help="Configured network name"
)
contract_option = click.option(
    "--contract",
    default=DEFAULT_CONTRACT_NAME,
    show_default=True,
    help="Contract name, or sourceName:Name when ambiguous",
)
artifacts_option = click.option(
    "--artifacts",
    type=click.Path(file_okay=False),
    default=None,
    help="Hardhat artifacts directory (default: ./artifacts)",
)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """
    Deploy and verify the SmartPay contract
    """
    configure_logging(verbose)


@cli.command()
@network_option
@contract_option
@artifacts_option
@click.option("--confirmations", type=click.IntRange(min=1), default=1, show_default=True)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0),
    default=None,
    help="Seconds to wait for confirmation (default: wait forever)",
)
@click.option("--poll-interval", type=click.FloatRange(min=0), default=2.0, show_default=True)
@env_file_option
def deploy(network, contract, artifacts, confirmations, timeout, poll_interval, env_file):
    """Deploy a compiled contract and print its address."""
    config = load_config(dotenv_path=env_file)
    result = deploy_contract(
        config,
        network_name=network,
        contract_name=contract,
        artifacts_root=artifacts,
        confirmations=confirmations,
        timeout=timeout,
        poll_interval=poll_interval,
    )
    click.echo(f"{result.contract_name} deployed to {result.address}")


@cli.command()
@click.argument("address")
@network_option
@contract_option
@artifacts_option
@click.option("--constructor-args", default="", help="ABI-encoded constructor arguments (hex)")
@click.option("--poll-interval", type=click.FloatRange(min=0), default=5.0, show_default=True)
@env_file_option
def verify(address, network, contract, artifacts, constructor_args, poll_interval, env_file):
    """Verify a deployed contract's source on the block explorer."""
    config = load_config(dotenv_path=env_file)
    explorer = config.explorer(network)
    artifact = load_contract_artifact(contract, artifacts)
    result = verify_contract(
        address, artifact, explorer, constructor_args=constructor_args, poll_interval=poll_interval
    )
    click.echo(f"{artifact.contract_name} verified at {result.url}")


@cli.command(name="config")
@env_file_option
def show_config(env_file):
    """Print the loaded configuration with secrets masked."""
    config = load_config(dotenv_path=env_file)
    click.echo(json.dumps(masked_summary(config), indent=2))


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI and translate the outcome into a process exit code.

    Returns:
        0 on success, 1 on any failure, 130 when interrupted
    """
    try:
        rv = cli.main(args=argv, prog_name="smartpay-deploy", standalone_mode=False)
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 130
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except DeploymentError as e:
        logger.error("command_failed", kind=type(e).__name__, error=str(e))
        click.echo(f"Error: {e}", err=True)
        return 1
    except Exception as e:
        logger.exception("unexpected_error", kind=type(e).__name__)
        click.echo(f"Error: {e}", err=True)
        return 1

    return rv if isinstance(rv, int) else 0
