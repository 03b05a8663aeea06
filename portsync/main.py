"""
Main entry point for portsync.

Usage:
    portsync HOST [--config FILE] [--log-level LEVEL] [--poll-interval SECONDS]
"""

import asyncio
import sys
from typing import Optional

import typer
from loguru import logger

from .application.startup import ApplicationStartup
from .core.exceptions import ConfigError
from .infrastructure.config.loader import ConfigLoader
from .infrastructure.config.models import ApplicationConfig
from .infrastructure.logging.setup import setup_logging

cli = typer.Typer(
    name="portsync",
    help="Keep an SSH tunnel to a docker-machine host in sync with the ports its containers publish",
    add_completion=False
)


@cli.command()
def run(
    host: str = typer.Argument(
        ..., help="docker-machine host to forward container ports from"
    ),
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c", help="Configuration file path"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level"
    ),
    poll_interval: Optional[float] = typer.Option(
        None, "--poll-interval", help="Seconds between container polls"
    ),
    machine_binary: Optional[str] = typer.Option(
        None, "--machine-binary", help="docker-machine executable to use"
    ),
    debug: bool = typer.Option(
        False, "--debug", help="Enable debug logging"
    )
) -> None:
    """Forward every published container port of HOST to localhost."""

    config_loader = ConfigLoader()

    try:
        config = config_loader.load_config(config_file)

        # Command line overrides file and environment
        if log_level:
            config.logging.level = log_level.upper()
        if poll_interval is not None:
            config.reconciler.poll_interval = poll_interval
        if machine_binary:
            config.machine.binary = machine_binary
        if debug:
            config.debug = True
            config.logging.level = "DEBUG"

        config.validate()
    except (ConfigError, ValueError) as e:
        typer.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    setup_logging(config.logging)

    logger.info(f"Starting {config.name} v{config.version} for host {host}")

    try:
        exit_code = asyncio.run(run_application(host, config))
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
        exit_code = 0

    if exit_code != 0:
        sys.exit(exit_code)


async def run_application(host: str, config: ApplicationConfig) -> int:
    """
    Run the forwarder with the given configuration.

    Args:
        host: docker-machine host name
        config: Application configuration

    Returns:
        Process exit code
    """
    startup = ApplicationStartup(config)
    return await startup.run(host)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
