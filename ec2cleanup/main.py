"""
ec2-cleanup CLI

Main entry point for the command-line interface.
"""

import logging
import sys
from typing import Optional, Tuple

import click
from rich.console import Console

from . import __version__
from .cleaners.runner import CleanupRunner
from .core.config import (
    CREDENTIAL_ENV,
    IDENTITY_ENV,
    CleanupConfig,
    parse_positionals,
)
from .core.exceptions import ConfigurationError
from .core.logging import setup_logging
from .reporters.cli_reporter import CLIReporter


console = Console()
logger = logging.getLogger("ec2cleanup")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("args", nargs=-1, metavar="[check] [REGION [PATTERN]]")
@click.option(
    "--identity",
    envvar=[IDENTITY_ENV, "AWS_ACCESS_KEY_ID"],
    default=None,
    help=f"EC2 access key (env: {IDENTITY_ENV} or AWS_ACCESS_KEY_ID)",
)
@click.option(
    "--credential",
    envvar=[CREDENTIAL_ENV, "AWS_SECRET_ACCESS_KEY"],
    default=None,
    help=f"EC2 secret key (env: {CREDENTIAL_ENV} or AWS_SECRET_ACCESS_KEY)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    help="Logging level (default: INFO)",
)
@click.option(
    "--log-file",
    default=None,
    help="Also write log lines to this file",
)
@click.option(
    "--summary/--no-summary",
    default=True,
    help="Print a summary table when the run completes (default: on)",
)
@click.version_option(version=__version__, prog_name="ec2-cleanup")
def cli(
    args: Tuple[str, ...],
    identity: Optional[str],
    credential: Optional[str],
    log_level: str,
    log_file: Optional[str],
    summary: bool,
):
    """
    Delete orphaned EC2 security groups, key pairs and volumes.

    Resources in REGION (default: eu-west-1) whose name fully matches the
    regular expression PATTERN (default: 'jclouds#.*') are deleted. Key
    pairs still used by a live instance are kept. With an empty PATTERN,
    volumes without a Name tag are deleted instead of named ones.

    Add the word 'check' anywhere to only report what would be deleted.

    Examples:

        # Clean jclouds resources in eu-west-1
        ec2-cleanup

        # Report matches in us-east-1 without deleting
        ec2-cleanup check us-east-1

        # Clean resources named test-* in us-west-2
        ec2-cleanup us-west-2 'test-.*'

        # Clean unnamed volumes (and nothing else) in eu-west-1
        ec2-cleanup eu-west-1 ''
    """
    setup_logging(level=log_level, log_file=log_file)

    region, name_pattern, check_only = parse_positionals(args)
    config = CleanupConfig(
        region=region,
        name_pattern=name_pattern,
        identity=identity,
        credential=credential,
        check_only=check_only,
    )

    try:
        config.require_credentials()
        runner = CleanupRunner(
            region=config.region,
            name_pattern=config.name_pattern,
            identity=config.identity,
            credential=config.credential,
            check_only=config.check_only,
            logger=logger,
        )
    except ConfigurationError as e:
        logger.error(e.message)
        sys.exit(1)

    try:
        report = runner.run()
    except KeyboardInterrupt:
        console.print("\n[yellow]Cleanup cancelled by user.[/yellow]")
        sys.exit(130)
    except Exception:
        # The runner has already logged the error and released the client
        sys.exit(1)

    if summary:
        CLIReporter(console).report(report)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
