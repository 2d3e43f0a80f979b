"""
Run configuration for ec2-cleanup.

Holds the defaults of the command-line surface and the rules for turning
positional arguments into a region, a name pattern and the check flag.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ec2cleanup.core.exceptions import ConfigurationError

# Amazon Europe (Ireland)
DEFAULT_REGION = "eu-west-1"

# Names jclouds gives to the groups, key pairs and volumes it creates
DEFAULT_NAME_PATTERN = "jclouds#.*"

# Positional token that switches on check (dry-run) mode
CHECK_TOKEN = "check"

IDENTITY_ENV = "AWS_EC2_IDENTITY"
CREDENTIAL_ENV = "AWS_EC2_CREDENTIAL"


@dataclass
class CleanupConfig:
    """
    Settings for one cleanup run.

    Attributes:
        region: AWS region to clean
        name_pattern: Regular expression resource names must fully match.
            An empty pattern selects volumes without a Name tag.
        identity: AWS access key ID
        credential: AWS secret access key
        check_only: Report matches without deleting anything
    """

    region: str = DEFAULT_REGION
    name_pattern: str = DEFAULT_NAME_PATTERN
    identity: Optional[str] = None
    credential: Optional[str] = None
    check_only: bool = False

    def require_credentials(self) -> None:
        """
        Fail before any remote call when credentials are missing.

        Raises:
            ConfigurationError: If identity or credential is unset
        """
        if not self.identity:
            raise ConfigurationError(
                f"The {IDENTITY_ENV} variable must be set to your EC2 access key",
                details={"setting": "identity"},
            )
        if not self.credential:
            raise ConfigurationError(
                f"The {CREDENTIAL_ENV} variable must be set to your EC2 secret key",
                details={"setting": "credential"},
            )


def parse_positionals(args: Sequence[str]) -> Tuple[str, str, bool]:
    """
    Split positional arguments into region, name pattern and check flag.

    The ``check`` token may appear anywhere and is removed before the
    remaining arguments are read as ``[region [pattern]]``.

    Args:
        args: Positional command-line arguments

    Returns:
        Tuple of (region, name_pattern, check_only)

    Example:
        >>> parse_positionals(["check", "us-east-1"])
        ('us-east-1', 'jclouds#.*', True)
    """
    parameters = list(args)
    check_only = False
    if CHECK_TOKEN in parameters:
        parameters.remove(CHECK_TOKEN)
        check_only = True

    region = parameters[0] if len(parameters) > 0 else DEFAULT_REGION
    name_pattern = parameters[1] if len(parameters) > 1 else DEFAULT_NAME_PATTERN
    return region, name_pattern, check_only
