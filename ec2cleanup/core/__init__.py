"""
Core Infrastructure Components
==============================

- :class:`AWSClient` - Manages the boto3 session and EC2 service handles
- EC2 service wrappers - list/delete operations per resource kind
- :class:`CleanupConfig` - Run settings and command-line defaults
- Exception hierarchy for error handling

Example
-------
>>> from ec2cleanup.core import AWSClient
>>>
>>> client = AWSClient(region="eu-west-1")
>>> groups = client.get_security_group_service().list()
"""

from ec2cleanup.core.aws_client import AWSClient
from ec2cleanup.core.config import CleanupConfig, parse_positionals
from ec2cleanup.core.exceptions import (
    AWSClientError,
    CleanerError,
    ConfigurationError,
    CredentialsError,
    DeleteError,
    Ec2CleanupError,
    PatternError,
    RateLimitError,
    RegionError,
    ResourceFetchError,
    ServiceError,
)
from ec2cleanup.core.models import KeyPair, RunningInstance, SecurityGroup, Tag, Volume
from ec2cleanup.core.services import (
    InstanceService,
    KeyPairService,
    SecurityGroupService,
    TagService,
    VolumeService,
)

__all__ = [
    # Client
    "AWSClient",
    # Services
    "KeyPairService",
    "InstanceService",
    "SecurityGroupService",
    "VolumeService",
    "TagService",
    # Models
    "KeyPair",
    "RunningInstance",
    "SecurityGroup",
    "Tag",
    "Volume",
    # Configuration
    "CleanupConfig",
    "parse_positionals",
    # Exceptions
    "Ec2CleanupError",
    "ConfigurationError",
    "PatternError",
    "AWSClientError",
    "CredentialsError",
    "RegionError",
    "ServiceError",
    "ResourceFetchError",
    "CleanerError",
    "DeleteError",
    "RateLimitError",
]
