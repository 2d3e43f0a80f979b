"""
AWS Client Module
=================

Provides a wrapper around boto3 for one region and one set of credentials,
with built-in retry settings, credential validation and the EC2 service
handles the cleanup runner works against.

Classes
-------
AWSClient
    Main client class for AWS operations.

Example
-------
>>> from ec2cleanup.core.aws_client import AWSClient
>>>
>>> with AWSClient(region="eu-west-1", identity="AKIA...", credential="...") as client:
...     client.validate_credentials()
...     key_pairs = client.get_key_pair_service().list()

Notes
-----
The boto3 session and service clients are created on first access and
cached until :meth:`AWSClient.close` is called.

See Also
--------
boto3 : AWS SDK for Python
botocore : Low-level AWS client library
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    InvalidRegionError,
    NoCredentialsError,
)

from ec2cleanup.core.exceptions import (
    AWSClientError,
    CredentialsError,
    RegionError,
    ServiceError,
)
from ec2cleanup.core.services import (
    InstanceService,
    KeyPairService,
    SecurityGroupService,
    TagService,
    VolumeService,
)

# Module logger
logger = logging.getLogger(__name__)


class AWSClient:
    """
    AWS client wrapper bound to a single region.

    Parameters
    ----------
    region : str
        AWS region to connect to.
    identity : str, optional
        AWS access key ID. Falls back to the boto3 credential chain if omitted.
    credential : str, optional
        AWS secret access key.
    max_retries : int, default=3
        Maximum number of attempts botocore makes for a failed API call.
    timeout : int, default=30
        Connect and read timeout in seconds.

    Attributes
    ----------
    region : str
        The configured AWS region.
    max_retries : int
        Maximum retry attempts for API calls.
    timeout : int
        Request timeout in seconds.

    Raises
    ------
    CredentialsError
        If AWS credentials are not found or invalid.
    RegionError
        If the specified region is invalid.
    ServiceError
        If unable to connect to an AWS service.
    """

    # Operation that backs the tag-query capability
    TAG_OPERATION = "DescribeTags"

    def __init__(
        self,
        region: str,
        identity: Optional[str] = None,
        credential: Optional[str] = None,
        max_retries: int = 3,
        timeout: int = 30,
    ) -> None:
        """Initialize AWS client with the specified configuration."""
        self.region = region
        self.identity = identity
        self._credential = credential
        self.max_retries = max_retries
        self.timeout = timeout

        # Lazy-loaded components
        self._session: Optional[boto3.Session] = None
        self._clients: dict[str, Any] = {}

        self._config = self._create_config()

        logger.debug("Initialized AWSClient", extra={"region": region})

    def _create_config(self) -> Config:
        """
        Create boto3 configuration with retry and timeout settings.

        Standard retry mode is used so throttling still surfaces as an
        error once botocore's own attempts are spent.
        """
        return Config(
            retries={
                "max_attempts": self.max_retries,
                "mode": "standard",
            },
            connect_timeout=self.timeout,
            read_timeout=self.timeout,
        )

    @property
    def session(self) -> boto3.Session:
        """Get or create the boto3 session (lazy initialization)."""
        if self._session is None:
            self._session = self._create_session()
        return self._session

    def _create_session(self) -> boto3.Session:
        """
        Create a new boto3 session with the configured credentials and region.

        Raises
        ------
        AWSClientError
            If the session cannot be created.
        """
        try:
            session_kwargs = {"region_name": self.region}
            if self.identity:
                session_kwargs["aws_access_key_id"] = self.identity
                session_kwargs["aws_secret_access_key"] = self._credential

            session = boto3.Session(**session_kwargs)
            logger.debug(f"Created boto3 session for region {self.region}")
            return session

        except Exception as e:
            logger.exception("Failed to create AWS session")
            raise AWSClientError(
                f"Failed to create AWS session: {e}",
                region=self.region,
            )

    def _get_client(self, service_name: str) -> Any:
        """
        Get or create a boto3 client for the specified service.

        Raises
        ------
        RegionError
            If the region name is not a valid host label.
        ServiceError
            If unable to create the client.
        """
        if service_name in self._clients:
            return self._clients[service_name]

        try:
            client = self.session.client(service_name, config=self._config)
            self._clients[service_name] = client
            logger.debug(f"Created {service_name} client for {self.region}")
            return client

        except InvalidRegionError:
            raise RegionError(
                f"Invalid region: {self.region}",
                region=self.region,
                details={"hint": "Specify a valid AWS region like 'eu-west-1'"},
            )
        except AWSClientError:
            raise
        except Exception as e:
            logger.exception(f"Failed to create {service_name} client")
            raise ServiceError(
                f"Failed to create {service_name} client: {e}",
                service=service_name,
                region=self.region,
            )

    # =========================================================================
    # Service Accessors
    # =========================================================================

    def get_ec2_client(self) -> Any:
        """Get the boto3 EC2 client."""
        return self._get_client("ec2")

    def get_key_pair_service(self) -> KeyPairService:
        return KeyPairService(self.get_ec2_client(), self.region)

    def get_instance_service(self) -> InstanceService:
        return InstanceService(self.get_ec2_client(), self.region)

    def get_security_group_service(self) -> SecurityGroupService:
        return SecurityGroupService(self.get_ec2_client(), self.region)

    def get_volume_service(self) -> VolumeService:
        return VolumeService(self.get_ec2_client(), self.region)

    def supports_tags(self) -> bool:
        """
        Check whether the EC2 API variant exposes tag queries.

        Returns
        -------
        bool
            True if ``DescribeTags`` is part of the EC2 service model.
        """
        service_model = self.get_ec2_client().meta.service_model
        return self.TAG_OPERATION in service_model.operation_names

    def get_tag_service(self) -> Optional[TagService]:
        """
        Get the tag service, or None when the API has no tag support.

        Example
        -------
        >>> tags = client.get_tag_service()
        >>> if tags is not None:
        ...     named = tags.list(resource_type="volume", key="Name")
        """
        if not self.supports_tags():
            return None
        return TagService(self.get_ec2_client(), self.region)

    # =========================================================================
    # Credential Validation
    # =========================================================================

    def validate_credentials(self) -> bool:
        """
        Validate AWS credentials by calling STS GetCallerIdentity.

        Returns
        -------
        bool
            True if credentials are valid.

        Raises
        ------
        CredentialsError
            If credentials are invalid, expired, or missing.
        """
        try:
            sts = self._get_client("sts")
            identity = sts.get_caller_identity()
            logger.debug(
                "Credentials validated",
                extra={
                    "account": identity["Account"],
                    "arn": identity["Arn"],
                },
            )
            return True

        except NoCredentialsError:
            raise CredentialsError(
                "AWS credentials not found",
                details={
                    "hint": (
                        "Set AWS_EC2_IDENTITY and AWS_EC2_CREDENTIAL to your "
                        "EC2 access key and secret key"
                    ),
                },
            )
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code in ("InvalidClientTokenId", "SignatureDoesNotMatch"):
                raise CredentialsError(
                    "Invalid AWS credentials",
                    details={
                        "error_code": error_code,
                        "hint": "Check your access key and secret key",
                    },
                )
            raise CredentialsError(f"Failed to validate credentials: {e}")
        except BotoCoreError as e:
            raise AWSClientError(
                f"Failed to reach AWS: {e}",
                service="sts",
                region=self.region,
            )

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self) -> None:
        """Close every cached boto3 client and drop the session."""
        for name, client in self._clients.items():
            client.close()
            logger.debug(f"Closed {name} client for {self.region}")
        self._clients.clear()
        self._session = None

    def __enter__(self) -> AWSClient:
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager and release clients."""
        self.close()

    def __repr__(self) -> str:
        """Return string representation of the client."""
        return (
            f"AWSClient(region='{self.region}', "
            f"max_retries={self.max_retries})"
        )


__all__ = ["AWSClient", "AWSClientError"]
