"""
Custom Exceptions for ec2-cleanup
=================================

This module defines the exception hierarchy used throughout the
application for consistent error handling and reporting.

Exception Hierarchy
-------------------
::

    Ec2CleanupError (base)
    ├── ConfigurationError
    │   └── PatternError
    ├── AWSClientError
    │   ├── CredentialsError
    │   ├── RegionError
    │   └── ServiceError
    ├── ResourceFetchError
    └── CleanerError
        └── DeleteError
            └── RateLimitError

Fatal errors (configuration, client, fetch) abort a run. Cleaner errors
describe a single failed delete and never escape a batch.

Example
-------
>>> from ec2cleanup.core.exceptions import AWSClientError, CredentialsError
>>>
>>> try:
...     client.validate_credentials()
... except CredentialsError as e:
...     print(f"Invalid credentials: {e}")
... except AWSClientError as e:
...     print(f"AWS error: {e}")
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class Ec2CleanupError(Exception):
    """
    Base exception for all ec2-cleanup errors.

    Parameters
    ----------
    message : str
        Human-readable error message.
    details : dict, optional
        Additional context about the error.

    Attributes
    ----------
    message : str
        The error message.
    details : dict
        Additional error details.
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(Ec2CleanupError):
    """
    Raised when the run cannot start because of bad or missing settings.

    Example
    -------
    >>> raise ConfigurationError(
    ...     "AWS_EC2_IDENTITY must be set to your EC2 access key",
    ...     details={"setting": "identity"},
    ... )
    """

    pass


class PatternError(ConfigurationError):
    """
    Raised when the name pattern is not a valid regular expression.

    Parameters
    ----------
    message : str
        Human-readable error message.
    pattern : str
        The offending pattern.
    """

    def __init__(self, message: str, pattern: str) -> None:
        self.pattern = pattern
        super().__init__(message, details={"pattern": pattern})


# =============================================================================
# AWS Client Exceptions
# =============================================================================


class AWSClientError(Ec2CleanupError):
    """
    Base exception for AWS client-related errors.

    Raised when there's an issue with AWS connectivity, authentication,
    or service access.

    Parameters
    ----------
    message : str
        Human-readable error message.
    service : str, optional
        The AWS service that caused the error.
    region : str, optional
        The AWS region where the error occurred.
    details : dict, optional
        Additional context about the error.
    """

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        region: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.service = service
        self.region = region
        full_details = details or {}
        if service:
            full_details["service"] = service
        if region:
            full_details["region"] = region
        super().__init__(message, full_details)


class CredentialsError(AWSClientError):
    """Raised when AWS credentials are invalid, missing, or expired."""

    pass


class RegionError(AWSClientError):
    """Raised when there's an issue with the specified AWS region."""

    pass


class ServiceError(AWSClientError):
    """Raised when there's an error accessing a specific AWS service."""

    pass


# =============================================================================
# Fetch Exceptions
# =============================================================================


class ResourceFetchError(Ec2CleanupError):
    """
    Raised when a list call against EC2 fails.

    Parameters
    ----------
    message : str
        Human-readable error message.
    resource_type : str, optional
        The kind of resource being listed.
    region : str, optional
        The AWS region being listed.
    details : dict, optional
        Additional context about the error.

    Example
    -------
    >>> raise ResourceFetchError(
    ...     "Failed to list key pairs",
    ...     resource_type="key_pair",
    ...     region="eu-west-1",
    ... )
    """

    def __init__(
        self,
        message: str,
        resource_type: Optional[str] = None,
        region: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.resource_type = resource_type
        self.region = region
        full_details = details or {}
        if resource_type:
            full_details["resource_type"] = resource_type
        if region:
            full_details["region"] = region
        super().__init__(message, full_details)


# =============================================================================
# Cleaner Exceptions
# =============================================================================


class CleanerError(Ec2CleanupError):
    """
    Base exception for cleaner-related errors.

    Parameters
    ----------
    message : str
        Human-readable error message.
    resource_id : str, optional
        The ID or name of the resource being cleaned.
    resource_type : str, optional
        The type of resource being cleaned.
    details : dict, optional
        Additional context about the error.
    """

    def __init__(
        self,
        message: str,
        resource_id: Optional[str] = None,
        resource_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.resource_id = resource_id
        self.resource_type = resource_type
        full_details = details or {}
        if resource_id:
            full_details["resource_id"] = resource_id
        if resource_type:
            full_details["resource_type"] = resource_type
        super().__init__(message, full_details)


class DeleteError(CleanerError):
    """
    Raised when unable to delete a resource.

    Example
    -------
    >>> raise DeleteError(
    ...     "Failed to delete key pair",
    ...     resource_id="jclouds#test1",
    ...     resource_type="key_pair",
    ... )
    """

    pass


class RateLimitError(DeleteError):
    """Raised when EC2 throttled a delete call (``RequestLimitExceeded``)."""

    pass
