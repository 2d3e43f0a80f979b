"""
ec2-cleanup: Orphaned EC2 Resource Cleaner
==========================================

Deletes EC2 key pairs, security groups and volumes whose names match a
regular expression, within a single AWS region. Built for sweeping up
what test frameworks such as jclouds leave behind.

Modules
-------
core
    AWS client, EC2 service wrappers, configuration, logging, exceptions
cleaners
    Selection rules, delete results and the cleanup runner
reporters
    Terminal summary output

Example
-------
>>> from ec2cleanup import CleanupRunner
>>>
>>> runner = CleanupRunner(
...     region="eu-west-1",
...     name_pattern="jclouds#.*",
...     identity="AKIA...",
...     credential="...",
...     check_only=True,
... )
>>> report = runner.run()
>>> print(report.get("KeyPair").total)

See Also
--------
boto3 : AWS SDK for Python
"""

__version__ = "0.1.0"
__license__ = "MIT"

# Public API
from ec2cleanup.cleaners.results import CleanupReport, DeleteStatus, DeleteSummary
from ec2cleanup.cleaners.runner import CleanupRunner
from ec2cleanup.core.aws_client import AWSClient, AWSClientError

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Core classes
    "AWSClient",
    "AWSClientError",
    "CleanupRunner",
    "CleanupReport",
    "DeleteStatus",
    "DeleteSummary",
]
