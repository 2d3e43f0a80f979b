"""
Resource Cleaners
=================

The cleanup runner and the pieces it is built from.

CleanupRunner
    Runs key pair, security group and volume cleanup for one region.
filters
    Pure selection rules (full-match predicate, in-use keys, unnamed volumes).
DeleteStatus, DeleteResult, DeleteSummary, CleanupReport
    Outcome of each delete attempt, per resource kind and per run.

Safety Features
---------------
1. **Check mode**: report what would be deleted without making changes
2. **In-use key pairs**: never deleted while a live instance references them
3. **Per-item failures**: logged and recorded, never abort the batch
4. **Rate limits**: a fixed cooldown follows a throttled delete
"""

from ec2cleanup.cleaners.results import (
    CleanupReport,
    DeleteResult,
    DeleteStatus,
    DeleteSummary,
)
from ec2cleanup.cleaners.runner import CleanupRunner, is_rate_limited

__all__ = [
    "CleanupReport",
    "CleanupRunner",
    "DeleteResult",
    "DeleteStatus",
    "DeleteSummary",
    "is_rate_limited",
]
