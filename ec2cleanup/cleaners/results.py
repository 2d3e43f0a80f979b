"""
Result types for delete operations.

Every candidate a cleanup step selects ends up as one DeleteResult;
a DeleteSummary aggregates them per resource kind and a CleanupReport
holds the summaries of one run.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class DeleteStatus(Enum):
    """Status of a delete operation."""

    SUCCESS = "success"
    FAILED = "failed"
    DRY_RUN = "dry_run"


@dataclass
class DeleteResult:
    """
    Result of a single deletion attempt.

    Attributes:
        resource_id: Key pair name, security group name or volume ID
        resource_type: Kind of resource, e.g. "KeyPair"
        region: AWS region
        status: Result status
        error_message: Error message if failed
        rate_limited: True if the failure was a rate-limit signal
    """

    resource_id: str
    resource_type: str
    region: str
    status: DeleteStatus
    error_message: Optional[str] = None
    rate_limited: bool = False


@dataclass
class DeleteSummary:
    """
    Summary of one resource kind's cleanup.

    Attributes:
        resource_type: Kind of resource, e.g. "KeyPair"
        total: Number of candidates processed
        deleted: Number successfully deleted
        failed: Number that failed to delete
        dry_run: Number reported in check mode
        results: Individual results for each candidate
    """

    resource_type: str
    total: int = 0
    deleted: int = 0
    failed: int = 0
    dry_run: int = 0
    results: List[DeleteResult] = field(default_factory=list)

    def add_result(self, result: DeleteResult) -> None:
        """Add a result and update counts."""
        self.results.append(result)
        self.total += 1

        if result.status == DeleteStatus.SUCCESS:
            self.deleted += 1
        elif result.status == DeleteStatus.FAILED:
            self.failed += 1
        elif result.status == DeleteStatus.DRY_RUN:
            self.dry_run += 1

    @property
    def candidates(self) -> List[str]:
        return [r.resource_id for r in self.results]


@dataclass
class CleanupReport:
    """
    Outcome of a full run.

    Attributes:
        region: AWS region that was cleaned
        name_pattern: Pattern resources were matched against
        check_only: Whether the run was a dry run
        summaries: One summary per completed step, in execution order
        volumes_skipped: True if the API had no tag support
    """

    region: str
    name_pattern: str
    check_only: bool
    summaries: List[DeleteSummary] = field(default_factory=list)
    volumes_skipped: bool = False

    def add_summary(self, summary: DeleteSummary) -> None:
        self.summaries.append(summary)

    def get(self, resource_type: str) -> Optional[DeleteSummary]:
        for summary in self.summaries:
            if summary.resource_type == resource_type:
                return summary
        return None

    @property
    def total_deleted(self) -> int:
        return sum(s.deleted for s in self.summaries)

    @property
    def total_failed(self) -> int:
        return sum(s.failed for s in self.summaries)
