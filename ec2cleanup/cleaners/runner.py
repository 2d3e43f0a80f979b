"""
Cleanup runner for orphaned EC2 key pairs, security groups and volumes.

A run lists each kind of resource in one region, selects the ones whose
name matches a regular expression and deletes them, unless running in
check mode. A failed delete is logged and the batch carries on; a
rate-limit failure additionally pauses for a fixed cooldown before the
next candidate. The failed item is not attempted again.
"""

from __future__ import annotations

import logging
import time
from operator import attrgetter
from typing import Any, Callable, Iterable, Optional, TypeVar

from botocore.exceptions import ClientError

from ec2cleanup.cleaners.filters import (
    compile_pattern,
    select_key_pairs,
    select_named_volumes,
    select_security_groups,
    select_unnamed_volumes,
)
from ec2cleanup.cleaners.results import (
    CleanupReport,
    DeleteResult,
    DeleteStatus,
    DeleteSummary,
)
from ec2cleanup.core.aws_client import AWSClient
from ec2cleanup.core.exceptions import DeleteError, RateLimitError
from ec2cleanup.core.models import NAME_TAG
from ec2cleanup.core.services import (
    InstanceService,
    KeyPairService,
    SecurityGroupService,
    TagService,
    VolumeService,
)

T = TypeVar("T")

# Pause after a throttled delete so the next call does not trip the limiter again
RATE_LIMIT_COOLDOWN = 1.0

RATE_LIMIT_MARKER = "RequestLimitExceeded"
RATE_LIMIT_CODES = ("RequestLimitExceeded", "Throttling")

KEY_PAIR = "KeyPair"
SECURITY_GROUP = "SecurityGroup"
VOLUME = "Volume"


def is_rate_limited(error: BaseException) -> bool:
    """
    Check whether a failed call was throttled by EC2.

    Uses the error code when botocore supplies one and falls back to
    looking for ``RequestLimitExceeded`` in the error text.
    """
    if isinstance(error, ClientError):
        code = error.response.get("Error", {}).get("Code", "")
        if code in RATE_LIMIT_CODES:
            return True
    return RATE_LIMIT_MARKER in str(error)


def classify_delete_error(
    error: Exception,
    resource_type: str,
    resource_id: str,
) -> DeleteError:
    """Wrap a failed delete call in a DeleteError or RateLimitError."""
    error_class = RateLimitError if is_rate_limited(error) else DeleteError
    return error_class(str(error), resource_id=resource_id, resource_type=resource_type)


class CleanupRunner:
    """
    Deletes EC2 key pairs, security groups and volumes matching a pattern.

    Args:
        region: AWS region to clean
        name_pattern: Regular expression names must fully match. An empty
            pattern selects volumes without a Name tag instead.
        identity: AWS access key ID
        credential: AWS secret access key
        check_only: Log matches without deleting anything
        logger: Logger receiving progress, warnings and errors
        client_factory: Callable returning an AWSClient-like handle

    Raises:
        PatternError: If name_pattern is not a valid regular expression
    """

    def __init__(
        self,
        region: str,
        name_pattern: str,
        identity: Optional[str] = None,
        credential: Optional[str] = None,
        check_only: bool = False,
        logger: Optional[logging.Logger] = None,
        client_factory: Optional[Callable[[], Any]] = None,
    ):
        self.region = region
        self.name_pattern = name_pattern
        self.pattern = compile_pattern(name_pattern)
        self.check_only = check_only
        self.logger = logger or logging.getLogger(__name__)
        self.client_factory = client_factory or (
            lambda: AWSClient(region=region, identity=identity, credential=credential)
        )

    @property
    def verb(self) -> str:
        return "checking" if self.check_only else "cleaning"

    def run(self) -> CleanupReport:
        """
        Clean key pairs, then security groups, then volumes.

        The client is closed on every exit path. Any error outside the
        per-item delete loops is logged and re-raised.

        Returns:
            CleanupReport with one summary per completed step
        """
        report = CleanupReport(
            region=self.region,
            name_pattern=self.name_pattern,
            check_only=self.check_only,
        )
        self.logger.info(
            f"{self.verb.capitalize()} SecurityGroups, KeyPairs and Volumes "
            f"in aws-ec2:{self.region} matching '{self.name_pattern}'"
        )

        try:
            client = self._acquire_client()
        except Exception as e:
            self.logger.error(getattr(e, "message", str(e)))
            raise

        try:
            report.add_summary(
                self.clean_key_pairs(
                    client.get_key_pair_service(), client.get_instance_service()
                )
            )
            report.add_summary(
                self.clean_security_groups(client.get_security_group_service())
            )

            tag_service = client.get_tag_service()
            if tag_service is not None:
                report.add_summary(
                    self.clean_volumes(client.get_volume_service(), tag_service)
                )
            else:
                report.volumes_skipped = True
                self.logger.info(f"No tag API, not {self.verb} volumes")
        except Exception as e:
            self.logger.error(getattr(e, "message", str(e)))
            raise
        finally:
            client.close()

        return report

    def _acquire_client(self) -> Any:
        client = self.client_factory()
        try:
            client.validate_credentials()
        except Exception:
            client.close()
            raise
        return client

    # =========================================================================
    # Cleanup Steps
    # =========================================================================

    def clean_key_pairs(
        self,
        key_pair_service: KeyPairService,
        instance_service: InstanceService,
    ) -> DeleteSummary:
        """Delete matching key pairs that no live instance was launched with."""
        key_pairs = key_pair_service.list()
        instances = instance_service.list_live()
        candidates = select_key_pairs(key_pairs, instances, self.pattern)
        self.logger.info(f"Found {len(candidates)} matching {KEY_PAIR}s")

        return self._delete_each(KEY_PAIR, candidates, key_pair_service.delete)

    def clean_security_groups(
        self,
        security_group_service: SecurityGroupService,
    ) -> DeleteSummary:
        """Delete matching security groups. Groups still in use fail remotely."""
        groups = security_group_service.list()
        candidates = select_security_groups(groups, self.pattern)
        self.logger.info(f"Found {len(candidates)} matching {SECURITY_GROUP}s")

        return self._delete_each(
            SECURITY_GROUP,
            candidates,
            security_group_service.delete,
            describe=attrgetter("name"),
        )

    def clean_volumes(
        self,
        volume_service: VolumeService,
        tag_service: TagService,
    ) -> DeleteSummary:
        """
        Delete volumes selected by their Name tag.

        With an empty pattern every volume lacking a Name tag is selected,
        otherwise every volume whose Name matches the pattern.
        """
        volumes = volume_service.list()
        for volume in volumes:
            if volume.volume_id is None:
                self.logger.debug(f"No id on volume: {volume}")
        name_tags = tag_service.list(resource_type="volume", key=NAME_TAG)

        if self.name_pattern == "":
            candidates = select_unnamed_volumes(volumes, name_tags)
            self.logger.info(f"Found {len(candidates)} unnamed {VOLUME}s")
        else:
            self.logger.info(f"Found {len(name_tags)} named {VOLUME}s")
            candidates = select_named_volumes(volumes, name_tags, self.pattern)
            self.logger.info(f"Found {len(candidates)} matching {VOLUME}s")

        return self._delete_each(VOLUME, candidates, volume_service.delete)

    # =========================================================================
    # Shared Delete Policy
    # =========================================================================

    def _delete_each(
        self,
        resource_type: str,
        candidates: Iterable[T],
        delete: Callable[[T], None],
        describe: Callable[[T], str] = str,
    ) -> DeleteSummary:
        """
        Delete every candidate, tolerating individual failures.

        In check mode each candidate is recorded as a dry run and no delete
        call is made.
        """
        summary = DeleteSummary(resource_type=resource_type)

        for candidate in candidates:
            resource_id = describe(candidate)
            if self.check_only:
                summary.add_result(self._result(resource_type, resource_id, DeleteStatus.DRY_RUN))
                continue

            try:
                delete(candidate)
            except Exception as e:
                error = classify_delete_error(e, resource_type, resource_id)
                rate_limited = isinstance(error, RateLimitError)
                if rate_limited:
                    time.sleep(RATE_LIMIT_COOLDOWN)
                self.logger.warning(
                    f"Error deleting {resource_type} '{resource_id}': {error.message}"
                )
                summary.add_result(
                    self._result(
                        resource_type,
                        resource_id,
                        DeleteStatus.FAILED,
                        error_message=error.message,
                        rate_limited=rate_limited,
                    )
                )
            else:
                summary.add_result(self._result(resource_type, resource_id, DeleteStatus.SUCCESS))

        if not self.check_only:
            self.logger.info(f"Deleted {summary.deleted} {resource_type}s")
        return summary

    def _result(
        self,
        resource_type: str,
        resource_id: str,
        status: DeleteStatus,
        **kwargs: Any,
    ) -> DeleteResult:
        return DeleteResult(
            resource_id=resource_id,
            resource_type=resource_type,
            region=self.region,
            status=status,
            **kwargs,
        )

    def __repr__(self) -> str:
        return (
            f"CleanupRunner(region='{self.region}', "
            f"name_pattern='{self.name_pattern}', check_only={self.check_only})"
        )
