"""
EC2 Service Wrappers
====================

Thin per-resource-kind wrappers over a boto3 EC2 client. Each service lists
one kind of resource in the client's region and deletes it by name or ID.

List calls use paginators wherever EC2 paginates the operation and raise
:class:`ResourceFetchError` on failure. Delete calls let ``ClientError``
propagate; the cleanup runner decides what a failed delete means.

Classes
-------
KeyPairService
    List and delete key pairs.
InstanceService
    List live instances (used to protect in-use key pairs).
SecurityGroupService
    List and delete security groups.
VolumeService
    List and delete EBS volumes.
TagService
    Query resource tags by resource type and key.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from ec2cleanup.core.exceptions import ResourceFetchError
from ec2cleanup.core.models import (
    LIVE_INSTANCE_STATES,
    KeyPair,
    RunningInstance,
    SecurityGroup,
    Tag,
    Volume,
)

# Module logger
logger = logging.getLogger(__name__)


class EC2Service:
    """
    Base class holding the boto3 EC2 client and its region.

    Parameters
    ----------
    ec2_client : botocore.client.BaseClient
        Boto3 EC2 client bound to one region.
    region : str
        Region the client is bound to (for logging and errors).
    """

    resource_type = "resource"

    def __init__(self, ec2_client: Any, region: str) -> None:
        self.ec2_client = ec2_client
        self.region = region

    def _pages(self, operation: str, result_key: str, **kwargs: Any) -> Iterator[Dict[str, Any]]:
        """Yield every item of a (possibly paginated) describe call."""
        try:
            if self.ec2_client.can_paginate(operation):
                paginator = self.ec2_client.get_paginator(operation)
                for page in paginator.paginate(**kwargs):
                    yield from page.get(result_key, [])
            else:
                response = getattr(self.ec2_client, operation)(**kwargs)
                yield from response.get(result_key, [])
        except (ClientError, BotoCoreError) as e:
            raise ResourceFetchError(
                f"Failed to list {self.resource_type}s: {e}",
                resource_type=self.resource_type,
                region=self.region,
            ) from e

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(region='{self.region}')"


class KeyPairService(EC2Service):
    """Key pairs in one region."""

    resource_type = "key_pair"

    def list(self) -> List[KeyPair]:
        key_pairs = [
            KeyPair.from_api(kp)
            for kp in self._pages("describe_key_pairs", "KeyPairs")
        ]
        logger.debug(f"Listed {len(key_pairs)} key pairs in {self.region}")
        return key_pairs

    def delete(self, name: str) -> None:
        self.ec2_client.delete_key_pair(KeyName=name)


class InstanceService(EC2Service):
    """Instances in one region, restricted to states that still hold a key."""

    resource_type = "instance"

    def list_live(self) -> List[RunningInstance]:
        filters = [{"Name": "instance-state-name", "Values": list(LIVE_INSTANCE_STATES)}]
        instances = []
        for reservation in self._pages(
            "describe_instances", "Reservations", Filters=filters
        ):
            for instance in reservation.get("Instances", []):
                instances.append(RunningInstance.from_api(instance))
        logger.debug(f"Listed {len(instances)} live instances in {self.region}")
        return instances


class SecurityGroupService(EC2Service):
    """Security groups in one region."""

    resource_type = "security_group"

    def list(self) -> List[SecurityGroup]:
        groups = [
            SecurityGroup.from_api(sg)
            for sg in self._pages("describe_security_groups", "SecurityGroups")
        ]
        logger.debug(f"Listed {len(groups)} security groups in {self.region}")
        return groups

    def delete(self, group: SecurityGroup) -> None:
        """
        Delete a security group.

        VPC security groups can only be addressed by ID, so the ID is used
        whenever the listing supplied one.
        """
        if group.group_id:
            self.ec2_client.delete_security_group(GroupId=group.group_id)
        else:
            self.ec2_client.delete_security_group(GroupName=group.name)


class VolumeService(EC2Service):
    """EBS volumes in one region."""

    resource_type = "volume"

    def list(self) -> List[Volume]:
        volumes = [
            Volume.from_api(v) for v in self._pages("describe_volumes", "Volumes")
        ]
        logger.debug(f"Listed {len(volumes)} volumes in {self.region}")
        return volumes

    def delete(self, volume_id: str) -> None:
        self.ec2_client.delete_volume(VolumeId=volume_id)


class TagService(EC2Service):
    """Resource tags in one region."""

    resource_type = "tag"

    def list(
        self,
        resource_type: Optional[str] = None,
        key: Optional[str] = None,
    ) -> List[Tag]:
        """
        List tags, optionally filtered server-side.

        Args:
            resource_type: EC2 resource type, e.g. ``"volume"``
            key: Exact tag key, e.g. ``"Name"``

        Returns:
            List of Tag triples
        """
        filters = []
        if resource_type:
            filters.append({"Name": "resource-type", "Values": [resource_type]})
        if key:
            filters.append({"Name": "key", "Values": [key]})

        kwargs = {"Filters": filters} if filters else {}
        tags = [Tag.from_api(t) for t in self._pages("describe_tags", "Tags", **kwargs)]
        logger.debug(f"Listed {len(tags)} tags in {self.region}")
        return tags
