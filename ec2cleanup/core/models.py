"""
Local projections of remote EC2 resources.

These are read once per run from the EC2 API and never written back.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

# Tag key that names a resource
NAME_TAG = "Name"

# Instance states that still hold a reference to their launch key
LIVE_INSTANCE_STATES = ("pending", "running", "stopping", "stopped")


@dataclass(frozen=True)
class KeyPair:
    """An EC2 key pair, identified by name."""

    name: str

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> KeyPair:
        return cls(name=data["KeyName"])


@dataclass(frozen=True)
class SecurityGroup:
    """
    An EC2 security group.

    Attributes:
        name: Group name, matched against the name pattern
        group_id: Group ID used for the delete call when present
    """

    name: str
    group_id: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> SecurityGroup:
        return cls(name=data["GroupName"], group_id=data.get("GroupId"))


@dataclass(frozen=True)
class Volume:
    """An EBS volume. ``volume_id`` may be missing on malformed listings."""

    volume_id: Optional[str]

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> Volume:
        return cls(volume_id=data.get("VolumeId"))


@dataclass(frozen=True)
class Tag:
    """A (resource id, key, value) triple from DescribeTags."""

    resource_id: str
    key: str
    value: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> Tag:
        return cls(
            resource_id=data["ResourceId"],
            key=data["Key"],
            value=data.get("Value"),
        )


@dataclass(frozen=True)
class RunningInstance:
    """A live EC2 instance, kept only for its launch key reference."""

    instance_id: str
    key_name: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> RunningInstance:
        return cls(instance_id=data["InstanceId"], key_name=data.get("KeyName"))
