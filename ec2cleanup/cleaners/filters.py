"""
Selection rules for cleanup candidates.

All functions here are pure: they take listings already fetched from EC2
and return the names or IDs that a cleanup step should delete.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Pattern, Set

from ec2cleanup.core.exceptions import PatternError
from ec2cleanup.core.models import (
    KeyPair,
    RunningInstance,
    SecurityGroup,
    Tag,
    Volume,
)

def compile_pattern(name_pattern: str) -> Pattern[str]:
    """
    Compile the name pattern once for a whole run.

    Raises:
        PatternError: If the pattern is not a valid regular expression
    """
    try:
        return re.compile(name_pattern)
    except re.error as e:
        raise PatternError(
            f"Invalid name pattern '{name_pattern}': {e}", pattern=name_pattern
        ) from e


def matches_pattern(candidate: Optional[str], pattern: Pattern[str]) -> bool:
    """Return True if the whole candidate string matches the pattern."""
    if candidate is None:
        return False
    return pattern.fullmatch(candidate) is not None


def keys_in_use(instances: Iterable[RunningInstance]) -> Set[str]:
    """Names of key pairs referenced by live instances."""
    return {i.key_name for i in instances if i.key_name}


def select_key_pairs(
    key_pairs: Iterable[KeyPair],
    instances: Iterable[RunningInstance],
    pattern: Pattern[str],
) -> List[str]:
    """Key pair names that match the pattern and no live instance uses."""
    in_use = keys_in_use(instances)
    return [
        kp.name
        for kp in key_pairs
        if matches_pattern(kp.name, pattern) and kp.name not in in_use
    ]


def select_security_groups(
    groups: Iterable[SecurityGroup],
    pattern: Pattern[str],
) -> List[SecurityGroup]:
    return [g for g in groups if matches_pattern(g.name, pattern)]


def volume_ids(volumes: Iterable[Volume]) -> Set[str]:
    """IDs of all volumes, skipping entries without one."""
    return {v.volume_id for v in volumes if v.volume_id is not None}


def select_unnamed_volumes(
    volumes: Iterable[Volume],
    name_tags: Iterable[Tag],
) -> List[str]:
    """IDs of volumes that carry no Name tag, in sorted order."""
    named = {t.resource_id for t in name_tags}
    return sorted(volume_ids(volumes) - named)


def select_named_volumes(
    volumes: Iterable[Volume],
    name_tags: Iterable[Tag],
    pattern: Pattern[str],
) -> List[str]:
    """
    IDs of existing volumes whose Name tag value matches the pattern.

    Tags can outlive their volume, so only IDs present in the volume
    listing are returned.
    """
    existing = volume_ids(volumes)
    return [
        t.resource_id
        for t in name_tags
        if t.resource_id in existing and matches_pattern(t.value, pattern)
    ]
