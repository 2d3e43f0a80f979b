"""
Tests for the candidate selection rules.
"""

import pytest

from ec2cleanup.cleaners.filters import (
    compile_pattern,
    keys_in_use,
    matches_pattern,
    select_key_pairs,
    select_named_volumes,
    select_security_groups,
    select_unnamed_volumes,
)
from ec2cleanup.core.exceptions import PatternError
from ec2cleanup.core.models import KeyPair, RunningInstance, SecurityGroup, Tag, Volume

JCLOUDS = compile_pattern("jclouds#.*")


class TestMatchesPattern:
    """Tests for the full-match predicate."""

    @pytest.mark.parametrize(
        "candidate, expected",
        [
            ("jclouds#test1", True),
            ("jclouds#", True),
            ("my-jclouds#test1", False),
            ("other", False),
            (None, False),
        ],
    )
    def test_full_string_match(self, candidate, expected):
        assert matches_pattern(candidate, JCLOUDS) is expected

    def test_alternation_matches_whole_string(self):
        """Test that alternation cannot match just a prefix or suffix."""
        pattern = compile_pattern("a|b")
        assert matches_pattern("a", pattern)
        assert not matches_pattern("ab", pattern)

    def test_empty_pattern_only_matches_empty_name(self):
        pattern = compile_pattern("")
        assert matches_pattern("", pattern)
        assert not matches_pattern("jclouds#test1", pattern)

    def test_invalid_pattern(self):
        with pytest.raises(PatternError) as excinfo:
            compile_pattern("jclouds#(")
        assert excinfo.value.pattern == "jclouds#("


class TestKeyPairSelection:
    """Tests for key pair selection."""

    def test_matching_keys_without_instances(self):
        key_pairs = [KeyPair("jclouds#test1"), KeyPair("jclouds#test2"), KeyPair("other")]

        assert select_key_pairs(key_pairs, [], JCLOUDS) == ["jclouds#test1", "jclouds#test2"]

    def test_in_use_key_is_excluded(self):
        key_pairs = [KeyPair("jclouds#inuse")]
        instances = [RunningInstance("i-1", key_name="jclouds#inuse")]

        assert select_key_pairs(key_pairs, instances, JCLOUDS) == []

    def test_keys_in_use_ignores_instances_without_key(self):
        instances = [RunningInstance("i-1"), RunningInstance("i-2", key_name="k")]
        assert keys_in_use(instances) == {"k"}


class TestSecurityGroupSelection:
    """Tests for security group selection."""

    def test_select_by_name(self):
        groups = [
            SecurityGroup("jclouds#web", "sg-1"),
            SecurityGroup("default", "sg-2"),
        ]

        assert select_security_groups(groups, JCLOUDS) == [SecurityGroup("jclouds#web", "sg-1")]


class TestVolumeSelection:
    """Tests for volume selection."""

    def test_unnamed_volumes(self):
        volumes = [Volume("vol-1"), Volume("vol-2")]
        name_tags = [Tag("vol-1", "Name", "prod")]

        assert select_unnamed_volumes(volumes, name_tags) == ["vol-2"]

    def test_volume_without_id_is_never_selected(self):
        volumes = [Volume(None), Volume("vol-2")]

        assert select_unnamed_volumes(volumes, []) == ["vol-2"]

    def test_named_volumes(self):
        name_tags = [
            Tag("vol-1", "Name", "prod"),
            Tag("vol-2", "Name", "jclouds#data"),
            Tag("vol-3", "Name", None),
        ]

        volumes = [Volume("vol-1"), Volume("vol-2"), Volume("vol-3")]

        assert select_named_volumes(volumes, name_tags, JCLOUDS) == ["vol-2"]

    def test_name_tag_of_deleted_volume_is_ignored(self):
        name_tags = [
            Tag("vol-deleted", "Name", "jclouds#data"),
            Tag("vol-2", "Name", "jclouds#logs"),
        ]
        volumes = [Volume("vol-2"), Volume(None)]

        assert select_named_volumes(volumes, name_tags, JCLOUDS) == ["vol-2"]
