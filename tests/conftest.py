"""
Pytest configuration and shared fixtures for testing.
"""

import os

import boto3
import pytest
from moto import mock_aws

from ec2cleanup.core.aws_client import AWSClient

REGION = "eu-west-1"


@pytest.fixture
def aws_credentials():
    """Mock AWS credentials for moto."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = REGION


@pytest.fixture
def mock_aws_environment(aws_credentials):
    """Create a mocked AWS environment."""
    with mock_aws():
        yield


@pytest.fixture
def aws_client(mock_aws_environment):
    """Create an AWSClient instance for testing."""
    return AWSClient(region=REGION, identity="testing", credential="testing")


@pytest.fixture
def ec2_client(mock_aws_environment):
    """Create a boto3 EC2 client for setting up test resources."""
    return boto3.client("ec2", region_name=REGION)


@pytest.fixture
def vpc(ec2_client):
    """Create a VPC for testing."""
    response = ec2_client.create_vpc(CidrBlock="10.0.0.0/16")
    return response["Vpc"]["VpcId"]


@pytest.fixture
def ami_id(ec2_client):
    """An AMI moto knows about in the test region."""
    return ec2_client.describe_images()["Images"][0]["ImageId"]


@pytest.fixture
def create_key_pairs(ec2_client):
    """Create key pairs by name."""

    def _create(*names):
        for name in names:
            ec2_client.create_key_pair(KeyName=name)

    return _create


@pytest.fixture
def create_security_group(ec2_client, vpc):
    """Create a security group in the test VPC and return its ID."""

    def _create(name):
        response = ec2_client.create_security_group(
            GroupName=name,
            Description=f"Test security group {name}",
            VpcId=vpc,
        )
        return response["GroupId"]

    return _create


@pytest.fixture
def create_volume(ec2_client):
    """Create a volume, optionally with a Name tag, and return its ID."""

    def _create(name=None):
        kwargs = {"Size": 1, "AvailabilityZone": f"{REGION}a"}
        if name is not None:
            kwargs["TagSpecifications"] = [
                {
                    "ResourceType": "volume",
                    "Tags": [{"Key": "Name", "Value": name}],
                }
            ]
        return ec2_client.create_volume(**kwargs)["VolumeId"]

    return _create


class Inventory:
    """What is left in the mocked account after a run."""

    def __init__(self, ec2_client):
        self.ec2_client = ec2_client

    def key_pairs(self):
        return {kp["KeyName"] for kp in self.ec2_client.describe_key_pairs()["KeyPairs"]}

    def security_groups(self):
        return {
            sg["GroupName"]
            for sg in self.ec2_client.describe_security_groups()["SecurityGroups"]
        }

    def volumes(self):
        return {v["VolumeId"] for v in self.ec2_client.describe_volumes()["Volumes"]}


@pytest.fixture
def inventory(ec2_client):
    return Inventory(ec2_client)
