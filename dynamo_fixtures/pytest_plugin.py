"""
Pytest fixtures for local and remote DynamoDB.

Registered through the pytest11 entry point, so installing the package is enough.
Fixtures are class scoped: each test class gets its own environment, acquired
before its first test and released after its last.

Override ``dynamodb_table_name`` in a test module or class to redirect writes:

    @pytest.fixture(scope="class")
    def dynamodb_table_name():
        return "TestSchedules"
"""

import os

import pytest

from .config import Settings
from .provisioners import LocalProvisioner, RemoteProvisioner, provisioned


@pytest.fixture(scope="class")
def dynamodb_table_name():
    """Table-name override applied to provisioned handles (None for the default table)."""
    return None


@pytest.fixture(scope="class")
def local_dynamodb_provisioner(dynamodb_table_name):
    """An acquired LocalProvisioner, released after the test class."""
    provisioner = LocalProvisioner(table_name=dynamodb_table_name)
    with provisioned(provisioner):
        yield provisioner


@pytest.fixture(scope="class")
def local_dynamodb(local_dynamodb_provisioner):
    """Storage client handle for an in-memory DynamoDB."""
    return local_dynamodb_provisioner.client


@pytest.fixture(scope="class")
def remote_dynamodb_provisioner(dynamodb_table_name):
    """
    An acquired RemoteProvisioner, released after the test class.

    Skips when the configured credentials file does not exist.
    """
    settings = Settings.from_env()
    if not os.path.exists(settings.credentials_path):
        pytest.skip(f"No AWS credentials file at {settings.credentials_path}")

    provisioner = RemoteProvisioner(table_name=dynamodb_table_name, settings=settings)
    with provisioned(provisioner):
        yield provisioner


@pytest.fixture(scope="class")
def remote_dynamodb(remote_dynamodb_provisioner):
    """Storage client handle for the real DynamoDB service."""
    return remote_dynamodb_provisioner.client
