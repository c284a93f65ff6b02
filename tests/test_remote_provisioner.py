"""
Tests for RemoteProvisioner.

These only build clients from credential files; no request reaches AWS.
"""

import pytest
from botocore.exceptions import PartialCredentialsError

from dynamo_fixtures import NotProvisionedError, ProvisioningError, RemoteProvisioner
from dynamo_fixtures.config import DEFAULT_TABLE_NAME, Settings

VALID_CREDENTIALS = """
    [default]
    aws_access_key_id = AKIADEFAULTEXAMPLE
    aws_secret_access_key = default-secret

    [DynamoFixtures]
    aws_access_key_id = AKIATESTEXAMPLE
    aws_secret_access_key = test-secret
"""


class TestRemoteProvisioner:
    """Acquire and release a remote provisioner."""

    def test_is_never_a_test_environment(self, write_credentials):
        provisioner = RemoteProvisioner(credentials_file=write_credentials(VALID_CREDENTIALS))
        assert not provisioner.is_test_environment()

        provisioner.acquire()
        assert not provisioner.is_test_environment()

        provisioner.release()
        assert not provisioner.is_test_environment()

    def test_is_never_a_test_environment_after_failed_acquire(self, tmp_path, aws_env):
        provisioner = RemoteProvisioner(credentials_file=str(tmp_path / "missing"))
        with pytest.raises(ProvisioningError):
            provisioner.acquire()
        assert not provisioner.is_test_environment()

    def test_acquire_points_at_default_endpoint(self, write_credentials):
        provisioner = RemoteProvisioner(credentials_file=write_credentials(VALID_CREDENTIALS))
        handle = provisioner.acquire()

        assert handle.endpoint_url == "https://dynamodb.us-east-1.amazonaws.com"
        assert handle.client.meta.region_name == "us-east-1"

    def test_uses_named_profile_keys(self, write_credentials):
        provisioner = RemoteProvisioner(credentials_file=write_credentials(VALID_CREDENTIALS))
        session = provisioner._load_session()

        assert session.get_credentials().access_key == "AKIATESTEXAMPLE"

    def test_explicit_region(self, write_credentials):
        provisioner = RemoteProvisioner(
            credentials_file=write_credentials(VALID_CREDENTIALS),
            region_name="eu-west-1",
        )
        handle = provisioner.acquire()

        assert handle.endpoint_host == "dynamodb.eu-west-1.amazonaws.com"

    def test_override_propagates_to_handle(self, write_credentials):
        provisioner = RemoteProvisioner(
            table_name="TestSchedules_Unit42",
            credentials_file=write_credentials(VALID_CREDENTIALS),
        )
        assert provisioner.acquire().table_name == "TestSchedules_Unit42"

    def test_no_override_uses_default_table(self, write_credentials):
        provisioner = RemoteProvisioner(credentials_file=write_credentials(VALID_CREDENTIALS))
        handle = provisioner.acquire()

        assert handle.uses_default_table
        assert handle.table_name == DEFAULT_TABLE_NAME

    def test_release_drops_handle(self, write_credentials):
        provisioner = RemoteProvisioner(credentials_file=write_credentials(VALID_CREDENTIALS))
        provisioner.acquire()
        provisioner.release()
        provisioner.release()

        with pytest.raises(NotProvisionedError):
            provisioner.client

    def test_profile_and_file_from_settings(self, write_credentials):
        path = write_credentials("""
            [ci]
            aws_access_key_id = AKIACIEXAMPLE
            aws_secret_access_key = ci-secret
        """)
        settings = Settings(credentials_file=path, profile_name="ci", region_name="us-west-2")
        provisioner = RemoteProvisioner(settings=settings)

        assert provisioner.credentials_file == path
        assert provisioner.profile_name == "ci"
        assert provisioner.acquire().client.meta.region_name == "us-west-2"


class TestRemoteProvisionerFailures:
    """Credential problems surface as ProvisioningError."""

    def test_missing_profile(self, write_credentials):
        provisioner = RemoteProvisioner(
            credentials_file=write_credentials(VALID_CREDENTIALS),
            profile_name="NoSuchProfile",
        )
        with pytest.raises(ProvisioningError, match="NoSuchProfile"):
            provisioner.acquire()
        assert not provisioner.acquired

    def test_missing_credentials_file(self, tmp_path, aws_env):
        provisioner = RemoteProvisioner(credentials_file=str(tmp_path / "missing"))
        with pytest.raises(ProvisioningError, match="not found"):
            provisioner.acquire()

    def test_malformed_profile(self, write_credentials):
        path = write_credentials("""
            [DynamoFixtures]
            aws_access_key_id = AKIATESTEXAMPLE
        """)
        provisioner = RemoteProvisioner(credentials_file=path)

        with pytest.raises(ProvisioningError) as exc_info:
            provisioner.acquire()

        assert isinstance(exc_info.value.original_exception, PartialCredentialsError)
        assert not provisioner.acquired
