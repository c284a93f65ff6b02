"""
Pytest configuration for dynamo-fixtures tests.

The package's own fixtures (local_dynamodb, remote_dynamodb, ...) come from the
plugin registered through the pytest11 entry point.
"""

import textwrap

import pytest

pytest_plugins = ["pytester"]

AWS_ENV_VARS = [
    "AWS_PROFILE",
    "AWS_DEFAULT_PROFILE",
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_SESSION_TOKEN",
    "AWS_SHARED_CREDENTIALS_FILE",
    "AWS_DEFAULT_REGION",
]


@pytest.fixture
def aws_env(monkeypatch, tmp_path):
    """Isolate tests from the developer's AWS environment and config files."""
    for name in AWS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "aws-config-missing"))
    monkeypatch.setenv("AWS_EC2_METADATA_DISABLED", "true")
    return monkeypatch


@pytest.fixture
def write_credentials(tmp_path, aws_env):
    """Write a shared credentials file and return its path."""

    def _write(content: str) -> str:
        path = tmp_path / "credentials"
        path.write_text(textwrap.dedent(content))
        return str(path)

    return _write
