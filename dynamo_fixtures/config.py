"""
Environment-driven settings for dynamo-fixtures.

Environment Variables:
    DYNAMO_FIXTURES_CREDENTIALS_FILE: Shared credentials file (default: ~/.aws/credentials)
    DYNAMO_FIXTURES_PROFILE: Profile used by the remote provisioner (default: DynamoFixtures)
    DYNAMO_FIXTURES_REGION: AWS region for both provisioners (default: us-east-1)
    DYNAMO_FIXTURES_DEFAULT_TABLE: Table used when no override is given (default: ScheduleData)
    DYNAMO_FIXTURES_HOST: Interface the local server binds to (default: 127.0.0.1)
    DYNAMO_FIXTURES_LOG_LEVEL: Logging level for the CLI (default: INFO)
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "DYNAMO_FIXTURES_"

DEFAULT_CREDENTIALS_FILE = os.path.join("~", ".aws", "credentials")
DEFAULT_PROFILE_NAME = "DynamoFixtures"
DEFAULT_REGION = "us-east-1"
DEFAULT_TABLE_NAME = "ScheduleData"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "[%(name)s] %(levelname)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    """Resolved configuration shared by provisioners, the plugin and the CLI."""

    credentials_file: str = DEFAULT_CREDENTIALS_FILE
    profile_name: str = DEFAULT_PROFILE_NAME
    region_name: str = DEFAULT_REGION
    default_table_name: str = DEFAULT_TABLE_NAME
    host: str = DEFAULT_HOST
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from DYNAMO_FIXTURES_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            Settings with defaults applied for unset variables
        """
        env = os.environ if environ is None else environ

        def get(name: str, default: str) -> str:
            return env.get(f"{ENV_PREFIX}{name}", default)

        return cls(
            credentials_file=get("CREDENTIALS_FILE", DEFAULT_CREDENTIALS_FILE),
            profile_name=get("PROFILE", DEFAULT_PROFILE_NAME),
            region_name=get("REGION", DEFAULT_REGION),
            default_table_name=get("DEFAULT_TABLE", DEFAULT_TABLE_NAME),
            host=get("HOST", DEFAULT_HOST),
            log_level=get("LOG_LEVEL", DEFAULT_LOG_LEVEL),
        )

    @property
    def credentials_path(self) -> str:
        """Credentials file with ~ and environment variables expanded."""
        return os.path.expandvars(os.path.expanduser(self.credentials_file))


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging the same way for every entry point."""
    level = level or Settings.from_env().log_level
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
