"""
Provisioners for test-time DynamoDB environments.

A provisioner sets up a DynamoDB backend before a group of tests runs and tears
it down afterwards. Two variants share the same small interface:

- LocalProvisioner starts an in-memory server on a free port. Nothing it touches
  outlives the test run.
- RemoteProvisioner connects to the real DynamoDB service using a named profile
  from a shared credentials file. Writes reach a shared backend, so callers
  should always pass a table-name override.

Example:
    >>> with provisioned(LocalProvisioner(table_name="TestSchedules")) as handle:
    ...     handle.client.list_tables()
"""

import logging
import os
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, Optional

import boto3  # type: ignore[import-untyped]
import botocore.session  # type: ignore[import-untyped]

from .client import StorageClientHandle
from .config import Settings
from .exceptions import NotProvisionedError, ProvisioningError
from .ports import find_available_port
from .server import LocalDynamoServer, LocalServerConfig

logger = logging.getLogger(__name__)


class Provisioner(ABC):
    """Interface shared by local and remote provisioners."""

    #: Short tag identifying the variant ("local" or "remote")
    kind: str = ""

    def __init__(self, table_name: Optional[str] = None, settings: Optional[Settings] = None):
        """
        Initialize the provisioner.

        Args:
            table_name: Table name override; None means the default table
            settings: Configuration; read from the environment if not provided
        """
        self.table_name = table_name
        self.settings = settings or Settings.from_env()
        self._handle: Optional[StorageClientHandle] = None

    @abstractmethod
    def acquire(self) -> StorageClientHandle:
        """Set up the environment and return the storage client handle."""
        pass

    @abstractmethod
    def release(self) -> None:
        """Tear down the environment. Safe to call more than once."""
        pass

    @abstractmethod
    def is_test_environment(self) -> bool:
        """True when no production data can be reached through this provisioner."""
        pass

    @property
    def acquired(self) -> bool:
        return self._handle is not None

    @property
    def client(self) -> StorageClientHandle:
        """
        Get the storage client handle.

        Raises:
            NotProvisionedError: If called before acquire() or after release()
        """
        if self._handle is None:
            raise NotProvisionedError(
                f"{type(self).__name__} has no storage client; call acquire() first"
            )
        return self._handle

    def __enter__(self) -> "Provisioner":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is None:
            self.release()
            return
        # The with-block's exception propagates; a teardown failure is only logged
        try:
            self.release()
        except ProvisioningError as release_error:
            logger.error(f"Release of {self.kind} provisioner failed after error in with block: {release_error}")

    def __repr__(self) -> str:
        state = "acquired" if self.acquired else "released"
        return f"{type(self).__name__}(kind={self.kind!r}, table_name={self.table_name!r}, {state})"


class LocalProvisioner(Provisioner):
    """Provisioner backed by an in-memory DynamoDB server on localhost."""

    kind = "local"

    def __init__(
        self,
        table_name: Optional[str] = None,
        server_config: Optional[LocalServerConfig] = None,
        settings: Optional[Settings] = None,
    ):
        super().__init__(table_name=table_name, settings=settings)
        self.server_config = server_config or LocalServerConfig(
            host=self.settings.host,
            region_name=self.settings.region_name,
        )
        self.server: Optional[LocalDynamoServer] = None

    def acquire(self) -> StorageClientHandle:
        if self._handle is not None:
            return self._handle

        logger.info("LocalProvisioner acquiring in-memory DynamoDB")
        try:
            port = find_available_port(self.server_config.host)
            server = LocalDynamoServer(port, self.server_config)
            self.server = server
            server.start()
        except Exception as e:
            self._stop_after_failed_acquire()
            raise ProvisioningError(f"Local DynamoDB server failed to start: {e}", e) from e

        try:
            session = boto3.Session(
                aws_access_key_id=self.server_config.access_key,
                aws_secret_access_key=self.server_config.secret_key,
                region_name=self.server_config.region_name,
            )
            self._handle = StorageClientHandle.connect(
                session,
                table_name_override=self.table_name,
                endpoint_url=server.endpoint_url,
                default_table_name=self.settings.default_table_name,
            )
        except Exception as e:
            self._stop_after_failed_acquire()
            raise ProvisioningError(f"Could not build client for local DynamoDB: {e}", e) from e

        logger.info(f"LocalProvisioner ready at {server.endpoint_url}")
        return self._handle

    def _stop_after_failed_acquire(self) -> None:
        server, self.server = self.server, None
        if server is None:
            return
        try:
            server.stop()
        except Exception as e:
            logger.error(f"Failed to stop local DynamoDB server after acquire error: {e}", exc_info=True)

    def release(self) -> None:
        logger.info("LocalProvisioner release")
        self._handle = None
        server, self.server = self.server, None
        if server is None:
            return
        try:
            server.stop()
        except Exception as e:
            raise ProvisioningError(f"Local DynamoDB server failed to stop: {e}", e) from e

    def is_test_environment(self) -> bool:
        return True


class RemoteProvisioner(Provisioner):
    """
    Provisioner connected to the real DynamoDB service.

    Credentials come from a named profile in a shared credentials file. There is
    no server to manage, so release() only drops the client handle.
    """

    kind = "remote"

    def __init__(
        self,
        table_name: Optional[str] = None,
        credentials_file: Optional[str] = None,
        profile_name: Optional[str] = None,
        region_name: Optional[str] = None,
        settings: Optional[Settings] = None,
    ):
        super().__init__(table_name=table_name, settings=settings)
        self.credentials_file = os.path.expanduser(credentials_file or self.settings.credentials_path)
        self.profile_name = profile_name or self.settings.profile_name
        self.region_name = region_name

    def _load_session(self) -> "boto3.Session":
        core_session = botocore.session.Session()
        core_session.set_config_variable("credentials_file", self.credentials_file)

        if self.profile_name not in core_session.available_profiles:
            raise ProvisioningError(
                f"Profile {self.profile_name!r} not found in {self.credentials_file}"
            )

        session = boto3.Session(botocore_session=core_session, profile_name=self.profile_name)
        if session.get_credentials() is None:
            raise ProvisioningError(
                f"Profile {self.profile_name!r} in {self.credentials_file} has no access keys"
            )
        return session

    def acquire(self) -> StorageClientHandle:
        if self._handle is not None:
            return self._handle

        logger.info(
            f"RemoteProvisioner acquiring DynamoDB with profile {self.profile_name!r} "
            f"from {self.credentials_file}"
        )
        try:
            session = self._load_session()
            region_name = self.region_name or session.region_name or self.settings.region_name
            self._handle = StorageClientHandle.connect(
                session,
                table_name_override=self.table_name,
                region_name=region_name,
                default_table_name=self.settings.default_table_name,
            )
        except ProvisioningError:
            raise
        except Exception as e:
            raise ProvisioningError(
                f"Could not load credentials profile {self.profile_name!r}: {e}", e
            ) from e

        logger.info(f"RemoteProvisioner ready at {self._handle.endpoint_url}")
        return self._handle

    def release(self) -> None:
        logger.info("RemoteProvisioner release")
        self._handle = None

    def is_test_environment(self) -> bool:
        return False


@contextmanager
def provisioned(provisioner: Provisioner) -> Iterator[StorageClientHandle]:
    """
    Acquire a provisioner for the duration of a with block.

    Yields the storage client handle and releases the provisioner on every exit
    path. If the block raises and release also fails, the block's exception wins
    and the release failure is logged.

    Args:
        provisioner: Provisioner to acquire

    Yields:
        The provisioner's storage client handle
    """
    with provisioner:
        yield provisioner.client
