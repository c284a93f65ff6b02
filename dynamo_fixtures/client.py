"""
Storage client handle returned by provisioners.
"""

import logging
from typing import Any, Optional
from urllib.parse import urlparse

import boto3  # type: ignore[import-untyped]
from botocore.exceptions import BotoCoreError, ClientError  # type: ignore[import-untyped]

from .config import DEFAULT_TABLE_NAME

logger = logging.getLogger(__name__)


class StorageClientHandle:
    """
    A live DynamoDB connection plus the table name tests should write to.

    The handle is owned by the provisioner that built it. Test code borrows it
    and must not use it after the provisioner is released.
    """

    def __init__(
        self,
        client: Any,
        resource: Any,
        table_name_override: Optional[str] = None,
        default_table_name: str = DEFAULT_TABLE_NAME,
    ):
        """
        Initialize the handle.

        Args:
            client: boto3 DynamoDB low-level client
            resource: boto3 DynamoDB service resource sharing the client's session
            table_name_override: Table name to use instead of the default
            default_table_name: Table name used when no override is given
        """
        self.client = client
        self.resource = resource
        self.table_name_override = table_name_override
        self.default_table_name = default_table_name

    @classmethod
    def connect(
        cls,
        session: "boto3.Session",
        table_name_override: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        region_name: Optional[str] = None,
        default_table_name: str = DEFAULT_TABLE_NAME,
    ) -> "StorageClientHandle":
        """
        Build a client and resource from a boto3 session.

        Args:
            session: Session carrying the credentials to use
            table_name_override: Table name to use instead of the default
            endpoint_url: Custom endpoint URL (for a local server)
            region_name: AWS region; falls back to the session's region

        Returns:
            A handle bound to the endpoint
        """
        kwargs = {"region_name": region_name or session.region_name}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        client = session.client("dynamodb", **kwargs)
        resource = session.resource("dynamodb", **kwargs)
        logger.info(f"Built DynamoDB client for {client.meta.endpoint_url}")
        return cls(
            client,
            resource,
            table_name_override=table_name_override,
            default_table_name=default_table_name,
        )

    @property
    def table_name(self) -> str:
        """Table name tests should use."""
        if self.table_name_override is None:
            return self.default_table_name
        return self.table_name_override

    @property
    def uses_default_table(self) -> bool:
        return self.table_name_override is None

    @property
    def endpoint_url(self) -> str:
        return self.client.meta.endpoint_url

    @property
    def endpoint_host(self) -> Optional[str]:
        return urlparse(self.endpoint_url).hostname

    def table(self) -> Any:
        """Get the boto3 Table resource for table_name."""
        return self.resource.Table(self.table_name)

    def is_connected(self) -> bool:
        """Check that the endpoint answers a ListTables call."""
        try:
            self.client.list_tables(Limit=1)
        except (BotoCoreError, ClientError) as e:
            logger.info(f"DynamoDB endpoint {self.endpoint_url} not reachable: {e}")
            return False
        return True

    def __repr__(self) -> str:
        return f"StorageClientHandle(endpoint_url={self.endpoint_url!r}, table_name={self.table_name!r})"
