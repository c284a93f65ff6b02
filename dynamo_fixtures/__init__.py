"""
Test fixtures for DynamoDB.

Stands up either an in-memory DynamoDB server on a free local port or a
connection to the real DynamoDB service, and hands test code a storage client
handle scoped to a test-only table name.
"""

from .client import StorageClientHandle
from .config import Settings, configure_logging
from .exceptions import DynamoFixturesError, NotProvisionedError, ProvisioningError
from .ports import find_available_port
from .provisioners import LocalProvisioner, Provisioner, RemoteProvisioner, provisioned
from .server import LocalDynamoServer, LocalServerConfig
from .tables import (
    KeySequence,
    create_table,
    delete_item,
    delete_table,
    item_count,
    prepare_table,
    reset_table,
    table_item_count,
)

__version__ = "0.1.0"
__author__ = "dynamo-fixtures Contributors"
__license__ = "MIT"

__all__ = [
    "Provisioner",
    "LocalProvisioner",
    "RemoteProvisioner",
    "provisioned",
    "StorageClientHandle",
    "LocalDynamoServer",
    "LocalServerConfig",
    "Settings",
    "configure_logging",
    "find_available_port",
    "DynamoFixturesError",
    "ProvisioningError",
    "NotProvisionedError",
    "KeySequence",
    "create_table",
    "delete_table",
    "reset_table",
    "table_item_count",
    "item_count",
    "delete_item",
    "prepare_table",
]
