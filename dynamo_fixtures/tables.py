"""
Table helpers for tests that run against a provisioned DynamoDB.

All helpers act on the handle's table_name, so a table-name override set on the
provisioner flows through to every create, delete and count.
"""

import logging
import threading
from typing import Any, Dict, Iterable, Optional

from boto3.dynamodb.conditions import Attr  # type: ignore[import-untyped]

from .client import StorageClientHandle

logger = logging.getLogger(__name__)


def create_table(
    handle: StorageClientHandle,
    hash_key: str = "pk",
    read_capacity: int = 5,
    write_capacity: int = 5,
) -> Optional[Dict[str, Any]]:
    """
    Create the handle's table with a single string hash key.

    Args:
        handle: Storage client handle
        hash_key: Name of the hash key attribute
        read_capacity: Provisioned read capacity units
        write_capacity: Provisioned write capacity units

    Returns:
        The table description, or None if the table already exists
    """
    client = handle.client
    table_name = handle.table_name
    logger.info(f"Create {table_name} table")
    try:
        result = client.create_table(
            TableName=table_name,
            KeySchema=[{"AttributeName": hash_key, "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": hash_key, "AttributeType": "S"}],
            ProvisionedThroughput={
                "ReadCapacityUnits": read_capacity,
                "WriteCapacityUnits": write_capacity,
            },
        )
    except client.exceptions.ResourceInUseException:
        logger.info(f"Table {table_name} already exists")
        return None

    client.get_waiter("table_exists").wait(TableName=table_name)
    description: Dict[str, Any] = result["TableDescription"]
    return description


def delete_table(handle: StorageClientHandle) -> bool:
    """
    Delete the handle's table.

    Returns:
        True if the table was deleted, False if it did not exist
    """
    client = handle.client
    table_name = handle.table_name
    logger.info(f"Delete {table_name} table")
    try:
        client.delete_table(TableName=table_name)
    except client.exceptions.ResourceNotFoundException:
        logger.info(f"Table {table_name} not found")
        return False

    client.get_waiter("table_not_exists").wait(TableName=table_name)
    return True


def reset_table(handle: StorageClientHandle, hash_key: str = "pk") -> Optional[Dict[str, Any]]:
    """Delete and re-create the handle's table so it starts empty."""
    delete_table(handle)
    return create_table(handle, hash_key=hash_key)


def table_item_count(handle: StorageClientHandle) -> int:
    """Count every item in the handle's table."""
    client = handle.client
    paginator = client.get_paginator("scan")
    return sum(
        page["Count"]
        for page in paginator.paginate(TableName=handle.table_name, Select="COUNT")
    )


def item_count(handle: StorageClientHandle, key_name: str, key_value: str) -> int:
    """Count items whose key_name attribute equals key_value."""
    table = handle.table()
    kwargs: Dict[str, Any] = {
        "FilterExpression": Attr(key_name).eq(key_value),
        "Select": "COUNT",
    }
    count = 0
    while True:
        response = table.scan(**kwargs)
        count += response["Count"]
        if "LastEvaluatedKey" not in response:
            break
        kwargs["ExclusiveStartKey"] = response["LastEvaluatedKey"]
    logger.info(f"{count} item(s) in {handle.table_name} with {key_name}={key_value}")
    return count


def delete_item(handle: StorageClientHandle, key_name: str, key_value: str) -> None:
    """Delete one item by hash key. Deleting a missing item is not an error."""
    logger.info(f"Delete item {key_name}={key_value} from {handle.table_name}")
    handle.table().delete_item(Key={key_name: key_value})


def prepare_table(
    handle: StorageClientHandle,
    is_test_environment: bool,
    stale_keys: Iterable[str] = (),
    hash_key: str = "pk",
) -> None:
    """
    Get the handle's table ready for a test run.

    In a disposable test environment the table is dropped and re-created. Against
    a shared backend the table is only created if missing, and the given stale
    keys from earlier runs are deleted.

    Args:
        handle: Storage client handle
        is_test_environment: Result of the provisioner's is_test_environment()
        stale_keys: Hash key values to remove when running against a shared backend
        hash_key: Name of the hash key attribute
    """
    if is_test_environment:
        logger.info(f"(Re-)creating {handle.table_name} in test DynamoDB")
        reset_table(handle, hash_key=hash_key)
        return

    create_table(handle, hash_key=hash_key)
    for key in stale_keys:
        delete_item(handle, hash_key, key)


class KeySequence:
    """
    Thread-safe source of unique key values for test items.

    Example:
        >>> keys = KeySequence("test-customer")
        >>> keys.next()
        'test-customer-1'
    """

    def __init__(self, prefix: str = "test-key"):
        self.prefix = prefix
        self._counter = 0
        self._lock = threading.Lock()

    def next(self) -> str:
        with self._lock:
            self._counter += 1
            return f"{self.prefix}-{self._counter}"

    def reset(self) -> None:
        with self._lock:
            self._counter = 0
