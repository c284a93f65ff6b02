"""
Custom exceptions for DynamoDB test provisioning.
"""


class DynamoFixturesError(Exception):
    """Base exception for dynamo-fixtures errors."""

    pass


class ProvisioningError(DynamoFixturesError):
    """Raised when a test DynamoDB environment cannot be acquired or released."""

    def __init__(self, message="Failed to provision DynamoDB environment", original_exception=None):
        self.message = message
        self.original_exception = original_exception
        super().__init__(self.message)


class NotProvisionedError(DynamoFixturesError):
    """Raised when the storage client is requested outside acquire/release."""

    pass
