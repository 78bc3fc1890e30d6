"""Services package."""

from zenmoney.services.storage import (
    InMemoryTransactionStorage,
    JsonFileTransactionStorage,
    NotFoundError,
    StorageError,
    StorageUnavailableError,
    TransactionStorageInterface,
)

__all__ = [
    "InMemoryTransactionStorage",
    "JsonFileTransactionStorage",
    "NotFoundError",
    "StorageError",
    "StorageUnavailableError",
    "TransactionStorageInterface",
]
