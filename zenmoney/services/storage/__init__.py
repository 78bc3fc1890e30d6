"""
Storage Services Package

Provides the abstract storage interface and its implementations.
The JSON file backend is the default; in-memory storage backs tests and
storage-less runs.
"""

from zenmoney.services.storage.interface import (
    NotFoundError,
    StorageError,
    StorageUnavailableError,
    TransactionStorageInterface,
)
from zenmoney.services.storage.json_file import (
    JsonFileClient,
    JsonFileTransactionStorage,
)
from zenmoney.services.storage.memory import InMemoryTransactionStorage
from zenmoney.services.storage.sample_data import build_sample_transactions

__all__ = [
    # Interfaces
    "TransactionStorageInterface",
    # Exceptions
    "NotFoundError",
    "StorageError",
    "StorageUnavailableError",
    # Implementations
    "InMemoryTransactionStorage",
    "JsonFileClient",
    "JsonFileTransactionStorage",
    "build_sample_transactions",
]
