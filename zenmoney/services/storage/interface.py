"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the local JSON file today and swap the backend later
2. Use in-memory storage for testing
3. Keep the state container decoupled from where data lives

The contract is deliberately tiny: load the whole list, save the whole
list. Both are best-effort. Implementations may raise StorageError
internally but MUST NOT let it escape load() or save().
"""

from abc import ABC, abstractmethod

from zenmoney.models.transaction import Transaction


class TransactionStorageInterface(ABC):
    """
    Abstract interface for transaction list storage.

    Last write wins; there is no locking and no partial update.
    """

    @property
    @abstractmethod
    def storage_key(self) -> str:
        """Name identifying the persisted list (used in diagnostics)."""
        pass

    @abstractmethod
    def load(self) -> list[Transaction]:
        """
        Load the persisted transaction list.

        Returns:
            The stored list; the seeded sample set if nothing is stored
            yet (when seeding is enabled); an empty list if the stored
            payload cannot be read.
        """
        pass

    @abstractmethod
    def save(self, transactions: list[Transaction]) -> None:
        """
        Persist the full transaction list, replacing what was there.

        Failures are logged and swallowed.
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Nothing has been persisted under the storage key."""
    pass


class StorageUnavailableError(StorageError):
    """Storage backend could not be read or written."""
    pass
