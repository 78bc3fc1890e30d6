"""In-memory storage, for tests and for running without a writable data dir."""

from typing import Iterable, Optional

from zenmoney.models.transaction import Transaction
from zenmoney.services.storage.interface import TransactionStorageInterface
from zenmoney.services.storage.sample_data import build_sample_transactions


class InMemoryTransactionStorage(TransactionStorageInterface):
    """
    Keeps the list in process memory.

    Stored lists are copied on the way in and out, so callers can't
    mutate what's "persisted" behind the store's back.
    """

    def __init__(
        self,
        transactions: Optional[Iterable[Transaction]] = None,
        seed_sample_data: bool = False,
        storage_key: str = "memory",
    ):
        self._stored: Optional[list[Transaction]] = (
            list(transactions) if transactions is not None else None
        )
        self._seed_sample_data = seed_sample_data
        self._storage_key = storage_key
        self.save_count = 0

    @property
    def storage_key(self) -> str:
        return self._storage_key

    def load(self) -> list[Transaction]:
        if self._stored is None:
            if not self._seed_sample_data:
                return []
            self.save(build_sample_transactions())
        return list(self._stored)

    def save(self, transactions: list[Transaction]) -> None:
        self._stored = list(transactions)
        self.save_count += 1
