"""
Application State Container

DESIGN DECISION: The transaction collection and the chat transcript live in
one explicit object owned by whoever orchestrates the views. Views never
keep their own copies; they subscribe and re-derive everything on change.

Every effective change to the collection is saved to storage (whole list,
fire-and-forget) and then announced to subscribers. No-op changes, such as
deleting an unknown id, neither save nor notify.
"""

from typing import Callable, Optional

from zenmoney.models.transaction import ChatMessage, ChatRole, Transaction
from zenmoney.services.storage import TransactionStorageInterface


WELCOME_MESSAGE = (
    "Hi! I'm your personal finance assistant. Ask me about your spending "
    "habits, or for tips on how to save!"
)
CLEARED_MESSAGE = "Chat cleared! How can I help you with your finances now?"

Listener = Callable[["AppState"], None]


class AppState:
    """Single owner of transactions, chat transcript and the advisor busy flag."""

    def __init__(self, storage: TransactionStorageInterface):
        self._storage = storage
        self._transactions: list[Transaction] = []
        self._messages: list[ChatMessage] = [
            ChatMessage(role=ChatRole.MODEL, text=WELCOME_MESSAGE)
        ]
        self._busy = False
        self._loaded = False
        self._listeners: list[Listener] = []

    # -------------------------------------------------------------------------
    # Observers
    # -------------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    @property
    def transactions(self) -> list[Transaction]:
        """Copy of the collection, newest-created first."""
        return list(self._transactions)

    @property
    def loaded(self) -> bool:
        return self._loaded

    def load(self) -> None:
        """Load the collection from storage. Called once at startup."""
        self._transactions = list(self._storage.load())
        self._loaded = True
        self._notify()

    def find(self, transaction_id: str) -> Optional[Transaction]:
        for transaction in self._transactions:
            if transaction.id == transaction_id:
                return transaction
        return None

    def add_transaction(self, transaction: Transaction) -> None:
        """Prepend a new transaction."""
        self._transactions.insert(0, transaction)
        self._commit()

    def update_transaction(self, transaction: Transaction) -> bool:
        """
        Replace the transaction with the same id, keeping its position.

        Returns False (and changes nothing) if the id is unknown.
        """
        for index, existing in enumerate(self._transactions):
            if existing.id == transaction.id:
                self._transactions[index] = transaction
                self._commit()
                return True
        return False

    def delete_transaction(self, transaction_id: str) -> bool:
        """
        Remove a transaction by id.

        Returns False (and changes nothing) if the id is unknown.
        """
        remaining = [t for t in self._transactions if t.id != transaction_id]
        if len(remaining) == len(self._transactions):
            return False
        self._transactions = remaining
        self._commit()
        return True

    def _commit(self) -> None:
        self._storage.save(list(self._transactions))
        self._notify()

    # -------------------------------------------------------------------------
    # Chat transcript
    # -------------------------------------------------------------------------

    @property
    def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    @property
    def is_busy(self) -> bool:
        """True while an advisor request is in flight."""
        return self._busy

    def append_message(self, message: ChatMessage) -> None:
        self._messages.append(message)
        self._notify()

    def clear_chat(self) -> None:
        self._messages = [ChatMessage(role=ChatRole.MODEL, text=CLEARED_MESSAGE)]
        self._notify()

    def set_busy(self, busy: bool) -> None:
        if self._busy == busy:
            return
        self._busy = busy
        self._notify()
