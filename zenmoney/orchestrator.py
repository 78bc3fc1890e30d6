"""
Main Orchestrator for ZenMoney

This module ties together all the components and defines the
end-to-end flows for:
1. Transaction entry (form draft → validate → create/update → save)
2. Advisor chat (question → capped context → Gemini → transcript)

DESIGN DECISION: The orchestrator enforces the boundaries:
- No transaction enters the collection without passing validation
- Only one advisor request is in flight at a time
- Storage and advisor failures never propagate past their boundary
"""

from typing import Optional

from zenmoney.agents import AdvisorAgent
from zenmoney.analytics import select_recent
from zenmoney.config import get_settings
from zenmoney.events import EventLogger, configure_log_level
from zenmoney.models.events import EventBuilder
from zenmoney.models.transaction import (
    ChatMessage,
    ChatRole,
    Transaction,
    TransactionDraft,
    ValidationResult,
)
from zenmoney.services.storage import (
    InMemoryTransactionStorage,
    JsonFileTransactionStorage,
    TransactionStorageInterface,
)
from zenmoney.state import AppState
from zenmoney.validation import TransactionValidator


class TransactionFlow:
    """
    Orchestrates adding, editing and deleting transactions.

    Flow:
    1. Draft → validate (reject with issues, nothing changes)
    2. New → fresh id, prepended; Edit → fields replaced, id preserved
    3. State saves the whole list and notifies views
    """

    def __init__(
        self,
        state: AppState,
        validator: Optional[TransactionValidator] = None,
        event_logger: Optional[EventLogger] = None,
    ):
        self._state = state
        self._validator = validator or TransactionValidator()
        self._events = event_logger or EventLogger()

    def save_draft(
        self,
        draft: TransactionDraft,
        editing_id: Optional[str] = None,
    ) -> tuple[Optional[Transaction], ValidationResult]:
        """
        Validate a form draft and create or update a transaction.

        Returns:
            (transaction, validation_result). transaction is None when
            validation failed, or when editing_id no longer exists.
        """
        result = self._validator.validate(draft)
        if result.has_errors:
            self._events.log(EventBuilder.validation_failed([
                {"field": i.field, "type": i.issue_type, "message": i.message}
                for i in result.issues
            ]))
            return None, result

        if editing_id is not None:
            transaction = self._validator.to_transaction(draft, transaction_id=editing_id)
            if not self._state.update_transaction(transaction):
                return None, result
            self._events.log(EventBuilder.transaction_updated(transaction.id))
            return transaction, result

        transaction = self._validator.to_transaction(draft)
        self._state.add_transaction(transaction)
        self._events.log(EventBuilder.transaction_created(
            transaction_id=transaction.id,
            transaction_type=transaction.type.value,
            amount=str(transaction.amount),
        ))
        return transaction, result

    def delete(self, transaction_id: str) -> bool:
        """Delete by id. Unknown ids are a no-op."""
        found = self._state.delete_transaction(transaction_id)
        self._events.log(EventBuilder.transaction_deleted(transaction_id, found))
        return found


class AdvisorFlow:
    """
    Orchestrates the advisor chat.

    The busy flag on AppState is the only concurrency control: while a
    request is in flight, further questions are ignored.
    """

    def __init__(
        self,
        state: AppState,
        agent: Optional[AdvisorAgent] = None,
        context_limit: Optional[int] = None,
    ):
        self._state = state
        self._agent = agent or AdvisorAgent()
        self._context_limit = context_limit or get_settings().app.advisor_context_limit

    async def ask(self, question: str) -> Optional[ChatMessage]:
        """
        Send a question to the advisor and record both sides in the transcript.

        Returns the advisor's reply, or None if the question was blank or
        another request is still running.
        """
        text = question.strip()
        if not text or self._state.is_busy:
            return None

        self._state.append_message(ChatMessage(role=ChatRole.USER, text=text))
        self._state.set_busy(True)
        try:
            context = select_recent(self._state.transactions, self._context_limit)
            advice = await self._agent.generate_advice(text, context)
            reply = ChatMessage(
                role=ChatRole.MODEL,
                text=advice.text,
                is_error=advice.is_error,
            )
            self._state.append_message(reply)
        finally:
            self._state.set_busy(False)

        return reply

    def clear(self) -> None:
        self._state.clear_chat()


def create_app_components(
    use_storage: bool = True,
) -> tuple[AppState, TransactionFlow, AdvisorFlow]:
    """
    Factory function to create all application components.

    Args:
        use_storage: Whether to persist to the local JSON file.
                    Set to False to keep everything in memory.

    Returns:
        (state, transaction_flow, advisor_flow), with state already loaded
    """
    settings = get_settings()
    configure_log_level(settings.app.debug_mode)
    event_logger = EventLogger()

    storage: Optional[TransactionStorageInterface] = None
    if use_storage:
        try:
            storage = JsonFileTransactionStorage(event_logger=event_logger)
        except Exception as e:
            # Storage not configured - continue in memory
            event_logger.log_error("storage_setup_failed", str(e))

    if storage is None:
        storage = InMemoryTransactionStorage(
            seed_sample_data=settings.storage.seed_sample_data,
        )

    state = AppState(storage)
    state.load()

    transaction_flow = TransactionFlow(state, event_logger=event_logger)
    advisor_flow = AdvisorFlow(
        state,
        agent=AdvisorAgent(
            event_logger=event_logger,
            context_limit=settings.app.advisor_context_limit,
        ),
        context_limit=settings.app.advisor_context_limit,
    )

    return state, transaction_flow, advisor_flow
