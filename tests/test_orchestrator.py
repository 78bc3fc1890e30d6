"""
Integration tests for application state and flows.

Storage is in-memory and the advisor is a fake, so these exercise the
full add/edit/delete and chat paths without I/O or network.
"""

import asyncio
from datetime import date
from decimal import Decimal

import pytest

from zenmoney.models.transaction import (
    AdviceResponse,
    ChatRole,
    TransactionDraft,
    TransactionType,
)
from zenmoney.orchestrator import AdvisorFlow, TransactionFlow, create_app_components
from zenmoney.services.storage import InMemoryTransactionStorage, JsonFileTransactionStorage
from zenmoney.state import CLEARED_MESSAGE, WELCOME_MESSAGE, AppState


class FakeAgent:
    """Records calls and answers with a canned response."""

    def __init__(self, response=None, error=None):
        self.response = response or AdviceResponse(text="Save more.")
        self.error = error
        self.calls = []

    async def generate_advice(self, query, transactions):
        self.calls.append((query, list(transactions)))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def storage(make_tx):
    return InMemoryTransactionStorage([
        make_tx(100, id="a", on=date(2024, 5, 1)),
        make_tx(200, id="b", on=date(2024, 5, 2)),
    ])


@pytest.fixture
def state(storage):
    state = AppState(storage)
    state.load()
    return state


def draft(**overrides):
    fields = dict(
        type=TransactionType.EXPENSE,
        amount="50000",
        description="Lunch",
        category="food",
        date=date(2024, 5, 3),
    )
    fields.update(overrides)
    return TransactionDraft(**fields)


class TestAppState:
    """Tests for the state container."""

    def test_load(self, state):
        assert state.loaded
        assert [t.id for t in state.transactions] == ["a", "b"]

    def test_add_prepends_saves_and_notifies(self, state, storage, make_tx):
        seen = []
        state.subscribe(lambda s: seen.append([t.id for t in s.transactions]))

        state.add_transaction(make_tx(id="new"))

        assert [t.id for t in state.transactions] == ["new", "a", "b"]
        assert [t.id for t in storage.load()] == ["new", "a", "b"]
        assert seen == [["new", "a", "b"]]

    def test_update_keeps_position(self, state, make_tx):
        assert state.update_transaction(make_tx(999, id="b"))
        assert [t.id for t in state.transactions] == ["a", "b"]
        assert state.find("b").amount == Decimal("999")

    def test_update_unknown_id(self, state, storage, make_tx):
        saves = storage.save_count
        assert not state.update_transaction(make_tx(id="zzz"))
        assert storage.save_count == saves

    def test_delete(self, state, storage):
        assert state.delete_transaction("a")
        assert [t.id for t in state.transactions] == ["b"]
        assert [t.id for t in storage.load()] == ["b"]

    def test_delete_unknown_id_is_a_no_op(self, state, storage):
        """Deleting a missing id leaves everything untouched."""
        seen = []
        state.subscribe(seen.append)
        saves = storage.save_count
        before = state.transactions

        assert not state.delete_transaction("does-not-exist")

        assert state.transactions == before
        assert storage.save_count == saves
        assert seen == []

    def test_unsubscribe(self, state, make_tx):
        seen = []
        unsubscribe = state.subscribe(seen.append)
        unsubscribe()
        unsubscribe()  # twice is harmless

        state.add_transaction(make_tx())

        assert seen == []

    def test_transactions_property_is_a_copy(self, state):
        state.transactions.clear()
        assert len(state.transactions) == 2

    def test_chat_starts_with_welcome(self, state):
        assert [m.text for m in state.messages] == [WELCOME_MESSAGE]
        assert state.messages[0].role == ChatRole.MODEL

    def test_clear_chat(self, state):
        state.clear_chat()
        assert [m.text for m in state.messages] == [CLEARED_MESSAGE]

    def test_set_busy_notifies_on_change_only(self, state):
        seen = []
        state.subscribe(lambda s: seen.append(s.is_busy))

        state.set_busy(True)
        state.set_busy(True)
        state.set_busy(False)

        assert seen == [True, False]


class TestTransactionFlow:
    """Tests for the add/edit/delete flow."""

    def test_create(self, state):
        flow = TransactionFlow(state)

        tx, result = flow.save_draft(draft())

        assert result.is_valid
        assert tx is not None
        assert tx.id not in ("a", "b")
        assert state.transactions[0] == tx
        assert tx.amount == Decimal("50000")

    def test_invalid_draft_changes_nothing(self, state, storage):
        flow = TransactionFlow(state)
        saves = storage.save_count

        tx, result = flow.save_draft(draft(amount="lots"))

        assert tx is None
        assert result.has_errors
        assert len(state.transactions) == 2
        assert storage.save_count == saves

    def test_edit_preserves_id(self, state):
        flow = TransactionFlow(state)

        tx, _ = flow.save_draft(draft(description="Dinner", amount="75000"), editing_id="b")

        assert tx.id == "b"
        assert [t.id for t in state.transactions] == ["a", "b"]
        assert state.find("b").description == "Dinner"

    def test_edit_can_change_type(self, state):
        flow = TransactionFlow(state)

        flow.save_draft(
            draft(type=TransactionType.INCOME, category="gift"),
            editing_id="a",
        )

        assert state.find("a").type == TransactionType.INCOME

    def test_edit_of_vanished_transaction(self, state):
        flow = TransactionFlow(state)

        tx, result = flow.save_draft(draft(), editing_id="gone")

        assert tx is None
        assert result.is_valid
        assert len(state.transactions) == 2

    def test_delete(self, state):
        flow = TransactionFlow(state)
        assert flow.delete("a")
        assert not flow.delete("a")
        assert [t.id for t in state.transactions] == ["b"]


class TestAdvisorFlow:
    """Tests for the chat flow."""

    def test_ask_appends_both_messages(self, state):
        agent = FakeAgent()
        flow = AdvisorFlow(state, agent=agent, context_limit=100)

        reply = asyncio.run(flow.ask("  How am I doing?  "))

        assert reply.text == "Save more."
        assert not reply.is_error
        assert [(m.role, m.text) for m in state.messages[1:]] == [
            (ChatRole.USER, "How am I doing?"),
            (ChatRole.MODEL, "Save more."),
        ]
        assert not state.is_busy

    def test_blank_question_ignored(self, state):
        agent = FakeAgent()
        flow = AdvisorFlow(state, agent=agent, context_limit=100)

        assert asyncio.run(flow.ask("   ")) is None
        assert agent.calls == []
        assert len(state.messages) == 1

    def test_busy_refuses_second_request(self, state):
        agent = FakeAgent()
        flow = AdvisorFlow(state, agent=agent, context_limit=100)
        state.set_busy(True)

        assert asyncio.run(flow.ask("Anything?")) is None
        assert agent.calls == []

    def test_busy_while_in_flight(self, state):
        observed = []

        class WatchingAgent(FakeAgent):
            async def generate_advice(self, query, transactions):
                observed.append(state.is_busy)
                return await super().generate_advice(query, transactions)

        flow = AdvisorFlow(state, agent=WatchingAgent(), context_limit=100)
        asyncio.run(flow.ask("Tips?"))

        assert observed == [True]
        assert not state.is_busy

    def test_error_reply_is_tagged(self, state):
        agent = FakeAgent(response=AdviceResponse(text="Access Denied (403).", is_error=True))
        flow = AdvisorFlow(state, agent=agent, context_limit=100)

        reply = asyncio.run(flow.ask("Tips?"))

        assert reply.is_error
        assert state.messages[-1].is_error

    def test_busy_cleared_if_agent_raises(self, state):
        flow = AdvisorFlow(state, agent=FakeAgent(error=RuntimeError("boom")), context_limit=100)

        with pytest.raises(RuntimeError):
            asyncio.run(flow.ask("Tips?"))

        assert not state.is_busy

    def test_context_is_most_recent_first_and_capped(self, state):
        agent = FakeAgent()
        flow = AdvisorFlow(state, agent=agent, context_limit=1)

        asyncio.run(flow.ask("Tips?"))

        _, context = agent.calls[0]
        assert [t.id for t in context] == ["b"]

    def test_clear(self, state):
        flow = AdvisorFlow(state, agent=FakeAgent(), context_limit=100)
        asyncio.run(flow.ask("Tips?"))

        flow.clear()

        assert [m.text for m in state.messages] == [CLEARED_MESSAGE]


class TestCreateAppComponents:
    """Tests for the component factory."""

    def test_with_file_storage(self, tmp_path):
        state, transaction_flow, advisor_flow = create_app_components(use_storage=True)

        assert isinstance(state._storage, JsonFileTransactionStorage)
        assert len(state.transactions) == 6  # seeded samples
        assert (tmp_path / "data" / "zenmoney_transactions_v1.json").exists()
        assert isinstance(transaction_flow, TransactionFlow)
        assert isinstance(advisor_flow, AdvisorFlow)

    def test_without_storage(self):
        state, _, _ = create_app_components(use_storage=False)

        assert isinstance(state._storage, InMemoryTransactionStorage)
        assert len(state.transactions) == 6

    def test_no_key_advisor_round_trip(self):
        """The wired advisor answers with the setup hint when no key is set."""
        state, _, advisor_flow = create_app_components(use_storage=False)

        reply = asyncio.run(advisor_flow.ask("How am I doing?"))

        assert reply.is_error
        assert "GEMINI_API_KEY" in reply.text
