"""
Tests for ZenMoney

Test strategy:
1. Unit tests for individual components (models, validators)
2. Integration tests for flows (with in-memory storage and a fake advisor)
3. No real API calls in tests (use fakes)
"""

import json
import pytest
from datetime import date, datetime
from decimal import Decimal

from pydantic import ValidationError

from zenmoney.models.transaction import (
    ChatMessage,
    ChatRole,
    Transaction,
    TransactionDraft,
    TransactionFilter,
    TransactionType,
    ValidationIssue,
    ValidationResult,
    current_month_key,
    month_key,
)
from zenmoney.models.events import (
    AppEvent,
    EventBuilder,
    EventSeverity,
    EventType,
)


class TestTransactionModel:
    """Tests for the persisted Transaction model."""

    def test_transaction_creation(self):
        """Test Transaction model creation."""
        tx = Transaction(
            amount=Decimal("150000"),
            description="Grocery Shopping",
            category="food",
            date=date(2024, 5, 2),
            type=TransactionType.EXPENSE,
        )
        assert tx.amount == Decimal("150000")
        assert tx.is_expense
        assert not tx.is_income

    def test_transaction_gets_unique_id(self):
        """Test that each new transaction gets its own id."""
        fields = dict(
            amount=Decimal("1"),
            description="x",
            category="food",
            date=date(2024, 5, 2),
            type=TransactionType.EXPENSE,
        )
        assert Transaction(**fields).id != Transaction(**fields).id

    def test_transaction_rejects_negative_amount(self):
        """Test that negative amounts are rejected."""
        with pytest.raises(ValidationError):
            Transaction(
                amount=Decimal("-100"),
                description="Test",
                category="food",
                date=date(2024, 5, 2),
                type=TransactionType.EXPENSE,
            )

    @pytest.mark.parametrize("amount", ["1e15", "1e30"])
    def test_transaction_rejects_amount_at_or_above_cap(self, amount):
        """Amounts are capped below MAX_AMOUNT so totals never overflow."""
        with pytest.raises(ValidationError):
            Transaction(
                amount=Decimal(amount),
                description="Test",
                category="food",
                date=date(2024, 5, 2),
                type=TransactionType.EXPENSE,
            )

    def test_transaction_allows_zero_amount(self):
        """Zero is a valid (if odd) amount."""
        tx = Transaction(
            amount=Decimal("0"),
            description="Free sample",
            category="food",
            date=date(2024, 5, 2),
            type=TransactionType.EXPENSE,
        )
        assert tx.amount == 0

    def test_transaction_rejects_blank_description(self):
        """Test that whitespace-only descriptions are rejected."""
        with pytest.raises(ValidationError):
            Transaction(
                amount=Decimal("1"),
                description="   ",
                category="food",
                date=date(2024, 5, 2),
                type=TransactionType.EXPENSE,
            )

    def test_transaction_truncates_iso_timestamp(self):
        """Older payloads stored full timestamps; only the date is kept."""
        tx = Transaction.model_validate({
            "id": "1",
            "amount": 100,
            "description": "Salary",
            "category": "salary",
            "date": "2024-05-01T10:30:00.000Z",
            "type": "INCOME",
        })
        assert tx.date == date(2024, 5, 1)
        assert tx.type == TransactionType.INCOME

    def test_transaction_accepts_datetime(self):
        """Test that a datetime value keeps only its date."""
        tx = Transaction(
            amount=Decimal("1"),
            description="x",
            category="food",
            date=datetime(2024, 5, 1, 23, 59),
            type=TransactionType.EXPENSE,
        )
        assert tx.date == date(2024, 5, 1)

    def test_unknown_type_rejected(self):
        """Test that only INCOME and EXPENSE are valid types."""
        with pytest.raises(ValidationError):
            Transaction.model_validate({
                "amount": 1,
                "description": "x",
                "category": "food",
                "date": "2024-05-01",
                "type": "TRANSFER",
            })

    def test_json_dump_uses_plain_numbers(self):
        """Amounts are written as JSON numbers, whole amounts without a fraction."""
        tx = Transaction(
            id="abc",
            amount=Decimal("150000"),
            description="Groceries",
            category="food",
            date=date(2024, 5, 2),
            type=TransactionType.EXPENSE,
        )
        record = json.loads(tx.model_dump_json())
        assert record == {
            "id": "abc",
            "amount": 150000,
            "description": "Groceries",
            "category": "food",
            "date": "2024-05-02",
            "type": "EXPENSE",
        }

    def test_json_dump_keeps_fraction(self):
        """Test that fractional amounts survive serialization."""
        tx = Transaction(
            amount=Decimal("12.5"),
            description="x",
            category="food",
            date=date(2024, 5, 2),
            type=TransactionType.EXPENSE,
        )
        assert json.loads(tx.model_dump_json())["amount"] == 12.5


class TestTransactionDraft:
    """Tests for the raw form draft."""

    def test_draft_defaults(self):
        """A fresh draft is an empty expense."""
        draft = TransactionDraft()
        assert draft.type == TransactionType.EXPENSE
        assert draft.amount is None
        assert draft.date is None

    def test_draft_stringifies_numeric_amount(self):
        """Number inputs are kept as text for validation."""
        draft = TransactionDraft(amount=150000)
        assert draft.amount == "150000"

    def test_draft_keeps_large_floats_in_plain_digits(self):
        assert TransactionDraft(amount=1e16).amount == "10000000000000000"

    def test_draft_from_transaction(self):
        """Test pre-filling a draft from an existing transaction."""
        tx = Transaction(
            amount=Decimal("2500000"),
            description="Rent Payment",
            category="housing",
            date=date(2024, 5, 3),
            type=TransactionType.EXPENSE,
        )
        draft = TransactionDraft.from_transaction(tx)
        assert draft.amount == "2500000"
        assert draft.description == "Rent Payment"
        assert draft.category == "housing"
        assert draft.date == date(2024, 5, 3)

    def test_draft_from_transaction_never_uses_exponent(self):
        tx = Transaction(
            amount=Decimal("1E+3"),
            description="Rounded",
            category="food",
            date=date(2024, 5, 3),
            type=TransactionType.EXPENSE,
        )
        assert TransactionDraft.from_transaction(tx).amount == "1000"


class TestMonthKeys:
    """Tests for month key helpers and the history filter."""

    def test_month_key(self):
        assert month_key(date(2024, 5, 1)) == "2024-05"
        assert month_key(date(2024, 12, 31)) == "2024-12"

    def test_current_month_key_with_reference(self):
        assert current_month_key(date(2023, 1, 15)) == "2023-01"

    def test_filter_defaults_to_current_month(self):
        """The history browser is month-scoped even with no explicit month."""
        criteria = TransactionFilter()
        assert criteria.month_key == current_month_key()
        assert criteria.type is None
        assert criteria.search_text == ""

    def test_filter_rejects_malformed_month_key(self):
        with pytest.raises(ValidationError):
            TransactionFilter(month_key="May 2024")


class TestValidationModels:
    """Tests for validation-related models."""

    def test_validation_issue_creation(self):
        """Test ValidationIssue model creation."""
        issue = ValidationIssue(
            field="amount",
            issue_type="missing",
            message="Amount is required",
            severity="error",
        )
        assert issue.field == "amount"
        assert issue.severity == "error"

    def test_validation_issue_invalid_severity(self):
        """Test that invalid severity is rejected."""
        with pytest.raises(ValidationError):
            ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Test",
                severity="critical",  # Invalid
            )

    def test_validation_result_has_errors(self):
        """Test has_errors property."""
        result = ValidationResult(
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="missing",
                    message="Required",
                    severity="error",
                )
            ],
        )
        assert result.has_errors
        assert not result.is_valid
        assert result.error_count == 1
        assert result.messages() == ["Required"]

    def test_validation_result_warnings_only(self):
        """Warnings alone don't make a result invalid."""
        result = ValidationResult(
            issues=[
                ValidationIssue(
                    field="description",
                    issue_type="style",
                    message="Consider a longer description",
                    severity="warning",
                )
            ],
        )
        assert result.is_valid
        assert result.error_count == 0


class TestChatMessage:
    """Tests for chat transcript messages."""

    def test_message_defaults(self):
        message = ChatMessage(role=ChatRole.USER, text="How much did I spend?")
        assert message.id
        assert message.is_error is False
        assert isinstance(message.timestamp, datetime)


class TestEventModels:
    """Tests for diagnostic event models."""

    def test_event_creation(self):
        """Test AppEvent model creation."""
        event = AppEvent(
            event_type=EventType.TRANSACTION_CREATED,
            description="Expense recorded",
        )
        assert event.event_id is not None
        assert event.timestamp is not None
        assert event.severity == EventSeverity.INFO

    def test_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AppEvent(
            event_type=EventType.STORAGE_SAVE_FAILED,
            severity=EventSeverity.ERROR,
            entity_id="zenmoney_transactions_v1",
            description="Failed to save",
            error_message="disk full",
        )
        log_dict = event.to_log_dict()

        assert "event_id" in log_dict
        assert log_dict["event_type"] == "storage_save_failed"
        assert log_dict["severity"] == "error"
        assert log_dict["entity_id"] == "zenmoney_transactions_v1"
        assert log_dict["error_message"] == "disk full"

    def test_event_builder_transaction_created(self):
        """Test EventBuilder for transaction creation."""
        event = EventBuilder.transaction_created("tx-1", "EXPENSE", "150000")

        assert event.event_type == EventType.TRANSACTION_CREATED
        assert event.entity_id == "tx-1"
        assert event.details["amount"] == "150000"

    def test_event_builder_delete_of_unknown_id_is_debug(self):
        """A no-op delete is logged, but quietly."""
        event = EventBuilder.transaction_deleted("missing", found=False)

        assert event.severity == EventSeverity.DEBUG
        assert event.details == {"found": False}

    def test_event_builder_storage_load_failed(self):
        """Test EventBuilder for unreadable storage."""
        event = EventBuilder.storage_load_failed("key", "Expecting value")

        assert event.event_type == EventType.STORAGE_LOAD_FAILED
        assert event.severity == EventSeverity.ERROR
        assert event.error_message == "Expecting value"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
