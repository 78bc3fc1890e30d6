"""Tests for form-boundary validation."""

import pytest
from datetime import date
from decimal import Decimal

from zenmoney.models.transaction import TransactionDraft, TransactionType
from zenmoney.validation import TransactionValidator


@pytest.fixture
def validator():
    return TransactionValidator()


def valid_draft(**overrides):
    fields = dict(
        type=TransactionType.EXPENSE,
        amount="150000",
        description="Grocery Shopping",
        category="food",
        date=date(2024, 5, 2),
    )
    fields.update(overrides)
    return TransactionDraft(**fields)


class TestValidate:
    """Tests for TransactionValidator.validate."""

    def test_valid_draft(self, validator):
        result = validator.validate(valid_draft())
        assert result.is_valid
        assert result.issues == []

    @pytest.mark.parametrize("amount", [None, "", "   "])
    def test_missing_amount(self, validator, amount):
        result = validator.validate(valid_draft(amount=amount))
        assert result.has_errors
        assert result.issues[0].field == "amount"
        assert result.issues[0].issue_type == "missing"

    @pytest.mark.parametrize("amount", ["abc", "1,5", "NaN", "Infinity"])
    def test_non_numeric_amount(self, validator, amount):
        result = validator.validate(valid_draft(amount=amount))
        assert [i.issue_type for i in result.issues] == ["invalid_format"]

    @pytest.mark.parametrize("amount", ["1e5", "1E5", "1e30", "1e5000"])
    def test_exponent_notation_rejected(self, validator, amount):
        result = validator.validate(valid_draft(amount=amount))
        assert [i.issue_type for i in result.issues] == ["invalid_format"]

    @pytest.mark.parametrize("amount", ["1000000000000000", "9" * 29])
    def test_amount_too_large(self, validator, amount):
        result = validator.validate(valid_draft(amount=amount))
        assert [i.issue_type for i in result.issues] == ["too_large"]

    def test_largest_amount_accepted_and_converts(self, validator):
        draft = valid_draft(amount="999999999999999.99")
        assert validator.validate(draft).is_valid
        assert validator.to_transaction(draft).amount == Decimal("999999999999999.99")

    def test_negative_amount(self, validator):
        result = validator.validate(valid_draft(amount="-5"))
        assert [i.issue_type for i in result.issues] == ["negative"]

    def test_zero_amount_allowed(self, validator):
        assert validator.validate(valid_draft(amount="0")).is_valid

    @pytest.mark.parametrize("description", [None, "", "   "])
    def test_blank_description(self, validator, description):
        result = validator.validate(valid_draft(description=description))
        assert [i.field for i in result.issues] == ["description"]

    def test_description_too_long(self, validator):
        result = validator.validate(valid_draft(description="x" * 201))
        assert [i.issue_type for i in result.issues] == ["too_long"]

    @pytest.mark.parametrize("category", [None, ""])
    def test_blank_category(self, validator, category):
        result = validator.validate(valid_draft(category=category))
        assert [i.field for i in result.issues] == ["category"]

    def test_unknown_category_is_accepted(self, validator):
        """The registry is for display; unknown ids are not rejected."""
        assert validator.validate(valid_draft(category="crypto")).is_valid

    def test_collects_every_issue(self, validator):
        result = validator.validate(TransactionDraft())
        assert result.error_count == 3
        assert {i.field for i in result.issues} == {"amount", "description", "category"}


class TestToTransaction:
    """Tests for building a Transaction from a draft."""

    def test_builds_transaction(self, validator):
        tx = validator.to_transaction(valid_draft(amount=" 150000 "))
        assert tx.amount == Decimal("150000")
        assert tx.description == "Grocery Shopping"
        assert tx.date == date(2024, 5, 2)
        assert tx.type == TransactionType.EXPENSE

    def test_missing_date_means_today(self, validator):
        tx = validator.to_transaction(valid_draft(date=None))
        assert tx.date == date.today()

    def test_keeps_given_id(self, validator):
        tx = validator.to_transaction(valid_draft(), transaction_id="keep-me")
        assert tx.id == "keep-me"

    def test_fresh_ids(self, validator):
        assert validator.to_transaction(valid_draft()).id != validator.to_transaction(valid_draft()).id

    def test_invalid_draft_raises(self, validator):
        with pytest.raises(ValueError):
            validator.to_transaction(valid_draft(amount="abc"))


class TestSummary:
    """Tests for the user-facing summary."""

    def test_valid_summary(self, validator):
        assert validator.get_user_friendly_summary(validator.validate(valid_draft())) == "Looks good!"

    def test_error_summary_lists_messages(self, validator):
        result = validator.validate(valid_draft(amount=None, category=None))
        summary = validator.get_user_friendly_summary(result)
        assert "Amount is required" in summary
        assert "Please choose a category" in summary

    def test_summary_for_oversized_amount(self, validator):
        result = validator.validate(valid_draft(amount="1e30"))
        assert validator.get_user_friendly_summary(result) == "• '1e30' is not a plain number"
