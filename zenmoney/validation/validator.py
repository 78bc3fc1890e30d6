"""
Form-Boundary Validation

DESIGN DECISION: A Transaction is only ever constructed from a draft that
passed validation. Incomplete input is rejected here with readable issues;
nothing partial or invalid enters the collection.

Checks:
- amount present, numeric, finite, not negative
- description present and within length
- category present

The category is NOT checked against the registry: unknown ids are
allowed and display with a fallback.

IMPORTANT: Validation NEVER silently fixes issues (beyond trimming
whitespace). It reports them for the user to correct.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from zenmoney.models.transaction import (
    MAX_AMOUNT,
    Transaction,
    TransactionDraft,
    ValidationIssue,
    ValidationResult,
)


MAX_DESCRIPTION_LENGTH = 200


class TransactionValidator:
    """Validates add/edit form drafts and builds Transactions from them."""

    def _parse_amount(self, raw: Optional[str]) -> tuple[Optional[Decimal], Optional[ValidationIssue]]:
        if raw is None or not raw.strip():
            return None, ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Amount is required",
                severity="error",
            )

        try:
            amount = Decimal(raw.strip())
        except InvalidOperation:
            return None, ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message=f"'{raw}' is not a number",
                severity="error",
            )

        if not amount.is_finite():
            return None, ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message=f"'{raw}' is not a number",
                severity="error",
            )

        # Plain digits only, no exponent notation
        if "e" in raw.lower():
            return None, ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message=f"'{raw}' is not a plain number",
                severity="error",
            )

        if amount < 0:
            return None, ValidationIssue(
                field="amount",
                issue_type="negative",
                message="Amount cannot be negative; choose Income or Expense instead",
                severity="error",
            )

        if amount >= MAX_AMOUNT:
            return None, ValidationIssue(
                field="amount",
                issue_type="too_large",
                message=f"Amount must be less than {MAX_AMOUNT:,.0f}",
                severity="error",
            )

        return amount, None

    def validate(self, draft: TransactionDraft) -> ValidationResult:
        """Check a draft and collect every issue found."""
        issues = []

        _, amount_issue = self._parse_amount(draft.amount)
        if amount_issue:
            issues.append(amount_issue)

        if not draft.description:
            issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message="Description is required",
                severity="error",
            ))
        elif len(draft.description) > MAX_DESCRIPTION_LENGTH:
            issues.append(ValidationIssue(
                field="description",
                issue_type="too_long",
                message=f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters",
                severity="error",
            ))

        if not draft.category:
            issues.append(ValidationIssue(
                field="category",
                issue_type="missing",
                message="Please choose a category",
                severity="error",
            ))

        return ValidationResult(issues=issues)

    def to_transaction(
        self,
        draft: TransactionDraft,
        transaction_id: Optional[str] = None,
    ) -> Transaction:
        """
        Build a Transaction from a draft that passed validate().

        A missing date means today. Passing transaction_id keeps the id
        of the transaction being edited.

        Raises:
            ValueError: If the draft has validation errors
        """
        result = self.validate(draft)
        if result.has_errors:
            raise ValueError("; ".join(result.messages()))

        amount, _ = self._parse_amount(draft.amount)
        fields = dict(
            amount=amount,
            description=draft.description,
            category=draft.category,
            date=draft.date or date.today(),
            type=draft.type,
        )
        if transaction_id is not None:
            fields["id"] = transaction_id
        return Transaction(**fields)

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """One line per issue, suitable for a form error box."""
        if result.is_valid:
            return "Looks good!"
        return "\n".join(f"• {issue.message}" for issue in result.issues)
