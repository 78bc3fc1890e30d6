"""
Core Data Models for ZenMoney

These models define the schemas for everything that flows through the app:
the persisted Transaction, the raw form draft it is built from, and the
derived aggregates the analytics engine produces.

DESIGN DECISION: Amounts are never signed. Direction (credit/debit) lives
in TransactionType, and every aggregation applies the sign itself.
"""

import datetime as dt
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Optional, Union
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """Direction of a transaction. Persisted as the upper-case tag."""
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class TimeWindow(str, Enum):
    """
    Relative time windows used by the analytics view.

    An explicit "YYYY-MM" month key is accepted wherever a window is,
    see MonthKey below.
    """
    MONTH = "MONTH"
    YEAR = "YEAR"
    ALL = "ALL"


class IconName(str, Enum):
    """
    Icons a category may reference.

    Unrecognised names resolve to HELP_CIRCLE rather than failing.
    """
    UTENSILS = "Utensils"
    BUS = "Bus"
    SHOPPING_BAG = "ShoppingBag"
    HOME = "Home"
    ZAP = "Zap"
    HEART_PULSE = "HeartPulse"
    GAMEPAD = "Gamepad2"
    GRADUATION_CAP = "GraduationCap"
    MORE_HORIZONTAL = "MoreHorizontal"
    BRIEFCASE = "Briefcase"
    TRENDING_UP = "TrendingUp"
    GIFT = "Gift"
    HELP_CIRCLE = "HelpCircle"


class ChatRole(str, Enum):
    """Who authored a chat message."""
    USER = "user"
    MODEL = "model"


MonthKey = Annotated[str, Field(pattern=r"^\d{4}-\d{2}$")]
Window = Union[TimeWindow, str]


# Upper bound (exclusive) on amounts; sums stay within default Decimal precision
MAX_AMOUNT = Decimal("1e15")


def month_key(value: date) -> str:
    """Year-month key ("YYYY-MM") of a date."""
    return f"{value.year:04d}-{value.month:02d}"


def current_month_key(today: Optional[date] = None) -> str:
    """Month key for today, or for the given reference date."""
    return month_key(today or date.today())


# =============================================================================
# CORE TRANSACTION MODEL
# =============================================================================

class Transaction(BaseModel):
    """
    A single recorded income or expense event.

    Only fully valid transactions exist; incomplete form input lives in
    TransactionDraft until the validator accepts it.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(
        default_factory=lambda: str(uuid4()),
        min_length=1,
        description="Opaque unique identifier, immutable once created"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        lt=MAX_AMOUNT,
        description="Non-negative magnitude; the sign comes from type"
    )
    description: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Free-text label"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="Category registry id (not checked against the registry)"
    )
    date: dt.date = Field(
        ...,
        description="Calendar date of the transaction"
    )
    type: TransactionType

    @field_validator("date", mode="before")
    @classmethod
    def truncate_timestamp(cls, v):
        """Accept ISO date-time strings from older payloads, keep the date part."""
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str) and "T" in v:
            return v.split("T", 1)[0]
        return v

    @field_serializer("amount", when_used="json")
    def serialize_amount(self, amount: Decimal) -> Union[int, float]:
        """Persist amounts as JSON numbers, whole numbers without a fraction."""
        if amount == amount.to_integral_value():
            return int(amount)
        return float(amount)

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE


class TransactionDraft(BaseModel):
    """
    Raw add/edit form input.

    Everything is optional and loosely typed because this is what the user
    typed, not what we trust. TransactionValidator turns it into a
    Transaction or reports why it can't.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    type: TransactionType = TransactionType.EXPENSE
    amount: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    date: Optional[dt.date] = None

    @field_validator("amount", mode="before")
    @classmethod
    def stringify_amount(cls, v):
        """Number inputs hand us floats; keep the text form for validation."""
        if v is None or isinstance(v, str):
            return v
        # Plain digits, never exponent notation
        return f"{Decimal(str(v)):f}"

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> "TransactionDraft":
        """Pre-fill the form when editing an existing transaction."""
        return cls(
            type=transaction.type,
            amount=f"{transaction.amount:f}",
            description=transaction.description,
            category=transaction.category,
            date=transaction.date,
        )


# =============================================================================
# CATEGORY REGISTRY MODEL
# =============================================================================

class CategoryOption(BaseModel):
    """Static display descriptor for one category."""
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    icon: IconName
    color: str = Field(pattern=r"^#[0-9a-fA-F]{6}$")
    type: TransactionType


# =============================================================================
# DERIVED AGGREGATES (never persisted)
# =============================================================================

class Totals(BaseModel):
    """Dashboard summary."""
    model_config = ConfigDict(frozen=True)

    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")


class CategoryStat(BaseModel):
    """Summed amount for one category id."""
    model_config = ConfigDict(frozen=True)

    category_id: str
    name: str
    value: Decimal
    color: str
    icon: IconName = IconName.HELP_CIRCLE


class CategoryShare(BaseModel):
    """A category stat with its rounded percentage of the breakdown total."""
    model_config = ConfigDict(frozen=True)

    stat: CategoryStat
    percent: int = Field(ge=0, le=100)


class TrendPoint(BaseModel):
    """One bucket of the monthly expense trend."""
    model_config = ConfigDict(frozen=True)

    label: str
    value: Decimal = Decimal("0")


class TransactionFilter(BaseModel):
    """
    History browser filter.

    The browser is month-scoped by default: leaving month_key alone
    still restricts results to the current month.
    """

    type: Optional[TransactionType] = Field(
        default=None,
        description="None means all types"
    )
    search_text: str = Field(
        default="",
        description="Case-insensitive substring of description"
    )
    month_key: MonthKey = Field(default_factory=current_month_key)


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single problem found in a transaction draft."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'negative')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """Outcome of validating a draft at the form boundary."""

    validated_at: datetime = Field(
        default_factory=datetime.now
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    def messages(self) -> list[str]:
        return [issue.message for issue in self.issues]


# =============================================================================
# CHAT MODELS
# =============================================================================

class ChatMessage(BaseModel):
    """One bubble in the advisor transcript."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    role: ChatRole
    text: str
    timestamp: datetime = Field(default_factory=datetime.now)
    is_error: bool = Field(
        default=False,
        description="Advisor failure rendered as text; styled as an error bubble"
    )


class AdviceResponse(BaseModel):
    """What the advisor returns. Failures are text too, flagged is_error."""

    text: str
    is_error: bool = False
