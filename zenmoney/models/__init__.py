"""
Data Models Package

This package contains all Pydantic models used in ZenMoney.
All data flowing through the system must conform to these schemas.
"""

from zenmoney.models.transaction import (
    MAX_AMOUNT,
    AdviceResponse,
    CategoryOption,
    CategoryShare,
    CategoryStat,
    ChatMessage,
    ChatRole,
    IconName,
    MonthKey,
    TimeWindow,
    Totals,
    Transaction,
    TransactionDraft,
    TransactionFilter,
    TransactionType,
    TrendPoint,
    ValidationIssue,
    ValidationResult,
    Window,
    current_month_key,
    month_key,
)
from zenmoney.models.events import (
    AppEvent,
    EventBuilder,
    EventSeverity,
    EventType,
)

__all__ = [
    # Transaction models
    "MAX_AMOUNT",
    "AdviceResponse",
    "CategoryOption",
    "CategoryShare",
    "CategoryStat",
    "ChatMessage",
    "ChatRole",
    "IconName",
    "MonthKey",
    "TimeWindow",
    "Totals",
    "Transaction",
    "TransactionDraft",
    "TransactionFilter",
    "TransactionType",
    "TrendPoint",
    "ValidationIssue",
    "ValidationResult",
    "Window",
    "current_month_key",
    "month_key",
    # Event models
    "AppEvent",
    "EventBuilder",
    "EventSeverity",
    "EventType",
]
