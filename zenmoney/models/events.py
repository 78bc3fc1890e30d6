"""
Diagnostic Event Models for ZenMoney

Significant actions and every swallowed failure produce an AppEvent.
They are written to the structured log only; transactions themselves
carry no history.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class EventType(str, Enum):
    """Types of events we log."""
    # Collection changes
    TRANSACTION_CREATED = "transaction_created"
    TRANSACTION_UPDATED = "transaction_updated"
    TRANSACTION_DELETED = "transaction_deleted"
    VALIDATION_FAILED = "validation_failed"

    # Persistence
    STORAGE_LOADED = "storage_loaded"
    STORAGE_SEEDED = "storage_seeded"
    STORAGE_LOAD_FAILED = "storage_load_failed"
    STORAGE_RECORD_SKIPPED = "storage_record_skipped"
    STORAGE_SAVE_FAILED = "storage_save_failed"

    # Advisor
    ADVICE_REQUESTED = "advice_requested"
    ADVICE_FAILED = "advice_failed"
    ADVISOR_NOT_CONFIGURED = "advisor_not_configured"

    # System events
    SYSTEM_ERROR = "system_error"


class EventSeverity(str, Enum):
    """Severity level for events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AppEvent(BaseModel):
    """A single diagnostic event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )
    event_type: EventType
    severity: EventSeverity = EventSeverity.INFO

    # Transaction id, storage key, ... whatever the event is about
    entity_id: Optional[str] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class EventBuilder:
    """
    Helper class to build events with common patterns.

    Usage:
        event = EventBuilder.transaction_created(transaction_id, "EXPENSE", "150000")
        event = EventBuilder.storage_save_failed("zenmoney_transactions_v1", str(exc))
    """

    @staticmethod
    def transaction_created(
        transaction_id: str,
        transaction_type: str,
        amount: str,
    ) -> AppEvent:
        return AppEvent(
            event_type=EventType.TRANSACTION_CREATED,
            entity_id=transaction_id,
            description=f"{transaction_type.title()} of {amount} recorded",
            details={"type": transaction_type, "amount": amount},
        )

    @staticmethod
    def transaction_updated(transaction_id: str) -> AppEvent:
        return AppEvent(
            event_type=EventType.TRANSACTION_UPDATED,
            entity_id=transaction_id,
            description="Transaction updated",
        )

    @staticmethod
    def transaction_deleted(transaction_id: str, found: bool) -> AppEvent:
        return AppEvent(
            event_type=EventType.TRANSACTION_DELETED,
            severity=EventSeverity.INFO if found else EventSeverity.DEBUG,
            entity_id=transaction_id,
            description=(
                "Transaction deleted" if found
                else "Delete requested for unknown transaction; nothing changed"
            ),
            details={"found": found},
        )

    @staticmethod
    def validation_failed(issues: list[dict]) -> AppEvent:
        return AppEvent(
            event_type=EventType.VALIDATION_FAILED,
            severity=EventSeverity.WARNING,
            description=f"Transaction form rejected with {len(issues)} issue(s)",
            details={"issues": issues},
        )

    @staticmethod
    def storage_loaded(storage_key: str, count: int) -> AppEvent:
        return AppEvent(
            event_type=EventType.STORAGE_LOADED,
            entity_id=storage_key,
            description=f"Loaded {count} transactions",
            details={"count": count},
        )

    @staticmethod
    def storage_seeded(storage_key: str, count: int) -> AppEvent:
        return AppEvent(
            event_type=EventType.STORAGE_SEEDED,
            entity_id=storage_key,
            description=f"No stored transactions; seeded {count} samples",
            details={"count": count},
        )

    @staticmethod
    def storage_load_failed(storage_key: str, error_message: str) -> AppEvent:
        return AppEvent(
            event_type=EventType.STORAGE_LOAD_FAILED,
            severity=EventSeverity.ERROR,
            entity_id=storage_key,
            description="Failed to parse stored transactions; starting empty",
            error_message=error_message,
        )

    @staticmethod
    def storage_record_skipped(
        storage_key: str,
        index: int,
        error_message: str,
    ) -> AppEvent:
        return AppEvent(
            event_type=EventType.STORAGE_RECORD_SKIPPED,
            severity=EventSeverity.WARNING,
            entity_id=storage_key,
            description=f"Skipped malformed stored record #{index}",
            details={"index": index},
            error_message=error_message,
        )

    @staticmethod
    def storage_save_failed(storage_key: str, error_message: str) -> AppEvent:
        return AppEvent(
            event_type=EventType.STORAGE_SAVE_FAILED,
            severity=EventSeverity.ERROR,
            entity_id=storage_key,
            description="Failed to save transactions; changes are in memory only",
            error_message=error_message,
        )

    @staticmethod
    def advice_requested(query_length: int, context_size: int) -> AppEvent:
        return AppEvent(
            event_type=EventType.ADVICE_REQUESTED,
            description="Advisor question sent",
            details={
                "query_length": query_length,
                "context_size": context_size,
            },
        )

    @staticmethod
    def advice_failed(error_message: str) -> AppEvent:
        return AppEvent(
            event_type=EventType.ADVICE_FAILED,
            severity=EventSeverity.ERROR,
            description="Gemini API error",
            error_message=error_message,
        )

    @staticmethod
    def advisor_not_configured() -> AppEvent:
        return AppEvent(
            event_type=EventType.ADVISOR_NOT_CONFIGURED,
            severity=EventSeverity.WARNING,
            description="Advisor called without an API key",
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AppEvent:
        return AppEvent(
            event_type=EventType.SYSTEM_ERROR,
            severity=EventSeverity.ERROR,
            description=f"System error: {error_type}",
            details=details or {},
            error_message=error_message,
        )
