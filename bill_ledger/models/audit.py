"""
Audit Models for Bill Ledger

Every change to the ledger is logged as an audit event.
This provides:
1. Traceability of saves and deletes
2. Debugging information when stored data looks wrong
3. A record of rejected input

DESIGN DECISION: Audit events are emitted to the structured log only.
They are never written into the ledger snapshot.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Start-up
    LEDGER_LOADED = "ledger_loaded"
    LOAD_FAILED = "load_failed"
    RECORD_SKIPPED = "record_skipped"

    # Mutations
    BILL_SAVED = "bill_saved"
    BILL_DELETED = "bill_deleted"

    # Rejected input
    VALIDATION_FAILED = "validation_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every ledger mutation and every rejected save creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'bill', 'ledger')"
    )
    entity_id: Optional[int] = Field(
        default=None,
        description="Bill id the event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_code: Optional[str] = None
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.bill_saved(bill_id, user_name, "250.50")
        event = AuditEventBuilder.validation_failed("select_user", message)
    """

    @staticmethod
    def ledger_loaded(storage_key: str, bill_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            entity_type="ledger",
            description=f"Ledger loaded with {bill_count} bills",
            details={
                "storage_key": storage_key,
                "bill_count": bill_count,
            },
        )

    @staticmethod
    def load_failed(storage_key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOAD_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="ledger",
            description="Stored ledger could not be read, starting empty",
            error_message=error_message,
            details={
                "storage_key": storage_key,
            },
        )

    @staticmethod
    def record_skipped(index: int, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_SKIPPED,
            severity=AuditSeverity.WARNING,
            entity_type="bill",
            description=f"Stored record #{index} is not a valid bill, skipped",
            error_message=error_message,
            details={
                "index": index,
            },
        )

    @staticmethod
    def bill_saved(
        bill_id: int,
        user_name: str,
        amount: str,
        bill_count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BILL_SAVED,
            entity_type="bill",
            entity_id=bill_id,
            description=f"Bill saved: {user_name} - {amount}",
            details={
                "user_name": user_name,
                "amount": amount,
                "bill_count": bill_count,
            },
            is_user_action=True,
        )

    @staticmethod
    def bill_deleted(bill_id: int, found: bool, bill_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BILL_DELETED,
            severity=AuditSeverity.INFO if found else AuditSeverity.DEBUG,
            entity_type="bill",
            entity_id=bill_id,
            description=(
                f"Bill {bill_id} deleted" if found
                else f"No bill with id {bill_id}, ledger unchanged"
            ),
            details={
                "found": found,
                "bill_count": bill_count,
            },
            is_user_action=True,
        )

    @staticmethod
    def validation_failed(error_code: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="bill",
            description="Bill was not saved",
            error_code=error_code,
            error_message=error_message,
            is_user_action=True,
        )
