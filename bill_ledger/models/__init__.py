"""
Data Models Package

This package contains all Pydantic models used in the Bill Ledger.
Everything stored or logged must conform to these schemas.
"""

from bill_ledger.models.bill import (
    Bill,
    User,
    to_epoch_millis,
    to_iso_timestamp,
)
from bill_ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "Bill",
    "User",
    "to_epoch_millis",
    "to_iso_timestamp",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
