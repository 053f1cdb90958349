"""
Audit Logger

DESIGN DECISION: Every change to the ledger is logged.
This provides:
1. Traceability of saves and deletes
2. Debugging capability when stored data looks wrong
3. A record of every rejected save

The audit logger:
- Is synchronous, like everything else in the ledger
- Only writes to the structured local log (audit events are not persisted)
"""

import logging
import sys
from typing import Optional

import structlog

from bill_ledger.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """
    Route structured logs to stderr at `level`.

    structlog renders each event to a JSON string, so the stdlib
    handler only needs to print the message.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
        force=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    Logs ledger events to the structured local log.
    """

    def __init__(self, logger_name: Optional[str] = None):
        """
        Initialize audit logger.

        Args:
            logger_name: Name of the stdlib logger to write through.
                        Defaults to this module's name.
        """
        self._logger = structlog.get_logger(logger_name or __name__)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at the level matching its severity."""
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_ledger_loaded(self, storage_key: str, bill_count: int) -> None:
        """Log a successful start-up load."""
        self.log(AuditEventBuilder.ledger_loaded(storage_key, bill_count))

    def log_load_failed(self, storage_key: str, error_message: str) -> None:
        """Log a stored snapshot that could not be decoded."""
        self.log(AuditEventBuilder.load_failed(storage_key, error_message))

    def log_record_skipped(self, index: int, error_message: str) -> None:
        """Log a stored record dropped during load."""
        self.log(AuditEventBuilder.record_skipped(index, error_message))

    def log_bill_saved(
        self,
        bill_id: int,
        user_name: str,
        amount: str,
        bill_count: int,
    ) -> None:
        """Log bill save."""
        self.log(AuditEventBuilder.bill_saved(bill_id, user_name, amount, bill_count))

    def log_bill_deleted(self, bill_id: int, found: bool, bill_count: int) -> None:
        """Log bill delete, including deletes that matched nothing."""
        self.log(AuditEventBuilder.bill_deleted(bill_id, found, bill_count))

    def log_validation_failed(self, error_code: str, error_message: str) -> None:
        """Log a rejected save."""
        self.log(AuditEventBuilder.validation_failed(error_code, error_message))
