"""
Tests for configuration and audit logging wiring.
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from bill_ledger.audit import AuditLogger
from bill_ledger.config import DEFAULT_USERS, LedgerSettings
from bill_ledger.models.audit import AuditEventBuilder


class TestLedgerSettings:
    """Tests for LedgerSettings."""

    def test_defaults(self, monkeypatch):
        """Test the built-in configuration."""
        for name in ("BILL_LEDGER_STORAGE_KEY", "BILL_LEDGER_USERS", "BILL_LEDGER_STORAGE_PATH"):
            monkeypatch.delenv(name, raising=False)
        settings = LedgerSettings(_env_file=None)
        assert settings.storage_key == "billRecords"
        assert settings.users == DEFAULT_USERS
        assert settings.currency_symbol == "₹"
        assert settings.storage_path == Path(".bill_ledger") / "local_storage.json"

    def test_env_overrides(self, monkeypatch):
        """Test loading from BILL_LEDGER_* variables."""
        monkeypatch.setenv("BILL_LEDGER_STORAGE_KEY", "householdBills")
        monkeypatch.setenv("BILL_LEDGER_USERS", '[{"id": 10, "name": "Sana"}]')
        monkeypatch.setenv("BILL_LEDGER_LOG_LEVEL", "debug")

        settings = LedgerSettings(_env_file=None)

        assert settings.storage_key == "householdBills"
        assert [(u.id, u.name) for u in settings.users] == [(10, "Sana")]
        assert settings.log_level == "DEBUG"

    def test_duplicate_user_ids_rejected(self):
        """Test that user ids must be unique."""
        with pytest.raises(ValueError, match="unique"):
            LedgerSettings(
                _env_file=None,
                users=[{"id": 1, "name": "A"}, {"id": 1, "name": "B"}],
            )

    def test_unknown_log_level_rejected(self):
        """Test log level validation."""
        with pytest.raises(ValueError, match="log level"):
            LedgerSettings(_env_file=None, log_level="chatty")


class TestAuditLogger:
    """Tests for AuditLogger level routing."""

    def _logger_with_mock(self) -> tuple[AuditLogger, MagicMock]:
        audit = AuditLogger()
        mock = MagicMock()
        audit._logger = mock
        return audit, mock

    def test_info_event(self):
        """Test that saves are logged at info."""
        audit, mock = self._logger_with_mock()
        audit.log_bill_saved(bill_id=1, user_name="Babar", amount="1.00", bill_count=1)
        mock.info.assert_called_once()
        assert mock.info.call_args.kwargs["event_type"] == "bill_saved"

    def test_warning_event(self):
        """Test that rejected saves are logged at warning."""
        audit, mock = self._logger_with_mock()
        audit.log_validation_failed("invalid_amount", "bad")
        mock.warning.assert_called_once()
        assert mock.warning.call_args.kwargs["error_code"] == "invalid_amount"

    def test_debug_event(self):
        """Test that deletes of unknown ids are logged at debug."""
        audit, mock = self._logger_with_mock()
        audit.log(AuditEventBuilder.bill_deleted(bill_id=3, found=False, bill_count=0))
        mock.debug.assert_called_once()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
