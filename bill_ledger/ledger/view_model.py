"""
Bill Ledger View-Model

Holds everything the bill page shows and every action it can take:
- the fixed list of users and which one is selected
- the amount being typed
- the ledger of recorded bills
- the current error message

DESIGN DECISION: The view-model owns the ledger. Storage is only a
mirror, written in full after every save or delete and read once when
the view-model is created.

All operations are synchronous and run on the single UI thread, so
there is no locking.
"""

import math
import re
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

from bill_ledger.audit import AuditLogger
from bill_ledger.config import DEFAULT_USERS, LedgerSettings, get_settings
from bill_ledger.models.bill import Bill, User
from bill_ledger.queries import totals
from bill_ledger.services.storage import (
    CorruptRecordError,
    JsonFileStorage,
    KeyValueStorageInterface,
    LedgerRepository,
)


SELECT_USER_MESSAGE = "Please select a user first"
INVALID_AMOUNT_MESSAGE = "Invalid amount: please enter a valid numeric amount"

# Optional sign, digits with an optional fraction (or a bare fraction),
# optional exponent. ASCII digits only. Surrounding whitespace is
# stripped before matching.
_NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


class ValidationError(Exception):
    """
    A save was rejected because of the current input.

    `code` is "select_user" or "invalid_amount". The message is what the
    error banner shows.
    """

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


def parse_amount(text: str) -> Optional[float]:
    """
    Parse typed amount text.

    Returns None for empty text, anything that is not a plain decimal
    number, and numbers too large to be finite.
    """
    candidate = text.strip()
    if not candidate or not _NUMBER_PATTERN.fullmatch(candidate):
        return None
    value = float(candidate)
    if not math.isfinite(value):
        return None
    return value


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BillLedgerViewModel:
    """
    State and actions behind the bill page.

    Usage:
        vm = BillLedgerViewModel(LedgerRepository(InMemoryStorage()))
        vm.select_user(vm.users[1])
        vm.set_pending_amount("250.5")
        vm.save_bill()
        vm.grand_total()  # "250.50"
    """

    def __init__(
        self,
        repository: LedgerRepository,
        users: Sequence[User] = DEFAULT_USERS,
        audit_logger: Optional[AuditLogger] = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """
        Initialize the view-model and load the stored ledger.

        Args:
            repository: Where the ledger snapshot is read from and written to
            users: Fixed list of people bills can be recorded for
            audit_logger: Logger for ledger events. A default one is
                         created if not given.
            clock: Source of "now" for new bills
        """
        self._repository = repository
        self._users: tuple[User, ...] = tuple(users)
        self._audit_logger = audit_logger or AuditLogger()
        self._clock = clock

        self.selected_user: Optional[User] = None
        self.pending_amount: str = ""
        self.error: str = ""
        self._bills: list[Bill] = self._load()

    def _load(self) -> list[Bill]:
        """Read the stored ledger, falling back to an empty one if unreadable."""
        try:
            bills, skipped = self._repository.load()
        except CorruptRecordError as e:
            self._audit_logger.log_load_failed(self._repository.key, str(e))
            return []

        for index, reason in skipped:
            self._audit_logger.log_record_skipped(index, reason)
        self._audit_logger.log_ledger_loaded(self._repository.key, len(bills))
        return bills

    # =========================================================================
    # STATE
    # =========================================================================

    @property
    def users(self) -> tuple[User, ...]:
        return self._users

    @property
    def bills(self) -> tuple[Bill, ...]:
        """Recorded bills in insertion order."""
        return tuple(self._bills)

    def is_selected(self, user: User) -> bool:
        """Whether `user` is highlighted as the current selection."""
        return self.selected_user is not None and self.selected_user.id == user.id

    # =========================================================================
    # ACTIONS
    # =========================================================================

    def select_user(self, user: Optional[User]) -> None:
        self.selected_user = user

    def set_pending_amount(self, text: str) -> None:
        """Store the typed amount as-is. It is only parsed on save."""
        self.pending_amount = text

    def save_bill(self) -> Bill:
        """
        Record a bill for the selected user with the pending amount.

        On success the bill is appended, the whole ledger is written to
        storage, and the pending amount and error message are cleared.

        Returns:
            The new bill

        Raises:
            ValidationError: If no user is selected or the amount does not
                             parse. The ledger and storage are untouched and
                             `error` holds the message.
            StorageError: If the snapshot cannot be written
        """
        if self.selected_user is None:
            self._reject("select_user", SELECT_USER_MESSAGE)

        amount = parse_amount(self.pending_amount)
        if amount is None:
            self._reject("invalid_amount", INVALID_AMOUNT_MESSAGE)

        bill = Bill.create(self.selected_user, amount, self._clock())
        bill = self._ensure_unique_id(bill)

        self._bills.append(bill)
        self._repository.save(self._bills)

        self.pending_amount = ""
        self.error = ""
        self._audit_logger.log_bill_saved(
            bill_id=bill.id,
            user_name=bill.user_name,
            amount=totals.format_amount(bill.amount),
            bill_count=len(self._bills),
        )
        return bill

    def delete_bill(self, bill_id: int) -> bool:
        """
        Remove the first bill with `bill_id`.

        The ledger is written to storage even when nothing matched.

        Returns:
            True if a bill was removed
        """
        found = False
        for index, bill in enumerate(self._bills):
            if bill.id == bill_id:
                del self._bills[index]
                found = True
                break

        self._repository.save(self._bills)
        self._audit_logger.log_bill_deleted(bill_id, found, len(self._bills))
        return found

    def _reject(self, code: str, message: str) -> None:
        self.error = message
        self._audit_logger.log_validation_failed(code, message)
        raise ValidationError(code, message)

    def _ensure_unique_id(self, bill: Bill) -> Bill:
        """
        Bump the id past any existing bill created in the same millisecond.

        Ids stay integers close to the creation time, so older snapshots
        and delete-by-id keep working.
        """
        taken = {b.id for b in self._bills}
        new_id = bill.id
        while new_id in taken:
            new_id += 1
        if new_id == bill.id:
            return bill
        return bill.model_copy(update={"id": new_id})

    # =========================================================================
    # DERIVED TOTALS
    # =========================================================================

    def total_for_user(self, user_id: int) -> str:
        """Total recorded for one user, e.g. "250.50". "0.00" if none."""
        return totals.total_for_user(self._bills, user_id)

    def grand_total(self) -> str:
        """Total over the whole ledger, e.g. "300.50"."""
        return totals.grand_total(self._bills)

    def user_totals(self) -> list[tuple[User, str]]:
        """(user, formatted total) for every configured user, in list order."""
        return [(user, self.total_for_user(user.id)) for user in self._users]


def create_view_model(
    settings: Optional[LedgerSettings] = None,
    storage: Optional[KeyValueStorageInterface] = None,
) -> BillLedgerViewModel:
    """
    Factory function wiring the view-model from settings.

    Args:
        settings: Settings to use. Defaults to get_settings().
        storage: Storage backend. Defaults to a JsonFileStorage at
                settings.storage_path.

    Returns:
        A view-model with the stored ledger already loaded
    """
    settings = settings or get_settings()
    if storage is None:
        storage = JsonFileStorage(settings.storage_path)
    repository = LedgerRepository(storage, settings.storage_key)
    return BillLedgerViewModel(
        repository=repository,
        users=settings.users,
        audit_logger=AuditLogger(),
    )
