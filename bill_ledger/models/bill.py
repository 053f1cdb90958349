"""
Core Data Models for Bill Ledger

These models define the schemas for everything the ledger stores.
They are designed to:
1. Enforce type safety at runtime
2. Round-trip exactly through the persisted JSON snapshot
3. Keep the stored field names (camelCase) separate from Python names

DESIGN DECISION: Bills are immutable once created. The ledger only
ever appends or deletes, so nothing needs to mutate a Bill in place.
"""

import math
from datetime import datetime, timezone
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


# =============================================================================
# TIMESTAMP HELPERS
# =============================================================================

def to_epoch_millis(moment: datetime) -> int:
    """Milliseconds since the Unix epoch. Naive datetimes are taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp() * 1000)


def to_iso_timestamp(moment: datetime) -> str:
    """
    Format as an ISO-8601 UTC timestamp with millisecond precision.

    Example: 2024-12-15T09:30:00.125Z
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


# =============================================================================
# USER
# =============================================================================

class User(BaseModel):
    """
    A person bills can be recorded for.

    The set of users is fixed configuration, so instances are frozen.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: int = Field(
        ...,
        description="Stable user identifier, referenced by bills"
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Display name"
    )


# =============================================================================
# BILL
# =============================================================================

class Bill(BaseModel):
    """
    One recorded payment, attributed to a user.

    Stored field names are camelCase (userId, userName) so existing
    snapshots stay readable. Python code uses snake_case attributes.

    NOTE: `id` is the creation time in epoch milliseconds. It doubles
    as the unique key for delete.
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    id: int = Field(
        ...,
        description="Creation timestamp in epoch milliseconds (unique key)"
    )
    user_id: int = Field(
        ...,
        alias="userId",
        description="Id of the user this bill belongs to"
    )
    user_name: str = Field(
        ...,
        alias="userName",
        description="User name copied at creation time"
    )
    amount: float = Field(
        ...,
        description="Bill amount"
    )
    date: str = Field(
        ...,
        description="Creation time as an ISO-8601 string"
    )

    @field_validator("amount")
    @classmethod
    def validate_finite_amount(cls, v: float) -> float:
        """NaN and infinities cannot be written to the JSON snapshot."""
        if not math.isfinite(v):
            raise ValueError(f"Amount must be a finite number, got {v}")
        return v

    @field_validator("date")
    @classmethod
    def validate_iso_date(cls, v: str) -> str:
        """Keep the original string but make sure it parses."""
        try:
            datetime.fromisoformat(v)
        except ValueError:
            raise ValueError(f"Date is not an ISO-8601 timestamp: {v!r}")
        return v

    @classmethod
    def create(cls, user: User, amount: float, moment: datetime) -> "Bill":
        """Build a new bill for `user`, stamped with `moment`."""
        return cls(
            id=to_epoch_millis(moment),
            user_id=user.id,
            user_name=user.name,
            amount=amount,
            date=to_iso_timestamp(moment),
        )

    @property
    def created_at(self) -> datetime:
        """The `date` field as an aware datetime."""
        moment = datetime.fromisoformat(self.date)
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return moment

    def to_record(self) -> dict[str, Any]:
        """Convert to the dict written into the persisted snapshot."""
        return self.model_dump(by_alias=True)
