"""Pydantic schemas and shared constants for ledger entries."""
from __future__ import annotations

import re
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict

from .models import TransactionType

DEFAULT_LIST_LIMIT = 100
MAX_LIST_LIMIT = 500

# Full UTC date-time with a literal Z, e.g. 2024-03-01T10:00:00.000Z
_UTC_TIMESTAMP = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2}(\.\d+)?)?Z")


def utc_now_iso() -> str:
    """Current UTC time as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def is_utc_timestamp(value: str) -> bool:
    """Return True for a full ISO-8601 date-time in UTC with a ``Z`` suffix.

    Date-only values and numeric offsets are rejected so every stored date
    sits on the same clock.
    """
    if not _UTC_TIMESTAMP.fullmatch(value):
        return False
    # Calendar check only; fromisoformat on 3.10 rejects "Z" and long fractions.
    try:
        datetime.fromisoformat(value[:-1].partition(".")[0])
    except ValueError:
        return False
    return True


class TransactionOut(BaseModel):
    """Schema for returning a ledger entry."""

    amount: float
    date: str
    type: TransactionType

    model_config = ConfigDict(from_attributes=True)
