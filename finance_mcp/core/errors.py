"""Exceptions raised by the ledger and turned into error results at the tool boundary."""
from __future__ import annotations


class FinanceError(Exception):
    """Base exception for bookkeeping operations."""

    kind = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(FinanceError):
    """Arguments were missing, malformed or out of range."""

    kind = "validation"


class CategoryOwnershipError(ValidationError):
    """The category does not exist for the given owner."""

    def __init__(self, message: str = "Invalid category_id for owner_id") -> None:
        super().__init__(message)


class UnknownToolError(FinanceError):
    """No tool is registered under the requested name."""

    kind = "unknown_tool"

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class StoreError(FinanceError):
    """The database rejected an operation (constraint violation, I/O failure)."""

    kind = "store"


__all__ = [
    "CategoryOwnershipError",
    "FinanceError",
    "StoreError",
    "UnknownToolError",
    "ValidationError",
]
