"""Credit and debit entries booked against owner categories."""

from .models import Transaction, TransactionType
from .schemas import DEFAULT_LIST_LIMIT, MAX_LIST_LIMIT, TransactionOut
from .services import add_transaction, list_transactions

__all__ = [
    "DEFAULT_LIST_LIMIT",
    "MAX_LIST_LIMIT",
    "Transaction",
    "TransactionOut",
    "TransactionType",
    "add_transaction",
    "list_transactions",
]
