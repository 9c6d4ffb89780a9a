"""Insert and list ledger entries for one owner and category."""
from __future__ import annotations

import logging
import math

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from finance_mcp.core.errors import CategoryOwnershipError, StoreError, ValidationError
from finance_mcp.domain.categories.services import get_owned_category

from .models import Transaction, TransactionType
from .schemas import DEFAULT_LIST_LIMIT, MAX_LIST_LIMIT, TransactionOut, is_utc_timestamp, utc_now_iso

logger = logging.getLogger(__name__)


def _validate_amount(amount: float) -> float:
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise ValidationError("amount must be a number")
    if not math.isfinite(amount):
        raise ValidationError("amount must be a finite number")
    if amount < 0:
        raise ValidationError("amount must be greater than or equal to 0")
    return float(amount)


def _validate_type(transaction_type: TransactionType | str) -> TransactionType:
    try:
        return TransactionType(transaction_type)
    except ValueError:
        raise ValidationError("type must be one of: debit, credit") from None


def _resolve_date(date: str | None) -> str:
    if date is None:
        return utc_now_iso()
    if not isinstance(date, str) or not is_utc_timestamp(date):
        raise ValidationError(f"date must be an ISO-8601 UTC date-time ending in Z, got {date!r}")
    return date


async def add_transaction(
    db: AsyncSession,
    *,
    owner_id: str,
    category_id: int,
    amount: float,
    transaction_type: TransactionType | str,
    date: str | None = None,
) -> int:
    """Book a transaction and return its id.

    The category must belong to ``owner_id``; otherwise
    :class:`CategoryOwnershipError` is raised and nothing is written.
    """
    value = _validate_amount(amount)
    kind = _validate_type(transaction_type)
    when = _resolve_date(date)

    category = await get_owned_category(db, owner_id, category_id)
    if category is None:
        raise CategoryOwnershipError()

    transaction = Transaction(
        ownerid=owner_id,
        category_id=category.id,
        date=when,
        type=kind.value,
        amount=value,
    )
    db.add(transaction)
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise StoreError(str(exc.orig)) from exc

    await db.refresh(transaction)
    logger.info(
        "Recorded %s of %.2f on category %s for owner %s", kind.value, value, category.id, owner_id
    )
    return transaction.id


async def list_transactions(
    db: AsyncSession,
    *,
    owner_id: str,
    category_id: int,
    limit: int = DEFAULT_LIST_LIMIT,
    max_limit: int = MAX_LIST_LIMIT,
) -> list[TransactionOut]:
    """Return newest-first entries; same-instant entries come latest-inserted first.

    Dates are compared as instants via SQLite's ``julianday`` so that
    differing fractional precision still sorts chronologically.
    """
    effective_limit = max(0, min(limit, max_limit))
    result = await db.execute(
        select(Transaction)
        .where(Transaction.ownerid == owner_id, Transaction.category_id == category_id)
        .order_by(
            func.julianday(Transaction.date).desc(),
            Transaction.id.desc(),
        )
        .limit(effective_limit)
    )
    return [TransactionOut.model_validate(transaction) for transaction in result.scalars()]
