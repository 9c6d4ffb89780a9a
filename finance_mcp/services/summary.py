"""Per-owner balance summary across people and investments."""
from __future__ import annotations

from typing import Any

from sqlalchemy import and_, case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from finance_mcp.domain.categories.models import Category, CategoryType
from finance_mcp.domain.transactions.models import Transaction, TransactionType


async def _biggest_counterparty(
    db: AsyncSession,
    owner_id: str,
    transaction_type: TransactionType,
) -> dict[str, Any] | None:
    """Return the user category with the largest total of one transaction type.

    Categories without matching transactions total 0 and still qualify; ties
    go to the alphabetically first name.
    """
    total = func.coalesce(func.sum(Transaction.amount), 0).label("total")
    stmt = (
        select(Category.id.label("category_id"), Category.name, total)
        .outerjoin(
            Transaction,
            and_(
                Transaction.category_id == Category.id,
                Transaction.ownerid == Category.ownerid,
                Transaction.type == transaction_type.value,
            ),
        )
        .where(Category.ownerid == owner_id, Category.type == CategoryType.USER.value)
        .group_by(Category.id, Category.name)
        .order_by(total.desc(), Category.name.asc())
        .limit(1)
    )
    row = (await db.execute(stmt)).first()
    if row is None:
        return None
    return {"category_id": row.category_id, "name": row.name, "total": float(row.total or 0)}


async def _net_balance(db: AsyncSession, owner_id: str, category_type: CategoryType) -> float:
    """Credits minus debits over every category of one type."""
    credits = func.coalesce(
        func.sum(case((Transaction.type == TransactionType.CREDIT.value, Transaction.amount), else_=0)),
        0,
    ).label("credits")
    debits = func.coalesce(
        func.sum(case((Transaction.type == TransactionType.DEBIT.value, Transaction.amount), else_=0)),
        0,
    ).label("debits")
    stmt = (
        select(credits, debits)
        .select_from(Transaction)
        .join(
            Category,
            and_(Category.id == Transaction.category_id, Category.ownerid == Transaction.ownerid),
        )
        .where(Transaction.ownerid == owner_id, Category.type == category_type.value)
    )
    row = (await db.execute(stmt)).one()
    return float(row.credits or 0) - float(row.debits or 0)


async def build_owner_summary(db: AsyncSession, owner_id: str) -> dict[str, Any]:
    """Return biggest lender/borrower and net balances for ``owner_id``."""
    return {
        "biggest_lender": await _biggest_counterparty(db, owner_id, TransactionType.CREDIT),
        "biggest_borrower": await _biggest_counterparty(db, owner_id, TransactionType.DEBIT),
        "total_investment_left": await _net_balance(db, owner_id, CategoryType.INVESTMENT),
        "total_lender_minus_borrower": await _net_balance(db, owner_id, CategoryType.USER),
    }


__all__ = ["build_owner_summary"]
