import enum

from sqlalchemy import (
    CheckConstraint,
    Column,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
)

from finance_mcp.core.database import Base


class TransactionType(str, enum.Enum):
    """Direction of money relative to the category balance."""

    DEBIT = "debit"
    CREDIT = "credit"


class Transaction(Base):
    """A single credit or debit booked against a category."""

    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("type IN ('debit','credit')", name="ck_transactions_type"),
        CheckConstraint("amount >= 0", name="ck_transactions_amount_non_negative"),
        Index("idx_transactions_ownerid", "ownerid"),
        Index("idx_transactions_category", "category_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    ownerid = Column(String, nullable=False)
    category_id = Column(
        Integer,
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
    )
    # ISO-8601 UTC text ending in Z, stored exactly as supplied
    date = Column(String, nullable=False)
    type = Column(String, nullable=False)  # debit or credit
    amount = Column(Float, nullable=False)
