import enum

from sqlalchemy import CheckConstraint, Column, Index, Integer, String, UniqueConstraint

from finance_mcp.core.database import Base


class CategoryType(str, enum.Enum):
    """Kinds of bucket a transaction can be booked against."""

    INVESTMENT = "investment"
    USER = "user"


class Category(Base):
    """A person (``user``) or fund (``investment``) owned by one owner id."""

    __tablename__ = "categories"
    __table_args__ = (
        UniqueConstraint("ownerid", "name", "type", name="uq_categories_owner_name_type"),
        CheckConstraint("type IN ('investment','user')", name="ck_categories_type"),
        Index("idx_categories_ownerid", "ownerid"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    ownerid = Column(String, nullable=False)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)  # investment or user
