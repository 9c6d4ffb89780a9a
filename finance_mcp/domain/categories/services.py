"""Lookups and inserts for owner-scoped categories."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from finance_mcp.core.errors import StoreError

from .models import Category, CategoryType

logger = logging.getLogger(__name__)


async def ensure_category(
    db: AsyncSession,
    owner_id: str,
    name: str,
    category_type: CategoryType,
) -> int:
    """Return the id of the ``(owner_id, name, type)`` category, creating it if needed.

    The function is idempotent: calling it again with the same triple returns
    the stored id instead of inserting a second row.
    """
    category_id = await _find_category_id(db, owner_id, name, category_type)
    if category_id is not None:
        return category_id

    category = Category(ownerid=owner_id, name=name, type=CategoryType(category_type).value)
    db.add(category)
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        # A concurrent writer inserted the same triple first; use its row.
        category_id = await _find_category_id(db, owner_id, name, category_type)
        if category_id is None:
            raise StoreError(str(exc.orig)) from exc
        return category_id

    await db.refresh(category)
    logger.info("Created %s category %s for owner %s", category.type, category.id, owner_id)
    return category.id


async def add_category(
    db: AsyncSession,
    owner_id: str,
    name: str,
    category_type: CategoryType,
) -> int:
    """Insert a new category and return its id; duplicates are a store error."""
    category = Category(ownerid=owner_id, name=name, type=CategoryType(category_type).value)
    db.add(category)
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        logger.warning(
            "IntegrityError while adding %s category for owner %s", category_type, owner_id, exc_info=True
        )
        raise StoreError(str(exc.orig)) from exc

    await db.refresh(category)
    return category.id


async def list_categories(
    db: AsyncSession,
    owner_id: str,
    category_type: CategoryType,
) -> list[Category]:
    """Return the owner's categories of one type ordered by name."""
    result = await db.execute(
        select(Category)
        .where(Category.ownerid == owner_id, Category.type == CategoryType(category_type).value)
        .order_by(Category.name, Category.id)
    )
    return list(result.scalars().all())


async def get_owned_category(
    db: AsyncSession,
    owner_id: str,
    category_id: int,
) -> Category | None:
    result = await db.execute(
        select(Category).where(Category.id == category_id, Category.ownerid == owner_id)
    )
    return result.scalar_one_or_none()


async def _find_category_id(
    db: AsyncSession,
    owner_id: str,
    name: str,
    category_type: CategoryType,
) -> int | None:
    result = await db.execute(
        select(Category.id).where(
            Category.ownerid == owner_id,
            Category.name == name,
            Category.type == CategoryType(category_type).value,
        )
    )
    return result.scalar_one_or_none()
