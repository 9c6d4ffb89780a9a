"""Owner-scoped categories: people money is lent to or borrowed from, and investments."""

from .models import Category, CategoryType
from .services import add_category, ensure_category, get_owned_category, list_categories

__all__ = [
    "Category",
    "CategoryType",
    "add_category",
    "ensure_category",
    "get_owned_category",
    "list_categories",
]
