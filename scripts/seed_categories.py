"""Seed users and investments for an owner (existing names are kept)."""

import argparse
import asyncio
from pathlib import Path
import sys
from typing import List

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

from finance_mcp.core.config import settings  # noqa: E402
from finance_mcp.core.database import Database  # noqa: E402
from finance_mcp.domain.categories import CategoryType, ensure_category  # noqa: E402

DEFAULT_INVESTMENTS: List[str] = [
    "Emergency Fund",
    "Index Fund",
    "Fixed Deposit",
]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed categories for an owner")
    parser.add_argument("--owner-id", required=True, help="Target owner id")
    parser.add_argument(
        "--user",
        action="append",
        default=[],
        help="Name of a person to track (repeatable)",
    )
    parser.add_argument(
        "--investment",
        action="append",
        default=None,
        help="Name of an investment (repeatable); defaults to a starter set",
    )
    return parser.parse_args()


async def seed_categories(owner_id: str, users: List[str], investments: List[str]) -> List[tuple[str, str, int]]:
    database = Database(settings.DATABASE_URL, busy_timeout_ms=settings.SQLITE_BUSY_TIMEOUT_MS)
    await database.connect()
    seeded: List[tuple[str, str, int]] = []
    try:
        async with database.session() as session:
            for name in users:
                category_id = await ensure_category(session, owner_id, name, CategoryType.USER)
                seeded.append(("user", name, category_id))
            for name in investments:
                category_id = await ensure_category(session, owner_id, name, CategoryType.INVESTMENT)
                seeded.append(("investment", name, category_id))
    finally:
        await database.dispose()
    return seeded


if __name__ == "__main__":
    args = parse_args()
    investments = args.investment if args.investment is not None else DEFAULT_INVESTMENTS
    result = asyncio.run(seed_categories(args.owner_id, args.user, investments))
    for kind, name, category_id in result:
        print(f"{category_id}\t{kind}\t{name}")
