from sqlalchemy import create_engine, inspect, text

from finance_mcp.core.database import Database
from finance_mcp.core.migrations import migrate_legacy_owner_columns
from finance_mcp.domain.categories import CategoryType, list_categories
from finance_mcp.domain.transactions import list_transactions

LEGACY_SCHEMA = (
    """
    CREATE TABLE categories (
      id INTEGER PRIMARY KEY AUTOINCREMENT,
      userid TEXT NOT NULL,
      name TEXT NOT NULL,
      type TEXT NOT NULL CHECK (type IN ('investment','user')),
      UNIQUE(userid, name, type)
    )
    """,
    """
    CREATE TABLE transactions (
      id INTEGER PRIMARY KEY AUTOINCREMENT,
      userid TEXT NOT NULL,
      category_id INTEGER NOT NULL,
      date TEXT NOT NULL,
      type TEXT NOT NULL CHECK (type IN ('debit','credit')),
      amount REAL NOT NULL CHECK (amount >= 0),
      FOREIGN KEY (category_id) REFERENCES categories(id) ON DELETE CASCADE
    )
    """,
    "CREATE INDEX idx_categories_userid ON categories(userid)",
    "INSERT INTO categories (userid, name, type) VALUES ('o1', 'Alice', 'user')",
    "INSERT INTO transactions (userid, category_id, date, type, amount) "
    "VALUES ('o1', 1, '2024-01-01T00:00:00.000Z', 'credit', 42)",
)


def _create_legacy_file(path) -> str:
    engine = create_engine(f"sqlite:///{path}")
    with engine.begin() as conn:
        for statement in LEGACY_SCHEMA:
            conn.execute(text(statement))
    engine.dispose()
    return str(path)


def _inspect_file(path):
    engine = create_engine(f"sqlite:///{path}")
    with engine.connect() as conn:
        inspector = inspect(conn)
        columns = {
            table: {column["name"] for column in inspector.get_columns(table)}
            for table in ("categories", "transactions")
        }
        indexes = {
            table: {index["name"] for index in inspector.get_indexes(table)}
            for table in ("categories", "transactions")
        }
    engine.dispose()
    return columns, indexes


async def test_connect_renames_legacy_owner_columns(tmp_path):
    path = _create_legacy_file(tmp_path / "legacy.db")
    database = Database(f"sqlite+aiosqlite:///{path}")
    await database.connect()
    try:
        async with database.session() as session:
            users = await list_categories(session, "o1", CategoryType.USER)
            rows = await list_transactions(session, owner_id="o1", category_id=users[0].id)
    finally:
        await database.dispose()

    columns, indexes = _inspect_file(path)
    assert "ownerid" in columns["categories"] and "userid" not in columns["categories"]
    assert "ownerid" in columns["transactions"] and "userid" not in columns["transactions"]
    assert "idx_categories_ownerid" in indexes["categories"]
    assert "idx_transactions_ownerid" in indexes["transactions"]
    assert [user.name for user in users] == ["Alice"]
    assert [row.amount for row in rows] == [42]


async def test_connect_twice_is_a_no_op(tmp_path):
    path = _create_legacy_file(tmp_path / "legacy.db")
    for _ in range(2):
        database = Database(f"sqlite+aiosqlite:///{path}")
        await database.connect()
        await database.dispose()

    columns, _ = _inspect_file(path)
    assert "ownerid" in columns["categories"]


def test_migration_skips_current_and_missing_tables(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'fresh.db'}")
    with engine.begin() as conn:
        assert migrate_legacy_owner_columns(conn) == []
        conn.execute(text("CREATE TABLE categories (id INTEGER PRIMARY KEY, ownerid TEXT)"))
        assert migrate_legacy_owner_columns(conn) == []
    engine.dispose()


async def test_fresh_database_uses_wal(database):
    async with database.session() as session:
        mode = (await session.execute(text("PRAGMA journal_mode"))).scalar_one()
        foreign_keys = (await session.execute(text("PRAGMA foreign_keys"))).scalar_one()

    assert mode.lower() == "wal"
    assert foreign_keys == 1
