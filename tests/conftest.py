import pytest

from finance_mcp.core.database import Database


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'finance.db'}"


@pytest.fixture
async def database(database_url):
    db = Database(database_url)
    await db.connect()
    yield db
    await db.dispose()


@pytest.fixture
async def session(database):
    async with database.session() as db_session:
        yield db_session
