from finance_mcp.domain.categories import CategoryType, add_category
from finance_mcp.domain.transactions import add_transaction
from finance_mcp.services.summary import build_owner_summary


async def _book(session, owner_id, category_id, amount, kind):
    await add_transaction(
        session,
        owner_id=owner_id,
        category_id=category_id,
        amount=amount,
        transaction_type=kind,
    )


async def test_summary_for_owner_without_data(session):
    assert await build_owner_summary(session, "nobody") == {
        "biggest_lender": None,
        "biggest_borrower": None,
        "total_investment_left": 0,
        "total_lender_minus_borrower": 0,
    }


async def test_summary_lender_and_borrower(session):
    alice = await add_category(session, "o1", "Alice", CategoryType.USER)
    bob = await add_category(session, "o1", "Bob", CategoryType.USER)
    await _book(session, "o1", alice, 100, "credit")
    await _book(session, "o1", bob, 40, "debit")

    summary = await build_owner_summary(session, "o1")

    assert summary["biggest_lender"] == {"category_id": alice, "name": "Alice", "total": 100}
    assert summary["biggest_borrower"] == {"category_id": bob, "name": "Bob", "total": 40}
    assert summary["total_lender_minus_borrower"] == 60
    assert summary["total_investment_left"] == 0


async def test_summary_ties_resolve_alphabetically(session):
    zed = await add_category(session, "o1", "Zed", CategoryType.USER)
    amy = await add_category(session, "o1", "Amy", CategoryType.USER)
    await _book(session, "o1", zed, 50, "credit")
    await _book(session, "o1", amy, 50, "credit")

    summary = await build_owner_summary(session, "o1")

    assert summary["biggest_lender"]["name"] == "Amy"
    # No debits anywhere: every user totals 0 and the first name wins.
    assert summary["biggest_borrower"] == {"category_id": amy, "name": "Amy", "total": 0}


async def test_summary_users_without_transactions_are_eligible(session):
    carl = await add_category(session, "o1", "Carl", CategoryType.USER)

    summary = await build_owner_summary(session, "o1")

    assert summary["biggest_lender"] == {"category_id": carl, "name": "Carl", "total": 0}
    assert summary["biggest_borrower"] == {"category_id": carl, "name": "Carl", "total": 0}


async def test_summary_investment_balance(session):
    fund = await add_category(session, "o1", "Index Fund", CategoryType.INVESTMENT)
    deposit = await add_category(session, "o1", "Deposit", CategoryType.INVESTMENT)
    await _book(session, "o1", fund, 1000, "credit")
    await _book(session, "o1", fund, 250.5, "debit")
    await _book(session, "o1", deposit, 100, "credit")

    summary = await build_owner_summary(session, "o1")

    assert summary["total_investment_left"] == 849.5
    assert summary["total_lender_minus_borrower"] == 0
    assert summary["biggest_lender"] is None


async def test_summary_does_not_leak_across_owners(session):
    mine = await add_category(session, "o1", "Alice", CategoryType.USER)
    theirs = await add_category(session, "o2", "Mallory", CategoryType.USER)
    their_fund = await add_category(session, "o2", "Fund", CategoryType.INVESTMENT)
    await _book(session, "o1", mine, 10, "credit")
    await _book(session, "o2", theirs, 500, "credit")
    await _book(session, "o2", their_fund, 300, "credit")

    summary = await build_owner_summary(session, "o1")

    assert summary["biggest_lender"]["name"] == "Alice"
    assert summary["total_lender_minus_borrower"] == 10
    assert summary["total_investment_left"] == 0
