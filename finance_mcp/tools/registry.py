"""Tool definitions and the single dispatch boundary shared by every transport."""
from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from finance_mcp.core.database import Database
from finance_mcp.core.errors import FinanceError, StoreError, UnknownToolError, ValidationError
from finance_mcp.domain.categories.models import CategoryType
from finance_mcp.domain.categories.services import add_category, list_categories
from finance_mcp.domain.transactions.models import TransactionType
from finance_mcp.domain.transactions.services import add_transaction, list_transactions
from finance_mcp.services.summary import build_owner_summary
from finance_mcp.tools.schemas import (
    AddCategoryArguments,
    AddTransactionArguments,
    ListTransactionsArguments,
    OwnerArguments,
    ToolArguments,
    describe_validation_error,
)

logger = logging.getLogger(__name__)

Handler = Callable[[AsyncSession, Any], Awaitable[Any]]


@dataclass(frozen=True, slots=True)
class ToolDefinition:
    name: str
    description: str
    arguments_model: type[ToolArguments]
    handler: Handler

    def input_schema(self) -> dict[str, Any]:
        return self.arguments_model.model_json_schema()

    def describe(self) -> dict[str, Any]:
        return {"name": self.name, "description": self.description, "inputSchema": self.input_schema()}


@dataclass(frozen=True, slots=True)
class ToolResult:
    """Text-serialized outcome of one tool call."""

    text: str
    is_error: bool = False

    @classmethod
    def success(cls, payload: Any) -> "ToolResult":
        return cls(text=json.dumps(payload))

    @classmethod
    def failure(cls, kind: str, message: str) -> "ToolResult":
        return cls(text=json.dumps({"error": {"type": kind, "message": message}}), is_error=True)

    def to_content(self) -> dict[str, Any]:
        return {"content": [{"type": "text", "text": self.text}], "isError": self.is_error}


async def _list_users(db: AsyncSession, args: OwnerArguments) -> list[dict[str, Any]]:
    categories = await list_categories(db, args.owner_id, CategoryType.USER)
    return [{"id": category.id, "username": category.name} for category in categories]


async def _list_investments(db: AsyncSession, args: OwnerArguments) -> list[dict[str, Any]]:
    categories = await list_categories(db, args.owner_id, CategoryType.INVESTMENT)
    return [{"id": category.id, "investment": category.name} for category in categories]


async def _add_user(db: AsyncSession, args: AddCategoryArguments) -> dict[str, Any]:
    category_id = await add_category(db, args.owner_id, args.name, CategoryType.USER)
    return {"id": category_id, "message": f"User added successfully. ID: {category_id}"}


async def _add_investment(db: AsyncSession, args: AddCategoryArguments) -> dict[str, Any]:
    category_id = await add_category(db, args.owner_id, args.name, CategoryType.INVESTMENT)
    return {"id": category_id, "message": f"Investment added successfully. ID: {category_id}"}


async def _add_transaction(db: AsyncSession, args: AddTransactionArguments) -> dict[str, Any]:
    transaction_id = await add_transaction(
        db,
        owner_id=args.owner_id,
        category_id=args.category_id,
        amount=args.amount,
        transaction_type=TransactionType(args.type),
        date=args.date,
    )
    return {"id": transaction_id}


async def _list_transactions(db: AsyncSession, args: ListTransactionsArguments) -> list[dict[str, Any]]:
    rows = await list_transactions(
        db,
        owner_id=args.owner_id,
        category_id=args.category_id,
        limit=args.limit,
    )
    return [row.model_dump(mode="json") for row in rows]


async def _summary(db: AsyncSession, args: OwnerArguments) -> dict[str, Any]:
    return await build_owner_summary(db, args.owner_id)


TOOLS: tuple[ToolDefinition, ...] = (
    ToolDefinition(
        name="list_users",
        description="Get list of all distinct users (id and username)",
        arguments_model=OwnerArguments,
        handler=_list_users,
    ),
    ToolDefinition(
        name="add_user",
        description="Add a user.",
        arguments_model=AddCategoryArguments,
        handler=_add_user,
    ),
    ToolDefinition(
        name="add_investment",
        description="Add an investment",
        arguments_model=AddCategoryArguments,
        handler=_add_investment,
    ),
    ToolDefinition(
        name="list_investments",
        description="Get list of all distinct investments (name and id)",
        arguments_model=OwnerArguments,
        handler=_list_investments,
    ),
    ToolDefinition(
        name="add_transaction",
        description="Add a transaction",
        arguments_model=AddTransactionArguments,
        handler=_add_transaction,
    ),
    ToolDefinition(
        name="list_transactions",
        description="List transactions of a user or investment, newest first",
        arguments_model=ListTransactionsArguments,
        handler=_list_transactions,
    ),
    ToolDefinition(
        name="summary",
        description="Summary: biggest lender, biggest borrower, total investment left, total lender - total borrower",
        arguments_model=OwnerArguments,
        handler=_summary,
    ),
)

_TOOLS_BY_NAME = {tool.name: tool for tool in TOOLS}


def get_tool(name: str) -> ToolDefinition:
    try:
        return _TOOLS_BY_NAME[name]
    except KeyError:
        raise UnknownToolError(name) from None


def parse_arguments(tool: ToolDefinition, arguments: Any) -> ToolArguments:
    """Validate raw call arguments against the tool's model."""
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise ValidationError("arguments must be a JSON object")
    try:
        return tool.arguments_model.model_validate(dict(arguments))
    except PydanticValidationError as exc:
        raise ValidationError(describe_validation_error(exc)) from None


async def call_tool(database: Database, name: str, arguments: Any = None) -> ToolResult:
    """Run one tool call and convert any failure into an error result.

    Each call opens its own session and performs a single read or write.
    """
    try:
        tool = get_tool(name)
        args = parse_arguments(tool, arguments)
        async with database.session() as db:
            payload = await tool.handler(db, args)
    except (ValidationError, UnknownToolError) as exc:
        logger.info("Rejected call to %s: %s", name, exc.message)
        return ToolResult.failure(exc.kind, exc.message)
    except StoreError as exc:
        logger.exception("Store rejected call to %s", name)
        return ToolResult.failure(exc.kind, exc.message)
    except FinanceError as exc:
        logger.warning("Call to %s failed: %s", name, exc.message)
        return ToolResult.failure(exc.kind, exc.message)
    except SQLAlchemyError as exc:
        logger.exception("Database error calling tool %s", name)
        return ToolResult.failure(StoreError.kind, str(getattr(exc, "orig", None) or exc))
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected error calling tool %s", name)
        return ToolResult.failure("internal", str(exc) or exc.__class__.__name__)

    return ToolResult.success(payload)


__all__ = ["TOOLS", "ToolResult", "ToolDefinition", "call_tool", "get_tool", "parse_arguments"]
