"""Pydantic argument models for the MCP tools."""
from __future__ import annotations

from typing import Annotated, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from finance_mcp.domain.transactions.schemas import DEFAULT_LIST_LIMIT, MAX_LIST_LIMIT, is_utc_timestamp

# Older clients send ``ownerid``; both spellings land on ``owner_id``.
OwnerId = Annotated[
    str,
    Field(
        min_length=1,
        validation_alias=AliasChoices("owner_id", "ownerid"),
        description="Caller-supplied identifier scoping every record",
    ),
]

CategoryId = Annotated[
    int,
    Field(strict=True, ge=1, description="User ID or investment ID"),
]


class ToolArguments(BaseModel):
    """Shared configuration for tool arguments."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class OwnerArguments(ToolArguments):
    owner_id: OwnerId


class AddCategoryArguments(ToolArguments):
    owner_id: OwnerId
    name: str = Field(min_length=1, description="Display name of the user or investment")


class AddTransactionArguments(ToolArguments):
    owner_id: OwnerId
    category_id: CategoryId
    amount: float = Field(strict=True, ge=0, allow_inf_nan=False)
    type: Literal["debit", "credit"]
    date: Optional[str] = Field(
        default=None,
        description="ISO-8601 UTC date-time ending in Z; defaults to now",
        json_schema_extra={"format": "date-time"},
    )

    @field_validator("date")
    @classmethod
    def validate_date(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not is_utc_timestamp(value):
            raise ValueError("must be an ISO-8601 UTC date-time ending in Z")
        return value


class ListTransactionsArguments(ToolArguments):
    owner_id: OwnerId
    category_id: CategoryId
    limit: int = Field(default=DEFAULT_LIST_LIMIT, strict=True, ge=1, le=MAX_LIST_LIMIT)


def describe_validation_error(exc: PydanticValidationError) -> str:
    """Flatten pydantic errors into ``field: message; ...``."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "arguments"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


__all__ = [
    "AddCategoryArguments",
    "AddTransactionArguments",
    "ListTransactionsArguments",
    "OwnerArguments",
    "ToolArguments",
    "describe_validation_error",
]
