"""Pydantic schemas validating request bodies and query strings."""

from datetime import date as date_type
from decimal import Decimal
from typing import Annotated, Literal, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PositiveInt, model_validator

DEFAULT_ICON = "💰"


def reject_bool(value):
    if isinstance(value, bool):
        raise ValueError("must be a number")
    return value


# fits the NUMERIC(10, 2) amount columns
Amount = Annotated[Decimal, BeforeValidator(reject_bool), Field(gt=0, max_digits=10, decimal_places=2)]


class CategoryIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=100)
    icon: Optional[str] = None
    is_default: Optional[bool] = None

    def as_row(self):
        return (self.name, self.icon or DEFAULT_ICON, bool(self.is_default))


class TransactionIn(BaseModel):
    type: Literal["income", "expense"]
    amount: Amount
    category_id: Optional[int] = None
    date: Optional[date_type] = None
    description: Optional[str] = Field(default=None, max_length=1000)

    @model_validator(mode="after")
    def expense_needs_category(self):
        if self.type == "expense" and self.category_id is None:
            raise ValueError("category_id is required for expense transactions")
        return self


class TransactionQuery(BaseModel):
    type: Optional[Literal["income", "expense"]] = None
    category_id: Optional[int] = None
    limit: Optional[PositiveInt] = None


class BudgetIn(BaseModel):
    category_id: int
    amount: Amount
    month: int = Field(ge=1, le=12)
    year: int = Field(ge=1900, le=9999)


class PeriodQuery(BaseModel):
    month: Optional[int] = Field(default=None, ge=1, le=12)
    year: Optional[int] = Field(default=None, ge=1900, le=9999)


__all__ = [
    "DEFAULT_ICON",
    "CategoryIn",
    "TransactionIn",
    "TransactionQuery",
    "BudgetIn",
    "PeriodQuery",
]
