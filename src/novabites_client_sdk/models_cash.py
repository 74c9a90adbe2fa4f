from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import field_serializer

from .models import ApiModel, BaseEntityWithNumId


class ExpenseCategory(str, Enum):
    RENT = "RENT"
    UTILITIES = "UTILITIES"
    SERVICES = "SERVICES"
    MAINTENANCE = "MAINTENANCE"
    SUPPLIES = "SUPPLIES"
    OTHER = "OTHER"


class DailyExpense(BaseEntityWithNumId):
    store_id: str | None = None
    user_id: str | None = None
    category: ExpenseCategory | str = ExpenseCategory.OTHER
    description: str = ""
    amount: Decimal = Decimal("0")
    expense_date: datetime | None = None


class DailyExpenseCreate(ApiModel):
    store_id: str | None = None
    user_id: str | None = None
    category: ExpenseCategory | str
    description: str
    amount: str
    expense_date: datetime


class ClosingOrderRef(ApiModel):
    id: str
    created_at: datetime | None = None


class ClosingOrderLink(ApiModel):
    order: ClosingOrderRef


class CashClosing(BaseEntityWithNumId):
    store_id: str | None = None
    user_id: str | None = None
    closing_date: str | None = None
    description: str | None = None
    total_orders: int = 0
    total_revenue: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    net_profit: Decimal = Decimal("0")
    store_request_id: str | None = None
    orders: list[ClosingOrderLink] = []


class ClosingCount(ApiModel):
    count: int = 0


class CashClosingCreate(ApiModel):
    store_id: str | None = None
    user_id: str | None = None
    closing_date: str
    description: str
    total_orders: int
    total_revenue: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    store_request_id: str
    order_ids: list[str]
    expense_ids: list[str]

    @field_serializer("total_revenue", "total_expenses", "net_profit")
    def _money_as_number(self, value: Decimal) -> float:
        return float(value)
