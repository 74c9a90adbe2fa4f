from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Sequence

from novabites_client_sdk import ApiSession, DailyExpense, ExpenseCategory, Order

from novabites_pos.services.errors import ServiceError, normalize_error
from novabites_pos.shared.currency import to_decimal
from novabites_pos.shared.date_utils import local_to_utc_date

logger = logging.getLogger(__name__)

UNKNOWN_PRODUCT_ID = "unknown"
UNKNOWN_PRODUCT_NAME = "Producto desconocido"

CATEGORY_LABELS = {
    ExpenseCategory.RENT.value: "Arriendo",
    ExpenseCategory.UTILITIES.value: "Servicios Públicos",
    ExpenseCategory.SERVICES.value: "Servicios",
    ExpenseCategory.MAINTENANCE.value: "Mantenimiento",
    ExpenseCategory.SUPPLIES.value: "Suministros",
    ExpenseCategory.OTHER.value: "Otro",
}


def category_label(category: ExpenseCategory | str) -> str:
    value = str(getattr(category, "value", category))
    return CATEGORY_LABELS.get(value, value)


@dataclass(frozen=True)
class ExpenseServiceError(ServiceError):
    pass


@dataclass
class PendingExpense:
    """An expense typed into the report but not yet sent; amounts stay as raw text."""

    temp_id: str
    category: str = ExpenseCategory.OTHER.value
    description: str = ""
    amount: str = ""

    @property
    def parsed_amount(self) -> Decimal:
        return to_decimal(self.amount)

    def is_complete(self) -> bool:
        return bool(self.description.strip()) and self.parsed_amount > 0


@dataclass(frozen=True)
class ProductSummary:
    product_id: str
    product_name: str
    quantity_sold: int
    total_revenue: Decimal


def summarize_products(orders: Iterable[Order]) -> list[ProductSummary]:
    grouped: dict[str, dict] = {}
    for order in orders:
        for detail in order.details:
            product_id = detail.product_id or UNKNOWN_PRODUCT_ID
            entry = grouped.setdefault(
                product_id,
                {
                    "name": (detail.product.name if detail.product else None) or UNKNOWN_PRODUCT_NAME,
                    "quantity": 0,
                    "revenue": Decimal("0"),
                },
            )
            entry["quantity"] += detail.quantity
            entry["revenue"] += detail.price
    return [
        ProductSummary(product_id=key, product_name=value["name"], quantity_sold=value["quantity"], total_revenue=value["revenue"])
        for key, value in grouped.items()
    ]


def total_revenue(orders: Iterable[Order]) -> Decimal:
    return sum((order.total_price for order in orders), Decimal("0"))


def pending_total(pending: Iterable[PendingExpense]) -> Decimal:
    return sum((expense.parsed_amount for expense in pending), Decimal("0"))


def total_expenses(saved: Iterable[DailyExpense], pending: Iterable[PendingExpense]) -> Decimal:
    return sum((expense.amount for expense in saved), Decimal("0")) + pending_total(pending)


def profit_label(net_profit: Decimal) -> str:
    return "Positivo" if net_profit >= 0 else "Negativo"


@dataclass
class DayData:
    orders: list[Order] = field(default_factory=list)
    expenses: list[DailyExpense] = field(default_factory=list)
    closings_count: int = 0


class ExpenseService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def load_day(self, date_string: str) -> DayData:
        store_id = self.session.store_id
        if not store_id:
            return DayData()
        api_date = local_to_utc_date(date_string, self.session.config.tzinfo)
        try:
            orders = self.session.orders_client().list_orders(store_id=store_id, date=api_date)
            expenses = self.session.daily_expenses_client().list_expenses(store_id=store_id, date=api_date)
            count = self.session.cash_closing_client().count_for_day(store_id, api_date)
        except Exception as exc:
            raise normalize_error(exc, ExpenseServiceError) from exc
        logger.info(
            "daily_report_loaded",
            extra={"store_id": store_id, "report_date": date_string, "order_count": len(orders)},
        )
        return DayData(orders=orders, expenses=expenses, closings_count=count)

    def delete_expense(self, expense_id: str) -> None:
        try:
            self.session.daily_expenses_client().delete_expense(expense_id)
        except Exception as exc:
            logger.exception("expense_delete_failure", extra={"expense_id": expense_id})
            raise normalize_error(exc, ExpenseServiceError) from exc
        logger.info("expense_deleted", extra={"expense_id": expense_id})


def remove_expense(expenses: Sequence[DailyExpense], expense_id: str) -> list[DailyExpense]:
    return [expense for expense in expenses if expense.id != expense_id]
