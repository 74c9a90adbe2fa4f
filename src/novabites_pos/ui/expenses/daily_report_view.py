from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any
from zoneinfo import ZoneInfo

from novabites_client_sdk import Order

from novabites_pos.services.cash_closing_service import CashClosingService, ClosingResult
from novabites_pos.services.expense_service import (
    ExpenseService,
    ExpenseServiceError,
    profit_label,
    summarize_products,
    total_expenses,
    total_revenue,
)
from novabites_pos.shared.currency import format_cop
from novabites_pos.shared.date_utils import format_date_local, is_today, max_date, today_local
from novabites_pos.ui.expenses.cash_closing_modal import CashClosingModal
from novabites_pos.ui.expenses.expenses_table import ExpensesTable
from novabites_pos.ui.shared.notification_center import NotificationCenter
from novabites_pos.ui.shared.view_state import resolve_state


@dataclass
class DailyReportView:
    """Sales of one day, its expenses, and the entry point to the cash closing."""

    service: ExpenseService
    closing_service: CashClosingService
    notifications: NotificationCenter
    selected_date: str = ""
    orders: list[Order] = field(default_factory=list)
    closings_count: int = 0
    table: ExpensesTable = field(init=False)
    closing: CashClosingModal | None = None
    is_loading: bool = False
    error_message: str | None = None
    now: datetime | None = None

    def __post_init__(self) -> None:
        if not self.selected_date:
            self.selected_date = today_local(self._tz, now=self.now)
        self.table = ExpensesTable(service=self.service, notifications=self.notifications)
        self.table.is_today = self.is_today

    @property
    def _tz(self) -> ZoneInfo:
        return self.service.session.config.tzinfo

    @property
    def is_today(self) -> bool:
        return is_today(self.selected_date, self._tz, now=self.now)

    def load(self) -> bool:
        self.is_loading = True
        try:
            day = self.service.load_day(self.selected_date)
        except ExpenseServiceError as exc:
            self.error_message = exc.message
            return False
        finally:
            self.is_loading = False
        self.error_message = None
        self.orders = day.orders
        self.closings_count = day.closings_count
        self.table.expenses = day.expenses
        return True

    def change_date(self, date_string: str) -> bool:
        self.selected_date = date_string
        self.table.pending = []
        self.table.is_today = self.is_today
        return self.load()

    @property
    def revenue(self) -> Decimal:
        return total_revenue(self.orders)

    @property
    def expenses_total(self) -> Decimal:
        return total_expenses(self.table.expenses, self.table.pending)

    @property
    def net_profit(self) -> Decimal:
        return self.revenue - self.expenses_total

    def closing_block_reason(self) -> str | None:
        if not self.is_today:
            return "Solo puedes hacer cierre de caja del día actual"
        if not self.orders:
            return "No hay órdenes para cerrar"
        return None

    def open_closing(self) -> CashClosingModal | None:
        if self.closing_block_reason() is not None:
            return None
        self.closing = CashClosingModal(
            service=self.closing_service,
            notifications=self.notifications,
            date_string=self.selected_date,
            orders=list(self.orders),
            pending=list(self.table.pending),
            closings_count=self.closings_count,
        )
        self.closing.load()
        return self.closing

    def submit_closing(self, now: datetime | None = None) -> ClosingResult | None:
        if self.closing is None:
            return None
        result = self.closing.submit(now=now)
        if result is not None:
            self.apply_closing(result)
        return result

    def apply_closing(self, result: ClosingResult) -> None:
        self.table.expenses = [*self.table.expenses, *result.saved_expenses]
        self.table.pending = []
        self.closings_count += 1
        self.closing = None

    def render(self) -> dict[str, Any]:
        state = resolve_state(
            is_loading=self.is_loading,
            error=self.error_message,
            has_data=bool(self.orders),
            empty_message="No hay ventas registradas para este día",
        )
        block = self.closing_block_reason()
        return {
            "title": "Reporte de Ventas Diarias",
            "state": state.render(),
            "selected_date": self.selected_date,
            "date_label": format_date_local(self.selected_date),
            "max_date": max_date(self._tz, now=self.now),
            "summary": {
                "total_orders": len(self.orders),
                "revenue": format_cop(self.revenue),
                "expenses": format_cop(self.expenses_total),
                "net_profit": format_cop(self.net_profit),
                "profit_label": profit_label(self.net_profit),
                "closings_count": self.closings_count,
            },
            "products": [
                {
                    "name": item.product_name,
                    "quantity": item.quantity_sold,
                    "revenue": format_cop(item.total_revenue),
                }
                for item in summarize_products(self.orders)
            ],
            "expenses": self.table.render(),
            "closing_enabled": block is None,
            "closing_hint": block or "",
            "closing": self.closing.render() if self.closing else None,
        }
