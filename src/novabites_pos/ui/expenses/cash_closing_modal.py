from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Sequence

from novabites_client_sdk import Order

from novabites_pos.services.cash_closing_service import (
    CashClosingService,
    CashClosingServiceError,
    ClosingContext,
    ClosingResult,
    closing_totals,
    validate_closing,
)
from novabites_pos.services.expense_service import PendingExpense, profit_label
from novabites_pos.shared.currency import format_cop
from novabites_pos.shared.date_utils import format_date_local, format_time_local
from novabites_pos.ui.inventory.modal_table import ModalTable
from novabites_pos.ui.shared.notification_center import NotificationCenter

SUCCESS_DURATION_MS = 5000


@dataclass
class CashClosingModal:
    service: CashClosingService
    notifications: NotificationCenter
    date_string: str
    orders: Sequence[Order]
    pending: Sequence[PendingExpense]
    closings_count: int = 0
    description: str = ""
    context: ClosingContext | None = None
    replenishment: ModalTable = field(default_factory=ModalTable)
    is_loading: bool = False
    is_submitting: bool = False

    def load(self) -> bool:
        self.is_loading = True
        try:
            self.context = self.service.prepare(self.orders, self.date_string, self.closings_count)
        except CashClosingServiceError as exc:
            self.notifications.failure("Error al cargar los datos", exc, action="cash_closing.prepare")
            return False
        finally:
            self.is_loading = False
        self.replenishment = ModalTable(products=self.context.products, rows=self.context.rows)
        return True

    def submit(self, now: datetime | None = None) -> ClosingResult | None:
        if self.context is None or self.is_submitting:
            return None
        problem = validate_closing(self.description, self.replenishment.rows, self.pending)
        if problem is not None:
            self.notifications.error(*problem)
            return None
        self.context.rows = self.replenishment.rows
        self.is_submitting = True
        try:
            result = self.service.submit(
                context=self.context,
                orders=self.orders,
                pending=self.pending,
                description=self.description,
                date_string=self.date_string,
                now=now,
            )
        except CashClosingServiceError:
            self.notifications.error("Error al procesar cierre", "No se pudo completar el cierre de caja")
            return None
        finally:
            self.is_submitting = False
        self.notifications.success(
            "Cierre de caja realizado exitosamente",
            result.summary(),
            duration_ms=SUCCESS_DURATION_MS,
        )
        return result

    def render(self) -> dict[str, Any]:
        totals = closing_totals(self.orders, self.pending)
        tz = self.service.session.config.tzinfo
        context = self.context
        return {
            "title": f"Cierre de Caja - {format_date_local(self.date_string)}",
            "loading": self.is_loading,
            "total_orders": len(self.orders),
            "total_revenue": format_cop(totals.total_revenue),
            "total_expenses": format_cop(totals.total_expenses),
            "net_profit": format_cop(totals.net_profit),
            "profit_label": profit_label(totals.net_profit),
            "last_closing": (
                format_time_local(context.last_closing_time, tz)
                if context and context.last_closing_time
                else None
            ),
            "products_sold": [
                {"name": item.product_name, "quantity": item.quantity_sold}
                for item in (context.products_sold if context else [])
            ],
            "replenishment": self.replenishment.render(),
            "description": self.description,
            "submit_enabled": context is not None and not self.is_submitting,
        }
