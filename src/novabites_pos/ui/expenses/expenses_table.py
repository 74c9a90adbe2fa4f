from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from novabites_client_sdk import DailyExpense, ExpenseCategory

from novabites_pos.services.expense_service import (
    CATEGORY_LABELS,
    ExpenseService,
    ExpenseServiceError,
    PendingExpense,
    category_label,
    remove_expense,
    total_expenses,
)
from novabites_pos.shared.currency import format_cop
from novabites_pos.ui.shared.notification_center import NotificationCenter

_EDITABLE_FIELDS = {"category", "description", "amount"}


def temp_id(now: datetime | None = None) -> str:
    moment = now or datetime.now(timezone.utc)
    return f"temp-{int(moment.timestamp() * 1000)}"


@dataclass
class ExpensesTable:
    """Saved and pending expenses of the selected day; edits are only allowed today."""

    service: ExpenseService
    notifications: NotificationCenter
    expenses: list[DailyExpense] = field(default_factory=list)
    pending: list[PendingExpense] = field(default_factory=list)
    is_today: bool = True

    def _not_allowed(self, message: str) -> dict[str, Any]:
        self.notifications.error("No permitido", message)
        return {"ok": False, "error": message}

    def add_row(self, now: datetime | None = None) -> dict[str, Any]:
        if not self.is_today:
            return self._not_allowed("Solo puedes agregar gastos al día actual")
        row = PendingExpense(temp_id=temp_id(now))
        self.pending.append(row)
        return {"ok": True, "temp_id": row.temp_id}

    def update_pending(self, row_id: str, field_name: str, value: str) -> None:
        if field_name not in _EDITABLE_FIELDS:
            raise KeyError(f"Unknown expense field: {field_name}")
        if field_name == "category":
            value = ExpenseCategory(value).value
        for row in self.pending:
            if row.temp_id == row_id:
                setattr(row, field_name, value)

    def remove_pending(self, row_id: str) -> None:
        self.pending = [row for row in self.pending if row.temp_id != row_id]

    def delete(self, expense_id: str) -> dict[str, Any]:
        if not self.is_today:
            return self._not_allowed("Solo puedes eliminar gastos del día actual")
        try:
            self.service.delete_expense(expense_id)
        except ExpenseServiceError as exc:
            self.notifications.error("Error al eliminar", "No se pudo eliminar el gasto")
            return {"ok": False, "error": exc.message}
        self.expenses = remove_expense(self.expenses, expense_id)
        self.notifications.success("Gasto eliminado", "El gasto se eliminó correctamente")
        return {"ok": True}

    def render(self) -> dict[str, Any]:
        return {
            "title": "Gastos Fijos y Operacionales",
            "saved": [
                {
                    "id": expense.id,
                    "category": category_label(expense.category),
                    "description": expense.description,
                    "amount": format_cop(expense.amount),
                }
                for expense in self.expenses
            ],
            "pending": [
                {
                    "temp_id": row.temp_id,
                    "category": row.category,
                    "description": row.description,
                    "amount": row.amount,
                }
                for row in self.pending
            ],
            "category_options": [{"value": key, "label": label} for key, label in CATEGORY_LABELS.items()],
            "total": format_cop(total_expenses(self.expenses, self.pending)),
            "add_enabled": self.is_today,
            "add_hint": "" if self.is_today else "Solo puedes agregar gastos al día actual",
            "delete_hint": "" if self.is_today else "Solo puedes eliminar gastos del día actual",
        }
