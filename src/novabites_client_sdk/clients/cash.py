from __future__ import annotations

from typing import Any, Mapping

from ..models_cash import CashClosing, CashClosingCreate, ClosingCount, DailyExpense, DailyExpenseCreate
from .base import BaseClient, coerce_model, compact_params, parse_list, parse_object


class DailyExpensesClient(BaseClient):
    def list_expenses(self, *, store_id: str, date: str) -> list[DailyExpense]:
        data = self._request(
            "GET",
            "/api/daily-expense",
            params=compact_params(storeId=store_id, date=date),
            module="expenses",
            operation="list_expenses",
        )
        return parse_list(data, DailyExpense, "daily expense list")

    def create_expense(self, payload: DailyExpenseCreate | Mapping[str, Any]) -> DailyExpense:
        request = coerce_model(payload, DailyExpenseCreate)
        data = self._request(
            "POST",
            "/api/daily-expense",
            json_body=request.to_payload(),
            module="expenses",
            operation="create_expense",
        )
        return parse_object(data, DailyExpense, "created daily expense")

    def delete_expense(self, expense_id: str) -> None:
        self._request(
            "DELETE",
            f"/api/daily-expense/{expense_id}",
            module="expenses",
            operation="delete_expense",
        )


class CashClosingClient(BaseClient):
    def count_for_day(self, store_id: str, date: str) -> int:
        data = self._request(
            "GET",
            f"/api/cash-closing/count/{store_id}/{date}",
            module="cash_closing",
            operation="count_for_day",
            use_get_cache=False,
        )
        return parse_object(data, ClosingCount, "closing count").count

    def last_of_day(self, store_id: str, date: str) -> CashClosing | None:
        data = self._request(
            "GET",
            f"/api/cash-closing/last-of-day/{store_id}/{date}",
            module="cash_closing",
            operation="last_of_day",
            use_get_cache=False,
        )
        if not data:
            return None
        return parse_object(data, CashClosing, "last cash closing")

    def create_closing(self, payload: CashClosingCreate | Mapping[str, Any]) -> CashClosing:
        request = coerce_model(payload, CashClosingCreate)
        data = self._request(
            "POST",
            "/api/cash-closing",
            json_body=request.to_payload(),
            module="cash_closing",
            operation="create_closing",
        )
        return parse_object(data, CashClosing, "created cash closing")
