from novabites_pos.ui.expenses.cash_closing_modal import CashClosingModal
from novabites_pos.ui.expenses.daily_report_view import DailyReportView
from novabites_pos.ui.expenses.expenses_table import ExpensesTable

__all__ = ["CashClosingModal", "DailyReportView", "ExpensesTable"]
