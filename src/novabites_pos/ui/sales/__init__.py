from novabites_pos.ui.sales.cash_keypad import CashKeypad
from novabites_pos.ui.sales.payment_dialog import PaymentDialog, PaymentSelection
from novabites_pos.ui.sales.sales_view import SalesView

__all__ = ["CashKeypad", "PaymentDialog", "PaymentSelection", "SalesView"]
