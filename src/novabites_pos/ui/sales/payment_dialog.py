from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from novabites_client_sdk import PaymentMethod, validate_payment
from novabites_client_sdk.payment_validation import DEFAULT_TRANSFER_OPTION, TRANSFER_OPTIONS

from novabites_pos.shared.currency import format_cop
from novabites_pos.ui.sales.cash_keypad import CashKeypad
from novabites_pos.ui.shared.notification_center import NotificationCenter


@dataclass(frozen=True)
class PaymentSelection:
    payment_method: str
    amount_received: str | None = None
    change: str | None = None


@dataclass
class PaymentDialog:
    total: Decimal
    notifications: NotificationCenter
    method: PaymentMethod | None = PaymentMethod.CASH
    transfer_option: str = DEFAULT_TRANSFER_OPTION
    keypad: CashKeypad = field(init=False)

    def __post_init__(self) -> None:
        self.keypad = CashKeypad(total=self.total)

    def select_method(self, method: PaymentMethod | str | None) -> None:
        self.method = PaymentMethod(method) if method else None

    def select_transfer_option(self, option: str) -> None:
        if option and option not in TRANSFER_OPTIONS:
            raise ValueError(f"Unknown transfer option: {option}")
        self.transfer_option = option

    def confirm(self) -> PaymentSelection | None:
        """Validate the form, pushing the first problem as a toast."""
        result = validate_payment(
            method=self.method,
            total=self.total,
            amount_received=self.keypad.amount_received,
            transfer_option=self.transfer_option,
        )
        if not result.ok:
            issue = result.issues[0]
            self.notifications.error(issue.title, issue.description)
            return None
        if self.method is PaymentMethod.CASH:
            return PaymentSelection(
                payment_method=result.payment_label,
                amount_received=self.keypad.amount_received,
                change=result.change,
            )
        return PaymentSelection(payment_method=result.payment_label)

    def render(self) -> dict[str, Any]:
        return {
            "title": "Confirmación",
            "total": format_cop(self.total),
            "method": self.method.value if self.method else None,
            "methods": [method.value for method in PaymentMethod],
            "transfer_option": self.transfer_option,
            "transfer_options": list(TRANSFER_OPTIONS),
            "keypad": self.keypad.render() if self.method is PaymentMethod.CASH else None,
        }
