from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from novabites_client_sdk import compute_change

from novabites_pos.shared.currency import format_cop

KEYS: tuple[str, ...] = ("1", "2", "3", "4", "5", "6", "7", "8", "9", ".", "0", "-", "clear", "backspace")


@dataclass
class CashKeypad:
    total: Decimal
    amount_received: str = ""
    change: str = "0"

    def press(self, key: str) -> str:
        if key == "clear":
            self.amount_received = ""
            self.change = "0"
            return self.amount_received
        if key == "backspace":
            self.amount_received = self.amount_received[:-1]
        else:
            self.amount_received = self._append(self.amount_received, key)
        if self.amount_received:
            self.change = compute_change(self.total, self.amount_received)
        return self.amount_received

    @staticmethod
    def _append(current: str, key: str) -> str:
        if key == "-":
            return "0" if current == "" else current
        if key == "." and "." in current:
            return current
        if "." in current and len(current.split(".", 1)[1]) >= 2:
            return current
        return current + key

    def render(self) -> dict[str, Any]:
        return {
            "keys": list(KEYS),
            "amount_received": self.amount_received,
            "change": self.change,
            "change_display": format_cop(self.change),
        }
