from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Sequence

from novabites_client_sdk import Product, ReturnReason

from novabites_pos.services.inventory_service import RequestRow, rows_complete
from novabites_pos.shared.currency import format_cop

_LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)")


def parse_quantity(value: Any) -> int:
    """Leading whole number typed in a quantity cell ("2.5" is 2); anything unparsable or zero becomes 1."""
    match = _LEADING_INTEGER.match(str(value))
    if match is None:
        return 1
    return int(match.group(1)) or 1


@dataclass
class ModalTable:
    products: Sequence[Product] = field(default_factory=list)
    rows: list[RequestRow] = field(default_factory=list)
    with_reason: bool = False

    def add_row(self) -> RequestRow:
        row = RequestRow()
        self.rows.append(row)
        return row

    def _row(self, index: int) -> RequestRow | None:
        return self.rows[index] if 0 <= index < len(self.rows) else None

    def set_product(self, index: int, product_id: str) -> bool:
        row = self._row(index)
        product = next((item for item in self.products if item.id == product_id), None)
        if row is None or product is None:
            return False
        row.product = product
        return True

    def set_quantity(self, index: int, value: Any) -> None:
        row = self._row(index)
        if row is not None:
            row.quantity = parse_quantity(value)

    def set_reason(self, index: int, reason: ReturnReason | str | None) -> None:
        row = self._row(index)
        if row is not None:
            row.return_reason = ReturnReason(reason) if reason else None

    def remove_row(self, index: int) -> None:
        if self._row(index) is not None:
            self.rows.pop(index)

    def is_complete(self) -> bool:
        return rows_complete(self.rows, needs_reason=self.with_reason)

    def render(self) -> dict[str, Any]:
        rendered = []
        for row in self.rows:
            item: dict[str, Any] = {
                "product_id": row.product.id if row.product else "",
                "product_name": row.product.name if row.product else "",
                "quantity": row.quantity,
                "unit_price": format_cop(row.product.base_price) if row.product else "",
            }
            if self.with_reason:
                item["return_reason"] = row.return_reason.value if row.return_reason else ""
            rendered.append(item)
        return {
            "rows": rendered,
            "product_options": [{"id": product.id, "name": product.name} for product in self.products],
            "reason_options": [reason.value for reason in ReturnReason] if self.with_reason else [],
        }
