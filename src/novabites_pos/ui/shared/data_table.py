from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Literal, Sequence

from novabites_pos.shared.currency import format_cop
from novabites_pos.shared.date_utils import format_short_date
from novabites_pos.ui.shared.generic_filter import raw_value_at_path, value_at_path
from novabites_pos.ui.shared.view_state import resolve_state

ColumnKind = Literal["text", "date", "status", "boolean", "money", "decimal"]

EMPTY_MESSAGE = "No hay datos disponibles"

STATUS_CLASSES: dict[str, str] = {
    "available": "completed",
    "unavailable": "rejected",
    "completed": "completed",
    "processing": "processing",
    "pending": "onhold",
    "cancelled": "rejected",
    "canceled": "rejected",
    "rejected": "rejected",
    "on hold": "onhold",
    "suspended": "onhold",
    "active": "completed",
    "inactive": "rejected",
    "out of stock": "rejected",
    "in stock": "completed",
    "low stock": "onhold",
}


@dataclass(frozen=True)
class Column:
    key: str
    label: str
    kind: ColumnKind = "text"
    width: str | None = None


def status_badge(status: str) -> dict[str, str]:
    normalized = status.lower()
    return {
        "label": normalized[:1].upper() + normalized[1:],
        "class": STATUS_CLASSES.get(normalized, "default"),
    }


@dataclass
class DataTable:
    columns: list[Column]
    rows: Sequence[Any] = field(default_factory=list)
    items_per_page: int = 10
    current_page: int = 1
    empty_message: str = EMPTY_MESSAGE
    is_loading: bool = False
    error: str | None = None

    @property
    def total_pages(self) -> int:
        if not self.rows:
            return 1
        return math.ceil(len(self.rows) / self.items_per_page)

    def set_rows(self, rows: Sequence[Any]) -> None:
        self.rows = list(rows)
        self.current_page = min(self.current_page, self.total_pages)

    def page_rows(self) -> list[Any]:
        last = self.current_page * self.items_per_page
        return list(self.rows[last - self.items_per_page:last])

    def next_page(self) -> int:
        if self.current_page < self.total_pages:
            self.current_page += 1
        return self.current_page

    def previous_page(self) -> int:
        if self.current_page > 1:
            self.current_page -= 1
        return self.current_page

    def range_label(self) -> str:
        total = len(self.rows)
        if total == 0:
            return "Mostrando 0-0 de 0"
        first = (self.current_page - 1) * self.items_per_page + 1
        last = min(self.current_page * self.items_per_page, total)
        return f"Mostrando {first}-{last} de {total}"

    def cell(self, row: Any, column: Column) -> Any:
        value = raw_value_at_path(row, column.key)
        if column.kind == "boolean" or isinstance(value, bool):
            return "Available" if value else "Unavailable"
        if column.kind == "status" and isinstance(value, str) and value:
            return status_badge(value)
        if column.kind == "date" and isinstance(value, str) and value:
            try:
                return format_short_date(value)
            except ValueError:
                return value
        if column.kind == "money":
            return format_cop(value)
        if value is None:
            return ""
        if column.kind == "text":
            return value_at_path(row, column.key)
        return value

    def render(self) -> dict[str, Any]:
        state = resolve_state(
            is_loading=self.is_loading,
            error=self.error,
            has_data=bool(self.rows),
            empty_message=self.empty_message,
        )
        return {
            "state": state.render(),
            "headers": [column.label for column in self.columns],
            "rows": [
                {column.key: self.cell(row, column) for column in self.columns}
                for row in self.page_rows()
            ],
            "page": self.current_page,
            "total_pages": self.total_pages,
            "range_label": self.range_label(),
            "has_previous": self.current_page > 1,
            "has_next": self.current_page < self.total_pages,
        }
