from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Sequence


@dataclass(frozen=True)
class FilterField:
    field: str
    label: str
    placeholder: str = ""


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def raw_value_at_path(item: Any, path: str) -> Any:
    """Value at a dotted path through mappings or attributes; any missing step yields None."""
    current = item
    for key in path.split("."):
        if current is None:
            return None
        if isinstance(current, Mapping):
            current = current.get(key)
        else:
            current = getattr(current, key, None)
    return current


def value_at_path(item: Any, path: str) -> str:
    return _stringify(raw_value_at_path(item, path))


def filter_items(items: Sequence[Any], filters: Mapping[str, str] | None) -> list[Any]:
    if not filters:
        return list(items)
    active = {path: value.lower() for path, value in filters.items() if value and value.strip()}
    return [
        item
        for item in items
        if all(needle in value_at_path(item, path).lower() for path, needle in active.items())
    ]


@dataclass
class GenericFilter:
    fields: list[FilterField]
    values: dict[str, str] = field(default_factory=dict)

    def set(self, field_name: str, value: str) -> dict[str, str]:
        if field_name not in {item.field for item in self.fields}:
            raise KeyError(f"Unknown filter field: {field_name}")
        self.values = {**self.values, field_name: value}
        return self.values

    def reset(self) -> None:
        self.values = {}

    def apply(self, items: Iterable[Any]) -> list[Any]:
        return filter_items(list(items), self.values)

    def render(self) -> dict[str, Any]:
        return {
            "title": "Filtrar por",
            "fields": [
                {
                    "field": item.field,
                    "label": item.label,
                    "placeholder": item.placeholder or item.label,
                    "value": self.values.get(item.field, ""),
                }
                for item in self.fields
            ],
        }
