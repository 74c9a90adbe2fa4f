from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ViewStateStatus(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    SUCCESS = "success"
    PARTIAL_ERROR = "partial_error"
    FATAL_ERROR = "fatal_error"
    NO_PERMISSION = "no_permission"


@dataclass(frozen=True)
class ViewState:
    status: ViewStateStatus
    message: str | None = None
    data_available: bool = False

    def render(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "message": self.message,
            "data_available": self.data_available,
        }


def resolve_state(
    *,
    can_view: bool = True,
    is_loading: bool,
    error: str | None,
    has_data: bool,
    empty_message: str = "No hay datos disponibles",
) -> ViewState:
    if not can_view:
        return ViewState(ViewStateStatus.NO_PERMISSION, "No tienes permiso para ver esta sección")
    if is_loading:
        return ViewState(ViewStateStatus.LOADING, "Cargando...", data_available=has_data)
    if error and has_data:
        return ViewState(ViewStateStatus.PARTIAL_ERROR, error, data_available=True)
    if error:
        return ViewState(ViewStateStatus.FATAL_ERROR, error)
    if not has_data:
        return ViewState(ViewStateStatus.EMPTY, empty_message)
    return ViewState(ViewStateStatus.SUCCESS, None, data_available=True)
