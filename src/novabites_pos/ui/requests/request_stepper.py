from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from novabites_client_sdk import RequestStatus, StoreRequest

from novabites_pos.shared.date_utils import TimeZoneLike, format_day_month

STEPS: tuple[tuple[RequestStatus, str], ...] = (
    (RequestStatus.PENDING, "Pendiente"),
    (RequestStatus.APPROVED, "Aprobada"),
    (RequestStatus.IN_PROGRESS, "En Proceso"),
    (RequestStatus.COMPLETED, "Completada"),
)

_HALTED_LABELS = {
    RequestStatus.REJECTED: ("rejected", "Rechazada"),
    RequestStatus.CANCELED: ("canceled", "Cancelada"),
}


@dataclass(frozen=True)
class Step:
    label: str
    state: str
    date: str = ""


def _status(value: RequestStatus | str) -> RequestStatus | None:
    try:
        return RequestStatus(getattr(value, "value", value))
    except ValueError:
        return None


def step_states(current: RequestStatus | str) -> list[str]:
    """State of each step: completed, current, pending, rejected or canceled."""
    status = _status(current)
    if status in _HALTED_LABELS:
        halted, _ = _HALTED_LABELS[status]
        return ["completed", halted] + ["pending"] * (len(STEPS) - 2)
    index = next((i for i, (step, _) in enumerate(STEPS) if step is status), -1)
    states = []
    for position in range(len(STEPS)):
        if position < index:
            states.append("completed")
        elif position == index:
            states.append("current")
        else:
            states.append("pending")
    return states


def build_steps(
    current: RequestStatus | str,
    *,
    requested_date: datetime | None = None,
    approved_date: datetime | None = None,
    completed_date: datetime | None = None,
    tz: TimeZoneLike | None = None,
) -> list[Step]:
    dates = {0: requested_date, 1: approved_date, 3: completed_date}
    status = _status(current)
    steps = []
    for position, ((_, label), state) in enumerate(zip(STEPS, step_states(current))):
        if state in ("rejected", "canceled"):
            label = _HALTED_LABELS[status][1]
        moment = dates.get(position)
        shown = state in ("completed", "current") and moment is not None
        steps.append(Step(label=label, state=state, date=format_day_month(moment, tz) if shown else ""))
    return steps


def stepper_for(request: StoreRequest, tz: TimeZoneLike | None = None) -> list[dict[str, Any]]:
    return [
        {"label": step.label, "state": step.state, "date": step.date}
        for step in build_steps(
            request.status,
            requested_date=request.requested_date,
            approved_date=request.approved_date,
            completed_date=request.completed_date,
            tz=tz,
        )
    ]
