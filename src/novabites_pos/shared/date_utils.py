from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

APP_TIMEZONE = "America/Bogota"

_MONTHS_ES = (
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
)

TimeZoneLike = ZoneInfo | str


def _zone(tz: TimeZoneLike | None) -> ZoneInfo:
    if tz is None:
        return ZoneInfo(APP_TIMEZONE)
    if isinstance(tz, ZoneInfo):
        return tz
    return ZoneInfo(tz)


def _now(tz: TimeZoneLike | None, now: datetime | None) -> datetime:
    zone = _zone(tz)
    if now is None:
        return datetime.now(zone)
    if now.tzinfo is None:
        return now.replace(tzinfo=zone)
    return now.astimezone(zone)


def today_local(tz: TimeZoneLike | None = None, *, now: datetime | None = None) -> str:
    return _now(tz, now).date().isoformat()


def is_today(date_string: str, tz: TimeZoneLike | None = None, *, now: datetime | None = None) -> bool:
    return date_string == today_local(tz, now=now)


def max_date(tz: TimeZoneLike | None = None, *, now: datetime | None = None) -> str:
    return today_local(tz, now=now)


def parse_local_date(date_string: str) -> date:
    year, month, day = (int(part) for part in date_string.split("-"))
    return date(year, month, day)


def parse_timestamp(value: datetime | str) -> datetime:
    """Parse an API timestamp; naive values are taken as UTC."""
    if isinstance(value, datetime):
        parsed = value
    else:
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def local_to_utc_date(date_string: str, tz: TimeZoneLike | None = None) -> str:
    """Calendar date the API filters by for a local day (local midnight shifted by its UTC offset)."""
    zone = _zone(tz)
    local_midnight = datetime.combine(parse_local_date(date_string), time.min, tzinfo=zone)
    offset = local_midnight.utcoffset() or timedelta(0)
    shifted = local_midnight.astimezone(timezone.utc) + offset
    return shifted.date().isoformat()


def start_of_day_utc(date_string: str, tz: TimeZoneLike | None = None) -> str:
    zone = _zone(tz)
    local_start = datetime.combine(parse_local_date(date_string), time.min, tzinfo=zone)
    return _iso_utc(local_start)


def end_of_day_utc(date_string: str, tz: TimeZoneLike | None = None) -> str:
    zone = _zone(tz)
    local_end = datetime.combine(parse_local_date(date_string), time(23, 59, 59, 999000), tzinfo=zone)
    return _iso_utc(local_end)


def _iso_utc(value: datetime) -> str:
    utc_value = value.astimezone(timezone.utc)
    return utc_value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc_value.microsecond // 1000:03d}Z"


def iso_date_start(date_string: str) -> datetime:
    """UTC midnight of a calendar date, the timestamp stored for day-level records."""
    return datetime.combine(parse_local_date(date_string), time.min, tzinfo=timezone.utc)


def format_date_local(date_string: str) -> str:
    local_date = parse_local_date(date_string)
    return f"{local_date.day} de {_MONTHS_ES[local_date.month - 1]} de {local_date.year}"


def format_time_local(value: datetime | str, tz: TimeZoneLike | None = None) -> str:
    local = parse_timestamp(value).astimezone(_zone(tz))
    hour = local.hour % 12 or 12
    suffix = "a. m." if local.hour < 12 else "p. m."
    return f"{hour:02d}:{local.minute:02d}:{local.second:02d} {suffix}"


def format_date_time_local(value: datetime | str, tz: TimeZoneLike | None = None) -> str:
    local = parse_timestamp(value).astimezone(_zone(tz))
    hour = local.hour % 12 or 12
    suffix = "a. m." if local.hour < 12 else "p. m."
    return (
        f"{local.day} de {_MONTHS_ES[local.month - 1]} de {local.year}, "
        f"{hour:02d}:{local.minute:02d} {suffix}"
    )


def format_short_date(value: datetime | str | None, tz: TimeZoneLike | None = None) -> str:
    if value is None or value == "":
        return ""
    local = parse_timestamp(value).astimezone(_zone(tz))
    return local.strftime("%d/%m/%Y")


def is_after(first: datetime | str, second: datetime | str) -> bool:
    return parse_timestamp(first) > parse_timestamp(second)


def format_day_month(value: datetime | str, tz: TimeZoneLike | None = None) -> str:
    local = parse_timestamp(value).astimezone(_zone(tz))
    return f"{local.day:02d} {_MONTHS_ES[local.month - 1][:3]}"
