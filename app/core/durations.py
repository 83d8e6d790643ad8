from __future__ import annotations

from datetime import datetime, timezone

import dateutil.parser

from app.core.validation.rules import ISO8601_RE

OUTPUT_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
DURATION_UNITS = ("HOURS", "DAYS", "WEEKS")


def parse_iso8601(value: str | None) -> datetime | None:
    """
    "2022-12-31T14:59:00Z" / "2022-12-31T16:59:00+02:00" -> naive UTC datetime.
    Anything that is not in that exact shape gives None.
    """
    if value is None or not ISO8601_RE.fullmatch(str(value)):
        return None
    parsed = dateutil.parser.isoparse(str(value))
    return parsed.astimezone(timezone.utc).replace(tzinfo=None)


def format_utc(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.strftime(OUTPUT_FORMAT)


def calculate_duration(
    start: datetime | None,
    end: datetime | None,
    unit: str | None = "DAYS",
) -> float | None:
    """
    Length of the [start, end] span in `unit`, rounded to a whole number.

    None when either end is missing, the span is empty or negative, or the
    unit is unknown.
    """
    if start is None or end is None or start >= end:
        return None

    span = end - start
    unit = (unit or "DAYS").upper()
    if unit == "HOURS":
        duration = span.total_seconds() / 3600
    elif unit == "DAYS":
        duration = span.days
    elif unit == "WEEKS":
        duration = span.days / 7
    else:
        return None

    return float(round(duration))
