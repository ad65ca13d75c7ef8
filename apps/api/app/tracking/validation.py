"""Field checks for the tracked-event write paths.

Each check returns the cleaned value or raises ``ValueError`` with a message
naming the field, so they can back pydantic validators directly.
"""

from __future__ import annotations

import datetime as dt
import ipaddress
import re


_TIME_RE = re.compile(r"^([0-1]?[0-9]|2[0-3]):([0-5][0-9])(?::([0-5][0-9]))?$")
# Largest value an Integer column holds on every supported backend.
INTEGER_MAX = 2_147_483_647


def validate_ip(value: str | None) -> str:
    if not value or not isinstance(value, str):
        raise ValueError("IP address is required")
    try:
        ipaddress.ip_address(value.strip())
    except ValueError:
        raise ValueError("Invalid IP address format") from None
    return value.strip()


def validate_positive_int(value: int | None, field_name: str) -> int:
    if value is None:
        raise ValueError(f"{field_name} is required")
    if value <= 0:
        raise ValueError(f"{field_name} must be a positive integer")
    if value > INTEGER_MAX:
        raise ValueError(f"{field_name} must not exceed {INTEGER_MAX}")
    return value


def validate_non_negative_int(value: int | None, field_name: str) -> int:
    if value is None:
        raise ValueError(f"{field_name} is required")
    if value < 0:
        raise ValueError(f"{field_name} must be a non-negative integer")
    if value > INTEGER_MAX:
        raise ValueError(f"{field_name} must not exceed {INTEGER_MAX}")
    return value


def validate_event_date(value: object, field_name: str = "Date", *, today: dt.date | None = None) -> dt.date:
    if value is None or value == "":
        raise ValueError(f"{field_name} is required")
    if isinstance(value, dt.datetime):
        value = value.date()
    elif not isinstance(value, dt.date):
        try:
            value = dt.date.fromisoformat(str(value).strip()[:10])
        except ValueError:
            raise ValueError(f"Invalid {field_name.lower()} format") from None
    if value > (today or dt.date.today()):
        raise ValueError(f"{field_name} cannot be in the future")
    return value


def parse_time_of_day(value: object, field_name: str = "Time") -> dt.time:
    if value is None or value == "":
        raise ValueError(f"{field_name} is required")
    if isinstance(value, dt.time):
        return value
    match = _TIME_RE.match(str(value).strip())
    if match is None:
        raise ValueError(f"Invalid {field_name.lower()} format (use HH:MM or HH:MM:SS)")
    hour, minute, second = match.groups()
    return dt.time(int(hour), int(minute), int(second or 0))


def require_text(value: str | None, field_name: str) -> str:
    cleaned = value.strip() if isinstance(value, str) else ""
    if not cleaned:
        raise ValueError(f"{field_name} is required")
    return cleaned


def validate_date_range(start: dt.date | None, end: dt.date | None) -> None:
    if start is not None and end is not None and start > end:
        raise ValueError("Start date must be before end date")
