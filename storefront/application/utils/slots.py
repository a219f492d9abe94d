from __future__ import annotations

import re
from datetime import date, datetime

DEFAULT_SLOT_CATALOG: tuple[str, ...] = (
    "8:00 AM",
    "9:00 AM",
    "10:00 AM",
    "11:00 AM",
    "12:00 PM",
    "1:00 PM",
    "2:00 PM",
    "3:00 PM",
    "4:00 PM",
    "5:00 PM",
    "6:00 PM",
)

_MERIDIEM_RE = re.compile(r"^(\d{1,2})(?::(\d{2}))?\s*([ap])\.?\s*m\.?$")
_24H_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_booking_date(value: date | str | None) -> date | None:
    """Parse a calendar date (YYYY-MM-DD). Returns None if it cannot be parsed."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    # full ISO timestamps carry the calendar date in front
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def normalize_time_label(value: str | None) -> str | None:
    """
    Normalize a time-of-day into the catalog label form ("9:00 AM").
    Accepts "9:00 am", "9am", "09:00" and "14:00". Returns None if not a time.
    """
    if not value:
        return None
    text = " ".join(str(value).lower().split())

    match = _MERIDIEM_RE.match(text)
    if match:
        hour = int(match.group(1))
        minute = int(match.group(2) or 0)
        if not 1 <= hour <= 12 or minute > 59:
            return None
        meridiem = "AM" if match.group(3) == "a" else "PM"
        return f"{hour}:{minute:02d} {meridiem}"

    match = _24H_RE.match(text)
    if match:
        hour = int(match.group(1))
        minute = int(match.group(2))
        if hour > 23 or minute > 59:
            return None
        meridiem = "AM" if hour < 12 else "PM"
        hour12 = hour % 12 or 12
        return f"{hour12}:{minute:02d} {meridiem}"

    return None


def resolve_slot(value: str | None, catalog: tuple[str, ...] | list[str]) -> str | None:
    """Return the catalog label matching value, or None if it is not a catalog slot."""
    label = normalize_time_label(value)
    if label is None:
        return None
    for slot in catalog:
        if normalize_time_label(slot) == label:
            return slot
    return None


def slot_position(label: str, catalog: tuple[str, ...] | list[str]) -> int:
    """Index of label in the catalog; unknown labels sort last."""
    try:
        return list(catalog).index(label)
    except ValueError:
        return len(catalog)
