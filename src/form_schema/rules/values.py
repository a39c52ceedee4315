"""
Value predicates and coercions shared by the rule predicates.

Submitted values arrive as plain JSON-compatible data, so most rules
need the same handful of questions answered: is there a value at all,
is it numeric, how long is it, does it loosely equal another value,
and what instant does it name.
"""

import math
from datetime import date, datetime, time, timedelta, timezone
from typing import Any

from dateutil import parser as date_parser
from pydantic import TypeAdapter, ValidationError

from form_schema.constants import (
    ACCEPTED_VALUES,
    DECLINED_VALUES,
    NUMERIC_STRING_PATTERN,
    RELATIVE_DATE_PATTERN,
)

_DATETIME_ADAPTER = TypeAdapter(datetime)
_DATE_ADAPTER = TypeAdapter(date)

_RELATIVE_UNITS = {
    "second": timedelta(seconds=1),
    "minute": timedelta(minutes=1),
    "hour": timedelta(hours=1),
    "day": timedelta(days=1),
    "week": timedelta(weeks=1),
}


def is_empty(value: Any) -> bool:
    """True for None, a blank string, or an empty list."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def _finite_float(value: int | float | str) -> float | None:
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def is_numeric(value: Any) -> bool:
    """
    Numbers and numeric strings that fit a finite float.

    Booleans are not numeric, and neither are values such as ``"1e400"``
    or ``10**400`` that overflow to infinity.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, str) and NUMERIC_STRING_PATTERN.match(value) is None:
        return False
    if isinstance(value, (int, float, str)):
        return _finite_float(value) is not None
    return False


def to_number(value: Any) -> float | None:
    """Convert a numeric value to float, or None if it is empty or not numeric."""
    if is_empty(value) or not is_numeric(value):
        return None
    return _finite_float(value)


def measure(value: Any) -> float:
    """
    Size used by min/max/between rules.

    Numeric values measure as themselves, lists by element count and
    everything else by character length.
    """
    if is_numeric(value):
        return _finite_float(value)
    if isinstance(value, (list, tuple, dict)):
        return float(len(value))
    return float(len(as_text(value)))


def as_text(value: Any) -> str:
    """Render a scalar the way it would be submitted as form text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def normalize_list(value: Any, lower: bool = False) -> list[str]:
    """
    Normalize a list-valued constraint.

    Accepts a list or a comma-separated string; entries are trimmed,
    blanks dropped and duplicates removed.
    """
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple)):
        return []

    items: list[str] = []
    for entry in value:
        if not isinstance(entry, str):
            continue
        entry = entry.strip()
        if lower:
            entry = entry.lower()
        if entry and entry not in items:
            items.append(entry)
    return items


def strict_in(value: Any, candidates) -> bool:
    """Type-aware membership: ``1`` is not in ``["1"]`` and ``True`` is not in ``[1]``."""
    for candidate in candidates:
        if type(candidate) is type(value) and candidate == value:
            return True
    return False


def is_accepted(value: Any) -> bool:
    return strict_in(value, ACCEPTED_VALUES)


def is_declined(value: Any) -> bool:
    return strict_in(value, DECLINED_VALUES)


def _truthy(value: Any) -> bool:
    if isinstance(value, str):
        return value not in ("", "0")
    return bool(value)


def loose_equals(left: Any, right: Any) -> bool:
    """
    Loose equality as used by required_if / required_unless.

    Numbers and numeric strings compare numerically (``1 == "1"``).
    ``None`` equals the empty string and any falsy non-string value.
    A boolean compared with a string only matches numeric strings or the
    empty string, so ``"yes" == True`` is false while ``"1" == True`` is true.
    """
    if left is None or right is None:
        other = right if left is None else left
        if other is None:
            return True
        if isinstance(other, str):
            return other == ""
        return not _truthy(other)

    if isinstance(left, bool) or isinstance(right, bool):
        flag, other = (left, right) if isinstance(left, bool) else (right, left)
        if isinstance(other, bool):
            return flag == other
        if isinstance(other, str):
            if other == "":
                return flag is False
            if is_numeric(other):
                return flag == (float(other) != 0)
            return False
        return flag == _truthy(other)

    left_number = isinstance(left, (int, float))
    right_number = isinstance(right, (int, float))
    if left_number and right_number:
        return left == right

    if left_number or right_number:
        number, other = (left, right) if left_number else (right, left)
        if isinstance(other, str):
            if is_numeric(number) and is_numeric(other):
                return to_number(number) == to_number(other)
            return as_text(number) == other
        return False

    if isinstance(left, str) and isinstance(right, str):
        if is_numeric(left) and is_numeric(right):
            return float(left) == float(right)
        return left == right

    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        return len(left) == len(right) and all(loose_equals(a, b) for a, b in zip(left, right))

    if isinstance(left, dict) and isinstance(right, dict):
        return left.keys() == right.keys() and all(loose_equals(left[k], right[k]) for k in left)

    return left == right


def _natural_datetime(text: str, now: datetime) -> datetime | None:
    lowered = text.lower()
    midnight = datetime.combine(now.date(), time.min, tzinfo=now.tzinfo)
    if lowered == "now":
        return now
    if lowered == "today":
        return midnight
    if lowered == "tomorrow":
        return midnight + timedelta(days=1)
    if lowered == "yesterday":
        return midnight - timedelta(days=1)

    match = RELATIVE_DATE_PATTERN.match(lowered)
    if match:
        amount = int(match.group(1))
        try:
            return now + amount * _RELATIVE_UNITS[match.group(2)]
        except OverflowError:
            return None
    return None


def _parse_date_text(text: str, now: datetime) -> datetime | None:
    parsed = _natural_datetime(text, now)
    if parsed is not None:
        return parsed
    if NUMERIC_STRING_PATTERN.match(text):
        return None

    try:
        return _DATETIME_ADAPTER.validate_python(text)
    except ValidationError:
        pass
    try:
        return datetime.combine(_DATE_ADAPTER.validate_python(text), time.min)
    except ValidationError:
        pass
    try:
        # missing parts default to today's midnight
        return date_parser.parse(text, default=datetime.combine(now.date(), time.min))
    except (ValueError, OverflowError):
        return None


def to_datetime(value: Any, now: datetime | None = None) -> datetime | None:
    """
    Parse a calendar value into an aware datetime.

    Accepts datetime/date objects, unix timestamps given as numbers, the
    keywords now/today/tomorrow/yesterday, relative offsets such as
    "+3 days", ISO 8601 text and free-form dates like "01/15/2024" or
    "15 January 2024". Numeric strings are not dates. Naive values are
    taken as UTC.
    """
    if is_empty(value) or isinstance(value, bool):
        return None

    now = now or datetime.now(timezone.utc)
    parsed: datetime | None = None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, (int, float)):
        try:
            parsed = datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        parsed = _parse_date_text(value.strip(), now)

    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def to_timestamp(value: Any, now: datetime | None = None) -> float | None:
    """Seconds since the epoch for a calendar value, or None if unparsable."""
    parsed = to_datetime(value, now)
    return None if parsed is None else parsed.timestamp()
