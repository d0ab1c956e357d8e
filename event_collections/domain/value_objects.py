"""Domain primitives that enforce validity at creation time."""

import math
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Self

from django.conf import settings
from django.utils import timezone
from django.utils.dateparse import parse_datetime

DATETIME_FORMAT = "%Y-%m-%d %H:%M"

COMPARE_OPERATORS = frozenset({"=", "!=", "<", "<=", ">", ">=", "IN", "NOT IN"})

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class MonthWindow:
    """Half-open interval [start, end) aligned to calendar months.

    ``end`` is None for windows that are open-ended forward.
    """

    start: datetime
    end: datetime | None = None

    def __post_init__(self) -> None:
        if self.end is not None and self.end <= self.start:
            raise ValueError("Window end must be after window start")

    @classmethod
    def for_month(cls, timestamp: datetime) -> Self:
        """Return the window covering the whole month of ``timestamp``."""
        start = datetime(timestamp.year, timestamp.month, 1)
        if timestamp.month < 12:
            end = datetime(timestamp.year, timestamp.month + 1, 1)
        else:
            end = datetime(timestamp.year + 1, 1, 1)
        return cls(start=start, end=end)

    @classmethod
    def starting_month_of(cls, timestamp: datetime) -> Self:
        """Return a window starting on the first day of ``timestamp``'s month."""
        return cls(start=datetime(timestamp.year, timestamp.month, 1))

    def start_value(self) -> str:
        return self.start.strftime(DATETIME_FORMAT)

    def end_value(self) -> str:
        if self.end is None:
            raise ValueError("Window is open-ended")
        return self.end.strftime(DATETIME_FORMAT)


@dataclass(frozen=True)
class MetaPredicate:
    """One comparison against a stored event field."""

    key: str
    value: Any
    compare: str = "="
    type: str | None = None

    def __post_init__(self) -> None:
        if self.compare not in COMPARE_OPERATORS:
            raise ValueError(f"Unknown compare operator {self.compare!r}")
        if self.compare in ("IN", "NOT IN") and not isinstance(self.value, (list, tuple)):
            raise ValueError(f"{self.compare} needs a list of values")


def parse_stored_datetime(value: Any) -> datetime:
    """Turn a criteria or record date-time into a datetime the store can compare.

    Naive values are taken to be in the current time zone when time zone
    support is enabled.
    """
    parsed = value if isinstance(value, datetime) else parse_datetime(str(value))
    if parsed is None:
        raise ValueError(f"Not a date-time: {value!r}")
    if settings.USE_TZ and timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


def coerce_owner_id(value: Any) -> int:
    """Coerce a user identifier to int, degrading to 0.

    Strings keep their leading integer (``"42abc"`` is 42); anything without
    one becomes 0.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else 0
    return 0
