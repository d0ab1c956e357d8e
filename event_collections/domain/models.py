"""Domain models representing retrieved events.

These are pure domain objects built from raw store records.
Django ORM models are in event_collections/models.py (persistence layer).
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Self

from django.utils.dateparse import parse_datetime


class PostStatus(str, Enum):
    """Publication state of a stored event."""

    PUBLISH = "publish"
    DRAFT = "draft"
    TRASH = "trash"
    RECURRENCE = "recurrent"
    RECURRENCE_TRASH = "recurrent_trash"


class EventStatus(str, Enum):
    """Lifecycle state of an event."""

    OPEN = "open"
    CLOSED = "closed"
    EXPIRED = "expired"
    RECURRENCE_PARENT = "recurrence_parent"
    RECURRENCE_CHILD = "recurrence_child"
    RECURRENCE_CHILD_TRASHED = "recurrence_child_trashed"


class BookingStatus(str, Enum):
    """RSVP answer stored on a booking."""

    CONFIRMED = "yes"
    TENTATIVE = "maybe"
    DECLINED = "no"


def _to_datetime(value: Any, field: str) -> datetime:
    if isinstance(value, datetime):
        return value
    parsed = parse_datetime(str(value)) if value is not None else None
    if parsed is None:
        raise ValueError(f"Record field {field!r} is not a date-time: {value!r}")
    return parsed


@dataclass(frozen=True)
class EventModel:
    """Domain representation of an Event."""

    id: int
    title: str
    start: datetime
    end: datetime
    status: EventStatus
    post_status: PostStatus
    owner_id: int | None = None
    parent_id: int | None = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Self:
        """Build a model from one raw store record.

        Raises:
            KeyError: If a required field is missing.
            ValueError: If a date or status field cannot be interpreted.
        """
        return cls(
            id=int(record["id"]),
            title=record.get("title") or "",
            start=_to_datetime(record["start"], "start"),
            end=_to_datetime(record["end"], "end"),
            status=EventStatus(record["event_status"]),
            post_status=PostStatus(record["status"]),
            owner_id=record.get("owner_id"),
            parent_id=record.get("parent_id"),
        )

    def is_trashed(self) -> bool:
        return self.post_status in (PostStatus.TRASH, PostStatus.RECURRENCE_TRASH)
