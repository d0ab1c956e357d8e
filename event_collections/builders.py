"""Criteria builders, one per retrieval strategy.

A builder turns its context (caller criteria, a user id, a parent event)
into a FilterCriteria. Builders never execute the query; that is the
collection's job, so criteria can be inspected before they run.

Window builders derive calendar-month ranges from a reference timestamp.
Relational builders depend on ownership, bookings or the recurrence
hierarchy instead.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from datetime import date, datetime, time
from typing import Any

from django.utils import timezone

from event_collections import conf
from event_collections.domain import (
    BookingStatus,
    EventModel,
    EventStatus,
    FilterCriteria,
    MetaPredicate,
    MonthWindow,
    PostStatus,
    coerce_owner_id,
)
from event_collections.domain.criteria import DATETIME, META_END, META_START, META_STATUS, UNBOUNDED
from event_collections.domain.errors import InvalidTimestampError
from event_collections.stores.interfaces import BookingAggregator

LISTED_STATUSES = [PostStatus.PUBLISH.value, PostStatus.RECURRENCE.value]
POPULAR_BOOKING_STATUSES = [BookingStatus.CONFIRMED.value, BookingStatus.TENTATIVE.value]


def resolve_timestamp(timestamp: Any = None) -> datetime:
    """Return the reference datetime for a window builder.

    None or False means now. Aware datetimes and epoch seconds are expressed in the
    current time zone; naive datetimes are used as they are.

    Raises:
        InvalidTimestampError: For any other type.
    """
    if timestamp is None or timestamp is False:
        now = timezone.now()
        return timezone.localtime(now) if timezone.is_aware(now) else now
    if isinstance(timestamp, datetime):
        return timezone.localtime(timestamp) if timezone.is_aware(timestamp) else timestamp
    if isinstance(timestamp, date):
        return datetime.combine(timestamp, time.min)
    if isinstance(timestamp, (int, float)) and not isinstance(timestamp, bool):
        return datetime.fromtimestamp(timestamp, tz=timezone.get_current_timezone())
    raise InvalidTimestampError(timestamp)


class CriteriaBuilder(ABC):
    """Strategy interface: context in, FilterCriteria out."""

    timestamp: datetime | None = None

    @abstractmethod
    def build_criteria(self, context: Any) -> FilterCriteria:
        ...


class UpcomingCriteriaBuilder(CriteriaBuilder):
    """Listed events falling inside the calendar month of the timestamp.

    Closed events are always excluded. Expired ones are excluded too, unless
    the caller asks for one specific event through ``event_id``.
    """

    def __init__(self, timestamp: Any = None) -> None:
        self.timestamp = resolve_timestamp(timestamp)

    def build_criteria(self, context: Mapping[str, Any] | None = None) -> FilterCriteria:
        args = dict(context or {})
        window = MonthWindow.for_month(self.timestamp)

        forbidden_statuses = [EventStatus.CLOSED.value]
        if "event_id" not in args:
            forbidden_statuses.append(EventStatus.EXPIRED.value)

        args.setdefault("limit", UNBOUNDED)
        args.update(
            type=conf.get_setting("EVENT_TYPE"),
            status=list(LISTED_STATUSES),
            meta_query=[
                MetaPredicate(key=META_END, value=window.end_value(), compare="<", type=DATETIME),
                MetaPredicate(key=META_START, value=window.start_value(), compare=">=", type=DATETIME),
                MetaPredicate(key=META_STATUS, value=forbidden_statuses, compare="NOT IN"),
            ],
        )
        return args


class OldCriteriaBuilder(CriteriaBuilder):
    """Still-open events that ended before the timestamp's month began.

    No publication filter is applied.
    """

    def __init__(self, timestamp: Any = None) -> None:
        self.timestamp = resolve_timestamp(timestamp)

    def build_criteria(self, context: Mapping[str, Any] | None = None) -> FilterCriteria:
        args = dict(context or {})
        boundary = MonthWindow.starting_month_of(self.timestamp)
        args.update(
            type=conf.get_setting("EVENT_TYPE"),
            limit=UNBOUNDED,
            meta_query=[
                MetaPredicate(key=META_STATUS, value=EventStatus.OPEN.value),
                MetaPredicate(key=META_END, value=boundary.start_value(), compare="<", type=DATETIME),
            ],
        )
        return args


class PopularCriteriaBuilder(CriteriaBuilder):
    """Listed events ranked by confirmed and tentative bookings."""

    def __init__(self, aggregator: BookingAggregator) -> None:
        self._aggregator = aggregator

    def build_criteria(self, context: Mapping[str, Any] | None = None) -> FilterCriteria:
        args = dict(context or {})
        ranked_ids = self._aggregator.event_ids_by_booking_count(POPULAR_BOOKING_STATUSES)
        args.setdefault("limit", UNBOUNDED)
        args.update(
            id_in=list(ranked_ids),
            type=conf.get_setting("EVENT_TYPE"),
            status=list(LISTED_STATUSES),
        )
        return args


class OrganizerCriteriaBuilder(CriteriaBuilder):
    """Listed events owned by one user."""

    def build_criteria(self, context: Any) -> FilterCriteria:
        return {
            "owner": coerce_owner_id(context),
            "type": conf.get_setting("EVENT_TYPE"),
            "status": list(LISTED_STATUSES),
            "limit": UNBOUNDED,
        }


class RecurringChildrenCriteriaBuilder(CriteriaBuilder):
    """Every child occurrence of a recurring parent event.

    Anything other than an EventModel is handed back untouched.
    """

    def build_criteria(self, context: Any) -> FilterCriteria:
        if not isinstance(context, EventModel):
            return context
        status = PostStatus.RECURRENCE_TRASH if context.is_trashed() else PostStatus.RECURRENCE
        return {
            "type": conf.get_setting("EVENT_TYPE"),
            "status": status.value,
            "parent": context.id,
            "limit": UNBOUNDED,
        }
