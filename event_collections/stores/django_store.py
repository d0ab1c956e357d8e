"""Django ORM implementation of the event store ports."""

import logging
from collections.abc import Mapping, Sequence

from django.db.models import Case, Count, IntegerField, Q, QuerySet, Value, When

from event_collections import conf
from event_collections.domain import FilterCriteria, MetaPredicate, RawRecord
from event_collections.domain.criteria import DATETIME, META_KEYS, UNBOUNDED
from event_collections.domain.errors import UnsupportedCriteriaError
from event_collections.domain.value_objects import parse_stored_datetime
from event_collections.models import Booking, Event
from event_collections.stores.interfaces import BookingAggregator, EventQueryExecutor

logger = logging.getLogger(__name__)

RECORD_FIELDS = ("id", "title", "owner_id", "parent_id", "status", "event_status", "start", "end")

_LOOKUPS = {
    "=": "exact",
    "!=": "exact",
    "<": "lt",
    "<=": "lte",
    ">": "gt",
    ">=": "gte",
    "IN": "in",
    "NOT IN": "in",
}


def _meta_q(predicate: MetaPredicate) -> Q:
    if predicate.key not in META_KEYS:
        raise UnsupportedCriteriaError(f"Unknown meta key {predicate.key!r}")
    value = predicate.value
    if predicate.type == DATETIME:
        value = parse_stored_datetime(value)
    elif isinstance(value, tuple):
        value = list(value)
    q = Q(**{f"{predicate.key}__{_LOOKUPS[predicate.compare]}": value})
    if predicate.compare in ("!=", "NOT IN"):
        return ~q
    return q


class DjangoEventStore(EventQueryExecutor, BookingAggregator):
    """Database-backed event store using Django ORM."""

    def execute(self, criteria: FilterCriteria) -> list[RawRecord]:
        records = list(self.to_queryset(criteria))
        logger.debug("Criteria %r matched %d events", criteria, len(records))
        return records

    def to_queryset(self, criteria: FilterCriteria) -> QuerySet:
        """Translate a criteria into an ordered, sliced queryset of record dicts."""
        if not isinstance(criteria, Mapping):
            logger.debug("Not a criteria mapping, matching nothing: %r", criteria)
            return Event.objects.none().values(*RECORD_FIELDS)

        queryset = Event.objects.all()
        ordered_ids: list[int] | None = None
        limit = UNBOUNDED
        for key, value in criteria.items():
            if key == "type":
                if value != conf.get_setting("EVENT_TYPE"):
                    return Event.objects.none().values(*RECORD_FIELDS)
            elif key == "status":
                if isinstance(value, (list, tuple)):
                    queryset = queryset.filter(status__in=list(value))
                else:
                    queryset = queryset.filter(status=value)
            elif key == "meta_query":
                for predicate in value:
                    queryset = queryset.filter(_meta_q(predicate))
            elif key == "owner":
                queryset = queryset.filter(owner_id=value)
            elif key == "parent":
                queryset = queryset.filter(parent_id=value)
            elif key == "event_id":
                queryset = queryset.filter(pk=value)
            elif key == "id_in":
                ordered_ids = list(value)
                queryset = queryset.filter(pk__in=ordered_ids)
            elif key == "limit":
                limit = UNBOUNDED if value is None else int(value)
            else:
                raise UnsupportedCriteriaError(f"Unknown criteria key {key!r}")

        if ordered_ids:
            position = Case(
                *[When(pk=pk, then=Value(index)) for index, pk in enumerate(ordered_ids)],
                output_field=IntegerField(),
            )
            queryset = queryset.order_by(position)
        else:
            queryset = queryset.order_by("start", "pk")
        queryset = queryset.values(*RECORD_FIELDS)

        if limit != UNBOUNDED:
            queryset = queryset[: max(limit, 0)]
        return queryset

    def event_ids_by_booking_count(self, statuses: Sequence[str]) -> list[int]:
        rows = (
            Booking.objects.filter(status__in=list(statuses))
            .values("event_id")
            .annotate(cnt=Count("event_id"))
            .order_by("-cnt")
        )
        return [row["event_id"] for row in rows]
