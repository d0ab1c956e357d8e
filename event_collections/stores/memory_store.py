"""In-memory implementation of the event store ports.

Holds plain record mappings, for embedders that already have their events
loaded and for tests.
"""

import logging
import operator
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from event_collections import conf
from event_collections.domain import FilterCriteria, MetaPredicate, RawRecord
from event_collections.domain.criteria import DATETIME, META_KEYS, UNBOUNDED
from event_collections.domain.errors import UnsupportedCriteriaError
from event_collections.domain.value_objects import parse_stored_datetime
from event_collections.stores.interfaces import BookingAggregator, EventQueryExecutor

logger = logging.getLogger(__name__)

_OPERATORS = {
    "=": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "IN": lambda left, right: left in right,
    "NOT IN": lambda left, right: left not in right,
}


def _matches_meta(record: RawRecord, predicate: MetaPredicate) -> bool:
    if predicate.key not in META_KEYS:
        raise UnsupportedCriteriaError(f"Unknown meta key {predicate.key!r}")
    left = record.get(predicate.key)
    right = predicate.value
    if predicate.type == DATETIME:
        if left is None:
            return False
        left = parse_stored_datetime(left)
        right = parse_stored_datetime(right)
    return _OPERATORS[predicate.compare](left, right)


def _as_list(value: Any) -> list:
    return list(value) if isinstance(value, (list, tuple)) else [value]


class InMemoryEventStore(EventQueryExecutor, BookingAggregator):
    """Event store over lists of record mappings.

    Event records carry the fields EventModel.from_record reads; bookings
    carry ``event_id`` and ``status``.
    """

    def __init__(
        self,
        events: Iterable[RawRecord] = (),
        bookings: Iterable[Mapping[str, Any]] = (),
    ) -> None:
        self._events = list(events)
        self._bookings = list(bookings)

    def execute(self, criteria: FilterCriteria) -> list[RawRecord]:
        if not isinstance(criteria, Mapping):
            logger.debug("Not a criteria mapping, matching nothing: %r", criteria)
            return []

        records = list(self._events)
        ordered_ids: list[int] | None = None
        limit = UNBOUNDED
        for key, value in criteria.items():
            if key == "type":
                if value != conf.get_setting("EVENT_TYPE"):
                    records = []
            elif key == "status":
                allowed = _as_list(value)
                records = [r for r in records if r.get("status") in allowed]
            elif key == "meta_query":
                for predicate in value:
                    records = [r for r in records if _matches_meta(r, predicate)]
            elif key == "owner":
                records = [r for r in records if r.get("owner_id") == value]
            elif key == "parent":
                records = [r for r in records if r.get("parent_id") == value]
            elif key == "event_id":
                records = [r for r in records if r.get("id") == value]
            elif key == "id_in":
                ordered_ids = list(value)
                records = [r for r in records if r.get("id") in ordered_ids]
            elif key == "limit":
                limit = UNBOUNDED if value is None else int(value)
            else:
                raise UnsupportedCriteriaError(f"Unknown criteria key {key!r}")

        if ordered_ids:
            position = {pk: index for index, pk in reversed(list(enumerate(ordered_ids)))}
            records.sort(key=lambda r: position[r["id"]])
        else:
            records.sort(key=lambda r: (parse_stored_datetime(r["start"]), r["id"]))

        if limit != UNBOUNDED:
            records = records[: max(limit, 0)]
        logger.debug("Criteria %r matched %d events", criteria, len(records))
        return records

    def event_ids_by_booking_count(self, statuses: Sequence[str]) -> list[int]:
        counts = Counter(
            booking["event_id"] for booking in self._bookings if booking["status"] in statuses
        )
        # most_common keeps first-seen order among equal counts
        return [event_id for event_id, _ in counts.most_common()]
