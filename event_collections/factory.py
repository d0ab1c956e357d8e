"""Entry points for retrieving event collections.

Each strategy has a handle variant, returning the executed QueryResult (for
counting or inspecting the criteria), and a list variant returning
EventModel objects. Pass ``store`` to bypass the configured store; it must
implement both EventQueryExecutor and BookingAggregator.
"""

from event_collections import conf
from event_collections.builders import (
    OldCriteriaBuilder,
    OrganizerCriteriaBuilder,
    PopularCriteriaBuilder,
    RecurringChildrenCriteriaBuilder,
    UpcomingCriteriaBuilder,
)
from event_collections.collection import EventCollection
from event_collections.domain import EventModel, QueryResult


def _store(store):
    return store if store is not None else conf.get_store()


def get_upcoming(timestamp=None, args=None, *, store=None) -> QueryResult:
    """Events in the month of ``timestamp`` (default now), as a handle."""
    return EventCollection(UpcomingCriteriaBuilder(timestamp), args, _store(store)).raw_handle()


def get_upcoming_events(timestamp=None, args=None, *, store=None) -> list[EventModel]:
    """Events in the month of ``timestamp`` (default now)."""
    return EventCollection(UpcomingCriteriaBuilder(timestamp), args, _store(store)).materialize()


def get_old(timestamp=None, args=None, *, store=None) -> QueryResult:
    """Open events that ended before the month of ``timestamp``, as a handle."""
    return EventCollection(OldCriteriaBuilder(timestamp), args, _store(store)).raw_handle()


def get_old_events(timestamp=None, args=None, *, store=None) -> list[EventModel]:
    """Open events that ended before the month of ``timestamp``."""
    return EventCollection(OldCriteriaBuilder(timestamp), args, _store(store)).materialize()


def get_popular(args=None, *, store=None) -> QueryResult:
    """Events ordered by booking count, as a handle."""
    store = _store(store)
    return EventCollection(PopularCriteriaBuilder(store), args, store).raw_handle()


def get_popular_events(args=None, *, store=None) -> list[EventModel]:
    """Events ordered by booking count."""
    store = _store(store)
    return EventCollection(PopularCriteriaBuilder(store), args, store).materialize()


def get_user_organized(user_id, *, store=None) -> QueryResult:
    return EventCollection(OrganizerCriteriaBuilder(), user_id, _store(store)).raw_handle()


def get_user_organized_events(user_id, *, store=None) -> list[EventModel]:
    return EventCollection(OrganizerCriteriaBuilder(), user_id, _store(store)).materialize()


def get_all_recurring_children(event, *, store=None) -> QueryResult:
    return EventCollection(RecurringChildrenCriteriaBuilder(), event, _store(store)).raw_handle()


def get_all_recurring_children_events(event, *, store=None) -> list[EventModel]:
    return EventCollection(RecurringChildrenCriteriaBuilder(), event, _store(store)).materialize()
