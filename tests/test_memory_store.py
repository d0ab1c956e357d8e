"""Unit tests for the in-memory event store.

Run with: pytest tests/test_memory_store.py -v
"""

from datetime import datetime

import pytest

from event_collections.builders import OldCriteriaBuilder, UpcomingCriteriaBuilder
from event_collections.domain import MetaPredicate
from event_collections.domain.errors import UnsupportedCriteriaError
from event_collections.stores.memory_store import InMemoryEventStore


@pytest.fixture
def store(december_records):
    return InMemoryEventStore(events=december_records)


def _ids(records):
    return [record["id"] for record in records]


class TestExecute:
    """Tests for criteria execution."""

    def test_empty_criteria_returns_everything_by_start(self, store):
        assert _ids(store.execute({})) == [4, 1, 5, 6, 2, 3]

    def test_status_membership(self, store):
        assert 6 not in _ids(store.execute({"status": ["publish", "recurrent"]}))
        assert _ids(store.execute({"status": "draft"})) == [6]

    def test_other_type_matches_nothing(self, store):
        assert store.execute({"type": "page"}) == []

    def test_datetime_comparison(self, store):
        criteria = {
            "meta_query": [
                MetaPredicate(key="end", value="2023-12-01 00:00", compare="<", type="DATETIME"),
            ]
        }
        assert _ids(store.execute(criteria)) == [4]

    def test_status_not_in(self, store):
        criteria = {
            "meta_query": [
                MetaPredicate(key="event_status", value=["closed", "expired"], compare="NOT IN"),
            ]
        }
        assert _ids(store.execute(criteria)) == [4, 1, 6, 3]

    def test_empty_id_list_matches_nothing(self, store):
        assert store.execute({"id_in": []}) == []

    def test_id_list_order_is_kept(self, store):
        assert _ids(store.execute({"id_in": [3, 1, 99, 4]})) == [3, 1, 4]

    def test_owner_parent_and_event_id(self, make_record):
        store = InMemoryEventStore(
            events=[
                make_record(1, "2023-01-01 09:00", "2023-01-01 10:00", owner_id=5),
                make_record(2, "2023-01-02 09:00", "2023-01-02 10:00", parent_id=1),
            ]
        )
        assert _ids(store.execute({"owner": 5})) == [1]
        assert _ids(store.execute({"parent": 1})) == [2]
        assert _ids(store.execute({"event_id": 2})) == [2]

    def test_limit(self, store):
        assert _ids(store.execute({"limit": 2})) == [4, 1]
        assert len(store.execute({"limit": -1})) == 6
        assert store.execute({"limit": 0}) == []

    def test_unknown_key_raises(self, store):
        """execute raises UnsupportedCriteriaError for keys it cannot translate."""
        with pytest.raises(UnsupportedCriteriaError):
            store.execute({"orderby": "title"})

    def test_unknown_meta_key_raises(self, store):
        with pytest.raises(UnsupportedCriteriaError):
            store.execute({"meta_query": [MetaPredicate(key="venue", value="Hall")]})

    def test_non_mapping_matches_nothing(self, store):
        assert store.execute(42) == []

    def test_owner_zero_skips_unowned_events(self, make_record):
        """Events without an owner are not owned by user 0."""
        store = InMemoryEventStore(
            events=[make_record(1, "2023-01-01 09:00", "2023-01-01 10:00", owner_id=None)]
        )
        assert store.execute({"owner": 0}) == []

    def test_upcoming_end_on_window_end_is_excluded(self, make_record):
        """An event ending exactly at the next month's first instant is outside the window."""
        store = InMemoryEventStore(
            events=[
                make_record(1, "2023-12-31 22:00", "2024-01-01 00:00"),
                make_record(2, "2023-12-01 00:00", "2023-12-31 23:59"),
            ]
        )
        criteria = UpcomingCriteriaBuilder(datetime(2023, 12, 15)).build_criteria()
        assert _ids(store.execute(criteria)) == [2]

    def test_old_end_on_boundary_is_excluded(self, make_record):
        store = InMemoryEventStore(
            events=[
                make_record(1, "2023-05-31 22:00", "2023-06-01 00:00"),
                make_record(2, "2023-05-31 22:00", "2023-05-31 23:59"),
            ]
        )
        criteria = OldCriteriaBuilder(datetime(2023, 6, 10)).build_criteria()
        assert _ids(store.execute(criteria)) == [2]


class TestBookingRanking:
    """Tests for booking aggregation."""

    def test_counts_only_requested_statuses(self):
        store = InMemoryEventStore(
            bookings=[
                {"event_id": 2, "status": "no"},
                {"event_id": 2, "status": "no"},
                {"event_id": 1, "status": "yes"},
            ]
        )
        assert store.event_ids_by_booking_count(["yes", "maybe"]) == [1]

    def test_descending_count_ties_in_first_seen_order(self):
        store = InMemoryEventStore(
            bookings=[
                {"event_id": 7, "status": "maybe"},
                {"event_id": 8, "status": "yes"},
                {"event_id": 9, "status": "yes"},
                {"event_id": 9, "status": "maybe"},
            ]
        )
        assert store.event_ids_by_booking_count(["yes", "maybe"]) == [9, 7, 8]
