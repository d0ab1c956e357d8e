"""Pytest configuration and shared fixtures."""

from datetime import datetime

import pytest
from django.conf import settings


def pytest_configure():
    settings.configure(
        DATABASES={
            "default": {
                "ENGINE": "django.db.backends.sqlite3",
                "NAME": ":memory:",
            }
        },
        INSTALLED_APPS=["event_collections"],
        DEFAULT_AUTO_FIELD="django.db.models.AutoField",
        USE_TZ=True,
        TIME_ZONE="UTC",
        EVENT_COLLECTIONS={
            "STORE": "event_collections.stores.django_store.DjangoEventStore",
        },
    )


def _make_record(event_id, start, end, **fields):
    """Raw event record as a store returns it."""
    record = {
        "id": event_id,
        "title": f"Event {event_id}",
        "owner_id": 1,
        "parent_id": None,
        "status": "publish",
        "event_status": "open",
        "start": start,
        "end": end,
    }
    record.update(fields)
    return record


@pytest.fixture
def make_record():
    return _make_record


@pytest.fixture
def december_records():
    return [
        _make_record(1, "2023-12-05 10:00", "2023-12-05 12:00"),
        _make_record(2, "2023-12-20 18:00", "2023-12-20 22:00", event_status="expired"),
        _make_record(3, "2023-12-31 20:00", "2024-01-01 02:00"),
        _make_record(4, "2023-11-28 09:00", "2023-11-28 10:00"),
        _make_record(5, "2023-12-10 09:00", "2023-12-10 10:00", event_status="closed"),
        _make_record(6, "2023-12-12 09:00", "2023-12-12 10:00", status="draft"),
    ]


@pytest.fixture
def december():
    return datetime(2023, 12, 15, 14, 30)
