"""Settings lookup for event collections.

Projects configure the library through one dict in their Django settings::

    EVENT_COLLECTIONS = {
        "STORE": "event_collections.stores.django_store.DjangoEventStore",
        "EVENT_TYPE": "event",
    }

Settings are read on every call, so overrides in tests apply immediately.
"""

from typing import Any

from django.conf import settings
from django.utils.module_loading import import_string

DEFAULTS: dict[str, Any] = {
    "STORE": "event_collections.stores.django_store.DjangoEventStore",
    "EVENT_TYPE": "event",
}


def get_setting(name: str) -> Any:
    """Return one EVENT_COLLECTIONS value, falling back to its default."""
    user_settings = getattr(settings, "EVENT_COLLECTIONS", None) or {}
    if name in user_settings:
        return user_settings[name]
    return DEFAULTS[name]


def get_store():
    """Instantiate the configured store.

    The store must implement both EventQueryExecutor and BookingAggregator.
    """
    store = get_setting("STORE")
    if isinstance(store, str):
        store = import_string(store)
    return store()
