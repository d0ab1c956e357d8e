from event_collections.domain.criteria import FilterCriteria, QueryResult, RawRecord
from event_collections.domain.models import BookingStatus, EventModel, EventStatus, PostStatus
from event_collections.domain.value_objects import MetaPredicate, MonthWindow, coerce_owner_id

__all__ = [
    "EventModel",
    "EventStatus",
    "PostStatus",
    "BookingStatus",
    "FilterCriteria",
    "QueryResult",
    "RawRecord",
    "MetaPredicate",
    "MonthWindow",
    "coerce_owner_id",
]
