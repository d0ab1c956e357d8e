"""Store interfaces (repository pattern).

Stores must be swappable and return raw records; mapping to domain models
happens in the collection.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from event_collections.domain import FilterCriteria, RawRecord


class EventQueryExecutor(ABC):
    """Interface for running a filter criteria against stored events."""

    @abstractmethod
    def execute(self, criteria: FilterCriteria) -> list[RawRecord]:
        """Return the matching records in result order.

        An ``id_in`` of ``[]`` matches nothing, and a non-empty ``id_in``
        orders the result by position in that list. ``limit`` of -1 is
        unbounded. Anything that is not a mapping matches nothing.

        Raises:
            UnsupportedCriteriaError: If the criteria cannot be translated.
        """
        ...


class BookingAggregator(ABC):
    """Interface for booking statistics used to rank events."""

    @abstractmethod
    def event_ids_by_booking_count(self, statuses: Sequence[str]) -> list[int]:
        """Return event ids ordered by descending count of bookings in ``statuses``.

        Events without a matching booking are absent. The order among equal
        counts is whatever the store yields naturally.
        """
        ...
