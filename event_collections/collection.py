"""Event collection: runs one criteria and hands back records or models."""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from event_collections.builders import CriteriaBuilder
from event_collections.domain import EventModel, QueryResult, RawRecord
from event_collections.stores.interfaces import EventQueryExecutor

logger = logging.getLogger(__name__)


class EventCollection:
    """Builds and executes a criteria once, at construction.

    Executor and record factory failures propagate to the caller.
    """

    def __init__(
        self,
        builder: CriteriaBuilder,
        context: Any,
        executor: EventQueryExecutor,
        record_factory: Callable[[RawRecord], EventModel] = EventModel.from_record,
    ) -> None:
        self._builder = builder
        self._record_factory = record_factory

        criteria = builder.build_criteria(context)
        logger.debug("%s built criteria %r", type(builder).__name__, criteria)
        records = executor.execute(criteria)
        self._result = QueryResult(criteria=criteria, records=tuple(records))

    @property
    def timestamp(self) -> datetime | None:
        """Reference timestamp of a window strategy, None otherwise."""
        return self._builder.timestamp

    def raw_handle(self) -> QueryResult:
        return self._result

    def materialize(self) -> list[EventModel]:
        """Return one EventModel per record, in result order."""
        return [self._record_factory(record) for record in self._result.records]
