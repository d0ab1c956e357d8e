"""Filter criteria handed to a query executor, and the executed result handle."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any, TypedDict

from event_collections.domain.value_objects import MetaPredicate

UNBOUNDED = -1
DATETIME = "DATETIME"

# Stored fields a MetaPredicate may target.
META_START = "start"
META_END = "end"
META_STATUS = "event_status"
META_KEYS = frozenset({META_START, META_END, META_STATUS})


class FilterCriteria(TypedDict, total=False):
    """Ordered filter keys understood by every EventQueryExecutor."""

    type: str
    status: str | list[str]
    meta_query: list[MetaPredicate]
    owner: int
    parent: int
    id_in: list[int]
    event_id: int
    limit: int


RawRecord = Mapping[str, Any]


@dataclass(frozen=True)
class QueryResult:
    """Executed criteria together with the records it produced."""

    criteria: FilterCriteria
    records: tuple[RawRecord, ...] = ()

    @property
    def count(self) -> int:
        return len(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[RawRecord]:
        return iter(self.records)
