from __future__ import annotations

from collections import deque
from typing import Deque, Iterator, List

from .models import QueryInput, QuerySnapshot


MAX_QUERY_HISTORY = 8


def build_query_snapshot(query: QueryInput) -> QuerySnapshot:
    return QuerySnapshot(
        game=query.game.label,
        opponent=query.opponent or "Unknown opponent",
        region=query.region or "Global",
    )


class QueryHistory:
    """Most-recent-first log of report queries; the oldest entry falls off past capacity."""

    def __init__(self, capacity: int = MAX_QUERY_HISTORY) -> None:
        self._entries: Deque[QuerySnapshot] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._entries.maxlen or 0

    def record(self, query: QueryInput) -> QuerySnapshot:
        snapshot = build_query_snapshot(query)
        self._entries.appendleft(snapshot)
        return snapshot

    def snapshots(self) -> List[QuerySnapshot]:
        return list(self._entries)

    def __iter__(self) -> Iterator[QuerySnapshot]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
