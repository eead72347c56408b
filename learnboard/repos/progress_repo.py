from __future__ import annotations

import datetime
from typing import Protocol

from learnboard.models.dashboard import ProgressTotals
from learnboard.models.progress import ProgressRecord
from learnboard.services.aggregation import as_utc, order_recent, summarize


class ProgressRepo(Protocol):
    async def list_for_student(self, student_id: int) -> list[ProgressRecord]: ...
    async def list_recent(
        self, student_id: int, limit: int
    ) -> list[ProgressRecord]: ...
    async def list_accessed_since(
        self, student_id: int, since: datetime.datetime
    ) -> list[ProgressRecord]: ...
    async def aggregate_totals(self, student_id: int) -> ProgressTotals: ...
    async def upsert(self, record: ProgressRecord) -> None: ...


class InMemoryProgressRepo:
    def __init__(self) -> None:
        self._store: dict[tuple[int, int], ProgressRecord] = {}

    async def list_for_student(self, student_id: int) -> list[ProgressRecord]:
        return [
            r
            for (sid, _), r in sorted(self._store.items())
            if sid == student_id
        ]

    async def list_recent(self, student_id: int, limit: int) -> list[ProgressRecord]:
        return order_recent(await self.list_for_student(student_id), limit)

    async def list_accessed_since(
        self, student_id: int, since: datetime.datetime
    ) -> list[ProgressRecord]:
        since = as_utc(since)
        return [
            r
            for r in await self.list_for_student(student_id)
            if r.last_accessed is not None and as_utc(r.last_accessed) >= since
        ]

    async def aggregate_totals(self, student_id: int) -> ProgressTotals:
        return summarize(await self.list_for_student(student_id))

    async def upsert(self, record: ProgressRecord) -> None:
        self._store[(record.student_id, record.course_id)] = record
