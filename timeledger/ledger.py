from __future__ import annotations
from collections import defaultdict
from datetime import date, datetime, time, timezone
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple
from uuid import uuid4

from .calculator import DEFAULT_BREAK_HOURS, compute_hours, spans_midnight
from .clock import TimeOfDay, coerce_time_of_day
from .core.logging import get_logger
from .errors import DuplicateEntry
from .models import TimeEntry, Worker, make_worker

logger = get_logger(__name__)


def _new_entry_id() -> str:
    return str(uuid4())


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TimeLedger:
    """Append-only record of time entries, indexed by task.

    Entries are never updated or removed. Writers sharing a ledger must
    serialize calls to ``insert``/``record`` themselves.
    """

    def __init__(
        self,
        break_hours: float = DEFAULT_BREAK_HOURS,
        id_factory: Callable[[], str] = _new_entry_id,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        if break_hours < 0:
            raise ValueError(f"break_hours must not be negative, got {break_hours}")
        self.break_hours = break_hours
        self._id_factory = id_factory
        self._clock = clock
        self._entries: List[TimeEntry] = []
        self._ids: set[str] = set()
        self._by_task: Dict[str, List[TimeEntry]] = defaultdict(list)

    @classmethod
    def from_entries(cls, entries: Iterable[TimeEntry], **kwargs) -> TimeLedger:
        ledger = cls(**kwargs)
        ledger.restore(entries)
        return ledger

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TimeEntry]:
        return iter(tuple(self._entries))

    def task_ids(self) -> Tuple[str, ...]:
        return tuple(self._by_task)

    def insert(
        self,
        task_id: str,
        *,
        worker_id: Optional[str] = None,
        worker_name: str = "",
        work_date: date,
        start: TimeOfDay | time | str,
        end: TimeOfDay | time | str,
        deduct_break: bool = False,
        recorded_by: str,
    ) -> TimeEntry:
        worker = make_worker(worker_id, worker_name)
        return self.record(
            task_id,
            worker,
            work_date=work_date,
            start=start,
            end=end,
            deduct_break=deduct_break,
            recorded_by=recorded_by,
        )

    def record(
        self,
        task_id: str,
        worker: Worker,
        *,
        work_date: date,
        start: TimeOfDay | time | str,
        end: TimeOfDay | time | str,
        deduct_break: bool = False,
        recorded_by: str,
    ) -> TimeEntry:
        start_at = coerce_time_of_day(start)
        end_at = coerce_time_of_day(end)
        if spans_midnight(start_at, end_at):
            logger.warning(
                "overnight_shift_assumed",
                task_id=task_id,
                start=str(start_at),
                end=str(end_at),
            )

        entry_id = self._id_factory()
        if entry_id in self._ids:
            raise DuplicateEntry(entry_id)

        entry = TimeEntry(
            id=entry_id,
            task_id=task_id,
            worker=worker,
            work_date=work_date,
            start=start_at,
            end=end_at,
            break_deducted=deduct_break,
            hours_spent=compute_hours(start_at, end_at, deduct_break, self.break_hours),
            recorded_by=recorded_by,
            recorded_at=self._clock(),
        )
        logger.info(
            "time_entry_recorded",
            entry_id=entry.id,
            task_id=task_id,
            guest=entry.is_guest,
            hours=entry.hours_spent,
        )
        self._append(entry)
        return entry

    def restore(self, entries: Iterable[TimeEntry]) -> None:
        """Load previously persisted entries, keeping their stored hours.

        Either every entry is added or, on a duplicate id, none is.
        """
        batch = list(entries)
        seen: set[str] = set()
        for entry in batch:
            if entry.id in self._ids or entry.id in seen:
                raise DuplicateEntry(entry.id)
            seen.add(entry.id)
        for entry in batch:
            self._append(entry)

    def rollback_to(self, size: int) -> None:
        """Drop entries appended after the ledger held ``size`` entries.

        Only for a persistence layer undoing a write it failed to store.
        """
        while len(self._entries) > size:
            entry = self._entries.pop()
            self._ids.discard(entry.id)
            task_entries = self._by_task[entry.task_id]
            task_entries.pop()
            if not task_entries:
                del self._by_task[entry.task_id]

    def _append(self, entry: TimeEntry) -> None:
        self._entries.append(entry)
        self._ids.add(entry.id)
        self._by_task[entry.task_id].append(entry)

    def entries_for_task(self, task_id: str) -> Tuple[TimeEntry, ...]:
        return tuple(self._by_task.get(task_id, ()))

    def total_hours_for_task(self, task_id: str) -> float:
        return sum((e.hours_spent for e in self._by_task.get(task_id, ())), 0.0)

    def total_hours_for_worker(self, task_id: str, worker_id: str) -> float:
        # Guest entries have no id and never match.
        return sum(
            (e.hours_spent for e in self._by_task.get(task_id, ()) if e.worker_id is not None and e.worker_id == worker_id),
            0.0,
        )

    def hours_by_worker(self, task_id: str) -> Dict[str, float]:
        totals: Dict[str, float] = {}
        for entry in self._by_task.get(task_id, ()):
            if entry.worker_id is None:
                continue
            totals[entry.worker_id] = totals.get(entry.worker_id, 0.0) + entry.hours_spent
        return totals
