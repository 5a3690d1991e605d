from __future__ import annotations
import json
import threading
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from .aggregator import overview
from .calculator import DEFAULT_BREAK_HOURS
from .clock import parse_time_of_day
from .core.logging import get_logger
from .errors import DuplicateTask, UnknownTask
from .ledger import TimeLedger
from .models import GuestWorker, Overview, RegisteredWorker, Task, TaskStatus, TimeEntry, Worker, make_worker

logger = get_logger(__name__)


class DataStore:
    """JSON-file persistence for tasks, workers and the time ledger."""

    def __init__(self, path: Path, break_hours: float = DEFAULT_BREAK_HOURS) -> None:
        self.path = path
        self.break_hours = break_hours
        self.tasks: Dict[str, Task] = {}
        self.workers: Dict[str, str] = {}
        self.ledger = TimeLedger(break_hours=break_hours)
        self._lock = threading.RLock()
        if path.exists():
            self.load()

    def load(self) -> None:
        content = json.loads(self.path.read_text())
        self.tasks = {t["id"]: self._deserialize_task(t) for t in content.get("tasks", [])}
        self.workers = dict(content.get("workers", {}))
        entries = [
            self._deserialize_time_entry(task_id, raw)
            for task_id, raws in content.get("time_entries", {}).items()
            for raw in raws
        ]
        self.ledger = TimeLedger.from_entries(entries, break_hours=self.break_hours)
        logger.info("store_loaded", path=str(self.path), tasks=len(self.tasks), entries=len(self.ledger))

    def save(self) -> None:
        with self._lock:
            entries: Dict[str, List[dict]] = {}
            for task_id in self.ledger.task_ids():
                entries[task_id] = [self._serialize_time_entry(e) for e in self.ledger.entries_for_task(task_id)]
            payload = {
                "tasks": [self._serialize_task(t) for t in self.tasks.values()],
                "workers": dict(self.workers),
                "time_entries": entries,
            }
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(payload, indent=2))
        logger.debug("store_saved", path=str(self.path))

    def add_task(self, task: Task) -> Task:
        with self._lock:
            if task.id in self.tasks:
                raise DuplicateTask(task.id)
            if task.created_at is None:
                task.created_at = datetime.now(timezone.utc)
            self.tasks[task.id] = task
        logger.info("task_added", task_id=task.id, estimated_hours=task.estimated_hours)
        return task

    def get_task(self, task_id: str) -> Task:
        try:
            return self.tasks[task_id]
        except KeyError:
            raise UnknownTask(task_id) from None

    def set_task_status(self, task_id: str, status: TaskStatus | str) -> Task:
        with self._lock:
            task = self.get_task(task_id)
            previous = task.status
            task.status = TaskStatus(status)
        logger.info("task_status_changed", task_id=task_id, previous=previous.value, status=task.status.value)
        return task

    def list_tasks(self, status: Optional[TaskStatus | str] = None) -> List[Task]:
        """Return tasks in creation order, optionally filtered by status."""

        with self._lock:
            tasks = list(self.tasks.values())
        if status is not None:
            wanted = TaskStatus(status)
            tasks = [t for t in tasks if t.status == wanted]
        return sorted(tasks, key=lambda t: t.created_at or datetime.min.replace(tzinfo=timezone.utc))

    def add_worker(self, worker_id: str, name: str) -> None:
        with self._lock:
            self.workers[worker_id] = name.strip()

    def resolve_worker(self, worker_id: Optional[str], name: Optional[str] = None) -> Worker:
        """Build a worker from an id and/or a name.

        Any non-blank id gives a registered worker, named from the directory
        when no name is passed. Only a missing id makes a guest.
        """
        if worker_id and worker_id.strip():
            return RegisteredWorker(worker_id=worker_id, name=name or self.workers.get(worker_id, ""))
        return GuestWorker(name=name or "")

    def record_time(
        self,
        task_id: str,
        worker: Worker,
        *,
        work_date: date,
        start: str,
        end: str,
        deduct_break: bool = False,
        recorded_by: str,
    ) -> TimeEntry:
        with self._lock:
            self.get_task(task_id)
            size = len(self.ledger)
            entry = self.ledger.record(
                task_id,
                worker,
                work_date=work_date,
                start=start,
                end=end,
                deduct_break=deduct_break,
                recorded_by=recorded_by,
            )
            self._save_or_rollback(size)
        return entry

    def import_entries(self, entries: List[TimeEntry]) -> int:
        with self._lock:
            for entry in entries:
                self.get_task(entry.task_id)
            size = len(self.ledger)
            self.ledger.restore(entries)
            self._save_or_rollback(size)
        return len(entries)

    def _save_or_rollback(self, size: int) -> None:
        try:
            self.save()
        except Exception:
            self.ledger.rollback_to(size)
            logger.error("store_save_failed", path=str(self.path), discarded=True)
            raise

    def overview(self) -> Overview:
        with self._lock:
            return overview(list(self.tasks.values()), self.ledger)

    @staticmethod
    def _serialize_task(task: Task) -> dict:
        return {
            "id": task.id,
            "title": task.title,
            "estimated_hours": task.estimated_hours,
            "status": task.status.value,
            "machine": task.machine,
            "created_at": task.created_at.isoformat() if task.created_at else None,
        }

    @staticmethod
    def _deserialize_task(data: dict) -> Task:
        created_at = data.get("created_at")
        return Task(
            id=data["id"],
            title=data.get("title", ""),
            estimated_hours=float(data.get("estimated_hours") or 0.0),
            status=data.get("status", TaskStatus.PENDING),
            machine=data.get("machine"),
            created_at=datetime.fromisoformat(created_at) if created_at else None,
        )

    @staticmethod
    def _serialize_time_entry(entry: TimeEntry) -> dict:
        return {
            "id": entry.id,
            "worker_id": entry.worker_id,
            "worker_name": entry.worker_name,
            "date": entry.work_date.isoformat(),
            "start": str(entry.start),
            "end": str(entry.end),
            "break_deducted": entry.break_deducted,
            "hours_spent": entry.hours_spent,
            "recorded_by": entry.recorded_by,
            "recorded_at": entry.recorded_at.isoformat(),
        }

    @staticmethod
    def _deserialize_time_entry(task_id: str, data: dict) -> TimeEntry:
        return TimeEntry(
            id=data["id"],
            task_id=task_id,
            worker=make_worker(data.get("worker_id"), data.get("worker_name")),
            work_date=date.fromisoformat(data["date"]),
            start=parse_time_of_day(data["start"]),
            end=parse_time_of_day(data["end"]),
            break_deducted=bool(data.get("break_deducted", False)),
            hours_spent=float(data["hours_spent"]),
            recorded_by=data.get("recorded_by", ""),
            recorded_at=datetime.fromisoformat(data["recorded_at"]),
        )
