from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional, Union

from .clock import TimeOfDay
from .errors import MissingWorkerIdentity


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass(frozen=True)
class RegisteredWorker:
    worker_id: str
    name: str = ""

    def __post_init__(self) -> None:
        if not self.worker_id or not self.worker_id.strip():
            raise MissingWorkerIdentity("Registered workers need a worker id")
        if not self.name.strip():
            # Unresolved names display as the id.
            object.__setattr__(self, "name", self.worker_id)


@dataclass(frozen=True)
class GuestWorker:
    name: str

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise MissingWorkerIdentity()
        object.__setattr__(self, "name", self.name.strip())


Worker = Union[RegisteredWorker, GuestWorker]


def make_worker(worker_id: Optional[str], worker_name: Optional[str]) -> Worker:
    if worker_id:
        return RegisteredWorker(worker_id=worker_id, name=worker_name or "")
    return GuestWorker(name=worker_name or "")


@dataclass(frozen=True)
class TimeEntry:
    id: str
    task_id: str
    worker: Worker
    work_date: date
    start: TimeOfDay
    end: TimeOfDay
    break_deducted: bool
    hours_spent: float
    recorded_by: str
    recorded_at: datetime

    @property
    def worker_id(self) -> Optional[str]:
        if isinstance(self.worker, RegisteredWorker):
            return self.worker.worker_id
        return None

    @property
    def worker_name(self) -> str:
        return self.worker.name

    @property
    def is_guest(self) -> bool:
        return isinstance(self.worker, GuestWorker)


@dataclass
class Task:
    id: str
    title: str
    estimated_hours: float = 0.0
    status: TaskStatus = TaskStatus.PENDING
    machine: Optional[str] = None
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        self.status = TaskStatus(self.status)

    @property
    def is_pending(self) -> bool:
        return self.status == TaskStatus.PENDING


@dataclass(frozen=True)
class Overview:
    pending_count: int
    total_estimated_hours: float
    total_actual_hours: float


@dataclass(frozen=True)
class TaskSummary:
    task_id: str
    estimated_hours: float
    actual_hours: float
    entry_count: int
    hours_by_worker: dict = field(default_factory=dict)

    @property
    def remaining_hours(self) -> float:
        return max(self.estimated_hours - self.actual_hours, 0.0)
