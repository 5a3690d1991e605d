from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from timeledger.models import Overview, Task, TaskStatus, TaskSummary, TimeEntry


class TaskCreate(BaseModel):
    id: Optional[str] = None
    title: str = Field(..., min_length=1)
    estimated_hours: float = Field(default=0.0, ge=0)
    status: TaskStatus = TaskStatus.PENDING
    machine: Optional[str] = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: str) -> str:
        title = value.strip()
        if not title:
            raise ValueError("Title must not be blank")
        return title


class TaskOut(BaseModel):
    id: str
    title: str
    estimated_hours: float
    status: TaskStatus
    machine: Optional[str] = None
    actual_hours: float = 0.0

    @classmethod
    def from_task(cls, task: Task, actual_hours: float) -> TaskOut:
        return cls(
            id=task.id,
            title=task.title,
            estimated_hours=task.estimated_hours,
            status=task.status,
            machine=task.machine,
            actual_hours=actual_hours,
        )


class StatusUpdate(BaseModel):
    status: TaskStatus


class TimeEntryCreate(BaseModel):
    worker_id: Optional[str] = None
    worker_name: str = ""
    date: dt.date
    start: str = Field(..., description="Start time, HH:mm")
    end: str = Field(..., description="End time, HH:mm")
    deduct_break: bool = False
    recorded_by: str = Field(..., min_length=1)


class TimeEntryOut(BaseModel):
    id: str
    task_id: str
    worker_id: Optional[str]
    worker_name: str
    guest: bool
    date: dt.date
    start: str
    end: str
    break_deducted: bool
    hours_spent: float
    recorded_by: str
    recorded_at: dt.datetime

    @classmethod
    def from_entry(cls, entry: TimeEntry) -> TimeEntryOut:
        return cls(
            id=entry.id,
            task_id=entry.task_id,
            worker_id=entry.worker_id,
            worker_name=entry.worker_name,
            guest=entry.is_guest,
            date=entry.work_date,
            start=str(entry.start),
            end=str(entry.end),
            break_deducted=entry.break_deducted,
            hours_spent=entry.hours_spent,
            recorded_by=entry.recorded_by,
            recorded_at=entry.recorded_at,
        )


class TotalsOut(BaseModel):
    task_id: str
    estimated_hours: float
    actual_hours: float
    remaining_hours: float
    entry_count: int
    hours_by_worker: dict[str, float]

    @classmethod
    def from_summary(cls, summary: TaskSummary) -> TotalsOut:
        return cls(
            task_id=summary.task_id,
            estimated_hours=summary.estimated_hours,
            actual_hours=summary.actual_hours,
            remaining_hours=summary.remaining_hours,
            entry_count=summary.entry_count,
            hours_by_worker=summary.hours_by_worker,
        )


class OverviewOut(BaseModel):
    pending_count: int
    total_estimated_hours: float
    total_actual_hours: float

    @classmethod
    def from_overview(cls, result: Overview) -> OverviewOut:
        return cls(
            pending_count=result.pending_count,
            total_estimated_hours=result.total_estimated_hours,
            total_actual_hours=result.total_actual_hours,
        )
