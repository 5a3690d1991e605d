from __future__ import annotations
from typing import Iterable

from .models import Overview, Task, TaskSummary, TimeEntry


def format_task_timesheet(task: Task, entries: Iterable[TimeEntry]) -> str:
    rows = [
        f"Task {task.id}: {task.title} [{task.status.value}]",
        "Date        Start  End    Break  Hours  Worker",
    ]
    total = 0.0
    for entry in entries:
        total += entry.hours_spent
        worker = entry.worker_name if not entry.is_guest else f"{entry.worker_name} (guest)"
        rows.append(
            f"{entry.work_date.isoformat()}  {entry.start}  {entry.end}  {'yes' if entry.break_deducted else 'no':<5}  {entry.hours_spent:>5.2f}  {worker}"
        )
    rows.append(f"Total hours: {total:.2f} of {task.estimated_hours:.2f} estimated")
    return "\n".join(rows)


def format_task_summary(summary: TaskSummary, names: dict[str, str] | None = None) -> str:
    names = names or {}
    rows = [
        f"Task {summary.task_id}",
        f"Entries: {summary.entry_count}",
        f"Actual hours: {summary.actual_hours:.2f}",
        f"Estimated hours: {summary.estimated_hours:.2f}",
        f"Remaining hours: {summary.remaining_hours:.2f}",
    ]
    for worker_id, hours in summary.hours_by_worker.items():
        rows.append(f"  {names.get(worker_id, worker_id)}: {hours:.2f}")
    return "\n".join(rows)


def format_overview(result: Overview) -> str:
    return "\n".join(
        [
            "Overview",
            f"Pending tasks: {result.pending_count}",
            f"Estimated hours (pending): {result.total_estimated_hours:.2f}",
            f"Actual hours (all tasks): {result.total_actual_hours:.2f}",
        ]
    )
