from __future__ import annotations
from typing import Iterable

from .ledger import TimeLedger
from .models import Overview, Task, TaskSummary


def overview(tasks: Iterable[Task], ledger: TimeLedger) -> Overview:
    """Summarise outstanding and logged work.

    Estimates only count pending tasks (work still to do) while actual hours
    count every task passed in, whatever its status.
    """
    pending_count = 0
    total_estimated = 0.0
    total_actual = 0.0
    for task in tasks:
        if task.is_pending:
            pending_count += 1
            total_estimated += task.estimated_hours
        total_actual += ledger.total_hours_for_task(task.id)
    return Overview(
        pending_count=pending_count,
        total_estimated_hours=total_estimated,
        total_actual_hours=total_actual,
    )


def task_summary(task: Task, ledger: TimeLedger) -> TaskSummary:
    return TaskSummary(
        task_id=task.id,
        estimated_hours=task.estimated_hours,
        actual_hours=ledger.total_hours_for_task(task.id),
        entry_count=len(ledger.entries_for_task(task.id)),
        hours_by_worker=ledger.hours_by_worker(task.id),
    )
