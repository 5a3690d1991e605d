from __future__ import annotations
import csv
from datetime import date, datetime
from pathlib import Path
from typing import Iterable

from .clock import parse_time_of_day
from .models import TimeEntry, make_worker


CSV_HEADERS = [
    "id",
    "task_id",
    "worker_id",
    "worker_name",
    "date",
    "start",
    "end",
    "break_deducted",
    "hours_spent",
    "recorded_by",
    "recorded_at",
]


def export_time_entries(path: Path, entries: Iterable[TimeEntry]) -> int:
    count = 0
    with path.open("w", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=CSV_HEADERS)
        writer.writeheader()
        for entry in entries:
            writer.writerow(
                {
                    "id": entry.id,
                    "task_id": entry.task_id,
                    "worker_id": entry.worker_id or "",
                    "worker_name": entry.worker_name,
                    "date": entry.work_date.isoformat(),
                    "start": str(entry.start),
                    "end": str(entry.end),
                    "break_deducted": entry.break_deducted,
                    "hours_spent": entry.hours_spent,
                    "recorded_by": entry.recorded_by,
                    "recorded_at": entry.recorded_at.isoformat(),
                }
            )
            count += 1
    return count


def import_time_entries(path: Path) -> list[TimeEntry]:
    """Read entries back, keeping the hours that were stored with them."""
    entries: list[TimeEntry] = []
    with path.open(newline="") as handle:
        reader = csv.DictReader(handle)
        for row in reader:
            entries.append(
                TimeEntry(
                    id=row["id"],
                    task_id=row["task_id"],
                    worker=make_worker(row.get("worker_id") or None, row.get("worker_name")),
                    work_date=date.fromisoformat(row["date"]),
                    start=parse_time_of_day(row["start"]),
                    end=parse_time_of_day(row["end"]),
                    break_deducted=row.get("break_deducted", "False") in ("True", "true", "1"),
                    hours_spent=float(row["hours_spent"]),
                    recorded_by=row.get("recorded_by") or "",
                    recorded_at=datetime.fromisoformat(row["recorded_at"]),
                )
            )
    return entries
