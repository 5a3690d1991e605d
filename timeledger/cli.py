from __future__ import annotations
import argparse
import sys
from datetime import date
from pathlib import Path
from uuid import uuid4

import uvicorn

from .aggregator import task_summary
from .core.config import get_settings
from .core.logging import configure_logging
from .core.monitoring import configure_error_monitoring
from .csv_io import export_time_entries, import_time_entries
from .errors import LedgerError
from .models import Task, TaskStatus
from .storage import DataStore
from .views import format_overview, format_task_summary, format_task_timesheet


def store_from_args(args: argparse.Namespace) -> DataStore:
    settings = get_settings()
    path = Path(args.data) if args.data else settings.data_path
    return DataStore(path, break_hours=settings.break_hours)


def parse_date(value: str) -> date:
    return date.fromisoformat(value)


def cmd_add_task(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    task = store.add_task(
        Task(
            id=args.id or str(uuid4()),
            title=args.title,
            estimated_hours=args.estimate,
            status=TaskStatus(args.status),
            machine=args.machine,
        )
    )
    store.save()
    print(f"Added task {task.id} ({task.title}) estimated {task.estimated_hours:.2f}h")


def cmd_set_status(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    task = store.set_task_status(args.id, args.status)
    store.save()
    print(f"Task {task.id} is now {task.status.value}")


def cmd_add_worker(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    store.add_worker(args.id, args.name)
    store.save()
    print(f"Added worker {args.id} ({args.name})")


def cmd_log_time(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    worker = store.resolve_worker(args.worker_id, args.worker_name)
    entry = store.record_time(
        args.task,
        worker,
        work_date=args.date,
        start=args.start,
        end=args.end,
        deduct_break=args.deduct_break,
        recorded_by=args.recorded_by,
    )
    print(f"Logged {entry.hours_spent:.2f}h for {entry.worker_name} on task {entry.task_id} ({entry.id})")


def cmd_entries(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    task = store.get_task(args.task)
    print(format_task_timesheet(task, store.ledger.entries_for_task(task.id)))


def cmd_totals(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    task = store.get_task(args.task)
    if args.worker:
        hours = store.ledger.total_hours_for_worker(task.id, args.worker)
        print(f"{store.workers.get(args.worker, args.worker)}: {hours:.2f}h on task {task.id}")
        return
    print(format_task_summary(task_summary(task, store.ledger), store.workers))


def cmd_overview(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    print(format_overview(store.overview()))


def cmd_export(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    path = Path(args.path)
    entries = store.ledger.entries_for_task(args.task) if args.task else list(store.ledger)
    count = export_time_entries(path, entries)
    print(f"Exported {count} entries to {path}")


def cmd_import(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    path = Path(args.path)
    count = store.import_entries(import_time_entries(path))
    print(f"Imported {count} entries from {path}")


def cmd_serve(args: argparse.Namespace) -> None:
    from .api.main import create_app

    store = store_from_args(args)
    uvicorn.run(create_app(store=store), host=args.host, port=args.port)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maintenance crew time ledger")
    parser.add_argument("--data", help="Path to the JSON data store")
    sub = parser.add_subparsers(dest="command", required=True)

    statuses = [s.value for s in TaskStatus]

    add_task = sub.add_parser("add-task", help="Add a maintenance task")
    add_task.add_argument("title")
    add_task.add_argument("--id")
    add_task.add_argument("--estimate", type=float, default=0.0, help="Estimated hours")
    add_task.add_argument("--machine")
    add_task.add_argument("--status", choices=statuses, default=TaskStatus.PENDING.value)
    add_task.set_defaults(func=cmd_add_task)

    set_status = sub.add_parser("set-status", help="Change a task's status")
    set_status.add_argument("id")
    set_status.add_argument("status", choices=statuses)
    set_status.set_defaults(func=cmd_set_status)

    add_worker = sub.add_parser("add-worker", help="Register a worker name")
    add_worker.add_argument("id")
    add_worker.add_argument("name")
    add_worker.set_defaults(func=cmd_add_worker)

    log_time = sub.add_parser("log-time", help="Log a worked interval against a task")
    log_time.add_argument("task")
    log_time.add_argument("date", type=parse_date)
    log_time.add_argument("start", help="Start time, HH:mm")
    log_time.add_argument("end", help="End time, HH:mm")
    log_time.add_argument("--worker-id")
    log_time.add_argument("--worker-name", help="Required for guest workers")
    log_time.add_argument("--break", dest="deduct_break", action="store_true", help="Deduct the lunch break")
    log_time.add_argument("--recorded-by", default="cli")
    log_time.set_defaults(func=cmd_log_time)

    entries = sub.add_parser("entries", help="List time entries for a task")
    entries.add_argument("task")
    entries.set_defaults(func=cmd_entries)

    totals = sub.add_parser("totals", help="Show hour totals for a task")
    totals.add_argument("task")
    totals.add_argument("--worker", help="Only count this registered worker")
    totals.set_defaults(func=cmd_totals)

    overview = sub.add_parser("overview", help="Pending work versus logged hours")
    overview.set_defaults(func=cmd_overview)

    export = sub.add_parser("export", help="Export entries to CSV")
    export.add_argument("path")
    export.add_argument("--task")
    export.set_defaults(func=cmd_export)

    imp = sub.add_parser("import", help="Import entries from CSV")
    imp.add_argument("path")
    imp.set_defaults(func=cmd_import)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    configure_error_monitoring(settings)

    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except LedgerError as exc:
        parser.exit(2, f"error: {exc}\n")


if __name__ == "__main__":
    main(sys.argv[1:])
