from .aggregator import overview, task_summary
from .calculator import DEFAULT_BREAK_HOURS, compute_hours
from .clock import TimeOfDay, format_time_of_day, parse_time_of_day
from .errors import InvalidFormat, LedgerError, MissingWorkerIdentity, UnknownTask
from .ledger import TimeLedger
from .models import GuestWorker, Overview, RegisteredWorker, Task, TaskStatus, TimeEntry

__all__ = [
    "DEFAULT_BREAK_HOURS",
    "GuestWorker",
    "InvalidFormat",
    "LedgerError",
    "MissingWorkerIdentity",
    "Overview",
    "RegisteredWorker",
    "Task",
    "TaskStatus",
    "TimeEntry",
    "TimeLedger",
    "TimeOfDay",
    "UnknownTask",
    "compute_hours",
    "format_time_of_day",
    "overview",
    "parse_time_of_day",
    "task_summary",
]
