from __future__ import annotations


class LedgerError(Exception):
    """Base class for time ledger failures."""


class InvalidFormat(LedgerError, ValueError):
    def __init__(self, text: object) -> None:
        self.text = text
        super().__init__(f"Invalid time of day {text!r}, expected HH:mm")


class MissingWorkerIdentity(LedgerError, ValueError):
    def __init__(self, message: str = "Guest workers need a non-empty name") -> None:
        super().__init__(message)


class UnknownTask(LedgerError, KeyError):
    def __init__(self, task_id: str) -> None:
        self.task_id = task_id
        super().__init__(task_id)

    def __str__(self) -> str:
        return f"Task {self.task_id} not found"


class DuplicateEntry(LedgerError, ValueError):
    def __init__(self, entry_id: str) -> None:
        self.entry_id = entry_id
        super().__init__(f"Duplicate time entry id {entry_id}")


class DuplicateTask(LedgerError, ValueError):
    def __init__(self, task_id: str) -> None:
        self.task_id = task_id
        super().__init__(f"Task {task_id} already exists")
